from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.currency import ConversionQuote, RateTable


class RateTableResponse(BaseModel):
	base: str = Field(..., description='Currency all rates are expressed against')
	rates: dict[str, Decimal] = Field(..., description='Units of each currency per 1 unit of base')
	as_of: datetime = Field(..., description='When the table was produced')
	source: str = Field(..., description='Provenance: live, cache or fallback')
	reported_date: str | None = Field(None, description='As-of date reported by the rate provider')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'base': 'EUR',
				'rates': {'USD': '1.1764705882352941', 'GBP': '0.8588235294117647'},
				'as_of': '2025-09-27T10:30:00Z',
				'source': 'fallback',
				'reported_date': None,
			}
		}
	)

	@classmethod
	def from_table(cls, table: RateTable) -> 'RateTableResponse':
		return cls(
			base=table.base,
			rates=dict(table.rates),
			as_of=table.as_of,
			source=table.source.value,
			reported_date=table.reported_date,
		)


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	exchange_rate: Decimal = Field(..., description='1 unit of source in target currency')
	inverse_rate: Decimal = Field(..., description='1 unit of target in source currency')
	timestamp: datetime = Field(..., description='When the rate table was produced')
	source: str = Field(..., description='Provenance: live, cache or fallback')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': '100',
				'converted_amount': '85.00',
				'exchange_rate': '0.85',
				'inverse_rate': '1.176470588235294117647058824',
				'timestamp': '2025-09-27T10:30:00Z',
				'source': 'live',
			}
		}
	)

	@classmethod
	def from_quote(cls, quote: ConversionQuote) -> 'ConversionResponse':
		return cls(
			from_currency=quote.from_currency,
			to_currency=quote.to_currency,
			original_amount=quote.amount,
			converted_amount=quote.converted_amount,
			exchange_rate=quote.rate,
			inverse_rate=quote.inverse_rate,
			timestamp=quote.as_of,
			source=quote.source.value,
		)


class CurrencyInfo(BaseModel):
	code: str
	name: str | None = None
	symbol: str | None = None


class SupportedCurrenciesResponse(BaseModel):
	currencies: list[CurrencyInfo] = Field(description='Supported currencies')

	model_config = ConfigDict(
		json_schema_extra={'examples': [{'currencies': [{'code': 'USD', 'name': 'US Dollar', 'symbol': '$'}]}]}
	)
