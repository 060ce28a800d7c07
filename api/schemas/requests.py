from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionRequest(BaseModel):
	from_currency: str = Field(..., min_length=3, max_length=3)
	to_currency: str = Field(..., min_length=3, max_length=3)
	amount: Decimal = Field(..., gt=0)

	model_config = ConfigDict(
		json_schema_extra={'example': {'from_currency': 'USD', 'to_currency': 'EUR', 'amount': 100.00}}
	)

	@field_validator('from_currency', 'to_currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()

	@field_validator('amount')
	@classmethod
	def amount_must_be_finite(cls, v: Decimal):
		if not v.is_finite():
			raise ValueError('amount must be a finite number')
		return v
