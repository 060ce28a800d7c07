from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import (
	get_conversion_service,
	get_currency_service,
	get_rate_resolver,
)
from api.schemas import (
	ConversionRequest,
	ConversionResponse,
	CurrencyInfo,
	RateTableResponse,
	SupportedCurrenciesResponse,
)
from application.services import ConversionService, CurrencyService, RateResolver

router = APIRouter(prefix='/api', tags=['currency'])

CurrencyPath = Annotated[str, Path(min_length=3, max_length=3)]
AmountPath = Annotated[Decimal, Path(gt=0)]


@router.get(
	'/rates/{base}',
	response_model=RateTableResponse,
	status_code=status.HTTP_200_OK,
	summary='Resolve the rate table for a base currency',
)
async def get_rates(
	base: CurrencyPath,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
	currencies: Annotated[CurrencyService, Depends(get_currency_service)],
) -> RateTableResponse:
	base = base.upper()
	currencies.validate_currency(base)

	table = await resolver.resolve(base)
	return RateTableResponse.from_table(table)


@router.get(
	'/convert/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	from_currency: CurrencyPath,
	to_currency: CurrencyPath,
	amount: AmountPath,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	currencies: Annotated[CurrencyService, Depends(get_currency_service)],
) -> ConversionResponse:
	return await _convert(
		from_currency.upper(), to_currency.upper(), amount, resolver, service, currencies
	)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount (form body)',
)
async def convert_currency_form(
	request: ConversionRequest,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	currencies: Annotated[CurrencyService, Depends(get_currency_service)],
) -> ConversionResponse:
	return await _convert(
		request.from_currency, request.to_currency, request.amount, resolver, service, currencies
	)


@router.get(
	'/swap/{from_currency}/{to_currency}/{amount}',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert in the swapped direction using the original pair\'s rates',
)
async def swap_currency(
	from_currency: CurrencyPath,
	to_currency: CurrencyPath,
	amount: AmountPath,
	resolver: Annotated[RateResolver, Depends(get_rate_resolver)],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	currencies: Annotated[CurrencyService, Depends(get_currency_service)],
) -> ConversionResponse:
	from_currency = from_currency.upper()
	to_currency = to_currency.upper()
	currencies.validate_currency(from_currency)
	currencies.validate_currency(to_currency)

	table = await resolver.resolve(from_currency)
	quote = service.swap_quote(table, amount, to_currency)
	return ConversionResponse.from_quote(quote)


@router.get(
	'/currencies',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies',
)
async def get_supported_currencies(
	service: Annotated[CurrencyService, Depends(get_currency_service)],
) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(
		currencies=[
			CurrencyInfo(code=c.code, name=c.name, symbol=c.symbol)
			for c in service.get_supported_currencies()
		]
	)


async def _convert(
	from_currency: str,
	to_currency: str,
	amount: Decimal,
	resolver: RateResolver,
	service: ConversionService,
	currencies: CurrencyService,
) -> ConversionResponse:
	currencies.validate_currency(from_currency)
	currencies.validate_currency(to_currency)

	table = await resolver.resolve(from_currency)
	quote = service.quote(table, amount, to_currency)
	return ConversionResponse.from_quote(quote)
