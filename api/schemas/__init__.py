from .requests import ConversionRequest
from .responses import (
	ConversionResponse,
	CurrencyInfo,
	RateTableResponse,
	SupportedCurrenciesResponse,
)

__all__ = [
	'ConversionRequest',
	'ConversionResponse',
	'CurrencyInfo',
	'RateTableResponse',
	'SupportedCurrenciesResponse',
]
