from .conversion_service import ConversionService
from .currency_service import CurrencyService
from .rate_fetcher import RateFetcher
from .rate_resolver import RateResolver

__all__ = ['ConversionService', 'CurrencyService', 'RateFetcher', 'RateResolver']
