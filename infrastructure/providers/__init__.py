from config.settings import Settings

from .base import BaseHTTPProvider, ExchangeRateProvider
from .exchangerate_api import ExchangeRateAPIProvider
from .frankfurter import FrankfurterProvider

__all__ = ['make_provider', 'BaseHTTPProvider', 'ExchangeRateProvider', 'ExchangeRateAPIProvider', 'FrankfurterProvider']


def make_provider(name: str, settings: Settings) -> ExchangeRateProvider:
	if name == 'frankfurter':
		return FrankfurterProvider(settings.FRANKFURTER_API_URL, timeout=settings.FETCH_TIMEOUT_SECONDS)
	return ExchangeRateAPIProvider(settings.EXCHANGERATE_API_URL, timeout=settings.FETCH_TIMEOUT_SECONDS)
