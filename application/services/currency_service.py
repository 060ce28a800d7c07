import logging

from domain.currencies import SUPPORTED_CURRENCIES
from domain.exceptions.currency import InvalidCurrencyError
from domain.models.currency import SupportedCurrency

logger = logging.getLogger(__name__)


class CurrencyService:
	def __init__(self, currencies: tuple[SupportedCurrency, ...] = SUPPORTED_CURRENCIES):
		self.currencies = currencies
		self._by_code = {c.code: c for c in currencies}

	def get_supported_currencies(self) -> list[SupportedCurrency]:
		return list(self.currencies)

	def get_currency(self, code: str) -> SupportedCurrency:
		self.validate_currency(code)
		return self._by_code[code]

	def validate_currency(self, code: str) -> None:
		if code not in self._by_code:
			logger.info(f'Rejected unsupported currency {code!r}')
			raise InvalidCurrencyError(f'Currency {code} is not supported')
