import httpx

from domain.models.currency import RawRates
from infrastructure.providers.base import BaseHTTPProvider


class ExchangeRateAPIProvider(BaseHTTPProvider):
	BASE_URL = 'https://api.exchangerate-api.com/v4/latest'

	def __init__(
		self, base_url: str = BASE_URL, client: httpx.AsyncClient | None = None, timeout: float = 10
	):
		super().__init__(base_url, client=client, timeout=timeout)

	@property
	def name(self) -> str:
		return 'exchangerate-api'

	async def fetch_rates(self, base: str) -> RawRates:
		data = await self._request(f'{self.base_url}/{base}')
		return self._to_raw_rates(base, data)
