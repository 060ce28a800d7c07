import httpx

from domain.models.currency import RawRates
from infrastructure.providers.base import BaseHTTPProvider


class FrankfurterProvider(BaseHTTPProvider):
    BASE_URL = "https://api.frankfurter.app"

    def __init__(
        self, base_url: str = BASE_URL, client: httpx.AsyncClient | None = None, timeout: float = 10
    ):
        super().__init__(base_url, client=client, timeout=timeout)

    @property
    def name(self) -> str:
        return "frankfurter"

    async def fetch_rates(self, base: str) -> RawRates:
        data = await self._request(f"{self.base_url}/latest", {"from": base})
        return self._to_raw_rates(base, data)
