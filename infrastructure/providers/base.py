from typing import Protocol

import httpx

from domain.exceptions.currency import FetchTransportError, MalformedPayload
from domain.models.currency import RawRates


class ExchangeRateProvider(Protocol):
    @property
    def name(self) -> str: ...

    async def fetch_rates(self, base: str) -> RawRates: ...

    async def close(self) -> None: ...


class BaseHTTPProvider:
    """Shared GET handling for providers that answer with a JSON rate table."""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        raise NotImplementedError

    async def _request(self, url: str, params: dict | None = None) -> dict:
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchTransportError(
                f"{self.name} HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.TimeoutException:
            # Left to the fetcher, which owns the deadline
            raise
        except httpx.RequestError as e:
            raise FetchTransportError(f"{self.name} request failed: {e.__class__.__name__}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedPayload(f"{self.name} response parsing error: {str(e)}") from e

        if not isinstance(data, dict):
            raise MalformedPayload(f"{self.name} returned {type(data).__name__}, expected an object")
        return data

    def _to_raw_rates(self, base: str, data: dict) -> RawRates:
        if "rates" not in data:
            raise MalformedPayload(f"{self.name} response has no rates")
        reported_date = data.get("date")
        reported_base = data.get("base")
        return RawRates(
            base=base,
            rates=data["rates"],
            date=reported_date if isinstance(reported_date, str) else None,
            reported_base=reported_base if isinstance(reported_base, str) else None,
        )

    async def close(self) -> None:
        await self._client.aclose()
