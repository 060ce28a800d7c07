import asyncio
import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime

import httpx

from domain.currencies import SUPPORTED_CODES
from domain.exceptions.currency import FetchTimeout, MalformedPayload
from domain.models.currency import RateSource, RateTable
from domain.rates import sanitize_rates
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
	return datetime.now(UTC)


class RateFetcher:
	"""Bounded-duration live rate lookup with payload validation."""

	def __init__(
		self,
		provider: ExchangeRateProvider,
		timeout: float = 10.0,
		clock: Callable[[], datetime] = utcnow,
	):
		self.provider = provider
		self.timeout = timeout
		self.clock = clock

	async def fetch(self, base: str) -> RateTable:
		try:
			async with asyncio.timeout(self.timeout):
				raw = await self.provider.fetch_rates(base)
		except (TimeoutError, httpx.TimeoutException) as e:
			raise FetchTimeout(
				f'{self.provider.name} did not answer for {base} within {self.timeout}s'
			) from e

		if not isinstance(raw.rates, Mapping):
			raise MalformedPayload(f'{self.provider.name} rates for {base} are not a mapping')

		if raw.reported_base and raw.reported_base != base:
			logger.warning(
				f'{self.provider.name} answered with base {raw.reported_base} for {base}, keeping {base}'
			)

		rates = sanitize_rates(raw.rates, base, SUPPORTED_CODES)
		if not rates:
			raise MalformedPayload(f'{self.provider.name} returned no usable rates for {base}')

		return RateTable(
			base=base,
			rates=rates,
			as_of=self.clock(),
			source=RateSource.LIVE,
			reported_date=raw.date,
		)
