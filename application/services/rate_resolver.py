import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from application.services.rate_fetcher import RateFetcher, utcnow
from domain.exceptions.currency import FetchError
from domain.models.currency import CacheEntry, RateSource, RateTable
from domain.rates import fallback_table
from infrastructure.cache.rate_cache import RateTableCache

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TIMEOUT = 2.0


@dataclass
class FetchTicket:
	"""Handle on one outstanding live fetch. ``cancelled`` is checked before the cache write."""

	base: str
	task: asyncio.Task | None = None
	cancelled: bool = False

	def cancel(self) -> None:
		self.cancelled = True
		if self.task is not None:
			self.task.cancel()


class RateResolver:
	"""
	Produces a rate table for a base currency: cache, then live fetch, then the
	static fallback table. ``resolve`` never raises for fetch or cache problems.

	Every call takes a generation number. A call that resumes from the cache read
	after a newer call for another base has arrived is superseded and falls back.
	"""

	def __init__(
		self,
		cache: RateTableCache,
		fetcher: RateFetcher,
		clock: Callable[[], datetime] = utcnow,
		cache_timeout: float = DEFAULT_CACHE_TIMEOUT,
	):
		self.cache = cache
		self.fetcher = fetcher
		self.clock = clock
		self.cache_timeout = cache_timeout
		self._inflight: FetchTicket | None = None
		self._generation = 0
		self._latest_base: str | None = None

	async def resolve(self, base: str) -> RateTable:
		self._generation += 1
		generation = self._generation
		self._latest_base = base
		self._supersede(base)

		entry = await self._read_cache(base)
		if entry is not None:
			logger.info(f'Rates for {base} served from cache (as of {entry.table.as_of.isoformat()})')
			return entry.table.with_source(RateSource.CACHE)

		if self._is_superseded(generation, base):
			logger.info(f'Request for {base} superseded by {self._latest_base}, using fallback rates')
			return fallback_table(base, self.clock())

		ticket = self._inflight
		if ticket is None or ticket.base != base or ticket.cancelled or ticket.task.done():
			ticket = self._start_fetch(base)

		try:
			table = await asyncio.shield(ticket.task)
			logger.info(f'Rates for {base} fetched live ({len(table.rates)} currencies)')
			return table
		except asyncio.CancelledError:
			if not ticket.cancelled or asyncio.current_task().cancelling():
				raise
			logger.info(f'Fetch for {base} was superseded, using fallback rates')
		except FetchError as e:
			logger.warning(f'Live rates for {base} unavailable: {e}')
		except Exception as e:
			logger.error(f'Unexpected failure fetching rates for {base}: {e}', exc_info=True)

		return fallback_table(base, self.clock())

	def cancel_pending(self) -> None:
		"""Cancel the outstanding fetch, if any. Its result will not be cached."""
		if self._inflight is not None:
			logger.debug(f'Cancelling outstanding fetch for {self._inflight.base}')
			self._inflight.cancel()
			self._inflight = None

	def _is_superseded(self, generation: int, base: str) -> bool:
		return generation != self._generation and self._latest_base != base

	def _supersede(self, base: str) -> None:
		ticket = self._inflight
		if ticket is None or ticket.base == base:
			return
		if ticket.task is not None and not ticket.task.done():
			logger.info(f'Request for {base} supersedes outstanding fetch for {ticket.base}')
		self.cancel_pending()

	def _start_fetch(self, base: str) -> FetchTicket:
		self._supersede(base)
		ticket = FetchTicket(base=base)
		ticket.task = asyncio.create_task(self._fetch_and_store(ticket))
		ticket.task.add_done_callback(lambda _: self._release(ticket))
		self._inflight = ticket
		return ticket

	def _release(self, ticket: FetchTicket) -> None:
		if self._inflight is ticket:
			self._inflight = None

	async def _fetch_and_store(self, ticket: FetchTicket) -> RateTable:
		table = await self.fetcher.fetch(ticket.base)

		if ticket.cancelled:
			raise FetchError(f'Fetch for {ticket.base} superseded, discarding result')

		try:
			async with asyncio.timeout(self.cache_timeout):
				entry = await self.cache.put(ticket.base, table, self.clock())
		except Exception as e:
			logger.error(f'Failed to cache rates for {ticket.base}: {e!r}')
			return table
		return entry.table

	async def _read_cache(self, base: str) -> CacheEntry | None:
		try:
			async with asyncio.timeout(self.cache_timeout):
				return await self.cache.get(base, self.clock())
		except Exception as e:
			logger.error(f'Cache read for {base} failed, treating as miss: {e!r}')
			return None
