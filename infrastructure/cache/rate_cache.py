import json
import logging
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation

from domain.exceptions.currency import CacheError
from domain.models.currency import CacheEntry, RateSource, RateTable
from domain.rates import sanitize_rates
from infrastructure.cache.store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=24)


class RateTableCache:
    def __init__(self, store: KeyValueStore, ttl: timedelta = DEFAULT_TTL):
        self.store = store
        self.ttl = ttl

    def _make_key(self, base: str) -> str:
        return f"rates_{base}"

    async def get(self, base: str, now: datetime) -> CacheEntry | None:
        key = self._make_key(base)
        data = await self.store.get(key)

        if not data:
            return None

        try:
            table = self._deserialize(data, base)
        except CacheError as e:
            logger.warning(f"Ignoring unreadable cache entry {key}: {e}")
            return None

        entry = CacheEntry.from_table(table, self.ttl)
        if entry.is_expired(now):
            logger.debug(f"Cache entry {key} expired at {entry.expires_at.isoformat()}")
            return None
        return entry

    async def put(self, base: str, table: RateTable, now: datetime) -> CacheEntry:
        key = self._make_key(base)
        stored = RateTable(
            base=base,
            rates=table.rates,
            as_of=now,
            source=RateSource.LIVE,
            reported_date=table.reported_date,
        )

        table_dict = {
            "base": stored.base,
            "rates": {code: str(rate) for code, rate in stored.rates.items()},
            "as_of": stored.as_of.isoformat(),
            "reported_date": stored.reported_date,
        }

        await self.store.set(key, json.dumps(table_dict), self.ttl)
        return CacheEntry.from_table(stored, self.ttl)

    def _deserialize(self, data: str, base: str) -> RateTable:
        try:
            table_dict = json.loads(data)
        except (TypeError, ValueError) as e:
            raise CacheError(f"Invalid json data: {e}") from e

        if not isinstance(table_dict, dict) or not isinstance(table_dict.get("rates"), dict):
            raise CacheError("Stored value is not a rate table")
        if table_dict.get("base") != base:
            raise CacheError(f"Stored base {table_dict.get('base')!r} does not match {base}")

        try:
            raw_rates = {code: Decimal(value) for code, value in table_dict["rates"].items()}
            as_of = datetime.fromisoformat(table_dict["as_of"])
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise CacheError(f"Invalid stored field: {e}") from e

        if as_of.tzinfo is None:
            raise CacheError("Stored timestamp has no timezone")

        rates = sanitize_rates(raw_rates, base)
        if not rates:
            raise CacheError("Stored table has no usable rates")

        reported_date = table_dict.get("reported_date")
        return RateTable(
            base=base,
            rates=rates,
            as_of=as_of,
            source=RateSource.CACHE,
            reported_date=reported_date if isinstance(reported_date, str) else None,
        )
