from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from types import MappingProxyType


class RateSource(str, Enum):
    LIVE = "live"
    CACHE = "cache"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class SupportedCurrency:
    code: str
    name: str | None
    symbol: str | None = None


@dataclass(frozen=True)
class RawRates:
    """Untrusted provider payload, before validation."""
    base: str
    rates: object
    date: str | None = None
    reported_base: str | None = None


@dataclass(frozen=True)
class RateTable:
    base: str
    rates: Mapping[str, Decimal]  # units of currency per 1 unit of base
    as_of: datetime
    source: RateSource
    reported_date: str | None = None

    def __post_init__(self):
        # Freeze a private copy so callers cannot mutate the table afterwards
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def with_source(self, source: RateSource) -> "RateTable":
        return replace(self, source=source)


@dataclass(frozen=True)
class CacheEntry:
    table: RateTable
    expires_at: datetime

    @classmethod
    def from_table(cls, table: RateTable, ttl: timedelta) -> "CacheEntry":
        return cls(table=table, expires_at=table.as_of + ttl)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(frozen=True)
class ConversionQuote:
    from_currency: str
    to_currency: str
    amount: Decimal
    converted_amount: Decimal
    rate: Decimal  # 1 from_currency in to_currency
    inverse_rate: Decimal  # 1 to_currency in from_currency
    source: RateSource
    as_of: datetime
