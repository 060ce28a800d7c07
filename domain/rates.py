"""
Pure rate-table transformations: payload sanitizing and rebasement.

Nothing in here performs I/O. Both the network fetcher and the cache reader
run external data through ``sanitize_rates`` so every ``RateTable`` that leaves
the resolver only holds allow-listed codes with finite, positive values.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal

from domain.currencies import FALLBACK_ANCHOR, FALLBACK_USD_RATES, SUPPORTED_CODES
from domain.models.currency import RateSource, RateTable

logger = logging.getLogger(__name__)

ONE = Decimal(1)


def to_positive_decimal(value: object) -> Decimal | None:
    """Coerce a JSON-ish number to Decimal, or None if it is not finite and > 0."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    else:
        return None

    if not number.is_finite() or number <= 0:
        return None
    return number


def sanitize_rates(
    raw_rates: Mapping,
    base: str,
    allowed: Iterable[str] = SUPPORTED_CODES,
) -> dict[str, Decimal]:
    allowed = frozenset(allowed)
    clean: dict[str, Decimal] = {}
    dropped = []

    for code, value in raw_rates.items():
        if not isinstance(code, str) or code not in allowed or code == base:
            dropped.append(code)
            continue
        number = to_positive_decimal(value)
        if number is None:
            dropped.append(code)
            continue
        clean[code] = number

    if dropped:
        logger.debug(f"Dropped {len(dropped)} rate entries for base {base}")
    return clean


def rebase(table: RateTable, new_base: str) -> RateTable:
    """Re-anchor ``table`` at ``new_base`` by dividing every rate by the new base's rate."""
    if new_base == table.base:
        divisor = ONE
    else:
        divisor = table.rates.get(new_base)
        if divisor is None or not divisor.is_finite() or divisor <= 0:
            logger.warning(f"No usable {table.base}->{new_base} rate, rebasing with divisor 1")
            divisor = ONE

    rebased: dict[str, Decimal] = {}
    for code, value in [(table.base, ONE), *table.rates.items()]:
        if code == new_base:
            continue
        rebased[code] = value / divisor

    return RateTable(
        base=new_base,
        rates=rebased,
        as_of=table.as_of,
        source=table.source,
        reported_date=table.reported_date,
    )


def fallback_table(base: str, now: datetime) -> RateTable:
    """The static table re-anchored at ``base``, tagged as fallback data."""
    anchored = RateTable(
        base=FALLBACK_ANCHOR,
        rates={code: rate for code, rate in FALLBACK_USD_RATES.items() if code != FALLBACK_ANCHOR},
        as_of=now,
        source=RateSource.FALLBACK,
    )
    return rebase(anchored, base)
