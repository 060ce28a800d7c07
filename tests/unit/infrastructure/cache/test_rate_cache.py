# nosec B101


import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from domain.models.currency import CacheEntry, RateSource, RateTable
from infrastructure.cache.rate_cache import DEFAULT_TTL, RateTableCache
from infrastructure.cache.store import InMemoryStore

NOW = datetime(2025, 11, 5, 10, 30, tzinfo=UTC)


def make_table(base='USD', rates=None, source=RateSource.LIVE, as_of=NOW) -> RateTable:
    return RateTable(
        base=base,
        rates=rates or {'EUR': Decimal('0.85'), 'GBP': Decimal('0.73')},
        as_of=as_of,
        source=source,
        reported_date='2025-11-05',
    )


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def cache(store):
    return RateTableCache(store)


# ============================================================================
# TEST: put() / get() - Cache Hit Scenarios
# ============================================================================

@pytest.mark.asyncio
async def test_put_then_get_returns_entry(cache):
    await cache.put('USD', make_table(), NOW)

    entry = await cache.get('USD', NOW + timedelta(minutes=5))

    assert isinstance(entry, CacheEntry)
    assert entry.table.base == 'USD'
    assert entry.table.rates == {'EUR': Decimal('0.85'), 'GBP': Decimal('0.73')}
    assert entry.table.as_of == NOW
    assert entry.table.source == RateSource.CACHE
    assert entry.table.reported_date == '2025-11-05'
    assert entry.expires_at == NOW + timedelta(hours=24)


@pytest.mark.asyncio
async def test_put_stamps_entry_with_write_time(cache):
    table = make_table(as_of=NOW - timedelta(minutes=3))

    entry = await cache.put('USD', table, NOW)

    assert entry.table.as_of == NOW
    assert entry.table.source == RateSource.LIVE


@pytest.mark.asyncio
async def test_get_missing_base_returns_none(cache):
    assert await cache.get('USD', NOW) is None


@pytest.mark.asyncio
async def test_entries_are_scoped_per_base(cache):
    await cache.put('USD', make_table(), NOW)
    await cache.put('EUR', make_table(base='EUR', rates={'USD': Decimal('1.17')}), NOW)

    usd = await cache.get('USD', NOW)
    eur = await cache.get('EUR', NOW)

    assert usd.table.rates['EUR'] == Decimal('0.85')
    assert eur.table.rates == {'USD': Decimal('1.17')}


@pytest.mark.asyncio
async def test_put_overwrites_instead_of_merging(cache):
    await cache.put('USD', make_table(rates={'EUR': Decimal('0.85'), 'GBP': Decimal('0.73')}), NOW)
    await cache.put('USD', make_table(rates={'JPY': Decimal('150.1')}), NOW)

    entry = await cache.get('USD', NOW)

    assert entry.table.rates == {'JPY': Decimal('150.1')}


@pytest.mark.asyncio
async def test_get_preserves_decimal_precision(cache):
    await cache.put('USD', make_table(rates={'JPY': Decimal('110.123456789')}), NOW)

    entry = await cache.get('USD', NOW)

    assert str(entry.table.rates['JPY']) == '110.123456789'


# ============================================================================
# TEST: Expiry
# ============================================================================

@pytest.mark.asyncio
async def test_entry_older_than_ttl_is_absent(cache):
    await cache.put('USD', make_table(), NOW - DEFAULT_TTL - timedelta(seconds=1))

    assert await cache.get('USD', NOW) is None


@pytest.mark.asyncio
async def test_entry_just_inside_ttl_is_present(cache):
    await cache.put('USD', make_table(), NOW - DEFAULT_TTL + timedelta(seconds=1))

    assert await cache.get('USD', NOW) is not None


@pytest.mark.asyncio
async def test_entry_exactly_at_expiry_is_absent(cache):
    await cache.put('USD', make_table(), NOW - DEFAULT_TTL)

    assert await cache.get('USD', NOW) is None


@pytest.mark.asyncio
async def test_custom_ttl(store):
    cache = RateTableCache(store, ttl=timedelta(minutes=5))
    await cache.put('USD', make_table(), NOW)

    assert await cache.get('USD', NOW + timedelta(minutes=4)) is not None
    assert await cache.get('USD', NOW + timedelta(minutes=5)) is None


# ============================================================================
# TEST: Corrupt Data
# ============================================================================

@pytest.mark.asyncio
@pytest.mark.parametrize('stored', [
    '{ invalid json }',
    '[]',
    json.dumps({'base': 'USD', 'rates': ['EUR'], 'as_of': NOW.isoformat()}),
    json.dumps({'base': 'USD', 'rates': {'EUR': 'abc'}, 'as_of': NOW.isoformat()}),
    json.dumps({'base': 'USD', 'rates': {'EUR': '0.85'}}),
    json.dumps({'base': 'USD', 'rates': {'EUR': '0.85'}, 'as_of': 'yesterday'}),
    json.dumps({'base': 'USD', 'rates': {'EUR': '0.85'}, 'as_of': '2025-11-05T10:30:00'}),
    json.dumps({'base': 'GBP', 'rates': {'EUR': '0.85'}, 'as_of': NOW.isoformat()}),
    json.dumps({'base': 'USD', 'rates': {'EUR': '-1', 'XXX': '2'}, 'as_of': NOW.isoformat()}),
])
async def test_corrupt_entries_are_treated_as_absent(store, cache, stored):
    await store.set('rates_USD', stored)

    assert await cache.get('USD', NOW) is None


@pytest.mark.asyncio
async def test_invalid_stored_rates_are_dropped_on_read(store, cache):
    stored = json.dumps({
        'base': 'USD',
        'rates': {'EUR': '0.85', 'GBP': '0', 'NGN': '1500', 'JPY': 'Infinity'},
        'as_of': NOW.isoformat(),
    })
    await store.set('rates_USD', stored)

    entry = await cache.get('USD', NOW)

    assert entry.table.rates == {'EUR': Decimal('0.85')}


# ============================================================================
# TEST: Serialization and Keys
# ============================================================================

@pytest.mark.asyncio
async def test_put_serializes_decimals_as_strings_with_ttl():
    mock_store = AsyncMock()
    cache = RateTableCache(mock_store)

    await cache.put('USD', make_table(), NOW)

    mock_store.set.assert_called_once()
    key, stored_data, ttl = mock_store.set.call_args[0]
    assert key == 'rates_USD'
    assert ttl == timedelta(hours=24)

    stored = json.loads(stored_data)
    assert stored == {
        'base': 'USD',
        'rates': {'EUR': '0.85', 'GBP': '0.73'},
        'as_of': '2025-11-05T10:30:00+00:00',
        'reported_date': '2025-11-05',
    }


def test_make_key_format(cache):
    assert cache._make_key('USD') == 'rates_USD'
    assert cache._make_key('EUR') != cache._make_key('USD')


def test_default_ttl(cache):
    assert cache.ttl == timedelta(hours=24)
