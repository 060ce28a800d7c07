from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_conversion_service, get_currency_service, get_rate_resolver
from api.main import app
from application.services import ConversionService, CurrencyService
from domain.models.currency import RateSource, RateTable
from domain.rates import fallback_table

AS_OF = datetime(2025, 9, 30, 10, 0, 0, tzinfo=UTC)


@pytest.fixture
def usd_table():
    return RateTable(
        base='USD',
        rates={'EUR': Decimal('0.85'), 'GBP': Decimal('0.73')},
        as_of=AS_OF,
        source=RateSource.LIVE,
        reported_date='2025-09-30',
    )


@pytest.fixture
def mock_resolver(usd_table):
    mock_service = MagicMock()
    mock_service.resolve = AsyncMock(return_value=usd_table)
    return mock_service


@pytest.fixture
def client(mock_resolver):
    # Override the real dependencies so no network or lifespan is needed
    app.dependency_overrides[get_rate_resolver] = lambda: mock_resolver
    app.dependency_overrides[get_conversion_service] = lambda: ConversionService()
    app.dependency_overrides[get_currency_service] = lambda: CurrencyService()
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# ============================================================================
# TEST: GET /api/rates/{base}
# ============================================================================

def test_get_rates_success(client, mock_resolver):
    response = client.get('/api/rates/usd')

    assert response.status_code == 200
    data = response.json()

    assert data['base'] == 'USD'
    assert {k: Decimal(v) for k, v in data['rates'].items()} == {
        'EUR': Decimal('0.85'),
        'GBP': Decimal('0.73'),
    }
    assert data['source'] == 'live'
    assert data['reported_date'] == '2025-09-30'
    assert 'as_of' in data

    mock_resolver.resolve.assert_called_once_with('USD')


def test_get_rates_reports_fallback_provenance(client, mock_resolver):
    mock_resolver.resolve.return_value = fallback_table('EUR', AS_OF)

    response = client.get('/api/rates/EUR')

    assert response.status_code == 200
    data = response.json()
    assert data['source'] == 'fallback'
    assert data['reported_date'] is None
    assert Decimal(data['rates']['USD']).quantize(Decimal('0.0001')) == Decimal('1.1765')


def test_get_rates_unsupported_currency(client, mock_resolver):
    response = client.get('/api/rates/NGN')

    assert response.status_code == 400
    assert 'not supported' in response.json()['detail']
    mock_resolver.resolve.assert_not_called()


def test_get_rates_code_wrong_length(client):
    response = client.get('/api/rates/EURO')

    assert response.status_code == 422


# ============================================================================
# TEST: Conversion
# ============================================================================

def test_convert_currency_success(client, mock_resolver):
    response = client.get('/api/convert/USD/EUR/100')

    assert response.status_code == 200
    data = response.json()

    assert data['from_currency'] == 'USD'
    assert data['to_currency'] == 'EUR'
    assert Decimal(data['original_amount']) == Decimal('100')
    assert Decimal(data['converted_amount']) == Decimal('85.00')
    assert Decimal(data['exchange_rate']) == Decimal('0.85')
    assert Decimal(data['inverse_rate']).quantize(Decimal('0.0001')) == Decimal('1.1765')
    assert data['source'] == 'live'
    assert 'timestamp' in data

    mock_resolver.resolve.assert_called_once_with('USD')


def test_convert_currency_post_body(client, mock_resolver):
    response = client.post(
        '/api/convert', json={'from_currency': 'usd', 'to_currency': 'gbp', 'amount': '10.50'}
    )

    assert response.status_code == 200
    data = response.json()
    assert data['to_currency'] == 'GBP'
    assert Decimal(data['converted_amount']) == Decimal('7.6650')


def test_convert_to_same_currency_returns_amount(client):
    response = client.get('/api/convert/USD/USD/19.99')

    assert response.status_code == 200
    data = response.json()
    assert Decimal(data['converted_amount']) == Decimal('19.99')
    assert Decimal(data['exchange_rate']) == Decimal('1')


def test_convert_rate_not_available(client):
    response = client.get('/api/convert/USD/JPY/100')

    assert response.status_code == 422
    assert response.json()['detail'] == 'Rate not available'


def test_convert_negative_amount_rejected(client, mock_resolver):
    response = client.get('/api/convert/USD/EUR/-5')

    assert response.status_code == 422
    mock_resolver.resolve.assert_not_called()


def test_convert_unsupported_target(client, mock_resolver):
    response = client.get('/api/convert/USD/NGN/100')

    assert response.status_code == 400
    mock_resolver.resolve.assert_not_called()


# ============================================================================
# TEST: Swap
# ============================================================================

def test_swap_uses_inverse_of_forward_rate(client, mock_resolver):
    response = client.get('/api/swap/USD/EUR/85')

    assert response.status_code == 200
    data = response.json()
    assert data['from_currency'] == 'EUR'
    assert data['to_currency'] == 'USD'
    assert Decimal(data['converted_amount']).quantize(Decimal('0.01')) == Decimal('100.00')
    assert Decimal(data['inverse_rate']) == Decimal('0.85')

    mock_resolver.resolve.assert_called_once_with('USD')


def test_swap_rate_not_available(client):
    response = client.get('/api/swap/USD/CHF/10')

    assert response.status_code == 422


# ============================================================================
# TEST: Catalogue and Health
# ============================================================================

def test_list_currencies(client):
    response = client.get('/api/currencies')

    assert response.status_code == 200
    currencies = response.json()['currencies']
    assert len(currencies) == 20
    assert currencies[1] == {'code': 'EUR', 'name': 'Euro', 'symbol': '€'}


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}
