import pytest
import requests

from agents.budget_allocator_agent import allocate
from clients.exchange_rate_client import ExchangeRateClient
from utils.errors import CurrencyError


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        return self.payload


@pytest.fixture
def calls(monkeypatch):
    seen = []

    def fake_get(url, params=None, timeout=None):
        seen.append(url)
        return FakeResponse({"base": "USD", "rates": {"USD": 1.0, "EUR": 0.9, "JPY": 110.0}})

    monkeypatch.setattr(requests, "get", fake_get)
    return seen


def test_rates_without_key_use_open_endpoint(calls, monkeypatch):
    monkeypatch.delenv("CURRENCY_API_KEY", raising=False)
    rates = ExchangeRateClient().rates("usd")
    assert rates["EUR"] == 0.9
    assert calls == ["https://api.exchangerate-api.com/v4/latest/USD"]


def test_rates_with_key_use_keyed_endpoint(calls):
    ExchangeRateClient(api_key="k").rates("eur")
    assert calls == ["https://v6.exchangerate-api.com/v6/k/latest/EUR"]


def test_keyed_response_shape(monkeypatch):
    payload = {"result": "success", "base_code": "USD", "conversion_rates": {"USD": 1, "EUR": 0.9}}
    monkeypatch.setattr(requests, "get", lambda *a, **kw: FakeResponse(payload))
    assert ExchangeRateClient(api_key="k").rate("USD", "EUR") == 0.9


def test_key_is_not_leaked_in_errors(monkeypatch):
    def boom(url, **kw):
        raise requests.ConnectionError(f"cannot reach {url}")

    monkeypatch.setattr(requests, "get", boom)
    with pytest.raises(CurrencyError) as info:
        ExchangeRateClient(api_key="secret-key").rates("USD")
    assert "secret-key" not in str(info.value)


def test_convert(calls):
    assert ExchangeRateClient().convert(100, "USD", "EUR") == pytest.approx(90.0)


def test_same_currency_skips_request(calls):
    assert ExchangeRateClient().convert(100, "usd", "USD") == 100
    assert calls == []


def test_unsupported_currency(calls):
    with pytest.raises(CurrencyError, match="GBP"):
        ExchangeRateClient().convert(100, "USD", "GBP")


def test_convert_allocations(calls):
    allocations = allocate(3000, "comfortable")
    converted = ExchangeRateClient().convert_allocations(allocations, "USD", "EUR")
    flights = converted[0]
    assert (flights.amount, flights.min, flights.max) == (810, 567, 1215)
    assert flights.percentage == 30.0
    assert allocations[0].amount == 900


def test_http_error_becomes_currency_error(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda *a, **kw: FakeResponse({}, status=503))
    with pytest.raises(CurrencyError):
        ExchangeRateClient().rates("USD")


def test_connection_error_becomes_currency_error(monkeypatch):
    def boom(*a, **kw):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(requests, "get", boom)
    with pytest.raises(CurrencyError, match="offline"):
        ExchangeRateClient().rates("USD")


def test_missing_rates_is_an_error(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda *a, **kw: FakeResponse({"result": "error"}))
    with pytest.raises(CurrencyError):
        ExchangeRateClient().rates("USD")


def test_bad_code_rejected(calls):
    with pytest.raises(CurrencyError):
        ExchangeRateClient().rates("dollars")


def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv("CURRENCY_API_KEY", "secret")
    client = ExchangeRateClient()
    assert client.api_key == "secret"
    assert client.url("USD") == "https://v6.exchangerate-api.com/v6/secret/latest/USD"
