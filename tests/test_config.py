from decimal import Decimal

import pytest

from topup_market import __main__ as runner
from topup_market.core.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_nested_sections_read_from_environment(monkeypatch):
    monkeypatch.setenv("SERVER__PORT", "9100")
    monkeypatch.setenv("LEDGER__PURCHASE_REQUIRES_FULFILLMENT", "true")
    monkeypatch.setenv("LEDGER__MAX_TOPUP_AMOUNT", "500000")

    settings = Settings()

    assert settings.port == 9100
    assert settings.ledger.purchase_requires_fulfillment is True
    assert settings.ledger.max_topup_amount == Decimal("500000")
    assert settings.ledger.default_history_limit == 10


def test_runner_passes_server_settings_to_uvicorn(monkeypatch):
    monkeypatch.setenv("SERVER__HOST", "127.0.0.1")
    monkeypatch.setenv("SERVER__PORT", "8123")
    monkeypatch.setenv("SERVER__RELOAD", "true")
    calls = []
    monkeypatch.setattr(runner.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    runner.main()

    ((app, kwargs),) = calls
    assert app == "topup_market.main:app"
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8123
    assert kwargs["reload"] is True
