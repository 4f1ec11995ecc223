from decimal import Decimal
from typing import AsyncIterator

import httpx
import pytest

from topup_market.core.config import get_settings
from topup_market.core.container import get_container
from topup_market.main import create_app


@pytest.fixture
async def client(settings) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _sign_up(client, email="api@example.com", **extra) -> dict:
    response = await client.post(
        "/api/auth/sign-up",
        json={"email": email, "password": "s3cret-pass", "full_name": "Api User", **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user(client) -> dict:
    body = await _sign_up(client, phone_number="0811111111")
    return {"id": body["account"]["id"], "headers": _auth(body["access_token"])}


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


async def test_sign_up_and_sign_in(client):
    body = await _sign_up(client, email="Mixed@Example.com")
    assert body["account"]["email"] == "mixed@example.com"
    assert Decimal(body["account"]["balance"]) == 0
    assert body["token_type"] == "bearer"

    ok = await client.post("/api/auth/sign-in", json={"email": "mixed@example.com", "password": "s3cret-pass"})
    assert ok.status_code == 200
    bad = await client.post("/api/auth/sign-in", json={"email": "mixed@example.com", "password": "nope-nope"})
    assert bad.status_code == 401
    assert bad.json()["error"]["code"] == "INVALID_CREDENTIALS"

    again = await client.post(
        "/api/auth/sign-up",
        json={"email": "mixed@example.com", "password": "s3cret-pass", "full_name": "Again"},
    )
    assert again.status_code == 409
    assert again.json()["success"] is False


async def test_wallet_requires_a_valid_token(client):
    assert (await client.get("/api/wallet/balance")).status_code in (401, 403)
    bad = await client.get("/api/wallet/balance", headers=_auth("garbage"))
    assert bad.status_code == 401


async def test_profile_update(client, user):
    response = await client.patch("/api/account/me", json={"phone_number": None}, headers=user["headers"])
    assert response.status_code == 200
    assert response.json()["phone_number"] is None
    assert response.json()["full_name"] == "Api User"

    me = await client.get("/api/account/me", headers=user["headers"])
    assert me.json()["phone_number"] is None


async def test_catalog_browsing(client, catalog):
    categories = await client.get("/api/catalog/categories")
    assert categories.json() == {"categories": ["games", "pulsa"]}

    providers = (await client.get("/api/catalog/categories/games/providers")).json()["providers"]
    products = await client.get(f"/api/catalog/providers/{providers[0]['id']}/products")
    assert [p["name"] for p in products.json()["products"]] == ["86 Diamonds", "257 Diamonds"]

    unknown = await client.get("/api/catalog/categories/lottery/providers")
    assert unknown.status_code == 404
    assert unknown.json()["error"]["code"] == "CATEGORY_NOT_FOUND"


async def test_top_up_and_purchase_flow(client, user, catalog):
    topped = await client.post("/api/wallet/topups", json={"amount": "50000"}, headers=user["headers"])
    assert topped.status_code == 201
    assert Decimal(topped.json()["balance"]) == Decimal("50000")

    bought = await client.post(
        "/api/wallet/purchases",
        json={"product_id": catalog["diamonds"].id, "target": "12345678"},
        headers={**user["headers"], "Idempotency-Key": "api-order-1"},
    )
    assert bought.status_code == 201
    assert bought.json()["status"] == "success"
    assert bought.json()["replayed"] is False

    replay = await client.post(
        "/api/wallet/purchases",
        json={"product_id": catalog["diamonds"].id, "target": "12345678"},
        headers={**user["headers"], "Idempotency-Key": "api-order-1"},
    )
    assert replay.status_code == 200
    assert replay.json()["id"] == bought.json()["id"]
    assert replay.json()["replayed"] is True

    balance = await client.get("/api/wallet/balance", headers=user["headers"])
    assert Decimal(balance.json()["balance"]) == Decimal("25000")

    history = await client.get("/api/wallet/transactions", headers=user["headers"])
    assert [row["kind"] for row in history.json()["transactions"]] == ["purchase", "topup"]

    single = await client.get(f"/api/wallet/transactions/{bought.json()['id']}", headers=user["headers"])
    assert single.status_code == 200


async def test_ledger_errors_map_to_status_codes(client, user, catalog):
    invalid = await client.post("/api/wallet/topups", json={"amount": "-5"}, headers=user["headers"])
    assert invalid.status_code == 422
    assert invalid.json()["error"]["code"] == "INVALID_AMOUNT"

    await client.post("/api/wallet/topups", json={"amount": "10000"}, headers=user["headers"])
    broke = await client.post(
        "/api/wallet/purchases",
        json={"product_id": catalog["diamonds"].id, "target": "x"},
        headers=user["headers"],
    )
    assert broke.status_code == 402
    error = broke.json()["error"]
    assert error["code"] == "INSUFFICIENT_FUNDS"
    assert error["retryable"] is False

    inactive = await client.post(
        "/api/wallet/purchases",
        json={"product_id": catalog["retired"].id, "target": "x"},
        headers=user["headers"],
    )
    assert inactive.status_code == 409
    assert inactive.json()["error"]["code"] == "PRODUCT_INACTIVE"

    missing = await client.post(
        "/api/wallet/purchases",
        json={"product_id": 9999, "target": "x"},
        headers=user["headers"],
    )
    assert missing.status_code == 404

    bad_page = await client.get("/api/wallet/transactions?limit=0", headers=user["headers"])
    assert bad_page.status_code == 422

    balance = await client.get("/api/wallet/balance", headers=user["headers"])
    assert Decimal(balance.json()["balance"]) == Decimal("10000")


async def test_admin_settles_pending_purchase(client, user, catalog, create_account, monkeypatch):
    monkeypatch.setenv("LEDGER__PURCHASE_REQUIRES_FULFILLMENT", "true")
    get_settings.cache_clear()
    get_container.cache_clear()
    await create_account(email="ops@example.com", role="admin")
    signed_in = await client.post("/api/auth/sign-in", json={"email": "ops@example.com", "password": "s3cret-pass"})
    admin_headers = _auth(signed_in.json()["access_token"])

    await client.post("/api/wallet/topups", json={"amount": "30000"}, headers=user["headers"])
    bought = await client.post(
        "/api/wallet/purchases",
        json={"product_id": catalog["diamonds"].id, "target": "x"},
        headers=user["headers"],
    )
    assert bought.json()["status"] == "pending"
    tx_id = bought.json()["id"]

    forbidden = await client.post(
        f"/api/admin/transactions/{tx_id}/settle", json={"outcome": "failed"}, headers=user["headers"]
    )
    assert forbidden.status_code == 403

    settled = await client.post(
        f"/api/admin/transactions/{tx_id}/settle", json={"outcome": "failed"}, headers=admin_headers
    )
    assert settled.status_code == 200
    assert settled.json()["status"] == "failed"

    again = await client.post(
        f"/api/admin/transactions/{tx_id}/settle", json={"outcome": "success"}, headers=admin_headers
    )
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "INVALID_TRANSITION"

    balance = await client.get("/api/wallet/balance", headers=user["headers"])
    assert Decimal(balance.json()["balance"]) == Decimal("30000")


async def test_replayed_top_up_answers_200_and_credits_once(client, user):
    headers = {**user["headers"], "Idempotency-Key": "api-topup-1"}

    first = await client.post("/api/wallet/topups", json={"amount": "15000"}, headers=headers)
    again = await client.post("/api/wallet/topups", json={"amount": "15000"}, headers=headers)

    assert first.status_code == 201
    assert first.json()["replayed"] is False
    assert again.status_code == 200
    assert again.json()["replayed"] is True
    assert Decimal(again.json()["balance"]) == Decimal("15000")


async def test_balance_limit_maps_to_422(client, user, monkeypatch):
    monkeypatch.setenv("LEDGER__MAX_TOPUP_AMOUNT", "9000000000000")
    get_settings.cache_clear()
    get_container.cache_clear()

    ok = await client.post("/api/wallet/topups", json={"amount": "9000000000000"}, headers=user["headers"])
    assert ok.status_code == 201
    over = await client.post("/api/wallet/topups", json={"amount": "9000000000000"}, headers=user["headers"])
    assert over.status_code == 422
    assert over.json()["error"]["code"] == "BALANCE_LIMIT_EXCEEDED"
