"""Integration tests for the publish -> start/cancel -> finish flow.

Pre-condition: PostgreSQL + Redis running and `alembic upgrade head` applied
(the seed migration provides fee 10%, fixed rate 0, urban 1000/km, band 50%).

Uses the session-scoped client fixture from tests/integration/conftest.py.
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient

from tests.integration.helpers import create_driver, reserve_seats

pytestmark = pytest.mark.asyncio(loop_scope="session")

_PUBLISH_BODY = {
    "origin_id": 1,
    "destination_id": 2,
    "distance_km": "40",
    "is_urban": True,
    "date_time": "2026-12-01T08:00:00Z",
    "seats": 4,
    "price_per_seat": "10000",
}


async def _balance(client: AsyncClient, headers: dict[str, str]) -> tuple[Decimal, Decimal]:
    data = (await client.get("/api/v1/wallet/balance", headers=headers)).json()["data"]
    return Decimal(data["balance"]), Decimal(data["frozen_balance"])


class TestPricing:
    async def test_current_pricing_is_public(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/assumptions/current-pricing")
        assert resp.status_code == 200
        assert Decimal(resp.json()["data"]["fee_percentage"]) == Decimal(10)


class TestPublish:
    async def test_insufficient_balance(self, client: AsyncClient) -> None:
        _, headers = await create_driver(Decimal(100))
        resp = await client.post("/api/v1/trips/publish", json=_PUBLISH_BODY, headers=headers)
        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 2001
        assert Decimal(body["data"]["deficit"]) == Decimal(3900)

    async def test_publish_freezes_guarantee(self, client: AsyncClient) -> None:
        _, headers = await create_driver(Decimal(10000))
        resp = await client.post("/api/v1/trips/publish", json=_PUBLISH_BODY, headers=headers)
        assert resp.status_code == 201
        assert Decimal(resp.json()["data"]["required_guarantee"]) == Decimal(4000)
        assert await _balance(client, headers) == (Decimal(6000), Decimal(4000))


class TestLifecycle:
    async def test_start_then_finish(self, client: AsyncClient) -> None:
        _, headers = await create_driver(Decimal(10000))
        trip_id = (
            await client.post("/api/v1/trips/publish", json=_PUBLISH_BODY, headers=headers)
        ).json()["data"]["trip"]["id"]
        await reserve_seats(trip_id, 3)

        start = await client.post(f"/api/v1/trips/{trip_id}/start", headers=headers)
        assert start.status_code == 200
        data = start.json()["data"]
        assert Decimal(data["fee_on_sold_seats"]) == Decimal(3000)
        assert Decimal(data["fee_refund_unsold_seats"]) == Decimal(1000)
        assert Decimal(data["retained_frozen_amount"]) == 0
        assert await _balance(client, headers) == (Decimal(7000), Decimal(0))

        again = await client.post(f"/api/v1/trips/{trip_id}/start", headers=headers)
        assert again.status_code == 422
        assert again.json()["code"] == 4002

        finish = await client.post(f"/api/v1/trips/{trip_id}/finish", headers=headers)
        assert finish.status_code == 200
        assert finish.json()["data"]["status"] == "finished"

        txs = (await client.get("/api/v1/wallet/transactions", headers=headers)).json()["data"]
        assert {t["transaction_type"] for t in txs["items"]} == {"cobro", "devolución"}

    async def test_cancel_refunds_guarantee(self, client: AsyncClient) -> None:
        _, headers = await create_driver(Decimal(10000))
        trip_id = (
            await client.post("/api/v1/trips/publish", json=_PUBLISH_BODY, headers=headers)
        ).json()["data"]["trip"]["id"]

        resp = await client.post(f"/api/v1/trips/{trip_id}/cancel", headers=headers)

        assert resp.status_code == 200
        assert Decimal(resp.json()["data"]["refunded_amount"]) == Decimal(4000)
        assert await _balance(client, headers) == (Decimal(10000), Decimal(0))

    async def test_cancel_blocked_with_reservations(self, client: AsyncClient) -> None:
        _, headers = await create_driver(Decimal(10000))
        trip_id = (
            await client.post("/api/v1/trips/publish", json=_PUBLISH_BODY, headers=headers)
        ).json()["data"]["trip"]["id"]
        await reserve_seats(trip_id, 1)

        resp = await client.post(f"/api/v1/trips/{trip_id}/cancel", headers=headers)

        assert resp.status_code == 409
        assert resp.json()["code"] == 4003

    async def test_other_driver_gets_404(self, client: AsyncClient) -> None:
        _, owner = await create_driver(Decimal(10000))
        _, intruder = await create_driver(Decimal(10000))
        trip_id = (
            await client.post("/api/v1/trips/publish", json=_PUBLISH_BODY, headers=owner)
        ).json()["data"]["trip"]["id"]

        resp = await client.post(f"/api/v1/trips/{trip_id}/start", headers=intruder)

        assert resp.status_code == 404
