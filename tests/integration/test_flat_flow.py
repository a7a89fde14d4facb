"""API tests for mr_flat endpoints."""

from httpx import AsyncClient

from src.mr_common.clock import ManualClock

T0 = 1_700_000_000
WEEK = 7 * 86_400
BOX = {"contract": "mystery-box", "token_class": 1}


async def _support_and_fund(
    client: AsyncClient, owner_headers: dict[str, str], alice_headers: dict[str, str]
) -> None:
    resp = await client.post("/api/v1/flat/supported", json=BOX, headers=owner_headers)
    assert resp.json()["data"]["items"] == [BOX]
    await client.post("/api/v1/treasury/deposit", json={"amount": 10**24}, headers=owner_headers)
    await client.post(
        "/api/v1/assets/credit", json={"holder": "alice", "quantity": 1, **BOX}, headers=owner_headers
    )
    await client.post(
        "/api/v1/assets/approval",
        json={"operator": "ledger:flat", "approved": True},
        headers=alice_headers,
    )


class TestFlatMining:
    async def test_mine_and_claim_week(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        alice_headers: dict[str, str],
        clock: ManualClock,
    ) -> None:
        await _support_and_fund(client, owner_headers, alice_headers)

        resp = await client.post("/api/v1/flat/mine", json=BOX, headers=alice_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["end_time"] == T0 + WEEK

        resp = await client.post("/api/v1/flat/mine", json=BOX, headers=alice_headers)
        assert resp.json()["code"] == 4002

        clock.advance(2 * WEEK)
        resp = await client.post(
            "/api/v1/flat/claim", json={"target_time": T0 + 2 * WEEK}, headers=alice_headers
        )
        data = resp.json()["data"]
        assert data["amount"] == 6_048_000_000
        assert data["claimed_until"] == T0 + WEEK

        resp = await client.get("/api/v1/flat/status", headers=alice_headers)
        assert resp.json()["data"]["claimed_total"] == 6_048_000_000

    async def test_unsupported_asset(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        resp = await client.post("/api/v1/flat/mine", json=BOX, headers=alice_headers)
        assert resp.status_code == 422
        assert resp.json()["code"] == 4001

    async def test_status_without_position(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        resp = await client.get("/api/v1/flat/status", headers=alice_headers)
        assert resp.status_code == 404
        assert resp.json()["code"] == 4004

    async def test_remove_supported(
        self, client: AsyncClient, owner_headers: dict[str, str], alice_headers: dict[str, str]
    ) -> None:
        await _support_and_fund(client, owner_headers, alice_headers)
        resp = await client.delete("/api/v1/flat/supported", params=BOX, headers=owner_headers)
        assert resp.json()["data"]["items"] == []

        resp = await client.post("/api/v1/flat/supported", json=BOX, headers=alice_headers)
        assert resp.status_code == 403
