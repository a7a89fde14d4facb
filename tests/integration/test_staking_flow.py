"""API tests for staking, treasury and asset endpoints — full open/claim flow."""

from httpx import AsyncClient

from src.mr_common.clock import ManualClock

T0 = 1_700_000_000
DAY = 86_400
WEEK = 7 * DAY


async def _prepare_alice(
    client: AsyncClient, owner_headers: dict[str, str], alice_headers: dict[str, str]
) -> None:
    resp = await client.post(
        "/api/v1/treasury/deposit", json={"amount": 10**24}, headers=owner_headers
    )
    assert resp.status_code == 200
    resp = await client.post(
        "/api/v1/assets/credit",
        json={"holder": "alice", "contract": "miner", "token_class": 0, "quantity": 2},
        headers=owner_headers,
    )
    assert resp.json()["data"]["balance"] == 2
    resp = await client.post(
        "/api/v1/assets/approval",
        json={"operator": "ledger:staking", "approved": True},
        headers=alice_headers,
    )
    assert resp.json()["data"]["approved"] is True


class TestOpenAndClaim:
    async def test_full_flow(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        alice_headers: dict[str, str],
        clock: ManualClock,
    ) -> None:
        await _prepare_alice(client, owner_headers, alice_headers)

        resp = await client.post(
            "/api/v1/staking/open",
            json={"items": [{"miner_class": 0, "count": 2}]},
            headers=alice_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["slots"] == [0, 1]

        clock.advance(WEEK)
        resp = await client.get(
            "/api/v1/staking/positions/1/unclaimed",
            params={"target_time": T0 + WEEK},
            headers=alice_headers,
        )
        assert resp.json()["data"]["amount"] == 6_048_000_000

        resp = await client.post(
            "/api/v1/staking/claim",
            json={"slot_indices": [0], "target_times": [T0 + WEEK]},
            headers=alice_headers,
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["total"] == 6_048_000_000
        assert data["total_display"] == "0.000000006048"
        assert data["items"][0]["claimed_until"] == T0 + WEEK

        resp = await client.post(
            "/api/v1/staking/claim",
            json={"slot_indices": [0], "target_times": [T0 + WEEK]},
            headers=alice_headers,
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 3003

        resp = await client.get("/api/v1/staking/positions", headers=alice_headers)
        positions = resp.json()["data"]
        assert positions["total_positions"] == 2
        assert [p["state"] for p in positions["items"]] == ["PARTIALLY_CLAIMED", "OPEN"]

        resp = await client.get("/api/v1/treasury/balance")
        assert resp.json()["data"]["balance"] == 10**24 - 6_048_000_000

    async def test_open_without_approval(
        self, client: AsyncClient, owner_headers: dict[str, str], alice_headers: dict[str, str]
    ) -> None:
        await client.post(
            "/api/v1/assets/credit",
            json={"holder": "alice", "contract": "miner", "token_class": 0, "quantity": 1},
            headers=owner_headers,
        )
        resp = await client.post(
            "/api/v1/staking/open",
            json={"items": [{"miner_class": 0, "count": 1}]},
            headers=alice_headers,
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 5006

        resp = await client.get(
            "/api/v1/assets/balance",
            params={"contract": "miner", "token_class": 0},
            headers=alice_headers,
        )
        assert resp.json()["data"]["balance"] == 1

    async def test_empty_batch_rejected_by_schema(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        resp = await client.post("/api/v1/staking/open", json={"items": []}, headers=alice_headers)
        assert resp.status_code == 422

    async def test_foreign_slot(
        self, client: AsyncClient, alice_headers: dict[str, str], clock: ManualClock
    ) -> None:
        clock.advance(DAY)
        resp = await client.post(
            "/api/v1/staking/claim",
            json={"slot_indices": [0], "target_times": [T0 + DAY]},
            headers=alice_headers,
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == 3004


class TestAdministration:
    async def test_pause_blocks_open(
        self,
        client: AsyncClient,
        owner_headers: dict[str, str],
        alice_headers: dict[str, str],
    ) -> None:
        await _prepare_alice(client, owner_headers, alice_headers)

        resp = await client.post("/api/v1/staking/pause", headers=alice_headers)
        assert resp.status_code == 403

        resp = await client.post("/api/v1/staking/pause", headers=owner_headers)
        assert resp.json()["data"]["paused"] is True

        resp = await client.post(
            "/api/v1/staking/open",
            json={"items": [{"miner_class": 0, "count": 1}]},
            headers=alice_headers,
        )
        assert resp.status_code == 423
        assert resp.json()["code"] == 3001

        await client.post("/api/v1/staking/unpause", headers=owner_headers)
        resp = await client.post(
            "/api/v1/staking/open",
            json={"items": [{"miner_class": 0, "count": 1}]},
            headers=alice_headers,
        )
        assert resp.status_code == 200

    async def test_weights_and_estimate(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/staking/weights")
        assert resp.json()["data"]["weights"] == {
            "0": 10000, "1": 30000, "2": 100000, "3": 300000
        }

        resp = await client.get(
            "/api/v1/staking/estimate",
            params={"miner_class": 0, "output_factor": 803571429, "duration": WEEK},
        )
        data = resp.json()["data"]
        assert data["amount"] == 4_860_000_002_592_000_000
        assert data["amount_display"] == "4.860000002592"

    async def test_emergency_claim_owner_only(
        self, client: AsyncClient, owner_headers: dict[str, str], alice_headers: dict[str, str]
    ) -> None:
        await client.post("/api/v1/treasury/deposit", json={"amount": 100}, headers=owner_headers)
        resp = await client.post(
            "/api/v1/treasury/emergency-claim",
            json={"recipient": "alice", "amount": 10},
            headers=alice_headers,
        )
        assert resp.status_code == 403

        resp = await client.post(
            "/api/v1/treasury/emergency-claim",
            json={"recipient": "vault", "amount": 100},
            headers=owner_headers,
        )
        assert resp.json()["data"]["balance"] == 0

    async def test_deposit_owner_only(
        self, client: AsyncClient, owner_headers: dict[str, str], alice_headers: dict[str, str]
    ) -> None:
        resp = await client.post(
            "/api/v1/treasury/deposit", json={"amount": 100}, headers=alice_headers
        )
        assert resp.status_code == 403

        resp = await client.get("/api/v1/treasury/balance", headers=owner_headers)
        assert resp.json()["data"]["balance"] == 0

    async def test_request_id_echoed(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/staking/weights", headers={"X-Request-ID": "req_abc"})
        assert resp.headers["X-Request-ID"] == "req_abc"
        assert resp.json()["request_id"] == "req_abc"
