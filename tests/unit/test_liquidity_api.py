"""Endpoint tests for /api/v1/liquidity via the in-process ASGI client."""

from typing import Any

from tests.factories import ONE_A, ONE_B, ONE_LP

BASE = "/api/v1/liquidity"


def _snapshot(**overrides: Any) -> dict[str, Any]:
    snap: dict[str, Any] = {
        "reserve_a": 100 * ONE_A,
        "reserve_b": 5000 * ONE_B,
        "total_liquidity": 100 * ONE_LP,
        "token_a": {"symbol": "TKA", "decimals": 18},
        "token_b": {"symbol": "USDC", "decimals": 6},
        "allowance_a": 10 * ONE_A,
        "allowance_b": 500 * ONE_B,
        "user_liquidity": 10 * ONE_LP,
        "share_basis_points": 1000,
        "balance_a": 1000 * ONE_A,
        "balance_b": 50000 * ONE_B,
    }
    snap.update(overrides)
    return snap


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestPanel:
    async def test_matching_draft(self, client):
        resp = await client.post(
            f"{BASE}/panel",
            json={"snapshot": _snapshot(), "draft": {"amount_a": "1", "amount_b": "50"}},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        data = body["data"]
        assert data["ratio_display"] == "1 TKA = 50.000000 USDC"
        assert data["ratio_error"] == ""
        assert data["can_deposit"] is True
        assert data["deposit_label"] == "Add Liquidity"
        assert data["share_display"] == "10.00%"

    async def test_mismatched_draft(self, client):
        resp = await client.post(
            f"{BASE}/panel",
            json={"snapshot": _snapshot(), "draft": {"amount_a": "1", "amount_b": "40"}},
        )
        data = resp.json()["data"]
        assert data["ratio_error"] == "Ratio mismatch! Expected 50.0000 USDC for 1 TKA"
        assert data["can_deposit"] is False

    async def test_empty_pool(self, client):
        snap = _snapshot(reserve_a=0, reserve_b=0, total_liquidity=0, user_liquidity=0)
        resp = await client.post(f"{BASE}/panel", json={"snapshot": snap})
        data = resp.json()["data"]
        assert data["first_deposit"] is True
        assert data["deposit_label"] == "Create Pool"
        assert data["ratio_display"] == ""

    async def test_request_id_matches_header(self, client):
        resp = await client.post(f"{BASE}/panel", json={"snapshot": _snapshot()})
        assert resp.json()["request_id"] == resp.headers["X-Request-ID"]

    async def test_caller_request_id_echoed(self, client):
        resp = await client.post(
            f"{BASE}/panel",
            json={"snapshot": _snapshot()},
            headers={"X-Request-ID": "trace-42"},
        )
        assert resp.headers["X-Request-ID"] == "trace-42"
        assert resp.json()["request_id"] == "trace-42"

    async def test_negative_reserve_rejected(self, client):
        resp = await client.post(f"{BASE}/panel", json={"snapshot": _snapshot(reserve_a=-1)})
        assert resp.status_code == 422


class TestEditDeposit:
    async def test_edit_a_proposes_b(self, client):
        resp = await client.post(
            f"{BASE}/deposit/edit",
            json={"snapshot": _snapshot(), "side": "A", "value": "2"},
        )
        data = resp.json()["data"]
        assert data["amount_a"] == "2"
        assert data["amount_b"] == "100.000000"

    async def test_edit_b_proposes_a(self, client):
        resp = await client.post(
            f"{BASE}/deposit/edit",
            json={"snapshot": _snapshot(), "side": "B", "value": "100"},
        )
        data = resp.json()["data"]
        assert data["amount_a"] == "2.000000000000000000"

    async def test_invalid_value_clears_other_side(self, client):
        resp = await client.post(
            f"{BASE}/deposit/edit",
            json={
                "snapshot": _snapshot(),
                "draft": {"amount_a": "1", "amount_b": "50"},
                "side": "A",
                "value": "abc",
            },
        )
        data = resp.json()["data"]
        assert data["amount_a"] == "abc"
        assert data["amount_b"] == ""

    async def test_unknown_side(self, client):
        resp = await client.post(
            f"{BASE}/deposit/edit",
            json={"snapshot": _snapshot(), "side": "C", "value": "1"},
        )
        assert resp.status_code == 422


class TestWithdrawQuote:
    async def test_quote(self, client):
        resp = await client.post(
            f"{BASE}/withdraw/quote",
            json={"snapshot": _snapshot(), "remove_amount": "1"},
        )
        data = resp.json()["data"]
        assert data["expected_a"] == ONE_A
        assert data["expected_b"] == 50 * ONE_B
        assert data["expected_a_display"] == "1.0000"

    async def test_empty_amount_quotes_zero(self, client):
        resp = await client.post(f"{BASE}/withdraw/quote", json={"snapshot": _snapshot()})
        data = resp.json()["data"]
        assert data["expected_a"] == 0
        assert data["expected_b_display"] == "0.0"


class TestPreflight:
    async def test_deposit_ok(self, client):
        resp = await client.post(
            f"{BASE}/deposit/preflight",
            json={"snapshot": _snapshot(), "draft": {"amount_a": "1.5", "amount_b": "75"}},
        )
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["amount_a"] == 15 * 10**17
        assert data["amount_b"] == 75 * ONE_B

    async def test_deposit_ratio_mismatch(self, client):
        resp = await client.post(
            f"{BASE}/deposit/preflight",
            json={"snapshot": _snapshot(), "draft": {"amount_a": "1", "amount_b": "40"}},
        )
        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 2001
        assert body["data"] is None

    async def test_deposit_missing_amounts(self, client):
        resp = await client.post(
            f"{BASE}/deposit/preflight",
            json={"snapshot": _snapshot(), "draft": {"amount_a": "1"}},
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 1001

    async def test_withdraw_ok(self, client):
        resp = await client.post(
            f"{BASE}/withdraw/preflight",
            json={"snapshot": _snapshot(), "remove_amount": "10"},
        )
        assert resp.json()["data"]["lp_amount"] == 10 * ONE_LP

    async def test_withdraw_over_balance(self, client):
        resp = await client.post(
            f"{BASE}/withdraw/preflight",
            json={"snapshot": _snapshot(), "remove_amount": "10.5"},
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 1003

    async def test_withdraw_invalid_amount(self, client):
        resp = await client.post(
            f"{BASE}/withdraw/preflight",
            json={"snapshot": _snapshot(), "remove_amount": "0"},
        )
        assert resp.json()["code"] == 1002

    async def test_deposit_sub_unit_amount(self, client):
        snap = _snapshot(reserve_a=0, reserve_b=0, total_liquidity=0, user_liquidity=0)
        resp = await client.post(
            f"{BASE}/deposit/preflight",
            json={"snapshot": snap, "draft": {"amount_a": "0.0000001", "amount_b": "0.0000001"}},
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == 1001


class TestSnapshotBounds:
    async def test_amount_above_uint256_rejected(self, client):
        snap = _snapshot(reserve_a=1, reserve_b=10**400)
        resp = await client.post(f"{BASE}/panel", json={"snapshot": snap})
        assert resp.status_code == 422

    async def test_uint256_max_accepted(self, client):
        snap = _snapshot(reserve_a=1, reserve_b=2**256 - 1)
        resp = await client.post(f"{BASE}/panel", json={"snapshot": snap})
        assert resp.status_code == 200
        assert resp.json()["data"]["ratio_display"].startswith("1 TKA = ")
