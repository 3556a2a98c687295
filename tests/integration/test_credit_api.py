"""
Integration tests for the credit lifecycle API.

These tests verify:
1. POST /v1/credits - scoring, pricing, auto-approval and request bounds
2. Admin approve / reject / disburse / activate / default transitions
3. POST /v1/credits/{id}/repay - balance invariants and completion
4. GET /v1/credits/{id}/schedule - projected installments
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient


async def request_credit(client: AsyncClient, user_id: str, amount: str = "10000", tenure: int = 12):
    return await client.post(
        "/v1/credits",
        json={"user_id": user_id, "amount": amount, "tenure": tenure},
    )


# =============================================================================
# Credit Request Tests
# =============================================================================

class TestCreditRequest:
    @pytest.mark.asyncio
    async def test_new_user_stays_pending_at_highest_rate(
        self,
        client: AsyncClient,
        register_customer,
    ):
        """No history: score 600, rate 18%, waits for review."""
        customer = await register_customer()

        response = await request_credit(client, customer["user_id"], "10000", 12)

        assert response.status_code == 201
        credit = response.json()
        assert credit["status"] == "PENDING"
        assert credit["credit_score"] == 600
        assert Decimal(credit["interest_rate"]) == Decimal("18.0")
        assert Decimal(credit["principal"]) == Decimal("10000")
        assert Decimal(credit["amount_paid"]) == Decimal("0")
        assert Decimal(credit["outstanding_balance"]) == Decimal(credit["total_repayable"])
        assert credit["approved_at"] is None

    @pytest.mark.asyncio
    async def test_well_scored_user_is_auto_approved(
        self,
        client: AsyncClient,
        register_customer,
        deposit,
    ):
        """Savings 10,000 and KYC: score >= 750, rate 10%, approved at once."""
        customer = await register_customer(kyc_verified=True)
        await deposit(customer, "10000")

        response = await request_credit(client, customer["user_id"], "5000", 6)

        assert response.status_code == 201
        credit = response.json()
        assert credit["status"] == "APPROVED"
        assert 750 <= credit["credit_score"] < 800
        assert Decimal(credit["interest_rate"]) == Decimal("10.0")
        assert credit["approved_at"] is not None
        assert credit["approved_by"] is None
        assert credit["next_payment_date"] is not None
        assert Decimal(credit["total_repayable"]) == Decimal(credit["monthly_payment"]) * 6

    @pytest.mark.asyncio
    async def test_upper_amount_bound(self, client: AsyncClient, register_customer):
        customer = await register_customer()

        too_much = await request_credit(client, customer["user_id"], "1000001", 12)
        assert too_much.status_code == 400
        assert too_much.json()["error"] == "INVALID_REQUEST"

        at_limit = await request_credit(client, customer["user_id"], "1000000", 12)
        assert at_limit.status_code == 201

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "amount,tenure",
        [("99.99", 12), ("500", 0), ("500", 61), ("500.001", 12), ("1e30", 12)],
    )
    async def test_invalid_requests_rejected(
        self,
        client: AsyncClient,
        register_customer,
        amount,
        tenure,
    ):
        customer = await register_customer()

        response = await request_credit(client, customer["user_id"], amount, tenure)

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body,field",
        [
            ({"amount": "5000", "tenure": "six"}, "tenure"),
            ({"amount": "NaN", "tenure": 6}, "amount"),
            ({"tenure": 6}, "amount"),
        ],
    )
    async def test_malformed_body_uses_error_contract(
        self,
        client: AsyncClient,
        register_customer,
        body,
        field,
    ):
        customer = await register_customer()

        response = await client.post(
            "/v1/credits",
            json={"user_id": customer["user_id"], **body},
            headers={"X-Request-ID": "req-malformed"},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "INVALID_REQUEST"
        assert field in data["message"]
        assert data["request_id"] == "req-malformed"
        assert "detail" not in data

    @pytest.mark.asyncio
    async def test_malformed_query_uses_error_contract(self, client: AsyncClient):
        response = await client.get("/v1/admin/credits", params={"take": 0})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient):
        response = await request_credit(client, "ghost")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_second_pending_request_rejected(self, client: AsyncClient, register_customer):
        customer = await register_customer()
        first = await request_credit(client, customer["user_id"])
        assert first.json()["status"] == "PENDING"

        second = await request_credit(client, customer["user_id"], "200", 3)

        assert second.status_code == 409
        assert second.json()["error"] == "DUPLICATE_PENDING_CREDIT"

        listing = await client.get("/v1/credits", params={"user_id": customer["user_id"]})
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_new_request_allowed_after_rejection(
        self,
        client: AsyncClient,
        register_customer,
    ):
        customer = await register_customer()
        first = (await request_credit(client, customer["user_id"])).json()
        await client.post(
            f"/v1/admin/credits/{first['credit_id']}/reject",
            json={"admin_id": "admin_1", "reason": "Thin file"},
        )

        second = await request_credit(client, customer["user_id"], "200", 3)

        assert second.status_code == 201


# =============================================================================
# Admin Transition Tests
# =============================================================================

class TestAdminTransitions:
    @pytest.mark.asyncio
    async def test_approve_pending_credit(self, client: AsyncClient, register_customer):
        customer = await register_customer()
        credit = (await request_credit(client, customer["user_id"])).json()

        response = await client.post(
            f"/v1/admin/credits/{credit['credit_id']}/approve",
            json={"admin_id": "admin_1"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "APPROVED"
        assert data["approved_by"] == "admin_1"
        assert data["approved_at"] is not None

    @pytest.mark.asyncio
    async def test_approve_twice_is_invalid_transition(self, client: AsyncClient, register_customer):
        customer = await register_customer()
        credit = (await request_credit(client, customer["user_id"])).json()
        url = f"/v1/admin/credits/{credit['credit_id']}/approve"
        await client.post(url, json={"admin_id": "admin_1"})

        response = await client.post(url, json={"admin_id": "admin_2"})

        assert response.status_code == 409
        assert response.json()["error"] == "INVALID_STATE_TRANSITION"

    @pytest.mark.asyncio
    async def test_reject_records_reason(self, client: AsyncClient, register_customer):
        customer = await register_customer()
        credit = (await request_credit(client, customer["user_id"])).json()

        response = await client.post(
            f"/v1/admin/credits/{credit['credit_id']}/reject",
            json={"admin_id": "admin_1", "reason": "Insufficient history"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REJECTED"
        assert response.json()["rejection_reason"] == "Insufficient history"

    @pytest.mark.asyncio
    async def test_cannot_reject_approved_credit(self, client: AsyncClient, approved_credit):
        data = await approved_credit()

        response = await client.post(
            f"/v1/admin/credits/{data['credit_id']}/reject",
            json={"admin_id": "admin_1", "reason": "Changed my mind"},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_reject_requires_reason(self, client: AsyncClient, register_customer):
        customer = await register_customer()
        credit = (await request_credit(client, customer["user_id"])).json()

        response = await client.post(
            f"/v1/admin/credits/{credit['credit_id']}/reject",
            json={"admin_id": "admin_1", "reason": ""},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_disburse_without_account_writes_credit_entry(
        self,
        client: AsyncClient,
        approved_credit,
    ):
        data = await approved_credit()

        response = await client.post(f"/v1/admin/credits/{data['credit_id']}/disburse")

        assert response.status_code == 200
        assert response.json()["status"] == "DISBURSED"
        assert response.json()["disbursed_at"] is not None

        transactions = await client.get(
            "/v1/transactions",
            params={"user_id": data["user_id"], "type": "CREDIT_DISBURSEMENT"},
        )
        entries = transactions.json()
        assert len(entries) == 1
        assert entries[0]["credit_id"] == data["credit_id"]
        assert entries[0]["account_id"] is None
        assert Decimal(entries[0]["amount"]) == Decimal("5000")

    @pytest.mark.asyncio
    async def test_disburse_into_savings_account(self, client: AsyncClient, approved_credit):
        data = await approved_credit()

        response = await client.post(
            f"/v1/admin/credits/{data['credit_id']}/disburse",
            json={"account_id": data["account_id"]},
        )

        assert response.status_code == 200
        balance = await client.get(
            f"/v1/savings/{data['account_id']}/balance",
            params={"user_id": data["user_id"]},
        )
        assert Decimal(balance.json()["balance"]) == Decimal("15000")

    @pytest.mark.asyncio
    async def test_disburse_into_foreign_account_fails_atomically(
        self,
        client: AsyncClient,
        approved_credit,
        register_customer,
    ):
        data = await approved_credit()
        stranger = await register_customer()

        response = await client.post(
            f"/v1/admin/credits/{data['credit_id']}/disburse",
            json={"account_id": stranger["account_id"]},
        )

        assert response.status_code == 404
        credit = await client.get(f"/v1/admin/credits/{data['credit_id']}")
        assert credit.json()["status"] == "APPROVED"

    @pytest.mark.asyncio
    async def test_disburse_pending_credit_is_invalid(self, client: AsyncClient, register_customer):
        customer = await register_customer()
        credit = (await request_credit(client, customer["user_id"])).json()

        response = await client.post(f"/v1/admin/credits/{credit['credit_id']}/disburse")

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_activate_then_default(self, client: AsyncClient, active_credit):
        data = await active_credit()
        assert data["credit"]["status"] == "ACTIVE"

        response = await client.post(f"/v1/admin/credits/{data['credit_id']}/default")

        assert response.status_code == 200
        assert response.json()["status"] == "DEFAULTED"

    @pytest.mark.asyncio
    async def test_unknown_credit(self, client: AsyncClient):
        response = await client.post(
            f"/v1/admin/credits/{uuid4()}/approve",
            json={"admin_id": "admin_1"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "CREDIT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_pending_listing_and_stats(self, client: AsyncClient, register_customer, approved_credit):
        for _ in range(3):
            customer = await register_customer()
            await request_credit(client, customer["user_id"])
        await approved_credit()

        pending = await client.get("/v1/admin/credits/pending", params={"take": 2})
        page = pending.json()
        assert page["total"] == 3
        assert len(page["credits"]) == 2
        assert all(c["status"] == "PENDING" for c in page["credits"])

        stats = (await client.get("/v1/admin/credits/stats")).json()
        assert stats["total"] == 4
        assert stats["pending"] == 3
        assert stats["approved"] == 1

        approved = await client.get("/v1/admin/credits", params={"status": "APPROVED"})
        assert approved.json()["total"] == 1


# =============================================================================
# Repayment Tests
# =============================================================================

class TestRepayment:
    @pytest.mark.asyncio
    async def test_partial_repayment_keeps_invariant(self, client: AsyncClient, active_credit):
        data = await active_credit()
        payment = data["credit"]["monthly_payment"]

        response = await client.post(
            f"/v1/credits/{data['credit_id']}/repay",
            json={"user_id": data["user_id"], "amount": payment},
        )

        assert response.status_code == 200
        body = response.json()
        credit = body["credit"]
        assert credit["status"] == "ACTIVE"
        assert Decimal(credit["amount_paid"]) == Decimal(payment)
        assert (
            Decimal(credit["amount_paid"]) + Decimal(credit["outstanding_balance"])
            == Decimal(credit["total_repayable"])
        )
        assert body["transaction"]["type"] == "CREDIT_REPAYMENT"
        assert body["transaction"]["reference"].startswith("REP-")
        assert body["transaction"]["credit_id"] == data["credit_id"]

    @pytest.mark.asyncio
    async def test_full_repayment_completes_credit(self, client: AsyncClient, active_credit):
        data = await active_credit()
        total = data["credit"]["total_repayable"]

        response = await client.post(
            f"/v1/credits/{data['credit_id']}/repay",
            json={"user_id": data["user_id"], "amount": total},
        )

        assert response.status_code == 200
        credit = response.json()["credit"]
        assert Decimal(credit["outstanding_balance"]) == Decimal("0")
        assert credit["status"] == "COMPLETED"
        assert credit["next_payment_date"] is None

    @pytest.mark.asyncio
    async def test_over_repayment_rejected_balance_unchanged(self, client: AsyncClient, active_credit):
        data = await active_credit()
        before = data["credit"]["outstanding_balance"]
        too_much = str(Decimal(before) + Decimal("1000"))

        response = await client.post(
            f"/v1/credits/{data['credit_id']}/repay",
            json={"user_id": data["user_id"], "amount": too_much},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "REPAYMENT_EXCEEDS_BALANCE"
        credit = await client.get(
            f"/v1/credits/{data['credit_id']}",
            params={"user_id": data["user_id"]},
        )
        assert Decimal(credit.json()["outstanding_balance"]) == Decimal(before)

    @pytest.mark.asyncio
    async def test_astronomical_repayment_is_invalid(self, client: AsyncClient, active_credit):
        data = await active_credit()

        response = await client.post(
            f"/v1/credits/{data['credit_id']}/repay",
            json={"user_id": data["user_id"], "amount": "1e30"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_repaying_approved_credit_not_allowed(self, client: AsyncClient, approved_credit):
        data = await approved_credit()

        response = await client.post(
            f"/v1/credits/{data['credit_id']}/repay",
            json={"user_id": data["user_id"], "amount": "10"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "CREDIT_NOT_ACTIVE"

    @pytest.mark.asyncio
    async def test_repayments_sum_to_amount_paid(self, client: AsyncClient, active_credit):
        data = await active_credit()
        url = f"/v1/credits/{data['credit_id']}/repay"
        for amount in ("100.00", "250.25", "0.75"):
            response = await client.post(url, json={"user_id": data["user_id"], "amount": amount})
            assert response.status_code == 200

        credit = (
            await client.get(f"/v1/credits/{data['credit_id']}", params={"user_id": data["user_id"]})
        ).json()

        assert Decimal(credit["amount_paid"]) == Decimal("351.00")
        assert sum(Decimal(r["amount"]) for r in credit["repayments"]) == Decimal("351.00")

        repayments = await client.get(
            "/v1/transactions",
            params={"user_id": data["user_id"], "type": "CREDIT_REPAYMENT"},
        )
        assert len(repayments.json()) == 3

    @pytest.mark.asyncio
    async def test_repaying_someone_elses_credit_is_not_found(
        self,
        client: AsyncClient,
        active_credit,
        register_customer,
    ):
        data = await active_credit()
        stranger = await register_customer()

        response = await client.post(
            f"/v1/credits/{data['credit_id']}/repay",
            json={"user_id": stranger["user_id"], "amount": "10"},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_repaid_credit_raises_next_score(
        self,
        client: AsyncClient,
        register_customer,
        deposit,
    ):
        """A completed credit adds 20 points to the next request."""
        customer = await register_customer(kyc_verified=True)
        await deposit(customer, "10000")
        first = (await request_credit(client, customer["user_id"], "1000", 1)).json()
        await client.post(f"/v1/admin/credits/{first['credit_id']}/disburse")
        await client.post(
            f"/v1/credits/{first['credit_id']}/repay",
            json={"user_id": customer["user_id"], "amount": first["total_repayable"]},
        )

        second = (await request_credit(client, customer["user_id"], "1000", 1)).json()

        assert second["credit_score"] > first["credit_score"] + 20


# =============================================================================
# Schedule Tests
# =============================================================================

class TestSchedule:
    @pytest.mark.asyncio
    async def test_schedule_sums_to_total(self, client: AsyncClient, approved_credit):
        data = await approved_credit("7777.77", 11)

        response = await client.get(
            f"/v1/credits/{data['credit_id']}/schedule",
            params={"user_id": data["user_id"]},
        )

        assert response.status_code == 200
        schedule = response.json()
        installments = schedule["installments"]
        assert len(installments) == 11
        assert sum(Decimal(i["amount"]) for i in installments) == Decimal(schedule["total_repayable"])
        assert all(i["status"] == "PENDING" for i in installments)
        assert [i["installment_number"] for i in installments] == list(range(1, 12))

    @pytest.mark.asyncio
    async def test_schedule_of_foreign_credit_is_not_found(
        self,
        client: AsyncClient,
        approved_credit,
        register_customer,
    ):
        data = await approved_credit()
        stranger = await register_customer()

        response = await client.get(
            f"/v1/credits/{data['credit_id']}/schedule",
            params={"user_id": stranger["user_id"]},
        )

        assert response.status_code == 404
