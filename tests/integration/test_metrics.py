"""
Integration tests for metrics tracking.

These tests verify:
1. Metrics endpoint returns valid Prometheus format
2. Business metrics (credit requests, ledger entries, repayments) are tracked
3. Technical metrics (HTTP requests, latency) are recorded
"""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from src.core.metrics import REGISTRY


def sample(name: str, labels: dict | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


# =============================================================================
# Metrics Endpoint Tests
# =============================================================================

class TestMetricsEndpoint:
    @pytest.mark.asyncio
    async def test_metrics_endpoint_returns_prometheus_format(self, client: AsyncClient):
        response = await client.get("/metrics")

        assert response.status_code == 200
        content_type = response.headers.get("content-type", "")
        assert "text/plain" in content_type or "text/openmetrics" in content_type
        assert "# HELP" in response.text

    @pytest.mark.asyncio
    async def test_metrics_include_service_metrics(self, client: AsyncClient):
        response = await client.get("/metrics")

        content = response.text
        assert "credit_ledger_credit_requests_total" in content
        assert "credit_ledger_ledger_entries_total" in content
        assert "credit_ledger_operation_latency_seconds" in content

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "credit-ledger-service"


# =============================================================================
# Business Metrics Tests
# =============================================================================

class TestBusinessMetrics:
    @pytest.mark.asyncio
    async def test_deposit_increments_ledger_counter(self, client: AsyncClient, register_customer, deposit):
        customer = await register_customer()
        before = sample("credit_ledger_ledger_entries_total", {"type": "DEPOSIT"})
        amount_before = sample("credit_ledger_ledger_amount_total", {"type": "DEPOSIT"})

        await deposit(customer, "12.50")

        assert sample("credit_ledger_ledger_entries_total", {"type": "DEPOSIT"}) == before + 1
        assert sample("credit_ledger_ledger_amount_total", {"type": "DEPOSIT"}) == pytest.approx(
            amount_before + 12.5
        )

    @pytest.mark.asyncio
    async def test_credit_request_outcomes(self, client: AsyncClient, register_customer, approved_credit):
        pending_before = sample("credit_ledger_credit_requests_total", {"outcome": "pending"})
        approved_before = sample("credit_ledger_credit_requests_total", {"outcome": "approved"})

        customer = await register_customer()
        await client.post(
            "/v1/credits",
            json={"user_id": customer["user_id"], "amount": "500", "tenure": 3},
        )
        await approved_credit()

        assert sample("credit_ledger_credit_requests_total", {"outcome": "pending"}) == pending_before + 1
        assert sample("credit_ledger_credit_requests_total", {"outcome": "approved"}) == approved_before + 1

    @pytest.mark.asyncio
    async def test_failed_withdrawal_writes_no_ledger_metric(
        self,
        client: AsyncClient,
        register_customer,
    ):
        customer = await register_customer()
        before = sample("credit_ledger_ledger_entries_total", {"type": "WITHDRAWAL"})

        response = await client.post(
            f"/v1/savings/{customer['account_id']}/withdraw",
            json={"user_id": customer["user_id"], "amount": "10"},
        )

        assert response.status_code == 400
        assert sample("credit_ledger_ledger_entries_total", {"type": "WITHDRAWAL"}) == before

    @pytest.mark.asyncio
    async def test_repayment_results(self, client: AsyncClient, active_credit):
        data = await active_credit()
        partial_before = sample("credit_ledger_repayments_total", {"result": "partial"})
        completed_before = sample("credit_ledger_repayments_total", {"result": "completed"})
        url = f"/v1/credits/{data['credit_id']}/repay"

        await client.post(url, json={"user_id": data["user_id"], "amount": "1.00"})
        remaining = (
            await client.get(f"/v1/credits/{data['credit_id']}", params={"user_id": data["user_id"]})
        ).json()["outstanding_balance"]
        await client.post(url, json={"user_id": data["user_id"], "amount": remaining})

        assert sample("credit_ledger_repayments_total", {"result": "partial"}) == partial_before + 1
        assert sample("credit_ledger_repayments_total", {"result": "completed"}) == completed_before + 1

    @pytest.mark.asyncio
    async def test_notifications_counted(self, client: AsyncClient, approved_credit):
        before = sample("credit_ledger_notifications_total", {"status": "sent"})

        await approved_credit()

        assert sample("credit_ledger_notifications_total", {"status": "sent"}) == before + 1


# =============================================================================
# Technical Metrics Tests
# =============================================================================

class TestTechnicalMetrics:
    @pytest.mark.asyncio
    async def test_http_requests_labelled_by_route_template(
        self,
        client: AsyncClient,
        register_customer,
    ):
        customer = await register_customer()
        labels = {"method": "GET", "endpoint": "/v1/customers/{user_id}", "status": "200"}
        before = sample("credit_ledger_http_requests_total", labels)

        await client.get(f"/v1/customers/{customer['user_id']}")

        assert sample("credit_ledger_http_requests_total", labels) == before + 1

    @pytest.mark.asyncio
    async def test_unknown_resource_still_labelled_by_template(self, client: AsyncClient):
        labels = {
            "method": "GET",
            "endpoint": "/v1/admin/credits/{credit_id}",
            "status": "404",
        }
        before = sample("credit_ledger_http_requests_total", labels)

        await client.get(f"/v1/admin/credits/{uuid4()}")
        await client.get(f"/v1/admin/credits/{uuid4()}")

        assert sample("credit_ledger_http_requests_total", labels) == before + 2

    @pytest.mark.asyncio
    async def test_operation_latency_observed(self, client: AsyncClient, register_customer, deposit):
        customer = await register_customer()
        before = sample("credit_ledger_operation_latency_seconds_count", {"operation": "deposit"})

        await deposit(customer, "5")

        assert sample("credit_ledger_operation_latency_seconds_count", {"operation": "deposit"}) == before + 1
