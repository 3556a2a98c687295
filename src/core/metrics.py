"""Prometheus metrics for the credit ledger service.

Metrics are organized into two categories:

Business Metrics (for Product/Finance):
- credit_ledger_credit_requests_total: Credit requests by outcome
- credit_ledger_credit_transitions_total: Lifecycle moves by target status
- credit_ledger_credit_score: Distribution of scores at request time
- credit_ledger_ledger_entries_total: Ledger entries by type
- credit_ledger_ledger_amount_total: Money moved by entry type
- credit_ledger_repayments_total: Repayments by result (partial, completed)

Technical Metrics (for Engineering/SRE):
- credit_ledger_operation_latency_seconds: Service operation latency
- credit_ledger_conflict_retries_total: Transactions re-run after a conflict
- credit_ledger_notifications_total: Inbox deliveries by status
- credit_ledger_http_requests_total: HTTP requests by endpoint/status
"""

import time
from contextlib import contextmanager
from decimal import Decimal
from typing import Generator

from prometheus_client import Counter, Histogram, REGISTRY, generate_latest
from prometheus_client.exposition import CONTENT_TYPE_LATEST


# =============================================================================
# Business Metrics (Product/Finance dashboards)
# =============================================================================

credit_requests_total = Counter(
    "credit_ledger_credit_requests_total",
    "Total number of credit requests",
    ["outcome"],  # approved, pending
)

credit_transitions_total = Counter(
    "credit_ledger_credit_transitions_total",
    "Credit lifecycle transitions by target status",
    ["status"],
)

credit_score_histogram = Histogram(
    "credit_ledger_credit_score",
    "Credit score at request time",
    buckets=[600, 650, 700, 750, 800, 850],
)

ledger_entries_total = Counter(
    "credit_ledger_ledger_entries_total",
    "Ledger entries written by type",
    ["type"],
)

ledger_amount_total = Counter(
    "credit_ledger_ledger_amount_total",
    "Money moved through the ledger by type (account currency units)",
    ["type"],
)

repayments_total = Counter(
    "credit_ledger_repayments_total",
    "Credit repayments by result",
    ["result"],  # partial, completed
)


# =============================================================================
# Technical Metrics (Engineering/SRE dashboards)
# =============================================================================

operation_latency = Histogram(
    "credit_ledger_operation_latency_seconds",
    "Service operation latency in seconds",
    ["operation"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

conflict_retries = Counter(
    "credit_ledger_conflict_retries_total",
    "Transactions re-run after a concurrent-write conflict",
    ["operation"],
)

notifications_total = Counter(
    "credit_ledger_notifications_total",
    "In-app notification deliveries",
    ["status"],  # sent, failed
)

http_requests_total = Counter(
    "credit_ledger_http_requests_total",
    "Total HTTP requests by endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_latency = Histogram(
    "credit_ledger_http_request_latency_seconds",
    "HTTP request latency by endpoint",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)


# =============================================================================
# Helper Functions
# =============================================================================

def record_credit_request(approved: bool, credit_score: int) -> None:
    """Record a credit request decision."""
    outcome = "approved" if approved else "pending"
    credit_requests_total.labels(outcome=outcome).inc()
    credit_score_histogram.observe(credit_score)


def record_credit_transition(status: str) -> None:
    credit_transitions_total.labels(status=status).inc()


def record_ledger_entry(entry_type: str, amount: Decimal) -> None:
    """Record a written ledger entry and the amount it moved."""
    ledger_entries_total.labels(type=entry_type).inc()
    ledger_amount_total.labels(type=entry_type).inc(float(amount))


def record_repayment(completed: bool) -> None:
    repayments_total.labels(result="completed" if completed else "partial").inc()


def record_conflict_retry(operation: str) -> None:
    """Record a transaction re-run after a conflict."""
    conflict_retries.labels(operation=operation).inc()


def record_notification(sent: bool) -> None:
    notifications_total.labels(status="sent" if sent else "failed").inc()


@contextmanager
def track_operation_latency(operation: str) -> Generator[None, None, None]:
    """Context manager to track service operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        duration = time.perf_counter() - start
        operation_latency.labels(operation=operation).observe(duration)


def record_http_request(method: str, endpoint: str, status: int, duration: float) -> None:
    """Record an HTTP request."""
    http_requests_total.labels(method=method, endpoint=endpoint, status=str(status)).inc()
    http_request_latency.labels(method=method, endpoint=endpoint).observe(duration)


def get_metrics() -> bytes:
    """Get current metrics in Prometheus format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for metrics response."""
    return CONTENT_TYPE_LATEST
