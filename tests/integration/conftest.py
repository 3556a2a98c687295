"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database with the full schema
- Unit-of-work factory bound to that database
- Test client for the FastAPI app with the unit of work overridden
- Helpers to register customers and move money through the API
"""

from typing import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import get_uow_factory
from src.infrastructure.database import Base
from src.infrastructure.repositories import SqlAlchemyUnitOfWork


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest.fixture
def uow_factory(session_factory) -> Callable[[], SqlAlchemyUnitOfWork]:
    """A new unit of work per call, all sharing the in-memory database."""
    return lambda: SqlAlchemyUnitOfWork(session_factory)


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(uow_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client backed by the in-memory database.

    Every service built by the app's dependency providers gets the test
    unit-of-work factory.
    """
    app.dependency_overrides[get_uow_factory] = lambda: uow_factory

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def register_customer(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """Register a customer; returns {"user_id", "account_id"}."""

    async def _register(kyc_verified: bool = False, email: str | None = None) -> dict:
        response = await client.post(
            "/v1/customers",
            json={
                "email": email or f"user-{uuid4().hex[:10]}@example.com",
                "first_name": "Ada",
                "last_name": "Obi",
                "kyc_verified": kyc_verified,
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return {
            "user_id": data["customer"]["user_id"],
            "account_id": data["account"]["account_id"],
        }

    return _register


@pytest.fixture
def deposit(client: AsyncClient) -> Callable[..., Awaitable[dict]]:
    """Deposit into an account through the API; returns the response body."""

    async def _deposit(customer: dict, amount: str) -> dict:
        response = await client.post(
            f"/v1/savings/{customer['account_id']}/deposit",
            json={"user_id": customer["user_id"], "amount": amount},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _deposit


@pytest.fixture
def approved_credit(
    client: AsyncClient,
    register_customer,
    deposit,
) -> Callable[..., Awaitable[dict]]:
    """
    Create an auto-approved credit for a fresh, well-scored customer.

    10,000 in savings and verified KYC put the score above the
    auto-approve threshold.
    """

    async def _approved(amount: str = "5000", tenure: int = 6) -> dict:
        customer = await register_customer(kyc_verified=True)
        await deposit(customer, "10000")
        response = await client.post(
            "/v1/credits",
            json={"user_id": customer["user_id"], "amount": amount, "tenure": tenure},
        )
        assert response.status_code == 201, response.text
        credit = response.json()
        assert credit["status"] == "APPROVED"
        return {**customer, "credit": credit, "credit_id": credit["credit_id"]}

    return _approved


@pytest.fixture
def active_credit(client: AsyncClient, approved_credit) -> Callable[..., Awaitable[dict]]:
    """An auto-approved credit moved through disbursement to ACTIVE."""

    async def _active(amount: str = "5000", tenure: int = 6) -> dict:
        data = await approved_credit(amount, tenure)
        credit_id = data["credit_id"]
        response = await client.post(f"/v1/admin/credits/{credit_id}/disburse")
        assert response.status_code == 200, response.text
        response = await client.post(f"/v1/admin/credits/{credit_id}/activate")
        assert response.status_code == 200, response.text
        data["credit"] = response.json()
        return data

    return _active
