"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for API testing
- Test database sessions (in-memory SQLite unless DATABASE_TEST_URL is set)
- A document-service client backed by a mock transport
- Common DTO test data
"""

import os

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from patient_service import models  # noqa: F401
from patient_service.clients.dms_core import SitesApiClient, get_sites_client
from patient_service.database import Base, get_db
from patient_service.main import app

DMS_BASE_URL = "http://dms.test/alfresco/api/-default-/public/alfresco/versions/1"

SITES = {
    "patient-1": {
        "entry": {
            "id": "patient-1",
            "guid": "8ac18731-601b-4bb4-be5c-c2b1a0c0b0e2",
            "title": "Patient 1",
            "visibility": "PRIVATE",
        }
    },
}


def dms_handler(request: httpx.Request) -> httpx.Response:
    """Minimal stand-in for the Alfresco Sites API."""
    path = request.url.path.split("/versions/1", 1)[-1]
    if request.method == "GET" and path == "/sites":
        entries = list(SITES.values())
        return httpx.Response(
            200,
            json={
                "list": {
                    "pagination": {
                        "count": len(entries),
                        "hasMoreItems": False,
                        "totalItems": len(entries),
                        "skipCount": int(request.url.params.get("skipCount", 0)),
                        "maxItems": int(request.url.params.get("maxItems", 100)),
                    },
                    "entries": entries,
                }
            },
        )
    if request.method == "GET" and path.startswith("/sites/"):
        site_id = path.split("/")[2]
        if site_id in SITES:
            return httpx.Response(200, json=SITES[site_id])
        return httpx.Response(
            404,
            json={"error": {"statusCode": 404, "briefSummary": f"{site_id} was not found"}},
        )
    return httpx.Response(405)


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with automatic schema management.

    Creates all tables before tests, drops them after.
    Uses DATABASE_TEST_URL env var if set, otherwise an in-memory SQLite
    database shared through a single connection.
    """
    db_url = os.environ.get("DATABASE_TEST_URL")
    if db_url:
        engine = create_async_engine(db_url, echo=False)
    else:
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncSession:
    """Create test database session with automatic rollback.

    Each test gets a fresh session that rolls back on completion,
    ensuring test isolation.
    """
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()


# =============================================================================
# Document Service Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def sites_client():
    """SitesApiClient answering from ``dms_handler`` instead of the network."""
    client = SitesApiClient(
        base_url=DMS_BASE_URL,
        username="admin",
        password="secret",
        transport=httpx.MockTransport(dms_handler),
    )
    yield client
    await client.aclose()


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(test_engine, sites_client):
    """Async test client for FastAPI app with test database.

    Overrides the app's get_db dependency to use the test database, and the
    document-service client with the mock-transport one.
    """
    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_sites_client] = lambda: sites_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_sites_client, None)


# =============================================================================
# Sample payloads
# =============================================================================


@pytest.fixture
def sample_medical_case() -> dict:
    """MedicalCase create payload (camelCase, no id)."""
    return {
        "dmsId": "X1",
        "location": "Ward A",
        "createdDate": "2024-03-01",
    }


@pytest.fixture
def sample_patient() -> dict:
    """Patient create payload (camelCase, no id)."""
    return {
        "image": "iVBORw0KGgo=",
        "imageContentType": "image/png",
        "phoneNumber": 9847012345,
        "idpCode": "idp-0001",
        "dob": "1988-07-14",
        "location": "Kochi",
        "createdDate": "2024-02-10",
        "dmsId": "site-patient-0001",
    }
