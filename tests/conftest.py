"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.database import build_engine, get_db, init_db  # noqa: E402
from app.models.client import Client  # noqa: E402
from app.models.enums import FilingStatus, IncomeType  # noqa: E402
from app.services.store import ProfileStore  # noqa: E402


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database with the staff directory seeded."""
    test_engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(bind=test_engine, seed=True)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def store(session_factory):
    async with session_factory() as session:
        yield ProfileStore(session)


@pytest_asyncio.fixture
async def api(session_factory):
    """HTTP client against the app, bound to the test database."""
    from main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def w2_client():
    """Single filer with W-2 wages only."""
    return Client(
        id="client-w2",
        first_name="Alex",
        last_name="Rivera",
        email="alex@example.com",
        filing_status=FilingStatus.SINGLE,
        income_types=[IncomeType.WAGES_W2.value],
    )


@pytest.fixture
def crypto_client():
    """W-2 earner who also trades crypto."""
    return Client(
        id="client-crypto",
        first_name="Sam",
        last_name="Lee",
        email="sam@example.com",
        filing_status=FilingStatus.SINGLE,
        income_types=[IncomeType.WAGES_W2.value, IncomeType.CRYPTO_INCOME.value],
        has_crypto=True,
    )


@pytest.fixture
def intake_answers():
    """One answer per question for a W-2 plus Uber driver who finishes the script."""
    return [
        # personal_info
        "Jane Doe",
        "jane@example.com",
        "555-123-4567",
        "03/15/1985",
        "123 Main St, Springfield, IL 62701",
        # filing_status
        "Married filing jointly",
        # dependents
        "No",
        # employment
        "Acme Corp (W-2) and Uber",
        "W-2 employee",
        "No",
        # income_types
        "Stock dividends",
        # deductions
        "Yes, I pay mortgage interest",
        "Yes, about $500 to charity",
        "No",
        "I contribute to my 401k",
        "No",
        # special_situations
        "No",
        "No",
        "No",
        "No",
        # document_upload
        "Yes",
        # review
        "Confirmed",
    ]
