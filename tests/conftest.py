"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from wagebook.domain.models import PaySettings
from wagebook.infra.db import Base
from wagebook.services.calculation_service import CalculationService


@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def service() -> CalculationService:
    return CalculationService()


@pytest.fixture
def hourly_settings() -> PaySettings:
    """20.00 per hour, lenient history (missing weeks count as zero)"""
    return PaySettings(
        hourly_rate_cents=2000,
        strict_history_required=False,
        count_missing_as_zero=True
    )
