from collections.abc import AsyncGenerator, Callable
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mentorconnect.api.deps import get_clock
from mentorconnect.database import Base, get_db
from mentorconnect.main import app
from mentorconnect.scheduling.store import InMemoryRuleStore

test_engine = create_async_engine("sqlite+aiosqlite://", echo=False, poolclass=StaticPool)
test_session = async_sessionmaker(test_engine, expire_on_commit=False)

# Monday 2024-06-10, mid-morning
FIXED_NOW = datetime(2024, 6, 10, 9, 45)


async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as session:
        yield session


def override_get_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_clock] = override_get_clock


@pytest.fixture(autouse=True)
async def setup_db() -> AsyncGenerator[None, None]:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    async with test_session() as s:
        yield s


@pytest.fixture
def memory_store() -> InMemoryRuleStore:
    return InMemoryRuleStore()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
