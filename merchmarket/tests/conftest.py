"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import Pool, StaticPool

from merchmarket.app.main import create_app
from merchmarket.app.core.config import Settings
from merchmarket.app.core.security import PasswordHasher
from merchmarket.app.db.session import get_db, Base
from merchmarket.app.models.user import User
from merchmarket.app.models.merch import Merch
from merchmarket.app.models.purchase import Purchase
from merchmarket.app.models.ledger_entry import LedgerEntry
from merchmarket.app.services.catalog import seed_catalog

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_SECRET_KEY = "test-secret-key-for-the-merch-market-suite"


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

test_settings = Settings(
    jwt_secret_key=TEST_SECRET_KEY,
    bcrypt_rounds=4,
    seed_catalog_on_startup=False,
    log_level="WARNING",
)

# Low work factor keeps the suite fast
hasher = PasswordHasher(rounds=4)


@pytest.fixture(scope="session")
def test_app():
    """Application wired to the in-memory database."""
    app = create_app(test_settings)

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides = {}


@pytest.fixture(autouse=True)
async def setup_database():
    """Create tables and seed the catalog before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestingSessionLocal() as session:
        await seed_catalog(session)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    # Fresh connection per test so it is bound to the current event loop
    await engine.dispose()


@pytest.fixture
async def client(test_app):
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def make_user(db_session):
    """Factory inserting a user with a known password and balance."""
    async def _make_user(username: str, coins: int = 1000, password: str = "password123") -> User:
        user = User(
            username=username,
            hashed_password=hasher.hash(password),
            coins=coins
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers(test_app):
    """Build an Authorization header for a username."""
    def _auth_headers(username: str) -> dict:
        token = test_app.state.token_signer.create_access_token(username)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
