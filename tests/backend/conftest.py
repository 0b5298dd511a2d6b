import os
import uuid

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ.setdefault("JWT_SECRET", "test-secret-for-pytest-only-0123456789")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from brandmate.client.api import ApiClient
from brandmate.client.session import AuthOrchestrator, SessionContext
from brandmate.client.storage import MemoryStorage, SessionStore
from brandmate.core import db as db_module
from brandmate.core.security import hash_password
from brandmate.main import app
from brandmate.models.user import Role, User


db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

BASE_URL = "http://testserver"


@pytest_asyncio.fixture
async def db():
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as async_client:
        yield async_client


@pytest.fixture
def api_client(db) -> ApiClient:
    """brandmate's own client, talking to the app in-process."""
    return ApiClient(base_url=BASE_URL, timeout=5, transport=ASGITransport(app=app))


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def auth(api_client, memory_storage) -> AuthOrchestrator:
    return AuthOrchestrator(api_client, SessionStore(memory_storage), SessionContext())


@pytest_asyncio.fixture
async def create_admin(db):
    """
    Factory fixture to create admin users directly via ORM for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        suffix = uuid.uuid4().hex[:6]
        user = await User.create(
            username=f"admin_{suffix}",
            email=f"admin_{suffix}@example.com",
            password_hash=hash_password(password),
            role=Role.ADMIN,
        )
        return user, password

    return _create_admin


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create regular users directly.
    """

    async def _create_user(password: str = "UserPass!23", is_active: bool = True) -> tuple[User, str]:
        suffix = uuid.uuid4().hex[:6]
        user = await User.create(
            username=f"user_{suffix}",
            email=f"{suffix}@example.com",
            password_hash=hash_password(password),
            role=Role.USER,
            is_active=is_active,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(login: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/auth/login",
            json={"login": login, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
