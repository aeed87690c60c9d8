import os

# Settings are read at import time: configure the environment first
os.environ["DATABASE_URL"] = "sqlite://:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPSTREAM_API_KEY"] = "test-upstream-key"
os.environ["UPSTREAM_API_URL"] = "https://upstream.test/v1"
os.environ.pop("ADMIN_PASSWORD", None)

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from gateway.core import db as db_module
from gateway.core.security import hash_password
from gateway.main import app
from gateway.models.generation_model import GenerationModel
from gateway.models.user import Role, User


TEST_DB_URL = "sqlite://:memory:"
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database without an HTTP client, for service-level tests.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create users directly via ORM (any role, any balance).
    """

    async def _create_user(
        password: str = "UserPass!23",
        role: Role = Role.REGULAR,
        money: int = 1000,
    ) -> tuple[User, str]:
        user = await User.create(
            first_name="Ivan",
            last_name="Petrov",
            email=f"{uuid.uuid4().hex[:8]}@example.com",
            password_hash=hash_password(password),
            role=role,
            money=money,
        )
        return user, password

    return _create_user


@pytest_asyncio.fixture
async def create_admin(create_user):
    """
    Factory fixture to create admin users for privileged endpoints.
    """

    async def _create_admin(password: str = "AdminPass!23") -> tuple[User, str]:
        return await create_user(password=password, role=Role.ADMIN)

    return _create_admin


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post("/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        token = resp.json()["token"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers


@pytest_asyncio.fixture
async def create_model(db):
    """
    Factory fixture to seed a generation model with a given rate.
    """

    async def _create_model(name: str = "gpt-4", token_rate: int = 2) -> GenerationModel:
        return await GenerationModel.create(name=name, token_rate=token_rate)

    return _create_model
