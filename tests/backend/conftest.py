import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.config import settings
from app.core import db as db_module
from app.core.security import TokenIssuer
from app.main import app
from app.models.user import User


TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

TEST_JWT_SECRET = "test-secret"
app.state.token_issuer = TokenIssuer(TEST_JWT_SECRET)


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture
def issuer() -> TokenIssuer:
    return app.state.token_issuer


@pytest.fixture(autouse=True)
def upload_dir(tmp_path, monkeypatch):
    """Keep uploaded files inside the test's temporary directory."""
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "file_directory", str(target))
    return target


@pytest_asyncio.fixture
async def db():
    """
    Fresh database for service-level tests (no HTTP client).
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


async def _make_user(email: str, password: str | None, is_admin: bool, is_banned: bool = False) -> User:
    user = User(
        email=email,
        nickname=f"{email.split('@')[0]}_{uuid.uuid4().hex[:4]}",
        is_admin=is_admin,
        is_banned=is_banned,
    )
    user.set_password(password)
    await user.save()
    return user


@pytest_asyncio.fixture
async def create_admin(db):
    """
    Factory fixture to create admin accounts directly via ORM (admins are
    never created through the API).
    """

    async def _create_admin(password: str = "AdminPass!23", email: str | None = None) -> tuple[User, str]:
        email = email or f"admin_{uuid.uuid4().hex[:6]}@example.com"
        return await _make_user(email, password, is_admin=True), password

    return _create_admin


@pytest_asyncio.fixture
async def create_user(db):
    """
    Factory fixture to create regular accounts directly.
    """

    async def _create_user(
        password: str | None = "UserPass!23",
        email: str | None = None,
        is_banned: bool = False,
    ) -> tuple[User, str | None]:
        email = email or f"user_{uuid.uuid4().hex[:6]}@example.com"
        return await _make_user(email, password, is_admin=False, is_banned=is_banned), password

    return _create_user


@pytest_asyncio.fixture
async def auth_header_factory(client):
    """
    Helper fixture to obtain Authorization headers via the login endpoint.
    """

    async def _get_headers(email: str, password: str) -> dict[str, str]:
        resp = await client.post(
            "/api/v1/users/login",
            json={"email": email, "password": password},
        )
        assert resp.status_code == 200, resp.text
        token = resp.json()["jwt"]
        return {"Authorization": f"Bearer {token}"}

    return _get_headers
