"""
Pytest fixtures for VoteHub backend tests.
"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("AZURE_OPENAI_ENDPOINT", "")
os.environ.setdefault("AZURE_OPENAI_API_KEY", "")


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


# =============================================================================
# Storage backends
# =============================================================================


@pytest.fixture
async def memory_storage() -> Any:
    """Fresh in-memory storage."""
    from repositories.memory_storage import MemoryStorage

    storage = MemoryStorage()
    await storage.init()
    yield storage
    await storage.close()


@pytest.fixture
async def sql_storage(tmp_path: Path) -> Any:
    """SQL storage on a throwaway SQLite file."""
    from repositories.sql_storage import SqlStorage

    storage = SqlStorage(f"sqlite+aiosqlite:///{tmp_path / 'votehub_test.db'}")
    await storage.init()
    yield storage
    await storage.close()


@pytest.fixture(params=["memory", "sql"])
def storage(request: pytest.FixtureRequest) -> Any:
    """Every storage backend, so shared behaviour is checked on both."""
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
async def seeded_storage(storage: Any) -> Any:
    """Storage with the default categories."""
    from services.startup_seeder import seed_categories

    await seed_categories(storage)
    return storage


# =============================================================================
# Domain helpers
# =============================================================================


async def create_user(storage: Any, username: str = "alice", email: str | None = None) -> Any:
    """Insert a user directly, bypassing password hashing."""
    async with storage.session(write=True) as store:
        return await store.add_user(
            username=username,
            email=email or f"{username}@example.com",
            password_hash="not-a-real-hash",
        )


async def create_topic(
    storage: Any,
    author_id: int,
    title: str = "Best programming language?",
    options: tuple[str, ...] = ("Python", "Rust"),
    description: str | None = None,
    category_id: int | None = None,
) -> Any:
    """Create a topic through TopicService."""
    from services.topic_service import TopicService

    return await TopicService(storage).create_topic(
        author_id=author_id,
        title=title,
        description=description,
        category_id=category_id,
        option_texts=list(options),
    )


@pytest.fixture
async def user(storage: Any) -> Any:
    """A registered voter."""
    return await create_user(storage)


@pytest.fixture
async def topic(storage: Any, user: Any) -> Any:
    """A two-option topic authored by ``user``."""
    return await create_topic(storage, user.id)


# =============================================================================
# HTTP client
# =============================================================================


@pytest.fixture
async def app_storage() -> Any:
    """Seeded in-memory storage installed as the application's backend."""
    from repositories.memory_storage import MemoryStorage
    from repositories.provider import set_storage
    from services.startup_seeder import seed_all

    storage = MemoryStorage()
    await storage.init()
    await seed_all(storage)
    set_storage(storage)
    yield storage
    set_storage(None)


@pytest.fixture
async def app(app_storage: Any) -> Any:
    """Create FastAPI application for testing."""
    from main import app as fastapi_app

    return fastapi_app


@pytest.fixture
async def client(app: Any) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


async def register(client: AsyncClient, username: str = "alice", password: str = "secret123") -> dict[str, Any]:
    """Register through the API and return the token response body."""
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token_response: dict[str, Any]) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_response['access_token']}"}


@pytest.fixture
def make_user() -> Any:
    return create_user


@pytest.fixture
def make_topic() -> Any:
    return create_topic


@pytest.fixture
def register_user() -> Any:
    return register


@pytest.fixture
def auth_header() -> Any:
    return bearer
