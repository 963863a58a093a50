# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator, Generator
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_media_signer, get_post_service
from app.main import app
from app.managers.rate_limiter import limiter
from app.managers.token_manager import create_access_token
from app.models import PostDB, UserDB
from app.schemas.auth import Role
from app.services import MediaSigner, PostService


@pytest.fixture
def sample_user() -> UserDB:
    """Create a sample user for testing."""
    return UserDB(
        uuid=uuid4(),
        external_id="user_john",
        username="john",
        email="john@example.com",
    )


@pytest.fixture
def sample_post(sample_user: UserDB) -> PostDB:
    """Create a sample post with its author attached."""
    post = PostDB(
        id=uuid4(),
        user_id=sample_user.uuid,
        title="Hello World",
        slug="hello-world",
        content="<p>Body</p>",
        category="general",
        visit=3,
        created_at=datetime(2024, 1, 1, tzinfo=UTC),
    )
    post.user = sample_user
    return post


@pytest.fixture
def auth_headers(sample_user: UserDB) -> dict[str, str]:
    """Create auth headers with a valid user token."""
    token = create_access_token(sample_user.external_id, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_auth_headers() -> dict[str, str]:
    """Create auth headers with an admin token."""
    token = create_access_token("user_admin", role=Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_service() -> MagicMock:
    return MagicMock(spec=PostService)


@pytest.fixture
def mock_signer() -> MagicMock:
    signer = MagicMock(spec=MediaSigner)
    signer.sign_upload.return_value = {
        "signature": "abc123",
        "timestamp": 1704067200,
        "api_key": "123456",
        "cloud_name": "demo",
        "folder": "blog",
    }
    return signer


@pytest.fixture
def overrides(mock_service: MagicMock, mock_signer: MagicMock) -> Generator[None]:
    app.dependency_overrides[get_post_service] = lambda: mock_service
    app.dependency_overrides[get_media_signer] = lambda: mock_signer
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(overrides: None) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac