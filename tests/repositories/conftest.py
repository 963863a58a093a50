# tests/repositories/conftest.py
"""Fixtures for repository tests on an in-memory SQLite database."""

from collections.abc import AsyncGenerator
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import PostDB, UserDB  # noqa: F401
from app.repositories import PostRepository, UserRepository


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    """Fresh in-memory database per test."""
    engine = create_async_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()


@pytest.fixture
def post_repo(session: AsyncSession) -> PostRepository:
    return PostRepository(session)


@pytest.fixture
def user_repo(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
async def john(user_repo: UserRepository) -> UserDB:
    return await user_repo.create(
        UserDB(uuid=uuid4(), external_id="user_john", username="john", email="john@example.com"),
    )


@pytest.fixture
async def jane(user_repo: UserRepository) -> UserDB:
    return await user_repo.create(
        UserDB(uuid=uuid4(), external_id="user_jane", username="jane", email="jane@example.com"),
    )
