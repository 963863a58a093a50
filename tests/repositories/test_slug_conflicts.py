# tests/repositories/test_slug_conflicts.py
"""Write-time slug conflicts resolved by PostService over a real database."""

from unittest.mock import AsyncMock

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from app.models import PostDB, UserDB
from app.repositories import PostRepository, UserRepository
from app.schemas.auth import AuthContext
from app.schemas.post import PostCreate, PostUpdate
from app.services.posts import PostService


@pytest.fixture
def stale_post_repo(post_repo: PostRepository, monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Existence checks that never see rows written by a concurrent request."""
    slug_exists = AsyncMock(return_value=False)
    monkeypatch.setattr(post_repo, "slug_exists", slug_exists)
    return slug_exists


@pytest.fixture
def service(post_repo: PostRepository, user_repo: UserRepository) -> PostService:
    return PostService(post_repo, user_repo)


@pytest.fixture
def john_auth(john: UserDB) -> AuthContext:
    return AuthContext(user_id=john.external_id)


@pytest.fixture
async def existing(session: AsyncSession, jane: UserDB) -> PostDB:
    post = PostDB(user_id=jane.uuid, title="Hello World", slug="hello-world", content="x")
    session.add(post)
    await session.flush()
    return post


@pytest.mark.asyncio
@pytest.mark.usefixtures("existing")
async def test_create_retries_after_unique_violation(
    service: PostService,
    post_repo: PostRepository,
    stale_post_repo: AsyncMock,
    john_auth: AuthContext,
) -> None:
    post = await service.create_post(
        john_auth,
        PostCreate(title="Hello World", content="<p>Second</p>"),
    )

    assert post.slug == "hello-world-2"
    assert post.user is not None
    assert post.user.username == "john"
    assert await post_repo.count() == 2
    checked = [call.args[0] for call in stale_post_repo.await_args_list]
    assert checked == ["hello-world", "hello-world-2"]


@pytest.mark.asyncio
@pytest.mark.usefixtures("existing", "stale_post_repo")
async def test_update_retries_after_unique_violation(
    session: AsyncSession,
    service: PostService,
    post_repo: PostRepository,
    john: UserDB,
    john_auth: AuthContext,
) -> None:
    draft = PostDB(user_id=john.uuid, title="Draft", slug="draft", content="x")
    session.add(draft)
    await session.flush()

    post = await service.update_post(
        john_auth,
        "draft",
        PostUpdate(title="Hello World", category="news"),
    )

    assert post.id == draft.id
    assert post.slug == "hello-world-2"
    assert post.title == "Hello World"
    assert post.category == "news"
    assert await post_repo.get_by_slug("draft") is None
    assert await post_repo.count() == 2
