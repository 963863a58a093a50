"""Post repository for database operations."""

from datetime import UTC, datetime
from logging import getLogger
from typing import Any
from uuid import UUID

from sqlalchemy import asc, delete, desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from app.configs import file_logger
from app.models.post import PostDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostCreate, PostQuery, PostSort

logger = file_logger(getLogger(__name__))

SORT_ORDER: dict[PostSort, tuple[UnaryExpression, ...]] = {
    PostSort.NEWEST: (desc(PostDB.created_at),),
    PostSort.OLDEST: (asc(PostDB.created_at),),
    PostSort.POPULAR: (desc(PostDB.visit), desc(PostDB.created_at)),
    PostSort.TRENDING: (desc(PostDB.visit), desc(PostDB.created_at)),
}


def query_conditions(query: PostQuery) -> list[ColumnElement[bool]]:
    """
    Translate a :class:`PostQuery` into SQL predicates (joined with AND).

    Args:
        query: Planned listing query

    Returns:
        list[ColumnElement[bool]]: WHERE clauses, empty for an unfiltered listing
    """
    conditions: list[ColumnElement[bool]] = []

    if query.category:
        conditions.append(PostDB.category == query.category)
    if query.title_contains:
        # pyrefly: ignore [missing-attribute]
        conditions.append(PostDB.title.ilike(f"%{query.title_contains}%", escape="\\"))
    if query.author_id:
        conditions.append(PostDB.user_id == query.author_id)
    if query.created_after:
        conditions.append(PostDB.created_at >= query.created_after)
    if query.featured_only:
        conditions.append(PostDB.is_featured.is_(True))

    return conditions


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for Post database operations.

    Serves as the slug lookup for the slug resolver and executes the
    listing plans built by the query planner.
    """

    model = PostDB
    unique_fields = ("slug",)

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        """
        Check whether a slug is used by a post other than ``exclude_id``.

        Args:
            slug: Candidate slug
            exclude_id: Post to ignore (the post being updated)

        Returns:
            bool: True if another post owns the slug
        """
        return await self._check_exists_by_field("slug", slug, exclude_id)

    async def get_by_slug(self, slug: str) -> PostDB | None:
        return await self.get_by_field("slug", slug)

    async def query(self, query: PostQuery) -> tuple[list[PostDB], int]:
        """
        Execute a listing plan.

        The total is counted over the same filter as the page.

        Args:
            query: Planned listing query

        Returns:
            tuple[list[PostDB], int]: Page of posts and total matching count
        """
        conditions = query_conditions(query)

        statement = (
            select(PostDB)
            .where(*conditions)
            .order_by(*SORT_ORDER[query.sort])
            .offset(query.offset)
            .limit(query.page_size)
        )
        result = await self.session.execute(statement)
        posts = list(result.scalars().all())

        count_statement = select(func.count()).select_from(PostDB).where(*conditions)
        total = (await self.session.execute(count_statement)).scalar() or 0

        logger.info(
            f"Listed {len(posts)} of {total} posts (sort={query.sort}, page={query.page})",
        )
        return posts, total

    async def create(self, post: PostCreate, user_id: UUID, slug: str) -> PostDB:
        """
        Create a new post.

        Args:
            post: Post creation body
            user_id: Author id
            slug: Resolved slug

        Returns:
            PostDB: Created post with its author loaded

        Raises:
            DuplicateEntryError: If the slug was taken in the meantime
        """
        db_post = PostDB(user_id=user_id, slug=slug, **post.model_dump())
        db_post = await self._add_and_refresh(db_post)
        return await self._reload(db_post.id)

    async def update(self, post: PostDB, fields: dict[str, Any]) -> PostDB:
        """
        Apply changed fields to a post.

        Args:
            post: Post to update
            fields: Column values to set

        Returns:
            PostDB: Updated post with its author loaded

        Raises:
            DuplicateEntryError: If a new slug was taken in the meantime
        """
        post_id = post.id
        values = {**fields, "updated_at": datetime.now(tz=UTC)}

        try:
            async with self.session.begin_nested():
                for key, value in values.items():
                    setattr(post, key, value)
                await self.session.flush()
        except IntegrityError as e:
            await self.session.refresh(post)
            raise self._integrity_error(e) from e

        return await self._reload(post_id)

    async def delete(self, post_id: UUID) -> bool:
        """
        Delete a post by id.

        Returns:
            bool: True if a post was deleted
        """
        result = await self.session.execute(delete(PostDB).where(PostDB.id == post_id))
        return result.rowcount > 0

    async def delete_owned(self, post_id: UUID, user_id: UUID) -> bool:
        """
        Delete a post only if it belongs to ``user_id``.

        Returns:
            bool: True if a post was deleted
        """
        result = await self.session.execute(
            delete(PostDB).where(PostDB.id == post_id, PostDB.user_id == user_id),
        )
        return result.rowcount > 0

    async def toggle_featured(self, post_id: UUID) -> PostDB | None:
        """
        Flip the featured flag of a post.

        Returns:
            PostDB | None: Updated post, None if not found
        """
        db_post = await self.get_by_id(post_id)
        if not db_post:
            return None

        db_post.is_featured = not db_post.is_featured
        await self.session.flush()
        return await self._reload(post_id)

    async def increment_visit(self, post_id: UUID) -> PostDB:
        """Atomically increment the view counter of a post."""
        await self.session.execute(
            update(PostDB).where(PostDB.id == post_id).values(visit=PostDB.visit + 1),
        )
        return await self._reload(post_id)

    async def _reload(self, post_id: UUID) -> PostDB:
        statement = (
            select(PostDB)
            .where(PostDB.id == post_id)
            .options(selectinload(PostDB.user))
            .execution_options(populate_existing=True)
        )
        db_post = (await self.session.execute(statement)).scalar_one_or_none()
        if db_post is None:
            msg = f"Post {post_id} vanished during write"
            raise RuntimeError(msg)
        return db_post
