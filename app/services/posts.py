"""Post service: listing, slug-aware writes and ownership checks."""

from collections.abc import Awaitable, Callable
from logging import getLogger
from uuid import UUID

from app.configs import file_logger, settings
from app.errors.database import DuplicateEntryError
from app.errors.posts import (
    PostNotFoundError,
    PostPermissionError,
    SlugConflictError,
    UserNotFoundError,
)
from app.models import PostDB, UserDB
from app.repositories import PostRepository, UserRepository
from app.schemas.auth import AuthContext
from app.schemas.post import PostCreate, PostListParams, PostPage, PostResponse, PostUpdate
from app.services.post_query import has_more, plan_post_query
from app.services.slug import SlugResolver

logger = file_logger(getLogger(__name__))

UPDATABLE_FIELDS = ("category", "desc", "content", "img")


class PostService:
    """Request-scoped service for post operations."""

    def __init__(self, posts: PostRepository, users: UserRepository) -> None:
        """
        Initialize the post service.

        Args:
            posts: Post store, also used as the slug lookup
            users: User repository, also used as the author directory
        """
        self.posts = posts
        self.users = users
        self.resolver = SlugResolver(posts)

    async def list_posts(self, params: PostListParams) -> PostPage:
        """
        List posts for raw query parameters.

        Raises:
            AuthorNotFoundError: If the ``author`` filter names no known user
        """
        query = await plan_post_query(params, self.users)
        posts, total = await self.posts.query(query)

        return PostPage(
            posts=[PostResponse.model_validate(post, from_attributes=True) for post in posts],
            has_more=has_more(query.page, query.page_size, total),
            page=query.page,
            limit=query.page_size,
            total=total,
        )

    async def get_post(self, slug: str) -> PostDB:
        """Fetch a post by slug and count the visit."""
        post = await self.posts.get_by_slug(slug)
        if not post:
            raise PostNotFoundError
        return await self.posts.increment_visit(post.id)

    async def create_post(self, auth: AuthContext, data: PostCreate) -> PostDB:
        """
        Create a post authored by the caller.

        Raises:
            UserNotFoundError: If the caller has no user record
            SlugConflictError: If every slug write attempt collided
        """
        user = await self._get_user(auth)

        async def write(slug: str) -> PostDB:
            return await self.posts.create(data, user_id=user.uuid, slug=slug)

        post = await self._write_with_unique_slug(data.title, write)
        logger.info(f"Post '{post.slug}' created by {user.username}")
        return post

    async def update_post(self, auth: AuthContext, slug: str, data: PostUpdate) -> PostDB:
        """
        Update a post owned by the caller (or any post for admins).

        The slug only changes when a different title is given.

        Raises:
            PostNotFoundError: If no post has ``slug``
            UserNotFoundError: If the caller has no user record
            PostPermissionError: If the caller is neither owner nor admin
            SlugConflictError: If every slug write attempt collided
        """
        post = await self.posts.get_by_slug(slug)
        if not post:
            raise PostNotFoundError

        user = await self._get_user(auth)
        if not auth.is_admin and post.user_id != user.uuid:
            raise PostPermissionError("You are not authorized to update this post!")

        fields = {
            name: value
            for name in UPDATABLE_FIELDS
            if (value := getattr(data, name)) is not None and value != ""
        }

        if not data.title or data.title == post.title:
            return await self.posts.update(post, fields)

        title = data.title

        async def write(new_slug: str) -> PostDB:
            return await self.posts.update(post, {**fields, "title": title, "slug": new_slug})

        return await self._write_with_unique_slug(title, write, exclude_id=post.id)

    async def delete_post(self, auth: AuthContext, post_id: UUID) -> None:
        """
        Delete a post. Admins may delete any post, others only their own.

        Raises:
            PostNotFoundError: If an admin deletes a missing post
            PostPermissionError: If the post is missing or not owned by the caller
        """
        if auth.is_admin:
            if not await self.posts.delete(post_id):
                raise PostNotFoundError
            logger.info(f"Post {post_id} deleted by admin {auth.user_id}")
            return

        user = await self._get_user(auth)
        if not await self.posts.delete_owned(post_id, user.uuid):
            raise PostPermissionError("You can delete only your posts!")
        logger.info(f"Post {post_id} deleted by {user.username}")

    async def feature_post(self, auth: AuthContext, post_id: UUID) -> PostDB:
        """
        Toggle the featured flag of a post (admins only).

        Raises:
            PostPermissionError: If the caller is not an admin
            PostNotFoundError: If the post does not exist
        """
        if not auth.is_admin:
            raise PostPermissionError("You cannot feature posts!")

        post = await self.posts.toggle_featured(post_id)
        if not post:
            raise PostNotFoundError
        return post

    async def _get_user(self, auth: AuthContext) -> UserDB:
        user = await self.users.get_by_external_id(auth.user_id)
        if not user:
            raise UserNotFoundError
        return user

    async def _write_with_unique_slug(
        self,
        title: str,
        write: Callable[[str], Awaitable[PostDB]],
        exclude_id: UUID | None = None,
    ) -> PostDB:
        """
        Resolve a slug and write it, retrying when the unique index rejects it.

        A rejected slug is marked taken so the next resolution moves on to
        the following suffix even if the competing row is not yet visible.
        """
        taken: set[str] = set()
        slug = ""

        for attempt in range(1, settings.SLUG_MAX_RETRIES + 1):
            slug = await self.resolver.resolve(title, exclude_id=exclude_id, taken=taken)
            try:
                return await write(slug)
            except DuplicateEntryError as e:
                if e.field != "slug":
                    raise
                logger.warning(f"Slug '{slug}' taken at write time (attempt {attempt})")
                taken.add(slug)

        raise SlugConflictError(slug, settings.SLUG_MAX_RETRIES)
