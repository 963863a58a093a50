"""Errors raised while listing, resolving and mutating posts."""

from logging import getLogger

from starlette.status import (
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_422_UNPROCESSABLE_ENTITY,
)

from app.configs import file_logger
from app.configs.settings import NO_POST_FOUND
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class PostError(BaseAppError):
    """Base exception for post operations."""


class AuthorNotFoundError(PostError):
    """
    Raised when the ``author`` listing filter names an unknown username.

    An unknown author is an error, not an empty page.
    """

    def __init__(self, username: str) -> None:
        super().__init__(NO_POST_FOUND, HTTP_404_NOT_FOUND)
        self.username = username


class PostNotFoundError(PostError):
    def __init__(self, detail: str = "Post not found!") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class UserNotFoundError(PostError):
    def __init__(self, detail: str = "User not found!") -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


class PostPermissionError(PostError):
    """Raised when the caller is neither the owner nor an admin."""

    def __init__(self, detail: str = "You are not authorized to modify this post!") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


class InvalidTitleError(PostError):
    def __init__(self, detail: str = "A non-empty title is required to build a slug") -> None:
        super().__init__(detail, HTTP_422_UNPROCESSABLE_ENTITY)


class SlugConflictError(PostError):
    """Raised when every retry of a slug write hit a uniqueness violation."""

    def __init__(self, slug: str, attempts: int) -> None:
        super().__init__(
            f"Could not reserve a unique slug after {attempts} attempts",
            HTTP_409_CONFLICT,
        )
        self.slug = slug
        self.attempts = attempts


post_exception_handler = create_exception_handler(logger)
