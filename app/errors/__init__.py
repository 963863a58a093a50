from app.errors.auth import InvalidTokenError, UserAuthenticationError, auth_exception_handler
from app.errors.base import BaseAppError, create_exception_handler
from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    database_exception_handler,
)
from app.errors.media import MediaSigningError, media_exception_handler
from app.errors.posts import (
    AuthorNotFoundError,
    InvalidTitleError,
    PostError,
    PostNotFoundError,
    PostPermissionError,
    SlugConflictError,
    UserNotFoundError,
    post_exception_handler,
)

__all__ = [
    "AuthorNotFoundError",
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "InvalidTitleError",
    "InvalidTokenError",
    "MediaSigningError",
    "PostError",
    "PostNotFoundError",
    "PostPermissionError",
    "SlugConflictError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "media_exception_handler",
    "post_exception_handler",
]
