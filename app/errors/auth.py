"""Authentication errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Not authenticated!",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidTokenError(UserAuthenticationError):
    """Raised when the bearer token cannot be decoded or lacks a subject."""

    def __init__(self) -> None:
        super().__init__("Could not validate credentials", HTTP_401_UNAUTHORIZED)


auth_exception_handler = create_exception_handler(logger)
