"""Media signing errors."""

from logging import getLogger

from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from app.configs import file_logger
from app.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class MediaSigningError(BaseAppError):
    """Raised when upload signatures cannot be produced."""

    def __init__(
        self,
        detail: str = "Media uploads are not configured",
        status_code: int = HTTP_503_SERVICE_UNAVAILABLE,
    ) -> None:
        super().__init__(detail, status_code)


media_exception_handler = create_exception_handler(logger)
