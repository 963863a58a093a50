"""
Observability helpers.

>>> from app.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> get_logger(__name__).info("Listing posts", page=1)
"""

from app.monitoring.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    sanitize_headers,
    sanitize_log_message,
)

__all__ = [
    "bind_request_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "sanitize_headers",
    "sanitize_log_message",
]
