# tests/errors/test_base.py
"""Tests for app/errors/base.py module."""

from unittest.mock import MagicMock

import pytest

from app.errors import (
    AuthorNotFoundError,
    BaseAppError,
    DuplicateEntryError,
    PostPermissionError,
    create_exception_handler,
)


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        """Test default initialization values."""
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_custom_values(self) -> None:
        error = BaseAppError(detail="Custom error", status_code=400)
        assert error.detail == "Custom error"
        assert error.status_code == 400

    def test_str_representation(self) -> None:
        """Test string representation returns message."""
        assert str(BaseAppError(detail="Test error")) == "Test error"

    def test_post_errors(self) -> None:
        assert PostPermissionError().status_code == 403
        assert AuthorNotFoundError("ghost").status_code == 404
        assert DuplicateEntryError(field="slug").status_code == 409


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    @pytest.fixture
    def request_mock(self) -> MagicMock:
        request = MagicMock()
        request.client.host = "192.168.1.1"
        request.url.path = "/posts"
        return request

    @pytest.mark.asyncio
    async def test_handler_with_base_app_error(self, request_mock: MagicMock) -> None:
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(request_mock, BaseAppError(detail="Test error", status_code=400))

        assert response.status_code == 400
        assert response.body == b'{"detail":"Test error"}'
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /posts",
        )

    @pytest.mark.asyncio
    async def test_extra_attributes_in_body(self, request_mock: MagicMock) -> None:
        """Attributes beyond detail and status code are returned to the client."""
        handler = create_exception_handler(MagicMock())

        response = await handler(request_mock, AuthorNotFoundError("ghost"))

        assert response.status_code == 404
        assert response.body == b'{"detail":"No post found!","username":"ghost"}'

    @pytest.mark.asyncio
    async def test_handler_with_generic_exception(self, request_mock: MagicMock) -> None:
        handler = create_exception_handler(MagicMock())

        response = await handler(request_mock, ValueError("Something went wrong"))

        assert response.status_code == 500
        assert response.body == b'{"detail":"Internal Server Error"}'
