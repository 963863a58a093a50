# tests/dependencies/test_dependencies.py
"""Tests for app/dependencies/dependencies.py module."""

from types import SimpleNamespace

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.dependencies import get_auth_context, get_media_signer, get_post_list_params
from app.errors import InvalidTokenError, MediaSigningError, UserAuthenticationError
from app.managers.token_manager import create_access_token
from app.schemas.auth import Role
from app.services import MediaSigner


class TestAuthContext:
    @pytest.mark.asyncio
    async def test_missing_credentials(self) -> None:
        with pytest.raises(UserAuthenticationError):
            await get_auth_context(None)

    @pytest.mark.asyncio
    async def test_invalid_token(self) -> None:
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="bad")
        with pytest.raises(InvalidTokenError):
            await get_auth_context(credentials)

    @pytest.mark.asyncio
    async def test_role_resolved_once(self) -> None:
        token = create_access_token("user_1", role=Role.ADMIN)
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)

        auth = await get_auth_context(credentials)

        assert auth.user_id == "user_1"
        assert auth.role is Role.ADMIN


class TestMediaSigner:
    def test_signer_from_app_state(self) -> None:
        signer = MediaSigner("demo", "key", "secret", "blog")
        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(media_signer=signer)))

        assert get_media_signer(request) is signer

    def test_missing_signer(self) -> None:
        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))

        with pytest.raises(MediaSigningError):
            get_media_signer(request)


class TestPostListParams:
    def test_category_wins_over_alias(self) -> None:
        params = get_post_list_params(category="dev", cat="design")
        assert params.category == "dev"

    def test_legacy_alias(self) -> None:
        params = get_post_list_params(cat="design", page="2")
        assert params.category == "design"
        assert params.page == "2"
