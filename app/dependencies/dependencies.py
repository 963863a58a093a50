# app/dependencies/dependencies.py

"""Application dependencies."""

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import get_session
from app.errors.auth import InvalidTokenError, UserAuthenticationError
from app.errors.media import MediaSigningError
from app.managers.token_manager import decode_access_token
from app.repositories import PostRepository, UserRepository
from app.schemas.auth import AuthContext
from app.schemas.post import PostListParams
from app.services import MediaSigner, PostService

bearer_scheme = HTTPBearer(auto_error=False)


def get_post_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PostService:
    """
    Resolve the `PostService` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    PostService
        Service bound to repositories sharing the session.
    """
    return PostService(PostRepository(session), UserRepository(session))


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


async def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> AuthContext:
    """
    Resolve the caller identity and role once per request.

    Raises
    ------
    UserAuthenticationError
        If no bearer token was sent.
    InvalidTokenError
        If the token is invalid or expired.
    """
    if credentials is None:
        raise UserAuthenticationError

    auth = decode_access_token(credentials.credentials)
    if auth is None:
        raise InvalidTokenError
    return auth


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


def get_media_signer(request: Request) -> MediaSigner:
    """Return the signer created during application startup."""
    signer: MediaSigner | None = getattr(request.app.state, "media_signer", None)
    if signer is None:
        raise MediaSigningError
    return signer


MediaSignerDep = Annotated[MediaSigner, Depends(get_media_signer)]


def get_post_list_params(
    page: Annotated[str | None, Query(description="Page number (defaults to 1)")] = None,
    limit: Annotated[str | None, Query(description="Page size (defaults to 2)")] = None,
    category: Annotated[str | None, Query(description="Category filter")] = None,
    cat: Annotated[str | None, Query(description="Legacy alias of category")] = None,
    search: Annotated[str | None, Query(description="Case-insensitive title search")] = None,
    author: Annotated[str | None, Query(description="Author username")] = None,
    sort: Annotated[
        str | None,
        Query(description="newest, oldest, popular or trending"),
    ] = None,
    featured: Annotated[str | None, Query(description="Only featured posts")] = None,
) -> PostListParams:
    """
    Dependency collecting the raw listing parameters.

    Values stay strings so malformed numbers fall back to defaults
    instead of failing validation.
    """
    return PostListParams(
        page=page,
        limit=limit,
        category=category or cat,
        search=search,
        author=author,
        sort=sort,
        featured=featured,
    )


PostListParamsDep = Annotated[PostListParams, Depends(get_post_list_params)]
