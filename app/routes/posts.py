# app/routes/posts.py

"""
Post Routes.

Summary
-------
Endpoints include:
  - List posts (filters, sort, pagination)
  - Signed media upload parameters
  - Get post by slug
  - Create post
  - Toggle featured flag
  - Update post
  - Delete post

Dependencies
------------
  - `PostServiceDep`: Request-scoped service over the post and user repositories.
  - `AuthDep`: Caller identity and role decoded from the bearer token.
  - `MediaSignerDep`: Upload signer created at startup.
"""

from logging import getLogger
from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from app.configs import file_logger, settings
from app.dependencies import AuthDep, MediaSignerDep, PostListParamsDep, PostServiceDep
from app.managers import limiter
from app.models import PostDB
from app.schemas import (
    FeatureRequest,
    PostCreate,
    PostPage,
    PostResponse,
    PostUpdate,
    UploadAuthResponse,
)

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

logger = file_logger(getLogger(__name__))

NOT_AUTHENTICATED = {
    "description": "Not authenticated",
    "content": {"application/json": {"example": {"detail": "Not authenticated!"}}},
}
POST_NOT_FOUND = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Post not found!"}}},
}
UPDATE_RESPONSES = {
    401: NOT_AUTHENTICATED,
    403: {
        "description": "Forbidden",
        "content": {
            "application/json": {
                "example": {"detail": "You are not authorized to update this post!"},
            },
        },
    },
    404: POST_NOT_FOUND,
}


def to_response(post: PostDB) -> PostResponse:
    """Convert a `PostDB` instance (author loaded) to `PostResponse`."""
    return PostResponse.model_validate(post, from_attributes=True)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostPage,
    summary="List posts",
    description=(
        "List posts filtered by category, title search, author and featured flag, "
        "sorted by newest, oldest, popular or trending."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "posts": [{"title": "Hello World", "slug": "hello-world", "visit": 3}],
                        "hasMore": True,
                        "page": 1,
                        "limit": 2,
                        "total": 5,
                    },
                },
            },
        },
        404: {
            "description": "Unknown author",
            "content": {"application/json": {"example": {"detail": "No post found!"}}},
        },
    },
    operation_id="posts_list",
)
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def list_posts(
    request: Request,
    params: PostListParamsDep,
    service: PostServiceDep,
) -> PostPage:
    """
    List posts.

    Parameters
    ----------
    request : Request
        Current request context.
    params : PostListParams
        Raw listing parameters.
    service : PostService
        Service dependency.

    Returns
    -------
    PostPage
        Page of posts and whether more follow.

    Examples
    --------
    Request
        GET /posts?category=web-design&sort=oldest&page=2&limit=5
    """
    return await service.list_posts(params)


@router.get(
    "/upload-auth",
    response_class=ORJSONResponse,
    response_model=UploadAuthResponse,
    summary="Get signed upload parameters",
    description="Sign a direct browser upload to the media host.",
    responses={
        503: {
            "description": "Media uploads not configured",
            "content": {
                "application/json": {"example": {"detail": "Media uploads are not configured"}},
            },
        },
    },
    operation_id="posts_upload_auth",
)
async def upload_auth(signer: MediaSignerDep) -> UploadAuthResponse:
    """
    Return signed upload parameters.

    Parameters
    ----------
    signer : MediaSigner
        Signer created at startup.

    Returns
    -------
    UploadAuthResponse
        Signature, timestamp, API key, cloud name and folder.
    """
    return UploadAuthResponse(**signer.sign_upload())


@router.patch(
    "/feature",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Toggle featured flag",
    description="Feature or un-feature a post. Admins only.",
    responses={
        401: NOT_AUTHENTICATED,
        403: {
            "description": "Forbidden",
            "content": {"application/json": {"example": {"detail": "You cannot feature posts!"}}},
        },
        404: POST_NOT_FOUND,
    },
    operation_id="posts_feature",
)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def feature_post(
    request: Request,
    body: FeatureRequest,
    auth: AuthDep,
    service: PostServiceDep,
) -> PostResponse:
    """Toggle the featured flag of a post."""
    return to_response(await service.feature_post(auth, body.post_id))


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by slug",
    description="Retrieve a post and its author by slug. Increments the visit counter.",
    responses={404: POST_NOT_FOUND},
    operation_id="posts_get_by_slug",
)
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def get_post(request: Request, slug: str, service: PostServiceDep) -> PostResponse:
    """
    Get a post by slug.

    Parameters
    ----------
    request : Request
        Current request context.
    slug : str
        Post slug.
    service : PostService
        Service dependency.

    Returns
    -------
    PostResponse
        Post data with author.
    """
    return to_response(await service.get_post(slug))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new post",
    description="Create a post authored by the caller. The slug is derived from the title.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "id": "123e4567-e89b-12d3-a456-426614174000",
                        "user": {"id": "123e4567-e89b-12d3-a456-426614174111", "username": "john"},
                        "title": "Hello World",
                        "slug": "hello-world-2",
                        "category": "general",
                        "content": "<p>...</p>",
                        "visit": 0,
                        "isFeatured": False,
                    },
                },
            },
        },
        401: NOT_AUTHENTICATED,
        404: {
            "description": "User not found",
            "content": {"application/json": {"example": {"detail": "User not found!"}}},
        },
        409: {
            "description": "Slug conflict",
            "content": {
                "application/json": {
                    "example": {"detail": "Could not reserve a unique slug after 5 attempts"},
                },
            },
        },
    },
    operation_id="posts_create",
)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def create_post(
    request: Request,
    post: PostCreate,
    auth: AuthDep,
    service: PostServiceDep,
) -> PostResponse:
    """
    Create a new post.

    Parameters
    ----------
    request : Request
        Current request context.
    post : PostCreate
        Post input payload.
    auth : AuthContext
        Caller identity.
    service : PostService
        Service dependency.

    Returns
    -------
    PostResponse
        Created post data.
    """
    return to_response(await service.create_post(auth, post))


@router.patch(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description="Update a post owned by the caller, or any post for admins.",
    responses=UPDATE_RESPONSES,
    operation_id="posts_update",
)
@router.put(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post (PUT)",
    description="Same as PATCH; kept for clients that send PUT.",
    responses=UPDATE_RESPONSES,
    operation_id="posts_update_put",
)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def update_post(
    request: Request,
    slug: str,
    post: PostUpdate,
    auth: AuthDep,
    service: PostServiceDep,
) -> PostResponse:
    """Update a post; a changed title re-resolves the slug."""
    return to_response(await service.update_post(auth, slug, post))


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    summary="Delete a post",
    description="Admins delete any post; other users only their own.",
    responses={
        200: {
            "content": {"application/json": {"example": {"detail": "Post has been deleted"}}},
        },
        401: NOT_AUTHENTICATED,
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {"example": {"detail": "You can delete only your posts!"}},
            },
        },
    },
    operation_id="posts_delete",
)
@limiter.limit(settings.RATE_LIMIT_WRITE)
async def delete_post(
    request: Request,
    post_id: UUID,
    auth: AuthDep,
    service: PostServiceDep,
) -> ORJSONResponse:
    """Delete a post."""
    await service.delete_post(auth, post_id)
    return ORJSONResponse(content={"detail": "Post has been deleted"})
