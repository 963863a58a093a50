# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthDep,
    MediaSignerDep,
    PostListParamsDep,
    PostServiceDep,
    get_auth_context,
    get_media_signer,
    get_post_list_params,
    get_post_service,
)

__all__ = [
    "AuthDep",
    "MediaSignerDep",
    "PostListParamsDep",
    "PostServiceDep",
    "get_auth_context",
    "get_media_signer",
    "get_post_list_params",
    "get_post_service",
]
