from app.schemas.auth import AuthContext, Role
from app.schemas.post import (
    AuthorResponse,
    FeatureRequest,
    PostCreate,
    PostListParams,
    PostPage,
    PostQuery,
    PostResponse,
    PostSort,
    PostUpdate,
    UploadAuthResponse,
)

__all__ = [
    "AuthContext",
    "AuthorResponse",
    "FeatureRequest",
    "PostCreate",
    "PostListParams",
    "PostPage",
    "PostQuery",
    "PostResponse",
    "PostSort",
    "PostUpdate",
    "Role",
    "UploadAuthResponse",
]
