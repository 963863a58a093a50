"""
Post schemas.

Request bodies, response models and the listing query value objects
exchanged between the HTTP layer, the query planner and the post store.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.configs.settings import MAX_CATEGORY_LENGTH, MAX_DESC_LENGTH, MAX_TITLE_LENGTH


class PostSort(StrEnum):
    """Listing order accepted by the ``sort`` parameter."""

    NEWEST = "newest"
    OLDEST = "oldest"
    POPULAR = "popular"
    TRENDING = "trending"


@dataclass(frozen=True)
class PostListParams:
    """
    Raw listing parameters as received from the query string.

    Every field is kept as text; coercion and defaults belong to the
    query planner.
    """

    page: str | None = None
    limit: str | None = None
    category: str | None = None
    search: str | None = None
    author: str | None = None
    sort: str | None = None
    featured: str | None = None


@dataclass(frozen=True)
class PostQuery:
    """
    Normalized listing plan.

    All populated predicates are combined with AND. ``title_contains`` is
    matched case-insensitively and literally (no wildcards).
    """

    page: int = 1
    page_size: int = 2
    sort: PostSort = PostSort.NEWEST
    category: str | None = None
    title_contains: str | None = None
    author_id: UUID | None = None
    created_after: datetime | None = None
    featured_only: bool = False

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class PostCreate(BaseModel):
    """Post creation body. The slug is always derived from the title."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH, examples=["Hello World"])
    content: str = Field(..., min_length=1, description="Post body")
    category: str = Field(default="general", min_length=1, max_length=MAX_CATEGORY_LENGTH)
    desc: str | None = Field(default=None, max_length=MAX_DESC_LENGTH)
    img: str | None = Field(default=None, max_length=500, description="Cover image URL")


class PostUpdate(BaseModel):
    """Post update body (all fields optional)."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    content: str | None = None
    category: str | None = Field(default=None, max_length=MAX_CATEGORY_LENGTH)
    desc: str | None = Field(default=None, max_length=MAX_DESC_LENGTH)
    img: str | None = Field(default=None, max_length=500)


class FeatureRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    post_id: UUID = Field(alias="postId")


class AuthorResponse(BaseModel):
    """Author information embedded in post responses."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID = Field(alias="id", validation_alias="uuid")
    username: str
    img: str | None = None


class PostResponse(BaseModel):
    """Post response model."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    user: AuthorResponse | None = None
    title: str
    slug: str
    desc: str | None = None
    category: str
    content: str
    img: str | None = None
    visit: int
    is_featured: bool = Field(alias="isFeatured")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")


class PostPage(BaseModel):
    """One page of posts and whether a following page exists."""

    model_config = ConfigDict(populate_by_name=True)

    posts: list[PostResponse]
    has_more: bool = Field(alias="hasMore")
    page: int
    limit: int
    total: int


class UploadAuthResponse(BaseModel):
    """Parameters for a signed direct upload to the media host."""

    signature: str
    timestamp: int
    api_key: str
    cloud_name: str
    folder: str
