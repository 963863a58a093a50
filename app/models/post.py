"""Post database model using SQLModel."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Optional, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import Boolean, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, Relationship, SQLModel, String

from app.configs.settings import MAX_CATEGORY_LENGTH, MAX_DESC_LENGTH, MAX_TITLE_LENGTH

if TYPE_CHECKING:
    from app.models.user import UserDB


class PostDB(SQLModel, table=True):
    """
    Post database model.

    ``slug`` carries a UNIQUE constraint: the database, not the slug
    resolver, is the authority on uniqueness.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        Index("ix_posts_category_created", "category", "created_at"),
        Index("ix_posts_visit", "visit"),
    )

    # Primary key
    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    # Foreign key to User
    user_id: UUID = Field(
        sa_column=Column(
            "user_id",
            ForeignKey("users.uuid", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        description="Author ID (foreign key to users.uuid)",
    )

    title: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(MAX_TITLE_LENGTH + 20), unique=True, nullable=False, index=True),
        description="URL slug derived from the title (unique)",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body (HTML from the rich text editor)",
    )

    # Optional fields
    img: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Cover image URL",
    )
    desc: str | None = Field(
        default=None,
        sa_column=Column(String(MAX_DESC_LENGTH)),
        description="Short description",
    )
    category: str = Field(
        default="general",
        sa_column=Column(String(MAX_CATEGORY_LENGTH), nullable=False, index=True),
        description="Category",
    )

    # Metadata fields
    is_featured: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False, index=True),
        description="Shown in the featured section",
    )
    visit: int = Field(
        default=0,
        nullable=False,
        ge=0,
        description="View counter",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    user: Optional["UserDB"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Hello World",
                "slug": "hello-world",
                "category": "web-design",
                "content": "<p>First post</p>",
                "visit": 0,
                "is_featured": False,
            },
        },
    )
