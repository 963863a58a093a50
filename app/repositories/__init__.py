"""Repository layer for database operations."""

from app.repositories.post import PostRepository
from app.repositories.user import UserRepository

__all__ = ["UserRepository", "PostRepository"]
