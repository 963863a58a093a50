"""
Unique slug resolution for post titles.

A title becomes a slug by replacing each space with a hyphen and
lowercasing. When the slug is taken, ``-2``, ``-3``, ... is appended to
the base until a free candidate is found.

Checks run strictly one after another. Two requests resolving the same
title at once can both see a free slug; the unique index on
``posts.slug`` rejects the second write and the post service re-enters
:meth:`SlugResolver.resolve` with that slug marked as taken.
"""

from collections.abc import Collection
from logging import getLogger
from typing import Protocol
from uuid import UUID

from app.configs import file_logger
from app.errors.posts import InvalidTitleError

logger = file_logger(getLogger(__name__))

FIRST_SUFFIX = 2


class SlugLookup(Protocol):
    """Answers whether a slug is used by a post other than ``exclude_id``."""

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool: ...


def slugify_title(title: str | None) -> str:
    """
    Derive the base slug from a title.

    Args:
        title: Post title

    Returns:
        str: Title with spaces replaced by hyphens, lowercased

    Raises:
        InvalidTitleError: If the title is empty or blank
    """
    if not title or not title.strip():
        raise InvalidTitleError
    return title.replace(" ", "-").lower()


class SlugResolver:
    """
    Resolve a unique slug against a :class:`SlugLookup`.

    Attributes:
        lookup: Existence check over stored posts.
    """

    def __init__(self, lookup: SlugLookup) -> None:
        self.lookup = lookup

    async def _is_taken(
        self,
        candidate: str,
        exclude_id: UUID | None,
        taken: Collection[str],
    ) -> bool:
        if candidate in taken:
            return True
        return await self.lookup.slug_exists(candidate, exclude_id)

    async def resolve(
        self,
        title: str,
        exclude_id: UUID | None = None,
        taken: Collection[str] = (),
    ) -> str:
        """
        Return the first free slug for ``title``.

        Args:
            title: Post title
            exclude_id: Id of the post being updated; its own slug is not a collision
            taken: Slugs to treat as used regardless of the lookup

        Returns:
            str: ``base`` or ``base-N`` with the smallest free N >= 2
        """
        base = slugify_title(title)
        candidate = base
        counter = FIRST_SUFFIX

        while await self._is_taken(candidate, exclude_id, taken):
            candidate = f"{base}-{counter}"
            counter += 1

        if candidate != base:
            logger.info(f"Slug '{base}' taken, resolved to '{candidate}'")
        return candidate
