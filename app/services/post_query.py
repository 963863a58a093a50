"""
Post listing query planner.

Translates the loosely-typed listing parameters of ``GET /posts`` into a
single :class:`~app.schemas.post.PostQuery`. Malformed pagination input is
never rejected: it falls back to the defaults, and oversized values are
clamped so the offset always fits a 64-bit integer.
"""

from datetime import UTC, datetime, timedelta
from logging import getLogger
from re import compile as re_compile
from typing import Protocol
from uuid import UUID

from app.configs import file_logger, settings
from app.errors.posts import AuthorNotFoundError
from app.schemas.post import PostListParams, PostQuery, PostSort

logger = file_logger(getLogger(__name__))

INT_PREFIX = re_compile(r"^\s*[+-]?\d+")
FALSY_FLAGS = frozenset({"", "0", "false", "no", "off"})
LIKE_SPECIALS = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_"})


class AuthorDirectory(Protocol):
    """Resolves author usernames to ids."""

    async def find_id_by_username(self, username: str) -> UUID | None: ...


def coerce_positive_int(raw: str | int | None, default: int) -> int:
    """
    Coerce a raw pagination value to a positive integer.

    Only the leading integer part is read, so ``"3abc"`` gives 3 and
    ``"2.7"`` gives 2. Absent, non-numeric and non-positive values give
    ``default``.

    Args:
        raw: Raw parameter value
        default: Fallback value

    Returns:
        int: Positive integer
    """
    if raw is None:
        return default
    if isinstance(raw, int):
        return raw if raw > 0 else default

    found = INT_PREFIX.match(raw)
    if not found:
        return default

    value = int(found.group())
    return value if value > 0 else default


def is_truthy_flag(raw: str | None) -> bool:
    """Return whether a query-string flag such as ``featured`` is set."""
    if raw is None:
        return False
    return raw.strip().lower() not in FALSY_FLAGS


def escape_like(term: str) -> str:
    r"""
    Escape LIKE wildcards so the term is matched literally.

    Examples
    --------
    >>> escape_like("100%_done")
    '100\\%\\_done'
    """
    return term.translate(LIKE_SPECIALS)


def parse_sort(raw: str | None) -> PostSort:
    """Map the ``sort`` parameter to a :class:`PostSort`, defaulting to newest."""
    if not raw:
        return PostSort.NEWEST
    try:
        return PostSort(raw.strip().lower())
    except ValueError:
        logger.info(f"Unknown sort '{raw}', using newest")
        return PostSort.NEWEST


def has_more(page: int, page_size: int, total: int) -> bool:
    """Whether another page follows, given the filtered match count."""
    return page * page_size < total


async def plan_post_query(
    params: PostListParams,
    authors: AuthorDirectory,
    now: datetime | None = None,
) -> PostQuery:
    """
    Build the listing plan for a set of raw parameters.

    Args:
        params: Raw listing parameters
        authors: Directory used to resolve the ``author`` username
        now: Evaluation time for the trending window (defaults to now, UTC)

    Returns:
        PostQuery: Normalized filter, sort and page window

    Raises:
        AuthorNotFoundError: If ``author`` names no known user
    """
    page = min(coerce_positive_int(params.page, 1), settings.POST_PAGE_MAX)
    page_size = min(
        coerce_positive_int(params.limit, settings.POST_PAGE_SIZE),
        settings.POST_PAGE_SIZE_MAX,
    )

    author_id: UUID | None = None
    if params.author:
        author_id = await authors.find_id_by_username(params.author)
        if author_id is None:
            raise AuthorNotFoundError(params.author)

    sort = parse_sort(params.sort)
    created_after: datetime | None = None
    if sort is PostSort.TRENDING:
        now = now or datetime.now(tz=UTC)
        created_after = now - timedelta(days=settings.TRENDING_WINDOW_DAYS)

    return PostQuery(
        page=page,
        page_size=page_size,
        sort=sort,
        category=params.category or None,
        title_contains=escape_like(params.search) if params.search else None,
        author_id=author_id,
        created_after=created_after,
        featured_only=is_truthy_flag(params.featured),
    )
