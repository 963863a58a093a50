# tests/services/test_slug.py
"""Tests for app/services/slug.py module."""

from uuid import UUID, uuid4

import pytest

from app.errors import InvalidTitleError
from app.services.slug import SlugResolver, slugify_title


class FakeSlugStore:
    """In-memory slug lookup recording every existence check."""

    def __init__(self, slugs: dict[str, UUID] | None = None) -> None:
        self.slugs = dict(slugs or {})
        self.checked: list[str] = []

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        self.checked.append(slug)
        owner = self.slugs.get(slug)
        return owner is not None and owner != exclude_id


@pytest.fixture
def slug_store() -> FakeSlugStore:
    return FakeSlugStore()


class TestSlugifyTitle:
    def test_spaces_and_case(self) -> None:
        assert slugify_title("Hello World") == "hello-world"

    def test_no_other_sanitization(self) -> None:
        """Only spaces are replaced; punctuation is kept."""
        assert slugify_title("C++ Tips & Tricks!") == "c++-tips-&-tricks!"

    def test_each_space_replaced(self) -> None:
        assert slugify_title("Two  Spaces") == "two--spaces"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_blank_title_rejected(self, title: str | None) -> None:
        with pytest.raises(InvalidTitleError):
            slugify_title(title)


class TestSlugResolver:
    """Tests for SlugResolver.resolve."""

    @pytest.mark.asyncio
    async def test_free_slug_returned_unchanged(self, slug_store: FakeSlugStore) -> None:
        resolver = SlugResolver(slug_store)
        assert await resolver.resolve("Hello World") == "hello-world"
        assert slug_store.checked == ["hello-world"]

    @pytest.mark.asyncio
    async def test_repeated_titles_get_increasing_suffixes(
        self,
        slug_store: FakeSlugStore,
    ) -> None:
        """Hello World -> hello-world, hello-world-2, hello-world-3."""
        resolver = SlugResolver(slug_store)
        resolved = []

        for _ in range(3):
            slug = await resolver.resolve("Hello World")
            slug_store.slugs[slug] = uuid4()
            resolved.append(slug)

        assert resolved == ["hello-world", "hello-world-2", "hello-world-3"]

    @pytest.mark.asyncio
    async def test_first_free_suffix_is_used(self) -> None:
        store = FakeSlugStore({"post": uuid4(), "post-2": uuid4(), "post-4": uuid4()})
        resolver = SlugResolver(store)

        assert await resolver.resolve("Post") == "post-3"
        assert store.checked == ["post", "post-2", "post-3"]

    @pytest.mark.asyncio
    async def test_suffix_is_appended_to_base(self) -> None:
        """Suffixes never accumulate (no ``base-2-3``)."""
        store = FakeSlugStore({"a": uuid4(), "a-2": uuid4()})
        slug = await SlugResolver(store).resolve("A")

        assert slug == "a-3"

    @pytest.mark.asyncio
    async def test_update_keeps_own_slug(self) -> None:
        """A post colliding only with itself keeps its slug."""
        post_id = uuid4()
        store = FakeSlugStore({"hello-world": post_id})

        slug = await SlugResolver(store).resolve("Hello World", exclude_id=post_id)

        assert slug == "hello-world"

    @pytest.mark.asyncio
    async def test_update_collides_with_other_post(self) -> None:
        store = FakeSlugStore({"hello-world": uuid4()})

        slug = await SlugResolver(store).resolve("Hello World", exclude_id=uuid4())

        assert slug == "hello-world-2"

    @pytest.mark.asyncio
    async def test_taken_slugs_are_skipped(self, slug_store: FakeSlugStore) -> None:
        """Slugs rejected at write time count as collisions."""
        slug = await SlugResolver(slug_store).resolve(
            "Hello World",
            taken={"hello-world", "hello-world-2"},
        )

        assert slug == "hello-world-3"

    @pytest.mark.asyncio
    async def test_deterministic(self) -> None:
        existing = {"news": uuid4(), "news-2": uuid4()}
        first = await SlugResolver(FakeSlugStore(existing)).resolve("News")
        second = await SlugResolver(FakeSlugStore(existing)).resolve("News")

        assert first == second == "news-3"
