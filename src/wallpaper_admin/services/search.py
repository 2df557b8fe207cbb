"""Search helpers: prefix ranges and the wallpaper tag index."""

from collections.abc import Mapping

from wallpaper_admin.domain.pagination import TextRange

# Sorts after every character a name is expected to contain.
PREFIX_SENTINEL = "\uf8ff"

SEARCH_TAG_SOURCES = frozenset({"name", "tags", "author", "category", "description"})


def prefix_range(field: str, term: str | None) -> TextRange | None:
    """Return the range matching values of ``field`` starting with ``term``."""
    lowered = (term or "").strip().lower()
    if not lowered:
        return None
    return TextRange(field=field, lower=lowered, upper=lowered + PREFIX_SENTINEL)


def searchable_terms(text: str | None) -> list[str]:
    """Split text into lowercased words plus their 2- and 3-char shingles."""
    if not text:
        return []
    words = text.lower().split()
    terms: dict[str, None] = {}
    for word in words:
        if len(word) > 1:
            terms[word] = None
    for word in words:
        for start in range(len(word) - 1):
            terms[word[start : start + 2]] = None
            if start + 3 <= len(word):
                terms[word[start : start + 3]] = None
    return list(terms)


def generate_searchable_tags(fields: Mapping[str, object]) -> list[str]:
    """Build the ``search_tags`` index for a wallpaper's fields."""
    tags: dict[str, None] = {}
    raw_tags = fields.get("tags")
    if isinstance(raw_tags, list):
        for tag in raw_tags:
            tags[str(tag).lower()] = None
    for term in searchable_terms(_as_text(fields.get("name"))):
        tags[term] = None
    author = _as_text(fields.get("author"))
    if author:
        tags[author.lower()] = None
    category = _as_text(fields.get("category"))
    if category:
        tags[category.lower()] = None
    for term in searchable_terms(_as_text(fields.get("description"))):
        tags[term] = None
    return list(tags)


def _as_text(value: object) -> str | None:
    return value if isinstance(value, str) else None
