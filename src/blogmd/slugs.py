"""Heading slugs shared by the renderer and the table of contents."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
# ASCII word characters and hyphens survive; everything else is dropped
_UNSAFE_RE = re.compile(r"[^\w\-]", re.ASCII)


def slugify(text: str) -> str:
    """Derive an anchor id from heading text.

    Lowercases, turns each whitespace run into a single hyphen and removes
    characters outside ``[A-Za-z0-9_-]``. Identical text yields identical
    slugs; use :class:`SlugRegistry` when repeats must be told apart.
    """
    slug = _WHITESPACE_RE.sub("-", text.lower())
    return _UNSAFE_RE.sub("", slug)


class SlugRegistry:
    """Hand out slugs that are unique within one document.

    The first occurrence keeps the plain slug, repeats get ``-1``, ``-2``...
    appended.
    """

    def __init__(self) -> None:
        self._seen: dict[str, int] = {}

    def claim(self, text: str) -> str:
        return self.reserve(slugify(text))

    def reserve(self, slug: str) -> str:
        count = self._seen.get(slug)
        if count is None:
            self._seen[slug] = 0
            return slug
        while True:
            count += 1
            candidate = f"{slug}-{count}"
            if candidate not in self._seen:
                break
        self._seen[slug] = count
        self._seen[candidate] = 0
        return candidate
