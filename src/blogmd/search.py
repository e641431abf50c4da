"""Client-side style filtering of the post list."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from bs4 import BeautifulSoup
from bs4.element import Tag

from blogmd.events import Event, Subscription
from blogmd.page import Page
from blogmd.schemas import PostItem

logger = logging.getLogger(__name__)

SEARCH_INPUT_ID = "searchInput"
POST_ITEM_SELECTOR = ".post-item"

_DISPLAY_RE = re.compile(r"^\s*display\s*:", re.IGNORECASE)


def _text_of(item: Tag, selector: str) -> str:
    node = item.select_one(selector)
    return node.get_text() if node is not None else ""


def read_post_item(item: Tag) -> PostItem:
    """Extract the searchable text of one ``.post-item`` element."""
    return PostItem(
        title=_text_of(item, "h3 a"),
        excerpt=_text_of(item, ".post-excerpt"),
        tags=_text_of(item, ".tags"),
        visible=not is_hidden(item),
    )


def extract_post_items(soup: BeautifulSoup | Tag) -> list[PostItem]:
    return [read_post_item(item) for item in soup.select(POST_ITEM_SELECTOR)]


def matches_query(item: PostItem, query: str) -> bool:
    """Plain substring match against title, excerpt or tags, case-insensitive.

    The empty query matches every item.
    """
    term = query.lower().strip()
    return (
        term in item.title.lower()
        or term in item.excerpt.lower()
        or term in item.tags.lower()
    )


def filter_posts(items: Iterable[PostItem], query: str) -> list[PostItem]:
    """Return copies of ``items`` with ``visible`` set for ``query``."""
    return [item.model_copy(update={"visible": matches_query(item, query)}) for item in items]


def _style_declarations(tag: Tag) -> list[str]:
    style = tag.get("style") or ""
    return [part.strip() for part in style.split(";") if part.strip()]


def is_hidden(tag: Tag) -> bool:
    return any(
        _DISPLAY_RE.match(decl) and decl.split(":", 1)[1].strip().lower() == "none"
        for decl in _style_declarations(tag)
    )


def set_visible(tag: Tag, visible: bool) -> None:
    """Toggle ``display: none`` on ``tag``, keeping its other inline styles."""
    declarations = [decl for decl in _style_declarations(tag) if not _DISPLAY_RE.match(decl)]
    if not visible:
        declarations.append("display: none")
    if declarations:
        tag["style"] = "; ".join(declarations)
    elif "style" in tag.attrs:
        del tag["style"]


def apply_search(soup: BeautifulSoup | Tag, query: str) -> list[PostItem]:
    """Show the post items matching ``query`` and hide the rest.

    Items stay in place in the document; only their visibility changes.
    """
    results: list[PostItem] = []
    for element in soup.select(POST_ITEM_SELECTOR):
        item = read_post_item(element)
        visible = matches_query(item, query)
        set_visible(element, visible)
        results.append(item.model_copy(update={"visible": visible}))
    logger.debug(
        "Search %r matched %d of %d posts",
        query,
        sum(1 for item in results if item.visible),
        len(results),
    )
    return results


class SearchFilter:
    """Re-filter the post list on every change of the search box."""

    def __init__(self) -> None:
        self.results: list[PostItem] = []
        self._page: Page | None = None
        self._subscription: Subscription | None = None

    @property
    def mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def mount(self, page: Page) -> bool:
        """Subscribe to the page's search input; False when there is none."""
        if self._page is page and self.mounted:
            return True
        self.unmount()
        search_input = page.get_element_by_id(SEARCH_INPUT_ID)
        if search_input is None:
            return False
        self._page = page
        self._subscription = page.events.subscribe(
            "input", self._on_input, target=search_input
        )
        return True

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_input(self, event: Event) -> None:
        if self._page is None:
            return
        self.results = apply_search(self._page.soup, event.value or "")
