"""Table of contents generation and scroll highlighting."""

from __future__ import annotations

import logging
import time
from typing import Callable, Sequence

from bs4.element import Tag

from blogmd.config import BLOGMD_TOC_ACTIVE_MARGIN_PX, BLOGMD_TOC_SCROLL_MARGIN_PX
from blogmd.events import Event, Subscription
from blogmd.page import Page
from blogmd.schemas import TocEntry
from blogmd.slugs import slugify

logger = logging.getLogger(__name__)

TOC_SELECTOR = ".table-of-contents"
CONTENT_SELECTOR = ".post-content"
HEADING_SELECTOR = "h2, h3, h4"
ACTIVE_CLASS = "active"


def collect_headings(page: Page) -> list[Tag]:
    """Return the h2-h4 elements of the post content in document order."""
    content = page.select_one(CONTENT_SELECTOR)
    if content is None:
        return []
    return content.select(HEADING_SELECTOR)


def active_heading(
    headings: Sequence[Tag],
    offset_of: Callable[[Tag], float | None],
    scroll_y: float,
    *,
    margin: float = BLOGMD_TOC_ACTIVE_MARGIN_PX,
) -> Tag | None:
    """Pick the last heading whose offset minus ``margin`` is at or above ``scroll_y``.

    Headings without a known offset are ignored.
    """
    current = None
    for heading in headings:
        offset = offset_of(heading)
        if offset is not None and offset - margin <= scroll_y:
            current = heading
    return current


class TocBuilder:
    """Build the table of contents for a page and keep its highlight current.

    Args:
        scroll_margin: Pixels left above a heading when jumping to it.
        active_margin: Pixels below the viewport top at which a heading counts
            as being read.
        throttle_s: Minimum seconds between handled scroll events; 0 handles
            every event.
        clock: Monotonic clock used for throttling.
    """

    def __init__(
        self,
        *,
        scroll_margin: float = BLOGMD_TOC_SCROLL_MARGIN_PX,
        active_margin: float = BLOGMD_TOC_ACTIVE_MARGIN_PX,
        throttle_s: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.scroll_margin = scroll_margin
        self.active_margin = active_margin
        self.throttle_s = throttle_s
        self.clock = clock
        self.entries: list[TocEntry] = []
        self._page: Page | None = None
        self._headings: list[Tag] = []
        self._links: dict[str, Tag] = {}
        self._pairs: list[tuple[Tag, Tag]] = []
        self._subscriptions: list[Subscription] = []
        self._last_scroll: float | None = None

    @property
    def mounted(self) -> bool:
        return any(sub.active for sub in self._subscriptions)

    def build(self, page: Page) -> list[TocEntry]:
        """Fill the page's TOC container and return the generated entries.

        Nothing is written when the page lacks a TOC container, a content
        region, or h2-h4 headings.
        """
        self._headings = []
        self._links = {}
        self._pairs = []
        self.entries = []

        container = page.select_one(TOC_SELECTOR)
        if container is None:
            return []
        headings = collect_headings(page)
        if not headings:
            return []

        title = container.find("h3")
        if title is not None:
            title.extract()
        container.clear()
        if title is not None:
            container.append(title)

        toc_list = page.soup.new_tag("ul")
        container.append(toc_list)

        for heading in headings:
            text = heading.get_text()
            if not heading.get("id"):
                heading["id"] = slugify(text.strip())
            entry = TocEntry(anchor=heading["id"], title=text, level=int(heading.name[1]))

            item = page.soup.new_tag("li", attrs={"class": f"toc-{heading.name}"})
            link = page.soup.new_tag("a", href=entry.href)
            link.string = text
            item.append(link)
            toc_list.append(item)

            self.entries.append(entry)
            self._pairs.append((link, heading))
            # Highlighting looks links up by href, so the first of a duplicate id wins.
            self._links.setdefault(entry.anchor, link)
            self._headings.append(heading)

        logger.debug("Built table of contents with %d entries", len(self.entries))
        return self.entries

    def mount(self, page: Page) -> list[TocEntry]:
        """Build the TOC and subscribe its click and scroll handlers.

        Mounting an already mounted builder on the same page is a no-op.
        """
        if self._page is page and self.mounted:
            return self.entries
        self.unmount()
        self._page = page

        if not self.build(page):
            return []

        for link, heading in self._pairs:
            self._subscriptions.append(
                page.events.subscribe("click", self._make_click_handler(heading), target=link)
            )
        self._subscriptions.append(page.events.subscribe("scroll", self._on_scroll))

        self.highlight(page.scroll_y)
        return self.entries

    def unmount(self) -> None:
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions = []
        self._last_scroll = None

    def highlight(self, scroll_y: float) -> TocEntry | None:
        """Mark the link of the heading being read as active."""
        if self._page is None:
            return None
        current = active_heading(
            self._headings, self._page.offset_of, scroll_y, margin=self.active_margin
        )
        for link, _ in self._pairs:
            classes = [cls for cls in link.get("class", []) if cls != ACTIVE_CLASS]
            if classes:
                link["class"] = classes
            elif "class" in link.attrs:
                del link["class"]
        if current is None:
            return None

        link = self._links.get(current.get("id"))
        if link is not None:
            link["class"] = [*link.get("class", []), ACTIVE_CLASS]
        return next(entry for entry in self.entries if entry.anchor == current["id"])

    def _make_click_handler(self, heading: Tag) -> Callable[[Event], None]:
        def on_click(event: Event) -> None:
            event.prevent_default()
            page = self._page
            if page is None:
                return
            offset = page.offset_of(heading)
            if offset is None:
                logger.debug("No layout offset for heading %s", heading.get("id"))
                return
            page.scroll_to(offset - self.scroll_margin, behavior="smooth")

        return on_click

    def _on_scroll(self, event: Event) -> None:
        if self.throttle_s > 0:
            now = self.clock()
            if self._last_scroll is not None and now - self._last_scroll < self.throttle_s:
                return
            self._last_scroll = now
        scroll_y = event.scroll_y if event.scroll_y is not None else 0.0
        self.highlight(scroll_y)
