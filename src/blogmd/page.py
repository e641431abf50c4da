"""A parsed blog page that components mount onto."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Coroutine, Mapping

from bs4 import BeautifulSoup
from bs4.element import Tag

from blogmd.events import Event, EventBus

logger = logging.getLogger(__name__)


@dataclass
class ScrollRequest:
    """A recorded call to :meth:`Page.scroll_to`."""

    top: float
    behavior: str


class Page:
    """Document tree plus the bits of window state the components need.

    Layout is not computed: ``offsets`` maps element ids to their vertical
    offset and is supplied by whoever knows the layout (tests, a headless
    browser dump...).
    """

    def __init__(
        self,
        html: str,
        *,
        path: str = "/",
        offsets: Mapping[str, float] | None = None,
    ) -> None:
        self.soup = BeautifulSoup(html, "lxml")
        self.path = path
        self.offsets: dict[str, float] = dict(offsets or {})
        self.scroll_y = 0.0
        self.scroll_history: list[ScrollRequest] = []
        self.events = EventBus()
        self._tasks: set[asyncio.Task[Any]] = set()

    def get_element_by_id(self, element_id: str) -> Tag | None:
        return self.soup.find(id=element_id)

    def select_one(self, selector: str) -> Tag | None:
        return self.soup.select_one(selector)

    def offset_of(self, element: Tag) -> float | None:
        """Vertical offset of an element, None when its layout is unknown."""
        element_id = element.get("id")
        if not element_id:
            return None
        return self.offsets.get(element_id)

    def scroll_to(self, top: float, *, behavior: str = "auto") -> None:
        self.scroll_history.append(ScrollRequest(top=top, behavior=behavior))
        self.scroll_y = max(0.0, float(top))
        self.events.dispatch(Event("scroll", scroll_y=self.scroll_y))

    def scroll(self, y: float) -> None:
        """Simulate the reader scrolling to ``y``."""
        self.scroll_to(y)

    def click(self, element: Tag) -> Event:
        """Dispatch a click; unprevented in-page links jump to their anchor."""
        event = self.events.dispatch(Event("click", target=element))
        if event.default_prevented:
            return event
        href = element.get("href") if element.name == "a" else None
        if href and href.startswith("#"):
            anchor = self.get_element_by_id(href[1:])
            offset = self.offset_of(anchor) if anchor is not None else None
            if offset is not None:
                self.scroll_to(offset)
        return event

    def type_text(self, element: Tag, value: str) -> Event:
        element["value"] = value
        return self.events.dispatch(Event("input", target=element, value=value))

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        """Run ``coro`` as a task that is cancelled when the page is torn down."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def teardown(self) -> None:
        """Cancel pending loads and drop every event subscription."""
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            logger.debug("Cancelled %d pending task(s) on %s", len(pending), self.path)
        self.events.clear()

    async def navigate(self, html: str, *, path: str) -> None:
        """Replace the document, as following a link would."""
        await self.teardown()
        self.soup = BeautifulSoup(html, "lxml")
        self.path = path
        self.offsets = {}
        self.scroll_y = 0.0
        self.scroll_history = []

    def html(self) -> str:
        return str(self.soup)
