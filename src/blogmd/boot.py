"""Page boot sequence: content first, then the components that read it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from blogmd.loader import ContentLoader
from blogmd.page import Page
from blogmd.schemas import SidebarConfig
from blogmd.search import SearchFilter
from blogmd.sidebar import DEFAULT_SIDEBAR_CONFIG, SidebarNavigator
from blogmd.toc import TocBuilder

logger = logging.getLogger(__name__)


@dataclass
class BootedPage:
    """Components mounted by :func:`boot_page`."""

    page: Page
    content_loaded: bool | None
    toc: TocBuilder
    search: SearchFilter
    sidebar: SidebarNavigator

    async def teardown(self) -> None:
        self.toc.unmount()
        self.search.unmount()
        await self.page.teardown()


async def boot_page(
    page: Page,
    *,
    loader: ContentLoader | None = None,
    content_path: str | None = None,
    target_id: str | None = None,
    sidebar_config: SidebarConfig = DEFAULT_SIDEBAR_CONFIG,
    toc: TocBuilder | None = None,
) -> BootedPage:
    """Load the page's markdown, then mount TOC, search and sidebar.

    The markdown load runs as a page task so tearing the page down cancels it.
    ``content_loaded`` is None when no content was requested.
    """
    content_loaded: bool | None = None
    if loader is not None and content_path and target_id:
        content_loaded = await page.spawn(loader.display(content_path, target_id, page))

    booted = BootedPage(
        page=page,
        content_loaded=content_loaded,
        toc=toc or TocBuilder(),
        search=SearchFilter(),
        sidebar=SidebarNavigator(sidebar_config),
    )
    entries = booted.toc.mount(page)
    has_search = booted.search.mount(page)
    sidebar = booted.sidebar.mount(page)
    logger.debug(
        "Booted %s: %d toc entries, search=%s, sidebar=%s",
        page.path,
        len(entries),
        has_search,
        sidebar is not None,
    )
    return booted
