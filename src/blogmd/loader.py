"""Fetch markdown documents and inject the rendered HTML into a page."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from blogmd.config import BLOGMD_LOAD_TIMEOUT_S
from blogmd.exceptions import ContentNotFoundError, FetchError
from blogmd.http_utils import fetch_with_retries
from blogmd.io_utils import read_text_async
from blogmd.markdown import render_markdown

if TYPE_CHECKING:
    from blogmd.page import Page

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "<p>Failed to load content.</p>"

Reader = Callable[[str], Awaitable[str]]
"""Returns the document text for a path, raising FetchError (or OSError) on failure."""


def http_reader(base_url: str, *, client: httpx.AsyncClient | None = None) -> Reader:
    """Build a reader that resolves paths against ``base_url`` over HTTP."""

    async def read(path: str) -> str:
        url = urljoin(base_url, path)
        return await fetch_with_retries(
            url,
            client=client,
            on_404=ContentNotFoundError,
            on_404_message=f"No markdown document at {url}",
        )

    return read


def file_reader(root: Path) -> Reader:
    """Build a reader that resolves paths below a local directory."""
    base = root.resolve()

    async def read(path: str) -> str:
        target = (base / path.lstrip("/")).resolve()
        if not target.is_relative_to(base):
            raise ContentNotFoundError(f"{path} is outside {base}")
        if not target.is_file():
            raise ContentNotFoundError(f"No markdown document at {target}")
        try:
            return await read_text_async(target)
        except UnicodeDecodeError as exc:
            raise FetchError(f"{target} is not valid UTF-8: {exc}") from exc

    return read


class ContentLoader:
    """Load markdown through a reader and render it into page elements.

    Args:
        reader: Coroutine function mapping a path to document text.
        timeout_s: Upper bound for a single load. None disables the bound.
    """

    def __init__(self, reader: Reader, *, timeout_s: float | None = BLOGMD_LOAD_TIMEOUT_S) -> None:
        self.reader = reader
        self.timeout_s = timeout_s

    async def load(self, path: str) -> str | None:
        """Return the document text, or None if it could not be fetched."""
        try:
            return await asyncio.wait_for(self.reader(path), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            logger.error("Timed out after %ss loading markdown file %s", self.timeout_s, path)
        except (FetchError, OSError, httpx.HTTPError) as exc:
            logger.error("Error loading markdown file %s: %s", path, exc)
        return None

    async def display(self, path: str, target_id: str, page: Page) -> bool:
        """Render ``path`` into the element with id ``target_id``.

        On failure the element receives :data:`FAILURE_MESSAGE` instead.

        Returns:
            True if the document was loaded and rendered.
        """
        markdown_content = await self.load(path)
        target = page.get_element_by_id(target_id)
        if target is None:
            logger.warning("No element with id %r to render %s into", target_id, path)
            return False

        if markdown_content:
            html = render_markdown(markdown_content)
            loaded = True
        else:
            html = FAILURE_MESSAGE
            loaded = False

        target.clear()
        fragment = BeautifulSoup(html, "html.parser")
        for node in list(fragment.contents):
            target.append(node.extract())
        return loaded
