"""HTTP helpers for fetching markdown documents with retries."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from blogmd.config import (
    BLOGMD_FETCH_BACKOFF_S,
    BLOGMD_FETCH_MAX_RETRIES,
    BLOGMD_FETCH_TIMEOUT_S,
    BLOGMD_USER_AGENT,
)
from blogmd.exceptions import FetchError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


async def fetch_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    on_404: type[Exception] | None = None,
    on_404_message: str | None = None,
) -> str:
    """Fetch a text document, retrying transient failures with backoff.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient to reuse. If not provided, a new
            client is created for this request.
        on_404: Exception class raised on 404. Defaults to FetchError.
        on_404_message: Message for the 404 exception. If None, a generic
            message is used.

    Returns:
        The decoded response body.

    Raises:
        FetchError (or the on_404 exception): If the fetch fails after all
            retries, returns a non-retryable error status, or returns 404.
    """
    timeout = httpx.Timeout(BLOGMD_FETCH_TIMEOUT_S)
    headers = {"User-Agent": BLOGMD_USER_AGENT}
    not_found_exc_class = on_404 or FetchError

    async def do_fetch(http_client: httpx.AsyncClient) -> str:
        last_exc: Exception | None = None

        for attempt in range(BLOGMD_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)

                if response.status_code == 404:
                    message = on_404_message or f"Resource not found at {url}"
                    raise not_found_exc_class(message)

                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    return response.text
            except httpx.HTTPStatusError as exc:
                # 4xx other than 404 will not get better on retry
                raise FetchError(f"Failed to fetch {url}: {exc}") from exc
            except httpx.RequestError as exc:
                last_exc = exc

            if attempt < BLOGMD_FETCH_MAX_RETRIES:
                backoff = BLOGMD_FETCH_BACKOFF_S * (2**attempt)
                logger.debug(
                    "Retrying %s in %.2fs after attempt %d: %s",
                    url,
                    backoff,
                    attempt + 1,
                    last_exc,
                )
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)
