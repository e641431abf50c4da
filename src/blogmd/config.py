"""Local configuration for blogmd."""

from __future__ import annotations

import os


DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "blogmd/0.1"
DEFAULT_LOAD_TIMEOUT_S = 15.0
DEFAULT_TOC_SCROLL_MARGIN_PX = 20
DEFAULT_TOC_ACTIVE_MARGIN_PX = 100

BLOGMD_FETCH_TIMEOUT_S = float(os.getenv("BLOGMD_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
BLOGMD_FETCH_MAX_RETRIES = int(os.getenv("BLOGMD_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
BLOGMD_FETCH_BACKOFF_S = float(os.getenv("BLOGMD_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
BLOGMD_USER_AGENT = os.getenv("BLOGMD_USER_AGENT", DEFAULT_USER_AGENT)
# Upper bound for a whole document load, retries included.
BLOGMD_LOAD_TIMEOUT_S = float(os.getenv("BLOGMD_LOAD_TIMEOUT_S", str(DEFAULT_LOAD_TIMEOUT_S)))
BLOGMD_TOC_SCROLL_MARGIN_PX = int(os.getenv("BLOGMD_TOC_SCROLL_MARGIN_PX", str(DEFAULT_TOC_SCROLL_MARGIN_PX)))
BLOGMD_TOC_ACTIVE_MARGIN_PX = int(os.getenv("BLOGMD_TOC_ACTIVE_MARGIN_PX", str(DEFAULT_TOC_ACTIVE_MARGIN_PX)))
