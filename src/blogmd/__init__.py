"""blogmd: markdown rendering and page behaviour for a static blog."""

from blogmd.boot import BootedPage, boot_page
from blogmd.events import Event, EventBus, Subscription
from blogmd.exceptions import (
    BlogmdError,
    ConfigError,
    ContentNotFoundError,
    FetchError,
)
from blogmd.loader import FAILURE_MESSAGE, ContentLoader, file_reader, http_reader
from blogmd.markdown import parse_blocks, render_markdown
from blogmd.page import Page
from blogmd.schemas import ArticleLink, Category, PostItem, SidebarConfig, TocEntry
from blogmd.search import SearchFilter, apply_search, matches_query
from blogmd.sidebar import DEFAULT_SIDEBAR_CONFIG, SidebarNavigator, find_category, inject_sidebar
from blogmd.slugs import SlugRegistry, slugify
from blogmd.toc import TocBuilder

__all__ = [
    "ArticleLink",
    "BlogmdError",
    "BootedPage",
    "Category",
    "ConfigError",
    "ContentLoader",
    "ContentNotFoundError",
    "DEFAULT_SIDEBAR_CONFIG",
    "Event",
    "EventBus",
    "FAILURE_MESSAGE",
    "FetchError",
    "Page",
    "PostItem",
    "SearchFilter",
    "SidebarConfig",
    "SidebarNavigator",
    "SlugRegistry",
    "Subscription",
    "TocBuilder",
    "TocEntry",
    "apply_search",
    "boot_page",
    "file_reader",
    "find_category",
    "http_reader",
    "inject_sidebar",
    "matches_query",
    "parse_blocks",
    "render_markdown",
    "slugify",
]
