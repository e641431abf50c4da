"""Category sidebar navigation."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from bs4.element import Tag

from blogmd.page import Page
from blogmd.schemas import ArticleLink, Category, SidebarConfig

logger = logging.getLogger(__name__)

SIDEBAR_CLASS = "sidebar-nav"

DEFAULT_SIDEBAR_CONFIG = SidebarConfig(
    categories={
        "frontend": Category(
            title="前端开发",
            articles=[
                ArticleLink(title="React入门指南", url="/posts/getting-started-with-react.html"),
            ],
        ),
        "java": Category(
            title="Java 从入门到精「放」通「弃」",
            articles=[
                ArticleLink(title="Java基础知识全解析", url="/posts/java-basics.html"),
            ],
        ),
        "devops": Category(
            title="DevOps",
            articles=[
                ArticleLink(title="Docker最佳实践", url="/posts/docker-best-practices.html"),
            ],
        ),
        "architecture": Category(
            title="架构设计",
            articles=[
                ArticleLink(title="微服务架构设计", url="/posts/microservices-architecture.html"),
            ],
        ),
    }
)


def find_category(path: str, config: SidebarConfig) -> str | None:
    """Return the key of the category owning ``path``, if any.

    A category owns a path when the path contains ``/posts/<key>/`` or is
    exactly one of its article URLs.
    """
    for key, category in config.categories.items():
        if f"/posts/{key}/" in path:
            return key
        if any(article.url == path for article in category.articles):
            return key
    return None


def build_sidebar_nav(category: Category, current_path: str, soup: BeautifulSoup) -> Tag:
    """Create the ``div.sidebar-nav`` block for ``category``."""
    sidebar = soup.new_tag("div", attrs={"class": SIDEBAR_CLASS})

    title = soup.new_tag("h3")
    title.string = category.title
    sidebar.append(title)

    article_list = soup.new_tag("ul")
    for article in category.articles:
        item = soup.new_tag("li")
        link = soup.new_tag("a", href=article.url)
        link.string = article.title
        if article.url == current_path:
            link["class"] = ["active"]
        item.append(link)
        article_list.append(item)
    sidebar.append(article_list)
    return sidebar


def inject_sidebar(page: Page, config: SidebarConfig = DEFAULT_SIDEBAR_CONFIG) -> Tag | None:
    """Insert the category navigation as the first child of the page section.

    Returns:
        The inserted block, or None when no category matches the page path
        or the page has no ``section`` element.
    """
    key = find_category(page.path, config)
    if key is None:
        return None

    section = page.soup.find("section")
    if section is None:
        logger.warning("Page %s has no section to hold the %s sidebar", page.path, key)
        return None

    sidebar = build_sidebar_nav(config.categories[key], page.path, page.soup)
    section.insert(0, sidebar)
    return sidebar


class SidebarNavigator:
    """Mountable wrapper around :func:`inject_sidebar`.

    Mounting twice on the same page does not insert a second block.
    """

    def __init__(self, config: SidebarConfig = DEFAULT_SIDEBAR_CONFIG) -> None:
        self.config = config
        self.block: Tag | None = None
        self._soup: BeautifulSoup | None = None

    def mount(self, page: Page) -> Tag | None:
        if self._soup is page.soup and self.block is not None and self.block.parent is not None:
            return self.block
        self._soup = page.soup
        self.block = inject_sidebar(page, self.config)
        return self.block

    def unmount(self) -> None:
        if self.block is not None:
            self.block.decompose()
        self.block = None
        self._soup = None
