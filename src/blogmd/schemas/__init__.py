"""Shared schemas for blogmd."""

from blogmd.schemas.posts import PostItem
from blogmd.schemas.sidebar import ArticleLink, Category, SidebarConfig
from blogmd.schemas.toc import TocEntry

__all__ = ["ArticleLink", "Category", "PostItem", "SidebarConfig", "TocEntry"]
