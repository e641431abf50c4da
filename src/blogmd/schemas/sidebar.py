"""Sidebar category models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from blogmd.exceptions import ConfigError


class ArticleLink(BaseModel):
    """A single article listed under a category."""

    title: str
    url: str


class Category(BaseModel):
    """A blog topic with its ordered article list."""

    title: str
    articles: list[ArticleLink] = Field(default_factory=list)


class SidebarConfig(BaseModel):
    """Category table used by the sidebar navigator.

    Keys are category keys as they appear in ``/posts/<key>/`` paths. Lookup
    follows insertion order, so the first matching category wins.
    """

    categories: dict[str, Category] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: Path) -> "SidebarConfig":
        """Load a sidebar config from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or does not validate.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read sidebar config {path}: {exc}") from exc
        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise ConfigError(f"Invalid sidebar config {path}: {exc}") from exc
