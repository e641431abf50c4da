"""Post list models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class PostItem(BaseModel):
    """Searchable text of one ``.post-item`` entry.

    Attributes:
        title: Text of the entry's heading link.
        excerpt: Text of the ``.post-excerpt`` block.
        tags: Text of the optional ``.tags`` block, empty when absent.
        visible: Whether the entry passed the last filter.
    """

    title: str = ""
    excerpt: str = ""
    tags: str = ""
    visible: bool = Field(default=True)
