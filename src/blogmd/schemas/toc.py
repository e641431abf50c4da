"""Table of contents models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TocEntry(BaseModel):
    """One heading listed in the table of contents."""

    anchor: str
    title: str
    level: int = Field(..., ge=2, le=4)

    @property
    def href(self) -> str:
        return f"#{self.anchor}"
