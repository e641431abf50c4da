"""Render blog markdown into HTML fragments.

The document is split into blocks by a single pass over its lines; each
contiguous run of lines is classified once (fenced code, heading, list,
raw HTML or paragraph) and then serialized on its own. Inline markup is only
applied to heading, list item and paragraph text, so code bodies and raw HTML
are emitted exactly as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from blogmd.slugs import SlugRegistry, slugify

_FENCE_RE = re.compile(r"^\s*```(.*)$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_BULLET_RE = re.compile(r"^\s*-\s+(.+)$")
_ORDERED_RE = re.compile(r"^\s*\d+\.\s+(.+)$")

# Strong has to run before emphasis or "*" would eat half of a "**" span.
_STRONG_RE = re.compile(r"\*\*([^*]+)\*\*")
_EM_RE = re.compile(r"\*([^*]+)\*")
_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


@dataclass
class Heading:
    level: int
    text: str


@dataclass
class CodeBlock:
    language: str | None
    code: str


@dataclass
class ListBlock:
    ordered: bool
    items: list[str] = field(default_factory=list)


@dataclass
class Paragraph:
    text: str


@dataclass
class RawHtml:
    html: str


Block = Union[Heading, CodeBlock, ListBlock, Paragraph, RawHtml]


def render_markdown(text: str | None, *, unique_slugs: bool = False) -> str:
    """Convert a markdown document into an HTML fragment.

    Parameters
    ----------
    text : str | None
        Markdown source. ``None`` and empty input render to an empty string.
    unique_slugs : bool
        If True, repeated heading texts get numeric suffixes (``intro``,
        ``intro-1``...). By default identical headings share one id.
    """
    if not text:
        return ""
    return render_blocks(parse_blocks(text), unique_slugs=unique_slugs)


def parse_blocks(text: str) -> list[Block]:
    """Split markdown source into blocks."""
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    blocks: list[Block] = []
    index = 0

    while index < len(lines):
        line = lines[index]

        fence = _FENCE_RE.match(line)
        if fence:
            block, index = _consume_fence(lines, index, fence.group(1))
            blocks.append(block)
            continue

        if not line.strip():
            index += 1
            continue

        heading = _HEADING_RE.match(line)
        if heading and heading.group(2).strip():
            blocks.append(
                Heading(level=len(heading.group(1)), text=heading.group(2).strip())
            )
            index += 1
            continue

        if _list_item(line) is not None:
            block, index = _consume_list(lines, index)
            blocks.append(block)
            continue

        if line.lstrip().startswith("<"):
            blocks.append(RawHtml(html=line))
        else:
            blocks.append(Paragraph(text=line.strip()))
        index += 1

    return blocks


def _consume_fence(lines: list[str], start: int, info: str) -> tuple[CodeBlock, int]:
    if "```" in info:
        # Opened and closed on one line, e.g. ```js```: the block ends here.
        inline, _ = info.split("```", 1)
        words = inline.split()
        return CodeBlock(language=words[0] if words else None, code=""), start + 1

    words = info.split()
    language = words[0] if words else None
    body: list[str] = []
    index = start + 1
    while index < len(lines):
        if lines[index].strip().startswith("```"):
            index += 1
            break
        body.append(lines[index])
        index += 1
    # An unclosed fence swallows the rest of the document.
    return CodeBlock(language=language, code="\n".join(body)), index


def _list_item(line: str) -> tuple[bool, str] | None:
    """Return ``(ordered, item_text)`` for a list line, otherwise None."""
    match = _BULLET_RE.match(line)
    if match:
        return False, match.group(1).strip()
    match = _ORDERED_RE.match(line)
    if match:
        return True, match.group(1).strip()
    return None


def _consume_list(lines: list[str], start: int) -> tuple[ListBlock, int]:
    ordered, first = _list_item(lines[start])
    block = ListBlock(ordered=ordered, items=[first])
    index = start + 1
    while index < len(lines):
        item = _list_item(lines[index])
        if item is None or item[0] != ordered:
            break
        block.items.append(item[1])
        index += 1
    return block, index


def render_blocks(blocks: list[Block], *, unique_slugs: bool = False) -> str:
    """Serialize parsed blocks, one block per output line group."""
    registry = SlugRegistry() if unique_slugs else None
    parts: list[str] = []
    for block in blocks:
        if isinstance(block, Heading):
            anchor = registry.claim(block.text) if registry else slugify(block.text)
            parts.append(
                f'<h{block.level} id="{anchor}">{render_inline(block.text)}</h{block.level}>'
            )
        elif isinstance(block, CodeBlock):
            class_attr = f' class="language-{block.language}"' if block.language else ""
            parts.append(f"<pre><code{class_attr}>{block.code}</code></pre>")
        elif isinstance(block, ListBlock):
            tag = "ol" if block.ordered else "ul"
            items = "".join(f"<li>{render_inline(item)}</li>\n" for item in block.items)
            parts.append(f"<{tag}>{items}</{tag}>")
        elif isinstance(block, Paragraph):
            parts.append(f"<p>{render_inline(block.text)}</p>")
        else:
            parts.append(block.html)
    return "\n".join(parts)


def render_inline(text: str) -> str:
    """Apply strong, emphasis and link markup to a single line of text."""
    text = _STRONG_RE.sub(r"<strong>\1</strong>", text)
    text = _EM_RE.sub(r"<em>\1</em>", text)
    return _LINK_RE.sub(r'<a href="\2">\1</a>', text)
