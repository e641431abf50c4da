"""Tests for the markdown renderer."""

from __future__ import annotations

import pytest

from blogmd.markdown import (
    CodeBlock,
    Heading,
    ListBlock,
    Paragraph,
    RawHtml,
    parse_blocks,
    render_inline,
    render_markdown,
)


class TestHeadings:
    """Tests for heading conversion."""

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_level_matches_hash_count(self, level: int) -> None:
        """Heading level equals the number of leading hashes."""
        html = render_markdown("#" * level + " Title")
        assert html == f'<h{level} id="title">Title</h{level}>'

    def test_id_is_lowercased_hyphenated_and_stripped(self) -> None:
        """Spaces become hyphens and punctuation is dropped from the id."""
        html = render_markdown("# Hello, World! Again")
        assert html == '<h1 id="hello-world-again">Hello, World! Again</h1>'

    def test_non_ascii_characters_are_dropped_from_id(self) -> None:
        """Only ASCII word characters and hyphens survive in the id."""
        html = render_markdown("## Docker最佳实践 tips")
        assert 'id="docker-tips"' in html
        assert ">Docker最佳实践 tips</h2>" in html

    def test_seven_hashes_is_not_a_heading(self) -> None:
        """More than six hashes falls through to a paragraph."""
        assert render_markdown("####### Too deep") == "<p>####### Too deep</p>"

    def test_inline_markup_inside_heading(self) -> None:
        """Emphasis is rendered in the heading while the id uses raw text."""
        html = render_markdown("## The **bold** move")
        assert html == '<h2 id="the-bold-move">The <strong>bold</strong> move</h2>'

    def test_duplicate_headings_share_id_by_default(self) -> None:
        """Identical headings collide unless unique slugs are requested."""
        html = render_markdown("## Setup\n## Setup")
        assert html.count('id="setup"') == 2

    def test_unique_slugs_adds_suffixes(self) -> None:
        """unique_slugs=True suffixes repeated ids."""
        html = render_markdown("## Setup\n## Setup\n## Setup", unique_slugs=True)
        assert 'id="setup"' in html
        assert 'id="setup-1"' in html
        assert 'id="setup-2"' in html


class TestCodeBlocks:
    """Tests for fenced code blocks."""

    def test_language_class_and_unchanged_body(self) -> None:
        """The language becomes a class and the body is emitted verbatim."""
        body = "def f(x):\n    return x * 2  # **not bold**\n# not a heading"
        html = render_markdown(f"```python\n{body}\n```")
        assert html == f'<pre><code class="language-python">{body}</code></pre>'

    def test_without_language(self) -> None:
        """A bare fence has no class attribute."""
        html = render_markdown("```\nplain\n```")
        assert html == "<pre><code>plain</code></pre>"

    def test_body_is_not_escaped(self) -> None:
        """HTML inside a code block is left as written."""
        html = render_markdown("```html\n<div>x</div>\n```")
        assert "<code class=\"language-html\"><div>x</div></code>" in html

    def test_unclosed_fence_runs_to_end(self) -> None:
        """An unclosed fence turns the rest of the input into code."""
        blocks = parse_blocks("```sh\nls\n- not a list")
        assert blocks == [CodeBlock(language="sh", code="ls\n- not a list")]

    def test_text_after_block_is_rendered(self) -> None:
        """Rendering resumes after the closing fence."""
        html = render_markdown("```js\nlet a = 1;\n```\nAfter *code*")
        assert html.endswith("<p>After <em>code</em></p>")

    def test_fence_closed_on_same_line(self) -> None:
        """A fence opened and closed on one line does not swallow what follows."""
        blocks = parse_blocks("```js```\n# Title\ntext")
        assert blocks == [
            CodeBlock(language="js", code=""),
            Heading(level=1, text="Title"),
            Paragraph(text="text"),
        ]

        html = render_markdown("```js```\n# Title\ntext")
        assert html.startswith('<pre><code class="language-js"></code></pre>')
        assert '<h1 id="title">Title</h1>' in html
        assert html.endswith("<p>text</p>")


class TestInline:
    """Tests for inline rules."""

    def test_strong_before_emphasis(self) -> None:
        """Double asterisks are not split by the single-asterisk rule."""
        assert render_inline("**a** and *b*") == "<strong>a</strong> and <em>b</em>"

    def test_link(self) -> None:
        """Links become anchors."""
        assert (
            render_inline("see [docs](https://example.com/a)")
            == 'see <a href="https://example.com/a">docs</a>'
        )

    def test_link_with_strong_text(self) -> None:
        """Emphasis runs before links, so link text keeps its markup."""
        assert render_inline("[**x**](/y)") == '<a href="/y"><strong>x</strong></a>'

    def test_unbalanced_asterisks_left_partial(self) -> None:
        """Unbalanced markers produce partial markup rather than an error."""
        assert render_inline("**a*") == "*<em>a</em>"


class TestLists:
    """Tests for list runs."""

    def test_unordered_list(self) -> None:
        """Consecutive hyphen lines form one unordered list."""
        html = render_markdown("- one\n- two")
        assert html == "<ul><li>one</li>\n<li>two</li>\n</ul>"

    def test_ordered_list(self) -> None:
        """Numbered lines form an ordered list."""
        html = render_markdown("1. first\n2. second")
        assert html == "<ol><li>first</li>\n<li>second</li>\n</ol>"

    def test_marker_change_starts_new_list(self) -> None:
        """Each contiguous run is classified by its own marker."""
        html = render_markdown("- a\n- b\n1. c\n2. d")
        assert html == "<ul><li>a</li>\n<li>b</li>\n</ul>\n<ol><li>c</li>\n<li>d</li>\n</ol>"

    def test_blank_line_splits_lists(self) -> None:
        """A blank line ends the current list."""
        blocks = parse_blocks("- a\n\n- b")
        assert blocks == [
            ListBlock(ordered=False, items=["a"]),
            ListBlock(ordered=False, items=["b"]),
        ]

    def test_list_items_get_inline_markup(self) -> None:
        """Inline rules apply to list item text."""
        assert "<li><em>x</em></li>" in render_markdown("- *x*")

    def test_horizontal_rule_is_not_a_list(self) -> None:
        """A run of hyphens without a space is not a list marker."""
        assert render_markdown("---") == "<p>---</p>"


class TestParagraphs:
    """Tests for paragraph wrapping."""

    def test_each_line_is_a_paragraph(self) -> None:
        """Plain lines are wrapped one by one."""
        assert render_markdown("first\nsecond") == "<p>first</p>\n<p>second</p>"

    def test_blank_lines_produce_no_empty_paragraphs(self) -> None:
        """Blank lines vanish instead of yielding <p></p>."""
        html = render_markdown("a\n\n\n   \nb")
        assert "<p></p>" not in html
        assert html == "<p>a</p>\n<p>b</p>"

    def test_line_starting_with_inline_markup_is_wrapped(self) -> None:
        """Lines that only start with emphasis still get a paragraph."""
        assert render_markdown("**Note** this") == "<p><strong>Note</strong> this</p>"

    def test_raw_html_passes_through(self) -> None:
        """Lines already starting with a tag are not wrapped."""
        blocks = parse_blocks('<div class="x">raw</div>')
        assert blocks == [RawHtml(html='<div class="x">raw</div>')]
        assert render_markdown('<div class="x">raw</div>') == '<div class="x">raw</div>'

    def test_block_elements_never_wrapped(self) -> None:
        """Headings, lists and code are not placed inside paragraphs."""
        html = render_markdown("# T\n- a\n```\nc\n```\ntext")
        assert "<p><h" not in html
        assert "<p><ul" not in html
        assert "<p><pre" not in html


class TestRenderMarkdown:
    """End-to-end renderer behaviour."""

    def test_empty_and_none_input(self) -> None:
        """Empty input renders to an empty string."""
        assert render_markdown("") == ""
        assert render_markdown(None) == ""

    def test_windows_line_endings(self) -> None:
        """CRLF input renders like LF input."""
        assert render_markdown("# A\r\ntext\r\n") == render_markdown("# A\ntext\n")

    def test_deterministic(self) -> None:
        """The same input always yields the same output."""
        text = "# Title\n\nSome *text* with [a link](/x).\n\n- a\n- b\n\n```py\nx = 1\n```"
        assert render_markdown(text) == render_markdown(text)

    def test_block_classification(self) -> None:
        """A mixed document parses into the expected block sequence."""
        text = "# Title\n\nIntro line\n\n1. one\n2. two\n\n```go\nfmt.Println()\n```"
        assert parse_blocks(text) == [
            Heading(level=1, text="Title"),
            Paragraph(text="Intro line"),
            ListBlock(ordered=True, items=["one", "two"]),
            CodeBlock(language="go", code="fmt.Println()"),
        ]

    @pytest.mark.parametrize(
        "text",
        ["*", "**", "[", "[x](", "```", "#", "# ", "1.", "- ", "<", "***bold***", "\n\n\n"],
    )
    def test_malformed_input_never_raises(self, text: str) -> None:
        """Malformed markdown degrades to some HTML string."""
        assert isinstance(render_markdown(text), str)
