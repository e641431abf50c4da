"""Command line entry points for rendering markdown and previewing pages."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from blogmd.boot import boot_page
from blogmd.exceptions import ConfigError
from blogmd.io_utils import read_text_async, write_text_async
from blogmd.loader import ContentLoader, file_reader
from blogmd.markdown import render_markdown
from blogmd.page import Page
from blogmd.schemas import SidebarConfig
from blogmd.sidebar import DEFAULT_SIDEBAR_CONFIG

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blogmd", description="Render blog markdown and preview pages.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render a markdown file to an HTML fragment")
    render.add_argument("file", type=Path, help="Markdown file")
    render.add_argument("-o", "--output", type=Path, help="Write HTML here instead of stdout")
    render.add_argument(
        "--unique-slugs",
        action="store_true",
        help="Suffix repeated heading ids with -1, -2, ...",
    )
    render.set_defaults(func=run_render)

    preview = subparsers.add_parser(
        "preview", help="Load markdown into a page and apply TOC, search and sidebar"
    )
    preview.add_argument("page", type=Path, help="HTML page file")
    preview.add_argument("--content", help="Markdown path, relative to --root")
    preview.add_argument("--target", default="content", help="Id of the element receiving the content")
    preview.add_argument("--root", type=Path, default=Path("."), help="Directory markdown paths resolve against")
    preview.add_argument("--path", default="/", help="URL path the page is served at")
    preview.add_argument("--sidebar-config", type=Path, help="JSON file with sidebar categories")
    preview.add_argument("-o", "--output", type=Path, help="Write HTML here instead of stdout")
    preview.set_defaults(func=run_preview)
    return parser


def run_render(args: argparse.Namespace) -> int:
    path: Path = args.file
    if not path.is_file():
        raise FileNotFoundError(f"Markdown file not found: {path}")
    html = render_markdown(path.read_text(encoding="utf-8"), unique_slugs=args.unique_slugs)
    if args.output:
        args.output.write_text(html, encoding="utf-8")
    else:
        print(html)
    return 0


def run_preview(args: argparse.Namespace) -> int:
    if not args.page.is_file():
        raise FileNotFoundError(f"HTML file not found: {args.page}")
    config = (
        SidebarConfig.from_file(args.sidebar_config)
        if args.sidebar_config
        else DEFAULT_SIDEBAR_CONFIG
    )
    return asyncio.run(_preview(args, config))


async def _preview(args: argparse.Namespace, config: SidebarConfig) -> int:
    page = Page(await read_text_async(args.page), path=args.path)
    booted = await boot_page(
        page,
        loader=ContentLoader(file_reader(args.root)),
        content_path=args.content,
        target_id=args.target,
        sidebar_config=config,
    )
    html = page.html()
    await booted.teardown()

    if args.output:
        await write_text_async(args.output, html)
    else:
        print(html)
    return 1 if booted.content_loaded is False else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except (FileNotFoundError, UnicodeDecodeError, ConfigError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
