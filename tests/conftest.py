"""Test setup for blogmd."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers.

    Tests that talk to a live blog host are marked ``integration``:
        pytest -m "not integration" # skip them
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


ARTICLE_PAGE = """
<html>
  <body>
    <header><input id="searchInput" type="text"></header>
    <section>
      <aside class="table-of-contents"><h3>目录</h3><p>placeholder</p></aside>
      <article class="post-content" id="content"><p>Loading...</p></article>
    </section>
  </body>
</html>
"""

INDEX_PAGE = """
<html>
  <body>
    <input id="searchInput" type="text">
    <section>
      <ul class="post-list">
        <li class="post-item">
          <h3><a href="/posts/getting-started-with-react.html">React入门指南</a></h3>
          <div class="post-excerpt">Components, props and hooks.</div>
          <div class="tags">frontend react</div>
        </li>
        <li class="post-item" style="color: red">
          <h3><a href="/posts/docker-best-practices.html">Docker Best Practices</a></h3>
          <div class="post-excerpt">Smaller images and faster builds.</div>
        </li>
        <li class="post-item">
          <h3><a href="/posts/java-basics.html">Java Basics</a></h3>
          <div class="post-excerpt">Types, classes and the JVM.</div>
          <div class="tags">java backend</div>
        </li>
      </ul>
    </section>
  </body>
</html>
"""


@pytest.fixture
def article_page_html() -> str:
    """Article page with a TOC container, content region and search box."""
    return ARTICLE_PAGE


@pytest.fixture
def index_page_html() -> str:
    """Index page listing three searchable posts."""
    return INDEX_PAGE
