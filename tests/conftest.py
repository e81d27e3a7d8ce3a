"""Root test configuration: helpers for writing source posts to a temp directory"""

from pathlib import Path

import pytest


def make_post(
    title: str = "Hello",
    datetime: str = "2020-01-01T00:00:00Z",
    excerpt: str = "An excerpt.",
    body: str = "# Heading\n\nBody text.",
    extra: str = "",
    delimiter: str = "---",
    ) -> str:
    """Return raw source text for a post with the given segments."""
    meta = f"title: {title}\ndatetime: {datetime}\n{extra}"
    return f"{meta}\n{delimiter}\n{excerpt}\n{delimiter}\n{body}\n"


@pytest.fixture(name="posts_dir")
def posts_dir_fixture(tmp_path) -> Path:
    d = tmp_path / "posts"
    d.mkdir()
    return d


@pytest.fixture(name="write_post")
def write_post_fixture(posts_dir):
    """Write a post file under posts_dir; returns its path."""
    def _write(name: str, text: str = None, **kwargs) -> Path:
        path = posts_dir / name
        path.write_text(text if text is not None else make_post(**kwargs), encoding="utf-8")
        return path
    return _write
