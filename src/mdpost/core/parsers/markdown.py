"""Excerpt/body parsers: markdown-it rendering and plain text passthrough"""

from typing import Any

from markdown_it import MarkdownIt

from mdpost.core.parsers.base import ParseError
from mdpost.core.result import Err, Ok


DEFAULT_PRESET = "gfm-like"


def _make_parser(options: dict[str, Any]) -> MarkdownIt:
    """Build a MarkdownIt instance from parser options (preset, options_update, enable)."""
    update = {"linkify": False, **options.get("options_update", {})}
    try:
        md = MarkdownIt(options.get("preset", DEFAULT_PRESET), options_update=update)
        for rule in options.get("enable", []):
            md.enable(rule)
    except (KeyError, ValueError) as e:
        raise ParseError(f"invalid markdown options: {e}") from e
    return md


def parse_markdown(segment: str, options: dict[str, Any]) -> Ok[str] | Err:
    """Render a markdown segment to HTML."""
    return Ok(_make_parser(options).render(segment))


def parse_text(segment: str, options: dict[str, Any]) -> Ok[str]:
    return Ok(segment)
