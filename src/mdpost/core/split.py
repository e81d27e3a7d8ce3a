"""Splitting a raw source document into metadata, excerpt and body segments"""

from typing import NamedTuple

from mdpost.core.result import Err, Ok


SEGMENT_COUNT = 3


class Segments(NamedTuple):
    metadata: str
    excerpt: str
    body: str


def split_segments(raw_text: str, delimiter: str) -> list[str]:
    """Split raw_text on every literal occurrence of delimiter, preserving order."""
    if not delimiter:
        raise ValueError("split pattern must not be empty")
    return raw_text.split(delimiter)


def _invalid(delimiter: str, count: int) -> Err:
    return Err(
        f"invalid format, expected {SEGMENT_COUNT} segments separated by "
        f"{delimiter!r}, got {count}"
    )


def split_document(raw_text: str, delimiter: str, strict: bool = False) -> Ok[Segments] | Err:
    """Return the trimmed (metadata, excerpt, body) segments of a document.

    Fewer than three segments is always a structural error. Extra delimiter
    occurrences stay inside the body unless strict is set, in which case the
    document is rejected as well.
    """
    parts = split_segments(raw_text, delimiter)
    if len(parts) < SEGMENT_COUNT:
        return _invalid(delimiter, len(parts))
    if len(parts) > SEGMENT_COUNT:
        if strict:
            return _invalid(delimiter, len(parts))
        parts = parts[:2] + [delimiter.join(parts[2:])]
    return Ok(Segments(*(p.strip() for p in parts)))
