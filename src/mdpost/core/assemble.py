"""Combine a key and parsed segments into a validated Post"""

from pydantic import ValidationError

from mdpost.core.models import CompileSuccess, Post
from mdpost.core.parsers.base import ParserSet
from mdpost.core.result import Err, Ok
from mdpost.core.split import Segments


def _validation_reason(e: ValidationError) -> str:
    first = e.errors()[0]
    loc = ".".join(str(p) for p in first["loc"]) or "post"
    return f"invalid {loc}: {first['msg']}"


def assemble(key: str, segments: Segments, parsers: ParserSet) -> Ok[CompileSuccess] | Err:
    """Parse all three segments and build a Post; the first failing parser wins.

    The metadata parser must return a mapping with at least title and
    datetime. Nothing is returned for a file unless every step succeeds.
    """
    meta = parsers.metadata(segments.metadata)
    if isinstance(meta, Err):
        return meta
    if not isinstance(meta.value, dict):
        return Err(f"metadata parser {parsers.metadata.name!r} did not return a mapping")

    excerpt = parsers.excerpt(segments.excerpt)
    if isinstance(excerpt, Err):
        return excerpt
    body = parsers.body(segments.body)
    if isinstance(body, Err):
        return body

    fields = dict(meta.value)
    fields.setdefault("draft", False)
    fields.setdefault("tags", ())
    try:
        post = Post(key=key, excerpt=excerpt.value, body=body.value, **fields)
    except (TypeError, ValidationError) as e:
        reason = _validation_reason(e) if isinstance(e, ValidationError) else str(e)
        return Err(reason)
    return Ok(CompileSuccess(key=key, post=post))
