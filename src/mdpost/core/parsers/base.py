"""Parser plugin contract shared by the metadata, excerpt and body roles

A parser is any callable ``parse(segment_text, options)`` returning
``Ok(value)`` or ``Err(reason)``. Parsers run concurrently across files and
must not keep state or touch the filesystem. Raising ``ParseError`` is
accepted as a shorthand for returning ``Err``.
"""

from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, Field

from mdpost.core.result import Err, Ok


ParserFn = Callable[[str, dict[str, Any]], "Ok[Any] | Err"]


class ParseError(ValueError):
    """Raised by a parser that cannot handle its segment."""


class ParserSpec(BaseModel):
    """Configured parser for one role: implementation identifier plus its options."""
    name: str
    options: dict[str, Any] = Field(default_factory=dict)


@dataclass(frozen=True)
class BoundParser:
    """A resolved parser implementation with its options applied."""
    name: str
    fn: ParserFn
    options: dict[str, Any]

    def __call__(self, segment: str) -> Ok[Any] | Err:
        try:
            result = self.fn(segment, self.options)
        except ParseError as e:
            return Err(str(e))
        if not isinstance(result, (Ok, Err)):
            raise TypeError(f"parser {self.name!r} returned {type(result).__name__}, expected Ok or Err")
        return result


@dataclass(frozen=True)
class ParserSet:
    metadata: BoundParser
    excerpt: BoundParser
    body: BoundParser
