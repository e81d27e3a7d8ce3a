"""Built-in parser registry and resolution of configured parser specs"""

import importlib

from mdpost.core.parsers.base import BoundParser, ParserFn, ParserSet, ParserSpec
from mdpost.core.parsers.front import parse_json, parse_yaml
from mdpost.core.parsers.markdown import parse_markdown, parse_text


PARSERS: dict[str, ParserFn] = {
    "yaml":     parse_yaml,
    "json":     parse_json,
    "markdown": parse_markdown,
    "text":     parse_text,
}


def _import_parser(name: str) -> ParserFn:
    """Import a custom parser given as 'package.module:callable'."""
    module_name, _, attr = name.partition(":")
    try:
        fn = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot load parser {name!r}: {e}") from e
    if not callable(fn):
        raise ValueError(f"Parser {name!r} is not callable")
    return fn


def resolve_parser(spec: ParserSpec) -> BoundParser:
    """Look up a parser by registry name or import path and bind its options."""
    if spec.name in PARSERS:
        fn = PARSERS[spec.name]
    elif ":" in spec.name:
        fn = _import_parser(spec.name)
    else:
        raise ValueError(f"Unknown parser {spec.name!r}; available: {sorted(PARSERS)}")
    return BoundParser(name=spec.name, fn=fn, options=dict(spec.options))


def resolve_parsers(metadata: ParserSpec, excerpt: ParserSpec, body: ParserSpec) -> ParserSet:
    return ParserSet(
        metadata=resolve_parser(metadata),
        excerpt=resolve_parser(excerpt),
        body=resolve_parser(body),
    )
