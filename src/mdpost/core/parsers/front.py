"""Front matter parsers: YAML (default) and JSON key-value metadata"""

import datetime as dt
import json
from typing import Any

import yaml

from mdpost.core.parsers.base import ParseError
from mdpost.core.result import Err, Ok


REQUIRED_FIELDS = ("title", "datetime")
BASE_FIELDS = {"title", "datetime", "draft", "tags"}


def _to_datetime(value: Any) -> dt.datetime:
    """Coerce a YAML timestamp, YAML date or ISO 8601 string to an aware datetime."""
    if isinstance(value, dt.datetime):
        parsed = value
    elif isinstance(value, dt.date):
        parsed = dt.datetime.combine(value, dt.time())
    elif isinstance(value, str):
        try:
            parsed = dt.datetime.fromisoformat(value.strip())
        except ValueError as e:
            raise ParseError(f"invalid datetime {value!r}: {e}") from e
    else:
        raise ParseError(f"invalid datetime {value!r}: expected a timestamp")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


def _to_tags(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if isinstance(value, list) and all(isinstance(t, (str, int, float)) for t in value):
        return [str(t) for t in value]
    raise ParseError(f"invalid tags {value!r}: expected a list of strings")


def _scalar(value: Any) -> Any:
    """Render dates as ISO strings so extra metadata stays serialisable."""
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return value


def build_metadata(fields: dict[str, Any]) -> dict[str, Any]:
    """Validate raw front matter and split it into base fields and extra metadata."""
    for name in REQUIRED_FIELDS:
        if fields.get(name) in (None, ""):
            raise ParseError(f"missing required field {name!r}")

    draft = fields.get("draft", False)
    if not isinstance(draft, bool):
        raise ParseError(f"invalid draft {draft!r}: expected true or false")

    return {
        "title": str(fields["title"]),
        "datetime": _to_datetime(fields["datetime"]),
        "draft": draft,
        "tags": _to_tags(fields.get("tags")),
        "extra": {k: _scalar(v) for k, v in fields.items() if k not in BASE_FIELDS},
    }


def parse_yaml(segment: str, options: dict[str, Any]) -> Ok[dict[str, Any]] | Err:
    """Parse a YAML mapping segment into post metadata."""
    try:
        fields = yaml.safe_load(segment) or {}
    except (yaml.YAMLError, ValueError) as e:
        # out-of-range timestamps such as 2020-13-01 raise ValueError from the constructor
        return Err(f"invalid YAML front matter: {e}")
    if not isinstance(fields, dict):
        return Err(f"invalid YAML front matter: expected a mapping, got {type(fields).__name__}")
    try:
        return Ok(build_metadata(fields))
    except ParseError as e:
        return Err(str(e))


def parse_json(segment: str, options: dict[str, Any]) -> Ok[dict[str, Any]] | Err:
    """Parse a JSON object segment into post metadata."""
    try:
        fields = json.loads(segment)
    except json.JSONDecodeError as e:
        return Err(f"invalid JSON front matter: {e}")
    if not isinstance(fields, dict):
        return Err(f"invalid JSON front matter: expected an object, got {type(fields).__name__}")
    try:
        return Ok(build_metadata(fields))
    except ParseError as e:
        return Err(str(e))
