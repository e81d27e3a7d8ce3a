"""Snapshot artifact: write compiled posts and diagnostics to JSON and load them back"""

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from mdpost.core.models import CompileError, Post, RepositorySnapshot, freeze_snapshot


_POSTS = TypeAdapter(list[Post])
_ERRORS = TypeAdapter(list[CompileError])


def build_artifact(posts: RepositorySnapshot, errors: list[CompileError]) -> dict[str, Any]:
    """Return the JSON-ready artifact dict; posts sorted by key for stable output."""
    ordered = [posts[k] for k in sorted(posts)]
    return {
        "posts": _POSTS.dump_python(ordered, mode="json"),
        "errors": _ERRORS.dump_python(errors, mode="json"),
    }


def write_snapshot(posts: RepositorySnapshot, errors: list[CompileError], path: Path) -> Path:
    """Write the artifact JSON to path, creating parent directories. Returns path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(build_artifact(posts, errors), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return path


def read_snapshot(path: Path) -> tuple[RepositorySnapshot, list[CompileError]]:
    """Load an artifact written by write_snapshot; raises ValueError if it is malformed."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        posts = _POSTS.validate_python(data["posts"])
        errors = _ERRORS.validate_python(data.get("errors", []))
    except (json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
        raise ValueError(f"Invalid snapshot {path}: {e}") from e
    return freeze_snapshot({p.key: p for p in posts}), errors
