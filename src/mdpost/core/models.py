"""Post entity and per-file compilation outcomes"""

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Post(BaseModel):
    """A compiled post. Immutable once assembled."""
    model_config = ConfigDict(frozen=True)

    key: str
    title: str
    datetime: dt.datetime
    draft: bool = False
    tags: tuple[str, ...] = ()
    excerpt: Any = None
    body: Any = None
    extra: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("datetime")
    @classmethod
    def _aware(cls, value: dt.datetime) -> dt.datetime:
        # naive timestamps are read as UTC so every post shares one total order
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value

    @field_validator("extra")
    @classmethod
    def _read_only(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @field_serializer("extra")
    def _plain(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return dict(value)


@dataclass(frozen=True)
class CompileSuccess:
    key: str
    post: Post


@dataclass(frozen=True)
class CompileFailure:
    path: Path
    reason: str


CompileOutcome = CompileSuccess | CompileFailure


@dataclass(frozen=True)
class CompileError:
    """A source file excluded from the snapshot, with the reason it failed."""
    path: str
    reason: str


RepositorySnapshot = Mapping[str, Post]


def freeze_snapshot(posts: dict[str, Post]) -> RepositorySnapshot:
    """Wrap a key -> Post dict in a read-only view."""
    return MappingProxyType(dict(posts))
