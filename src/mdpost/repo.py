"""Compiled post repository and its read-only query API

    repo = Repository.compile(load_config())
    posts = repo.order_by_datetime(repo.exclude_draft(repo.all()))
    post = repo.get_or_abort("hello-world")

``LazyRepository`` wraps the same API and compiles on first use, once per
process, for code that wants a module-level repository.
"""

import datetime as dt
import logging
import threading
from pathlib import Path
from typing import Iterable, Iterator, Optional

from mdpost.config import Settings
from mdpost.core.compile import CompilerConfig, compile_repository
from mdpost.core.export import read_snapshot, write_snapshot
from mdpost.core.models import CompileError, Post, RepositorySnapshot, freeze_snapshot
from mdpost.core.parsers.registry import resolve_parsers
from mdpost.core.result import Err, Ok


logger = logging.getLogger(__name__)


class PostNotFoundError(LookupError):
    """Raised by get_or_abort when the requested key is not in the snapshot."""


def compiler_config(settings: Settings) -> CompilerConfig:
    """Resolve parser specs once; unknown parsers fail here, not per file."""
    return CompilerConfig(
        parsers=resolve_parsers(settings.metadata_parser, settings.excerpt_parser, settings.body_parser),
        split_pattern=settings.split_pattern,
        strict=settings.strict_segments,
        log_level=settings.log_level,
        max_workers=settings.max_workers,
    )


class Repository:
    """Immutable key -> Post snapshot plus the diagnostics of the pass that built it."""

    def __init__(self, posts: RepositorySnapshot, errors: Iterable[CompileError] = ()):
        self._posts = freeze_snapshot(dict(posts))
        self._errors = tuple(errors)

    @classmethod
    def compile(cls, settings: Optional[Settings] = None) -> "Repository":
        settings = settings or Settings()
        posts, errors = compile_repository(Path(settings.root), settings.file_pattern, compiler_config(settings))
        return cls(posts, errors)

    @classmethod
    def load(cls, path: Path) -> "Repository":
        """Load a repository from a snapshot artifact."""
        posts, errors = read_snapshot(Path(path))
        return cls(posts, errors)

    def dump(self, path: Path) -> Path:
        return write_snapshot(self._posts, list(self._errors), Path(path))

    @property
    def errors(self) -> tuple[CompileError, ...]:
        return self._errors

    def __len__(self) -> int:
        return len(self._posts)

    def __contains__(self, key: object) -> bool:
        return key in self._posts

    def __iter__(self) -> Iterator[str]:
        return iter(self._posts)

    def get(self, key: str) -> Ok[Post] | Err:
        """Return Ok(post) or Err naming the key and the available keys."""
        post = self._posts.get(key)
        if post is None:
            return Err(f"cannot find post {key}, available: {sorted(self._posts)}")
        return Ok(post)

    def get_or_abort(self, key: str) -> Post:
        result = self.get(key)
        if isinstance(result, Err):
            raise PostNotFoundError(result.reason)
        return result.value

    def all(self) -> list[Post]:
        return list(self._posts.values())

    def available_keys(self) -> set[str]:
        return set(self._posts)

    @staticmethod
    def order_by_datetime(posts: Iterable[Post]) -> list[Post]:
        """Most recent first; equal datetimes keep their input order."""
        return sorted(posts, key=lambda p: p.datetime, reverse=True)

    @staticmethod
    def exclude_draft(posts: Iterable[Post]) -> list[Post]:
        return [p for p in posts if not p.draft]

    @staticmethod
    def filter_published(posts: Iterable[Post], reference: Optional[dt.datetime] = None) -> list[Post]:
        """Keep posts dated strictly before reference (default: now, UTC)."""
        if reference is None:
            reference = dt.datetime.now(dt.timezone.utc)
        elif reference.tzinfo is None:
            reference = reference.replace(tzinfo=dt.timezone.utc)
        return [p for p in posts if p.datetime < reference]


class LazyRepository:
    """Compile-once wrapper: the first caller builds the Repository, later callers reuse it."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._repo: Optional[Repository] = None
        self._lock = threading.Lock()

    @property
    def repository(self) -> Repository:
        if self._repo is None:
            with self._lock:
                if self._repo is None:
                    logger.debug("Compiling repository on first access")
                    self._repo = Repository.compile(self._settings)
        return self._repo

    @property
    def errors(self) -> tuple[CompileError, ...]:
        return self.repository.errors

    def get(self, key: str) -> Ok[Post] | Err:
        return self.repository.get(key)

    def get_or_abort(self, key: str) -> Post:
        return self.repository.get_or_abort(key)

    def all(self) -> list[Post]:
        return self.repository.all()

    def available_keys(self) -> set[str]:
        return self.repository.available_keys()

    order_by_datetime = staticmethod(Repository.order_by_datetime)
    exclude_draft = staticmethod(Repository.exclude_draft)
    filter_published = staticmethod(Repository.filter_published)
