"""Compile orchestration: discover sources, compile each file concurrently, fold into a snapshot"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mdpost.core.assemble import assemble
from mdpost.core.models import (
    CompileError,
    CompileFailure,
    CompileOutcome,
    CompileSuccess,
    Post,
    RepositorySnapshot,
    freeze_snapshot,
)
from mdpost.core.parsers.base import ParserSet
from mdpost.core.result import Err
from mdpost.core.split import split_document


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilerConfig:
    """Resolved compiler options shared read-only by every compile task."""
    parsers:       ParserSet
    split_pattern: str = "---"
    strict:        bool = False
    log_level:     Optional[int] = logging.WARNING
    max_workers:   Optional[int] = None


def discover_files(root: Path, pattern: str = "*.md") -> list[Path]:
    """Return sorted files directly under root matching pattern; [] if root is missing."""
    if not root.is_dir():
        return []
    return sorted(p for p in root.glob(pattern) if p.is_file())


def compile_text(key: str, raw: str, config: CompilerConfig) -> CompileSuccess | Err:
    """Split and assemble one document's raw text."""
    split = split_document(raw, config.split_pattern, config.strict)
    if isinstance(split, Err):
        return split
    assembled = assemble(key, split.value, config.parsers)
    if isinstance(assembled, Err):
        return assembled
    return assembled.value


def compile_file(path: Path, config: CompilerConfig) -> CompileOutcome:
    """Compile a single source file; never raises for content or read problems."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return CompileFailure(path=path, reason=f"cannot read file: {e}")
    result = compile_text(path.stem, raw, config)
    if isinstance(result, Err):
        return CompileFailure(path=path, reason=result.reason)
    return result


def _log_failure(level: Optional[int], path: Path, reason: str) -> None:
    if level is None:
        return
    logger.log(level, "Unable to compile post %s, reason: %s", path, reason)


def build_snapshot(
    outcomes: list[CompileOutcome],
    log_level: Optional[int] = logging.WARNING,
    ) -> tuple[RepositorySnapshot, list[CompileError]]:
    """Fold outcomes in order: successes into the key map, failures into the error list."""
    posts: dict[str, Post] = {}
    errors: list[CompileError] = []
    for outcome in outcomes:
        if isinstance(outcome, CompileSuccess):
            if outcome.key in posts and log_level is not None:
                logger.warning("Duplicate post key %r, keeping the last compiled file", outcome.key)
            posts[outcome.key] = outcome.post
        else:
            errors.append(CompileError(path=str(outcome.path), reason=outcome.reason))
            _log_failure(log_level, outcome.path, outcome.reason)
    return freeze_snapshot(posts), errors


def compile_paths(paths: list[Path], config: CompilerConfig) -> list[CompileOutcome]:
    """Compile every path on a thread pool and return outcomes in input order once all finish."""
    if not paths:
        return []
    outcomes: list[CompileOutcome] = []
    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        futures = [executor.submit(compile_file, p, config) for p in paths]
        for path, future in zip(paths, futures):
            try:
                outcomes.append(future.result())
            except Exception as exc:
                # a misbehaving custom parser only fails its own file; the fold logs it
                outcomes.append(CompileFailure(path=path, reason=f"unexpected error: {exc}"))
    return outcomes


def compile_repository(
    root: Path,
    file_pattern: str,
    config: CompilerConfig,
    ) -> tuple[RepositorySnapshot, list[CompileError]]:
    """Compile all documents under root into an immutable snapshot plus diagnostics.

    Failed files are left out of the snapshot and reported in the error list;
    they never abort the build or affect any other file.
    """
    paths = discover_files(Path(root), file_pattern)
    logger.info("Compiling %d post(s) under %s", len(paths), root)
    snapshot, errors = build_snapshot(compile_paths(paths, config), config.log_level)
    logger.info("Compiled %d post(s), %d error(s)", len(snapshot), len(errors))
    return snapshot, errors
