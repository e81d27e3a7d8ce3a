"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpost.config import Settings, load_config
from mdpost.core.result import Err
from mdpost.repo import Repository


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _repository(settings: Settings, artifact: Optional[str]) -> Repository:
    """Load from an artifact when given, otherwise compile settings.root."""
    try:
        if artifact:
            return Repository.load(Path(artifact))
        return Repository.compile(settings)
    except (OSError, ValueError) as e:
        _fail("Cannot load posts", e)


def build_cmd(
    root: Annotated[Optional[str], typer.Argument(help="Directory of source posts")] = None,
    pattern: Annotated[Optional[str], typer.Option("--pattern", help="Glob for source files under root")] = None,
    split: Annotated[Optional[str], typer.Option("--split-pattern", help="Delimiter between metadata, excerpt and body")] = None,
    out: Annotated[Optional[str], typer.Option("--out", help="Write the compiled snapshot JSON here")] = None,
    strict: Annotated[bool, typer.Option("--strict", help="Exit 1 if any file failed to compile")] = False,
    ):
    """Compile all posts, report failures, and optionally write the snapshot artifact."""
    settings = _settings(overrides={"root": root, "file_pattern": pattern, "split_pattern": split})
    repo = _repository(settings, None)

    for error in repo.errors:
        typer.echo(f"  failed: {error.path}: {error.reason}", err=True)
    typer.echo(f"Compiled {len(repo)} post(s), {len(repo.errors)} error(s) from {settings.root}/")

    if out:
        try:
            path = repo.dump(Path(out))
        except (OSError, ValueError) as e:
            _fail("Cannot write snapshot", e)
        typer.echo(f"Snapshot written to {path}")

    if strict and repo.errors:
        raise typer.Exit(1)


def list_cmd(
    root: Annotated[Optional[str], typer.Argument(help="Directory of source posts")] = None,
    artifact: Annotated[Optional[str], typer.Option("--from", help="Read a snapshot artifact instead of compiling")] = None,
    drafts: Annotated[bool, typer.Option("--drafts", help="Include draft posts")] = False,
    all_dates: Annotated[bool, typer.Option("--all-dates", help="Include posts dated in the future")] = False,
    ):
    """List posts newest first."""
    settings = _settings(overrides={"root": root})
    repo = _repository(settings, artifact)

    posts = repo.all()
    if not drafts:
        posts = repo.exclude_draft(posts)
    if not all_dates:
        posts = repo.filter_published(posts)
    if not posts:
        typer.echo("No posts found.")
        raise typer.Exit(1)
    for post in repo.order_by_datetime(posts):
        flag = " (draft)" if post.draft else ""
        typer.echo(f"{post.key}  {post.datetime.isoformat()}  {post.title}{flag}")


def show_cmd(
    key: Annotated[str, typer.Argument(help="Post key (source file name without extension)")],
    root: Annotated[Optional[str], typer.Argument(help="Directory of source posts")] = None,
    artifact: Annotated[Optional[str], typer.Option("--from", help="Read a snapshot artifact instead of compiling")] = None,
    ):
    """Print a single post."""
    settings = _settings(overrides={"root": root})
    repo = _repository(settings, artifact)

    result = repo.get(key)
    if isinstance(result, Err):
        _fail(result.reason)
    post = result.value
    typer.echo(f"# {post.title}")
    typer.echo(f"date: {post.datetime.isoformat()}")
    if post.tags:
        typer.echo(f"tags: {', '.join(post.tags)}")
    typer.echo("")
    typer.echo(str(post.body))
