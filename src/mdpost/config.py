"""Application configuration: settings schema and config.yaml loader"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from mdpost.core.parsers.base import ParserSpec


CONFIG_FILE = "config.yaml"
LOG_DISABLED = ("off", "false", "none", "")
ENV_FIELDS = ("root", "file_pattern", "split_pattern", "strict_segments", "log_level", "max_workers", "output_path")


class Settings(BaseModel):
    root:            str = Field(default="posts", description="Directory holding the source documents")
    file_pattern:    str = Field(default="*.md", description="Glob matched directly under root")
    split_pattern:   str = Field(default="---", min_length=1, description="Literal delimiter between metadata, excerpt and body")
    strict_segments: bool = Field(default=False, description="Reject documents with more than three segments")
    log_level:       Optional[int] = Field(default=logging.WARNING, description="Level for compile failures; None disables")
    max_workers:     Optional[int] = Field(default=None, ge=1, description="Thread pool bound; None uses the executor default")
    metadata_parser: ParserSpec = Field(default_factory=lambda: ParserSpec(name="yaml"))
    excerpt_parser:  ParserSpec = Field(default_factory=lambda: ParserSpec(name="markdown"))
    body_parser:     ParserSpec = Field(default_factory=lambda: ParserSpec(name="markdown"))
    output_path:     str = Field(default="dist/posts.json", description="Location of the compiled snapshot artifact")

    @field_validator("log_level", mode="before")
    @classmethod
    def _level(cls, value: Any) -> Optional[int]:
        if value is None or value is False:
            return None
        if isinstance(value, str):
            if value.strip().lower() in LOG_DISABLED:
                return None
            if value.strip().isdigit():
                return int(value)
            level = logging.getLevelName(value.strip().upper())
            if not isinstance(level, int):
                raise ValueError(f"unknown log level {value!r}")
            return level
        return value

    @field_validator("metadata_parser", "excerpt_parser", "body_parser", mode="before")
    @classmethod
    def _parser(cls, value: Any) -> Any:
        # allow the short form `body_parser: text` in config.yaml
        if isinstance(value, str):
            return {"name": value}
        return value


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDPOST_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in ENV_FIELDS:
        if val := os.getenv(f"MDPOST_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
