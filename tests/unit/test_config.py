"""Unit tests for config.py"""

import logging

import pytest

from mdpost.config import load_config


@pytest.fixture(autouse=True)
def clean_env(tmp_path, monkeypatch):
    """Run from an empty directory with no MDPOST_* variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("ROOT", "FILE_PATTERN", "SPLIT_PATTERN", "STRICT_SEGMENTS", "LOG_LEVEL", "MAX_WORKERS", "OUTPUT_PATH"):
        monkeypatch.delenv(f"MDPOST_{name}", raising=False)


def test_load_config_defaults():
    """Defaults apply when no config.yaml, env var, or override exists."""
    settings = load_config()
    assert settings.root == "posts"
    assert settings.file_pattern == "*.md"
    assert settings.split_pattern == "---"
    assert settings.log_level == logging.WARNING
    assert settings.metadata_parser.name == "yaml"
    assert settings.excerpt_parser.name == "markdown"
    assert settings.body_parser.name == "markdown"


def test_load_config_yaml(tmp_path):
    """config.yaml values, including parser specs, are loaded."""
    (tmp_path / "config.yaml").write_text(
        "root: content\n"
        "split_pattern: '<<--->>'\n"
        "body_parser:\n"
        "  name: markdown\n"
        "  options:\n"
        "    preset: commonmark\n"
        "excerpt_parser: text\n"
    )
    settings = load_config()
    assert settings.root == "content"
    assert settings.split_pattern == "<<--->>"
    assert settings.body_parser.options == {"preset": "commonmark"}
    assert settings.excerpt_parser.name == "text"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MDPOST_ROOT takes precedence over config.yaml root."""
    (tmp_path / "config.yaml").write_text("root: content\n")
    monkeypatch.setenv("MDPOST_ROOT", "from-env")
    assert load_config().root == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("MDPOST_ROOT", "from-env")
    assert load_config(overrides={"root": "from-cli"}).root == "from-cli"
    assert load_config(overrides={"root": None}).root == "from-env"


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


@pytest.mark.parametrize("value,expected", [
    ("error", logging.ERROR),
    ("INFO", logging.INFO),
    ("10", logging.DEBUG),
    ("off", None),
    ("false", None),
])
def test_load_config_env_log_level(monkeypatch, value, expected):
    """MDPOST_LOG_LEVEL accepts level names, numbers and the off sentinel."""
    monkeypatch.setenv("MDPOST_LOG_LEVEL", value)
    assert load_config().log_level == expected


def test_load_config_log_level_false_in_yaml(tmp_path):
    (tmp_path / "config.yaml").write_text("log_level: false\n")
    assert load_config().log_level is None


def test_load_config_unknown_log_level(monkeypatch):
    monkeypatch.setenv("MDPOST_LOG_LEVEL", "loud")
    with pytest.raises(ValueError):
        load_config()


def test_load_config_env_coerces_types(monkeypatch):
    """Scalar env vars are coerced to the field types."""
    monkeypatch.setenv("MDPOST_MAX_WORKERS", "4")
    monkeypatch.setenv("MDPOST_STRICT_SEGMENTS", "true")
    settings = load_config()
    assert settings.max_workers == 4
    assert settings.strict_segments is True


def test_load_config_rejects_empty_split_pattern():
    with pytest.raises(ValueError):
        load_config(overrides={"split_pattern": ""})
