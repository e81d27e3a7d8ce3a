"""Shared fixtures for core unit tests"""

import logging

import pytest

from mdpost.core.compile import CompilerConfig
from mdpost.core.parsers.base import ParserSpec
from mdpost.core.parsers.registry import resolve_parsers


@pytest.fixture(name="parsers")
def parsers_fixture():
    return resolve_parsers(ParserSpec(name="yaml"), ParserSpec(name="markdown"), ParserSpec(name="markdown"))


@pytest.fixture(name="config")
def config_fixture(parsers):
    return CompilerConfig(parsers=parsers, split_pattern="---", log_level=logging.WARNING)
