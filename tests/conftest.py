"""Shared pytest fixtures for rulelang tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from rulelang.core import descr
from rulelang.core.lexer import tokenize
from rulelang.core.parser_impl import Parser, ParseResult, parse_drl


@pytest.fixture
def parse() -> Callable[[str], ParseResult]:
    """Return a function that parses rule source."""
    return parse_drl


@pytest.fixture
def parse_ok() -> Callable[[str], descr.PackageDescr]:
    """Return a function that parses rule source and asserts it is error free."""

    def _parse(text: str) -> descr.PackageDescr:
        result = parse_drl(text, "test.drl")
        assert result.errors == [], [str(e) for e in result.errors]
        return result.package

    return _parse


@pytest.fixture
def make_parser() -> Callable[[str], Parser]:
    """Return a function building a Parser positioned at the start of ``text``."""

    def _make(text: str) -> Parser:
        return Parser(tokenize(text), "test.drl", text)

    return _make


@pytest.fixture
def rule_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a function that writes a rule file under tmp_path."""

    def _write(text: str, name: str = "rules.drl") -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write

