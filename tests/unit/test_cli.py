"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rulelang.cli import app

VALID = """
package com.acme;

rule "Adult"
when
    $p : Person(age > 18)
then
    System.out.println($p);
end

query "adults"
    Person(age > 18)
end
"""

BROKEN = """
rule "Broken"
when
    Person(age > 18
then
end
"""


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "rulelang version" in result.stdout


def test_check_valid_file(cli_runner: CliRunner, rule_file):
    path = rule_file(VALID)

    result = cli_runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 0
    assert "MismatchedToken" not in result.output


def test_check_reports_errors(cli_runner: CliRunner, rule_file):
    path = rule_file(BROKEN)

    result = cli_runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 1
    assert f"{path}:5:0: MismatchedToken: mismatched input 'then' expecting ')'" in result.output


def test_check_show_source(cli_runner: CliRunner, rule_file):
    path = rule_file(BROKEN)

    result = cli_runner.invoke(app, ["check", "--show-source", str(path)])

    assert result.exit_code == 1
    assert "Person(age > 18" in result.output


def test_check_directory(cli_runner: CliRunner, tmp_path: Path, rule_file):
    rule_file(VALID, "a.drl")
    (tmp_path / "nested").mkdir()
    rule_file(BROKEN, "nested/b.drl")
    rule_file("not rules", "notes.txt")

    result = cli_runner.invoke(app, ["check", str(tmp_path)])

    assert result.exit_code == 1
    assert "b.drl:5:0" in result.output
    assert "notes.txt" not in result.output


def test_check_missing_path(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["check", str(tmp_path / "missing.drl")])

    assert result.exit_code == 2
    assert "no such file or directory" in result.output


def test_check_empty_directory(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["check", str(tmp_path)])

    assert result.exit_code == 2
    assert "No rule files found" in result.output


def test_check_bad_config(cli_runner: CliRunner, tmp_path: Path, rule_file):
    path = rule_file(VALID)
    config = tmp_path / "rulelang.toml"
    config.write_text("[rulelang]\nmax_errors = -1\n")

    result = cli_runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_dump_json(cli_runner: CliRunner, rule_file):
    path = rule_file(VALID)

    result = cli_runner.invoke(app, ["dump", str(path)])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["name"] == "com.acme"
    assert [r["name"] for r in data["rules"]] == ["Adult", "adults"]
    pattern = data["rules"][0]["lhs"]["descrs"][0]
    assert pattern["object_type"] == "Person"
    assert pattern["identifier"] == "$p"


def test_dump_with_errors(cli_runner: CliRunner, rule_file):
    path = rule_file(BROKEN)

    result = cli_runner.invoke(app, ["dump", str(path)])

    assert result.exit_code == 1
    assert "mismatched input 'then'" in result.output


def test_dump_missing_file(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["dump", str(tmp_path / "missing.drl")])
    assert result.exit_code == 2


def test_tokens(cli_runner: CliRunner, rule_file):
    path = rule_file("rule R when then end", "a.drl")

    result = cli_runner.invoke(app, ["tokens", str(path)])

    assert result.exit_code == 0
    assert "RULE" in result.stdout
    assert "WS" not in result.stdout


def test_tokens_with_trivia(cli_runner: CliRunner, rule_file):
    path = rule_file("rule R // note\nwhen then end", "a.drl")

    result = cli_runner.invoke(app, ["tokens", "--trivia", str(path)])

    assert result.exit_code == 0
    assert "WS" in result.stdout
    assert "SL_COMMENT" in result.stdout
