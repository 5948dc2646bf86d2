"""Tests for the golayout CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from golayout.cli.app import app

runner = CliRunner()

CLEAN = "package main\n\nimport \"fmt\"\n\n" + "/" * 80 + "\n\nfunc Hello() {\n    fmt.Println(\"hello\")\n}\n"
VIOLATING = "package main\n\nfunc hello() {\n    a()\n\n}\n"


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["check"],
        ["rules"],
    ],
    ids=["root", "check", "rules"],
)
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_rules_lists_every_rule() -> None:
    result = runner.invoke(app, ["rules"])
    assert result.exit_code == 0
    for name in ("line-breaks", "defer-placement", "multiline-signature", "separator"):
        assert name in result.output


def test_clean_file_exits_zero(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text(CLEAN)
    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 0
    assert "1 file(s) checked, 0 problem(s)" in result.output


def test_violations_exit_one(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text(VIOLATING)
    result = runner.invoke(app, ["check", str(tmp_path)])
    assert result.exit_code == 1
    assert "1 file(s) checked, 2 problem(s)" in result.output


def test_rule_option_limits_checks(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text(VIOLATING)
    result = runner.invoke(app, ["check", str(path), "--rule", "defer-placement"])
    assert result.exit_code == 0


def test_missing_file_exits_two(tmp_path: Path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "missing.go")])
    assert result.exit_code == 2
    assert "unreadable" in result.output


def test_unknown_rule_exits_two(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text(CLEAN)
    result = runner.invoke(app, ["check", str(path), "-r", "tabs"])
    assert result.exit_code == 2
    assert "Unknown rule" in result.output


def test_invalid_separator_width_exits_two(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text(CLEAN)
    result = runner.invoke(app, ["check", str(path), "--separator-width", "0"])
    assert result.exit_code == 2


def test_separator_width_option(tmp_path: Path) -> None:
    path = tmp_path / "main.go"
    path.write_text(CLEAN.replace("/" * 80, "/" * 20))
    assert runner.invoke(app, ["check", str(path)]).exit_code == 1
    assert runner.invoke(app, ["check", str(path), "--separator-width", "20"]).exit_code == 0
