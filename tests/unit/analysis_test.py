"""Unit tests for the analysis entry points and file discovery."""

from pathlib import Path

import pytest

from golayout.config import LintConfig
from golayout.core.analysis import analyze_file, analyze_paths, analyze_source
from golayout.core.languages import discover_go_files, is_go_file
from golayout.models import Position
from golayout.rules import RULES, SeparatorRule, select_rules

SEPARATOR = "/" * 80

COMPLIANT = """\
package main

import (
    "fmt"
    "os"
)

<sep>

type Reader struct {
    path string
}

func NewReader(path string) *Reader {
    return &Reader{path: path}
}

func (r *Reader) Read() error {
    f, err := os.Open(r.path)
    if err != nil {
        return err
    }
    defer f.Close()

    fmt.Println(r.path)

    return nil
}

<sep>

func Run(
    path string,
) error {

    return NewReader(path).Read()
}
""".replace("<sep>", SEPARATOR)

VIOLATING = """\
package main

import "os"

<sep>

func Open(path string) {
    f, _ := os.Open(path)

    defer f.Close()
    f.Sync()

}
""".replace("<sep>", SEPARATOR)


class TestAnalyzeSource:
    """Tests for running every rule over in-memory source."""

    def test_compliant_file(self) -> None:
        assert analyze_source(COMPLIANT.encode()) == []

    def test_diagnostics_come_in_rule_order(self) -> None:
        diagnostics = analyze_source(VIOLATING.encode())
        assert [(d.rule, d.start) for d in diagnostics] == [
            ("line-breaks", Position(line=12, column=0)),
            ("defer-placement", Position(line=9, column=4)),
        ]

    def test_analysis_is_idempotent(self) -> None:
        assert analyze_source(VIOLATING.encode()) == analyze_source(VIOLATING.encode())

    def test_selected_rules_only(self) -> None:
        diagnostics = analyze_source(VIOLATING.encode(), rules=[SeparatorRule()])
        assert diagnostics == []

    def test_config_is_applied(self) -> None:
        source = COMPLIANT.replace(SEPARATOR, "/" * 40).encode()
        assert analyze_source(source, config=LintConfig(separator_width=40)) == []
        assert analyze_source(source) != []


class TestAnalyzeFile:
    """Tests for analyzing files on disk."""

    def test_reads_and_analyzes_file(self, tmp_path: Path) -> None:
        path = tmp_path / "main.go"
        path.write_text(VIOLATING)
        report = analyze_file(path)
        assert report.path == str(path)
        assert report.error is None
        assert len(report.diagnostics) == 2

    def test_missing_file_becomes_error_report(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "missing.go"
        report = analyze_file(path)
        assert report.diagnostics == []
        assert report.error is not None
        assert report.error.startswith(f"Error reading file {path}")
        assert "Error reading file" in caplog.text

    def test_analyze_paths_walks_directories(self, tmp_path: Path) -> None:
        (tmp_path / "main.go").write_text(COMPLIANT)
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "open.go").write_text(VIOLATING)
        reports = analyze_paths([tmp_path])
        assert [Path(r.path).name for r in reports] == ["main.go", "open.go"]
        assert [r.ok for r in reports] == [True, False]


class TestDiscovery:
    """Tests for locating Go sources."""

    def test_is_go_file(self) -> None:
        assert is_go_file(Path("main.go"))
        assert is_go_file(Path("MAIN.GO"))
        assert not is_go_file(Path("main.py"))

    def test_skips_vendor_testdata_and_hidden_directories(self, tmp_path: Path) -> None:
        for relative in ("main.go", "sub/a.go", "vendor/v.go", "testdata/t.go", ".git/h.go", "notes.txt"):
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("package main\n")
        assert discover_go_files([tmp_path]) == [tmp_path / "main.go", tmp_path / "sub" / "a.go"]

    def test_explicit_files_are_kept(self, tmp_path: Path) -> None:
        vendored = tmp_path / "vendor" / "v.go"
        vendored.parent.mkdir()
        vendored.write_text("package main\n")
        assert discover_go_files([vendored, vendored]) == [vendored]

    def test_missing_paths_are_kept(self, tmp_path: Path) -> None:
        missing = tmp_path / "gone.go"
        assert discover_go_files([missing]) == [missing]


class TestRegistry:
    """Tests for rule selection."""

    def test_every_rule_by_default(self) -> None:
        assert [rule.name for rule in select_rules()] == [
            "line-breaks",
            "defer-placement",
            "multiline-signature",
            "separator",
        ]

    def test_selection_keeps_registry_order(self) -> None:
        assert [rule.name for rule in select_rules(["separator", "line-breaks"])] == ["line-breaks", "separator"]

    def test_unknown_rule(self) -> None:
        with pytest.raises(ValueError, match="Unknown rule"):
            select_rules(["tabs"])

    def test_rules_describe_themselves(self) -> None:
        assert all(rule.description for rule in RULES.values())
