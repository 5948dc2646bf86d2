import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from golayout.config import LintConfig
from golayout.core.ast import SourceReadError, read_source_file
from golayout.core.context import FileContext
from golayout.core.languages import discover_go_files
from golayout.core.ports.rule import Rule
from golayout.models import Diagnostic, FileReport
from golayout.rules import select_rules

logger = logging.getLogger(__name__)


def analyze_source(
    source: bytes,
    path: str = "<memory>",
    config: LintConfig | None = None,
    rules: Sequence[Rule] | None = None,
) -> list[Diagnostic]:
    """Run every rule over one file's text; diagnostics come back in rule order."""
    context = FileContext.from_source(source, path=path, config=config)
    diagnostics: list[Diagnostic] = []
    for rule in rules if rules is not None else select_rules():
        diagnostics.extend(rule.check(context))
    logger.debug("Analyzed %s: %d diagnostic(s)", path, len(diagnostics))
    return diagnostics


def analyze_file(
    path: str | Path,
    config: LintConfig | None = None,
    rules: Sequence[Rule] | None = None,
) -> FileReport:
    try:
        source = read_source_file(path)
    except SourceReadError as exc:
        logger.warning("%s", exc)
        return FileReport(path=str(path), error=str(exc))

    return FileReport(path=str(path), diagnostics=analyze_source(source, str(path), config, rules))


def analyze_paths(
    paths: Iterable[str | Path],
    config: LintConfig | None = None,
    rules: Sequence[Rule] | None = None,
) -> list[FileReport]:
    return [analyze_file(path, config, rules) for path in discover_go_files(paths)]
