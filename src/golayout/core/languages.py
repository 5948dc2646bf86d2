from collections.abc import Iterable
from pathlib import Path

GO_EXTENSION = ".go"

_SKIPPED_DIRECTORIES = frozenset({"vendor", "testdata", "node_modules"})


def is_go_file(file_path: Path) -> bool:
    return file_path.suffix.lower() == GO_EXTENSION


def _skipped(directory: Path) -> bool:
    return directory.name in _SKIPPED_DIRECTORIES or directory.name.startswith(".")


def discover_go_files(paths: Iterable[str | Path]) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated list of Go sources.

    Files named explicitly are kept whatever their location; directories are walked
    recursively, skipping vendored, testdata and hidden directories.
    """
    found: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in path.rglob(f"*{GO_EXTENSION}"):
                relative = candidate.relative_to(path)
                if any(_skipped(Path(part)) for part in relative.parts[:-1]):
                    continue
                if candidate.is_file():
                    found.add(candidate)
        elif is_go_file(path) or not path.exists():
            found.add(path)
    return sorted(found)
