from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Category(StrEnum):
    LINE_BREAKS = "line_breaks"
    SEPARATOR = "separator"


class Position(BaseModel):
    """Zero-based line and byte column inside one file."""

    model_config = ConfigDict(frozen=True)

    line: int
    column: int


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule: str
    category: Category
    message: str
    start: Position
    end: Position | None = None


class FileReport(BaseModel):
    path: str
    diagnostics: list[Diagnostic] = []
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.diagnostics
