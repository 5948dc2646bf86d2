from typing import Protocol

from golayout.core.context import FileContext
from golayout.models import Category, Diagnostic


class Rule(Protocol):
    name: str
    category: Category
    description: str

    def check(self, context: FileContext) -> list[Diagnostic]: ...
