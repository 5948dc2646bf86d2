from rich.console import Console
from rich.table import Table

from golayout.rules import RULES

console = Console()


def rules() -> None:
    """List the available rules."""
    table = Table(show_lines=False)
    for header in ("name", "category", "description"):
        table.add_column(header)
    for rule in RULES.values():
        table.add_row(rule.name, str(rule.category), rule.description)
    console.print(table)
