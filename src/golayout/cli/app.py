import typer

from golayout.cli.check import check
from golayout.cli.rules import rules

app = typer.Typer(
    name="golayout",
    help="golayout — check line breaks and separator groups in Go sources.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("check")(check)
app.command("rules")(rules)


def main() -> None:
    app()
