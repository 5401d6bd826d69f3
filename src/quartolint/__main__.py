"""Command line interface for quartolint."""

from __future__ import annotations

from dotenv import load_dotenv
import typer as t

from quartolint_cli.check import check_command
from quartolint_cli.nav import nav_command
from quartolint_cli.pages import pages_command
from quartolint_cli.rules import rules_command
from quartolint_cli.snippets import snippets_command


MAIN_HELP = "Integrity checks for Quarto website projects"

load_dotenv()

cli = t.Typer(name="quartolint", help=MAIN_HELP, no_args_is_help=True)

cli.command(name="check")(check_command)
cli.command(name="nav")(nav_command)
cli.command(name="pages")(pages_command)
cli.command(name="snippets")(snippets_command)
cli.command(name="rules")(rules_command)


if __name__ == "__main__":
    cli()
