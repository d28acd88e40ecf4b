"""Main CLI entry point for gmcli."""

import logging

import typer
from typing_extensions import Annotated

from gmcli import __version__
from gmcli.cli import commands

app = typer.Typer(
    name="gmcli",
    help="Command-line Gmail client account management",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(commands.accounts.app, name="accounts")


@app.callback()
def root(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
):
    """Manage gmcli accounts, OAuth credentials and the default account."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@app.command()
def version():
    """Show version information."""
    typer.echo(f"gmcli version {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
