#!/usr/bin/env python3
"""Command line driver for XDB online aggregation queries."""
import typer
from typing import Optional
from typing_extensions import Annotated

from xdb.common.settings import settings

from xdb_cli.commands.info import show_settings
from xdb_cli.commands.run import build_interpreter, run_statement
from xdb_cli.common.decorators import handle_cli_errors

app = typer.Typer(
    name="xdb",
    help="Stream online aggregation queries with confidence intervals.",
    no_args_is_help=True,
    add_completion=False,
)

UrlOption = Annotated[Optional[str], typer.Option("--url", help="SQLAlchemy database URL (overrides XDB_POSTGRESQL_URL)")]


@app.callback()
def global_callback(
    ctx: typer.Context,
    env: Annotated[Optional[str], typer.Option("--env", "-e", help="Environment name (e.g. dev, prod); loads .env.<name>.")] = None,
):
    """
    XDB CLI Entry Point.
    """
    if env:
        settings.configure_env(env)


@app.command()
@handle_cli_errors
def run(
    statement: Annotated[str, typer.Argument(help="Online aggregation SQL statement")],
    url: UrlOption = None,
    raw: Annotated[bool, typer.Option("--raw", help="Print the tab separated output as is")] = False,
    live: Annotated[bool, typer.Option("--live/--no-live", help="Refresh the table after every row")] = True,
):
    """
    Run a statement, refining the table row by row. Ctrl-C stops early and keeps the partial result.
    """
    interpreter = build_interpreter(settings, url=url)
    run_statement(interpreter, statement, raw=raw, live=live)


@app.command()
def info():
    """
    Show the effective connection properties.
    """
    show_settings(settings)


def main():
    app()


if __name__ == "__main__":
    main()
