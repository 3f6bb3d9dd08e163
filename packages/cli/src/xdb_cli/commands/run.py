import sys
from typing import Optional

import typer
from rich.live import Live

from xdb import XDBInterpreter
from xdb.common.settings import Settings
from xdb.streaming.results import PollResult, ResultCode
from xdb_sqlalchemy_adapter import SQLAlchemyCursorFactory

from xdb_cli.console import console, print_error, print_warning
from xdb_cli.reporting import ResultPresenter

CLI_SESSION_ID = "cli"


def build_interpreter(settings: Settings, url: Optional[str] = None) -> XDBInterpreter:
    if url:
        factory = SQLAlchemyCursorFactory(url=url, read_only=settings.read_only)
    else:
        factory = SQLAlchemyCursorFactory.from_settings(settings)
    return XDBInterpreter(factory, fetch_size=settings.fetch_size)


def poll_to_completion(interpreter: XDBInterpreter, statement: str, on_update=None) -> PollResult:
    """Polls until a final or error result.

    The first Ctrl-C requests cooperative cancellation and keeps polling so
    the partial table is still returned; a second one aborts.
    """
    cancelled = False
    while True:
        try:
            result = interpreter.interpret(statement, session_id=CLI_SESSION_ID)
            if result.code is not ResultCode.INTERMEDIATE:
                return result
            if on_update is not None:
                on_update(result)
        except KeyboardInterrupt:
            if cancelled:
                raise
            cancelled = True
            interpreter.cancel(CLI_SESSION_ID)


def run_statement(
    interpreter: XDBInterpreter,
    statement: str,
    raw: bool = False,
    live: bool = True,
) -> PollResult:
    presenter = ResultPresenter()
    interpreter.open()
    try:
        if live and not raw:
            with Live(console=console, transient=True, auto_refresh=False) as view:
                result = poll_to_completion(
                    interpreter,
                    statement,
                    on_update=lambda r: view.update(presenter.render(r.text), refresh=True),
                )
        else:
            result = poll_to_completion(interpreter, statement)
    finally:
        interpreter.close()

    if result.code is ResultCode.ERROR:
        print_error(result.text)
        sys.exit(1)

    if raw:
        typer.echo(result.text, nl=False)
    else:
        rendered = presenter.render(result.text, final=True)
        console.print(rendered)
        if not result.text.startswith("%table"):
            print_warning("No confidence interval could be computed for this query.")
    return result
