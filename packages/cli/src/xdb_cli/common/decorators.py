from functools import wraps
import sys
import traceback
from xdb.common.errors import XDBError
from rich.markup import escape
from xdb_cli.console import console

def handle_cli_errors(func):
    """
    Decorator to wrap CLI commands with unified error handling.

    - XDBError: Prints a clean red error message.
    - Unexpected Exception: Prints stack trace and error.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except XDBError as e:
            console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
            sys.exit(1)
        except Exception as e:
            console.print(f"[bold red]Unexpected Error:[/bold red] {escape(str(e))}")
            console.print(escape(traceback.format_exc()))
            sys.exit(1)

    return wrapper
