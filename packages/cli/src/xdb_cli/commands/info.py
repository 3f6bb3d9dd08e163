from rich.table import Table

from xdb.common.settings import Settings
from xdb_cli.console import console


def show_settings(settings: Settings) -> None:
    """Displays the effective interpreter configuration, secrets masked."""
    table = Table(title="XDB Interpreter Properties")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")

    for key, value in settings.as_properties(mask_secrets=True).items():
        table.add_row(key, str(value))
    table.add_row("fetch size", str(settings.fetch_size))
    table.add_row("read only", str(settings.read_only))

    console.print(table)
