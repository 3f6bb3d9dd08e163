import re
from typing import List, Optional

from rich.table import Table
from rich.text import Text

from xdb.streaming.formatting import FIELD_SEPARATOR, LINE_TERMINATOR
from xdb.streaming.renderer import TABLE_MAGIC_TAG

HTML_MAGIC_TAG = "%html "
_TAG_RE = re.compile(r"<[^>]+>")


def split_table(text: str) -> Optional[List[List[str]]]:
    """Splits table output into rows of fields, header first. None for non-table text."""
    if not text.startswith(TABLE_MAGIC_TAG):
        return None
    body = text[len(TABLE_MAGIC_TAG):]
    return [line.split(FIELD_SEPARATOR) for line in body.split(LINE_TERMINATOR) if line]


class ResultPresenter:
    """Renders interpreter output for the terminal."""

    def __init__(self, title: str = ""):
        self.title = title

    def render(self, text: str, final: bool = False):
        rows = split_table(text)
        if rows is None:
            if text.startswith(HTML_MAGIC_TAG):
                return Text(_TAG_RE.sub("", text[len(HTML_MAGIC_TAG):]), style="yellow")
            return Text(text)

        header, data = rows[0], rows[1:]
        caption = f"{len(data)} rows" + ("" if final else " (refining...)")
        table = Table(title=self.title or None, caption=caption)
        for name in header:
            table.add_column(name, overflow="fold")
        for fields in data:
            table.add_row(*fields)
        return table
