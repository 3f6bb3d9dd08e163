from typing import Sequence

from .formatting import LINE_TERMINATOR
from .plan import ColumnPlan

TABLE_MAGIC_TAG = "%table "
NO_SAMPLE_NOTICE = (
    "%html <h3>No sample is ever extracted because the selectivity might be too high. "
    "Try full join.</h3>"
)


class OutputRenderer:
    """Assembles the text handed back to the notebook host."""

    def header_line(self, plan: ColumnPlan) -> str:
        return TABLE_MAGIC_TAG + plan.header + LINE_TERMINATOR

    def render_table(self, lines: Sequence[str]) -> str:
        return "".join(lines)

    def render_final(self, lines: Sequence[str], any_interval_defined: bool) -> str:
        """Table text, or the fallback notice when no row ever had a defined interval."""
        if not any_interval_defined:
            return NO_SAMPLE_NOTICE
        return self.render_table(lines)
