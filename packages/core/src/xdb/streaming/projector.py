from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from xdb.common.errors import RowFormatError
from .cursor import FetchedRow
from .formatting import (
    EXACT_CONTEXT,
    UNDEFINED_INTERVAL,
    join_fields,
    plain_decimal,
    replace_reserved_chars,
)
from .plan import ColumnAction, ColumnPlan


class RowOutcome(BaseModel):
    """Result of projecting one fetched row.

    ``line`` is None for synthetic rows that must not reach the output.
    """

    model_config = ConfigDict(frozen=True)

    line: Optional[str] = None
    interval_defined: bool = False

    @property
    def is_skip(self) -> bool:
        return self.line is None


SKIP = RowOutcome()


class RowProjector:
    """Turns fetched rows into table lines according to a ColumnPlan."""

    def __init__(self, plan: ColumnPlan):
        self.plan = plan

    def project(self, row: FetchedRow) -> RowOutcome:
        plan = self.plan
        if len(row) < plan.column_count:
            raise RowFormatError(
                f"Row has {len(row)} columns, expected {plan.column_count}."
            )

        # blank separator row between groups of a group-by query
        if row.is_null(plan.skip_offset):
            return SKIP
        # plan optimization rows carry no sample in the first metric column
        if plan.with_plan_optimization and row.is_null(plan.metric_start):
            return SKIP

        fields: List[str] = [
            replace_reserved_chars(row.get_text(i))
            for i in range(plan.skip_offset, plan.metric_start)
        ]

        interval_defined = False
        for offset, action in enumerate(plan.actions):
            index = plan.metric_start + offset
            if action is ColumnAction.COPY:
                fields.append(replace_reserved_chars(row.get_text(index)))
                continue

            bounds = self._interval_fields(row, index)
            if bounds is None:
                fields.extend([UNDEFINED_INTERVAL] * 3)
            else:
                fields.extend(bounds)
                interval_defined = True

        return RowOutcome(line=join_fields(fields), interval_defined=interval_defined)

    def _interval_fields(self, row: FetchedRow, index: int) -> Optional[List[str]]:
        """Relative half-width plus lower and upper bound, or None when undefined."""
        rel_ci_text = row.get_text(index)
        if rel_ci_text is None or rel_ci_text.strip() == UNDEFINED_INTERVAL:
            return None

        estimate = row.get_decimal(index - 1)
        if estimate is None:
            return None

        rel_ci = row.get_decimal(index)
        if not rel_ci.is_finite() or not estimate.is_finite():
            return None

        lo = EXACT_CONTEXT.multiply(estimate, EXACT_CONTEXT.subtract(Decimal(1), rel_ci))
        hi = EXACT_CONTEXT.multiply(estimate, EXACT_CONTEXT.add(Decimal(1), rel_ci))
        return [
            replace_reserved_chars(rel_ci_text.strip()),
            plain_decimal(lo),
            plain_decimal(hi),
        ]
