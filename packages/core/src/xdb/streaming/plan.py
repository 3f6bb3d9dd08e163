from enum import Enum
from typing import List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from xdb.common.errors import MalformedMetadataError
from .formatting import FIELD_SEPARATOR, replace_reserved_chars

PLAN_MARKER_COLUMN = "plan no."
INTERVAL_COLUMN = "rel. CI"
LEADING_COLUMN_COUNT = 3


class ColumnAction(str, Enum):
    COPY = "COPY"
    EXPAND_INTERVAL = "EXPAND_INTERVAL"


class ColumnPlan(BaseModel):
    """How every column of an online aggregation result is rendered.

    Built once from the result metadata and consumed by index for each row.
    ``actions[k]`` applies to the absolute (0-based) column
    ``metric_start + k``.
    """

    model_config = ConfigDict(frozen=True)

    skip_offset: int = Field(ge=0, le=1)
    leading_column_count: int = LEADING_COLUMN_COUNT
    actions: Tuple[ColumnAction, ...]
    header_fields: Tuple[str, ...]

    @property
    def with_plan_optimization(self) -> bool:
        return self.skip_offset == 1

    @property
    def metric_start(self) -> int:
        return self.skip_offset + self.leading_column_count

    @property
    def column_count(self) -> int:
        return self.metric_start + len(self.actions)

    @property
    def header(self) -> str:
        return FIELD_SEPARATOR.join(self.header_fields)


def build_column_plan(column_names: Sequence[str]) -> ColumnPlan:
    """Derives the column plan and header fields from result column names.

    An interval column qualifies the column immediately preceding it, so its
    three header fields are named after the most recent non-interval column
    (the last leading column when no metric column has been copied yet).

    Raises:
        MalformedMetadataError: If there is no metric column after the
            leading columns.
    """
    names = [replace_reserved_chars(name) for name in column_names]
    skip_offset = 1 if names and names[0] == PLAN_MARKER_COLUMN else 0
    metric_start = skip_offset + LEADING_COLUMN_COUNT

    if len(names) < metric_start + 1:
        raise MalformedMetadataError(
            f"Expected at least {metric_start + 1} result columns, got {len(names)}.",
            details={"columns": list(column_names)},
        )

    header: List[str] = list(names[skip_offset:metric_start])
    actions: List[ColumnAction] = []
    prev_name = header[-1]
    for name in names[metric_start:]:
        if name == INTERVAL_COLUMN:
            header.extend([f"{prev_name}_relCI", f"{prev_name}_lo", f"{prev_name}_hi"])
            actions.append(ColumnAction.EXPAND_INTERVAL)
        else:
            header.append(name)
            prev_name = name
            actions.append(ColumnAction.COPY)

    return ColumnPlan(
        skip_offset=skip_offset,
        actions=tuple(actions),
        header_fields=tuple(header),
    )
