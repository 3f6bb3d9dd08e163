"""Field-level text conventions of the delimited table output."""
from decimal import Context, Decimal, MAX_EMAX, MAX_PREC, MIN_EMIN
from typing import Optional

FIELD_SEPARATOR = "\t"
LINE_TERMINATOR = "\n"
WHITESPACE = " "
EMPTY_COLUMN_VALUE = ""
UNDEFINED_INTERVAL = "NaN"

# Only +, - and * are evaluated under this context, so results are never rounded.
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


def replace_reserved_chars(value: Optional[str]) -> str:
    """Normalizes a field so it cannot break the tab/newline grammar."""
    if value is None:
        return EMPTY_COLUMN_VALUE
    return value.replace(FIELD_SEPARATOR, WHITESPACE).replace(LINE_TERMINATOR, WHITESPACE)


def plain_decimal(value: Decimal) -> str:
    """Renders a decimal without exponent and without trailing fractional zeros.

    A zero result is always rendered unsigned.

    >>> plain_decimal(Decimal("108.4500"))
    '108.45'
    >>> plain_decimal(Decimal("8E+1"))
    '80'
    >>> plain_decimal(Decimal("-0.0"))
    '0'
    """
    if not value.is_finite():
        return str(value)
    if value.is_zero():
        value = value.copy_abs()
    return format(value.normalize(EXACT_CONTEXT), "f")


def join_fields(fields) -> str:
    return FIELD_SEPARATOR.join(fields) + LINE_TERMINATOR
