"""Parsing of upstream quote record lines."""

from __future__ import annotations

import math
import re

from stockprice_exporter.core.exceptions import InsufficientFieldsError, InvalidNumberError
from stockprice_exporter.core.models import QuoteRecord

DEFAULT_DELIMITER = ","

# Column order of the upstream payload (``f=d,c,v,o,h,l`` is what is requested,
# but rows come back as date, close, high, low, open, volume).
FIELD_POSITIONS: tuple[tuple[str, int], ...] = (
    ("close", 1),
    ("high", 2),
    ("low", 3),
    ("open", 4),
    ("volume", 5),
)
REQUIRED_FIELDS = 6

# Plain decimal or exponent notation. No surrounding whitespace, digit
# separators or special values, which float() would otherwise accept.
_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def _parse_number(field: str, raw_value: str) -> float:
    if _NUMBER.fullmatch(raw_value) is None:
        raise InvalidNumberError(
            f"Field '{field}' is not a number: {raw_value!r}",
            field=field,
            raw_value=raw_value,
        )
    value = float(raw_value)
    if not math.isfinite(value):
        raise InvalidNumberError(
            f"Field '{field}' is not a finite number: {raw_value!r}",
            field=field,
            raw_value=raw_value,
        )
    return value


def parse_quote_line(line: str, delimiter: str = DEFAULT_DELIMITER) -> QuoteRecord:
    """Parse one delimited record line into a :class:`QuoteRecord`.

    Raises:
        InsufficientFieldsError: fewer than six fields are present.
        InvalidNumberError: the first numeric field that fails to parse.
    """
    fields = line.split(delimiter)
    if len(fields) < REQUIRED_FIELDS:
        raise InsufficientFieldsError(
            f"Expected at least {REQUIRED_FIELDS} fields, got {len(fields)}",
            expected=REQUIRED_FIELDS,
            actual=len(fields),
            raw_value=line,
        )

    values = {name: _parse_number(name, fields[position]) for name, position in FIELD_POSITIONS}
    return QuoteRecord(date=fields[0], **values)
