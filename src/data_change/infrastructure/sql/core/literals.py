"""
SQL literal formatting.

Renders Python values as inline SQL literals for textual statements.
"""

import math
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from data_change.exceptions import MalformedInputError


def quote_string(value: str, escape_backslashes: bool = False) -> str:
    """
    Quote a string literal, doubling embedded single quotes.

    Examples:
        >>> quote_string("it's")
        "'it''s'"
    """
    if escape_backslashes:
        value = value.replace("\\", "\\\\")
    return "'" + value.replace("'", "''") + "'"


def format_literal(
    value: Any,
    true_literal: str = "TRUE",
    false_literal: str = "FALSE",
    escape_backslashes: bool = False,
) -> str:
    """
    Format a Python value as a SQL literal.

    Args:
        value: None, bool, int, float, Decimal, str, date, datetime or time
        true_literal: Literal used for True
        false_literal: Literal used for False
        escape_backslashes: Double backslashes in strings (MySQL)

    Returns:
        SQL literal text

    Raises:
        MalformedInputError: For values that have no literal form

    Examples:
        >>> format_literal(None)
        'NULL'
        >>> format_literal("Alice")
        "'Alice'"
        >>> format_literal(30)
        '30'
        >>> format_literal(float("nan"))
        "'NaN'"
    """
    if value is None:
        return "NULL"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return true_literal if value else false_literal
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "'NaN'"
        if math.isinf(value):
            return "'Infinity'" if value > 0 else "'-Infinity'"
        return repr(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            return quote_string(str(value))
        return str(value)
    if isinstance(value, str):
        return quote_string(value, escape_backslashes)
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return quote_string(value.isoformat(sep=" "))
    if isinstance(value, (date, time)):
        return quote_string(value.isoformat())
    raise MalformedInputError(
        f"Cannot render a SQL literal for value of type {type(value).__name__}"
    )
