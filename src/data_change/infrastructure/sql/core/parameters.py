"""
SQL parameter binding utilities.

Placeholders for positional binding in each DB-API (PEP 249) paramstyle,
plus the width coercions applied to typed numeric binds.
"""

import struct
from typing import List

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

PARAMSTYLES = ("qmark", "format", "pyformat", "numeric", "named")


def placeholder(position: int, paramstyle: str = "qmark") -> str:
    """
    Build the placeholder for a 1-based bind position.

    ``pyformat`` drivers (psycopg2, pymysql) accept ``%s`` with a positional
    tuple; ``named`` drivers (oracledb) accept ``:1`` style positions.

    Examples:
        >>> placeholder(1)
        '?'
        >>> placeholder(2, "pyformat")
        '%s'
        >>> placeholder(3, "numeric")
        ':3'
    """
    if position < 1:
        raise ValueError("Bind positions start at 1")
    if paramstyle == "qmark":
        return "?"
    if paramstyle in ("format", "pyformat"):
        return "%s"
    if paramstyle in ("numeric", "named"):
        return f":{position}"
    raise ValueError(f"Unsupported paramstyle: {paramstyle}")


def build_positional_placeholders(count: int, paramstyle: str = "qmark") -> List[str]:
    """
    Build placeholders for positions 1..count.

    Examples:
        >>> build_positional_placeholders(3)
        ['?', '?', '?']
        >>> build_positional_placeholders(2, "numeric")
        [':1', ':2']
    """
    return [placeholder(i, paramstyle) for i in range(1, count + 1)]


def narrow_to_int32(value: int) -> int:
    """
    Keep the low-order 32 bits of an integer as a signed value.

    Out-of-range inputs wrap around (two's complement), they are not
    clamped.

    Examples:
        >>> narrow_to_int32(30)
        30
        >>> narrow_to_int32(2**31)
        -2147483648
        >>> narrow_to_int32(2**32 + 5)
        5
    """
    return ((int(value) - INT32_MIN) % 2**32) + INT32_MIN


def fits_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def to_single_precision(value: float) -> float:
    """Round a double to the nearest IEEE-754 single precision value."""
    return struct.unpack("f", struct.pack("f", float(value)))[0]
