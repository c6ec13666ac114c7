"""Oracle capability descriptor."""

from datetime import date, datetime
from typing import Any

from ..core.literals import quote_string
from .base import BaseDialect


class OracleDialect(BaseDialect):
    """
    Oracle: no auto-increment columns (sequences are used instead), no
    boolean type, typed date literals, and no default-values insert.
    """

    name = "oracle"
    default_paramstyle = "named"
    auto_increment_supported = False
    true_literal = "1"
    false_literal = "0"
    empty_insert_clause = None

    def format_literal(self, value: Any) -> str:
        if isinstance(value, datetime):
            return "TIMESTAMP " + quote_string(value.isoformat(sep=" "))
        if isinstance(value, date):
            return "DATE " + quote_string(value.isoformat())
        return super().format_literal(value)
