"""
SQL module for INSERT generation.

Reusable utilities for building SQL statements with identifier quoting,
table qualification, literal formatting and dialect-specific syntax.
"""

from .core.identifier import qualify_table, quote_identifier
from .core.literals import format_literal
from .core.parameters import build_positional_placeholders, narrow_to_int32
from .dialects import (
    BaseDialect,
    DatabaseCapabilities,
    MySQLDialect,
    OracleDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    dialect_for_engine,
    get_dialect,
)
from .operations.insert import InsertBuilder

__all__ = [
    "quote_identifier",
    "qualify_table",
    "format_literal",
    "build_positional_placeholders",
    "narrow_to_int32",
    "BaseDialect",
    "DatabaseCapabilities",
    "MySQLDialect",
    "OracleDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "dialect_for_engine",
    "get_dialect",
    "InsertBuilder",
]
