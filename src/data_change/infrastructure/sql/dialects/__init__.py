"""SQL dialect capability descriptors."""

from .base import BaseDialect, DatabaseCapabilities
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgresql import PostgreSQLDialect
from .registry import available_dialects, dialect_for_engine, get_dialect
from .sqlite import SQLiteDialect

__all__ = [
    "BaseDialect",
    "DatabaseCapabilities",
    "MySQLDialect",
    "OracleDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "available_dialects",
    "dialect_for_engine",
    "get_dialect",
]
