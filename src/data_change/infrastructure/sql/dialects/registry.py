"""
Lookup of capability descriptors by dialect name.

Names follow SQLAlchemy's ``Dialect.name`` so a descriptor can be picked
straight from an engine.
"""

from typing import TYPE_CHECKING, Dict, List, Optional, Type

from data_change.config import get_settings
from data_change.exceptions import MalformedInputError

from .base import BaseDialect
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgresql import PostgreSQLDialect
from .sqlite import SQLiteDialect

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

DIALECTS: Dict[str, Type[BaseDialect]] = {
    "postgresql": PostgreSQLDialect,
    "postgres": PostgreSQLDialect,
    "mysql": MySQLDialect,
    "mariadb": MySQLDialect,
    "sqlite": SQLiteDialect,
    "oracle": OracleDialect,
}


def available_dialects() -> List[str]:
    return sorted(DIALECTS)


def get_dialect(
    name: Optional[str] = None,
    quoting: Optional[str] = None,
    paramstyle: Optional[str] = None,
) -> BaseDialect:
    """
    Build the capability descriptor for a dialect name.

    Args:
        name: Dialect name; defaults to the configured ``dialect`` setting
        quoting: Identifier quoting strategy; defaults to the configured one
        paramstyle: DB-API paramstyle of the driver; defaults per dialect

    Raises:
        MalformedInputError: If the dialect is not supported
    """
    settings = get_settings()
    key = (name or settings.dialect).lower()
    dialect_cls = DIALECTS.get(key)
    if dialect_cls is None:
        raise MalformedInputError(
            f"Unsupported dialect '{key}'. Available: {', '.join(available_dialects())}"
        )
    return dialect_cls(
        quoting=quoting or settings.identifier_quoting, paramstyle=paramstyle
    )


def dialect_for_engine(engine: "Engine", quoting: Optional[str] = None) -> BaseDialect:
    """Pick the descriptor for an SQLAlchemy engine, adopting its driver's paramstyle."""
    return get_dialect(
        engine.dialect.name, quoting=quoting, paramstyle=engine.dialect.paramstyle
    )
