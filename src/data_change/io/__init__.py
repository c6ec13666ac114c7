"""
Statement execution for DataChange.

Statement handles with typed positional setters over DB-API and
SQLAlchemy connections, and the executor that binds column values to them.
"""

from .executor import apply_change, execute, run_statement
from .statements import (
    DbApiStatement,
    DbApiStatementFactory,
    SqlAlchemyStatement,
    SqlAlchemyStatementFactory,
    StatementFactory,
    StatementHandle,
)

__all__ = [
    "apply_change",
    "execute",
    "run_statement",
    "DbApiStatement",
    "DbApiStatementFactory",
    "SqlAlchemyStatement",
    "SqlAlchemyStatementFactory",
    "StatementFactory",
    "StatementHandle",
]
