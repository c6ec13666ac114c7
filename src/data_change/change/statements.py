"""
Generated insert statements.

``generate`` returns one of two variants:

- :class:`TextualInsert`: plain SQL text with inline literals
- :class:`CompiledInsert`: parameterized SQL whose columns are bound
  positionally (1-based) at execution time

Both already exclude auto-increment columns the database generates.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Optional, Tuple, Union

from data_change.infrastructure.sql.dialects.base import DatabaseCapabilities
from data_change.infrastructure.sql.operations.insert import InsertBuilder

from .models import ColumnValue, TableRef

if TYPE_CHECKING:
    from data_change.io.statements import StatementFactory


@dataclass(frozen=True)
class TextualInsert:
    """Insert rendered as SQL text; values are raw Python values until rendering."""

    table: TableRef
    column_values: Tuple[Tuple[str, Any], ...]

    strategy: ClassVar[str] = "textual"

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.column_values)

    def to_sql(self, capabilities: DatabaseCapabilities) -> str:
        """Render with identifiers escaped and values formatted by ``capabilities``."""
        return InsertBuilder(capabilities).insert_literal(
            self.table.table,
            self.column_values,
            schema=self.table.schema,
            catalog=self.table.catalog,
        )


@dataclass(frozen=True)
class CompiledInsert:
    """Parameterized insert bound column by column when executed."""

    table: TableRef
    columns: Tuple[ColumnValue, ...]
    capabilities: DatabaseCapabilities = field(compare=False, repr=False)

    strategy: ClassVar[str] = "compiled"

    @property
    def column_names(self) -> Tuple[str, ...]:
        return tuple(column.name for column in self.columns)

    @property
    def placeholder_count(self) -> int:
        return len(self.columns)

    @property
    def sql(self) -> str:
        return InsertBuilder(self.capabilities).insert_parameterized(
            self.table.table,
            self.column_names,
            schema=self.table.schema,
            catalog=self.table.catalog,
        )

    def to_sql(self, capabilities: Optional[DatabaseCapabilities] = None) -> str:
        if capabilities is None or capabilities is self.capabilities:
            return self.sql
        return InsertBuilder(capabilities).insert_parameterized(
            self.table.table,
            self.column_names,
            schema=self.table.schema,
            catalog=self.table.catalog,
        )

    def execute(self, factory: "StatementFactory") -> None:
        """Prepare, bind and execute once through ``factory``."""
        from data_change.io.executor import execute

        execute(self.sql, self.columns, factory)


GeneratedStatement = Union[TextualInsert, CompiledInsert]
