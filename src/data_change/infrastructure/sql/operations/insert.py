"""
SQL INSERT statement builders.

Assembles ``INSERT INTO <table>(<col>, ...) VALUES(<val>, ...)`` with
identifier escaping, literal formatting and placeholders delegated to a
capability descriptor.
"""

from typing import Any, List, Optional, Sequence, Tuple

from data_change.exceptions import MalformedInputError

from ..dialects.base import DatabaseCapabilities


class InsertBuilder:
    """
    High-level builder for single-row INSERT statements.

    Example:
        >>> from data_change.infrastructure.sql import InsertBuilder, SQLiteDialect
        >>> builder = InsertBuilder(SQLiteDialect())
        >>> builder.insert_literal("person", [("name", "Alice"), ("age", 30)])
        "INSERT INTO person(name, age) VALUES('Alice', 30)"
        >>> builder.insert_parameterized("person", ["name", "age"])
        'INSERT INTO person(name, age) VALUES(?, ?)'
    """

    def __init__(self, dialect: DatabaseCapabilities):
        """
        Initialize the InsertBuilder.

        Args:
            dialect: Capability descriptor used for escaping and formatting
        """
        self.dialect = dialect

    def insert(
        self,
        table: str,
        columns: Sequence[str],
        values: Sequence[str],
        schema: Optional[str] = None,
        catalog: Optional[str] = None,
    ) -> str:
        """
        Build an INSERT from already rendered value expressions.

        With no columns at all the dialect's default-values insert is used.

        Args:
            table: Table name
            columns: Column names, in binding order
            values: Rendered value expressions (literals or placeholders)
            schema: Optional schema name
            catalog: Optional catalog name

        Returns:
            INSERT SQL statement

        Raises:
            MalformedInputError: On a column/value count mismatch, or an empty
                column list for a dialect without a default-values insert
        """
        if len(columns) != len(values):
            raise MalformedInputError(
                f"Column count ({len(columns)}) does not match value count ({len(values)})"
            )

        qualified_table = self.dialect.escape_table_name(catalog, schema, table)
        if not columns:
            clause = self.dialect.empty_insert_clause
            if clause is None:
                raise MalformedInputError(
                    f"Cannot insert a row without columns into {table} "
                    f"on {self.dialect.name}"
                )
            return f"INSERT INTO {qualified_table} {clause}"

        quoted_cols = ", ".join(
            self.dialect.escape_column_name(catalog, schema, table, column)
            for column in columns
        )
        return f"INSERT INTO {qualified_table}({quoted_cols}) VALUES({', '.join(values)})"

    def insert_literal(
        self,
        table: str,
        column_values: Sequence[Tuple[str, Any]],
        schema: Optional[str] = None,
        catalog: Optional[str] = None,
    ) -> str:
        """Build an INSERT with every value inlined as a SQL literal."""
        columns: List[str] = [name for name, _ in column_values]
        literals = [self.dialect.format_literal(value) for _, value in column_values]
        return self.insert(table, columns, literals, schema, catalog)

    def insert_parameterized(
        self,
        table: str,
        columns: Sequence[str],
        schema: Optional[str] = None,
        catalog: Optional[str] = None,
    ) -> str:
        """Build an INSERT with one positional placeholder per column."""
        placeholders = [
            self.dialect.placeholder(position) for position in range(1, len(columns) + 1)
        ]
        return self.insert(table, columns, placeholders, schema, catalog)
