"""
Database capability descriptors.

A capability descriptor hides database-specific behaviour from statement
generation: identifier escaping, literal formatting, placeholder syntax
and feature flags such as auto-increment support.
"""

from typing import Any, Optional, Protocol, Tuple

from ..core.identifier import LEGACY, qualify_table, quote_identifier
from ..core.literals import format_literal
from ..core.parameters import PARAMSTYLES, placeholder


class DatabaseCapabilities(Protocol):
    """Protocol consumed by statement generation and rendering."""

    name: str
    paramstyle: str
    empty_insert_clause: Optional[str]

    def supports_auto_increment(self) -> bool: ...
    def escape_table_name(
        self, catalog: Optional[str], schema: Optional[str], table: str
    ) -> str: ...
    def escape_column_name(
        self, catalog: Optional[str], schema: Optional[str], table: str, column: str
    ) -> str: ...
    def format_literal(self, value: Any) -> str: ...
    def placeholder(self, position: int) -> str: ...


class BaseDialect:
    """Shared implementation of :class:`DatabaseCapabilities`."""

    name = "generic"
    default_paramstyle = "qmark"
    auto_increment_supported = True
    true_literal = "TRUE"
    false_literal = "FALSE"
    escape_backslashes = False
    # None means the database has no way to insert a row of defaults only
    empty_insert_clause: Optional[str] = "DEFAULT VALUES"

    def __init__(self, quoting: str = LEGACY, paramstyle: Optional[str] = None):
        paramstyle = paramstyle or self.default_paramstyle
        if paramstyle not in PARAMSTYLES:
            raise ValueError(f"Unsupported paramstyle: {paramstyle}")
        self.quoting = quoting
        self.paramstyle = paramstyle

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(quoting={self.quoting!r}, "
            f"paramstyle={self.paramstyle!r})"
        )

    def supports_auto_increment(self) -> bool:
        return self.auto_increment_supported

    def quote(self, identifier: str) -> str:
        """Quote an identifier according to the quoting strategy."""
        return quote_identifier(identifier, dialect=self.name, quoting=self.quoting)

    def qualifiers(
        self, catalog: Optional[str], schema: Optional[str]
    ) -> Tuple[Optional[str], Optional[str]]:
        """Return the (catalog, schema) parts this database puts in front of a table."""
        return None, schema

    def escape_table_name(
        self, catalog: Optional[str], schema: Optional[str], table: str
    ) -> str:
        catalog, schema = self.qualifiers(catalog, schema)
        return qualify_table(
            table, schema=schema, catalog=catalog, dialect=self.name, quoting=self.quoting
        )

    def escape_column_name(
        self, catalog: Optional[str], schema: Optional[str], table: str, column: str
    ) -> str:
        return self.quote(column)

    def format_literal(self, value: Any) -> str:
        return format_literal(
            value,
            true_literal=self.true_literal,
            false_literal=self.false_literal,
            escape_backslashes=self.escape_backslashes,
        )

    def placeholder(self, position: int) -> str:
        return placeholder(position, self.paramstyle)
