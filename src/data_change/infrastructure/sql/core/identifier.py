"""
SQL identifier handling utilities.

Provides functions for quoting and qualifying SQL identifiers (catalog,
schema, table and column names) for the supported dialects.
"""

import re
from typing import Optional

QUOTE_ALL = "quote_all"
LEGACY = "legacy"

# Words that must be quoted even when they look like plain identifiers
RESERVED_WORDS = frozenset(
    {
        "all", "alter", "and", "any", "as", "asc", "between", "by", "case",
        "check", "column", "constraint", "create", "cross", "current_date",
        "current_time", "current_timestamp", "current_user", "default",
        "delete", "desc", "distinct", "drop", "else", "end", "except",
        "exists", "false", "for", "foreign", "from", "full", "grant", "group",
        "having", "in", "index", "inner", "insert", "intersect", "into", "is",
        "join", "key", "left", "like", "limit", "not", "null", "offset", "on",
        "or", "order", "outer", "primary", "references", "right", "select",
        "set", "table", "then", "to", "true", "union", "unique", "update",
        "user", "using", "values", "when", "where", "with",
    }
)

# PostgreSQL folds unquoted names to lower case, so upper case needs quoting
_SIMPLE_LOWER = re.compile(r"^[a-z_][a-z0-9_$]*$")
_SIMPLE_ANY_CASE = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*$")


def needs_quoting(name: str, dialect: str = "postgresql") -> bool:
    """
    Decide whether an identifier has to be quoted to keep its meaning.

    Examples:
        >>> needs_quoting("person")
        False
        >>> needs_quoting("Person")
        True
        >>> needs_quoting("Person", dialect="mysql")
        False
        >>> needs_quoting("order")
        True
    """
    pattern = _SIMPLE_LOWER if dialect == "postgresql" else _SIMPLE_ANY_CASE
    if not pattern.match(name):
        return True
    return name.lower() in RESERVED_WORDS


def quote_identifier(
    name: str, dialect: str = "postgresql", quoting: str = QUOTE_ALL
) -> str:
    """
    Quote a SQL identifier (table or column name).

    Args:
        name: The identifier to quote
        dialect: Database dialect ("postgresql", "mysql", "sqlite")
        quoting: "quote_all" always quotes, "legacy" only when needed

    Returns:
        Properly quoted identifier

    Raises:
        ValueError: If name is empty

    Examples:
        >>> quote_identifier("person")
        '"person"'
        >>> quote_identifier("person", quoting="legacy")
        'person'
        >>> quote_identifier("table", dialect="mysql")
        '`table`'
    """
    if not name or not isinstance(name, str):
        raise ValueError("Identifier name must be non-empty string")

    if quoting == LEGACY and not needs_quoting(name, dialect):
        return name

    if dialect == "mysql":
        # Escape backticks in MySQL
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
    # PostgreSQL and SQLite use double quotes, doubled when embedded
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def qualify_table(
    table: str,
    schema: Optional[str] = None,
    catalog: Optional[str] = None,
    dialect: str = "postgresql",
    quoting: str = QUOTE_ALL,
) -> str:
    """
    Create a qualified table name from optional catalog and schema parts.

    Empty or whitespace-only qualifiers are ignored. Which qualifiers a
    dialect actually honours is decided by the caller.

    Examples:
        >>> qualify_table("person", schema="public")
        '"public"."person"'
        >>> qualify_table("person", schema="public", quoting="legacy")
        'public.person'
        >>> qualify_table("person")
        '"person"'
    """
    if not table or not isinstance(table, str):
        raise ValueError("Table name must be non-empty string")

    parts = [
        quote_identifier(str(part).strip(), dialect, quoting)
        for part in (catalog, schema)
        if part and str(part).strip()
    ]
    parts.append(quote_identifier(table, dialect, quoting))
    return ".".join(parts)
