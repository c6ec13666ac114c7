"""PostgreSQL capability descriptor."""

from .base import BaseDialect


class PostgreSQLDialect(BaseDialect):
    """PostgreSQL: double-quoted identifiers, schema-qualified tables, SERIAL/IDENTITY."""

    name = "postgresql"
    default_paramstyle = "pyformat"
