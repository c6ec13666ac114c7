"""SQLite capability descriptor."""

from .base import BaseDialect


class SQLiteDialect(BaseDialect):
    """SQLite: the schema is the attached database name; booleans are integers."""

    name = "sqlite"
    default_paramstyle = "qmark"
    true_literal = "1"
    false_literal = "0"
