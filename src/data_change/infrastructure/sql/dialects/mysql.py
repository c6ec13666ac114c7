"""MySQL / MariaDB capability descriptor."""

from typing import Optional, Tuple

from .base import BaseDialect


class MySQLDialect(BaseDialect):
    """MySQL: backtick identifiers, the database is the only table qualifier."""

    name = "mysql"
    default_paramstyle = "format"
    escape_backslashes = True
    empty_insert_clause = "() VALUES ()"

    def qualifiers(
        self, catalog: Optional[str], schema: Optional[str]
    ) -> Tuple[Optional[str], Optional[str]]:
        # MySQL has no schema level below the database; accept either name for it
        return None, catalog or schema
