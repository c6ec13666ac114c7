"""
Parameterized statement handles.

A handle is prepared from SQL text, receives typed values at 1-based
positions and is executed once. Values are coerced to the width they are
bound with, and stream setters read their source completely before
returning, so the caller may close the source right after the call.
Positions that were never bound are sent as NULL.
"""

import sqlite3
from datetime import date, datetime
from decimal import Decimal
from typing import IO, TYPE_CHECKING, Any, Dict, Optional, Protocol, Tuple

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from data_change.exceptions import DatabaseExecutionError, MalformedInputError
from data_change.infrastructure.sql.core.parameters import (
    fits_int32,
    fits_int64,
    to_single_precision,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection


class StatementHandle(Protocol):
    """Typed positional binding over one prepared statement."""

    def set_string(self, position: int, value: str) -> None: ...
    def set_boolean(self, position: int, value: bool) -> None: ...
    def set_long(self, position: int, value: int) -> None: ...
    def set_int(self, position: int, value: int) -> None: ...
    def set_double(self, position: int, value: float) -> None: ...
    def set_float(self, position: int, value: float) -> None: ...
    def set_decimal(self, position: int, value: Decimal) -> None: ...
    def set_date(self, position: int, value: date) -> None: ...
    def set_binary_stream(self, position: int, stream: IO[bytes]) -> None: ...
    def set_character_stream(self, position: int, reader: IO[str]) -> None: ...
    def execute(self) -> None: ...
    def close(self) -> None: ...


class StatementFactory(Protocol):
    def prepare(self, sql: str) -> StatementHandle: ...


class BaseStatement:
    """Collects typed binds; subclasses send them to a connection."""

    # Drivers without a Decimal adapter (sqlite3) receive decimals as text
    decimal_as_text = False

    def __init__(self, sql: str):
        self.sql = sql
        self.closed = False
        self._parameters: Dict[int, Any] = {}

    def _bind(self, position: int, value: Any) -> None:
        if self.closed:
            raise DatabaseExecutionError("Statement is closed", sql=self.sql)
        if position < 1:
            raise MalformedInputError(f"Bind positions start at 1, got {position}")
        self._parameters[position] = value

    @property
    def parameters(self) -> Tuple[Any, ...]:
        """Bound values for positions 1..highest bound position."""
        if not self._parameters:
            return ()
        highest = max(self._parameters)
        return tuple(self._parameters.get(i) for i in range(1, highest + 1))

    def set_string(self, position: int, value: str) -> None:
        if not isinstance(value, str):
            raise MalformedInputError(f"Expected str at position {position}")
        self._bind(position, value)

    def set_boolean(self, position: int, value: bool) -> None:
        self._bind(position, bool(value))

    def set_long(self, position: int, value: int) -> None:
        value = int(value)
        if not fits_int64(value):
            raise MalformedInputError(f"{value} does not fit a 64-bit integer")
        self._bind(position, value)

    def set_int(self, position: int, value: int) -> None:
        value = int(value)
        if not fits_int32(value):
            raise MalformedInputError(f"{value} does not fit a 32-bit integer")
        self._bind(position, value)

    def set_double(self, position: int, value: float) -> None:
        self._bind(position, float(value))

    def set_float(self, position: int, value: float) -> None:
        self._bind(position, to_single_precision(value))

    def set_decimal(self, position: int, value: Decimal) -> None:
        value = value if isinstance(value, Decimal) else Decimal(str(value))
        self._bind(position, str(value) if self.decimal_as_text else value)

    def set_date(self, position: int, value: date) -> None:
        self._bind(position, value.date() if isinstance(value, datetime) else value)

    def set_binary_stream(self, position: int, stream: IO[bytes]) -> None:
        self._bind(position, bytes(stream.read()))

    def set_character_stream(self, position: int, reader: IO[str]) -> None:
        self._bind(position, str(reader.read()))

    def execute(self) -> None:
        if self.closed:
            raise DatabaseExecutionError("Statement is closed", sql=self.sql)
        self._run(self.parameters)

    def _run(self, parameters: Tuple[Any, ...]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        self.closed = True
        self._parameters.clear()


class DbApiStatement(BaseStatement):
    """Statement over a PEP 249 connection (sqlite3, psycopg2, pymysql, ...)."""

    def __init__(self, connection: Any, sql: str):
        super().__init__(sql)
        self.connection = connection
        self.decimal_as_text = isinstance(connection, sqlite3.Connection)

    def _run(self, parameters: Tuple[Any, ...]) -> None:
        cursor = None
        try:
            cursor = self.connection.cursor()
            if parameters:
                cursor.execute(self.sql, parameters)
            else:
                # No parameters: keeps pyformat drivers from interpreting '%'
                cursor.execute(self.sql)
        except Exception as e:
            raise DatabaseExecutionError(str(e), sql=self.sql, cause=e) from e
        finally:
            if cursor is not None:
                cursor.close()


class DbApiStatementFactory:
    def __init__(self, connection: Any):
        self.connection = connection

    def prepare(self, sql: str) -> DbApiStatement:
        return DbApiStatement(self.connection, sql)


class SqlAlchemyStatement(BaseStatement):
    """Statement over an SQLAlchemy ``Connection``, sent as driver-level SQL."""

    def __init__(self, connection: "Connection", sql: str):
        super().__init__(sql)
        self.connection = connection
        self.decimal_as_text = connection.dialect.name == "sqlite"

    def _run(self, parameters: Tuple[Any, ...]) -> None:
        try:
            if parameters:
                self.connection.exec_driver_sql(self.sql, parameters)
            else:
                self.connection.execution_options(no_parameters=True).exec_driver_sql(
                    self.sql
                )
        except SQLAlchemyError as e:
            cause: Optional[BaseException] = e
            if isinstance(e, DBAPIError) and e.orig is not None:
                cause = e.orig
            raise DatabaseExecutionError(str(cause), sql=self.sql, cause=e) from e


class SqlAlchemyStatementFactory:
    """
    Prepares statements on a caller-owned SQLAlchemy connection.

    Transactions are the caller's business, e.g.::

        with engine.begin() as connection:
            statement.execute(SqlAlchemyStatementFactory(connection))
    """

    def __init__(self, connection: "Connection"):
        self.connection = connection

    def prepare(self, sql: str) -> SqlAlchemyStatement:
        return SqlAlchemyStatement(self.connection, sql)
