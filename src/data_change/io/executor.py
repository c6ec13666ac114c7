"""
Compiled-statement executor.

Binds each column to its 1-based position on a prepared statement, using
the setter that matches the populated value, then executes the statement
once. A column without a value still takes up its position; nothing is
bound there, so the database reports the problem.

Large-object files are opened one at a time, only for the duration of the
setter call of their own column, and are closed on success and failure
alike.
"""

from contextlib import closing
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Sequence

from data_change.change.models import (
    BlobFile,
    BooleanValue,
    ClobFile,
    ColumnValue,
    DateValue,
    NumericKind,
    NumericValue,
    StringValue,
)
from data_change.change.statements import CompiledInsert, GeneratedStatement
from data_change.config import get_settings
from data_change.exceptions import (
    DataChangeError,
    DatabaseExecutionError,
    ResourceNotFoundError,
)
from data_change.infrastructure.sql.core.parameters import narrow_to_int32
from data_change.infrastructure.sql.dialects.base import DatabaseCapabilities
from data_change.utils.logging import get_logger

from .statements import StatementFactory, StatementHandle

logger = get_logger(__name__)

_NUMERIC_SETTERS = {
    NumericKind.LONG: "set_long",
    NumericKind.INT: "set_int",
    NumericKind.DOUBLE: "set_double",
    NumericKind.FLOAT: "set_float",
    NumericKind.DECIMAL: "set_decimal",
}


def _open_large_object(path: Path, column: str, binary: bool) -> IO[Any]:
    settings = get_settings()
    try:
        if binary:
            return open(path, "rb", buffering=settings.lob_buffer_size)
        return open(
            path,
            "r",
            encoding=settings.clob_encoding,
            buffering=settings.lob_buffer_size,
        )
    except OSError as e:
        # Missing, unreadable or not a regular file
        logger.error(
            "insert.resource_missing",
            column=column,
            path=str(path),
            reason=type(e).__name__,
        )
        raise ResourceNotFoundError(str(e), path=str(path), cause=e) from e


def _bind_numeric(statement: StatementHandle, position: int, value: NumericValue) -> None:
    if value.kind == NumericKind.BIG_INTEGER:
        narrowed = narrow_to_int32(value.number)
        if narrowed != value.number:
            logger.warning(
                "insert.numeric_narrowed",
                position=position,
                original=str(value.number),
                bound=narrowed,
            )
        statement.set_int(position, narrowed)
        return
    getattr(statement, _NUMERIC_SETTERS[value.kind])(position, value.number)


def bind_column(statement: StatementHandle, position: int, column: ColumnValue) -> None:
    """Bind one column at ``position`` with the setter for its value type."""
    value = column.value
    if value is None:
        logger.debug("insert.position_unbound", column=column.name, position=position)
    elif isinstance(value, StringValue):
        statement.set_string(position, value.text)
    elif isinstance(value, BooleanValue):
        statement.set_boolean(position, value.flag)
    elif isinstance(value, NumericValue):
        _bind_numeric(statement, position, value)
    elif isinstance(value, DateValue):
        instant = value.instant
        statement.set_date(position, instant.date() if isinstance(instant, datetime) else instant)
    elif isinstance(value, BlobFile):
        with _open_large_object(value.path, column.name, binary=True) as stream:
            statement.set_binary_stream(position, stream)
    elif isinstance(value, ClobFile):
        with _open_large_object(value.path, column.name, binary=False) as reader:
            statement.set_character_stream(position, reader)


def execute(
    statement_text: str,
    bound_columns: Sequence[ColumnValue],
    connection_factory: StatementFactory,
) -> None:
    """
    Prepare ``statement_text``, bind ``bound_columns`` in order and execute once.

    Raises:
        ResourceNotFoundError: A referenced large-object file cannot be opened
        DatabaseExecutionError: The driver or database rejected the statement
    """
    try:
        statement = connection_factory.prepare(statement_text)
    except DataChangeError:
        raise
    except Exception as e:
        raise DatabaseExecutionError(str(e), sql=statement_text, cause=e) from e

    with closing(statement):
        try:
            for position, column in enumerate(bound_columns, start=1):
                bind_column(statement, position, column)
            statement.execute()
        except DatabaseExecutionError as e:
            logger.error("insert.database_error", **e.to_dict())
            raise
        except DataChangeError:
            raise
        except Exception as e:
            # Caller-supplied handles may surface raw driver errors
            error = DatabaseExecutionError(str(e), sql=statement_text, cause=e)
            logger.error("insert.database_error", **error.to_dict())
            raise error from e

    logger.debug("insert.executed", column_count=len(bound_columns))


def run_statement(
    statement: GeneratedStatement,
    capabilities: DatabaseCapabilities,
    connection_factory: StatementFactory,
) -> None:
    """Execute either statement variant through ``connection_factory``."""
    if isinstance(statement, CompiledInsert):
        statement.execute(connection_factory)
        return

    sql = statement.to_sql(capabilities)
    execute(sql, (), connection_factory)


def apply_change(
    change: Any,
    capabilities: DatabaseCapabilities,
    connection_factory: StatementFactory,
) -> str:
    """
    Generate and run every statement of a change; return its confirmation message.

    Transaction boundaries belong to whoever supplies ``connection_factory``.
    """
    statements = change.generate_statements(capabilities)
    for statement in statements:
        run_statement(statement, capabilities, connection_factory)
    logger.info(
        "change.applied",
        change=change.change_name,
        table=str(change.table_ref),
        statement_count=len(statements),
    )
    return change.confirmation_message
