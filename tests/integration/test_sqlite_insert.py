"""
End-to-end insert tests against an in-memory SQLite database through SQLAlchemy.
"""

from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import text

from data_change.change.insert_data import InsertDataChange
from data_change.change.models import BlobFile, ClobFile, ColumnValue, NumericValue
from data_change.exceptions import DatabaseExecutionError, ResourceNotFoundError
from data_change.infrastructure.sql.dialects import dialect_for_engine
from data_change.io.executor import apply_change
from data_change.io.statements import SqlAlchemyStatementFactory


def apply(engine, change: InsertDataChange) -> str:
    with engine.begin() as connection:
        return apply_change(change, dialect_for_engine(engine), SqlAlchemyStatementFactory(connection))


def rows(engine, columns: str):
    with engine.connect() as connection:
        return [tuple(row) for row in connection.execute(text(f"SELECT {columns} FROM person"))]


@pytest.fixture
def bio_file(tmp_path: Path) -> Path:
    path = tmp_path / "bio.txt"
    path.write_text("Alice was born in 1994.\nShe likes SQL.", encoding="utf-8")
    return path


@pytest.mark.integration
def test_textual_insert(sqlite_engine, person_columns):
    """A row without large objects is inserted from literal SQL."""
    change = InsertDataChange(
        table_name="person",
        columns=[
            *person_columns,
            ColumnValue.of("active", True),
            ColumnValue.of("score", 9.5),
            ColumnValue.of("bio", "O'Brien's notes"),
        ],
    )

    assert apply(sqlite_engine, change) == "New row inserted into person"
    assert rows(sqlite_engine, "id, name, age, active, score, bio") == [
        (1, "Alice", 30, 1, 9.5, "O'Brien's notes")
    ]


@pytest.mark.integration
def test_generated_ids_increase(sqlite_engine, person_columns):
    """Skipped auto-increment columns are filled by the database."""
    change = InsertDataChange(table_name="person", columns=person_columns)
    apply(sqlite_engine, change)
    apply(sqlite_engine, change)

    assert rows(sqlite_engine, "id") == [(1,), (2,)]


@pytest.mark.integration
def test_compiled_insert_with_blob(sqlite_engine, person_columns, photo_file, bio_file):
    """Every value type round-trips through a compiled insert."""
    change = InsertDataChange(
        table_name="person",
        columns=[
            *person_columns,
            ColumnValue.of("photo", BlobFile(path=photo_file)),
            ColumnValue.of("bio", ClobFile(path=bio_file)),
            ColumnValue.of("active", False),
            ColumnValue.of("score", NumericValue(number=0.5, kind="float")),
            ColumnValue.of("balance", Decimal("1.10")),
        ],
    )

    apply(sqlite_engine, change)

    assert rows(sqlite_engine, "name, age, photo, bio, active, score, balance") == [
        ("Alice", 30, photo_file.read_bytes(), bio_file.read_text(encoding="utf-8"), 0, 0.5, 1.1)
    ]


@pytest.mark.integration
def test_clob_without_blob_inserts_null(sqlite_engine, person_columns, bio_file):
    """A clob alone keeps the insert textual and stores NULL."""
    change = InsertDataChange(
        table_name="person",
        columns=[*person_columns, ColumnValue.of("bio", ClobFile(path=bio_file))],
    )

    apply(sqlite_engine, change)

    assert rows(sqlite_engine, "name, bio") == [("Alice", None)]


@pytest.mark.integration
def test_missing_blob_leaves_no_row(sqlite_engine, person_columns, tmp_path):
    """A missing blob file rolls the transaction back."""
    change = InsertDataChange(
        table_name="person",
        columns=[*person_columns, ColumnValue.of("photo", BlobFile(path=tmp_path / "gone.png"))],
    )

    with pytest.raises(ResourceNotFoundError):
        apply(sqlite_engine, change)

    assert rows(sqlite_engine, "id") == []


@pytest.mark.integration
def test_database_error_is_reported(sqlite_engine, photo_file):
    """Constraint violations surface as DatabaseExecutionError."""
    # name is NOT NULL and never bound
    change = InsertDataChange(
        table_name="person",
        columns=[ColumnValue.of("photo", BlobFile(path=photo_file))],
    )

    with pytest.raises(DatabaseExecutionError, match="NOT NULL"):
        apply(sqlite_engine, change)

    assert rows(sqlite_engine, "id") == []


@pytest.mark.integration
def test_unknown_table(sqlite_engine):
    """The failing SQL text is kept on the error."""
    change = InsertDataChange(table_name="people", columns=[ColumnValue.of("name", "Bob")])

    with pytest.raises(DatabaseExecutionError, match="no such table") as excinfo:
        apply(sqlite_engine, change)

    assert excinfo.value.sql == "INSERT INTO people(name) VALUES('Bob')"
