"""Pytest configuration and shared fixtures for DataChange tests.

Settings are cached with lru_cache; every test starts and ends with a
clean cache so monkeypatched environment variables take effect.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

# Never pick up a developer's .env while testing
os.environ.setdefault("DCH_ENV_FILE", str(Path(__file__).parent / ".env.test-absent"))

from sqlalchemy import create_engine, text  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402

from data_change.change.models import ColumnValue, TableRef  # noqa: E402
from data_change.config import get_settings  # noqa: E402
from data_change.infrastructure.sql.dialects import SQLiteDialect  # noqa: E402

PERSON_DDL = """
CREATE TABLE person (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    age INTEGER,
    photo BLOB,
    bio TEXT,
    active BOOLEAN,
    score REAL,
    balance NUMERIC
)
"""


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def person_table() -> TableRef:
    return TableRef("person")


@pytest.fixture
def person_columns() -> list[ColumnValue]:
    """id (auto-increment), name='Alice', age=30."""
    return [
        ColumnValue(name="id", auto_increment=True),
        ColumnValue.of("name", "Alice"),
        ColumnValue.of("age", 30),
    ]


@pytest.fixture
def photo_file(tmp_path: Path) -> Path:
    path = tmp_path / "a.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)))
    return path


@pytest.fixture
def sqlite_dialect() -> SQLiteDialect:
    return SQLiteDialect()


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite database holding the person table."""
    engine = create_engine("sqlite://")
    with engine.begin() as connection:
        connection.execute(text(PERSON_DDL))
    yield engine
    engine.dispose()


@pytest.fixture
def person_database_url(tmp_path: Path) -> str:
    """File-backed SQLite database holding the person table, for code that opens its own engine."""
    url = f"sqlite:///{tmp_path / 'people.db'}"
    engine = create_engine(url)
    with engine.begin() as connection:
        connection.execute(text(PERSON_DDL))
    engine.dispose()
    return url
