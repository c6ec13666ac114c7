"""
Unified CLI entry point for DataChange.

Usage:
    python -m data_change.cli <command> [options]

Available commands:
    render  - Print the SQL each change of a changelog would run
    apply   - Run a changelog against a database in one transaction

Examples:
    # Preview the SQL for PostgreSQL
    python -m data_change.cli render db/changelog.yaml --dialect postgresql

    # Apply to the database named by DATABASE_URL
    python -m data_change.cli apply db/changelog.yaml

    # Apply to an explicit database
    python -m data_change.cli apply db/changelog.json --url sqlite:///local.db
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from data_change.change.insert_data import InsertDataChange
from data_change.change.statements import CompiledInsert
from data_change.config import get_settings
from data_change.exceptions import DataChangeError
from data_change.infrastructure.sql.dialects import (
    available_dialects,
    dialect_for_engine,
    get_dialect,
)
from data_change.serializer import default_registry
from data_change.utils.logging import get_logger

logger = get_logger(__name__)


def load_changelog(path: Path) -> List[InsertDataChange]:
    """Parse a changelog file with the serializer registered for its extension."""
    serializer = default_registry().get_serializer(path.name)
    return serializer.parse(path.read_text(encoding="utf-8"))


def _render(args: argparse.Namespace) -> int:
    dialect = get_dialect(args.dialect)
    for change in load_changelog(args.changelog):
        for statement in change.generate_statements(dialect):
            print(f"{statement.to_sql(dialect)};")
            if isinstance(statement, CompiledInsert):
                print(f"-- bound at execution: {', '.join(statement.column_names)}")
    return 0


def _apply(args: argparse.Namespace) -> int:
    # Deferred: only apply needs a database driver stack
    from sqlalchemy import create_engine

    from data_change.io.executor import apply_change
    from data_change.io.statements import SqlAlchemyStatementFactory

    url = args.url or get_settings().DATABASE_URL
    if not url:
        print("No database URL: pass --url or set DATABASE_URL", file=sys.stderr)
        return 1

    changes = load_changelog(args.changelog)
    engine = create_engine(url)
    try:
        dialect = dialect_for_engine(engine)
        with engine.begin() as connection:
            factory = SqlAlchemyStatementFactory(connection)
            for change in changes:
                print(apply_change(change, dialect, factory))
    finally:
        engine.dispose()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="data_change.cli",
        description="DataChange CLI - render or apply insert changelogs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    render_parser = subparsers.add_parser(
        "render", help="Print the SQL of every change in a changelog"
    )
    render_parser.add_argument("changelog", type=Path, help="Changelog file (.yaml, .yml, .json)")
    render_parser.add_argument(
        "--dialect",
        choices=available_dialects(),
        default=None,
        help="Target dialect (default: DCH_DIALECT setting)",
    )

    apply_parser = subparsers.add_parser(
        "apply", help="Run a changelog against a database in one transaction"
    )
    apply_parser.add_argument("changelog", type=Path, help="Changelog file (.yaml, .yml, .json)")
    apply_parser.add_argument(
        "--url", default=None, help="SQLAlchemy database URL (default: DATABASE_URL)"
    )

    args = parser.parse_args(argv)
    handler = _render if args.command == "render" else _apply

    try:
        return handler(args)
    except FileNotFoundError as e:
        print(f"Changelog not found: {e.filename}", file=sys.stderr)
        return 1
    except DataChangeError as e:
        logger.error("cli.command_failed", command=args.command, **e.to_dict())
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
