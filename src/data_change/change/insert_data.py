"""
Insert-row change: statement generation.

Strategy rule: if any column carries a binary large object
(:class:`BlobFile`) the insert is compiled, because raw binary payloads
cannot be embedded in SQL text. Text large objects (:class:`ClobFile`) do
not force the compiled strategy; in a textual insert they contribute NULL.
The asymmetry is long-standing behaviour.
"""

from typing import Any, ClassVar, Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from data_change.exceptions import MalformedInputError
from data_change.infrastructure.sql.dialects.base import DatabaseCapabilities
from data_change.utils.logging import get_logger

from .models import ColumnValue, TableRef
from .statements import CompiledInsert, GeneratedStatement, TextualInsert

logger = get_logger(__name__)


def requires_compiled_statement(columns: Iterable[ColumnValue]) -> bool:
    """True when any column, auto-increment or not, is a binary stream."""
    return any(column.is_binary_stream for column in columns)


def included_columns(
    columns: Iterable[ColumnValue], capabilities: DatabaseCapabilities
) -> List[ColumnValue]:
    """Drop auto-increment columns when the database generates them; keep order."""
    skip_generated = capabilities.supports_auto_increment()
    return [
        column
        for column in columns
        if not (skip_generated and column.is_auto_increment)
    ]


def generate(
    table: TableRef,
    columns: Sequence[ColumnValue],
    capabilities: DatabaseCapabilities,
) -> GeneratedStatement:
    """
    Generate the statement inserting one row.

    Args:
        table: Insert target
        columns: Column values; order is the binding order in compiled mode
        capabilities: Capability descriptor of the target database

    Returns:
        A :class:`CompiledInsert` when any column is a binary stream,
        otherwise a :class:`TextualInsert`
    """
    columns = tuple(columns)
    included = included_columns(columns, capabilities)
    skipped = [column.name for column in columns if column.is_auto_increment]
    if not capabilities.supports_auto_increment():
        skipped = []
    if skipped:
        logger.debug("insert.columns_skipped", table=str(table), columns=skipped)

    statement: GeneratedStatement
    if requires_compiled_statement(columns):
        statement = CompiledInsert(table, tuple(included), capabilities)
    else:
        inlined_clobs = [column.name for column in included if column.is_text_stream]
        if inlined_clobs:
            logger.warning(
                "insert.clob_not_inlined",
                table=str(table),
                columns=inlined_clobs,
            )
        statement = TextualInsert(
            table, tuple((column.name, column.value_object) for column in included)
        )

    logger.debug(
        "insert.strategy_selected",
        table=str(table),
        strategy=statement.strategy,
        column_count=len(included),
    )
    return statement


class InsertDataChange(BaseModel):
    """Inserts one row into an existing table."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    change_name: ClassVar[str] = "insert"
    description: ClassVar[str] = "Insert Row"
    skip_on_unsupported: ClassVar[bool] = False

    catalog_name: Optional[str] = None
    schema_name: Optional[str] = None
    table_name: str = Field(..., min_length=1)
    columns: List[ColumnValue] = Field(default_factory=list)

    @property
    def table_ref(self) -> TableRef:
        return TableRef(self.table_name, self.schema_name, self.catalog_name)

    def add_column(self, column: ColumnValue) -> None:
        self.columns.append(column)

    def remove_column(self, column: ColumnValue) -> None:
        self.columns.remove(column)

    def generate_statements(
        self, capabilities: DatabaseCapabilities
    ) -> List[GeneratedStatement]:
        return [generate(self.table_ref, self.columns, capabilities)]

    @property
    def confirmation_message(self) -> str:
        return f"New row inserted into {self.table_name}"

    @classmethod
    def from_attributes(cls, attributes: Dict[str, Any]) -> "InsertDataChange":
        """
        Build from changelog attributes (``catalogName``, ``schemaName``,
        ``tableName``, ``columns: [{column: {...}}]``).

        Raises:
            MalformedInputError: On unknown keys or invalid values
        """
        if not isinstance(attributes, dict):
            raise MalformedInputError("insert change must be a mapping")
        unknown = sorted(
            set(attributes) - {"catalogName", "schemaName", "tableName", "columns"}
        )
        if unknown:
            raise MalformedInputError(
                f"insert change has unknown attributes: {', '.join(unknown)}"
            )

        columns = []
        for entry in attributes.get("columns") or []:
            if not isinstance(entry, dict) or not isinstance(entry.get("column"), dict):
                raise MalformedInputError(
                    f"Expected a 'column' mapping in columns, got {entry!r}"
                )
            columns.append(ColumnValue.from_attributes(entry["column"]))

        try:
            return cls(
                catalog_name=attributes.get("catalogName"),
                schema_name=attributes.get("schemaName"),
                table_name=attributes.get("tableName"),
                columns=columns,
            )
        except ValidationError as e:
            raise MalformedInputError(f"Invalid insert change: {e}", cause=e) from e

    def to_attributes(self) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {}
        if self.catalog_name:
            attributes["catalogName"] = self.catalog_name
        if self.schema_name:
            attributes["schemaName"] = self.schema_name
        attributes["tableName"] = self.table_name
        attributes["columns"] = [
            {"column": column.to_attributes()} for column in self.columns
        ]
        return attributes
