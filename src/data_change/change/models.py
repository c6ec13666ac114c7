"""
Column value model for row inserts.

A :class:`ColumnValue` names one column and carries at most one typed
value. The value is a tagged union (pydantic discriminated union keyed by
``type``), so there is never any doubt about which value wins:

- :class:`StringValue`   -> bound as a string
- :class:`BooleanValue`  -> bound as a boolean
- :class:`NumericValue`  -> bound with the width named by its :class:`NumericKind`
- :class:`DateValue`     -> bound as a date derived from the stored instant
- :class:`BlobFile`      -> large binary object streamed from a file
- :class:`ClobFile`      -> large text object streamed from a file

Known limitation: ``NumericKind.BIG_INTEGER`` values are bound through the
32-bit integer path and wrap around when they exceed that range.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from data_change.exceptions import MalformedInputError
from data_change.infrastructure.sql.core.parameters import fits_int32, fits_int64


class NumericKind(str, Enum):
    """Native binding width of a numeric value."""

    LONG = "long"
    INT = "int"
    DOUBLE = "double"
    FLOAT = "float"
    DECIMAL = "decimal"
    BIG_INTEGER = "big_integer"


_INTEGRAL_KINDS = (NumericKind.LONG, NumericKind.INT, NumericKind.BIG_INTEGER)
_FLOATING_KINDS = (NumericKind.DOUBLE, NumericKind.FLOAT)


def parse_number(text: str) -> Union[int, float]:
    """
    Parse numeric changelog text.

    Integral text becomes an ``int``; anything else a ``float``.

    Examples:
        >>> parse_number("30")
        30
        >>> parse_number("2.5")
        2.5
    """
    stripped = text.strip()
    try:
        return int(stripped)
    except ValueError:
        pass
    try:
        return float(stripped)
    except ValueError:
        raise ValueError(f"Not a number: {text!r}") from None


def _parse_numeric_text(text: str, kind: Optional[NumericKind]) -> Union[int, float, Decimal]:
    if kind == NumericKind.DECIMAL:
        try:
            return Decimal(text.strip())
        except InvalidOperation:
            raise ValueError(f"Not a decimal: {text!r}") from None
    return parse_number(text)


def infer_numeric_kind(number: Union[int, float, Decimal]) -> NumericKind:
    """
    Pick the narrowest native width for a Python number.

    Examples:
        >>> infer_numeric_kind(30)
        <NumericKind.LONG: 'long'>
        >>> infer_numeric_kind(2**70)
        <NumericKind.BIG_INTEGER: 'big_integer'>
    """
    if isinstance(number, bool):
        raise ValueError("Booleans are not numeric values")
    if isinstance(number, int):
        return NumericKind.LONG if fits_int64(number) else NumericKind.BIG_INTEGER
    if isinstance(number, float):
        return NumericKind.DOUBLE
    if isinstance(number, Decimal):
        return NumericKind.DECIMAL
    raise ValueError(f"Unsupported numeric type: {type(number).__name__}")


class _Value(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class StringValue(_Value):
    type: Literal["string"] = "string"
    text: str


class BooleanValue(_Value):
    type: Literal["boolean"] = "boolean"
    flag: bool


class NumericValue(_Value):
    type: Literal["numeric"] = "numeric"
    number: Union[int, float, Decimal]
    kind: NumericKind

    @model_validator(mode="before")
    @classmethod
    def _coerce_number(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        number = data.get("number")
        if isinstance(number, bool):
            raise ValueError("Booleans are not numeric values")
        kind = data.get("kind")
        kind = NumericKind(kind) if kind is not None else None
        if isinstance(number, str):
            number = _parse_numeric_text(number, kind)
        if kind is None:
            kind = infer_numeric_kind(number)

        if kind in _INTEGRAL_KINDS:
            if isinstance(number, float) and not number.is_integer():
                raise ValueError(f"{kind.value} value must be integral, got {number!r}")
            number = int(number)
        elif kind in _FLOATING_KINDS:
            number = float(number)
        else:
            try:
                number = number if isinstance(number, Decimal) else Decimal(str(number))
            except InvalidOperation:
                raise ValueError(f"Not a decimal: {number!r}") from None
        return {**data, "number": number, "kind": kind}

    @model_validator(mode="after")
    def _check_range(self) -> "NumericValue":
        if self.kind == NumericKind.INT and not fits_int32(self.number):
            raise ValueError(f"{self.number} does not fit a 32-bit integer")
        if self.kind == NumericKind.LONG and not fits_int64(self.number):
            raise ValueError(f"{self.number} does not fit a 64-bit integer")
        return self


class DateValue(_Value):
    type: Literal["date"] = "date"
    instant: Union[datetime, date]


class BlobFile(_Value):
    """Large binary object read from ``path`` at bind time."""

    type: Literal["blob_file"] = "blob_file"
    path: Path


class ClobFile(_Value):
    """Large text object read from ``path`` at bind time."""

    type: Literal["clob_file"] = "clob_file"
    path: Path


ColumnData = Annotated[
    Union[StringValue, BooleanValue, NumericValue, DateValue, BlobFile, ClobFile],
    Field(discriminator="type"),
]

# Changelog attribute name -> value variant
VALUE_ATTRIBUTES = {
    "value": StringValue,
    "valueBoolean": BooleanValue,
    "valueNumeric": NumericValue,
    "valueDate": DateValue,
    "valueBlobFile": BlobFile,
    "valueClobFile": ClobFile,
}
_ATTRIBUTE_FOR_TYPE = {cls.model_fields["type"].default: key for key, cls in VALUE_ATTRIBUTES.items()}
_KNOWN_ATTRIBUTES = {"name", "autoIncrement", "valueNumericType", *VALUE_ATTRIBUTES}


def _parse_instant(raw: Any) -> Union[datetime, date]:
    if isinstance(raw, (datetime, date)):
        return raw
    text = str(raw).strip()
    if "T" in text or " " in text:
        return datetime.fromisoformat(text)
    return date.fromisoformat(text)


def _parse_flag(raw: Any) -> Optional[bool]:
    if raw is None or isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise ValueError(f"Not a boolean: {raw!r}")


def _build_value(attribute: str, raw: Any, numeric_type: Optional[str]) -> Any:
    if attribute == "value":
        return StringValue(text=str(raw))
    if attribute == "valueBoolean":
        return BooleanValue(flag=_parse_flag(raw))
    if attribute == "valueNumeric":
        return NumericValue(number=raw, kind=numeric_type)
    if attribute == "valueDate":
        return DateValue(instant=_parse_instant(raw))
    if attribute == "valueBlobFile":
        return BlobFile(path=raw)
    return ClobFile(path=raw)


class ColumnValue(BaseModel):
    """
    One column's value for one row.

    Attributes:
        name: Column name
        value: The typed value, or None when there is nothing to bind
        auto_increment: True when the database generates this column
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1)
    value: Optional[ColumnData] = None
    auto_increment: Optional[bool] = None

    @field_validator("value", mode="before")
    @classmethod
    def _wrap_plain_value(cls, value: Any) -> Any:
        if value is None or isinstance(value, (_Value, dict)):
            return value
        return _variant_for(value)

    @classmethod
    def of(
        cls, name: str, value: Any = None, auto_increment: Optional[bool] = None
    ) -> "ColumnValue":
        """
        Build a column from a plain Python value.

        Example:
            >>> ColumnValue.of("age", 30).value
            NumericValue(type='numeric', number=30, kind=<NumericKind.LONG: 'long'>)
        """
        return cls(name=name, value=value, auto_increment=auto_increment)

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any]) -> "ColumnValue":
        """
        Build a column from changelog attributes (``name``, ``value``,
        ``valueNumeric``, ``valueBlobFile``, ``autoIncrement`` ...).

        Raises:
            MalformedInputError: On unknown attributes, more than one populated
                value attribute, or values that do not parse
        """
        name = attributes.get("name")
        unknown = sorted(set(attributes) - _KNOWN_ATTRIBUTES)
        if unknown:
            raise MalformedInputError(
                f"Column '{name}' has unknown attributes: {', '.join(unknown)}"
            )
        populated = [key for key in VALUE_ATTRIBUTES if attributes.get(key) is not None]
        if len(populated) > 1:
            raise MalformedInputError(
                f"Column '{name}' has more than one value: {', '.join(populated)}"
            )

        try:
            value = (
                _build_value(
                    populated[0],
                    attributes[populated[0]],
                    attributes.get("valueNumericType"),
                )
                if populated
                else None
            )
            return cls(
                name=name,
                value=value,
                auto_increment=_parse_flag(attributes.get("autoIncrement")),
            )
        except (ValidationError, ValueError) as e:
            raise MalformedInputError(f"Invalid column '{name}': {e}", cause=e) from e

    def to_attributes(self) -> Dict[str, Any]:
        """Inverse of :meth:`from_attributes`, with plain YAML/JSON friendly values."""
        attributes: Dict[str, Any] = {"name": self.name}
        value = self.value
        if isinstance(value, StringValue):
            attributes["value"] = value.text
        elif isinstance(value, BooleanValue):
            attributes["valueBoolean"] = value.flag
        elif isinstance(value, NumericValue):
            number = value.number
            written = str(number) if isinstance(number, Decimal) else number
            attributes["valueNumeric"] = written
            # Text reads back as a plain number, so non-default widths are recorded
            if value.kind != infer_numeric_kind(
                parse_number(written) if isinstance(written, str) else written
            ):
                attributes["valueNumericType"] = value.kind.value
        elif isinstance(value, DateValue):
            attributes["valueDate"] = value.instant.isoformat()
        elif value is not None:
            attributes[_ATTRIBUTE_FOR_TYPE[value.type]] = str(value.path)
        if self.auto_increment is not None:
            attributes["autoIncrement"] = self.auto_increment
        return attributes

    @property
    def is_auto_increment(self) -> bool:
        return self.auto_increment is True

    @property
    def is_binary_stream(self) -> bool:
        return isinstance(self.value, BlobFile)

    @property
    def is_text_stream(self) -> bool:
        return isinstance(self.value, ClobFile)

    @property
    def value_object(self) -> Any:
        """The value carried into a textual insert; None for stream references."""
        value = self.value
        if isinstance(value, StringValue):
            return value.text
        if isinstance(value, BooleanValue):
            return value.flag
        if isinstance(value, NumericValue):
            return value.number
        if isinstance(value, DateValue):
            return value.instant
        return None


def _variant_for(value: Any) -> _Value:
    # bool before numbers, datetime/date after: order matters for subclasses
    if isinstance(value, str):
        return StringValue(text=value)
    if isinstance(value, bool):
        return BooleanValue(flag=value)
    if isinstance(value, (int, float, Decimal)):
        return NumericValue(number=value, kind=infer_numeric_kind(value))
    if isinstance(value, (datetime, date)):
        return DateValue(instant=value)
    raise ValueError(f"Unsupported column value type: {type(value).__name__}")


@dataclass(frozen=True)
class TableRef:
    """Identity of an insert target; catalog and schema are dialect dependent."""

    table: str
    schema: Optional[str] = None
    catalog: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.table or not isinstance(self.table, str):
            raise MalformedInputError("Table name must be non-empty string")

    def __str__(self) -> str:
        return ".".join(part for part in (self.catalog, self.schema, self.table) if part)
