"""
Unit tests for the column value model.
"""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

from data_change.change.models import (
    BlobFile,
    BooleanValue,
    ClobFile,
    ColumnValue,
    DateValue,
    NumericKind,
    NumericValue,
    StringValue,
    TableRef,
    infer_numeric_kind,
    parse_number,
)
from data_change.exceptions import MalformedInputError


class TestColumnValueOf:
    """Tests for building columns from plain Python values."""

    @pytest.mark.unit
    def test_string(self):
        """Strings become StringValue."""
        column = ColumnValue.of("name", "Alice")
        assert column.value == StringValue(text="Alice")
        assert column.value_object == "Alice"

    @pytest.mark.unit
    def test_boolean_is_not_numeric(self):
        """Booleans are not mistaken for integers."""
        column = ColumnValue.of("active", True)
        assert isinstance(column.value, BooleanValue)
        assert column.value_object is True

    @pytest.mark.unit
    def test_int_defaults_to_long(self):
        """Plain ints bind as 64-bit integers."""
        column = ColumnValue.of("age", 30)
        assert column.value.kind == NumericKind.LONG
        assert column.value_object == 30

    @pytest.mark.unit
    def test_huge_int_is_big_integer(self):
        """Ints beyond 64 bits are BIG_INTEGER."""
        column = ColumnValue.of("big", 2**80)
        assert column.value.kind == NumericKind.BIG_INTEGER

    @pytest.mark.unit
    def test_float_and_decimal(self):
        """Floats are DOUBLE and Decimals DECIMAL."""
        assert ColumnValue.of("score", 1.5).value.kind == NumericKind.DOUBLE
        assert ColumnValue.of("balance", Decimal("10.25")).value.kind == NumericKind.DECIMAL

    @pytest.mark.unit
    def test_datetime(self):
        """Datetimes become DateValue."""
        instant = datetime(2024, 3, 15, 14, 30)
        column = ColumnValue.of("born", instant)
        assert column.value == DateValue(instant=instant)

    @pytest.mark.unit
    def test_stream_references_pass_through(self, tmp_path):
        """File references are kept and carry no inline value."""
        blob = ColumnValue.of("photo", BlobFile(path=tmp_path / "a.png"))
        clob = ColumnValue.of("bio", ClobFile(path=tmp_path / "bio.txt"))

        assert blob.is_binary_stream and not blob.is_text_stream
        assert clob.is_text_stream and not clob.is_binary_stream
        assert blob.value_object is None
        assert clob.value_object is None

    @pytest.mark.unit
    def test_no_value(self):
        """A column may have no value at all."""
        column = ColumnValue(name="id", auto_increment=True)
        assert column.value is None
        assert column.value_object is None
        assert column.is_auto_increment

    @pytest.mark.unit
    def test_auto_increment_defaults_to_unset(self):
        """Auto-increment is unset unless given."""
        column = ColumnValue.of("name", "Alice")
        assert column.auto_increment is None
        assert not column.is_auto_increment

    @pytest.mark.unit
    def test_unsupported_type_rejected(self):
        """Values without a variant fail validation."""
        with pytest.raises(ValidationError):
            ColumnValue.of("tags", ["a", "b"])

    @pytest.mark.unit
    def test_empty_name_rejected(self):
        """Column names must be non-empty."""
        with pytest.raises(ValidationError):
            ColumnValue.of("", "Alice")

    @pytest.mark.unit
    def test_immutable(self):
        """Columns are frozen."""
        column = ColumnValue.of("name", "Alice")
        with pytest.raises(ValidationError):
            column.name = "Bob"


class TestNumericValue:
    """Tests for numeric width handling."""

    @pytest.mark.unit
    def test_explicit_int_kind(self):
        """Kinds may be given by name."""
        value = NumericValue(number=7, kind="int")
        assert value.kind == NumericKind.INT

    @pytest.mark.unit
    def test_int_kind_range_checked(self):
        """INT values must fit 32 bits."""
        with pytest.raises(ValidationError):
            NumericValue(number=2**31, kind=NumericKind.INT)

    @pytest.mark.unit
    def test_long_kind_range_checked(self):
        """LONG values must fit 64 bits."""
        with pytest.raises(ValidationError):
            NumericValue(number=2**63, kind=NumericKind.LONG)

    @pytest.mark.unit
    def test_float_kind_coerces(self):
        """FLOAT coerces integers to float."""
        value = NumericValue(number=2, kind=NumericKind.FLOAT)
        assert value.number == 2.0
        assert isinstance(value.number, float)

    @pytest.mark.unit
    def test_decimal_text_keeps_scale(self):
        """Decimal text keeps its trailing zeros."""
        value = NumericValue(number="12.50", kind=NumericKind.DECIMAL)
        assert value.number == Decimal("12.50")
        assert str(value.number) == "12.50"

    @pytest.mark.unit
    def test_text_is_parsed(self):
        """Numeric text is parsed and its kind inferred."""
        assert NumericValue(number="30").number == 30
        assert NumericValue(number="2.5").kind == NumericKind.DOUBLE

    @pytest.mark.unit
    def test_non_integral_rejected_for_integer_kind(self):
        """Fractions are rejected for integer kinds."""
        with pytest.raises(ValidationError):
            NumericValue(number=2.5, kind=NumericKind.LONG)

    @pytest.mark.unit
    def test_boolean_rejected(self):
        """Booleans are not numbers."""
        with pytest.raises(ValidationError):
            NumericValue(number=True)

    @pytest.mark.unit
    def test_parse_number(self):
        """Integral text gives int, other numbers float."""
        assert parse_number(" 42 ") == 42
        assert parse_number("1e3") == 1000.0
        with pytest.raises(ValueError):
            parse_number("forty")

    @pytest.mark.unit
    def test_infer_numeric_kind(self):
        """The 64-bit boundary separates LONG from BIG_INTEGER."""
        assert infer_numeric_kind(2**63 - 1) == NumericKind.LONG
        assert infer_numeric_kind(-(2**63) - 1) == NumericKind.BIG_INTEGER


class TestFromAttributes:
    """Tests for building columns from changelog attributes."""

    @pytest.mark.unit
    def test_string_value(self):
        """The value attribute builds a string column."""
        column = ColumnValue.from_attributes({"name": "name", "value": "Alice"})
        assert column == ColumnValue.of("name", "Alice")

    @pytest.mark.unit
    def test_each_value_attribute(self):
        """Every value attribute maps to its variant."""
        assert ColumnValue.from_attributes(
            {"name": "a", "valueBoolean": "true"}
        ).value == BooleanValue(flag=True)
        assert ColumnValue.from_attributes(
            {"name": "a", "valueNumeric": "30"}
        ).value == NumericValue(number=30, kind=NumericKind.LONG)
        assert ColumnValue.from_attributes(
            {"name": "a", "valueDate": "2024-03-15"}
        ).value == DateValue(instant=date(2024, 3, 15))
        assert ColumnValue.from_attributes(
            {"name": "a", "valueDate": "2024-03-15T10:00:00"}
        ).value == DateValue(instant=datetime(2024, 3, 15, 10, 0))
        assert ColumnValue.from_attributes(
            {"name": "a", "valueBlobFile": "/tmp/a.png"}
        ).value == BlobFile(path=Path("/tmp/a.png"))
        assert ColumnValue.from_attributes(
            {"name": "a", "valueClobFile": "/tmp/a.txt"}
        ).value == ClobFile(path=Path("/tmp/a.txt"))

    @pytest.mark.unit
    def test_numeric_type_attribute(self):
        """valueNumericType overrides the inferred kind."""
        column = ColumnValue.from_attributes(
            {"name": "a", "valueNumeric": 5, "valueNumericType": "int"}
        )
        assert column.value.kind == NumericKind.INT

    @pytest.mark.unit
    def test_auto_increment(self):
        """autoIncrement text is parsed as a flag."""
        column = ColumnValue.from_attributes({"name": "id", "autoIncrement": "true"})
        assert column.auto_increment is True
        assert column.value is None

    @pytest.mark.unit
    def test_more_than_one_value_is_malformed(self):
        """Two populated value attributes are rejected."""
        with pytest.raises(MalformedInputError, match="more than one value"):
            ColumnValue.from_attributes(
                {"name": "a", "value": "x", "valueNumeric": 1}
            )

    @pytest.mark.unit
    def test_unknown_attribute_is_malformed(self):
        """Unknown attributes are rejected."""
        with pytest.raises(MalformedInputError, match="unknown attributes"):
            ColumnValue.from_attributes({"name": "a", "valueComputed": "NOW()"})

    @pytest.mark.unit
    def test_invalid_number_is_malformed(self):
        """Unparseable numbers are wrapped with their cause."""
        with pytest.raises(MalformedInputError) as exc_info:
            ColumnValue.from_attributes({"name": "a", "valueNumeric": "many"})
        assert exc_info.value.cause is not None

    @pytest.mark.unit
    def test_invalid_boolean_is_malformed(self):
        """Unparseable booleans are rejected."""
        with pytest.raises(MalformedInputError):
            ColumnValue.from_attributes({"name": "a", "valueBoolean": "maybe"})

    @pytest.mark.unit
    def test_missing_name_is_malformed(self):
        """A column needs a name."""
        with pytest.raises(MalformedInputError):
            ColumnValue.from_attributes({"value": "x"})


class TestToAttributes:
    """Tests for writing columns back to changelog attributes."""

    @pytest.mark.unit
    def test_long_has_no_type_marker(self):
        """Default widths are not written out."""
        assert ColumnValue.of("age", 30).to_attributes() == {
            "name": "age",
            "valueNumeric": 30,
        }

    @pytest.mark.unit
    def test_non_default_width_is_recorded(self):
        """Non-default widths are written as valueNumericType."""
        column = ColumnValue.of("n", NumericValue(number=5, kind=NumericKind.INT))
        assert column.to_attributes()["valueNumericType"] == "int"

    @pytest.mark.unit
    def test_decimal_written_as_text_with_type(self):
        """Decimals are written as text and read back exactly."""
        attributes = ColumnValue.of("balance", Decimal("12.50")).to_attributes()
        assert attributes["valueNumeric"] == "12.50"
        assert attributes["valueNumericType"] == "decimal"
        assert ColumnValue.from_attributes(attributes).value.number == Decimal("12.50")

    @pytest.mark.unit
    def test_stream_and_flags(self):
        """File paths and explicit flags are written out."""
        column = ColumnValue(
            name="photo", value=BlobFile(path=Path("/tmp/a.png")), auto_increment=False
        )
        assert column.to_attributes() == {
            "name": "photo",
            "valueBlobFile": "/tmp/a.png",
            "autoIncrement": False,
        }


class TestTableRef:
    """Tests for table identity."""

    @pytest.mark.unit
    def test_str_skips_missing_parts(self):
        """Only present qualifiers appear in the display name."""
        assert str(TableRef("person")) == "person"
        assert str(TableRef("person", schema="public")) == "public.person"
        assert str(TableRef("person", "public", "main")) == "main.public.person"

    @pytest.mark.unit
    def test_empty_table_rejected(self):
        """Table names must be non-empty."""
        with pytest.raises(MalformedInputError):
            TableRef("")
