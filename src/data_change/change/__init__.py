"""Row insert changes: column values, generation and generated statements."""

from .models import (
    BlobFile,
    BooleanValue,
    ClobFile,
    ColumnValue,
    DateValue,
    NumericKind,
    NumericValue,
    StringValue,
    TableRef,
)
from .statements import CompiledInsert, GeneratedStatement, TextualInsert
from .insert_data import InsertDataChange, generate

__all__ = [
    "BlobFile",
    "BooleanValue",
    "ClobFile",
    "ColumnValue",
    "DateValue",
    "NumericKind",
    "NumericValue",
    "StringValue",
    "TableRef",
    "CompiledInsert",
    "GeneratedStatement",
    "TextualInsert",
    "InsertDataChange",
    "generate",
]
