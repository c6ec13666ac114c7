"""Core SQL utilities package."""

from .identifier import needs_quoting, qualify_table, quote_identifier
from .literals import format_literal, quote_string
from .parameters import build_positional_placeholders, narrow_to_int32, placeholder

__all__ = [
    "needs_quoting",
    "quote_identifier",
    "qualify_table",
    "format_literal",
    "quote_string",
    "placeholder",
    "build_positional_placeholders",
    "narrow_to_int32",
]
