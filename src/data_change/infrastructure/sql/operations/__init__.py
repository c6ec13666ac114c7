"""SQL statement builders."""

from .insert import InsertBuilder

__all__ = ["InsertBuilder"]
