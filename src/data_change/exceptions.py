"""Error taxonomy for DataChange.

Every error carries the original message and, where there is one, the
underlying cause, so callers can surface failures unchanged. Library code
never retries or swallows these.
"""

from typing import Any, Dict, Optional


class DataChangeError(Exception):
    """Base class for all DataChange failures."""

    error_type = "DataChangeError"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        result: Dict[str, Any] = {
            "error_type": self.error_type,
            "message": self.message,
        }
        if self.cause is not None:
            result["original_error_type"] = type(self.cause).__name__
            result["original_error_message"] = str(self.cause)
        return result


class ResourceNotFoundError(DataChangeError):
    """A large-object file referenced by a column is missing or unreadable at bind time."""

    error_type = "ResourceNotFoundError"

    def __init__(
        self, message: str, path: Optional[str] = None, cause: Optional[BaseException] = None
    ):
        self.path = path
        super().__init__(message, cause)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["path"] = self.path
        return result


class DatabaseExecutionError(DataChangeError):
    """The driver or database rejected statement preparation or execution."""

    error_type = "DatabaseExecutionError"

    def __init__(
        self, message: str, sql: Optional[str] = None, cause: Optional[BaseException] = None
    ):
        self.sql = sql
        super().__init__(message, cause)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["sql"] = self.sql
        return result


class MalformedInputError(DataChangeError, ValueError):
    """Column or changelog input that cannot be turned into a statement."""

    error_type = "MalformedInputError"


class SerializerNotFoundError(DataChangeError, LookupError):
    """No changelog serializer is registered for a file extension."""

    error_type = "SerializerNotFoundError"


__all__ = [
    "DataChangeError",
    "ResourceNotFoundError",
    "DatabaseExecutionError",
    "MalformedInputError",
    "SerializerNotFoundError",
]
