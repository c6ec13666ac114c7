"""
Changelog serializer registry.

Serializers are registered explicitly and looked up by file extension.
Each extension keeps its serializers ordered by descending priority, so
the first entry wins.
"""

from typing import Dict, Iterable, List

from data_change.exceptions import SerializerNotFoundError
from data_change.utils.logging import get_logger

from .base import ChangeLogSerializer

logger = get_logger(__name__)


def file_extension(file_name_or_extension: str) -> str:
    """
    Reduce a file name to its extension; a bare extension is returned as-is.

    Examples:
        >>> file_extension("db/changelog.yaml")
        'yaml'
        >>> file_extension("json")
        'json'
    """
    return file_name_or_extension.rsplit(".", 1)[-1].lower()


class SerializerRegistry:
    """Extension-keyed serializer lookup."""

    def __init__(self, serializers: Iterable[ChangeLogSerializer] = ()):
        self._serializers: Dict[str, List[ChangeLogSerializer]] = {}
        for serializer in serializers:
            self.register(serializer)

    @property
    def serializers(self) -> Dict[str, List[ChangeLogSerializer]]:
        return {ext: list(entries) for ext, entries in self._serializers.items()}

    def register(self, serializer: ChangeLogSerializer) -> None:
        for extension in serializer.valid_file_extensions:
            entries = self._serializers.setdefault(extension.lower(), [])
            entries.append(serializer)
            entries.sort(key=lambda entry: entry.priority, reverse=True)
        logger.debug(
            "serializer.registered",
            serializer=type(serializer).__name__,
            extensions=list(serializer.valid_file_extensions),
            priority=serializer.priority,
        )

    def unregister(self, serializer: ChangeLogSerializer) -> None:
        for extension in list(self._serializers):
            entries = [
                entry for entry in self._serializers[extension] if entry is not serializer
            ]
            if entries:
                self._serializers[extension] = entries
            else:
                del self._serializers[extension]

    def get_serializers(self, file_name_or_extension: str) -> List[ChangeLogSerializer]:
        return list(self._serializers.get(file_extension(file_name_or_extension), []))

    def get_serializer(self, file_name_or_extension: str) -> ChangeLogSerializer:
        """
        Return the highest priority serializer for a file name or extension.

        Raises:
            SerializerNotFoundError: If none is registered
        """
        serializers = self.get_serializers(file_name_or_extension)
        if not serializers:
            raise SerializerNotFoundError(
                "No serializers associated with the filename or extension "
                f"'{file_name_or_extension}'"
            )
        return serializers[0]
