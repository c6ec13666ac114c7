"""
Changelog serializer contract and the changelog document shape.

A changelog document is a mapping with one ``databaseChangeLog`` list;
each entry maps a change name to its attributes::

    databaseChangeLog:
      - insert:
          tableName: person
          columns:
            - column: {name: id, autoIncrement: true}
            - column: {name: name, value: Alice}
"""

from typing import Any, Dict, List, Protocol, Sequence, Tuple

from data_change.change.insert_data import InsertDataChange
from data_change.exceptions import MalformedInputError

PRIORITY_DEFAULT = 1

CHANGELOG_KEY = "databaseChangeLog"


class ChangeLogSerializer(Protocol):
    """Writes and reads changelog files for a set of file extensions."""

    valid_file_extensions: Tuple[str, ...]
    priority: int

    def serialize(self, changes: Sequence[InsertDataChange]) -> str: ...
    def parse(self, text: str) -> List[InsertDataChange]: ...


def changes_to_document(changes: Sequence[InsertDataChange]) -> Dict[str, Any]:
    return {
        CHANGELOG_KEY: [
            {change.change_name: change.to_attributes()} for change in changes
        ]
    }


def changes_from_document(document: Any) -> List[InsertDataChange]:
    """
    Read the changes of a changelog document.

    Raises:
        MalformedInputError: If the document does not have the changelog shape
            or holds a change other than ``insert``
    """
    if not isinstance(document, dict) or not isinstance(
        document.get(CHANGELOG_KEY), list
    ):
        raise MalformedInputError(
            f"Changelog must be a mapping with a '{CHANGELOG_KEY}' list"
        )

    changes = []
    for index, entry in enumerate(document[CHANGELOG_KEY]):
        if not isinstance(entry, dict) or len(entry) != 1:
            raise MalformedInputError(
                f"Changelog entry {index} must map exactly one change name"
            )
        ((change_name, attributes),) = entry.items()
        if change_name != InsertDataChange.change_name:
            raise MalformedInputError(
                f"Changelog entry {index}: unsupported change '{change_name}'"
            )
        changes.append(InsertDataChange.from_attributes(attributes))
    return changes
