"""JSON changelog serializer."""

import json
from typing import List, Sequence, Tuple

from data_change.change.insert_data import InsertDataChange
from data_change.exceptions import MalformedInputError

from .base import PRIORITY_DEFAULT, changes_from_document, changes_to_document


class JsonChangeLogSerializer:
    valid_file_extensions: Tuple[str, ...] = ("json",)
    priority = PRIORITY_DEFAULT

    def serialize(self, changes: Sequence[InsertDataChange]) -> str:
        return json.dumps(changes_to_document(changes), indent=2, ensure_ascii=False)

    def parse(self, text: str) -> List[InsertDataChange]:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Invalid JSON changelog: {e}", cause=e) from e
        return changes_from_document(document)
