"""YAML changelog serializer."""

from typing import List, Sequence, Tuple

import yaml

from data_change.change.insert_data import InsertDataChange
from data_change.exceptions import MalformedInputError

from .base import PRIORITY_DEFAULT, changes_from_document, changes_to_document


class YamlChangeLogSerializer:
    valid_file_extensions: Tuple[str, ...] = ("yaml", "yml")
    priority = PRIORITY_DEFAULT

    def serialize(self, changes: Sequence[InsertDataChange]) -> str:
        return yaml.safe_dump(
            changes_to_document(changes),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    def parse(self, text: str) -> List[InsertDataChange]:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise MalformedInputError(f"Invalid YAML changelog: {e}", cause=e) from e
        return changes_from_document(document)
