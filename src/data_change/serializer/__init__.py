"""
Changelog serializers.

Usage:
    >>> from data_change.serializer import default_registry
    >>> serializer = default_registry().get_serializer("changelog.yaml")
"""

from .base import ChangeLogSerializer, PRIORITY_DEFAULT
from .json_serializer import JsonChangeLogSerializer
from .registry import SerializerRegistry, file_extension
from .yaml_serializer import YamlChangeLogSerializer


def default_registry() -> SerializerRegistry:
    """Registry with the built-in YAML and JSON serializers."""
    return SerializerRegistry([YamlChangeLogSerializer(), JsonChangeLogSerializer()])


__all__ = [
    "ChangeLogSerializer",
    "PRIORITY_DEFAULT",
    "JsonChangeLogSerializer",
    "SerializerRegistry",
    "YamlChangeLogSerializer",
    "default_registry",
    "file_extension",
]
