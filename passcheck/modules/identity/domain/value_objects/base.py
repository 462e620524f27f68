"""
Base Value Object

Common serialization for the identity domain value objects. Concrete value
objects are frozen dataclasses, which supply equality and hashing.
"""

from abc import ABC
from enum import Enum
from typing import Any


class ValueObject(ABC):
    """Base class for all value objects."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {}
        for key, value in self.__dict__.items():
            if key.startswith("_"):
                continue
            result[key] = self._serialize_value(value)
        return result

    def _serialize_value(self, value: Any) -> Any:
        """Serialize a single value for dictionary representation."""
        if hasattr(value, "to_dict"):
            return value.to_dict()
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, list | tuple | set | frozenset):
            return [self._serialize_value(item) for item in value]
        if isinstance(value, dict) or hasattr(value, "items"):
            return {
                (k.value if isinstance(k, Enum) else k): self._serialize_value(v)
                for k, v in value.items()
            }
        return value
