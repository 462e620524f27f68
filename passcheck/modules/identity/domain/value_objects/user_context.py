"""
User Context Value Object

Identity reference and cached directory attributes for the user whose
password is being validated.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .base import ValueObject


@dataclass(frozen=True)
class UserContext(ValueObject):
    """
    User identity plus cached directory attributes.

    Attribute names are matched case-insensitively, the way directory
    attribute names are.
    """

    user_id: str | None = None
    user_dn: str | None = None
    email: str | None = None
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Freeze the attribute mapping."""
        attributes = {
            str(name): "" if value is None else str(value)
            for name, value in (self.attributes or {}).items()
        }
        object.__setattr__(self, "attributes", MappingProxyType(attributes))

    def __hash__(self) -> int:
        return hash((self.user_id, self.user_dn, self.email, tuple(sorted(self.attributes.items()))))

    def get_attribute(self, name: str) -> str | None:
        """Get a cached attribute value, or None if the user has none."""
        if name in self.attributes:
            return self.attributes[name]
        lowered = name.lower()
        for key, value in self.attributes.items():
            if key.lower() == lowered:
                return value
        return None

    def public_attributes(self, names: Iterable[str]) -> dict[str, str]:
        """Project the named attributes, never exposing password attributes."""
        result = {}
        for name in names:
            if "password" in name.lower():
                continue
            value = self.get_attribute(name)
            if value is not None:
                result[name] = value
        return result
