"""Default collaborator adapters for the password validator."""

from .attribute_containment import SubstringAttributeContainment
from .macro_expander import UserContextMacroExpander
from .statistics import InMemoryStatistics

__all__ = [
    "InMemoryStatistics",
    "SubstringAttributeContainment",
    "UserContextMacroExpander",
]
