"""
Password Validation Service Interfaces

Ports for directory, lookup and policy support collaborators.
"""

from .directory_service import IDirectoryPasswordPolicy
from .external_rule_service import IExternalRuleInvoker
from .lookup_service import ISharedHistoryService, IWordlistService
from .policy_support import (
    IAttributeContainment,
    IMacroExpander,
    IStatisticsSink,
    IStrengthScorer,
)

__all__ = [
    "IAttributeContainment",
    "IDirectoryPasswordPolicy",
    "IExternalRuleInvoker",
    "IMacroExpander",
    "ISharedHistoryService",
    "IStatisticsSink",
    "IStrengthScorer",
    "IWordlistService",
]
