"""
Identity Domain Interfaces

Contracts for the collaborators the password validator consults.
"""

from .services import (
    IAttributeContainment,
    IDirectoryPasswordPolicy,
    IExternalRuleInvoker,
    IMacroExpander,
    ISharedHistoryService,
    IStatisticsSink,
    IStrengthScorer,
    IWordlistService,
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
