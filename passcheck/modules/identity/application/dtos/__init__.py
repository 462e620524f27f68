"""
Identity application DTOs.
"""

from .external_rule import ExternalRuleRequest, ExternalRuleResponse, PublicUserInfo

__all__ = ["ExternalRuleRequest", "ExternalRuleResponse", "PublicUserInfo"]
