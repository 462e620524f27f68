"""
Identity Domain Rules

Password rule checkers and the helpers they share.
"""

from .ad_complexity import check_ad_complexity
from .base import PolicyViolation, RuleChecker
from .history_rules import DisallowedAttributesRule, DisallowedValuesRule, OldPasswordRule
from .rule_utils import contains_disallowed_value, too_many_consecutive_chars
from .syntax_rules import BASIC_RULE_CHECKERS, basic_syntax_violations

__all__ = [
    "BASIC_RULE_CHECKERS",
    "DisallowedAttributesRule",
    "DisallowedValuesRule",
    "OldPasswordRule",
    "PolicyViolation",
    "RuleChecker",
    "basic_syntax_violations",
    "check_ad_complexity",
    "contains_disallowed_value",
    "too_many_consecutive_chars",
]
