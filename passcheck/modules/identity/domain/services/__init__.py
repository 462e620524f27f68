"""Identity domain services."""

from .password_rule_validator import PasswordRuleValidator

__all__ = ["PasswordRuleValidator"]
