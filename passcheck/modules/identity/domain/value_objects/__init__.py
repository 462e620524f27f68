"""
Identity domain value objects.

Immutable values consumed and produced by password policy validation.
"""

from .base import ValueObject
from .character_counter import CharacterCounter, count_characters
from .password_policy import PasswordPolicy
from .password_validation_result import ValidationOutcome
from .user_context import UserContext

__all__ = [
    "CharacterCounter",
    "PasswordPolicy",
    "UserContext",
    "ValidationOutcome",
    "ValueObject",
    "count_characters",
]
