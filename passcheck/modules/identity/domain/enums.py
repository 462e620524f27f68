"""
Identity Domain Enums

Rule identifiers, violation kinds and validator switches for password
policy validation.
"""

from enum import Enum
from typing import Any


class RuleType(Enum):
    """Value type carried by a password rule."""

    INT = "int"
    BOOLEAN = "boolean"
    TEXT = "text"
    LIST = "list"


class PasswordRule(Enum):
    """
    Password policy rules.

    Each member carries its wire name (used in the external rule request
    body and accepted by ``PasswordPolicy.from_mapping``), its value type and
    its default value.
    """

    POLICY_ENABLED = ("PolicyEnabled", RuleType.BOOLEAN, True)
    MINIMUM_LENGTH = ("MinimumLength", RuleType.INT, 0)
    MAXIMUM_LENGTH = ("MaximumLength", RuleType.INT, 0)
    MINIMUM_UPPER_CASE = ("MinimumUpperCase", RuleType.INT, 0)
    MAXIMUM_UPPER_CASE = ("MaximumUpperCase", RuleType.INT, 0)
    MINIMUM_LOWER_CASE = ("MinimumLowerCase", RuleType.INT, 0)
    MAXIMUM_LOWER_CASE = ("MaximumLowerCase", RuleType.INT, 0)
    ALLOW_NUMERIC = ("AllowNumeric", RuleType.BOOLEAN, True)
    MINIMUM_NUMERIC = ("MinimumNumeric", RuleType.INT, 0)
    MAXIMUM_NUMERIC = ("MaximumNumeric", RuleType.INT, 0)
    ALLOW_FIRST_CHAR_NUMERIC = ("AllowFirstCharNumeric", RuleType.BOOLEAN, True)
    ALLOW_LAST_CHAR_NUMERIC = ("AllowLastCharNumeric", RuleType.BOOLEAN, True)
    ALLOW_SPECIAL = ("AllowSpecial", RuleType.BOOLEAN, True)
    MINIMUM_SPECIAL = ("MinimumSpecial", RuleType.INT, 0)
    MAXIMUM_SPECIAL = ("MaximumSpecial", RuleType.INT, 0)
    ALLOW_FIRST_CHAR_SPECIAL = ("AllowFirstCharSpecial", RuleType.BOOLEAN, True)
    ALLOW_LAST_CHAR_SPECIAL = ("AllowLastCharSpecial", RuleType.BOOLEAN, True)
    MINIMUM_ALPHA = ("MinimumAlpha", RuleType.INT, 0)
    MAXIMUM_ALPHA = ("MaximumAlpha", RuleType.INT, 0)
    ALLOW_NON_ALPHA = ("AllowNonAlpha", RuleType.BOOLEAN, True)
    MINIMUM_NON_ALPHA = ("MinimumNonAlpha", RuleType.INT, 0)
    MAXIMUM_NON_ALPHA = ("MaximumNonAlpha", RuleType.INT, 0)
    MAXIMUM_REPEAT = ("MaximumRepeat", RuleType.INT, 0)
    MAXIMUM_SEQUENTIAL_REPEAT = ("MaximumSequentialRepeat", RuleType.INT, 0)
    MAXIMUM_CONSECUTIVE = ("MaximumConsecutive", RuleType.INT, 0)
    MINIMUM_UNIQUE = ("MinimumUnique", RuleType.INT, 0)
    DISALLOW_CURRENT = ("DisallowCurrent", RuleType.BOOLEAN, True)
    MAXIMUM_OLD_CHARS = ("MaximumOldChars", RuleType.INT, 0)
    DISALLOWED_VALUES = ("DisallowedValues", RuleType.LIST, ())
    DISALLOWED_ATTRIBUTES = ("DisallowedAttributes", RuleType.LIST, ())
    REGEX_MATCH = ("RegExMatch", RuleType.LIST, ())
    REGEX_NO_MATCH = ("RegExNoMatch", RuleType.LIST, ())
    CHAR_GROUPS_VALUES = ("CharGroupsValues", RuleType.LIST, ())
    CHAR_GROUPS_MIN_MATCH = ("CharGroupsMinMatch", RuleType.INT, 0)
    MINIMUM_STRENGTH = ("MinimumStrength", RuleType.INT, 0)
    ENABLE_WORDLIST = ("EnableWordlist", RuleType.BOOLEAN, True)
    AD_COMPLEXITY_LEVEL = ("ADComplexityLevel", RuleType.TEXT, "NONE")
    AD_COMPLEXITY_MAX_VIOLATIONS = ("ADComplexityMaxViolations", RuleType.INT, 0)
    AD_COMPLEXITY_MIN_TOKEN_LENGTH = ("ADComplexityMinTokenLength", RuleType.INT, 3)
    CASE_SENSITIVE = ("CaseSensitive", RuleType.BOOLEAN, True)
    CHANGE_MESSAGE = ("ChangeMessage", RuleType.TEXT, "")

    def __init__(self, wire_name: str, rule_type: RuleType, default: Any):
        self.wire_name = wire_name
        self.rule_type = rule_type
        self.default = default

    @classmethod
    def from_key(cls, key: "str | PasswordRule") -> "PasswordRule":
        """Resolve a rule from a member, its wire name, or its member name."""
        if isinstance(key, cls):
            return key
        for rule in cls:
            if key in (rule.wire_name, rule.name):
                return rule
        raise KeyError(key)


class ADComplexityLevel(Enum):
    """Active Directory style complexity modes."""

    NONE = "NONE"
    AD2003 = "AD2003"
    AD2008 = "AD2008"

    @property
    def is_enabled(self) -> bool:
        """Check if an AD complexity check applies."""
        return self in (ADComplexityLevel.AD2003, ADComplexityLevel.AD2008)

    @property
    def max_length(self) -> int:
        """Longest password the directory accepts in this mode."""
        return 512 if self == ADComplexityLevel.AD2008 else 128


class PasswordErrorKind(Enum):
    """Violation kinds reported by the password validator."""

    INTERNAL = ("ERROR_INTERNAL", "An internal error occurred while checking the password")
    TOO_SHORT = ("PASSWORD_TOO_SHORT", "Password is too short")
    TOO_LONG = ("PASSWORD_TOO_LONG", "Password is too long")
    NOT_ENOUGH_NUM = ("PASSWORD_NOT_ENOUGH_NUM", "Password does not contain enough numeric characters")
    TOO_MANY_NUMERIC = ("PASSWORD_TOO_MANY_NUMERIC", "Password contains too many numeric characters")
    FIRST_IS_NUMERIC = ("PASSWORD_FIRST_IS_NUMERIC", "Password may not start with a numeric character")
    LAST_IS_NUMERIC = ("PASSWORD_LAST_IS_NUMERIC", "Password may not end with a numeric character")
    NOT_ENOUGH_ALPHA = ("PASSWORD_NOT_ENOUGH_ALPHA", "Password does not contain enough letters")
    TOO_MANY_ALPHA = ("PASSWORD_TOO_MANY_ALPHA", "Password contains too many letters")
    NOT_ENOUGH_NONALPHA = ("PASSWORD_NOT_ENOUGH_NONALPHA", "Password does not contain enough non-letter characters")
    TOO_MANY_NONALPHA = ("PASSWORD_TOO_MANY_NONALPHA", "Password contains too many non-letter characters")
    NOT_ENOUGH_UPPER = ("PASSWORD_NOT_ENOUGH_UPPER", "Password does not contain enough uppercase letters")
    TOO_MANY_UPPER = ("PASSWORD_TOO_MANY_UPPER", "Password contains too many uppercase letters")
    NOT_ENOUGH_LOWER = ("PASSWORD_NOT_ENOUGH_LOWER", "Password does not contain enough lowercase letters")
    TOO_MANY_LOWER = ("PASSWORD_TOO_MANY_LOWER", "Password contains too many lowercase letters")
    NOT_ENOUGH_SPECIAL = ("PASSWORD_NOT_ENOUGH_SPECIAL", "Password does not contain enough special characters")
    TOO_MANY_SPECIAL = ("PASSWORD_TOO_MANY_SPECIAL", "Password contains too many special characters")
    FIRST_IS_SPECIAL = ("PASSWORD_FIRST_IS_SPECIAL", "Password may not start with a special character")
    LAST_IS_SPECIAL = ("PASSWORD_LAST_IS_SPECIAL", "Password may not end with a special character")
    TOO_MANY_REPEAT = ("PASSWORD_TOO_MANY_REPEAT", "Password contains too many repeated characters")
    TOO_MANY_CONSECUTIVE = ("PASSWORD_TOO_MANY_CONSECUTIVE", "Password contains too many consecutive characters")
    NOT_ENOUGH_UNIQUE = ("PASSWORD_NOT_ENOUGH_UNIQUE", "Password does not contain enough unique characters")
    NOT_ENOUGH_GROUPS = ("PASSWORD_NOT_ENOUGH_GROUPS", "Password does not contain enough character groups")
    AD_COMPLEXITY = ("PASSWORD_AD_COMPLEXITY", "Password does not meet directory complexity requirements")
    SAME_AS_OLD = ("PASSWORD_SAMEASOLD", "New password is the same as the old password")
    TOO_MANY_OLD_CHARS = ("PASSWORD_TOO_MANY_OLD_CHARS", "Password shares too many characters with the old password")
    USING_DISALLOWED = ("PASSWORD_USING_DISALLOWED", "Password contains a disallowed value")
    SAME_AS_ATTR = ("PASSWORD_SAMEASATTR", "Password contains a value from your account information")
    TOO_WEAK = ("PASSWORD_TOO_WEAK", "Password is too weak")
    INVALID_CHAR = ("PASSWORD_INVALID_CHAR", "Password does not match the required format")
    IN_WORDLIST = ("PASSWORD_INWORDLIST", "Password is too common or was used before")
    IN_HISTORY = ("PASSWORD_INHISTORY", "Password was used recently")
    CUSTOM_ERROR = ("PASSWORD_CUSTOM_ERROR", "Password was rejected by an external rule")
    UNKNOWN_VALIDATION = ("PASSWORD_UNKNOWN_VALIDATION", "Password was rejected for an unknown reason")

    def __init__(self, code: str, default_message: str):
        self.code = code
        self.default_message = default_message

    @classmethod
    def from_code(cls, code: str) -> "PasswordErrorKind | None":
        """Find a kind by its error code, or None."""
        for kind in cls:
            if kind.code == code or kind.name == code:
                return kind
        return None


class ServiceStatus(Enum):
    """Availability of a lookup collaborator."""

    OPEN = "open"
    CLOSED = "closed"


class ValidatorFlag(Enum):
    """Switches that alter validator control flow."""

    FAIL_FAST = "fail_fast"
    BYPASS_DIRECTORY_CHECK = "bypass_directory_check"
