"""
Active Directory Complexity

Mirrors the directory vendor's password complexity policy: the password
must draw on enough character classes and must not contain the account
name or significant parts of the display name.
"""

import unicodedata

from passcheck.core.logging import get_logger
from passcheck.modules.identity.domain.enums import ADComplexityLevel, PasswordErrorKind
from passcheck.modules.identity.domain.value_objects import CharacterCounter, UserContext

from .base import PolicyViolation
from .rule_utils import contains_tokens, tokenize_display_name

logger = get_logger(__name__)

MIN_AD_PASSWORD_LENGTH = 6
REQUIRED_CHARACTER_CLASSES = 3
ACCOUNT_NAME_ATTRIBUTE = "sAMAccountName"
DISPLAY_NAME_ATTRIBUTE = "displayName"
RULE_NAME = "ActiveDirectoryRule"


def _is_ad_special(char: str) -> bool:
    """Non-alphanumeric and not a control character."""
    return not char.isalnum() and unicodedata.category(char) != "Cc"


def count_character_classes(
    password: str, counter: CharacterCounter, level: ADComplexityLevel
) -> int:
    """Number of AD character classes the password draws on."""
    classes = [
        counter.upper,
        counter.lower,
        counter.numeric,
        sum(1 for char in password if _is_ad_special(char)),
    ]
    if level == ADComplexityLevel.AD2008:
        classes.append(counter.other_letter)
    return sum(1 for count in classes if count > 0)


def check_ad_complexity(
    level: ADComplexityLevel,
    user_context: UserContext | None,
    password: str,
    counter: CharacterCounter,
    max_group_violations: int = 0,
    min_token_length: int = 3,
) -> list[PolicyViolation]:
    """
    Evaluate AD complexity for one password.

    Length failures are reported on their own. Otherwise each failed group
    (too few character classes, account name present, display name token
    present) counts once, and a single violation is emitted when the count
    exceeds ``max_group_violations``.
    """
    if not level.is_enabled:
        return []

    if counter.length < MIN_AD_PASSWORD_LENGTH:
        return [PolicyViolation(PasswordErrorKind.TOO_SHORT, rule_name=RULE_NAME)]

    if counter.length > level.max_length:
        return [PolicyViolation(PasswordErrorKind.TOO_LONG, rule_name=RULE_NAME)]

    failures: list[str] = []

    classes = count_character_classes(password, counter, level)
    if classes < REQUIRED_CHARACTER_CLASSES:
        failures.append(
            f"only {classes} of {REQUIRED_CHARACTER_CLASSES} required character classes"
        )

    if user_context is not None:
        lowered = password.lower()

        account_name = user_context.get_attribute(ACCOUNT_NAME_ATTRIBUTE) or ""
        if len(account_name) > 2 and account_name.lower() in lowered:
            failures.append("contains account name")

        tokens = tokenize_display_name(
            user_context.get_attribute(DISPLAY_NAME_ATTRIBUTE) or "", min_token_length
        )
        if contains_tokens(password, tokens):
            failures.append("contains part of display name")

    if len(failures) > max_group_violations:
        logger.debug(
            "AD complexity check failed",
            complexity_level=level.value,
            group_violations=len(failures),
            max_group_violations=max_group_violations,
        )
        return [
            PolicyViolation(
                PasswordErrorKind.AD_COMPLEXITY,
                detail="; ".join(failures),
                rule_name=RULE_NAME,
            )
        ]

    return []
