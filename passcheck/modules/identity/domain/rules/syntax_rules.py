"""
Password Syntax Rules

The nine composition checkers. Each one is independent and reports every
problem it finds; they run in a fixed order so the validator can stop
early between stages.
"""

from passcheck.modules.identity.domain.enums import PasswordErrorKind, PasswordRule
from passcheck.modules.identity.domain.value_objects import (
    CharacterCounter,
    PasswordPolicy,
    UserContext,
    count_characters,
)

from .ad_complexity import check_ad_complexity
from .base import PolicyViolation, RuleChecker
from .rule_utils import too_many_consecutive_chars


class MinimumLengthRule(RuleChecker):
    """Password must be at least MinimumLength characters."""

    def validate(self, password, counter, policy, user_context=None):
        if counter.length < policy.read_int(PasswordRule.MINIMUM_LENGTH):
            return [self.create_violation(PasswordErrorKind.TOO_SHORT)]
        return []


class MaximumLengthRule(RuleChecker):
    """Password must be at most MaximumLength characters; 0 means unlimited."""

    def validate(self, password, counter, policy, user_context=None):
        maximum = policy.read_int(PasswordRule.MAXIMUM_LENGTH)
        if maximum > 0 and counter.length > maximum:
            return [self.create_violation(PasswordErrorKind.TOO_LONG)]
        return []


class NumericLimitsRule(RuleChecker):
    """Numeric character count and position limits."""

    def validate(self, password, counter, policy, user_context=None):
        violations = []

        if not policy.read_bool(PasswordRule.ALLOW_NUMERIC):
            if counter.numeric > 0:
                violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_NUMERIC))
            return violations

        if counter.numeric < policy.read_int(PasswordRule.MINIMUM_NUMERIC):
            violations.append(self.create_violation(PasswordErrorKind.NOT_ENOUGH_NUM))

        maximum = policy.read_int(PasswordRule.MAXIMUM_NUMERIC)
        if maximum > 0 and counter.numeric > maximum:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_NUMERIC))

        if not policy.read_bool(PasswordRule.ALLOW_FIRST_CHAR_NUMERIC) and counter.first_is_numeric:
            violations.append(self.create_violation(PasswordErrorKind.FIRST_IS_NUMERIC))

        if not policy.read_bool(PasswordRule.ALLOW_LAST_CHAR_NUMERIC) and counter.last_is_numeric:
            violations.append(self.create_violation(PasswordErrorKind.LAST_IS_NUMERIC))

        return violations


class AlphaLimitsRule(RuleChecker):
    """Letter and non-letter count limits."""

    def validate(self, password, counter, policy, user_context=None):
        violations = []

        if counter.alpha < policy.read_int(PasswordRule.MINIMUM_ALPHA):
            violations.append(self.create_violation(PasswordErrorKind.NOT_ENOUGH_ALPHA))

        maximum_alpha = policy.read_int(PasswordRule.MAXIMUM_ALPHA)
        if maximum_alpha > 0 and counter.alpha > maximum_alpha:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_ALPHA))

        if not policy.read_bool(PasswordRule.ALLOW_NON_ALPHA):
            if counter.non_alpha > 0:
                violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_NONALPHA))
            return violations

        if counter.non_alpha < policy.read_int(PasswordRule.MINIMUM_NON_ALPHA):
            violations.append(self.create_violation(PasswordErrorKind.NOT_ENOUGH_NONALPHA))

        maximum_non_alpha = policy.read_int(PasswordRule.MAXIMUM_NON_ALPHA)
        if maximum_non_alpha > 0 and counter.non_alpha > maximum_non_alpha:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_NONALPHA))

        return violations


class CasingLimitsRule(RuleChecker):
    """Upper and lower case count limits; always enforced when configured."""

    def validate(self, password, counter, policy, user_context=None):
        violations = []

        if counter.upper < policy.read_int(PasswordRule.MINIMUM_UPPER_CASE):
            violations.append(self.create_violation(PasswordErrorKind.NOT_ENOUGH_UPPER))

        maximum_upper = policy.read_int(PasswordRule.MAXIMUM_UPPER_CASE)
        if maximum_upper > 0 and counter.upper > maximum_upper:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_UPPER))

        if counter.lower < policy.read_int(PasswordRule.MINIMUM_LOWER_CASE):
            violations.append(self.create_violation(PasswordErrorKind.NOT_ENOUGH_LOWER))

        maximum_lower = policy.read_int(PasswordRule.MAXIMUM_LOWER_CASE)
        if maximum_lower > 0 and counter.lower > maximum_lower:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_LOWER))

        return violations


class SpecialLimitsRule(RuleChecker):
    """Special character count and position limits."""

    def validate(self, password, counter, policy, user_context=None):
        violations = []

        if not policy.read_bool(PasswordRule.ALLOW_SPECIAL):
            if counter.special > 0:
                violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_SPECIAL))
            return violations

        if counter.special < policy.read_int(PasswordRule.MINIMUM_SPECIAL):
            violations.append(self.create_violation(PasswordErrorKind.NOT_ENOUGH_SPECIAL))

        maximum = policy.read_int(PasswordRule.MAXIMUM_SPECIAL)
        if maximum > 0 and counter.special > maximum:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_SPECIAL))

        if not policy.read_bool(PasswordRule.ALLOW_FIRST_CHAR_SPECIAL) and counter.first_is_special:
            violations.append(self.create_violation(PasswordErrorKind.FIRST_IS_SPECIAL))

        if not policy.read_bool(PasswordRule.ALLOW_LAST_CHAR_SPECIAL) and counter.last_is_special:
            violations.append(self.create_violation(PasswordErrorKind.LAST_IS_SPECIAL))

        return violations


class UniqueCharactersRule(RuleChecker):
    """Password must contain at least MinimumUnique distinct characters."""

    def validate(self, password, counter, policy, user_context=None):
        minimum = policy.read_int(PasswordRule.MINIMUM_UNIQUE)
        if minimum > 0 and counter.unique < minimum:
            return [self.create_violation(PasswordErrorKind.NOT_ENOUGH_UNIQUE)]
        return []


class CharacterSequenceRule(RuleChecker):
    """Repeated and consecutive character limits, each gated separately."""

    def validate(self, password, counter, policy, user_context=None):
        violations = []

        maximum_sequential = policy.read_int(PasswordRule.MAXIMUM_SEQUENTIAL_REPEAT)
        if maximum_sequential > 0 and counter.sequential_repeat > maximum_sequential:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_REPEAT))

        maximum_repeat = policy.read_int(PasswordRule.MAXIMUM_REPEAT)
        if maximum_repeat > 0 and counter.overall_repeat > maximum_repeat:
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_REPEAT))

        if too_many_consecutive_chars(password, policy.read_int(PasswordRule.MAXIMUM_CONSECUTIVE)):
            violations.append(self.create_violation(PasswordErrorKind.TOO_MANY_CONSECUTIVE))

        return violations


class ActiveDirectoryRule(RuleChecker):
    """AD style complexity; only active in AD2003 or AD2008 mode."""

    def validate(self, password, counter, policy, user_context=None):
        level = policy.ad_complexity_level
        if not level.is_enabled:
            return []
        return check_ad_complexity(
            level,
            user_context,
            password,
            counter,
            max_group_violations=policy.ad_complexity_max_violations,
            min_token_length=policy.read_int(PasswordRule.AD_COMPLEXITY_MIN_TOKEN_LENGTH),
        )


BASIC_RULE_CHECKERS: tuple[RuleChecker, ...] = (
    MinimumLengthRule(),
    MaximumLengthRule(),
    NumericLimitsRule(),
    AlphaLimitsRule(),
    CasingLimitsRule(),
    SpecialLimitsRule(),
    UniqueCharactersRule(),
    CharacterSequenceRule(),
    ActiveDirectoryRule(),
)


def basic_syntax_violations(
    password: str,
    policy: PasswordPolicy,
    user_context: UserContext | None = None,
    counter: CharacterCounter | None = None,
) -> list[PolicyViolation]:
    """Run every syntax checker in order and collect their violations."""
    counter = counter or count_characters(password)
    violations: list[PolicyViolation] = []
    for checker in BASIC_RULE_CHECKERS:
        violations.extend(checker.validate(password, counter, policy, user_context))
    return violations
