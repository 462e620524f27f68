"""
Password History Rules

Reuse of the previous password, and containment of configured disallowed
values or of the user's own attribute values.
"""

from passcheck.core.logging import get_logger
from passcheck.modules.identity.domain.enums import PasswordErrorKind, PasswordRule
from passcheck.modules.identity.domain.interfaces.services import (
    IAttributeContainment,
    IMacroExpander,
)
from passcheck.modules.identity.domain.value_objects import PasswordPolicy, UserContext
from passcheck.modules.identity.domain.value_objects.password_policy import (
    split_attribute_threshold,
)

from .base import PolicyViolation
from .rule_utils import contains_disallowed_value

logger = get_logger(__name__)


class OldPasswordRule:
    """Candidate must differ from the previous password.

    Runs only when a non-empty previous password is supplied and
    DisallowCurrent is set. MaximumOldChars bounds how many distinct
    characters (ignoring case) both passwords may share.
    """

    rule_name = "OldPasswordRule"

    def validate(
        self, password: str, old_password: str | None, policy: PasswordPolicy
    ) -> list[PolicyViolation]:
        if not old_password or not policy.read_bool(PasswordRule.DISALLOW_CURRENT):
            return []

        violations = []
        lowered = password.lower()
        old_lowered = old_password.lower()

        if lowered == old_lowered:
            violations.append(PolicyViolation(PasswordErrorKind.SAME_AS_OLD, rule_name=self.rule_name))

        maximum_old_chars = policy.read_int(PasswordRule.MAXIMUM_OLD_CHARS)
        if maximum_old_chars > 0:
            shared = set(old_lowered) & set(lowered)
            if len(shared) >= maximum_old_chars:
                violations.append(
                    PolicyViolation(PasswordErrorKind.TOO_MANY_OLD_CHARS, rule_name=self.rule_name)
                )

        return violations


class DisallowedValuesRule:
    """Candidate must not contain any configured disallowed value.

    Values are macro expanded for the user first; blank expansions are
    ignored.
    """

    rule_name = "DisallowedValuesRule"

    def __init__(self, expander: IMacroExpander | None = None):
        self.expander = expander

    def validate(
        self, password: str, policy: PasswordPolicy, user_context: UserContext | None = None
    ) -> list[PolicyViolation]:
        values = policy.disallowed_values()
        if not values:
            return []

        lowered = password.lower()
        violations = []
        for value in values:
            expanded = self.expander.expand(value, user_context) if self.expander else value
            if not expanded or not expanded.strip():
                continue
            if expanded.lower() in lowered:
                violations.append(
                    PolicyViolation(PasswordErrorKind.USING_DISALLOWED, rule_name=self.rule_name)
                )
        return violations


class DisallowedAttributesRule:
    """Candidate must not contain the user's own attribute values."""

    rule_name = "DisallowedAttributesRule"

    def __init__(self, containment: IAttributeContainment | None = None):
        self.containment = containment

    def validate(
        self, password: str, policy: PasswordPolicy, user_context: UserContext | None = None
    ) -> list[PolicyViolation]:
        if user_context is None:
            return []

        violations = []
        for entry in policy.disallowed_attributes(keep_thresholds=True):
            attribute, threshold = split_attribute_threshold(entry)
            value = user_context.get_attribute(attribute) or ""
            if self._contains(password, value, threshold):
                logger.debug("Password rejected, same as user attribute", attribute=attribute)
                violations.append(
                    PolicyViolation(PasswordErrorKind.SAME_AS_ATTR, rule_name=self.rule_name)
                )
        return violations

    def _contains(self, password: str, value: str, threshold: int) -> bool:
        if self.containment is None:
            return contains_disallowed_value(password, value, threshold)
        return self.containment.contains_disallowed_value(password, value, threshold)
