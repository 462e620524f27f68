"""
Password Rule Validator

Runs a candidate password through every configured rule in a fixed order,
collects the violations, and optionally layers the directory's own policy
check on top.

Stage order: old password, basic syntax, disallowed values, disallowed
attributes, strength, must-match patterns, must-not-match patterns,
character groups, wordlist, shared history. With fail-fast enabled the
pipeline stops after any stage that leaves more than one violation.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from passcheck.core.config import ValidatorSettings
from passcheck.core.logging import get_logger
from passcheck.modules.identity.domain.enums import (
    PasswordErrorKind,
    PasswordRule,
    ServiceStatus,
    ValidatorFlag,
)
from passcheck.modules.identity.domain.errors import (
    DirectoryPolicyRejection,
    DirectoryUnavailableError,
    DirectoryUnsupportedOperation,
    PasswordValidationError,
)
from passcheck.modules.identity.domain.interfaces.services import (
    IAttributeContainment,
    IDirectoryPasswordPolicy,
    IExternalRuleInvoker,
    IMacroExpander,
    ISharedHistoryService,
    IStatisticsSink,
    IStrengthScorer,
    IWordlistService,
)
from passcheck.modules.identity.domain.rules import (
    DisallowedAttributesRule,
    DisallowedValuesRule,
    OldPasswordRule,
    PolicyViolation,
    basic_syntax_violations,
)
from passcheck.modules.identity.domain.value_objects import (
    CharacterCounter,
    PasswordPolicy,
    UserContext,
    ValidationOutcome,
    count_characters,
)

logger = get_logger(__name__)

EMPTY_PASSWORD_DETAIL = "empty (null) new password"
LDAP_UNAVAILABLE_STATISTIC = "ldap_unavailable_count"


@dataclass(frozen=True)
class PasswordCandidate:
    """Inputs of a single evaluation."""

    password: str
    old_password: str | None
    user_context: UserContext | None
    counter: CharacterCounter


class PasswordRuleValidator:
    """
    Password policy validator.

    All collaborators are optional and injected; a stage whose collaborator
    is missing is skipped. The validator holds no per-call state, so one
    instance may serve concurrent validations.
    """

    def __init__(
        self,
        policy: PasswordPolicy,
        *,
        flags: Iterable[ValidatorFlag] = (),
        settings: ValidatorSettings | None = None,
        macro_expander: IMacroExpander | None = None,
        attribute_containment: IAttributeContainment | None = None,
        strength_scorer: IStrengthScorer | None = None,
        wordlist: IWordlistService | None = None,
        shared_history: ISharedHistoryService | None = None,
        statistics: IStatisticsSink | None = None,
        external_rules: IExternalRuleInvoker | None = None,
    ) -> None:
        self.policy = policy
        self.flags = frozenset(flags)
        self.settings = settings or ValidatorSettings()
        self._macro_expander = macro_expander
        self._strength_scorer = strength_scorer
        self._wordlist = wordlist
        self._shared_history = shared_history
        self._statistics = statistics
        self._external_rules = external_rules

        self._old_password_rule = OldPasswordRule()
        self._disallowed_values_rule = DisallowedValuesRule(macro_expander)
        self._disallowed_attributes_rule = DisallowedAttributesRule(attribute_containment)

    @property
    def fail_fast(self) -> bool:
        return ValidatorFlag.FAIL_FAST in self.flags

    @property
    def bypass_directory_check(self) -> bool:
        return ValidatorFlag.BYPASS_DIRECTORY_CHECK in self.flags

    def __enter__(self) -> "PasswordRuleValidator":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the external rule service connection, if any."""
        if self._external_rules is not None:
            self._external_rules.close()

    # Public API

    def test_password(
        self,
        password: str | None,
        old_password: str | None = None,
        user_context: UserContext | None = None,
        directory: IDirectoryPasswordPolicy | None = None,
    ) -> bool:
        """
        Accept or reject a password.

        Returns:
            True when the password is accepted

        Raises:
            PasswordValidationError: Password rejected; carries the first
                violation and the full list
            ValidationAbortedError: External rule service or directory
                failure
        """
        outcome = self.validate(password, old_password, user_context)
        if not outcome.is_valid:
            raise PasswordValidationError(list(outcome.violations))

        violations: list[PolicyViolation] = []
        if directory is not None and not self.bypass_directory_check:
            violations.extend(self._directory_violations(directory, password))

        if violations:
            raise PasswordValidationError(violations)

        return True

    def validate(
        self,
        password: str | None,
        old_password: str | None = None,
        user_context: UserContext | None = None,
    ) -> ValidationOutcome:
        """Run the internal pipeline followed by any external rules."""
        with logger.context.operation_context("validate_password", policy=self.policy.name):
            violations = self.internal_policy_violations(password, old_password, user_context)

            if password and self._external_rules is not None:
                violations.extend(self._external_rules.invoke(self.policy, password, user_context))

        return ValidationOutcome.from_violations(violations)

    def internal_policy_violations(
        self,
        password: str | None,
        old_password: str | None = None,
        user_context: UserContext | None = None,
    ) -> list[PolicyViolation]:
        """Run the internal pipeline only; no external callout is made."""
        if not password:
            return [PolicyViolation(PasswordErrorKind.INTERNAL, detail=EMPTY_PASSWORD_DETAIL)]

        candidate = PasswordCandidate(
            password=password,
            old_password=old_password,
            user_context=user_context,
            counter=count_characters(password),
        )

        violations: list[PolicyViolation] = []
        for stage in self._stages():
            violations.extend(stage(candidate))
            if self.fail_fast and len(violations) > 1:
                logger.debug(
                    "Stopping validation early",
                    stage=stage.__name__,
                    violation_count=len(violations),
                )
                break

        logger.debug(
            "Internal password policy evaluated",
            policy=self.policy.name,
            violation_count=len(violations),
        )
        return violations

    # Stages

    def _stages(self) -> tuple[Callable[[PasswordCandidate], list[PolicyViolation]], ...]:
        return (
            self._check_old_password,
            self._check_basic_syntax,
            self._check_disallowed_values,
            self._check_disallowed_attributes,
            self._check_strength,
            self._check_regex_match,
            self._check_regex_no_match,
            self._check_char_groups,
            self._check_wordlist,
            self._check_shared_history,
        )

    def _check_old_password(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        return self._old_password_rule.validate(
            candidate.password, candidate.old_password, self.policy
        )

    def _check_basic_syntax(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        return basic_syntax_violations(
            candidate.password, self.policy, candidate.user_context, candidate.counter
        )

    def _check_disallowed_values(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        return self._disallowed_values_rule.validate(
            candidate.password, self.policy, candidate.user_context
        )

    def _check_disallowed_attributes(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        return self._disallowed_attributes_rule.validate(
            candidate.password, self.policy, candidate.user_context
        )

    def _check_strength(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        required = self.policy.read_int(PasswordRule.MINIMUM_STRENGTH)
        if required <= 0 or self._strength_scorer is None:
            return []

        strength = self._strength_scorer.score(candidate.password)
        if strength < required:
            logger.debug(
                "Password rejected, strength below policy requirement",
                strength=strength,
                required=required,
            )
            return [PolicyViolation(PasswordErrorKind.TOO_WEAK)]
        return []

    def _check_regex_match(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        violations = []
        for pattern in self.policy.regex_match(self._macro_expander, candidate.user_context):
            if pattern.fullmatch(candidate.password) is None:
                logger.debug("Password rejected, does not match pattern", pattern=pattern.pattern)
                violations.append(PolicyViolation(PasswordErrorKind.INVALID_CHAR))
        return violations

    def _check_regex_no_match(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        violations = []
        for pattern in self.policy.regex_no_match(self._macro_expander, candidate.user_context):
            if pattern.fullmatch(candidate.password) is not None:
                logger.debug("Password rejected, matches forbidden pattern", pattern=pattern.pattern)
                violations.append(PolicyViolation(PasswordErrorKind.INVALID_CHAR))
        return violations

    def _check_char_groups(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        required = self.policy.read_int(PasswordRule.CHAR_GROUPS_MIN_MATCH)
        groups = self.policy.char_group_patterns
        if required <= 0 or not groups:
            return []

        matches = sum(1 for pattern in groups if pattern.search(candidate.password))
        if matches < required:
            return [PolicyViolation(PasswordErrorKind.NOT_ENOUGH_GROUPS)]
        return []

    def _check_wordlist(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        if not self.policy.read_bool(PasswordRule.ENABLE_WORDLIST):
            return []
        if self._wordlist is None or self._wordlist.status() != ServiceStatus.OPEN:
            return []

        if self._wordlist.contains_word(candidate.password):
            return [PolicyViolation(PasswordErrorKind.IN_WORDLIST)]
        return []

    def _check_shared_history(self, candidate: PasswordCandidate) -> list[PolicyViolation]:
        if not self.settings.shared_history_enabled:
            return []
        if self._shared_history is None or self._shared_history.status() != ServiceStatus.OPEN:
            return []

        if self._shared_history.contains_word(candidate.password):
            return [PolicyViolation(PasswordErrorKind.IN_WORDLIST)]
        return []

    # Directory

    def _directory_violations(
        self, directory: IDirectoryPasswordPolicy, password: str
    ) -> list[PolicyViolation]:
        try:
            logger.debug("Calling directory password policy check")
            directory.test_password_policy(password)
        except DirectoryUnsupportedOperation as e:
            logger.debug("Directory does not support password policy testing", error=str(e))
        except DirectoryUnavailableError as e:
            if self._statistics is not None:
                self._statistics.increment(LDAP_UNAVAILABLE_STATISTIC)
            logger.warning("Directory unavailable while validating password", error=e.message)
            raise
        except DirectoryPolicyRejection as e:
            logger.debug("Directory rejected password", directory_code=e.code)
            return [PolicyViolation(self._map_directory_code(e.code), detail=e.message)]
        return []

    def _map_directory_code(self, code: str | None) -> PasswordErrorKind:
        """Translate a directory error code; unknown codes map to UNKNOWN_VALIDATION."""
        if not code:
            return PasswordErrorKind.UNKNOWN_VALIDATION

        mapped = self.settings.directory_error_map.get(code)
        if mapped is not None:
            kind = PasswordErrorKind.from_code(mapped)
            if kind is not None:
                return kind

        return PasswordErrorKind.from_code(code) or PasswordErrorKind.UNKNOWN_VALIDATION
