"""
Test cases for the AD complexity check.
"""

from unittest.mock import Mock

import pytest

from passcheck.modules.identity.domain.enums import ADComplexityLevel, PasswordErrorKind
from passcheck.modules.identity.domain.rules import (
    ad_complexity,
    basic_syntax_violations,
    check_ad_complexity,
)
from passcheck.modules.identity.domain.rules.rule_utils import tokenize_display_name
from passcheck.modules.identity.domain.value_objects import UserContext, count_characters

from .conftest import make_policy

pytestmark = pytest.mark.unit


def ad_check(password, level=ADComplexityLevel.AD2003, user_context=None, max_violations=0):
    return check_ad_complexity(
        level,
        user_context,
        password,
        count_characters(password),
        max_group_violations=max_violations,
    )


@pytest.fixture
def jane():
    return UserContext(
        user_id="jsmith",
        attributes={"sAMAccountName": "jsmith", "displayName": "Jane Q. Smith-Jones"},
    )


class TestCharacterClasses:
    """Test the three-of-four character class requirement."""

    def test_three_classes_pass(self):
        assert ad_check("Password1") == []

    def test_two_classes_fail(self):
        violations = ad_check("password1")

        assert [v.kind for v in violations] == [PasswordErrorKind.AD_COMPLEXITY]
        assert "character classes" in violations[0].detail

    def test_control_characters_are_not_special(self):
        assert [v.kind for v in ad_check("password\x01")] == [PasswordErrorKind.AD_COMPLEXITY]

    def test_other_letters_count_only_for_ad2008(self):
        password = "漢字漢字ab1"

        assert ad_check(password, ADComplexityLevel.AD2008) == []
        assert [v.kind for v in ad_check(password, ADComplexityLevel.AD2003)] == [
            PasswordErrorKind.AD_COMPLEXITY
        ]


class TestLength:
    """Test AD length bounds."""

    def test_too_short(self):
        assert [v.kind for v in ad_check("Pa1!")] == [PasswordErrorKind.TOO_SHORT]

    def test_too_long_ad2003(self):
        password = "Aa1!" * 33

        assert [v.kind for v in ad_check(password)] == [PasswordErrorKind.TOO_LONG]
        assert ad_check(password, ADComplexityLevel.AD2008) == []


class TestUserNameGroups:
    """Test account name and display name containment."""

    def test_account_name_in_password(self, jane):
        violations = ad_check("Xx-JSMITH-99", user_context=jane)

        assert [v.kind for v in violations] == [PasswordErrorKind.AD_COMPLEXITY]
        assert "account name" in violations[0].detail

    def test_short_account_name_ignored(self):
        user = UserContext(attributes={"sAMAccountName": "js"})

        assert ad_check("Hello-js-99", user_context=user) == []

    def test_display_name_token_in_password(self, jane):
        violations = ad_check("My-Jones-99", user_context=jane)

        assert [v.kind for v in violations] == [PasswordErrorKind.AD_COMPLEXITY]
        assert "display name" in violations[0].detail

    def test_short_display_name_tokens_ignored(self, jane):
        assert ad_check("Ab-Q-99xyz", user_context=jane) == []

    def test_tokenize_display_name(self):
        assert tokenize_display_name("Jane Q. Smith-Jones", 3) == ["jane", "smith", "jones"]
        assert tokenize_display_name("O'Brien_Ann\tLee", 3) == ["o'brien", "ann", "lee"]


class TestMaxViolations:
    """Test the allowed group violation count."""

    def test_failures_within_allowance_pass(self, jane):
        assert ad_check("jsmith1234", user_context=jane, max_violations=3) == []

    def test_single_composite_violation(self, jane):
        violations = ad_check("jsmith1234", user_context=jane, max_violations=2)

        assert len(violations) == 1
        assert violations[0].kind == PasswordErrorKind.AD_COMPLEXITY


class TestActiveDirectoryRule:
    """Test the AD checker inside the basic syntax checks."""

    def test_inactive_when_level_none(self):
        assert basic_syntax_violations("password1", make_policy()) == []

    def test_active_for_ad2003(self):
        violations = basic_syntax_violations("password1", make_policy(ADComplexityLevel="AD2003"))

        assert [v.kind for v in violations] == [PasswordErrorKind.AD_COMPLEXITY]

    def test_failure_logged_with_complexity_level(self, monkeypatch):
        sink = Mock()
        monkeypatch.setattr(ad_complexity.logger, "_logger", sink)

        violations = basic_syntax_violations("password1", make_policy(ADComplexityLevel="AD2003"))

        assert [v.kind for v in violations] == [PasswordErrorKind.AD_COMPLEXITY]
        sink.debug.assert_called_once()
        assert sink.debug.call_args.kwargs["complexity_level"] == "AD2003"
        assert sink.debug.call_args.kwargs["group_violations"] == 1

    def test_policy_max_violations(self):
        policy = make_policy(ADComplexityLevel="AD2003", ADComplexityMaxViolations=1)

        assert basic_syntax_violations("password1", policy) == []

    def test_policy_min_token_length(self, jane):
        policy = make_policy(ADComplexityLevel="AD2003", ADComplexityMinTokenLength=6)

        assert basic_syntax_violations("My-Jones-99", policy, jane) == []
