"""
Domain layer test configuration and shared fixtures.
Provides factories and collaborator mocks for password validation tests.
"""

from typing import Any
from unittest.mock import Mock

import factory
import pytest
from faker import Faker

from passcheck.modules.identity.domain.enums import ServiceStatus
from passcheck.modules.identity.domain.value_objects import PasswordPolicy, UserContext

fake = Faker()


# Test Factories using Factory Boy
class UserContextFactory(factory.Factory):
    """Factory for creating test UserContext values."""

    class Meta:
        model = UserContext

    user_id = factory.Sequence(lambda n: f"user{n:04d}")
    user_dn = factory.LazyAttribute(lambda obj: f"uid={obj.user_id},ou=people,dc=example,dc=com")
    email = factory.LazyFunction(fake.email)
    attributes = factory.LazyAttribute(
        lambda obj: {
            "sAMAccountName": obj.user_id,
            "displayName": fake.name(),
            "givenName": fake.first_name(),
        }
    )


def make_policy(**rules: Any) -> PasswordPolicy:
    """Build a policy from wire-name keyword arguments."""
    return PasswordPolicy.from_mapping(rules, name="test")


@pytest.fixture
def policy_factory():
    """Policy builder taking wire-name keyword arguments."""
    return make_policy


@pytest.fixture
def user_context() -> UserContext:
    """A user with no attributes that appear in the test passwords."""
    return UserContextFactory()


@pytest.fixture
def open_wordlist():
    """Wordlist collaborator that is open and lists nothing."""
    wordlist = Mock()
    wordlist.status.return_value = ServiceStatus.OPEN
    wordlist.contains_word.return_value = False
    return wordlist


@pytest.fixture
def open_shared_history():
    """Shared history collaborator that is open and lists nothing."""
    history = Mock()
    history.status.return_value = ServiceStatus.OPEN
    history.contains_word.return_value = False
    return history


@pytest.fixture
def statistics():
    return Mock()


@pytest.fixture
def identity_expander():
    """Macro expander returning templates unchanged."""
    expander = Mock()
    expander.expand.side_effect = lambda template, user_context: template
    return expander
