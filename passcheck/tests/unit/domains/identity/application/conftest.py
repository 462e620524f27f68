"""
Application layer test configuration.
"""

from unittest.mock import Mock

import pytest

from passcheck.core.config import ExternalRuleConfig, ValidatorSettings
from passcheck.modules.identity.application.dtos import ExternalRuleResponse

RULE_SERVICE_URL = "https://rules.example.com/check"


def make_settings(url: str | None = RULE_SERVICE_URL, halt_on_error: bool = False, **kwargs) -> ValidatorSettings:
    return ValidatorSettings(
        external_rule=ExternalRuleConfig(url=url, halt_on_error=halt_on_error),
        **kwargs,
    )


@pytest.fixture
def transport():
    """Transport that accepts every password."""
    mock = Mock()
    mock.send.return_value = ExternalRuleResponse(error=False)
    return mock
