"""
Global pytest configuration and fixtures for all tests.

Provides:
- Test markers
- Logging configured for the test environment
- Settings cache isolation
"""

import pytest

from passcheck.core.config import get_settings
from passcheck.core.enums import Environment, LogLevel
from passcheck.core.logging import LogConfig, configure_logging


@pytest.fixture(autouse=True, scope="session")
def test_logging():
    """Configure logging once for the whole test session."""
    configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; keep environment changes local to a test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# Markers for test categorization

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
