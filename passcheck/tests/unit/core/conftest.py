"""
Core test fixtures.
"""

import os

import pytest


@pytest.fixture
def isolated_environ(monkeypatch):
    """Process environment copy without PASSCHECK_ keys, restored after the test."""
    environ = {k: v for k, v in os.environ.items() if not k.startswith("PASSCHECK_")}
    monkeypatch.setattr(os, "environ", environ)
    return environ
