"""Matching helpers shared by the password rule checkers."""

import re

from passcheck.modules.identity.domain.value_objects.character_counter import (
    longest_consecutive_run,
)

# Separators used to split a display name into tokens
DISPLAY_NAME_SEPARATORS = re.compile(r"[,.\-–—_ £\t]+")


def too_many_consecutive_chars(password: str, maximum: int) -> bool:
    """Check for a run of ``maximum`` or more consecutive code points.

    Only applies when ``maximum`` is greater than 1.
    """
    if not password or maximum <= 1:
        return False
    return longest_consecutive_run(password) >= maximum


def contains_disallowed_value(password: str, value: str, threshold: int = 0) -> bool:
    """
    Check if the password contains a disallowed value, ignoring case.

    With a threshold of 0 the whole value must appear in the password.
    Otherwise any ``threshold`` long slice of the value appearing in the
    password is enough; values shorter than the threshold never match.
    """
    if not password or not value:
        return False

    password = password.lower()
    value = value.lower()

    if threshold <= 0:
        return value in password

    if len(value) < threshold:
        return False

    return any(
        value[start:start + threshold] in password
        for start in range(len(value) - threshold + 1)
    )


def tokenize_display_name(display_name: str, min_length: int) -> list[str]:
    """Split a display name into lowercased tokens of at least ``min_length``."""
    if not display_name:
        return []
    return [
        token.lower()
        for token in DISPLAY_NAME_SEPARATORS.split(display_name)
        if token and len(token) >= min_length
    ]


def contains_tokens(password: str, tokens: list[str]) -> list[str]:
    """Tokens that appear in the password, ignoring case."""
    lowered = password.lower()
    return [token for token in tokens if token.lower() in lowered]
