"""
Lookup Service Interfaces

Ports for the wordlist and shared password history lookups. Both are
queried only while they report themselves open.
"""

from typing import Protocol

from passcheck.modules.identity.domain.enums import ServiceStatus


class IWordlistService(Protocol):
    """Dictionary of common or forbidden passwords."""

    def status(self) -> ServiceStatus:
        """Current availability of the wordlist."""
        ...

    def contains_word(self, password: str) -> bool:
        """Check if the password is in the wordlist.

        Args:
            password: Candidate password

        Returns:
            True if the password is listed
        """
        ...


class ISharedHistoryService(Protocol):
    """Passwords previously used by any user."""

    def status(self) -> ServiceStatus:
        """Current availability of the shared history."""
        ...

    def contains_word(self, password: str) -> bool:
        """Check if the password appears in the shared history."""
        ...
