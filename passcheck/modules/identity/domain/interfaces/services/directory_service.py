"""
Directory Password Policy Interface

Port for delegating a final password check to the user's directory.
"""

from typing import Protocol


class IDirectoryPasswordPolicy(Protocol):
    """Directory side password policy enforcement."""

    def test_password_policy(self, password: str) -> None:
        """Ask the directory whether it would accept the password.

        Returns normally when the directory accepts it.

        Raises:
            DirectoryUnsupportedOperation: Directory cannot test passwords
            DirectoryUnavailableError: Directory could not be reached
            DirectoryPolicyRejection: Directory rejected the password
        """
        ...
