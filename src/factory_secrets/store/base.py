"""
Secret store interface.

Every tier (OS keyring, encrypted files) implements the same small
contract so callers never care which one is active:

    get(name)          -> value, or raises SecretNotFound
    set(name, value)   -> overwrite in place
    delete(name)       -> raises SecretNotFound if absent
"""

import re
from abc import ABC, abstractmethod

from ..errors import InvalidSecretName, SecretNotFound

# Names become file names on the file tier, so keep them path-safe.
_NAME_PATTERN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]{0,127}")


def validate_name(name: str) -> str:
    """Return name unchanged, or raise InvalidSecretName."""
    if not isinstance(name, str) or not _NAME_PATTERN.fullmatch(name):
        raise InvalidSecretName(
            f"invalid secret name {name!r}: use 1-128 ASCII letters, digits, "
            "'_', '.' or '-', not starting with '.' or '-'"
        )
    return name


class SecretStore(ABC):
    """Abstract base class for secret storage tiers."""

    @abstractmethod
    def get(self, name: str) -> str:
        """
        Retrieve a secret value.

        Raises:
            SecretNotFound: Nothing stored under this name
        """

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """Store or overwrite a secret."""

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Remove a secret.

        Raises:
            SecretNotFound: Nothing stored under this name
        """

    def exists(self, name: str) -> bool:
        """Check whether a secret is stored (may decrypt; override if cheaper)."""
        try:
            self.get(name)
        except SecretNotFound:
            return False
        return True
