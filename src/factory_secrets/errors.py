"""
Secret store exception classes
"""


class SecretStoreError(Exception):
    """Base exception for secret storage operations"""
    pass


class SecretNotFound(SecretStoreError, KeyError):
    """Raised when no secret is stored under the requested name"""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"secret not found: {self.name}"


class SecretCorrupted(SecretStoreError):
    """Raised when a stored envelope exists but cannot be read"""
    pass


class DecryptionFailed(SecretCorrupted):
    """Raised when AEAD verification fails (wrong password or tampered data)"""
    pass


class BackendUnavailable(SecretStoreError):
    """Raised when the requested storage tier cannot be used on this machine"""
    pass


class KeyringBackendError(SecretStoreError):
    """Raised when the OS keyring reports a failure other than a missing entry"""
    pass


class InvalidSecretName(SecretStoreError, ValueError):
    """Raised when a secret name is not a safe short identifier"""
    pass
