# Store Module - Tiered Secret Storage
#
# Tier 1: OS keyring (KeyringSecretStore)
# Tier 2: Argon2id + AES-256-GCM encrypted files (FileSecretStore)
# AutoSecretStore picks one at startup and sticks with it.

from .auto_store import AutoSecretStore, SecretTier, open_secret_store
from .base import SecretStore, validate_name
from .file_store import FileSecretStore
from .keyring_store import KeyringSecretStore

__all__ = [
    "AutoSecretStore",
    "FileSecretStore",
    "KeyringSecretStore",
    "SecretStore",
    "SecretTier",
    "open_secret_store",
    "validate_name",
]
