# factory-secrets: tiered secret storage for Factory
#
# Keeps LLM API keys and GitHub tokens in the OS keyring when one is usable,
# otherwise in Argon2id + AES-256-GCM encrypted files under ~/.factory/secrets.

__version__ = "1.0.0"
__description__ = "Tiered secret storage: OS keyring with encrypted-file fallback"

from .config import SecretStoreConfig, load_config
from .errors import (
    BackendUnavailable,
    DecryptionFailed,
    InvalidSecretName,
    KeyringBackendError,
    SecretCorrupted,
    SecretNotFound,
    SecretStoreError,
)
from .names import (
    ANTHROPIC_API_KEY,
    GITHUB_TOKEN,
    OPENAI_API_KEY,
    OPENROUTER_API_KEY,
    llm_api_key_name,
)
from .store import (
    AutoSecretStore,
    FileSecretStore,
    KeyringSecretStore,
    SecretStore,
    SecretTier,
    open_secret_store,
)

__all__ = [
    "__version__",
    # Stores
    "SecretStore",
    "AutoSecretStore",
    "FileSecretStore",
    "KeyringSecretStore",
    "SecretTier",
    "open_secret_store",
    # Configuration
    "SecretStoreConfig",
    "load_config",
    # Errors
    "SecretStoreError",
    "SecretNotFound",
    "SecretCorrupted",
    "DecryptionFailed",
    "BackendUnavailable",
    "KeyringBackendError",
    "InvalidSecretName",
    # Well-known names
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "OPENROUTER_API_KEY",
    "GITHUB_TOKEN",
    "llm_api_key_name",
]
