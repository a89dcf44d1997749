# Tier Selector - Auto Store
#
# Picks the storage tier once, at construction:
#   KEYRING  probe succeeded -> all operations go to the OS keyring
#   FILE     probe failed    -> all operations go to encrypted files
#
# The choice is never re-evaluated. If the keyring disappears mid-session,
# operations fail instead of silently writing to a second location.

from enum import Enum
from typing import Optional

import structlog

from ..config import TIER_FILE, TIER_KEYRING, SecretStoreConfig, load_config
from ..errors import BackendUnavailable
from .base import SecretStore
from .file_store import FileSecretStore
from .keyring_store import KeyringSecretStore

logger = structlog.get_logger(__name__)


class SecretTier(str, Enum):
    """Which backend an AutoSecretStore routes to."""
    KEYRING = "keyring"
    FILE = "file"

    def label(self) -> str:
        """Short description for setup screens."""
        labels = {
            SecretTier.KEYRING: "OS keyring",
            SecretTier.FILE: "encrypted files",
        }
        return labels[self]


class AutoSecretStore(SecretStore):
    """
    Secret store that routes to the best tier available at startup.

    Args:
        config: Store settings (tier preference, paths, password)
        keyring_store: Keyring tier to probe (default: built from config)

    Raises:
        BackendUnavailable: Forced keyring tier failed its probe, or the file
            tier was selected without a password
        OSError: File tier directory could not be created
    """

    def __init__(
        self,
        config: SecretStoreConfig,
        keyring_store: Optional[KeyringSecretStore] = None,
    ):
        self.config = config

        if config.tier == TIER_FILE:
            self._backend: SecretStore = self._build_file_store()
            self._tier = SecretTier.FILE
        else:
            kr = keyring_store or KeyringSecretStore(service_name=config.service_name)
            if kr.is_available():
                self._backend = kr
                self._tier = SecretTier.KEYRING
            elif config.tier == TIER_KEYRING:
                raise BackendUnavailable(
                    f"OS keyring ({kr.backend_name}) is not usable on this machine"
                )
            else:
                self._backend = self._build_file_store()
                self._tier = SecretTier.FILE

        logger.info(
            "secret_tier_selected",
            tier=self._tier.value,
            requested=config.tier,
            location=self.describe(),
        )

    def _build_file_store(self) -> FileSecretStore:
        try:
            return FileSecretStore(self.config.secrets_dir, self.config.password or "")
        except ValueError as exc:
            raise BackendUnavailable(
                "OS keyring unavailable and no password configured for the "
                "encrypted file store (set FACTORY_SECRETS_PASSWORD)"
            ) from exc

    @property
    def tier(self) -> SecretTier:
        return self._tier

    @property
    def using_fallback(self) -> bool:
        """True when secrets go to encrypted files instead of the keyring."""
        return self._tier == SecretTier.FILE

    @property
    def backend(self) -> SecretStore:
        return self._backend

    def describe(self) -> str:
        """Where secrets are kept, e.g. for a setup wizard."""
        if isinstance(self._backend, KeyringSecretStore):
            return f"{self._tier.label()} ({self._backend.backend_name})"
        if isinstance(self._backend, FileSecretStore):
            return f"{self._tier.label()} in {self._backend.secrets_dir}"
        return self._tier.label()

    def get(self, name: str) -> str:
        return self._backend.get(name)

    def set(self, name: str, value: str) -> None:
        self._backend.set(name, value)

    def delete(self, name: str) -> None:
        self._backend.delete(name)

    def exists(self, name: str) -> bool:
        return self._backend.exists(name)


def open_secret_store(config: Optional[SecretStoreConfig] = None) -> AutoSecretStore:
    """Build an AutoSecretStore, loading config from the environment if omitted."""
    return AutoSecretStore(config if config is not None else load_config())
