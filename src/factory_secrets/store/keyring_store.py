"""OS keyring backend for secret storage (Tier 1).

Wraps the ``keyring`` package (macOS Keychain, Windows Credential Locker,
Secret Service / KWallet on Linux). Secrets live under one service
namespace with the secret name as the account.
"""

from typing import Optional

import keyring
import structlog
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError, PasswordDeleteError

from ..config import DEFAULT_SERVICE_NAME
from ..errors import KeyringBackendError, SecretNotFound
from .base import SecretStore, validate_name

logger = structlog.get_logger(__name__)

# Throwaway entry written and removed by is_available()
PROBE_ACCOUNT = "__factory_test__"
PROBE_VALUE = "test"


class KeyringSecretStore(SecretStore):
    """Stores secrets in the OS credential store via ``keyring``.

    Parameters
    ----------
    service_name:
        Service namespace for all entries. Defaults to ``code-factory``.
    backend:
        Explicit keyring backend. ``None`` uses ``keyring.get_keyring()``.
    """

    def __init__(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        backend: Optional[KeyringBackend] = None,
    ) -> None:
        self._service = service_name
        self._backend = backend if backend is not None else keyring.get_keyring()

    def __repr__(self) -> str:
        return f"KeyringSecretStore(service_name={self._service!r}, backend={self.backend_name})"

    @property
    def service_name(self) -> str:
        return self._service

    @property
    def backend_name(self) -> str:
        return type(self._backend).__name__

    def get(self, name: str) -> str:
        validate_name(name)
        try:
            value = self._backend.get_password(self._service, name)
        except KeyringError as exc:
            raise KeyringBackendError(f"keyring read failed for {name!r}: {exc}") from exc
        if value is None:
            raise SecretNotFound(name)
        return value

    def set(self, name: str, value: str) -> None:
        validate_name(name)
        try:
            self._backend.set_password(self._service, name, value)
        except KeyringError as exc:
            raise KeyringBackendError(f"keyring write failed for {name!r}: {exc}") from exc
        logger.debug("secret_stored", secret=name, tier="keyring")

    def delete(self, name: str) -> None:
        validate_name(name)
        try:
            self._backend.delete_password(self._service, name)
        except PasswordDeleteError as exc:
            # Backends raise the same error for "missing" and "refused";
            # only an entry that is really gone counts as not found.
            if not self._still_stored(name):
                raise SecretNotFound(name) from None
            raise KeyringBackendError(f"keyring delete failed for {name!r}: {exc}") from exc
        except KeyringError as exc:
            raise KeyringBackendError(f"keyring delete failed for {name!r}: {exc}") from exc
        logger.debug("secret_deleted", secret=name, tier="keyring")

    def _still_stored(self, name: str) -> bool:
        try:
            return self._backend.get_password(self._service, name) is not None
        except KeyringError:
            return True

    def is_available(self) -> bool:
        """Probe the keyring by writing and removing a marker entry.

        Only the write decides availability. A failed cleanup is logged and
        ignored so a stale marker never turns a working keyring into an
        unavailable one.
        """
        try:
            self._backend.set_password(self._service, PROBE_ACCOUNT, PROBE_VALUE)
        except Exception as exc:
            # Backends leak non-keyring exceptions (D-Bus, ctypes) when no
            # daemon is reachable
            logger.debug(
                "keyring_probe_failed",
                backend=self.backend_name,
                error=str(exc),
            )
            return False

        try:
            self._backend.delete_password(self._service, PROBE_ACCOUNT)
        except Exception as exc:
            logger.warning(
                "keyring_probe_cleanup_failed",
                backend=self.backend_name,
                error=str(exc),
            )

        logger.debug("keyring_probe_ok", backend=self.backend_name)
        return True
