"""
Shared pytest fixtures for the factory-secrets test suite.

Autouse fixtures below isolate tests from the developer's machine:
  - OS keyring     -> keyring's "fail" backend (nothing reaches the real keystore)
  - FACTORY_* vars -> removed (load_config() sees only what a test sets)
  - structlog      -> stdlib logging, so events land in caplog, not stdout
"""

import keyring
import pytest
import structlog
from keyring.backends import fail
from keyring.errors import KeyringLocked, PasswordDeleteError, PasswordSetError

from factory_secrets.store import FileSecretStore, KeyringSecretStore

TEST_PASSWORD = "test-password-123"


class MemoryKeyring:
    """In-memory stand-in for an OS keyring backend.

    Failure switches mimic a locked keystore or a backend that refuses
    deletes.
    """

    def __init__(self):
        self.entries = {}
        self.locked = False
        self.refuse_set = False
        self.refuse_delete = False
        self.delete_calls = []

    def get_password(self, service, username):
        if self.locked:
            raise KeyringLocked("keyring is locked")
        return self.entries.get((service, username))

    def set_password(self, service, username, password):
        if self.locked:
            raise KeyringLocked("keyring is locked")
        if self.refuse_set:
            raise PasswordSetError("write refused")
        self.entries[(service, username)] = password

    def delete_password(self, service, username):
        self.delete_calls.append((service, username))
        if self.locked:
            raise KeyringLocked("keyring is locked")
        if self.refuse_delete:
            raise PasswordDeleteError("delete refused")
        if (service, username) not in self.entries:
            raise PasswordDeleteError("Password not found")
        del self.entries[(service, username)]


@pytest.fixture(autouse=True)
def _isolate_os_keyring():
    """Point the global keyring at the always-failing backend for every test."""
    previous = keyring.get_keyring()
    keyring.set_keyring(fail.Keyring())
    yield
    keyring.set_keyring(previous)


@pytest.fixture(autouse=True)
def _route_structlog_to_stdlib():
    """Send structlog events through stdlib logging (caplog) instead of stdout."""
    structlog.configure(
        processors=[structlog.stdlib.add_log_level, structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def _clear_factory_env(monkeypatch):
    for var in (
        "FACTORY_HOME",
        "FACTORY_SECRETS_DIR",
        "FACTORY_KEYRING_SERVICE",
        "FACTORY_SECRETS_PASSWORD",
        "FACTORY_SECRETS_TIER",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def memory_keyring():
    return MemoryKeyring()


@pytest.fixture
def keyring_store(memory_keyring):
    return KeyringSecretStore(service_name="code-factory-test", backend=memory_keyring)


@pytest.fixture
def secrets_dir(tmp_path):
    return tmp_path / ".factory" / "secrets"


@pytest.fixture
def password():
    return TEST_PASSWORD


@pytest.fixture
def file_store(secrets_dir, password):
    return FileSecretStore(secrets_dir, password)
