# Secret Store Configuration
#
# Explicit settings object handed to store constructors. Nothing here is
# read implicitly by the stores themselves: load_config() is the only place
# that looks at the environment or a .env file.
#
# Environment variables:
#   FACTORY_HOME              app directory           (default ~/.factory)
#   FACTORY_SECRETS_DIR       encrypted-file location (default $FACTORY_HOME/secrets)
#   FACTORY_KEYRING_SERVICE   keyring namespace       (default code-factory)
#   FACTORY_SECRETS_PASSWORD  password for the file tier
#   FACTORY_SECRETS_TIER      auto | keyring | file   (default auto)

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional, Union

from dotenv import dotenv_values

DEFAULT_APP_DIR = Path("~/.factory")
DEFAULT_SERVICE_NAME = "code-factory"
SECRETS_SUBDIR = "secrets"

TIER_AUTO = "auto"
TIER_KEYRING = "keyring"
TIER_FILE = "file"
VALID_TIERS = (TIER_AUTO, TIER_KEYRING, TIER_FILE)


@dataclass
class SecretStoreConfig:
    """Settings for building a secret store.

    Args:
        app_dir: Application directory (``~`` is expanded).
        secrets_dir: Encrypted-file tier directory. Defaults to
            ``app_dir / "secrets"``.
        service_name: Keyring service namespace.
        password: Password for the encrypted-file tier. Only required when
            that tier ends up selected.
        tier: ``auto`` probes the keyring and falls back to files,
            ``keyring`` and ``file`` force one tier.
    """

    app_dir: Path = DEFAULT_APP_DIR
    secrets_dir: Optional[Path] = None
    service_name: str = DEFAULT_SERVICE_NAME
    password: Optional[str] = field(default=None, repr=False)
    tier: str = TIER_AUTO

    def __post_init__(self):
        self.app_dir = Path(self.app_dir).expanduser()
        if self.secrets_dir is None:
            self.secrets_dir = self.app_dir / SECRETS_SUBDIR
        else:
            self.secrets_dir = Path(self.secrets_dir).expanduser()

        self.tier = (self.tier or TIER_AUTO).strip().lower()
        if self.tier not in VALID_TIERS:
            raise ValueError(
                f"Unknown secret tier: {self.tier!r} (expected one of {', '.join(VALID_TIERS)})"
            )
        if not self.service_name:
            raise ValueError("service_name must not be empty")


def load_config(
    env_file: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SecretStoreConfig:
    """
    Build a SecretStoreConfig from a .env file and the environment.

    The process environment wins over the .env file. os.environ is never
    modified.

    Args:
        env_file: Path to a .env file. Missing files are ignored.
        environ: Environment mapping (default: os.environ)

    Returns:
        SecretStoreConfig
    """
    values = {}
    if env_file is not None and Path(env_file).is_file():
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(os.environ if environ is None else environ)

    app_dir = values.get("FACTORY_HOME") or DEFAULT_APP_DIR
    secrets_dir = values.get("FACTORY_SECRETS_DIR") or None

    return SecretStoreConfig(
        app_dir=Path(app_dir),
        secrets_dir=Path(secrets_dir) if secrets_dir else None,
        service_name=values.get("FACTORY_KEYRING_SERVICE") or DEFAULT_SERVICE_NAME,
        password=values.get("FACTORY_SECRETS_PASSWORD") or None,
        tier=values.get("FACTORY_SECRETS_TIER") or TIER_AUTO,
    )
