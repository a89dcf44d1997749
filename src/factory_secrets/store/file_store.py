# Encrypted File Store - Tier 2
#
# One file per secret: <secrets_dir>/<name>.enc
# File body: base64(salt(16) + nonce(12) + AES-256-GCM ciphertext+tag)
#
# Security:
#   - Key derived per write with Argon2id from the user's password
#   - Fresh salt and nonce per write (never reused, even for the same name)
#   - Directory 0700, files 0600
#   - Writes go to a temp file in the same directory, then os.replace()
#   - No caching: every get() re-reads the file and re-derives the key

import os
import tempfile
from pathlib import Path
from typing import List, Union

import structlog

from ..crypto.envelope import decrypt_value, encrypt_value
from ..errors import SecretNotFound
from .base import _NAME_PATTERN, SecretStore, validate_name

logger = structlog.get_logger(__name__)

SECRET_SUFFIX = ".enc"
_TEMP_PREFIX = ".tmp-"
DIR_MODE = 0o700
FILE_MODE = 0o600


class FileSecretStore(SecretStore):
    """
    Stores each secret as an individually encrypted file.

    Args:
        secrets_dir: Directory holding the .enc files (created if missing)
        password: Password the envelope keys are derived from

    Raises:
        ValueError: If password is empty
        OSError: If the directory cannot be created
    """

    def __init__(self, secrets_dir: Union[str, Path], password: str):
        if not password:
            raise ValueError("file secret store requires a non-empty password")

        self._dir = Path(secrets_dir).expanduser()
        self._password = password
        self._ensure_dir()

    def __repr__(self) -> str:
        # Never include the password
        return f"FileSecretStore(secrets_dir={str(self._dir)!r})"

    @property
    def secrets_dir(self) -> Path:
        return self._dir

    def path_for(self, name: str) -> Path:
        """File path backing a secret name."""
        return self._dir / f"{validate_name(name)}{SECRET_SUFFIX}"

    def _ensure_dir(self) -> None:
        self._dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        os.chmod(self._dir, DIR_MODE)

    # ── SecretStore ─────────────────────────────────────────────────

    def get(self, name: str) -> str:
        path = self.path_for(name)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise SecretNotFound(name) from None

        # Non-ASCII bytes become U+FFFD and fail base64 validation
        return decrypt_value(self._password, data.decode("ascii", errors="replace"))

    def set(self, name: str, value: str) -> None:
        path = self.path_for(name)
        encoded = encrypt_value(self._password, value)
        self._ensure_dir()
        self._atomic_write(path, encoded.encode("ascii"))
        logger.debug("secret_stored", secret=name, tier="file")

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            raise SecretNotFound(name) from None
        logger.debug("secret_deleted", secret=name, tier="file")

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def list_names(self) -> List[str]:
        """Return stored secret names (sorted). Values are not decrypted.

        Files whose stem is not a valid secret name are skipped, so every
        listed name can be passed back to get().
        """
        if not self._dir.exists():
            return []
        names = []
        for p in self._dir.iterdir():
            if not p.is_file() or not p.name.endswith(SECRET_SUFFIX):
                continue
            stem = p.name[: -len(SECRET_SUFFIX)]
            if _NAME_PATTERN.fullmatch(stem):
                names.append(stem)
        return sorted(names)

    # ── Internals ───────────────────────────────────────────────────

    def _atomic_write(self, path: Path, data: bytes) -> None:
        """Write data to path so readers see either the old or the new file."""
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self._dir), prefix=_TEMP_PREFIX, suffix=".part"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, FILE_MODE)
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
