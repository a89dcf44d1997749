# Key Derivation - Argon2id
#
# Password + random salt -> 256-bit AES key.
# Parameters are fixed so every envelope, old or new, derives the same key
# from the same (password, salt) pair. Argon2 version 0x13.

import os

from argon2.low_level import Type, hash_secret_raw

TIME_COST = 1                # iterations
MEMORY_COST_KIB = 64 * 1024  # 64 MiB
PARALLELISM = 4              # lanes
KEY_LENGTH = 32              # 256 bits for AES-256
SALT_LENGTH = 16             # 128-bit salt, fresh per write


def derive_key(password: str, salt: bytes) -> bytes:
    """
    Derive an AES-256 key from a password with Argon2id.

    Args:
        password: User-supplied password (UTF-8 encoded before hashing)
        salt: 16 random bytes stored alongside the ciphertext

    Returns:
        32-byte key. Never persisted.

    Raises:
        ValueError: If salt is not SALT_LENGTH bytes (caller bug)
    """
    if len(salt) != SALT_LENGTH:
        raise ValueError(f"salt must be {SALT_LENGTH} bytes, got {len(salt)}")

    return hash_secret_raw(
        secret=password.encode("utf-8"),
        salt=salt,
        time_cost=TIME_COST,
        memory_cost=MEMORY_COST_KIB,
        parallelism=PARALLELISM,
        hash_len=KEY_LENGTH,
        type=Type.ID,
    )


def generate_salt() -> bytes:
    """Generate a cryptographically random salt."""
    return os.urandom(SALT_LENGTH)
