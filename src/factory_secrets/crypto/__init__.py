# Crypto Module - Envelope Encryption
#
# Argon2id key derivation + AES-256-GCM sealing for the encrypted-file tier.

from .envelope import (
    HEADER_SIZE,
    NONCE_LENGTH,
    Envelope,
    decrypt_value,
    encrypt_value,
    generate_nonce,
    open_sealed,
    seal,
)
from .kdf import KEY_LENGTH, SALT_LENGTH, derive_key, generate_salt

__all__ = [
    "Envelope",
    "HEADER_SIZE",
    "KEY_LENGTH",
    "NONCE_LENGTH",
    "SALT_LENGTH",
    "decrypt_value",
    "derive_key",
    "encrypt_value",
    "generate_nonce",
    "generate_salt",
    "open_sealed",
    "seal",
]
