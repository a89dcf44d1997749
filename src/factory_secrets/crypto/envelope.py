"""Secret envelope encryption using AES-256-GCM with Argon2id key derivation.

Envelope format (one per secret file):

    base64( salt(16) + nonce(12) + ciphertext+tag )

Salt and nonce are regenerated on every write. The GCM tag is the only
integrity check; there is no separate checksum or version field.
"""

import base64
import binascii
import os
from dataclasses import dataclass

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..errors import DecryptionFailed, SecretCorrupted
from .kdf import SALT_LENGTH, derive_key, generate_salt

NONCE_LENGTH = 12  # 96-bit nonce for GCM
TAG_LENGTH = 16    # GCM authentication tag appended by AESGCM.encrypt

# Minimum raw size: salt + nonce (an empty ciphertext still fails the tag check)
HEADER_SIZE = SALT_LENGTH + NONCE_LENGTH


def generate_nonce() -> bytes:
    """Generate a random 96-bit GCM nonce."""
    return os.urandom(NONCE_LENGTH)


def seal(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Encrypt plaintext with AES-256-GCM. Returns ciphertext with tag."""
    return AESGCM(key).encrypt(nonce, plaintext, None)


def open_sealed(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """Decrypt and authenticate ciphertext produced by seal().

    Raises:
        DecryptionFailed: Wrong key, or any bit of nonce/ciphertext changed.
    """
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        raise DecryptionFailed(
            "envelope authentication failed (wrong password or tampered data)"
        ) from exc


@dataclass(frozen=True)
class Envelope:
    """On-disk representation of one encrypted secret."""

    salt: bytes
    nonce: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        return self.salt + self.nonce + self.ciphertext

    def encode(self) -> str:
        """Base64 text written as the whole file body."""
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def from_bytes(cls, raw: bytes) -> "Envelope":
        if len(raw) < HEADER_SIZE:
            raise SecretCorrupted(
                f"envelope too short: {len(raw)} bytes (need at least {HEADER_SIZE})"
            )
        return cls(
            salt=raw[:SALT_LENGTH],
            nonce=raw[SALT_LENGTH:HEADER_SIZE],
            ciphertext=raw[HEADER_SIZE:],
        )

    @classmethod
    def decode(cls, text: str) -> "Envelope":
        try:
            raw = base64.b64decode(text.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise SecretCorrupted(f"envelope is not valid base64: {exc}") from exc
        return cls.from_bytes(raw)


def encrypt_value(password: str, value: str) -> str:
    """
    Encrypt a secret value under a password.

    Fresh salt and nonce on every call, so encrypting the same value twice
    never produces the same envelope.

    Returns:
        Base64 envelope text
    """
    salt = generate_salt()
    nonce = generate_nonce()
    key = derive_key(password, salt)
    ciphertext = seal(key, nonce, value.encode("utf-8"))
    return Envelope(salt=salt, nonce=nonce, ciphertext=ciphertext).encode()


def decrypt_value(password: str, text: str) -> str:
    """
    Decrypt envelope text produced by encrypt_value().

    Raises:
        SecretCorrupted: Envelope malformed or plaintext not UTF-8
        DecryptionFailed: Wrong password or tampered envelope
    """
    envelope = Envelope.decode(text)
    key = derive_key(password, envelope.salt)
    plaintext = open_sealed(key, envelope.nonce, envelope.ciphertext)
    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SecretCorrupted("decrypted secret is not valid UTF-8") from exc
