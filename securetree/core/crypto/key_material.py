"""
Key Material
============

Owns the AES-256-GCM key and nonce used by one codec instance.

Security Properties:
    - Validated eagerly at construction (hex-decodable, exact lengths)
    - Immutable once constructed; there is no re-initialisation path
    - Never exposes key bytes through repr() or error messages

WARNING:
    The same nonce is used for every value encrypted under this key.
    Equal plaintexts therefore produce equal ciphertexts. This keeps the
    wire format compatible with existing producers; do not share key
    material with any other AES-GCM user.
"""

from __future__ import annotations

import secrets
from typing import Any

from securetree.security.constants import IV_LENGTH_BYTES, KEY_LENGTH_BYTES
from securetree.utils.validators import ValidationError, to_hex, validate_hex_bytes


class CodecError(Exception):
    """Base class for every failure raised by the tree codec."""
    pass


class ConfigurationError(CodecError, ValueError):
    """
    Raised when key or nonce material is missing or malformed.

    Not recoverable: the codec must be reconstructed with valid material.
    """
    pass


class KeyMaterial:
    """
    Immutable (key, nonce) pair decoded from hex strings.

    Usage:
        material = KeyMaterial(key_hex, nonce_hex)
        codec = ValueCodec(material)

    Raises:
        ConfigurationError: If either value is missing, not a string,
            not hexadecimal, or decodes to the wrong number of bytes.
    """

    __slots__ = ("_key", "_nonce", "_frozen")

    def __init__(self, key_hex: Any, nonce_hex: Any) -> None:
        object.__setattr__(self, "_frozen", False)
        try:
            key = validate_hex_bytes(key_hex, KEY_LENGTH_BYTES, field_name="ENCRYPTION_KEY")
            nonce = validate_hex_bytes(nonce_hex, IV_LENGTH_BYTES, field_name="ENCRYPTION_IV")
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration Error processing encryption key/IV: {e}"
            ) from e
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_nonce", nonce)
        object.__setattr__(self, "_frozen", True)

    @classmethod
    def generate(cls) -> KeyMaterial:
        """
        Generate fresh random key material.

        Returns:
            KeyMaterial with a 32-byte key and a 16-byte nonce from the OS CSPRNG
        """
        return cls(
            secrets.token_hex(KEY_LENGTH_BYTES),
            secrets.token_hex(IV_LENGTH_BYTES),
        )

    @property
    def key(self) -> bytes:
        """The 32-byte AES-256 key."""
        return self._key

    @property
    def nonce(self) -> bytes:
        """The 16-byte GCM nonce."""
        return self._nonce

    def to_hex(self) -> tuple[str, str]:
        """Return (key_hex, nonce_hex) for provisioning into configuration."""
        return to_hex(self._key), to_hex(self._nonce)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyMaterial):
            return NotImplemented
        return secrets.compare_digest(self._key, other._key) and secrets.compare_digest(
            self._nonce, other._nonce
        )

    def __hash__(self) -> int:
        return hash((self._key, self._nonce))

    def __repr__(self) -> str:
        """Safe representation without exposing key material."""
        return f"KeyMaterial(key_len={len(self._key)}, nonce_len={len(self._nonce)})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("KeyMaterial is immutable after initialization")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError("KeyMaterial is immutable after initialization")
