"""
AES-256-GCM Value Codec
=======================

Encrypts one scalar (None, bool, int, float, str) into a wire string and
decrypts a wire string back into a scalar.

Wire Format:
    "<base64 ciphertext>.<base64 16-byte tag>"

    Standard base64 with padding. No version byte, no algorithm id and no
    nonce: the nonce is supplied out-of-band by the KeyMaterial.

Type Recovery:
    Decryption recovers the scalar type from its text form, in order:
    "null" -> None, "true"/"false" -> bool, decimal literal -> int/float,
    anything else -> str. This is lossy: the string "42" comes back as 42
    and the string "true" as True.
"""

from __future__ import annotations

import base64
import binascii
import logging
import math
import re
from typing import Any, Final, Optional, Pattern, Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from securetree.core.crypto.key_material import CodecError, KeyMaterial
from securetree.security.constants import (
    ERROR_PREVIEW_CHARS,
    TAG_LENGTH_BYTES,
    TEXT_ENCODING,
    WIRE_SEPARATOR,
)

Scalar = Union[None, bool, int, float, str]

_DECIMAL_LITERAL: Final[Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
)
_INTEGER_LITERAL: Final[Pattern[str]] = re.compile(r"[+-]?[0-9]+")


class EncryptionError(CodecError):
    """Raised when the cipher fails to encrypt a value."""
    pass


class DecryptionError(CodecError):
    """
    Raised when a wire string fails to decrypt.

    Covers authentication failure (tampering, wrong key or nonce),
    malformed base64 and a tag of the wrong size. Never swallowed.
    """
    pass


def _preview(text: str, limit: int = ERROR_PREVIEW_CHARS) -> str:
    return text[:limit]


def split_wire_string(value: Any) -> Optional[tuple[str, str]]:
    """
    Split a candidate wire string into its two segments.

    Returns:
        (ciphertext_b64, tag_b64) if ``value`` is a string with exactly one
        separator and a non-empty tag segment, otherwise None.

    Note:
        The ciphertext segment is empty for an encrypted empty string.
    """
    if not isinstance(value, str) or value.count(WIRE_SEPARATOR) != 1:
        return None
    ciphertext_b64, tag_b64 = value.split(WIRE_SEPARATOR)
    if not tag_b64:
        return None
    return ciphertext_b64, tag_b64


def looks_encrypted(value: Any) -> bool:
    """Check whether a value has the wire-string shape (does not decrypt)."""
    return split_wire_string(value) is not None


def to_canonical_text(value: Scalar) -> str:
    """
    Convert a scalar to the text that gets encrypted.

    Raises:
        TypeError: If ``value`` is not a tree scalar
    """
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return repr(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot encrypt value of type {type(value).__name__}")


def from_canonical_text(text: str) -> Scalar:
    """Best-effort recovery of a scalar from decrypted text."""
    if text == "null":
        return None
    if text == "true":
        return True
    if text == "false":
        return False

    stripped = text.strip()
    if stripped and _DECIMAL_LITERAL.fullmatch(stripped):
        if _INTEGER_LITERAL.fullmatch(stripped):
            try:
                return int(stripped)
            except ValueError:
                # over sys.get_int_max_str_digits()
                return text
        number = float(stripped)
        if math.isfinite(number):
            return number

    return text


class ValueCodec:
    """
    AES-256-GCM encryption of single scalar values.

    A fresh AESGCM context is created for every call, so one codec can be
    used from several threads at once.

    Usage:
        codec = ValueCodec(KeyMaterial(key_hex, nonce_hex))
        wire = codec.encrypt(42)
        assert codec.decrypt(wire) == 42
    """

    __slots__ = ("_material", "_preview_chars", "_log")

    def __init__(
        self,
        material: KeyMaterial,
        preview_chars: int = ERROR_PREVIEW_CHARS,
    ) -> None:
        if not isinstance(material, KeyMaterial):
            raise TypeError("material must be a KeyMaterial instance")
        self._material = material
        self._preview_chars = preview_chars
        self._log = logging.getLogger("securetree.codec")

    @property
    def material(self) -> KeyMaterial:
        return self._material

    def encrypt(self, value: Scalar) -> str:
        """
        Encrypt one scalar into a wire string.

        Args:
            value: None, bool, int, float or str

        Returns:
            "<base64 ciphertext>.<base64 tag>"

        Raises:
            TypeError: If ``value`` is not a scalar
            EncryptionError: If the value has no text form (an int past
                sys.get_int_max_str_digits()) or the cipher fails
        """
        try:
            text = to_canonical_text(value)
        except ValueError as e:
            self._log.warning("No text form for %s value", type(value).__name__)
            raise EncryptionError(f"Encryption failed for {type(value).__name__} value: {e}") from e

        try:
            aesgcm = AESGCM(self._material.key)
            sealed = aesgcm.encrypt(self._material.nonce, text.encode(TEXT_ENCODING), None)
        except (ValueError, OverflowError) as e:
            self._log.warning("Encryption failed for %s value", type(value).__name__)
            raise EncryptionError(
                f'Encryption failed for value "{_preview(text, self._preview_chars)}...": {e}'
            ) from e

        # AESGCM appends the tag to the ciphertext
        ciphertext, tag = sealed[:-TAG_LENGTH_BYTES], sealed[-TAG_LENGTH_BYTES:]
        return (
            base64.b64encode(ciphertext).decode("ascii")
            + WIRE_SEPARATOR
            + base64.b64encode(tag).decode("ascii")
        )

    def decrypt(self, value: Any) -> Any:
        """
        Decrypt one wire string back into a scalar.

        Values that are not strings, or strings without the two-segment wire
        shape, are returned unchanged.

        Raises:
            DecryptionError: On malformed base64, wrong tag size, or failed
                authentication (tampering, wrong key or nonce)
        """
        parts = split_wire_string(value)
        if parts is None:
            return value
        ciphertext_b64, tag_b64 = parts

        try:
            ciphertext = base64.b64decode(ciphertext_b64, validate=True)
            tag = base64.b64decode(tag_b64, validate=True)
            if len(tag) != TAG_LENGTH_BYTES:
                raise ValueError(
                    f"authentication tag must be {TAG_LENGTH_BYTES} bytes, got {len(tag)}"
                )
            aesgcm = AESGCM(self._material.key)
            plaintext = aesgcm.decrypt(self._material.nonce, ciphertext + tag, None)
            text = plaintext.decode(TEXT_ENCODING)
        except InvalidTag as e:
            self._log.warning("Authentication failed for wire string of %d chars", len(value))
            raise DecryptionError(
                f'Decryption failed for value "{_preview(value, self._preview_chars)}...": '
                "unable to authenticate data"
            ) from e
        except (binascii.Error, ValueError) as e:
            # UnicodeDecodeError is a ValueError subclass
            self._log.warning("Malformed wire string of %d chars", len(value))
            raise DecryptionError(
                f'Decryption failed for value "{_preview(value, self._preview_chars)}...": {e}'
            ) from e

        return from_canonical_text(text)
