"""
Validation Utilities
====================

Input validation for externally supplied key material.
"""

from __future__ import annotations

import binascii
from typing import Any


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


def validate_string_safe(
    value: Any,
    field_name: str = "value",
) -> str:
    """
    Validate a string value for safety.

    Args:
        value: The string to validate
        field_name: Name of the field for error messages

    Returns:
        Validated string

    Raises:
        ValidationError: If validation fails
    """
    if value is None:
        raise ValidationError(f"{field_name} is missing")

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    if not value:
        raise ValidationError(f"{field_name} cannot be empty")

    # Check for null bytes (security risk)
    if "\x00" in value:
        raise ValidationError(f"{field_name} contains invalid characters")

    return value


def validate_hex_bytes(
    value: Any,
    expected_length: int,
    field_name: str = "value",
) -> bytes:
    """
    Validate a hex string and decode it to exactly ``expected_length`` bytes.

    Args:
        value: Hex-encoded string (upper or lower case, no prefix)
        expected_length: Required decoded length in bytes
        field_name: Name of the field for error messages

    Returns:
        The decoded bytes

    Raises:
        ValidationError: If the value is missing, not hex, or the wrong length

    Note:
        The offending value is never included in the error message.
    """
    text = validate_string_safe(value, field_name=field_name)

    try:
        decoded = bytes.fromhex(text)
    except ValueError as e:
        raise ValidationError(f"{field_name} is not valid hexadecimal") from e

    # bytes.fromhex tolerates whitespace between byte pairs; key files do not
    if len(text) != expected_length * 2 or len(decoded) != expected_length:
        raise ValidationError(
            f"{field_name} must be {expected_length * 2} hex characters long "
            f"({expected_length} bytes). Found length: {len(decoded)}"
        )

    return decoded


def to_hex(data: bytes) -> str:
    """Encode bytes as lowercase hex."""
    return binascii.hexlify(data).decode("ascii")
