"""
Security module - Cryptographic constants for the tree codec.
"""

from securetree.security.constants import (
    KEY_LENGTH_BYTES,
    IV_LENGTH_BYTES,
    TAG_LENGTH_BYTES,
    WIRE_SEPARATOR,
)

__all__ = [
    "KEY_LENGTH_BYTES",
    "IV_LENGTH_BYTES",
    "TAG_LENGTH_BYTES",
    "WIRE_SEPARATOR",
]
