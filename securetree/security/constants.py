"""
Security Constants
==================

Defines the cryptographic constants shared by the tree codec.
These values fix the wire format and must not change without
re-encrypting every stored document.
"""

from typing import Final

# Encryption Settings
KEY_LENGTH_BYTES: Final[int] = 32  # 256 bits
IV_LENGTH_BYTES: Final[int] = 16  # 128 bits, as written by existing producers
TAG_LENGTH_BYTES: Final[int] = 16  # 128 bits

# Wire Format
WIRE_SEPARATOR: Final[str] = "."
TEXT_ENCODING: Final[str] = "utf-8"

# Error Reporting
ERROR_PREVIEW_CHARS: Final[int] = 50

# Environment
DEFAULT_KEY_ENV_VAR: Final[str] = "ENCRYPTION_KEY"
DEFAULT_IV_ENV_VAR: Final[str] = "ENCRYPTION_IV"
