"""
Utils module - Utility functions and helpers.

This module contains validation helpers used by the key material layer.
"""

from securetree.utils.validators import (
    ValidationError,
    validate_hex_bytes,
    validate_string_safe,
)

__all__ = [
    "ValidationError",
    "validate_hex_bytes",
    "validate_string_safe",
]
