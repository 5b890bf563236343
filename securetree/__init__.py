"""
SecureTree - Shape-Preserving Encryption for JSON Trees
=======================================================

Encrypts every scalar leaf of a nested dict/list structure with
AES-256-GCM while keeping keys, nesting and list order intact, and
reverses the operation.

Security Notice:
- Every value is authenticated; tampering raises DecryptionError
- Key and nonce are never logged
- One static nonce per key: equal values give equal ciphertexts
"""

__version__ = "0.1.0"

from securetree.core.config import SecureConfig
from securetree.core.crypto import (
    CodecError,
    ConfigurationError,
    DecryptionError,
    EncryptionError,
    KeyMaterial,
    TreeCodec,
    ValueCodec,
)
from securetree.core.logging import get_secure_logger

__all__ = [
    "CodecError",
    "ConfigurationError",
    "DecryptionError",
    "EncryptionError",
    "KeyMaterial",
    "SecureConfig",
    "TreeCodec",
    "ValueCodec",
    "get_secure_logger",
    "__version__",
]
