"""
SecureTree Cryptographic Core
=============================

Shape-preserving authenticated encryption of JSON-shaped trees.

Architecture:
    1. KeyMaterial: validated, immutable AES-256 key and GCM nonce
    2. ValueCodec: one scalar <-> one "<ciphertext>.<tag>" wire string
    3. TreeCodec: recursive walk applying ValueCodec to every leaf

WARNING: Every value is encrypted under the same key and nonce.
         Equal plaintexts produce equal wire strings.
"""

from securetree.core.crypto.key_material import (
    CodecError,
    ConfigurationError,
    KeyMaterial,
)
from securetree.core.crypto.value_codec import (
    DecryptionError,
    EncryptionError,
    ValueCodec,
    looks_encrypted,
    split_wire_string,
)
from securetree.core.crypto.tree_codec import TreeCodec

__all__ = [
    "CodecError",
    "ConfigurationError",
    "DecryptionError",
    "EncryptionError",
    "KeyMaterial",
    "TreeCodec",
    "ValueCodec",
    "looks_encrypted",
    "split_wire_string",
]
