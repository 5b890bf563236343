"""
Shape-Preserving Tree Codec
===========================

Walks a JSON-shaped tree (dicts and lists nested to any depth) and encrypts
every scalar leaf with a ValueCodec, leaving the shape untouched.

Invariants:
    - Same key set and key order for every mapping
    - Same length and order for every list
    - Only leaves change: scalar -> wire string on encrypt,
      wire string -> scalar on decrypt

Limits:
    - Traversal is plain recursion; very deep trees raise RecursionError
    - Cyclic structures are not supported and will not terminate
    - Any leaf failure aborts the whole tree (no partial results)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from securetree.core.crypto.key_material import KeyMaterial
from securetree.core.crypto.value_codec import Scalar, ValueCodec
from securetree.security.constants import ERROR_PREVIEW_CHARS

Tree = Union[Scalar, dict[str, "Tree"], list["Tree"]]


class TreeCodec:
    """
    Encrypts and decrypts every leaf of a value tree.

    Usage:
        codec = TreeCodec(key_hex, nonce_hex)
        encrypted = codec.encrypt_tree({"name": "A", "age": 42})
        assert codec.decrypt_tree(encrypted) == {"name": "A", "age": 42}

    Raises:
        ConfigurationError: At construction, if the key or nonce is invalid
    """

    __slots__ = ("_values", "_log")

    def __init__(
        self,
        key_hex: Any,
        nonce_hex: Any,
        preview_chars: int = ERROR_PREVIEW_CHARS,
    ) -> None:
        self._bind(ValueCodec(KeyMaterial(key_hex, nonce_hex), preview_chars))

    @classmethod
    def from_material(
        cls,
        material: KeyMaterial,
        preview_chars: int = ERROR_PREVIEW_CHARS,
    ) -> TreeCodec:
        """Build a codec that shares already-validated key material."""
        codec = cls.__new__(cls)
        codec._bind(ValueCodec(material, preview_chars))
        return codec

    def _bind(self, values: ValueCodec) -> None:
        self._values = values
        self._log = logging.getLogger("securetree.codec")

    @classmethod
    def from_env(
        cls,
        config: Optional[Any] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> TreeCodec:
        """
        Build a codec from key material held in environment variables.

        Args:
            config: SecureConfig naming the variables (global instance if None)
            environ: Mapping to read from (os.environ if None)

        Raises:
            ConfigurationError: If a variable is unset or invalid
        """
        from securetree.core.config import SecureConfig, load_key_material_from_env

        config = config or SecureConfig.get_instance()
        material = load_key_material_from_env(config, environ)
        return cls.from_material(material, config.codec.max_preview_chars)

    @property
    def material(self) -> KeyMaterial:
        return self._values.material

    def encrypt_tree(self, value: Tree) -> Tree:
        """
        Return a copy of ``value`` with every scalar leaf encrypted.

        Raises:
            TypeError: If a leaf is not a tree scalar
            EncryptionError: If any leaf fails to encrypt
        """
        self._log.debug("Encrypting %s tree", type(value).__name__)
        return self._encrypt_node(value)

    def decrypt_tree(self, value: Tree) -> Tree:
        """
        Return a copy of ``value`` with every wire-string leaf decrypted.

        Strings without the wire shape and non-string scalars pass through.

        Raises:
            DecryptionError: If any wire-string leaf fails to decrypt
        """
        self._log.debug("Decrypting %s tree", type(value).__name__)
        return self._decrypt_node(value)

    encrypt = encrypt_tree
    decrypt = decrypt_tree

    def encrypt_json(self, document: str) -> str:
        """Encrypt every leaf of a JSON document and serialize the result."""
        return json.dumps(self.encrypt_tree(json.loads(document)))

    def decrypt_json(self, document: str) -> str:
        """Decrypt every leaf of a JSON document and serialize the result."""
        return json.dumps(self.decrypt_tree(json.loads(document)))

    def _encrypt_node(self, node: Any) -> Any:
        if isinstance(node, Mapping):
            return {key: self._encrypt_node(item) for key, item in node.items()}
        if isinstance(node, (list, tuple)):
            return [self._encrypt_node(item) for item in node]
        return self._values.encrypt(node)

    def _decrypt_node(self, node: Any) -> Any:
        if isinstance(node, Mapping):
            return {key: self._decrypt_node(item) for key, item in node.items()}
        if isinstance(node, (list, tuple)):
            return [self._decrypt_node(item) for item in node]
        if isinstance(node, str):
            return self._values.decrypt(node)
        # None, bool and numbers were never produced as ciphertext
        return node

    def __repr__(self) -> str:
        return f"TreeCodec({self._values.material!r})"
