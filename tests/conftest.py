from __future__ import annotations

import secrets

import pytest

from securetree.core.config import SecureConfig
from securetree.core.crypto import KeyMaterial, TreeCodec, ValueCodec


@pytest.fixture
def key_hex() -> str:
    return secrets.token_hex(32)


@pytest.fixture
def nonce_hex() -> str:
    return secrets.token_hex(16)


@pytest.fixture
def material(key_hex: str, nonce_hex: str) -> KeyMaterial:
    return KeyMaterial(key_hex, nonce_hex)


@pytest.fixture
def value_codec(material: KeyMaterial) -> ValueCodec:
    return ValueCodec(material)


@pytest.fixture
def codec(key_hex: str, nonce_hex: str) -> TreeCodec:
    return TreeCodec(key_hex, nonce_hex)


@pytest.fixture(autouse=True)
def _reset_config():
    SecureConfig.reset_instance()
    yield
    SecureConfig.reset_instance()
