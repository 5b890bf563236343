from __future__ import annotations

import pytest

from securetree.core.crypto import ConfigurationError, KeyMaterial

VALID_KEY = "00112233445566778899aabbccddeeff" * 2
VALID_NONCE = "0f1e2d3c4b5a69788796a5b4c3d2e1f0"


def test_valid_material_exposes_bytes():
    material = KeyMaterial(VALID_KEY, VALID_NONCE)

    assert material.key == bytes.fromhex(VALID_KEY)
    assert material.nonce == bytes.fromhex(VALID_NONCE)
    assert len(material.key) == 32
    assert len(material.nonce) == 16


def test_uppercase_hex_accepted():
    material = KeyMaterial(VALID_KEY.upper(), VALID_NONCE.upper())
    assert material.key == bytes.fromhex(VALID_KEY)


@pytest.mark.parametrize(
    "key_hex, nonce_hex",
    [
        (VALID_KEY[:-1], VALID_NONCE),          # 63 hex chars
        (VALID_KEY[:-2], VALID_NONCE),          # 31 bytes
        (VALID_KEY + "00", VALID_NONCE),        # 33 bytes
        ("zz" * 32, VALID_NONCE),               # not hex
        (VALID_KEY, ""),                        # empty nonce
        (VALID_KEY, VALID_NONCE[:-2]),          # 15-byte nonce
        (VALID_KEY, VALID_NONCE * 2),           # 32-byte nonce
        (None, VALID_NONCE),                    # missing key
        (VALID_KEY, None),                      # missing nonce
        (bytes.fromhex(VALID_KEY), VALID_NONCE),  # not a string
        (VALID_KEY, 12345),
        (" ".join(VALID_KEY[i:i + 2] for i in range(0, 64, 2)), VALID_NONCE),
    ],
)
def test_invalid_material_rejected(key_hex, nonce_hex):
    with pytest.raises(ConfigurationError):
        KeyMaterial(key_hex, nonce_hex)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        KeyMaterial("", VALID_NONCE)


def test_error_message_does_not_leak_key():
    bad_key = VALID_KEY[:-1]
    with pytest.raises(ConfigurationError) as excinfo:
        KeyMaterial(bad_key, VALID_NONCE)

    assert bad_key not in str(excinfo.value)
    assert "64 hex characters" in str(excinfo.value)


def test_material_is_immutable():
    material = KeyMaterial(VALID_KEY, VALID_NONCE)

    with pytest.raises(AttributeError):
        material._key = b"\x00" * 32
    with pytest.raises(AttributeError):
        material.key = b"\x00" * 32
    with pytest.raises(AttributeError):
        del material._nonce

    assert material.key == bytes.fromhex(VALID_KEY)


def test_repr_hides_key_bytes():
    material = KeyMaterial(VALID_KEY, VALID_NONCE)
    text = repr(material)

    assert VALID_KEY not in text
    assert VALID_NONCE not in text
    assert "key_len=32" in text
    assert "nonce_len=16" in text


def test_generate_and_to_hex():
    first = KeyMaterial.generate()
    second = KeyMaterial.generate()

    key_hex, nonce_hex = first.to_hex()
    assert len(key_hex) == 64
    assert len(nonce_hex) == 32
    assert KeyMaterial(key_hex, nonce_hex) == first
    assert first != second
