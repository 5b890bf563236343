from __future__ import annotations

import io
import logging

from securetree.core.config import LoggingConfig
from securetree.core.crypto import KeyMaterial, ValueCodec
from securetree.core.logging import SecureLogFilter, configure_root_logger, get_secure_logger


def _record(msg, *args) -> logging.LogRecord:
    return logging.LogRecord("securetree.test", logging.INFO, __file__, 1, msg, args, None)


def test_filter_redacts_hex_key_material():
    material = KeyMaterial.generate()
    key_hex, nonce_hex = material.to_hex()
    record = _record(f"loaded {key_hex} and {nonce_hex}")

    assert SecureLogFilter().filter(record) is True
    assert key_hex not in record.getMessage()
    assert nonce_hex not in record.getMessage()
    assert "[REDACTED]" in record.getMessage()


def test_filter_redacts_wire_strings_in_args():
    wire = ValueCodec(KeyMaterial.generate()).encrypt("x")
    record = _record("value %s", wire)

    SecureLogFilter().filter(record)

    assert wire not in record.getMessage()


def test_filter_redacts_assignments():
    record = _record("ENCRYPTION_KEY=abc123 ok")

    SecureLogFilter().filter(record)

    assert "abc123" not in record.getMessage()
    assert "ok" in record.getMessage()


def test_filter_keeps_ordinary_messages():
    record = _record("Encrypting %s tree", "dict")

    SecureLogFilter().filter(record)

    assert record.getMessage() == "Encrypting dict tree"


def test_get_secure_logger_adds_one_filtered_handler():
    stream = io.StringIO()
    logger = get_secure_logger("securetree.test.secure", level="INFO", stream=stream)
    again = get_secure_logger("securetree.test.secure", level="INFO", stream=stream)

    assert logger is again
    assert len(logger.handlers) == 1

    logger.info("key %s", "ab" * 32)
    assert "ab" * 32 not in stream.getvalue()
    assert "[REDACTED]" in stream.getvalue()


def test_configure_root_logger():
    stream = io.StringIO()
    logger = configure_root_logger(LoggingConfig(level="DEBUG"), stream=stream)

    logging.getLogger("securetree.codec").debug("Decrypting %s tree", "list")

    assert logger.level == logging.DEBUG
    assert "Decrypting list tree" in stream.getvalue()

    quiet = configure_root_logger(LoggingConfig(enable_console=False))
    assert all(isinstance(h, logging.NullHandler) for h in quiet.handlers)
