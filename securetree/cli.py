"""
SecureTree command line interface.

Usage:
    securetree keygen
    securetree encrypt [INPUT] [-o OUTPUT]
    securetree decrypt [INPUT] [-o OUTPUT]

INPUT defaults to stdin and OUTPUT to stdout. Key material is read from
ENCRYPTION_KEY and ENCRYPTION_IV (64 and 32 hex characters).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from securetree import __version__
from securetree.core.config import SecureConfig
from securetree.core.crypto import CodecError, KeyMaterial, TreeCodec
from securetree.core.logging import configure_root_logger

log = logging.getLogger("securetree.cli")


def _read_document(source: Optional[str]) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_document(text: str, target: Optional[str]) -> None:
    if target is None or target == "-":
        sys.stdout.write(text + "\n")
        return
    Path(target).write_text(text + "\n", encoding="utf-8")


def cmd_keygen(args: argparse.Namespace, config: SecureConfig) -> int:
    """Print fresh key material as environment assignments."""
    key_hex, nonce_hex = KeyMaterial.generate().to_hex()
    print(f"{config.codec.key_env_var}={key_hex}")
    print(f"{config.codec.nonce_env_var}={nonce_hex}")
    return 0


def cmd_encrypt(args: argparse.Namespace, config: SecureConfig) -> int:
    """Encrypt every leaf of a JSON document."""
    codec = TreeCodec.from_env(config)
    tree = json.loads(_read_document(args.input))
    _write_document(json.dumps(codec.encrypt_tree(tree), indent=args.indent), args.output)
    return 0


def cmd_decrypt(args: argparse.Namespace, config: SecureConfig) -> int:
    """Decrypt every leaf of a JSON document."""
    codec = TreeCodec.from_env(config)
    tree = json.loads(_read_document(args.input))
    _write_document(json.dumps(codec.decrypt_tree(tree), indent=args.indent), args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="securetree",
        description="Encrypt every leaf of a JSON document, keeping its shape",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    keygen = sub.add_parser("keygen", help="Generate a random key and IV")
    keygen.set_defaults(func=cmd_keygen)

    for name, func, help_text in (
        ("encrypt", cmd_encrypt, "Encrypt a JSON document"),
        ("decrypt", cmd_decrypt, "Decrypt a JSON document"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("input", nargs="?", help="Input file (default: stdin)")
        p.add_argument("-o", "--output", help="Output file (default: stdout)")
        p.add_argument("--indent", type=int, default=None, help="JSON indent")
        p.set_defaults(func=func)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = SecureConfig.get_instance()
    logging_config = config.logging
    if args.verbose:
        logging_config = replace(logging_config, level="DEBUG")
    configure_root_logger(logging_config)

    try:
        return args.func(args, config)
    except CodecError as e:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
