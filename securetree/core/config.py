"""
Secure Configuration Module
===========================

Provides immutable, environment-aware configuration for the tree codec.

Security Features:
- Immutable configuration after initialization
- Environment variable override support (SECURETREE_ prefix)
- Key material is never read from the override namespace
- Codec construction never reads configuration itself; key material is
  loaded here and handed over already validated
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from typing import Any, Final, Mapping, Optional

from securetree.core.crypto.key_material import ConfigurationError, KeyMaterial
from securetree.security.constants import (
    DEFAULT_IV_ENV_VAR,
    DEFAULT_KEY_ENV_VAR,
    ERROR_PREVIEW_CHARS,
)


# Security Constants
_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "key", "token", "api_key",
    "private", "credential", "auth", "salt", "iv", "nonce",
})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    parts = key.lower().replace(".", "_").split("_")
    return any(sensitive in parts for sensitive in _SENSITIVE_KEYS)


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """Immutable codec configuration."""

    key_env_var: str = DEFAULT_KEY_ENV_VAR
    nonce_env_var: str = DEFAULT_IV_ENV_VAR
    max_preview_chars: int = ERROR_PREVIEW_CHARS

    def __post_init__(self) -> None:
        """Validate codec settings."""
        if not self.key_env_var or not self.nonce_env_var:
            raise ValueError("Key and nonce environment variable names are required")
        if self.key_env_var == self.nonce_env_var:
            raise ValueError("Key and nonce must be read from different variables")
        if self.max_preview_chars < 0:
            raise ValueError("max_preview_chars cannot be negative")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "WARNING"
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format: str = "%H:%M:%S"
    enable_console: bool = True

    def __post_init__(self) -> None:
        """Validate logging settings."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")


class SecureConfig:
    """
    Centralized, immutable configuration loader with environment override support.

    Usage:
        config = SecureConfig.load()
        key_var = config.codec.key_env_var
        level = config.logging.level
    """

    __slots__ = ("_codec", "_logging", "_frozen", "_config_hash")

    _instance: Optional[SecureConfig] = None

    def __init__(
        self,
        codec: Optional[CodecConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ) -> None:
        """Initialize configuration. Use SecureConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_codec", codec or CodecConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

    def _compute_hash(self) -> str:
        """Compute a hash of the configuration for integrity checking."""
        config_str = f"{self._codec}|{self._logging}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @property
    def codec(self) -> CodecConfig:
        """Get codec configuration."""
        return self._codec

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration."""
        return self._logging

    @property
    def config_hash(self) -> str:
        """Get configuration integrity hash."""
        return self._config_hash

    @classmethod
    def load(
        cls,
        env_prefix: str = "SECURETREE",
        environ: Optional[Mapping[str, str]] = None,
    ) -> SecureConfig:
        """
        Load configuration with environment variable overrides.

        Environment variables should be prefixed with SECURETREE_ and use
        double underscores for nested values.

        Examples:
            SECURETREE_LOGGING__LEVEL=DEBUG
            SECURETREE_LOGGING__ENABLE_CONSOLE=false
            SECURETREE_CODEC__MAX_PREVIEW_CHARS=20

        Args:
            env_prefix: Prefix for environment variables (default: SECURETREE)
            environ: Mapping to read from (default: os.environ)

        Returns:
            Configured SecureConfig instance
        """
        env_overrides = cls._parse_env_overrides(env_prefix, environ)

        codec_kwargs: dict[str, Any] = {}
        if "codec.max_preview_chars" in env_overrides:
            codec_kwargs["max_preview_chars"] = int(env_overrides["codec.max_preview_chars"])

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"].upper()
        if "logging.enable_console" in env_overrides:
            logging_kwargs["enable_console"] = env_overrides["logging.enable_console"].lower() == "true"

        return cls(
            codec=CodecConfig(**codec_kwargs) if codec_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(
        prefix: str,
        environ: Optional[Mapping[str, str]] = None,
    ) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"
        source = os.environ if environ is None else environ

        for key, value in source.items():
            if key.startswith(prefix_upper):
                # Convert SECURETREE_SECTION__KEY to section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                # SECURITY: Skip sensitive keys from environment
                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> SecureConfig:
        """
        Get or create the singleton configuration instance.

        Returns:
            The global SecureConfig instance
        """
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def __repr__(self) -> str:
        """Safe string representation without sensitive data."""
        return f"SecureConfig(hash={self._config_hash})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if hasattr(self, "_frozen") and self._frozen:
            raise AttributeError("SecureConfig is immutable after initialization")
        super().__setattr__(name, value)


def load_key_material_from_env(
    config: Optional[SecureConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> KeyMaterial:
    """
    Read the hex key and nonce named by the codec configuration.

    Args:
        config: Configuration naming the variables (global instance if None)
        environ: Mapping to read from (os.environ if None)

    Returns:
        Validated KeyMaterial

    Raises:
        ConfigurationError: If either variable is unset or invalid
    """
    config = config or SecureConfig.get_instance()
    source = os.environ if environ is None else environ

    key_var = config.codec.key_env_var
    nonce_var = config.codec.nonce_env_var
    key_hex = source.get(key_var)
    nonce_hex = source.get(nonce_var)

    if not key_hex or not nonce_hex:
        raise ConfigurationError(
            f"Configuration Error: {key_var} and/or {nonce_var} environment "
            "variables are not set. Cannot proceed."
        )

    return KeyMaterial(key_hex, nonce_hex)
