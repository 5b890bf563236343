"""
Core module - Contains configuration, logging, and the tree codec.
"""

from securetree.core.config import SecureConfig, load_key_material_from_env
from securetree.core.logging import get_secure_logger, SecureLogFilter

__all__ = [
    "SecureConfig",
    "load_key_material_from_env",
    "get_secure_logger",
    "SecureLogFilter",
]
