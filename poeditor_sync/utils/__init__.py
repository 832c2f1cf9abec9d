"""Utility modules."""

from .colors import Colors
from .config import Config, ConfigValidationError, create_default_config
from .validators import (
    is_valid_language_code,
    is_valid_swift_identifier,
    mask_secret,
)
from .logging import get_logger, configure_logging

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'create_default_config',
    'is_valid_language_code',
    'is_valid_swift_identifier',
    'mask_secret',
    'get_logger',
    'configure_logging',
]
