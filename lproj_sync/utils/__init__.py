"""Utility modules."""

from .colors import Colors
from .config import Config, ConfigValidationError, ConfigValidationWarning, create_default_config
from .json_file import JsonFileError, read_json
from .validators import is_valid_locale_code, is_translation_table
from .warnings import WarningAggregator, ConfigWarning

__all__ = [
    'Colors',
    'Config',
    'ConfigValidationError',
    'ConfigValidationWarning',
    'create_default_config',
    'JsonFileError',
    'read_json',
    'is_valid_locale_code',
    'is_translation_table',
    'WarningAggregator',
    'ConfigWarning',
]
