"""Locale resolution and iOS project synchronization."""

from .resolver import get_locales, get_resolved_locales
from .synchronizer import set_locales, get_supporting_directory
from .strings_file import to_strings, write_strings_file, INFO_PLIST_STRINGS

__all__ = [
    'get_locales',
    'get_resolved_locales',
    'set_locales',
    'get_supporting_directory',
    'to_strings',
    'write_strings_file',
    'INFO_PLIST_STRINGS',
]
