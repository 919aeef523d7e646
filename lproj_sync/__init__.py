"""
lproj-sync
==========

Projects the ``locales`` field of an app config into an iOS project:
one ``<lang>.lproj/InfoPlist.strings`` per locale, each referenced once
from the Xcode project's group tree.

Usage:
    from lproj_sync import Config, WarningAggregator, set_locales

    config = Config.from_file(Path('app.json'))
    warnings = WarningAggregator()
    set_locales(config, config.project_root, warnings)
    for warning in warnings.flush():
        print(warning.format())

CLI:
    lproj-sync resolve
    lproj-sync apply --project-root ./my-app
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.resolver import get_locales, get_resolved_locales
from .core.synchronizer import set_locales
from .core.strings_file import to_strings

# Xcode project
from .xcode.project import XcodeProject, XcodeProjectError, get_project_name
from .xcode.plist import PlistParseError

# Utilities
from .utils.config import Config, ConfigValidationError
from .utils.warnings import WarningAggregator, ConfigWarning

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'get_locales',
    'get_resolved_locales',
    'set_locales',
    'to_strings',
    'XcodeProject',
    'XcodeProjectError',
    'get_project_name',
    'PlistParseError',
    'Config',
    'ConfigValidationError',
    'WarningAggregator',
    'ConfigWarning',
]
