"""Xcode project file support."""

from .plist import PlistParseError
from .project import (
    XcodeProject,
    XcodeProjectError,
    PBXGroup,
    GroupChild,
    get_project_name,
    get_pbxproj,
    get_pbxproj_path,
    ensure_group_recursively,
    add_file_to_group,
)

__all__ = [
    'PlistParseError',
    'XcodeProject',
    'XcodeProjectError',
    'PBXGroup',
    'GroupChild',
    'get_project_name',
    'get_pbxproj',
    'get_pbxproj_path',
    'ensure_group_recursively',
    'add_file_to_group',
]
