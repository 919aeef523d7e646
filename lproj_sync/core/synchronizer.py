"""Write InfoPlist.strings per locale and register them in the Xcode project."""

from pathlib import Path
from typing import Any, Union

from .resolver import get_locales, get_resolved_locales
from .strings_file import INFO_PLIST_STRINGS, write_strings_file
from ..utils.logging import get_logger
from ..utils.warnings import WarningAggregator
from ..xcode.project import (
    add_file_to_group,
    ensure_group_recursively,
    get_pbxproj,
    get_project_name,
)

logger = get_logger('core.synchronizer')


def get_supporting_directory(project_root: Union[str, Path], project_name: str) -> Path:
    """``<root>/ios/<ProjectName>/Supporting``."""
    return Path(project_root) / 'ios' / project_name / 'Supporting'


def set_locales(
    config: Any,
    project_root: Union[str, Path],
    warnings: WarningAggregator
) -> None:
    """
    Project the config's locales into the iOS project.

    For each resolved locale, ``Supporting/<lang>.lproj/InfoPlist.strings``
    is rewritten and referenced from the ``<Project>/Supporting/<lang>.lproj``
    group unless the group already lists it. The Xcode project is saved
    once at the end, even if no locale resolved.

    Args:
        config: Config object or ``app.json`` dict
        project_root: App directory containing ``ios/``
        warnings: Collector for locale files that fail to load; the caller
            drains it after the run

    Raises:
        OSError: Creating a directory or writing a file failed
        XcodeProjectError: Project missing or malformed
        PlistParseError: ``project.pbxproj`` is not a valid property list
    """
    locales = get_locales(config)
    if not locales:
        logger.debug("No locales configured, skipping")
        return

    # TODO: remove stale .lproj entries once previous runs are tracked in a lock file
    locales_map = get_resolved_locales(project_root, locales, warnings)

    project = get_pbxproj(project_root)
    project_name = get_project_name(project_root)
    supporting_directory = get_supporting_directory(project_root, project_name)

    for lang, table in locales_map.items():
        lproj_dir = supporting_directory / f'{lang}.lproj'
        lproj_dir.mkdir(parents=True, exist_ok=True)

        strings_path = lproj_dir / INFO_PLIST_STRINGS
        write_strings_file(strings_path, table)
        logger.info(f"Wrote {len(table)} keys to {lang}.lproj/{INFO_PLIST_STRINGS}")

        group_path = f'{project_name}/Supporting/{lang}.lproj'
        group = ensure_group_recursively(project, group_path)

        if group is not None and group.has_child(INFO_PLIST_STRINGS):
            logger.debug(f"{INFO_PLIST_STRINGS} already in {group_path}")
            continue

        project = add_file_to_group(strings_path, group_path, project)
        logger.info(f"Added {INFO_PLIST_STRINGS} to {group_path}")

    project.save()
