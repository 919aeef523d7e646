"""Resolve the ``locales`` config field into translation tables."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..utils.json_file import JsonFileError, read_json
from ..utils.logging import get_logger
from ..utils.warnings import WarningAggregator

logger = get_logger('core.resolver')

LOCALES_DOCS_URL = 'https://docs.expo.io/distribution/app-stores/#localizing-your-ios-app'

TranslationTable = Dict[str, str]
ResolvedLocales = Dict[str, TranslationTable]
LocaleSpec = Dict[str, Union[str, TranslationTable]]


def get_locales(config: Any) -> Optional[LocaleSpec]:
    """
    Return the raw ``locales`` field of a config, or None when unset.

    Accepts a Config object or a plain dict (``app.json`` contents).
    """
    if isinstance(config, dict):
        locales = config.get('locales')
    else:
        locales = getattr(config, 'locales', None)
    return locales


def get_resolved_locales(
    project_root: Union[str, Path],
    locales: LocaleSpec,
    warnings: WarningAggregator
) -> ResolvedLocales:
    """
    Resolve every locale into a translation table.

    Inline tables are copied as-is. String values are JSON files relative
    to project_root; a file that cannot be loaded is left out of the result
    and reported once on warnings under ``locales-<code>``.

    Args:
        project_root: Base directory for locale file paths
        locales: Locale code -> inline table or file path
        warnings: Collector for per-locale load failures

    Returns:
        Locale code -> translation table
    """
    project_root = Path(project_root)
    resolved: ResolvedLocales = {}

    for lang, value in locales.items():
        if not isinstance(value, str):
            resolved[lang] = value
            continue

        try:
            resolved[lang] = read_json(project_root / value)
        except JsonFileError as e:
            logger.debug(f"Locale {lang}: {e}")
            warnings.add_warning_ios(
                f'locales-{lang}',
                f'Failed to parse JSON of locale file for language: {lang}',
                LOCALES_DOCS_URL,
            )
        else:
            logger.debug(f"Locale {lang}: loaded {len(resolved[lang])} keys from {value}")

    return resolved
