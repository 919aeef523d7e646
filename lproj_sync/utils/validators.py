"""Validation utilities."""

import re

# en, fil, pt-BR, zh-Hans, zh-Hant-TW, en_GB, es-419
_LPROJ_NAME = re.compile(r'[a-z]{2,3}(?:[-_](?:[A-Z][a-z]{3}|[A-Z]{2}|\d{3}))*')


def is_valid_locale_code(code: str) -> bool:
    """
    Check whether a locale code is usable as an ``.lproj`` directory name.

    Accepts ISO 639 language codes with optional script and region
    subtags (``-`` or ``_`` separated), plus Xcode's ``Base``.

    Examples: en, tr, pt-BR, zh-Hans, en_GB, es-419, Base
    """
    if not code or not isinstance(code, str):
        return False

    if code == 'Base':
        return True

    return bool(_LPROJ_NAME.fullmatch(code))


def is_translation_table(value) -> bool:
    """Check that a value is a flat mapping of string keys to string values."""
    if not isinstance(value, dict):
        return False

    return all(isinstance(k, str) and isinstance(v, str) for k, v in value.items())
