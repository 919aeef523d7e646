"""InfoPlist.strings serialization."""

from pathlib import Path
from typing import Dict

INFO_PLIST_STRINGS = 'InfoPlist.strings'


def to_strings(table: Dict[str, str]) -> str:
    """
    Serialize a translation table in the .strings line format.

    Format: key = "value";  (one line per key, table order, no trailing newline)

    Keys and values are written as given; the app config owns their content.
    """
    return '\n'.join(f'{key} = "{value}";' for key, value in table.items())


def write_strings_file(file_path: Path, table: Dict[str, str]) -> None:
    """Overwrite file_path with the serialized table."""
    file_path.write_text(to_strings(table), encoding='utf-8')
