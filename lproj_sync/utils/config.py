"""Configuration loading for lproj-sync."""

import json
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any, Union
from dataclasses import dataclass, field

from .validators import is_valid_locale_code, is_translation_table

# Looked up in order when no config path is given
CONFIG_FILENAMES = ('app.json', '.lproj-sync.yml', '.lproj-sync.yaml')

LocaleSpec = Dict[str, Union[str, Dict[str, str]]]


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class Config:
    """
    App configuration.

    Only the fields lproj-sync reads are kept; everything else in
    ``app.json`` is ignored.
    """
    name: str = "Unnamed App"
    # locale code -> inline {key: value} table, or a JSON path relative to the project root
    locales: Optional[LocaleSpec] = None
    source_path: Optional[Path] = field(default=None, compare=False)

    @property
    def project_root(self) -> Path:
        """Directory the config was loaded from (cwd for in-memory configs)."""
        if self.source_path is not None:
            return self.source_path.parent
        return Path.cwd()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source_path: Optional[Path] = None) -> 'Config':
        """Build a config from parsed data, unwrapping an ``expo`` object."""
        if isinstance(data.get('expo'), dict):
            data = data['expo']

        return cls(
            name=data.get('name', cls.name),
            locales=data.get('locales'),
            source_path=source_path,
        )

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from ``app.json`` or a YAML file.

        Args:
            config_path: Explicit file; when None the current directory is
                searched for CONFIG_FILENAMES

        Returns:
            Loaded config, or a default config when nothing is found
        """
        if config_path is None:
            config_path = find_config_file(Path.cwd())

            if config_path is None:
                return cls()

        config_path = Path(config_path)
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)

        data = data or {}
        if not isinstance(data, dict):
            raise ConfigValidationError([f"{config_path.name}: top-level value must be a mapping"])

        return cls.from_dict(data, source_path=config_path.resolve())

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'name': self.name,
            'locales': self.locales,
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / '.lproj-sync.yml'

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    def validate(
        self,
        raise_on_error: bool = False,
        project_root: Optional[Path] = None
    ) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors
            project_root: Base for locale file paths (default: self.project_root)

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if self.locales is None:
            return errors, warnings

        if not isinstance(self.locales, dict):
            errors.append(
                f"locales must be a mapping of locale code to table or file path, "
                f"got {type(self.locales).__name__}"
            )
            if raise_on_error:
                raise ConfigValidationError(errors)
            return errors, warnings

        root = project_root or self.project_root

        for code, value in self.locales.items():
            if not isinstance(code, str):
                # YAML reads unquoted `no:` (Norwegian) as a boolean
                errors.append(f"Locale code {code!r} must be a string; quote it in YAML")
                continue

            if not is_valid_locale_code(code):
                warnings.append(ConfigValidationWarning(
                    f"Locale code '{code}' does not look like an .lproj name "
                    f"(e.g., 'en', 'pt-BR', 'zh-Hans')"
                ))

            if isinstance(value, str):
                if not (root / value).is_file():
                    warnings.append(ConfigValidationWarning(
                        f"Locale file for '{code}' does not exist: {value}"
                    ))
            elif isinstance(value, dict):
                if not is_translation_table(value):
                    bad_keys = [
                        repr(key) for key, text in value.items()
                        if not isinstance(key, str) or not isinstance(text, str)
                    ]
                    errors.append(
                        f"locales.{code}: entries must map string keys to string values "
                        f"({', '.join(bad_keys)})"
                    )
            else:
                errors.append(
                    f"locales.{code} must be a table or a file path, got {type(value).__name__}"
                )

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings


def find_config_file(directory: Path) -> Optional[Path]:
    """Return the first CONFIG_FILENAMES entry present in directory."""
    for filename in CONFIG_FILENAMES:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def create_default_config() -> Config:
    """Create a sample configuration with one inline locale."""
    return Config(
        name="MyApp",
        locales={
            'en': {
                'CFBundleDisplayName': 'MyApp',
            },
        },
    )
