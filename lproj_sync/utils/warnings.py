"""Collected, non-fatal configuration warnings."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .colors import Colors
from .logging import get_logger

logger = get_logger('warnings')


@dataclass
class ConfigWarning:
    """A warning recorded while applying configuration."""
    platform: str  # ios | android
    tag: str
    text: str
    link: Optional[str] = None

    def format(self) -> str:
        """Render the warning for console display."""
        line = f"{Colors.warning('⚠️')}  [{self.platform}] {Colors.bold(self.tag)}: {self.text}"
        if self.link:
            line += f"\n   {Colors.dim(self.link)}"
        return line


class WarningAggregator:
    """
    Collects warnings during a run for display at the end.

    A warning is keyed by (platform, tag); recording the same key again
    keeps the first entry, so a failing locale shows up once no matter
    how many times it is reported.
    """

    def __init__(self):
        self._warnings: Dict[Tuple[str, str], ConfigWarning] = {}

    def add_warning(self, platform: str, tag: str, text: str, link: Optional[str] = None) -> bool:
        """
        Record a warning.

        Returns:
            True if the warning is new, False if the key was already recorded
        """
        key = (platform, tag)
        if key in self._warnings:
            return False

        self._warnings[key] = ConfigWarning(platform=platform, tag=tag, text=text, link=link)
        logger.debug(f"Recorded warning [{platform}] {tag}: {text}")
        return True

    def add_warning_ios(self, tag: str, text: str, link: Optional[str] = None) -> bool:
        return self.add_warning('ios', tag, text, link)

    def add_warning_android(self, tag: str, text: str, link: Optional[str] = None) -> bool:
        return self.add_warning('android', tag, text, link)

    def get(self, tag: str, platform: str = 'ios') -> Optional[ConfigWarning]:
        return self._warnings.get((platform, tag))

    @property
    def has_warnings(self) -> bool:
        return bool(self._warnings)

    @property
    def warnings(self) -> List[ConfigWarning]:
        return list(self._warnings.values())

    def flush(self) -> List[ConfigWarning]:
        """Return all recorded warnings and clear the collector."""
        drained = list(self._warnings.values())
        self._warnings.clear()
        return drained

    def __len__(self) -> int:
        return len(self._warnings)
