"""Logging setup for lproj-sync.

Library modules log through ``get_logger('core.resolver')``-style loggers and never
configure handlers themselves; the CLI calls ``configure_logging`` once
with the user's flags.
"""

import logging
import sys
from typing import Optional
from pathlib import Path
from .colors import Colors

LOGGER_NAME = 'lproj_sync'

CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """
    Console formatter coloring each record by level.

    Colors are looked up on ``Colors`` per record, so ``Colors.disable()``
    also affects handlers created earlier.
    """

    LEVEL_COLORS = {
        logging.DEBUG: 'OKCYAN',
        logging.INFO: 'OKGREEN',
        logging.WARNING: 'WARNING',
        logging.ERROR: 'FAIL',
        logging.CRITICAL: 'FAIL',
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_colors:
            return message

        color = getattr(Colors, self.LEVEL_COLORS.get(record.levelno, ''), '')
        if record.levelno >= logging.CRITICAL:
            color += Colors.BOLD
        return f"{color}{message}{Colors.ENDC}"


class Logger:
    """
    Owner of the handlers on the ``lproj_sync`` logger.

    One instance exists per process. The console handler always exists;
    a file handler is added when a log file is configured and replaced
    when another one is.
    """

    _instance: Optional['Logger'] = None
    _initialized: bool = False

    def __new__(cls) -> 'Logger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Logger._initialized:
            return

        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._console_handler = self._console(logging.INFO, use_colors=True)
        self._logger.addHandler(self._console_handler)
        self._file_handler: Optional[logging.FileHandler] = None

        Logger._initialized = True

    @staticmethod
    def _console(level: int, use_colors: bool) -> logging.StreamHandler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, use_colors=use_colors))
        return handler

    @staticmethod
    def _file(file_path: Path) -> logging.FileHandler:
        """Debug-level handler with timestamps and no escape codes."""
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Rebuild the console handler and optionally attach a log file.

        Args:
            verbose: Show DEBUG records on the console
            quiet: Show only WARNING and above (takes precedence over verbose)
            log_file: Also write every record to this file
            use_colors: Color console records by level
        """
        if quiet:
            level = logging.WARNING
        elif verbose:
            level = logging.DEBUG
        else:
            level = logging.INFO

        self._logger.removeHandler(self._console_handler)
        self._console_handler = self._console(level, use_colors)
        self._logger.addHandler(self._console_handler)

        if log_file:
            self._close_file_handler()
            self._file_handler = self._file(Path(log_file))
            self._logger.addHandler(self._file_handler)

    def _close_file_handler(self) -> None:
        if self._file_handler is None:
            return
        self._logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """``lproj_sync`` itself, or its ``lproj_sync.<name>`` child."""
        if name:
            return logging.getLogger(f'{LOGGER_NAME}.{name}')
        return self._logger

    def close(self) -> None:
        """Detach and close every handler."""
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)
        self._file_handler = None


_logger: Optional[Logger] = None


def get_root_logger() -> Logger:
    """Return the process-wide Logger, creating it on first use."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Module logger under the ``lproj_sync`` namespace."""
    return get_root_logger().get_logger(name)


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """Apply CLI logging flags (see ``Logger.configure``)."""
    get_root_logger().configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Drop the global Logger and its handlers (used between tests)."""
    global _logger
    if _logger is not None:
        _logger.close()
    _logger = None
    Logger._instance = None
    Logger._initialized = False
