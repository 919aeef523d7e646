"""ANSI color codes for terminal output."""


class Colors:
    """ANSI color codes used by the CLI and the console log handler."""

    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'

    _CODES = ('HEADER', 'OKBLUE', 'OKCYAN', 'OKGREEN', 'WARNING', 'FAIL', 'ENDC', 'BOLD', 'DIM')
    _saved = None

    @classmethod
    def disable(cls) -> None:
        """Blank out every code (used for --no-color and non-tty output)."""
        if cls._saved is None:
            cls._saved = {name: getattr(cls, name) for name in cls._CODES}
        for name in cls._CODES:
            setattr(cls, name, '')

    @classmethod
    def enable(cls) -> None:
        """Restore the codes blanked by disable()."""
        if cls._saved is None:
            return
        for name, code in cls._saved.items():
            setattr(cls, name, code)
        cls._saved = None

    @classmethod
    def success(cls, text: str) -> str:
        """Return text in green color."""
        return f"{cls.OKGREEN}{text}{cls.ENDC}"

    @classmethod
    def error(cls, text: str) -> str:
        """Return text in red color."""
        return f"{cls.FAIL}{text}{cls.ENDC}"

    @classmethod
    def warning(cls, text: str) -> str:
        """Return text in yellow color."""
        return f"{cls.WARNING}{text}{cls.ENDC}"

    @classmethod
    def info(cls, text: str) -> str:
        """Return text in cyan color."""
        return f"{cls.OKCYAN}{text}{cls.ENDC}"

    @classmethod
    def bold(cls, text: str) -> str:
        """Return text in bold."""
        return f"{cls.BOLD}{text}{cls.ENDC}"

    @classmethod
    def dim(cls, text: str) -> str:
        """Return text dimmed (paths, links)."""
        return f"{cls.DIM}{text}{cls.ENDC}"
