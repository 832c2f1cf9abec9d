"""ANSI color codes for terminal output."""


class Colors:
    """ANSI color codes; ``Colors.disable()`` switches to plain text for --short-output."""

    HEADER = '\033[95m'
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

    enabled = True

    @classmethod
    def disable(cls):
        """Render every helper as plain text."""
        cls.enabled = False

    @classmethod
    def enable(cls):
        cls.enabled = True

    @classmethod
    def _wrap(cls, code: str, text: str) -> str:
        if not cls.enabled:
            return text
        return f"{code}{text}{cls.ENDC}"

    @classmethod
    def success(cls, text: str) -> str:
        """Return text in green color."""
        return cls._wrap(cls.OKGREEN, text)

    @classmethod
    def error(cls, text: str) -> str:
        """Return text in red color."""
        return cls._wrap(cls.FAIL, text)

    @classmethod
    def warning(cls, text: str) -> str:
        """Return text in yellow color."""
        return cls._wrap(cls.WARNING, text)

    @classmethod
    def info(cls, text: str) -> str:
        """Return text in cyan color."""
        return cls._wrap(cls.OKCYAN, text)

    @classmethod
    def highlight(cls, text: str) -> str:
        """Return text in magenta, used for settings and term lists."""
        return cls._wrap(cls.HEADER, text)

    @classmethod
    def bold(cls, text: str) -> str:
        """Return text in bold."""
        return cls._wrap(cls.BOLD, text)
