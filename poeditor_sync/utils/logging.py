"""Logging setup for poeditor-sync.

Library modules log through ``logging.getLogger(__name__)`` and never
print. Their records propagate to the ``poeditor_sync`` logger, which the
CLI configures once per run:

- console handler on stderr (WARNING by default, DEBUG with --verbose,
  ERROR with --quiet), colored unless --short-output is given
- optional plain-text file handler (--log-file) that records everything
- API tokens are masked in every record before it is emitted
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Set

from .colors import Colors
from .validators import mask_secret

ROOT_LOGGER_NAME = 'poeditor_sync'

CONSOLE_FORMAT = '%(message)s'
FILE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the whole line by level."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.OKCYAN,
        logging.INFO: Colors.OKGREEN,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.FAIL,
        logging.CRITICAL: Colors.FAIL + Colors.BOLD,
    }

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_colors:
            return message
        return f"{self.LEVEL_COLORS.get(record.levelno, '')}{message}{Colors.ENDC}"


class SecretFilter(logging.Filter):
    """Replaces registered secrets with their masked form."""

    def __init__(self):
        super().__init__()
        self.secrets: Set[str] = set()

    def add(self, secret: Optional[str]):
        # Very short values would mask unrelated text
        if secret and len(secret) > 3:
            self.secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        message = record.getMessage()
        masked = message
        for secret in self.secrets:
            masked = masked.replace(secret, mask_secret(secret))

        if masked != message:
            record.msg = masked
            record.args = ()
        return True


def console_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the --verbose / --quiet flags to a console log level; quiet wins."""
    if quiet:
        return logging.ERROR
    if verbose:
        return logging.DEBUG
    return logging.WARNING


class Logger:
    """
    Singleton owner of the ``poeditor_sync`` logger and its handlers.

    ``configure()`` may be called repeatedly; the console handler is
    replaced each time and the file handler only when a new file is given.
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

        self._logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.handlers = []

        self._secret_filter = SecretFilter()
        self._console_handler = self._console(logging.WARNING, use_colors=True)
        self._file_handler: Optional[logging.FileHandler] = None
        self._logger.addHandler(self._console_handler)

        Logger._initialized = True

    def _console(self, level: int, use_colors: bool) -> logging.StreamHandler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(ColoredFormatter(fmt=CONSOLE_FORMAT, use_colors=use_colors))
        handler.addFilter(self._secret_filter)
        return handler

    def _file(self, file_path: Path) -> logging.FileHandler:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.FileHandler(file_path, encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        handler.addFilter(self._secret_filter)
        return handler

    def configure(
        self,
        verbose: bool = False,
        quiet: bool = False,
        log_file: Optional[Path] = None,
        use_colors: bool = True
    ) -> None:
        """
        Configure console verbosity and the optional log file.

        Args:
            verbose: Show DEBUG records on the console
            quiet: Show only ERROR records on the console
            log_file: Also write every record to this file
            use_colors: Color console records by level
        """
        self._logger.removeHandler(self._console_handler)
        self._console_handler.close()
        self._console_handler = self._console(console_level(verbose, quiet), use_colors)
        self._logger.addHandler(self._console_handler)

        if log_file:
            if self._file_handler:
                self._logger.removeHandler(self._file_handler)
                self._file_handler.close()
            self._file_handler = self._file(Path(log_file))
            self._logger.addHandler(self._file_handler)

    def mask(self, *secrets: str) -> None:
        """Mask these values (e.g. the API token) in every record from now on."""
        for secret in secrets:
            self._secret_filter.add(secret)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Return the package logger, or a child named ``poeditor_sync.<name>``."""
        if not name:
            return self._logger
        if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
            return logging.getLogger(name)
        return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')

    def debug(self, msg: str, *args, **kwargs) -> None:
        self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self._logger.error(msg, *args, **kwargs)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def configure_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """Configure the global logger; see ``Logger.configure``."""
    get_logger().configure(
        verbose=verbose,
        quiet=quiet,
        log_file=log_file,
        use_colors=use_colors
    )


def reset_logger() -> None:
    """Drop handlers and the singleton (mainly for testing)."""
    global _logger
    if _logger is not None:
        for handler in _logger._logger.handlers[:]:
            handler.close()
            _logger._logger.removeHandler(handler)
    _logger = None
    Logger._instance = None
    Logger._initialized = False
