"""Error taxonomy shared by the sync core and the download pipeline."""

from pathlib import Path
from typing import Optional, Union


class PoeditorSyncError(Exception):
    """Base class for every failure the CLI turns into an exit code."""

    exit_code = 1


class ParseError(PoeditorSyncError):
    """Raised when the declaration file is missing or does not match the enum grammar."""

    exit_code = 3

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        line: Optional[int] = None
    ):
        self.reason = message
        self.path = Path(path) if path is not None else None
        self.line = line

        location = ''
        if self.path is not None:
            location = str(self.path)
        if line is not None:
            location = f"{location}:{line}" if location else f"line {line}"

        super().__init__(f"{location}: {message}" if location else message)


class TransportError(PoeditorSyncError):
    """Network-level failure talking to the translation service."""

    exit_code = 4


class RemoteRejected(PoeditorSyncError):
    """The service answered, but the answer is an error or cannot be used."""

    exit_code = 5

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(f"[{code}] {message}" if code else message)


class FileWriteError(PoeditorSyncError):
    """Destination file could not be written."""

    exit_code = 6

    def __init__(self, message: str, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")
