"""Localization file writer with all-or-nothing semantics."""

import logging
import os
import shutil
import stat
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Union

from .errors import FileWriteError

logger = logging.getLogger(__name__)


class LocalizationFileWriter:
    """
    Writes downloaded localization files.

    Data goes to a temporary file next to the destination and is renamed
    over it only after it has been fully written and synced, so the
    destination either holds the complete new artifact or is untouched.
    """

    TEMP_PREFIX = '.poeditor-'
    TEMP_SUFFIX = '.tmp'

    def __init__(self, backup: bool = False):
        """
        Initialize the writer.

        Args:
            backup: Copy an existing destination aside before replacing it
        """
        self.backup = backup

    def write_bytes(self, destination: Union[str, Path], data: bytes) -> Path:
        """
        Atomically write ``data`` to ``destination``.

        Args:
            destination: Target file path (its directory must exist)
            data: Full file contents

        Returns:
            Resolved destination path

        Raises:
            FileWriteError: Directory missing or unwritable, or the write failed
        """
        destination = Path(destination)
        directory = destination.parent

        if not directory.is_dir():
            raise FileWriteError("Destination directory does not exist", destination)
        if destination.is_dir():
            raise FileWriteError("Destination is a directory", destination)
        if not os.access(directory, os.W_OK):
            raise FileWriteError("Destination directory is not writable", destination)

        if self.backup and destination.exists():
            self.create_backup(destination)

        try:
            fd, temp_name = tempfile.mkstemp(
                prefix=self.TEMP_PREFIX,
                suffix=self.TEMP_SUFFIX,
                dir=directory
            )
        except OSError as e:
            raise FileWriteError(f"Cannot create temporary file ({e})", destination) from e

        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(temp_path, self._target_mode(destination))
            os.replace(temp_path, destination)
        except OSError as e:
            self._discard(temp_path)
            raise FileWriteError(f"Write failed ({e})", destination) from e
        except BaseException:
            self._discard(temp_path)
            raise

        logger.debug("Wrote %d bytes to %s", len(data), destination)
        return destination.resolve()

    def create_backup(self, file_path: Path) -> Path:
        """Copy ``file_path`` to ``<stem>_backup_<timestamp><suffix>`` in the same directory."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        backup_path = file_path.parent / f"{file_path.stem}_backup_{timestamp}{file_path.suffix}"

        try:
            shutil.copy2(file_path, backup_path)
        except OSError as e:
            raise FileWriteError(f"Backup failed ({e})", backup_path) from e

        logger.info("Backup created: %s", backup_path)
        return backup_path

    @staticmethod
    def _target_mode(destination: Path) -> int:
        """Keep the mode of an existing destination; new files get 0o666 minus the umask."""
        if destination.exists():
            return stat.S_IMODE(destination.stat().st_mode)

        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

    @staticmethod
    def _discard(temp_path: Path):
        try:
            temp_path.unlink()
        except FileNotFoundError:
            pass
