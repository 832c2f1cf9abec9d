"""Export download module - fetch a compiled translation file."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..core.events import FINISHED, STARTED, PhaseEvent, PhaseListener, emit
from ..core.file_manager import LocalizationFileWriter
from ..core.term_store import ExportFormat, RemoteTermStore

logger = logging.getLogger(__name__)


class ExportPhase:
    """Phase names, in execution order."""
    REQUEST = "request"
    DOWNLOAD = "download"
    WRITE = "write"


@dataclass(frozen=True)
class WrittenFile:
    """A downloaded export that landed on disk."""
    path: Path
    size: int
    url: str
    export_format: ExportFormat
    language: str


class ExportDownloader:
    """
    Requests an export from the service and writes it locally.

    request -> download -> write. Every error propagates; the destination
    is only touched by the final atomic rename.
    """

    def __init__(
        self,
        store: RemoteTermStore,
        writer: Optional[LocalizationFileWriter] = None,
        listener: Optional[PhaseListener] = None
    ):
        self.store = store
        self.writer = writer or LocalizationFileWriter()
        self.listener = listener

    def run(
        self,
        language: str,
        export_format: ExportFormat,
        destination: Union[str, Path]
    ) -> WrittenFile:
        """
        Download the ``language`` export in ``export_format`` to ``destination``.

        Args:
            language: Language code to export
            export_format: Export file format
            destination: File path the export is written to (overwritten if present)

        Returns:
            WrittenFile

        Raises:
            TransportError: Export could not be generated or downloaded
            RemoteRejected: Service returned an error response
            FileWriteError: Destination could not be written
        """
        destination = Path(destination)

        emit(self.listener, PhaseEvent(ExportPhase.REQUEST, STARTED, detail=language))
        url = self.store.request_export(language, export_format)
        logger.info("Download url is %s", url)
        emit(self.listener, PhaseEvent(ExportPhase.REQUEST, FINISHED, detail=url))

        emit(self.listener, PhaseEvent(ExportPhase.DOWNLOAD, STARTED, detail=language))
        data = self.store.fetch_export(url)
        logger.info("Downloaded %s localization (%d bytes)", language, len(data))
        emit(self.listener, PhaseEvent(ExportPhase.DOWNLOAD, FINISHED, count=len(data)))

        emit(self.listener, PhaseEvent(ExportPhase.WRITE, STARTED, detail=str(destination)))
        written_path = self.writer.write_bytes(destination, data)
        written = WrittenFile(
            path=written_path,
            size=len(data),
            url=url,
            export_format=export_format,
            language=language,
        )
        logger.info("File successfully written at path %s", written_path)
        emit(self.listener, PhaseEvent(ExportPhase.WRITE, FINISHED, count=len(data),
                                       result=written, detail=str(written_path)))

        return written
