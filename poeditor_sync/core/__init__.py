"""Core modules: errors, remote term store and file writing."""

from .errors import (
    PoeditorSyncError,
    ParseError,
    TransportError,
    RemoteRejected,
    FileWriteError,
)
from .events import PhaseEvent, PhaseListener
from .term_store import RemoteTermStore, TermCounts, ExportFormat, KeySet
from .poeditor_client import POEditorClient, create_client
from .file_manager import LocalizationFileWriter

__all__ = [
    'PoeditorSyncError',
    'ParseError',
    'TransportError',
    'RemoteRejected',
    'FileWriteError',
    'PhaseEvent',
    'PhaseListener',
    'RemoteTermStore',
    'TermCounts',
    'ExportFormat',
    'KeySet',
    'POEditorClient',
    'create_client',
    'LocalizationFileWriter',
]
