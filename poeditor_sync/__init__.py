"""
POEditor Sync
=============

Keeps the terms of a POEditor project in step with a Swift localization
enum and downloads compiled translation exports.

Usage:
    from poeditor_sync import (
        SyncOrchestrator, SwiftEnumExtractor, ExtractOptions, POEditorClient
    )

    client = POEditorClient(token='...', project_id='12345')
    orchestrator = SyncOrchestrator(SwiftEnumExtractor(), client, delete_removals=True)
    summary = orchestrator.run('Sources/I18n.swift', ExtractOptions(enum_name='I18n'), 'en')
    print(summary.outcome)

CLI:
    poeditor-sync init
    poeditor-sync upload --path Sources/I18n.swift --delete-removals
    poeditor-sync download --destination Resources/en.lproj/Localizable.strings
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.errors import (
    PoeditorSyncError,
    ParseError,
    TransportError,
    RemoteRejected,
    FileWriteError,
)
from .core.term_store import RemoteTermStore, TermCounts, ExportFormat
from .core.poeditor_client import POEditorClient
from .core.file_manager import LocalizationFileWriter

# Extractors
from .frameworks.base import BaseKeyExtractor, ExtractOptions
from .frameworks.swift import SwiftEnumExtractor

# Features
from .features.diff import TermReconciler, Difference
from .features.sync import SyncOrchestrator, SyncSummary, PhaseResult, PhaseStatus, RunOutcome
from .features.export import ExportDownloader, WrittenFile

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'PoeditorSyncError',
    'ParseError',
    'TransportError',
    'RemoteRejected',
    'FileWriteError',
    'RemoteTermStore',
    'TermCounts',
    'ExportFormat',
    'POEditorClient',
    'LocalizationFileWriter',
    'BaseKeyExtractor',
    'ExtractOptions',
    'SwiftEnumExtractor',
    'TermReconciler',
    'Difference',
    'SyncOrchestrator',
    'SyncSummary',
    'PhaseResult',
    'PhaseStatus',
    'RunOutcome',
    'ExportDownloader',
    'WrittenFile',
]
