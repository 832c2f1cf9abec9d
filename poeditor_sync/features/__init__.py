"""Feature modules."""

from .diff import TermReconciler, Difference
from .sync import (
    SyncOrchestrator,
    SyncSummary,
    SyncPhase,
    PhaseResult,
    PhaseStatus,
    FailureKind,
    RunOutcome,
)
from .export import ExportDownloader, ExportPhase, WrittenFile

__all__ = [
    'TermReconciler',
    'Difference',
    'SyncOrchestrator',
    'SyncSummary',
    'SyncPhase',
    'PhaseResult',
    'PhaseStatus',
    'FailureKind',
    'RunOutcome',
    'ExportDownloader',
    'ExportPhase',
    'WrittenFile',
]
