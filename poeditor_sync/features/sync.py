"""Term sync module - reconcile the remote project with the local enum."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import AbstractSet, Callable, FrozenSet, Optional, Tuple, Union

from ..core.errors import RemoteRejected, TransportError
from ..core.events import FINISHED, STARTED, PhaseEvent, PhaseListener, emit
from ..core.term_store import RemoteTermStore, TermCounts
from ..frameworks.base import BaseKeyExtractor, ExtractOptions
from .diff import Difference, TermReconciler

logger = logging.getLogger(__name__)


class SyncPhase:
    """Phase names, in execution order."""
    EXTRACT = "extract"
    FETCH = "fetch"
    RECONCILE = "reconcile"
    DELETE = "delete"
    ADD = "add"


class PhaseStatus(Enum):
    """Outcome of a mutating phase."""
    SUCCESS = "success"
    SKIPPED_DISABLED = "skipped_disabled"  # delete_removals is off
    SKIPPED_EMPTY = "skipped_empty"        # nothing to send
    PLANNED = "planned"                    # dry run
    PARTIAL_FAILURE = "partial_failure"    # round-trip ok, counts short
    ERROR = "error"                        # transport or rejected response


class FailureKind(Enum):
    """Why a phase landed in PARTIAL_FAILURE."""
    NONE = "none"
    NONE_APPLIED = "none_applied"      # succeeded == 0
    COUNT_MISMATCH = "count_mismatch"  # 0 < succeeded != requested


class RunOutcome(Enum):
    """Terminal state of a sync run."""
    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"
    ABORTED_BY_CONFIG = "aborted_by_config"


@dataclass(frozen=True)
class PhaseResult:
    """Result of the delete or add phase."""
    phase: str
    status: PhaseStatus
    requested: int = 0
    parsed: int = 0
    succeeded: int = 0
    keys: Tuple[str, ...] = field(default_factory=tuple)
    failure: FailureKind = FailureKind.NONE
    error: Optional[Exception] = None

    @classmethod
    def from_counts(cls, phase: str, keys: Tuple[str, ...], counts: TermCounts) -> 'PhaseResult':
        """Apply the verification policy to the counts the service reported."""
        requested = len(keys)

        if counts.succeeded == 0:
            status, failure = PhaseStatus.PARTIAL_FAILURE, FailureKind.NONE_APPLIED
        elif counts.succeeded != requested:
            status, failure = PhaseStatus.PARTIAL_FAILURE, FailureKind.COUNT_MISMATCH
        else:
            status, failure = PhaseStatus.SUCCESS, FailureKind.NONE

        return cls(
            phase=phase,
            status=status,
            requested=requested,
            parsed=counts.parsed,
            succeeded=counts.succeeded,
            keys=keys,
            failure=failure,
        )

    @property
    def is_failure(self) -> bool:
        return self.status in (PhaseStatus.PARTIAL_FAILURE, PhaseStatus.ERROR)

    @property
    def is_skipped(self) -> bool:
        return self.status in (PhaseStatus.SKIPPED_DISABLED, PhaseStatus.SKIPPED_EMPTY)


@dataclass
class SyncSummary:
    """Everything a sync run observed and did."""
    language: str
    local_count: int = 0
    remote_count: int = 0
    difference: Difference = field(default_factory=Difference)
    delete: Optional[PhaseResult] = None
    add: Optional[PhaseResult] = None
    dry_run: bool = False
    aborted_reason: str = ""

    @property
    def outcome(self) -> RunOutcome:
        if self.aborted_reason:
            return RunOutcome.ABORTED_BY_CONFIG
        phases = [p for p in (self.delete, self.add) if p is not None]
        if any(p.is_failure for p in phases):
            return RunOutcome.PARTIAL_FAILURE
        return RunOutcome.SUCCESS

    @property
    def has_changes(self) -> bool:
        return not self.difference.is_empty


class SyncOrchestrator:
    """
    Drives one reconciliation run.

    extract -> fetch -> reconcile -> delete (if enabled) -> add

    Extract and fetch errors abort the run. Delete and add are attempted
    independently: a short count in one does not block the other, and the
    run reports the worst of the two. A transport or rejection error in
    either phase is re-raised once both phases have been attempted; when
    both fail, the delete error is raised from the add error.
    """

    def __init__(
        self,
        extractor: BaseKeyExtractor,
        store: RemoteTermStore,
        delete_removals: bool = False,
        dry_run: bool = False,
        reconciler: Optional[TermReconciler] = None,
        listener: Optional[PhaseListener] = None
    ):
        """
        Initialize the orchestrator.

        Args:
            extractor: Declaration file extractor
            store: Remote term store, created once per run by the caller
            delete_removals: Delete remote terms missing locally
            dry_run: Compute the difference without mutating the remote project
            reconciler: Diff implementation (default TermReconciler)
            listener: Optional callback for PhaseEvent signals
        """
        self.extractor = extractor
        self.store = store
        self.delete_removals = delete_removals
        self.dry_run = dry_run
        self.reconciler = reconciler or TermReconciler()
        self.listener = listener

    def run(self, path: Union[str, Path], options: ExtractOptions, language: str) -> SyncSummary:
        """
        Sync the remote project with the enum declared in ``path``.

        Raises:
            ParseError: Declaration file missing or malformed (no remote call is made)
            TransportError, RemoteRejected: Remote failure
        """
        return self._run(lambda: self.extractor.extract_file(path, options), options, language)

    def run_content(self, content: str, options: ExtractOptions, language: str) -> SyncSummary:
        """Same as run() but with the declaration file content already in memory."""
        return self._run(lambda: self.extractor.extract(content, options), options, language)

    def _run(
        self,
        extract: Callable[[], FrozenSet[str]],
        options: ExtractOptions,
        language: str
    ) -> SyncSummary:
        summary = SyncSummary(language=language, dry_run=self.dry_run)

        if not language or not language.strip():
            summary.aborted_reason = "language code is empty"
        elif not options.enum_name:
            summary.aborted_reason = "enum name is empty"
        if summary.aborted_reason:
            logger.error("Sync aborted: %s", summary.aborted_reason)
            return summary

        # Extract
        emit(self.listener, PhaseEvent(SyncPhase.EXTRACT, STARTED))
        local = extract()
        summary.local_count = len(local)
        logger.info("Enum parsed terms count: %d", len(local))
        emit(self.listener, PhaseEvent(SyncPhase.EXTRACT, FINISHED, count=len(local)))

        # Fetch
        emit(self.listener, PhaseEvent(SyncPhase.FETCH, STARTED, detail=language))
        remote = self.store.list_terms(language)
        summary.remote_count = len(remote)
        logger.info("Downloaded terms count: %d", len(remote))
        emit(self.listener, PhaseEvent(SyncPhase.FETCH, FINISHED, count=len(remote)))

        # Reconcile
        emit(self.listener, PhaseEvent(SyncPhase.RECONCILE, STARTED))
        difference = self.reconciler.diff(local, remote)
        summary.difference = difference
        logger.info(
            "Difference: %d insertions, %d removals",
            len(difference.insertions), len(difference.removals)
        )
        emit(self.listener, PhaseEvent(
            SyncPhase.RECONCILE, FINISHED,
            count=difference.total_differences,
            result=difference
        ))

        summary.delete = self._delete_phase(difference.removals)
        summary.add = self._add_phase(difference.insertions)

        errors = [p.error for p in (summary.delete, summary.add) if p.error is not None]
        if len(errors) > 1:
            # Keep the add error reachable as the cause
            raise errors[0] from errors[1]
        if errors:
            raise errors[0]

        return summary

    def _delete_phase(self, removals: AbstractSet[str]) -> PhaseResult:
        if not self.delete_removals:
            emit(self.listener, PhaseEvent(SyncPhase.DELETE, STARTED))
            result = PhaseResult(SyncPhase.DELETE, PhaseStatus.SKIPPED_DISABLED,
                                 keys=tuple(sorted(removals)))
            logger.info("Delete terms option disabled by settings")
            emit(self.listener, PhaseEvent(SyncPhase.DELETE, FINISHED, result=result))
            return result

        return self._apply(SyncPhase.DELETE, removals, self.store.delete_terms)

    def _add_phase(self, insertions: AbstractSet[str]) -> PhaseResult:
        return self._apply(SyncPhase.ADD, insertions, self.store.add_terms)

    def _apply(
        self,
        phase: str,
        keys: AbstractSet[str],
        operation: Callable[[AbstractSet[str]], TermCounts]
    ) -> PhaseResult:
        """Run one mutating phase and classify the reported counts."""
        ordered = tuple(sorted(keys))
        emit(self.listener, PhaseEvent(phase, STARTED, keys=ordered, count=len(ordered)))

        if not ordered:
            result = PhaseResult(phase, PhaseStatus.SKIPPED_EMPTY)
            logger.info("No terms for %s found", phase)
        elif self.dry_run:
            result = PhaseResult(phase, PhaseStatus.PLANNED, requested=len(ordered), keys=ordered)
            logger.info("Dry run: %d terms would be sent to %s", len(ordered), phase)
        else:
            try:
                counts = operation(frozenset(ordered))
            except (TransportError, RemoteRejected) as e:
                logger.error("%s phase failed: %s", phase.capitalize(), e)
                result = PhaseResult(phase, PhaseStatus.ERROR, requested=len(ordered),
                                     keys=ordered, error=e)
            else:
                result = PhaseResult.from_counts(phase, ordered, counts)
                if result.is_failure:
                    logger.error(
                        "Parsed count %d, %s count %d, expected count %d",
                        result.parsed, phase, result.succeeded, result.requested
                    )
                else:
                    logger.info("%s phase applied %d terms", phase.capitalize(), result.succeeded)

        emit(self.listener, PhaseEvent(phase, FINISHED, keys=ordered, count=result.succeeded,
                                       result=result, error=result.error))
        return result
