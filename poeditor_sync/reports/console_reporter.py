"""Console report generator."""

from typing import Dict, Optional

from ..core.events import PhaseEvent
from ..features.export import ExportPhase, WrittenFile
from ..features.sync import PhaseResult, PhaseStatus, RunOutcome, SyncPhase, SyncSummary
from ..utils.colors import Colors
from ..utils.validators import mask_secret


class ConsoleReporter:
    """
    Renders pipeline signals on the terminal.

    Pass an instance as the ``listener`` of SyncOrchestrator or
    ExportDownloader; the CLI calls ``fail()`` when a phase raises.
    """

    PHASE_TITLES = {
        SyncPhase.EXTRACT: "Parsing enum file...",
        SyncPhase.FETCH: "Downloading POEditor terms...",
        SyncPhase.RECONCILE: "Finding differences...",
        SyncPhase.DELETE: "Deleting POEditor terms...",
        SyncPhase.ADD: "Inserting POEditor terms...",
        ExportPhase.REQUEST: "Requesting localization download url...",
        ExportPhase.DOWNLOAD: "Downloading localization...",
        ExportPhase.WRITE: "Writing data to file...",
    }

    def __init__(self, show_terms: bool = True, limit: int = 50):
        """
        Initialize the reporter.

        Args:
            show_terms: List the terms about to be added or deleted
            limit: Maximum number of terms listed per phase
        """
        self.show_terms = show_terms
        self.limit = limit
        self.current_phase: Optional[str] = None

    def __call__(self, event: PhaseEvent):
        if event.started:
            self._phase_started(event)
        else:
            self._phase_finished(event)

    def _phase_started(self, event: PhaseEvent):
        self.current_phase = event.phase

        if event.phase in (SyncPhase.DELETE, SyncPhase.ADD) and not event.keys:
            return

        if self.show_terms and event.keys:
            verb = "deleted" if event.phase == SyncPhase.DELETE else "inserted"
            print(f"\n{Colors.error(f'Following terms will be {verb}:')}")
            for index, key in enumerate(event.keys[:self.limit], 1):
                print(f"  {Colors.warning(f'{index}. {key}')}")
            if len(event.keys) > self.limit:
                print(f"  ... and {len(event.keys) - self.limit} more")

        print(f"⏳ {self.PHASE_TITLES.get(event.phase, event.phase)}")

    def _phase_finished(self, event: PhaseEvent):
        self.current_phase = None

        if event.phase == SyncPhase.EXTRACT:
            print(f"   {Colors.success('✓')} Enum parsed terms count: {event.count}")
        elif event.phase == SyncPhase.FETCH:
            print(f"   {Colors.success('✓')} Downloaded terms count: {event.count}")
        elif event.phase == SyncPhase.RECONCILE:
            difference = event.result
            print(f"   {Colors.success('✓')} {len(difference.insertions)} to insert, "
                  f"{len(difference.removals)} to delete")
        elif event.phase in (SyncPhase.DELETE, SyncPhase.ADD):
            self._print_phase_result(event.result)
        elif event.phase == ExportPhase.REQUEST:
            print(f"   {Colors.success('✓')} Download url is {event.detail}")
        elif event.phase == ExportPhase.DOWNLOAD:
            print(f"   {Colors.success('✓')} Downloaded {event.count} bytes")
        elif event.phase == ExportPhase.WRITE:
            print(f"   {Colors.success('✓')} File successfully written at path {event.detail}")

    def _print_phase_result(self, result: PhaseResult):
        noun = "removal" if result.phase == SyncPhase.DELETE else "insertion"
        done = "Deleted" if result.phase == SyncPhase.DELETE else "Uploaded"
        past = "deleted" if result.phase == SyncPhase.DELETE else "inserted"

        if result.status == PhaseStatus.SKIPPED_DISABLED:
            print(f"{Colors.info('ℹ')} Delete terms option disabled by settings. "
                  f"Please check --help for details.")
        elif result.status == PhaseStatus.SKIPPED_EMPTY:
            print(f"{Colors.info('ℹ')} No terms for {noun} found.")
        elif result.status == PhaseStatus.PLANNED:
            print(f"   {Colors.warning('[DRY RUN]')} {result.requested} terms would be {past}")
        elif result.status == PhaseStatus.SUCCESS:
            print(f"   {Colors.success('✓')} {done} {result.succeeded} terms")
        elif result.status == PhaseStatus.PARTIAL_FAILURE:
            print(f"   {Colors.error('✗')} Parsed count {result.parsed}, {past} count "
                  f"{result.succeeded}, expected count {result.requested}")
        else:
            print(f"   {Colors.error('✗')} {result.error}")

    def fail(self, error: Exception):
        """Report an error that aborted the current phase."""
        phase = self.current_phase
        self.current_phase = None
        where = f" during {phase}" if phase else ""
        print(f"{Colors.error('❌')} Failed{where}: {error}")

    @staticmethod
    def print_settings(settings: Dict[str, object]):
        """Echo the resolved settings; 'token' and 'id' are masked."""
        print(f"\n{Colors.highlight('Current settings that will be used:')}")
        for name, value in settings.items():
            if name in ('token', 'id'):
                value = mask_secret(str(value))
            print(Colors.highlight(f"{name}: {value}"))
        print()

    @staticmethod
    def print_summary(summary: SyncSummary):
        """Print the end-of-run sync summary."""
        mode = Colors.warning("[DRY RUN]") if summary.dry_run else ""
        print(f"\n{Colors.bold('🔄 POEDITOR SYNC')} {mode}")
        print("=" * 60)

        if summary.outcome == RunOutcome.ABORTED_BY_CONFIG:
            print(f"{Colors.error('❌')} Aborted: {summary.aborted_reason}")
            return

        print(f"Language: {summary.language}")
        print(f"Local keys: {summary.local_count}")
        print(f"Remote terms: {summary.remote_count}")
        print()

        for result in (summary.delete, summary.add):
            if result is None:
                continue
            label = f"{result.phase}:".ljust(8)
            print(f"  {label} {result.status.value} "
                  f"(requested {result.requested}, parsed {result.parsed}, "
                  f"succeeded {result.succeeded})")

        print("=" * 60)
        if summary.outcome == RunOutcome.PARTIAL_FAILURE:
            print(f"{Colors.error('⚠ Sync finished with partial failures')}")
        elif not summary.has_changes:
            print(f"{Colors.success('✅ Terms are already in sync!')}")
        elif summary.dry_run:
            print(f"{Colors.warning('No terms were modified (dry run)')}")
        else:
            print(f"{Colors.success('✅ Sync completed!')}")

    @staticmethod
    def print_written(written: WrittenFile):
        """Print the result of a download."""
        print(f"\n{Colors.success('✅')} {written.language} ({written.export_format.value}) "
              f"saved to {written.path} [{written.size} bytes]")
