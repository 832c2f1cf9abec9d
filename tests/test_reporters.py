"""Tests for console and JSON reporters."""

import json

from poeditor_sync.core.errors import TransportError
from poeditor_sync.core.events import FINISHED, STARTED, PhaseEvent
from poeditor_sync.core.term_store import ExportFormat
from poeditor_sync.features.diff import Difference
from poeditor_sync.features.export import ExportPhase, WrittenFile
from poeditor_sync.features.sync import (
    FailureKind,
    PhaseResult,
    PhaseStatus,
    SyncPhase,
    SyncSummary,
)
from poeditor_sync.reports.console_reporter import ConsoleReporter
from poeditor_sync.reports.json_reporter import JSONReporter


def make_summary(**kwargs) -> SyncSummary:
    defaults = dict(
        language='en',
        local_count=3,
        remote_count=2,
        difference=Difference(insertions=frozenset({'b', 'c'}), removals=frozenset({'old'})),
        delete=PhaseResult(SyncPhase.DELETE, PhaseStatus.SKIPPED_DISABLED, keys=('old',)),
        add=PhaseResult(SyncPhase.ADD, PhaseStatus.SUCCESS, requested=2, parsed=2,
                        succeeded=2, keys=('b', 'c')),
    )
    defaults.update(kwargs)
    return SyncSummary(**defaults)


class TestConsoleReporter:
    """Test cases for ConsoleReporter."""

    def test_lists_terms_before_add(self, capfd):
        reporter = ConsoleReporter()
        reporter(PhaseEvent(SyncPhase.ADD, STARTED, keys=('a', 'b'), count=2))
        captured = capfd.readouterr()
        assert "Following terms will be inserted:" in captured.out
        assert "1. a" in captured.out
        assert "2. b" in captured.out
        assert "Inserting POEditor terms..." in captured.out

    def test_lists_terms_before_delete(self, capfd):
        reporter = ConsoleReporter()
        reporter(PhaseEvent(SyncPhase.DELETE, STARTED, keys=('old',), count=1))
        captured = capfd.readouterr()
        assert "Following terms will be deleted:" in captured.out

    def test_term_list_is_limited(self, capfd):
        reporter = ConsoleReporter(limit=2)
        reporter(PhaseEvent(SyncPhase.ADD, STARTED, keys=('a', 'b', 'c', 'd')))
        captured = capfd.readouterr()
        assert "... and 2 more" in captured.out
        assert "3. c" not in captured.out

    def test_short_output_hides_terms(self, capfd):
        reporter = ConsoleReporter(show_terms=False)
        reporter(PhaseEvent(SyncPhase.ADD, STARTED, keys=('a',)))
        captured = capfd.readouterr()
        assert "Following terms" not in captured.out

    def test_delete_disabled_message(self, capfd):
        reporter = ConsoleReporter()
        result = PhaseResult(SyncPhase.DELETE, PhaseStatus.SKIPPED_DISABLED)
        reporter(PhaseEvent(SyncPhase.DELETE, STARTED))
        reporter(PhaseEvent(SyncPhase.DELETE, FINISHED, result=result))
        captured = capfd.readouterr()
        assert "Delete terms option disabled by settings" in captured.out

    def test_nothing_to_insert_message(self, capfd):
        reporter = ConsoleReporter()
        result = PhaseResult(SyncPhase.ADD, PhaseStatus.SKIPPED_EMPTY)
        reporter(PhaseEvent(SyncPhase.ADD, FINISHED, result=result))
        captured = capfd.readouterr()
        assert "No terms for insertion found." in captured.out

    def test_partial_failure_message(self, capfd):
        """Partial failure shows parsed, applied and expected counts."""
        reporter = ConsoleReporter()
        result = PhaseResult(SyncPhase.ADD, PhaseStatus.PARTIAL_FAILURE, requested=3,
                             parsed=3, succeeded=2, failure=FailureKind.COUNT_MISMATCH)
        reporter(PhaseEvent(SyncPhase.ADD, FINISHED, result=result))
        captured = capfd.readouterr()
        assert "Parsed count 3, inserted count 2, expected count 3" in captured.out

    def test_export_events(self, capfd):
        reporter = ConsoleReporter()
        reporter(PhaseEvent(ExportPhase.REQUEST, FINISHED, detail='https://x/file'))
        reporter(PhaseEvent(ExportPhase.WRITE, FINISHED, detail='/tmp/en.strings'))
        captured = capfd.readouterr()
        assert "Download url is https://x/file" in captured.out
        assert "File successfully written at path /tmp/en.strings" in captured.out

    def test_fail_names_current_phase(self, capfd):
        reporter = ConsoleReporter()
        reporter(PhaseEvent(SyncPhase.FETCH, STARTED))
        reporter.fail(TransportError("terms/list: timed out after 30s"))
        captured = capfd.readouterr()
        assert "Failed during fetch: terms/list: timed out after 30s" in captured.out
        assert reporter.current_phase is None

    def test_print_settings_masks_secrets(self, capfd):
        """Token and project id are masked in the settings echo."""
        ConsoleReporter.print_settings({
            'token': 'abcdef123',
            'id': '98765',
            'language': 'en',
        })
        captured = capfd.readouterr()
        assert "token: ******123" in captured.out
        assert "id: **765" in captured.out
        assert "language: en" in captured.out
        assert "abcdef123" not in captured.out

    def test_print_summary_success(self, capfd):
        ConsoleReporter.print_summary(make_summary())
        captured = capfd.readouterr()
        assert "Local keys: 3" in captured.out
        assert "Sync completed!" in captured.out

    def test_print_summary_partial_failure(self, capfd):
        add = PhaseResult(SyncPhase.ADD, PhaseStatus.PARTIAL_FAILURE, requested=2,
                          parsed=2, succeeded=1)
        ConsoleReporter.print_summary(make_summary(add=add))
        captured = capfd.readouterr()
        assert "partial failures" in captured.out

    def test_print_summary_in_sync(self, capfd):
        ConsoleReporter.print_summary(make_summary(difference=Difference()))
        captured = capfd.readouterr()
        assert "already in sync" in captured.out

    def test_print_summary_aborted(self, capfd):
        ConsoleReporter.print_summary(make_summary(aborted_reason="language code is empty"))
        captured = capfd.readouterr()
        assert "Aborted: language code is empty" in captured.out

    def test_print_written(self, capfd, tmp_path):
        written = WrittenFile(path=tmp_path / 'en.strings', size=42, url='https://x',
                              export_format=ExportFormat.APPLE_STRINGS, language='en')
        ConsoleReporter.print_written(written)
        captured = capfd.readouterr()
        assert "en (apple_strings)" in captured.out
        assert "[42 bytes]" in captured.out


class TestJSONReporter:
    """Test cases for JSONReporter."""

    def test_build(self):
        report = JSONReporter.build(make_summary())

        assert report['language'] == 'en'
        assert report['outcome'] == 'success'
        assert report['counts'] == {'local': 3, 'remote': 2, 'insertions': 2, 'removals': 1}
        assert report['difference']['insertions'] == ['b', 'c']
        assert report['phases']['delete']['status'] == 'skipped_disabled'
        assert report['phases']['add']['succeeded'] == 2
        assert 'version' in report['metadata']

    def test_build_with_error(self):
        add = PhaseResult(SyncPhase.ADD, PhaseStatus.ERROR, requested=2,
                          error=TransportError("HTTP 502 Bad Gateway"))
        report = JSONReporter.build(make_summary(add=add))
        assert report['outcome'] == 'partial_failure'
        assert report['phases']['add']['error'] == "HTTP 502 Bad Gateway"

    def test_generate_and_load(self, tmp_path):
        output = tmp_path / 'reports' / 'sync.json'

        path = JSONReporter.generate(make_summary(), output)

        assert path == output
        loaded = JSONReporter.load(path)
        assert loaded['difference']['removals'] == ['old']

    def test_generate_compact(self, tmp_path):
        output = tmp_path / 'sync.json'
        JSONReporter.generate(make_summary(), output, pretty=False)
        assert '\n' not in output.read_text().strip()
        assert json.loads(output.read_text())['language'] == 'en'
