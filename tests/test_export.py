"""Tests for ExportDownloader."""

from unittest.mock import patch

import pytest

from poeditor_sync.core.errors import FileWriteError, RemoteRejected, TransportError
from poeditor_sync.core.file_manager import LocalizationFileWriter
from poeditor_sync.core.term_store import ExportFormat
from poeditor_sync.features.export import ExportDownloader, ExportPhase


class TestExportDownloader:
    """Test cases for ExportDownloader.run()."""

    def test_download_writes_file(self, fake_store, tmp_path):
        """Export bytes land at the destination unchanged."""
        destination = tmp_path / 'Localizable.strings'

        written = ExportDownloader(fake_store).run('en', ExportFormat.APPLE_STRINGS, destination)

        assert destination.read_bytes() == fake_store.export_data
        assert written.path == destination.resolve()
        assert written.size == len(fake_store.export_data)
        assert written.url == fake_store.export_url
        assert written.export_format == ExportFormat.APPLE_STRINGS
        assert written.language == 'en'
        assert fake_store.calls == ['export', 'fetch']

    def test_overwrites_destination(self, fake_store, tmp_path):
        destination = tmp_path / 'en.json'
        destination.write_text('{"stale": "yes"}')
        fake_store.export_data = b'{"fresh": "yes"}'

        ExportDownloader(fake_store).run('en', ExportFormat.KEY_VALUE_JSON, destination)

        assert destination.read_bytes() == b'{"fresh": "yes"}'

    def test_request_error_writes_nothing(self, fake_store, tmp_path):
        """Export request failure leaves the destination alone."""
        destination = tmp_path / 'Localizable.strings'
        destination.write_bytes(b'keep me')
        fake_store.export_error = RemoteRejected("Language not found", code='4013')

        with pytest.raises(RemoteRejected):
            ExportDownloader(fake_store).run('xx', ExportFormat.APPLE_STRINGS, destination)

        assert fake_store.calls == ['export']
        assert destination.read_bytes() == b'keep me'

    def test_fetch_error_writes_nothing(self, fake_store, tmp_path):
        destination = tmp_path / 'Localizable.strings'
        fake_store.fetch_error = TransportError("HTTP 404 Not Found")

        with pytest.raises(TransportError):
            ExportDownloader(fake_store).run('en', ExportFormat.APPLE_STRINGS, destination)

        assert not destination.exists()

    def test_missing_directory(self, fake_store, tmp_path):
        destination = tmp_path / 'nope' / 'Localizable.strings'

        with pytest.raises(FileWriteError):
            ExportDownloader(fake_store).run('en', ExportFormat.APPLE_STRINGS, destination)

    def test_write_failure_keeps_previous_file(self, fake_store, tmp_path):
        destination = tmp_path / 'Localizable.strings'
        destination.write_bytes(b'previous')

        with patch('poeditor_sync.core.file_manager.os.replace', side_effect=OSError("read-only")):
            with pytest.raises(FileWriteError):
                ExportDownloader(fake_store).run('en', ExportFormat.APPLE_STRINGS, destination)

        assert destination.read_bytes() == b'previous'

    def test_uses_given_writer(self, fake_store, tmp_path):
        destination = tmp_path / 'Localizable.strings'
        destination.write_bytes(b'previous')

        ExportDownloader(fake_store, writer=LocalizationFileWriter(backup=True)).run(
            'en', ExportFormat.APPLE_STRINGS, destination
        )

        assert len(list(tmp_path.glob('Localizable_backup_*'))) == 1

    def test_events(self, fake_store, tmp_path):
        """Each phase reports start and finish."""
        events = []
        destination = tmp_path / 'Localizable.strings'

        ExportDownloader(fake_store, listener=events.append).run(
            'en', ExportFormat.APPLE_STRINGS, destination
        )

        assert [(e.phase, e.stage) for e in events] == [
            (ExportPhase.REQUEST, 'started'),
            (ExportPhase.REQUEST, 'finished'),
            (ExportPhase.DOWNLOAD, 'started'),
            (ExportPhase.DOWNLOAD, 'finished'),
            (ExportPhase.WRITE, 'started'),
            (ExportPhase.WRITE, 'finished'),
        ]
        assert events[1].detail == fake_store.export_url
        assert events[3].count == len(fake_store.export_data)
