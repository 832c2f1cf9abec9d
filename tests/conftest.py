"""Shared fixtures for poeditor-sync tests."""

from typing import AbstractSet, Dict, List, Optional

import pytest

from poeditor_sync.core.term_store import ExportFormat, RemoteTermStore, TermCounts
from poeditor_sync.utils.colors import Colors
from poeditor_sync.utils.logging import reset_logger


class FakeTermStore(RemoteTermStore):
    """
    In-memory RemoteTermStore.

    ``add_result`` / ``delete_result`` override the reported success count;
    ``*_error`` makes the call raise instead.
    """

    def __init__(self, terms=(), export_data: bytes = b'"hello" = "Hello";\n'):
        self.terms = set(terms)
        self.export_data = export_data
        self.export_url = "https://cdn.poeditor.com/export/abc123.strings"
        self.calls: List[str] = []
        self.sent: Dict[str, frozenset] = {}
        self.add_result: Optional[int] = None
        self.delete_result: Optional[int] = None
        self.list_error: Optional[Exception] = None
        self.add_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None
        self.export_error: Optional[Exception] = None
        self.fetch_error: Optional[Exception] = None

    def list_terms(self, language: str):
        self.calls.append('list')
        if self.list_error:
            raise self.list_error
        return frozenset(self.terms)

    def add_terms(self, keys: AbstractSet[str]) -> TermCounts:
        self.calls.append('add')
        self.sent['add'] = frozenset(keys)
        if self.add_error:
            raise self.add_error
        succeeded = len(keys) if self.add_result is None else self.add_result
        self.terms |= set(keys)
        return TermCounts(requested=len(keys), parsed=len(keys), succeeded=succeeded)

    def delete_terms(self, keys: AbstractSet[str]) -> TermCounts:
        self.calls.append('delete')
        self.sent['delete'] = frozenset(keys)
        if self.delete_error:
            raise self.delete_error
        succeeded = len(keys) if self.delete_result is None else self.delete_result
        self.terms -= set(keys)
        return TermCounts(requested=len(keys), parsed=len(keys), succeeded=succeeded)

    def request_export(self, language: str, export_format: ExportFormat) -> str:
        self.calls.append('export')
        if self.export_error:
            raise self.export_error
        return self.export_url

    def fetch_export(self, url: str) -> bytes:
        self.calls.append('fetch')
        if self.fetch_error:
            raise self.fetch_error
        return self.export_data


SAMPLE_ENUM = '''import Foundation

enum I18n: String {
    case welcome
    case saveButton = "button.save"
    case cancel, delete

    enum Settings {
        case header
        case footer = "settings.footer_text"
    }

    var localized: String {
        switch self {
        case .welcome: return "x"
        default: return rawValue
        }
    }
}

enum Other {
    case ignored
}
'''


@pytest.fixture
def fake_store():
    return FakeTermStore()


@pytest.fixture
def enum_file(tmp_path):
    path = tmp_path / 'I18n.swift'
    path.write_text(SAMPLE_ENUM, encoding='utf-8')
    return path


@pytest.fixture(autouse=True)
def plain_output():
    """Keep ANSI codes and logger state out of assertions."""
    Colors.disable()
    reset_logger()
    yield
    Colors.enable()
    reset_logger()


@pytest.fixture
def sample_enum():
    return SAMPLE_ENUM
