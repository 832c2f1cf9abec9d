"""Capability interface for the remote translation-management service."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, FrozenSet

KeySet = FrozenSet[str]


class ExportFormat(Enum):
    """Export formats understood by POEditor's ``projects/export`` endpoint."""
    APPLE_STRINGS = "apple_strings"    # "key" = "value"; lines
    KEY_VALUE_JSON = "key_value_json"  # {"key": "value"}
    JSON = "json"
    ANDROID_STRINGS = "android_strings"
    XLIFF = "xliff"
    PO = "po"
    PROPERTIES = "properties"
    YML = "yml"

    @classmethod
    def from_value(cls, value: str) -> 'ExportFormat':
        """Look up a format by its wire name, raising ValueError with the valid choices."""
        for member in cls:
            if member.value == value:
                return member
        choices = ', '.join(m.value for m in cls)
        raise ValueError(f"Unknown export type '{value}'. Valid options: {choices}")

    @classmethod
    def choices(cls) -> list:
        return [m.value for m in cls]


@dataclass(frozen=True)
class TermCounts:
    """Counts reported by the service for an add or delete request."""
    requested: int
    parsed: int
    succeeded: int

    @property
    def is_complete(self) -> bool:
        return self.succeeded > 0 and self.succeeded == self.requested


class RemoteTermStore(ABC):
    """
    Operations the sync core needs from the translation service.

    Implementations raise ``TransportError`` for network failures and
    ``RemoteRejected`` for error or malformed responses. Timeouts belong to
    the implementation; callers treat every call as blocking.
    """

    @abstractmethod
    def list_terms(self, language: str) -> KeySet:
        """Return every term currently defined in the project."""

    @abstractmethod
    def add_terms(self, keys: AbstractSet[str]) -> TermCounts:
        """Add terms; ``succeeded`` is the service's ``added`` count."""

    @abstractmethod
    def delete_terms(self, keys: AbstractSet[str]) -> TermCounts:
        """Delete terms; ``succeeded`` is the service's ``deleted`` count."""

    @abstractmethod
    def request_export(self, language: str, export_format: ExportFormat) -> str:
        """Ask the service to build an export and return its download URL."""

    @abstractmethod
    def fetch_export(self, url: str) -> bytes:
        """Download the bytes behind an export URL."""
