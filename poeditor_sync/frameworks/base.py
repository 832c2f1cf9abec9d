"""Base extractor interface for localization declaration files."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, Iterable, List, Union
from dataclasses import dataclass

from ..core.errors import ParseError


@dataclass(frozen=True)
class ExtractOptions:
    """Options that scope and normalize key extraction."""
    enum_name: str = "I18n"  # Only cases declared under this enum are collected
    lowercased: bool = False  # Lowercase every key before it enters the set


class BaseKeyExtractor(ABC):
    """Base class for turning a declaration file into a set of term keys."""

    @abstractmethod
    def get_file_extensions(self) -> List[str]:
        """Return list of file extensions this extractor understands (e.g., ['.swift'])."""
        pass

    @abstractmethod
    def extract(self, content: str, options: ExtractOptions) -> FrozenSet[str]:
        """
        Extract the key set from raw declaration file content.

        Args:
            content: Text of the declaration file
            options: Extraction options

        Returns:
            Frozen set of unique keys

        Raises:
            ParseError: If the content does not match the expected grammar
        """
        pass

    def extract_file(self, file_path: Union[str, Path], options: ExtractOptions) -> FrozenSet[str]:
        """
        Read a declaration file and extract its keys.

        Args:
            file_path: Path to the declaration file
            options: Extraction options

        Returns:
            Frozen set of unique keys

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        file_path = Path(file_path)

        if not file_path.is_file():
            raise ParseError("Declaration file not found", path=file_path)

        try:
            content = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read declaration file ({e.__class__.__name__}: {e})",
                             path=file_path) from e

        try:
            return self.extract(content, options)
        except ParseError as e:
            if e.path is not None:
                raise
            raise ParseError(e.reason, path=file_path, line=e.line) from e

    @staticmethod
    def normalize_keys(keys: Iterable[str], options: ExtractOptions) -> FrozenSet[str]:
        """
        Drop blank keys and apply the lowercasing option.

        Args:
            keys: Raw keys in declaration order
            options: Extraction options

        Returns:
            Frozen set of normalized keys
        """
        result = set()
        for key in keys:
            if not key or not key.strip():
                continue
            result.add(key.lower() if options.lowercased else key)
        return frozenset(result)
