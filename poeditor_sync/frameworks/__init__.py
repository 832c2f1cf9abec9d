"""Extractors for localization declaration files."""

from .base import BaseKeyExtractor, ExtractOptions
from .swift import SwiftEnumExtractor

__all__ = [
    'BaseKeyExtractor',
    'ExtractOptions',
    'SwiftEnumExtractor',
]
