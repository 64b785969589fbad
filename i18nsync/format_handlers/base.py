#!/usr/bin/env python3
"""
Base classes for translation table file formats.

FormatHandler is the abstract base class that every table format must
implement. All handlers read and write the same in-memory shape, a
TranslationTable (key -> locale -> text).
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..errors import UnsupportedFormatError
from ..models import TranslationTable


class FormatHandler(ABC):
    """
    Abstract base class for table file handlers.

    Each handler converts between one on-disk representation of the
    all-in-one translation table and the in-memory TranslationTable.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """List of file extensions this handler supports (without dot)."""
        pass

    @abstractmethod
    def parse(self, content: str) -> TranslationTable:
        """
        Parse format-specific content into a translation table.

        Args:
            content: Raw file content as string

        Returns:
            TranslationTable in file order
        """
        pass

    @abstractmethod
    def serialize(self, table: TranslationTable) -> str:
        """
        Serialize a translation table, keeping its iteration order.

        Args:
            table: Table to write

        Returns:
            File content as string
        """
        pass

    def validate_content(self, content: str) -> list[str]:
        """
        Validate that content is properly formatted for this handler.

        Args:
            content: Raw file content

        Returns:
            List of validation error messages (empty if valid)
        """
        return []


def normalize_table(data: Any) -> TranslationTable:
    """
    Coerce a decoded JSON/YAML document into a TranslationTable.

    Raises:
        ValueError: If the document is not a mapping of mappings
    """
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Translation table root must be a mapping")

    table: TranslationTable = {}
    for key, langs in data.items():
        if not isinstance(langs, dict):
            raise ValueError(f"Entry '{key}' must map locale codes to text")
        table[str(key)] = {
            str(locale): '' if text is None else str(text)
            for locale, text in langs.items()
        }
    return table


class FormatRegistry:
    """Registry of available table format handlers."""

    _handlers: dict[str, type[FormatHandler]] = {}
    _extension_map: dict[str, str] = {}  # extension -> handler name

    @classmethod
    def register(cls, handler_class: type[FormatHandler]) -> None:
        """Register a format handler class."""
        handler = handler_class()
        cls._handlers[handler.name.lower()] = handler_class
        for ext in handler.file_extensions:
            cls._extension_map[ext.lower()] = handler.name.lower()

    @classmethod
    def get_handler(cls, name: str) -> FormatHandler:
        """Get handler instance by name."""
        name_lower = name.lower()
        if name_lower not in cls._handlers:
            available = ', '.join(cls._handlers.keys())
            raise UnsupportedFormatError(f"Unknown format: {name}. Available: {available}")
        return cls._handlers[name_lower]()

    @classmethod
    def get_handler_for_extension(cls, extension: str) -> FormatHandler:
        """Get handler instance by file extension."""
        ext = extension.lower().lstrip('.')
        if ext not in cls._extension_map:
            available = ', '.join(cls._extension_map.keys())
            raise UnsupportedFormatError(f"Unsupported file format: .{ext}. Supported: {available}")
        return cls.get_handler(cls._extension_map[ext])

    @classmethod
    def detect_format(cls, filepath: str) -> FormatHandler:
        """Pick the handler for a table file from its extension."""
        return cls.get_handler_for_extension(Path(filepath).suffix)

    @classmethod
    def list_formats(cls) -> list[dict[str, Any]]:
        """List all registered formats with their extensions."""
        result = []
        for name, handler_class in cls._handlers.items():
            handler = handler_class()
            result.append({
                'name': handler.name,
                'extensions': handler.file_extensions,
            })
        return result
