#!/usr/bin/env python3
"""
Handlers for translation table files.

Supported formats:
- JSON: canonical key -> locale -> text table
- XML: custom all-in-one <translations> dialect
- YAML: the JSON table written as YAML
"""

from pathlib import Path

from ..models import TranslationTable
from .base import FormatHandler, FormatRegistry, normalize_table
from .json_handler import JsonHandler
from .xml_handler import XmlHandler, build_translation_xml, parse_translation_xml
from .yaml_handler import YamlHandler

FormatRegistry.register(JsonHandler)
FormatRegistry.register(XmlHandler)
FormatRegistry.register(YamlHandler)


def read_table(path: str) -> TranslationTable:
    """Read a translation table file, picking the handler from its extension."""
    handler = FormatRegistry.detect_format(path)
    content = Path(path).read_text(encoding="utf-8")
    return handler.parse(content)


def write_table(path: str, table: TranslationTable) -> None:
    """Write a translation table file, creating parent directories."""
    handler = FormatRegistry.detect_format(path)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(handler.serialize(table), encoding="utf-8")


__all__ = [
    'FormatHandler',
    'FormatRegistry',
    'JsonHandler',
    'XmlHandler',
    'YamlHandler',
    'build_translation_xml',
    'normalize_table',
    'parse_translation_xml',
    'read_table',
    'write_table',
]
