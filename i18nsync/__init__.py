"""
i18nsync - all-in-one translation tables with XLIFF round-trips

Keeps a key -> locale -> text table (JSON, YAML or a flat XML dialect) in
sync with freshly extracted template keys without losing translator work,
validates {{placeholder}} consistency across locales, and converts the
table to and from XLIFF 1.2 / 2.0 for translation tooling.

Quick start:
    i18n-sync sync --new extracted.json --existing messages.xml
    i18n-sync validate --source messages.xml
    i18n-sync export --source messages.xml --out-dir src/locale
"""

__version__ = "1.0.0"

from .converters import (
    json_to_multiple_xliff,
    json_to_xliff,
    json_to_xliff_units,
    merge_xliff_files,
    xliff_to_json,
)
from .format_handlers import build_translation_xml, parse_translation_xml
from .merger import merge_multiple_files, merge_translations
from .models import (
    CoverageStats,
    MergeResult,
    TranslationEntry,
    TranslationTable,
    ValidationResult,
    XliffUnit,
)
from .placeholders import extract_placeholders
from .validator import calculate_coverage, validate_duplicate_keys, validate_translations
from .xliff import generate_xliff, parse_xliff

__all__ = [
    "CoverageStats",
    "MergeResult",
    "TranslationEntry",
    "TranslationTable",
    "ValidationResult",
    "XliffUnit",
    "build_translation_xml",
    "calculate_coverage",
    "extract_placeholders",
    "generate_xliff",
    "json_to_multiple_xliff",
    "json_to_xliff",
    "json_to_xliff_units",
    "merge_multiple_files",
    "merge_translations",
    "merge_xliff_files",
    "parse_translation_xml",
    "parse_xliff",
    "validate_duplicate_keys",
    "validate_translations",
    "xliff_to_json",
]
