#!/usr/bin/env python3
"""
Data model shared by the converters, the merge engine and the validator.

A translation table is a plain mapping of key -> locale -> text:

```json
{
  "app.title": {"en": "Hello {{name}}", "es": "Hola {{name}}"},
  "nav.home": {"en": "Home", "es": ""}
}
```

An empty string means "not yet translated". Dict insertion order is the
table order, so callers that want deterministic output sort first.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional, Union

LocaleMap = dict[str, str]
TranslationTable = dict[str, LocaleMap]


@dataclass
class TranslationEntry:
    """
    One unit parsed from an XLIFF document.

    Attributes:
        id: Translation key
        source: Source text with placeholders rebuilt as {{name}}
        target: Target text, None when the unit has no target
        description: Text of the unit's note, if any
        source_file: For XLIFF 1.2, a non-default trans-unit datatype
    """
    id: str
    source: str
    target: Optional[str] = None
    description: Optional[str] = None
    source_file: Optional[str] = None

    def __post_init__(self):
        """Ensure id is string."""
        self.id = str(self.id)


@dataclass
class XliffUnit:
    """Unit handed to the XLIFF generator."""
    id: str
    source: str
    target: Optional[str] = None
    source_file: Optional[str] = None
    note: Optional[str] = None


@dataclass
class TextRun:
    """Literal text between placeholders."""
    text: str


@dataclass
class PlaceholderRun:
    """A {{name}} interpolation inside unit text."""
    name: str
    literal: str


@dataclass
class Text:
    """Unit content without any interpolation, serialized as plain text."""
    text: str


@dataclass
class Segments:
    """Unit content mixing text runs and placeholder elements."""
    runs: list[Union[TextRun, PlaceholderRun]] = field(default_factory=list)


Content = Union[Text, Segments]


@dataclass
class MergeResult:
    """Classification of keys after one reconciliation pass."""
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    preserved: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationError:
    """Problem that fails a validation or export step."""
    type: str  # duplicate_key, missing_language, invalid_interpolation, invalid_format
    key: str
    message: str
    file: str = ""
    line: Optional[int] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        if self.line is None:
            del data["line"]
        return data


@dataclass
class ValidationWarning:
    """Problem that is reported but never fails a step."""
    type: str  # incomplete_translation, unused_key
    key: str
    message: str
    file: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ValidationResult:
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


@dataclass
class LocaleCoverage:
    complete: int
    missing: int
    percentage: int


@dataclass
class CoverageStats:
    """Translation slot counts for a table and a set of target locales."""
    total_keys: int
    total_translations: int
    complete_translations: int
    missing_translations: int
    coverage_percentage: int
    by_language: dict[str, LocaleCoverage] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)
