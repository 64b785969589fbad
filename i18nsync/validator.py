#!/usr/bin/env python3
"""
Validation and coverage for translation tables.

Errors fail a validation or export step: a key defined in several files,
a key without source text, or placeholders that differ between source and
target. Warnings are informational: empty translations and keys no
template uses. Every problem in the table is collected in one pass.
"""

import logging
import math
from typing import Iterable

from .models import (
    CoverageStats,
    LocaleCoverage,
    TranslationTable,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from .placeholders import extract_placeholders, placeholders_match

logger = logging.getLogger(__name__)


def validate_translations(
    translations: TranslationTable,
    target_locales: list[str],
    source_locale: str = 'en',
    validate_interpolations: bool = True,
) -> ValidationResult:
    """
    Validate translations for completeness and placeholder consistency.

    Args:
        translations: Table to check
        target_locales: Locales that must be translated
        source_locale: Locale holding the original text
        validate_interpolations: Compare {{placeholders}} between source and targets

    Returns:
        ValidationResult with every error and warning found
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    for key, langs in translations.items():
        source_text = langs.get(source_locale)
        if not source_text:
            errors.append(ValidationError(
                type='missing_language',
                key=key,
                message=f"Missing source language '{source_locale}'",
            ))
            continue

        source_placeholders = extract_placeholders(source_text)

        for locale in target_locales:
            target_text = langs.get(locale)

            if not target_text or not target_text.strip():
                warnings.append(ValidationWarning(
                    type='incomplete_translation',
                    key=key,
                    message=f"Missing translation for locale '{locale}'",
                ))
                continue

            if not validate_interpolations:
                continue

            target_placeholders = extract_placeholders(target_text)
            if not placeholders_match(source_placeholders, target_placeholders):
                errors.append(ValidationError(
                    type='invalid_interpolation',
                    key=key,
                    message=(
                        f"Interpolation mismatch in '{locale}': "
                        f"source has [{', '.join(source_placeholders)}], "
                        f"target has [{', '.join(target_placeholders)}]"
                    ),
                ))

    logger.debug("Validated %d key(s): %d error(s), %d warning(s)",
                 len(translations), len(errors), len(warnings))

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def validate_duplicate_keys(files: dict[str, TranslationTable]) -> list[ValidationError]:
    """
    Report keys defined in more than one translation file.

    Args:
        files: Mapping of file path -> table loaded from it

    Returns:
        One duplicate_key error per key, naming every file that defines it
    """
    key_to_files: dict[str, list[str]] = {}

    for file_path, translations in files.items():
        for key in translations:
            key_to_files.setdefault(key, []).append(file_path)

    errors = []
    for key, paths in key_to_files.items():
        if len(paths) > 1:
            errors.append(ValidationError(
                type='duplicate_key',
                key=key,
                message=f"Duplicate key found in: {', '.join(paths)}",
                file=paths[0],
            ))

    return errors


def find_unused_keys(translations: TranslationTable, used_keys: Iterable[str]) -> list[ValidationWarning]:
    """Report table keys that no template references."""
    used = set(used_keys)
    return [
        ValidationWarning(
            type='unused_key',
            key=key,
            message=f"Key '{key}' not found in any template",
        )
        for key in translations
        if key not in used
    ]


def _percentage(part: int, whole: int) -> int:
    """Integer percentage, halves rounded up."""
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def calculate_coverage(translations: TranslationTable, target_locales: list[str]) -> CoverageStats:
    """
    Calculate translation coverage.

    A slot is one (key, target locale) pair; it is complete when its text
    is non-empty after trimming.
    """
    total_keys = len(translations)
    total_translations = total_keys * len(target_locales)
    complete_translations = 0
    by_language: dict[str, LocaleCoverage] = {}

    for locale in target_locales:
        complete = sum(
            1 for langs in translations.values()
            if (langs.get(locale) or '').strip()
        )
        complete_translations += complete
        by_language[locale] = LocaleCoverage(
            complete=complete,
            missing=total_keys - complete,
            percentage=_percentage(complete, total_keys),
        )

    return CoverageStats(
        total_keys=total_keys,
        total_translations=total_translations,
        complete_translations=complete_translations,
        missing_translations=total_translations - complete_translations,
        coverage_percentage=_percentage(complete_translations, total_translations),
        by_language=by_language,
    )
