#!/usr/bin/env python3
"""
Reconciliation of freshly extracted keys with persisted translations.

The defaults never lose translator work: existing translations are kept
and keys that disappeared from the templates stay in the file until
``clean_unused`` is requested.
"""

import logging
from typing import Iterable, Optional

from .models import MergeResult, TranslationTable

logger = logging.getLogger(__name__)


def merge_translations(
    new_translations: TranslationTable,
    existing_translations: TranslationTable,
    target_locales: list[str],
    preserve_existing: bool = True,
    clean_unused: bool = False,
    source_locale: Optional[str] = None,
) -> tuple[TranslationTable, MergeResult]:
    """
    Merge a new extraction into the existing translation table.

    Args:
        new_translations: Table built from the current templates
        existing_translations: Table loaded from disk
        target_locales: Locales that new keys get empty slots for
        preserve_existing: Keep non-empty existing text instead of the new text
        clean_unused: Drop keys that are no longer extracted
        source_locale: Locale compared to detect changed source text. When
            None, the first locale of each new entry is compared.

    Returns:
        Tuple of (complete merged table, MergeResult)
    """
    merged: TranslationTable = {}
    result = MergeResult()

    for key, new_langs in new_translations.items():
        if key not in existing_translations:
            merged[key] = dict(new_langs)
            for locale in target_locales:
                if not merged[key].get(locale):
                    merged[key][locale] = ''
            result.added.append(key)
            continue

        existing_langs = existing_translations[key]
        merged[key] = dict(existing_langs)
        preserved = False

        for locale, text in new_langs.items():
            if preserve_existing and existing_langs.get(locale):
                preserved = True
            else:
                merged[key][locale] = text

        if preserved:
            result.preserved.append(key)

        compare_locale = source_locale
        if compare_locale is None:
            compare_locale = next(iter(new_langs), None)
        if compare_locale in new_langs and existing_langs.get(compare_locale) != new_langs[compare_locale]:
            result.updated.append(key)

    for key, existing_langs in existing_translations.items():
        if key in new_translations:
            continue
        if not clean_unused:
            merged[key] = dict(existing_langs)
        result.removed.append(key)

    logger.debug(
        "Merged %d key(s): %d added, %d updated, %d removed, %d preserved",
        len(merged), len(result.added), len(result.updated),
        len(result.removed), len(result.preserved),
    )
    return merged, result


def merge_multiple_files(files: dict[str, TranslationTable]) -> TranslationTable:
    """
    Merge per-component tables into one table.

    A key found in several files gets the union of its locale maps; the
    later file wins on conflicting locales. Duplicates are not reported
    here, see validator.validate_duplicate_keys.
    """
    merged: TranslationTable = {}

    for translations in files.values():
        for key, langs in translations.items():
            if key in merged:
                merged[key] = {**merged[key], **langs}
            else:
                merged[key] = dict(langs)

    return merged


def split_translations(
    translations: TranslationTable,
    manifest: dict[str, Iterable[str]],
) -> tuple[dict[str, TranslationTable], list[str]]:
    """
    Split a merged table into per-file tables.

    Args:
        translations: Merged table
        manifest: Mapping of output file -> keys that file owns

    Returns:
        Tuple of (file -> table, manifest keys missing from the table)
    """
    files: dict[str, TranslationTable] = {}
    missing: list[str] = []

    for file_path, keys in manifest.items():
        component: TranslationTable = {}
        for key in keys:
            if key in translations:
                component[key] = dict(translations[key])
            else:
                missing.append(key)
        files[file_path] = component

    return files, missing


def sort_translation_keys(translations: TranslationTable) -> TranslationTable:
    """Return a copy of the table with keys in sorted order."""
    return {key: translations[key] for key in sorted(translations)}


def initialize_translations(
    keys: Iterable[str],
    source_locale: str,
    source_texts: dict[str, str],
    target_locales: list[str],
) -> TranslationTable:
    """Build an extraction table with source text and empty target slots."""
    translations: TranslationTable = {}

    for key in keys:
        translations[key] = {source_locale: source_texts.get(key) or ''}
        for locale in target_locales:
            translations[key][locale] = ''

    return translations


def count_missing(translations: TranslationTable, target_locales: list[str]) -> dict[str, int]:
    """Count empty translation slots per target locale."""
    missing = {}

    for locale in target_locales:
        missing[locale] = sum(
            1 for langs in translations.values()
            if not (langs.get(locale) or '').strip()
        )

    return missing
