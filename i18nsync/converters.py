#!/usr/bin/env python3
"""
Conversion between the all-in-one translation table and XLIFF.

Export writes one source-only document plus one document per target
locale (``messages.<locale>.xlf``). Import reads translated documents back
into the table.
"""

import logging
from typing import Optional

from .models import TranslationTable, XliffUnit
from .xliff import generate_xliff, parse_xliff

logger = logging.getLogger(__name__)


def json_to_xliff_units(
    translations: TranslationTable,
    source_locale: str,
    target_locale: Optional[str] = None,
) -> list[XliffUnit]:
    """
    Convert table entries to XLIFF units.

    Keys without source text are skipped. A target is attached only when a
    target locale is requested and the key has non-empty text for it.
    """
    units = []

    for key, langs in translations.items():
        source_text = langs.get(source_locale)
        if not source_text:
            logger.debug("Skipping '%s': no '%s' source text", key, source_locale)
            continue

        unit = XliffUnit(id=key, source=source_text)
        if target_locale and langs.get(target_locale):
            unit.target = langs[target_locale]

        units.append(unit)

    return units


def json_to_xliff(
    translations: TranslationTable,
    source_locale: str,
    target_locale: Optional[str],
    format: str,
) -> str:
    """Convert a translation table to one XLIFF document."""
    units = json_to_xliff_units(translations, source_locale, target_locale)
    return generate_xliff(units, source_locale, target_locale, format)


def json_to_multiple_xliff(
    translations: TranslationTable,
    source_locale: str,
    target_locales: list[str],
    format: str,
) -> dict[str, str]:
    """
    Convert a translation table to one XLIFF document per locale.

    Returns:
        Mapping of locale -> document; the source locale document has no targets
    """
    result = {source_locale: json_to_xliff(translations, source_locale, None, format)}

    for target_locale in target_locales:
        result[target_locale] = json_to_xliff(translations, source_locale, target_locale, format)

    return result


def xliff_to_json(
    xliff_content: str,
    source_locale: str,
    target_locales: list[str],
) -> TranslationTable:
    """
    Convert an XLIFF document to a translation table.

    Every requested target locale gets a slot, empty when the document has
    no target for the unit, so later completeness checks see the gap.
    """
    result: TranslationTable = {}

    for entry in parse_xliff(xliff_content):
        if not entry.id:
            continue

        result[entry.id] = {source_locale: entry.source}
        for locale in target_locales:
            result[entry.id][locale] = entry.target or ''

    return result


def merge_xliff_files(xliff_files: dict[str, str], source_locale: str) -> TranslationTable:
    """
    Combine per-locale XLIFF documents into one translation table.

    The source locale document contributes its source text; every other
    document contributes its target text. Slots accumulate across documents.

    Args:
        xliff_files: Mapping of locale -> XLIFF content
        source_locale: Locale whose document holds the source text

    Returns:
        TranslationTable keyed by unit id
    """
    result: TranslationTable = {}

    for locale, xliff_content in xliff_files.items():
        entries = parse_xliff(xliff_content)
        logger.debug("Merging %d unit(s) for locale '%s'", len(entries), locale)

        for entry in entries:
            if not entry.id:
                continue

            langs = result.setdefault(entry.id, {})
            if locale == source_locale:
                langs[locale] = entry.source
            else:
                langs[locale] = entry.target or ''

    return result
