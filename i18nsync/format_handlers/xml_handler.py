#!/usr/bin/env python3
"""
Custom all-in-one XML format handler.

Structure:
```xml
<?xml version="1.0" encoding="UTF-8"?>
<translations>
  <translation key="app.title">
    <en>Hello {{name}}</en>
    <es>Hola {{name}}</es>
    <fr/>
  </translation>
</translations>
```

Every child element of a ``translation`` is a locale; its tag name is the
locale code and its text the translation. Translators edit this file by
hand, so output is indented and text is escaped.
"""

import logging
import re
from xml.etree import ElementTree as ET
from xml.sax.saxutils import escape, quoteattr

from ..models import TranslationTable
from .base import FormatHandler

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Carriage returns are written as character references so parsers keep them.
TEXT_ENTITIES = {"\r": "&#13;"}

# Locale codes become element names; prefixed names are not allowed.
LOCALE_TAG_PATTERN = re.compile(r"^[^\W\d][\w.-]*$")


def parse_translation_xml(content: str) -> TranslationTable:
    """
    Parse the custom XML format into a translation table.

    ``translation`` elements without a ``key`` attribute are skipped.
    Locale codes are not checked against any known list.

    Args:
        content: Raw XML file content

    Returns:
        TranslationTable in document order

    Raises:
        ET.ParseError: If the content is not well-formed XML
    """
    root = ET.fromstring(content)
    result: TranslationTable = {}

    if root.tag != 'translations':
        return result

    for trans in root.findall('translation'):
        key = trans.get('key')
        if not key:
            logger.debug("Skipping <translation> element without key attribute")
            continue

        result[key] = {}
        for lang in trans:
            if not isinstance(lang.tag, str):
                continue
            result[key][lang.tag] = ''.join(lang.itertext())

    return result


def build_translation_xml(translations: TranslationTable) -> str:
    """
    Build the custom XML format from a translation table.

    Keys are written in table order and locales in each entry's own order;
    sort the table first for deterministic output.

    Args:
        translations: Table to write

    Returns:
        XML document with two-space indentation

    Raises:
        ValueError: If a locale code is not a valid XML element name
    """
    lines = [XML_DECLARATION]

    if not translations:
        lines.append('<translations/>')
        return '\n'.join(lines) + '\n'

    lines.append('<translations>')
    for key, langs in translations.items():
        if not langs:
            lines.append(f'  <translation key={quoteattr(key)}/>')
            continue

        lines.append(f'  <translation key={quoteattr(key)}>')
        for lang_code, text in langs.items():
            if not LOCALE_TAG_PATTERN.match(lang_code):
                raise ValueError(
                    f"Locale '{lang_code}' of key '{key}' is not a valid XML element name"
                )
            if text:
                lines.append(f'    <{lang_code}>{escape(text, TEXT_ENTITIES)}</{lang_code}>')
            else:
                lines.append(f'    <{lang_code}/>')
        lines.append('  </translation>')
    lines.append('</translations>')

    return '\n'.join(lines) + '\n'


class XmlHandler(FormatHandler):
    """Handler for *.xml translation tables in the custom format."""

    @property
    def name(self) -> str:
        return "xml"

    @property
    def file_extensions(self) -> list[str]:
        return ["xml"]

    def parse(self, content: str) -> TranslationTable:
        return parse_translation_xml(content)

    def serialize(self, table: TranslationTable) -> str:
        return build_translation_xml(table)

    def validate_content(self, content: str) -> list[str]:
        """Validate custom XML format."""
        errors = []

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            errors.append(f"Invalid XML syntax: {e}")
            return errors

        if root.tag != 'translations':
            errors.append(f"Root element must be 'translations', found '{root.tag}'")
            return errors

        for i, trans in enumerate(root.findall('translation'), 1):
            if not trans.get('key'):
                errors.append(f"<translation> #{i} has no key attribute")

        return errors
