#!/usr/bin/env python3
"""
XLIFF 1.2 and 2.0 parser.

XLIFF 2.0 structure:
```xml
<xliff version="2.0" xmlns="urn:oasis:names:tc:xliff:document:2.0" srcLang="en" trgLang="es">
  <file id="ngi18n" original="ng.template">
    <unit id="greeting">
      <notes><note>Shown on the home page</note></notes>
      <segment>
        <source>Hello <ph id="0" equiv="INTERPOLATION" disp="{{name}}"/></source>
        <target>Hola <ph id="0" equiv="INTERPOLATION" disp="{{name}}"/></target>
      </segment>
    </unit>
  </file>
</xliff>
```

XLIFF 1.2 keeps units under ``file/body/trans-unit`` and marks placeholders
with ``<x id="0" equiv-text="{{name}}"/>``.

Element names are matched on their local part, so documents with or
without the XLIFF namespace both parse.
"""

import logging
from typing import Optional
from xml.etree import ElementTree as ET

from ..errors import UnsupportedFormatError
from ..models import TranslationEntry

logger = logging.getLogger(__name__)

DEFAULT_UNIT_DATATYPE = "html"


def _local(tag) -> str:
    """Strip the {namespace} prefix from an element tag."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit('}', 1)[-1]


def _child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    for child in elem:
        if _local(child.tag) == name:
            return child
    return None


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local(child.tag) == name]


def parse_xliff(content: str) -> list[TranslationEntry]:
    """
    Parse an XLIFF document into translation entries.

    Args:
        content: Raw XLIFF file content

    Returns:
        List of TranslationEntry objects, in document order

    Raises:
        UnsupportedFormatError: If the version is neither 1.2 nor 2.0
        ET.ParseError: If the content is not well-formed XML
    """
    root = ET.fromstring(content)

    if _local(root.tag) != 'xliff':
        return []

    version = root.get('version')
    if version == '2.0':
        entries = _parse_xliff2(root)
    elif version == '1.2':
        entries = _parse_xliff1(root)
    else:
        raise UnsupportedFormatError(f"Unsupported XLIFF version: {version}")

    logger.debug("Parsed %d unit(s) from XLIFF %s", len(entries), version)
    return entries


def _parse_xliff2(root: ET.Element) -> list[TranslationEntry]:
    entries = []
    file_elem = _child(root, 'file')
    if file_elem is None:
        return entries

    for unit in _children(file_elem, 'unit'):
        segment = _child(unit, 'segment')
        if segment is None:
            logger.debug("Skipping unit '%s' without segment", unit.get('id', ''))
            continue

        target = _child(segment, 'target')
        description = None
        notes = _child(unit, 'notes')
        if notes is not None:
            note = _child(notes, 'note')
            if note is not None:
                description = extract_text(note) or None

        entries.append(TranslationEntry(
            id=unit.get('id', ''),
            source=extract_text(_child(segment, 'source')),
            target=extract_text(target) if target is not None else None,
            description=description,
        ))

    return entries


def _parse_xliff1(root: ET.Element) -> list[TranslationEntry]:
    entries = []
    file_elem = _child(root, 'file')
    if file_elem is None:
        return entries

    body = _child(file_elem, 'body')
    if body is None:
        return entries

    for unit in _children(body, 'trans-unit'):
        target = _child(unit, 'target')
        note = _child(unit, 'note')

        # A non-default datatype rides along in source_file so it survives
        # the next generate_xliff1 call.
        datatype = unit.get('datatype')
        source_file = datatype if datatype and datatype != DEFAULT_UNIT_DATATYPE else None

        entries.append(TranslationEntry(
            id=unit.get('id', ''),
            source=extract_text(_child(unit, 'source')),
            target=extract_text(target) if target is not None else None,
            description=(extract_text(note) or None) if note is not None else None,
            source_file=source_file,
        ))

    return entries


def extract_text(elem: Optional[ET.Element]) -> str:
    """
    Rebuild unit text from mixed content.

    ``ph`` elements contribute their ``disp`` attribute (then ``equiv``,
    then inner text) and ``x`` elements their ``equiv-text``, each at the
    position the element occupied. The result is trimmed.
    """
    if elem is None:
        return ''

    parts = [elem.text or '']
    for child in elem:
        name = _local(child.tag)
        if name == 'ph':
            parts.append(child.get('disp') or child.get('equiv') or child.text or '')
        elif name == 'x':
            parts.append(child.get('equiv-text') or child.get('equiv') or child.text or '')
        else:
            # Paired inline markup (g, pc, ...) keeps its inner text
            parts.append(''.join(child.itertext()))
        parts.append(child.tail or '')

    return ''.join(parts).strip()
