#!/usr/bin/env python3
"""
XLIFF 1.2 and 2.0 generator.

Documents are written line by line with two-space indentation. Unit text
containing {{name}} interpolations is emitted as mixed content with one
placeholder element per interpolation; text without interpolations is
written as a plain string.
"""

from typing import Optional
from xml.sax.saxutils import escape, quoteattr

from ..errors import UnsupportedFormatError
from ..models import Content, PlaceholderRun, Segments, Text, XliffUnit
from ..placeholders import split_interpolations
from .parser import DEFAULT_UNIT_DATATYPE

XLIFF2_NAMESPACE = "urn:oasis:names:tc:xliff:document:2.0"
XLIFF1_NAMESPACE = "urn:oasis:names:tc:xliff:document:1.2"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
FILE_ID = "ngi18n"
FILE_ORIGINAL = "ng.template"
INDENT = "  "

# Carriage returns survive parsing only as character references.
TEXT_ENTITIES = {"\r": "&#13;"}

FORMAT_VERSIONS = {
    "xliff": "1.2",
    "xliff2": "2.0",
}


def _attrs(attributes: list[tuple[str, Optional[str]]]) -> str:
    """Render attributes in order, dropping unset ones."""
    return ''.join(f' {name}={quoteattr(value)}' for name, value in attributes if value is not None)


def _element(depth: int, tag: str, inner: str = '', attributes=None) -> str:
    """Render a single-line element, self-closing when empty."""
    attrs = _attrs(attributes or [])
    if not inner:
        return f"{INDENT * depth}<{tag}{attrs}/>"
    return f"{INDENT * depth}<{tag}{attrs}>{inner}</{tag}>"


def _render_content(content: Content, version: str) -> str:
    """Render unit text as inline XML."""
    if isinstance(content, Text):
        return escape(content.text, TEXT_ENTITIES)

    parts = []
    ph_id = 0
    for run in content.runs:
        if isinstance(run, PlaceholderRun):
            if version == '2.0':
                parts.append(f'<ph{_attrs([("id", str(ph_id)), ("equiv", "INTERPOLATION"), ("disp", run.literal)])}/>')
            else:
                parts.append(f'<x{_attrs([("id", str(ph_id)), ("equiv-text", run.literal)])}/>')
            ph_id += 1
        else:
            parts.append(escape(run.text, TEXT_ENTITIES))
    return ''.join(parts)


def process_interpolations(text: str, version: str = '2.0') -> str:
    """Convert {{var}} markers in text to XLIFF placeholder markup."""
    return _render_content(split_interpolations(text), version)


def generate_xliff2(
    units: list[XliffUnit],
    source_language: str,
    target_language: Optional[str] = None,
) -> str:
    """
    Generate XLIFF 2.0 file content.

    Args:
        units: Units to write
        source_language: Value of srcLang
        target_language: Value of trgLang; targets are only written when set

    Returns:
        Complete XLIFF document
    """
    lines = [
        XML_DECLARATION,
        f'<xliff{_attrs([("version", "2.0"), ("xmlns", XLIFF2_NAMESPACE), ("srcLang", source_language), ("trgLang", target_language)])}>',
    ]
    file_attrs = _attrs([("id", FILE_ID), ("original", FILE_ORIGINAL)])

    if not units:
        lines.append(f'{INDENT}<file{file_attrs}/>')
    else:
        lines.append(f'{INDENT}<file{file_attrs}>')
        for unit in units:
            lines.extend(_generate_unit2(unit, target_language))
        lines.append(f'{INDENT}</file>')

    lines.append('</xliff>')
    return '\n'.join(lines)


def _generate_unit2(unit: XliffUnit, target_language: Optional[str]) -> list[str]:
    lines = [f'{INDENT * 2}<unit{_attrs([("id", unit.id)])}>']

    if unit.note:
        lines.append(f'{INDENT * 3}<notes>')
        lines.append(_element(4, 'note', escape(unit.note, TEXT_ENTITIES)))
        lines.append(f'{INDENT * 3}</notes>')

    lines.append(f'{INDENT * 3}<segment>')
    lines.append(_element(4, 'source', process_interpolations(unit.source, '2.0')))
    if target_language and unit.target:
        lines.append(_element(4, 'target', process_interpolations(unit.target, '2.0')))
    lines.append(f'{INDENT * 3}</segment>')

    lines.append(f'{INDENT * 2}</unit>')
    return lines


def generate_xliff1(
    units: list[XliffUnit],
    source_language: str,
    target_language: Optional[str] = None,
) -> str:
    """
    Generate XLIFF 1.2 file content.

    Args:
        units: Units to write
        source_language: Value of source-language
        target_language: Value of target-language; targets are only written when set

    Returns:
        Complete XLIFF document
    """
    file_attrs = _attrs([
        ("source-language", source_language),
        ("target-language", target_language),
        ("datatype", "plaintext"),
        ("original", FILE_ORIGINAL),
    ])
    lines = [
        XML_DECLARATION,
        f'<xliff{_attrs([("version", "1.2"), ("xmlns", XLIFF1_NAMESPACE)])}>',
        f'{INDENT}<file{file_attrs}>',
    ]

    if not units:
        lines.append(f'{INDENT * 2}<body/>')
    else:
        lines.append(f'{INDENT * 2}<body>')
        for unit in units:
            lines.extend(_generate_unit1(unit, target_language))
        lines.append(f'{INDENT * 2}</body>')

    lines.append(f'{INDENT}</file>')
    lines.append('</xliff>')
    return '\n'.join(lines)


def _generate_unit1(unit: XliffUnit, target_language: Optional[str]) -> list[str]:
    datatype = unit.source_file or DEFAULT_UNIT_DATATYPE
    lines = [f'{INDENT * 3}<trans-unit{_attrs([("id", unit.id), ("datatype", datatype)])}>']

    lines.append(_element(4, 'source', process_interpolations(unit.source, '1.2')))
    if target_language and unit.target:
        lines.append(_element(4, 'target', process_interpolations(unit.target, '1.2')))
    if unit.note:
        lines.append(_element(4, 'note', escape(unit.note, TEXT_ENTITIES)))

    lines.append(f'{INDENT * 3}</trans-unit>')
    return lines


def generate_xliff(
    units: list[XliffUnit],
    source_language: str,
    target_language: Optional[str],
    format: str,
) -> str:
    """
    Generate an XLIFF document in the requested format.

    Args:
        units: Units to write
        source_language: Source locale code
        target_language: Target locale code, or None for a source-only file
        format: 'xliff2' for XLIFF 2.0, 'xliff' for XLIFF 1.2

    Returns:
        Complete XLIFF document
    """
    if format not in FORMAT_VERSIONS:
        available = ', '.join(FORMAT_VERSIONS)
        raise UnsupportedFormatError(f"Unknown XLIFF format: {format}. Available: {available}")

    if format == 'xliff2':
        return generate_xliff2(units, source_language, target_language)
    return generate_xliff1(units, source_language, target_language)
