#!/usr/bin/env python3
"""
Interpolation placeholder detection.

Templates interpolate runtime values with double braces, e.g.
``Hello {{ name }}``. Both the validator and the XLIFF generator need to
find these markers, so the pattern lives here.
"""

import re

from .models import Content, PlaceholderRun, Segments, Text, TextRun

INTERPOLATION_PATTERN = re.compile(r'\{\{([^}]+)\}\}')


def extract_placeholders(text: str) -> list[str]:
    """
    Extract interpolation names from text.

    Names are trimmed and sorted but not deduplicated, so two lists can be
    compared as multisets with ``==``.

    Args:
        text: Text to scan

    Returns:
        Sorted list of placeholder names, one per occurrence
    """
    if not text:
        return []
    return sorted(match.group(1).strip() for match in INTERPOLATION_PATTERN.finditer(text))


def placeholders_match(source: list[str], target: list[str]) -> bool:
    """Check two placeholder lists for equality regardless of order."""
    return sorted(source) == sorted(target)


def split_interpolations(text: str) -> Content:
    """
    Split text into literal runs and placeholder runs.

    Returns Text when the string has no interpolation at all, so callers
    can emit it unchanged; otherwise Segments in document order.
    """
    runs = []
    last_index = 0

    for match in INTERPOLATION_PATTERN.finditer(text):
        if match.start() > last_index:
            runs.append(TextRun(text[last_index:match.start()]))
        name = match.group(1).strip()
        runs.append(PlaceholderRun(name=name, literal=f"{{{{{name}}}}}"))
        last_index = match.end()

    if not runs:
        return Text(text)

    if last_index < len(text):
        runs.append(TextRun(text[last_index:]))

    return Segments(runs)
