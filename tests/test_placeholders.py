#!/usr/bin/env python3
"""
Tests for interpolation placeholder detection.

Tests verify:
1. Names are trimmed and sorted
2. Repeated placeholders are kept (multiset semantics)
3. Text is split into runs for the XLIFF generator
"""

from i18nsync.models import PlaceholderRun, Segments, Text, TextRun
from i18nsync.placeholders import extract_placeholders, placeholders_match, split_interpolations


def test_order_independent():
    assert extract_placeholders("{{b}} {{a}}") == ["a", "b"]
    assert extract_placeholders("{{a}} {{b}}") == ["a", "b"]


def test_whitespace_inside_braces_is_trimmed():
    assert extract_placeholders("Hi {{ name }}, you have {{count }} items") == ["count", "name"]


def test_repeated_placeholder_not_deduplicated():
    assert extract_placeholders("{{x}} and {{x}} and {{a}}") == ["a", "x", "x"]


def test_no_placeholders():
    assert extract_placeholders("Plain text") == []
    assert extract_placeholders("") == []
    assert extract_placeholders("{single} braces") == []


def test_placeholders_match_counts_duplicates():
    assert placeholders_match(["a", "b"], ["b", "a"])
    assert not placeholders_match(["x", "x"], ["x"])


def test_split_plain_text():
    assert split_interpolations("Hello world") == Text("Hello world")


def test_split_mixed_text():
    content = split_interpolations("Hello {{ name }}, bye")
    assert content == Segments([
        TextRun("Hello "),
        PlaceholderRun(name="name", literal="{{name}}"),
        TextRun(", bye"),
    ])


def test_split_placeholder_only():
    content = split_interpolations("{{count}}")
    assert content == Segments([PlaceholderRun(name="count", literal="{{count}}")])
