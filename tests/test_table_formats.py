#!/usr/bin/env python3
"""
Tests for translation table file formats.

Tests verify:
1. Custom XML: exact layout, escaping, empty slots, keyless records
2. XML / JSON / YAML round-trips
3. Registry lookup by name and extension
"""

import json
import logging
from xml.etree import ElementTree as ET

import pytest

from i18nsync.errors import UnsupportedFormatError
from i18nsync.format_handlers import (
    FormatRegistry,
    build_translation_xml,
    parse_translation_xml,
    read_table,
    write_table,
)


def test_build_xml_layout():
    output = build_translation_xml({"app.title": {"en": "Hello", "es": "Hola", "fr": ""}})

    assert output == (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<translations>\n'
        '  <translation key="app.title">\n'
        '    <en>Hello</en>\n'
        '    <es>Hola</es>\n'
        '    <fr/>\n'
        '  </translation>\n'
        '</translations>\n'
    )


def test_build_xml_escapes_text():
    output = build_translation_xml({"k": {"en": "a < b & c > d"}})
    assert "<en>a &lt; b &amp; c &gt; d</en>" in output


def test_xml_round_trip(table):
    table["odd"] = {"en": "Fish & <Chips>", "pt-BR": "  spaced  ", "zh_CN": ""}
    assert parse_translation_xml(build_translation_xml(table)) == table


def test_xml_round_trip_keeps_carriage_returns():
    table = {"k": {"en": "line1\r\nline2", "es": "a\rb"}}
    output = build_translation_xml(table)

    assert "<en>line1&#13;\nline2</en>" in output
    assert parse_translation_xml(output) == table


def test_build_xml_rejects_invalid_locale():
    with pytest.raises(ValueError, match="Locale 'en US' of key 'k'"):
        build_translation_xml({"k": {"en US": "Hello"}})
    with pytest.raises(ValueError):
        build_translation_xml({"k": {"x:en": "Hello"}})


def test_parse_xml_keeps_document_order():
    content = """<translations>
  <translation key="b"><fr>B</fr><en>Bee</en></translation>
  <translation key="a"><en>A</en></translation>
</translations>"""
    result = parse_translation_xml(content)

    assert list(result) == ["b", "a"]
    assert list(result["b"]) == ["fr", "en"]


def test_parse_xml_skips_records_without_key():
    content = """<translations>
  <translation><en>Orphan</en></translation>
  <translation key="ok"><en>Fine</en><xx-custom/></translation>
</translations>"""

    assert parse_translation_xml(content) == {"ok": {"en": "Fine", "xx-custom": ""}}


def test_parse_xml_skips_keyless_records_quietly(caplog):
    with caplog.at_level(logging.DEBUG, logger="i18nsync"):
        parse_translation_xml("<translations><translation><en>Orphan</en></translation></translations>")

    assert [record.levelno for record in caplog.records] == [logging.DEBUG]


def test_parse_xml_other_root_is_empty():
    assert parse_translation_xml("<resources/>") == {}
    assert parse_translation_xml("<translations/>") == {}


def test_parse_xml_malformed():
    with pytest.raises(ET.ParseError):
        parse_translation_xml("<translations><translation key='a'>")


def test_xml_validate_content():
    handler = FormatRegistry.get_handler("xml")

    assert handler.validate_content(build_translation_xml({"k": {"en": "x"}})) == []
    assert handler.validate_content("<resources/>") == ["Root element must be 'translations', found 'resources'"]
    assert handler.validate_content("<translations><translation/></translations>") == [
        "<translation> #1 has no key attribute"
    ]


def test_json_handler(table):
    handler = FormatRegistry.get_handler("json")
    content = handler.serialize(table)

    assert json.loads(content) == table
    assert handler.parse(content) == table
    assert handler.parse('{"k": {"en": null, "n": 3}}') == {"k": {"en": "", "n": "3"}}


def test_json_handler_rejects_bad_shapes():
    handler = FormatRegistry.get_handler("json")

    with pytest.raises(ValueError, match="Invalid JSON"):
        handler.parse("{not json")
    with pytest.raises(ValueError):
        handler.parse('["a"]')
    with pytest.raises(ValueError):
        handler.parse('{"k": "text"}')
    assert handler.validate_content('{"k": "text"}') == ["Entry 'k' must be an object of locale -> text"]


def test_yaml_handler(table):
    handler = FormatRegistry.get_handler("yaml")
    content = handler.serialize(table)

    assert handler.parse(content) == table
    assert handler.parse("") == {}
    assert handler.parse(handler.serialize({})) == {}


def test_yaml_handler_invalid():
    handler = FormatRegistry.get_handler("yaml")

    with pytest.raises(ValueError, match="Invalid YAML"):
        handler.parse("key: [unclosed")
    assert handler.validate_content("- a\n- b\n") == ["YAML root must be a mapping (dictionary)"]


def test_registry_lookup():
    assert FormatRegistry.get_handler_for_extension(".json").name == "json"
    assert FormatRegistry.get_handler_for_extension("YML").name == "yaml"
    assert FormatRegistry.detect_format("src/app/header.i18n.xml").name == "xml"
    assert {f["name"] for f in FormatRegistry.list_formats()} == {"json", "xml", "yaml"}


def test_registry_unknown():
    with pytest.raises(UnsupportedFormatError):
        FormatRegistry.get_handler("po")
    with pytest.raises(UnsupportedFormatError):
        FormatRegistry.detect_format("messages.po")


@pytest.mark.parametrize("name", ["table.json", "table.xml", "table.yaml"])
def test_read_write_table(tmp_path, table, name):
    path = tmp_path / "nested" / name
    write_table(str(path), table)

    assert read_table(str(path)) == table
