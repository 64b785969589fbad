#!/usr/bin/env python3
"""
End-to-end tests for the i18n-sync command line.

Each test runs main() in a temporary workspace and checks the JSON result
printed on stdout and the files written.
"""

import json

import pytest

from i18nsync.cli import main
from i18nsync.config import CONFIG_ENV_VAR
from i18nsync.format_handlers import read_table, write_table


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    (tmp_path / "i18nsync.yaml").write_text(
        "source_locale: en\n"
        "target_locales: [es, fr]\n"
        "logging:\n"
        "  log_level: WARNING\n",
        encoding="utf-8",
    )
    return tmp_path


def run(capsys, *argv) -> dict:
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_formats(workspace, capsys):
    result = run(capsys, "formats")

    assert result["status"] == "ok"
    assert {f["name"] for f in result["formats"]} == {"json", "xml", "yaml"}
    assert result["xliff_formats"] == ["xliff", "xliff2"]


def test_sync_preserves_translations(workspace, capsys):
    write_table("messages.xml", {
        "greeting": {"en": "Hello", "es": "Hola", "fr": ""},
        "old": {"en": "Old", "es": "Viejo", "fr": ""},
    })
    write_table("extracted.json", {
        "greeting": {"en": "Hello"},
        "fresh": {"en": "Fresh"},
    })

    result = run(capsys, "sync", "--new", "extracted.json", "--existing", "messages.xml", "--sort-keys")

    assert result["result"]["added"] == ["fresh"]
    assert result["result"]["removed"] == ["old"]
    assert result["missing"] == {"es": 1, "fr": 3}

    merged = read_table("messages.xml")
    assert list(merged) == ["fresh", "greeting", "old"]
    assert merged["greeting"]["es"] == "Hola"
    assert merged["fresh"] == {"en": "Fresh", "es": "", "fr": ""}


def test_sync_clean_unused_and_missing_existing(workspace, capsys):
    write_table("extracted.json", {"a": {"en": "A"}})

    result = run(capsys, "sync", "--new", "extracted.json", "--existing", "out/table.json", "--clean-unused")

    assert result["result"]["added"] == ["a"]
    assert read_table("out/table.json") == {"a": {"en": "A", "es": "", "fr": ""}}


def test_merge_and_split(workspace, capsys):
    write_table("header.i18n.json", {"title": {"en": "Title", "es": "Titulo"}})
    write_table("footer.i18n.xml", {"copyright": {"en": "(c)", "es": "(c)"}})

    result = run(capsys, "merge", "--inputs", "header.i18n.json", "footer.i18n.xml", "--output", "all.yaml")
    assert result["total_keys"] == 2

    (workspace / "manifest.json").write_text(
        json.dumps({"parts/a.json": ["title"], "parts/b.json": ["copyright", "ghost"]}),
        encoding="utf-8",
    )
    result = run(capsys, "split", "--source", "all.yaml", "--manifest", "manifest.json")

    assert result["created"] == {"parts/a.json": 1, "parts/b.json": 1}
    assert result["missing_keys"] == ["ghost"]
    assert read_table("parts/a.json") == {"title": {"en": "Title", "es": "Titulo"}}


def test_export_and_import_round_trip(workspace, capsys):
    table = {
        "greeting": {"en": "Hello {{name}}", "es": "Hola {{name}}", "fr": "Bonjour {{name}}"},
        "home": {"en": "Home", "es": "Inicio", "fr": ""},
    }
    write_table("messages.json", table)

    result = run(capsys, "export", "--source", "messages.json", "--out-dir", "locale", "--format", "xliff")

    assert result["status"] == "ok"
    assert sorted(p.name for p in (workspace / "locale").iterdir()) == [
        "messages.en.xlf", "messages.es.xlf", "messages.fr.xlf",
    ]
    assert 'version="1.2"' in (workspace / "locale" / "messages.es.xlf").read_text(encoding="utf-8")

    result = run(
        capsys, "import",
        "--xliff", "en=locale/messages.en.xlf",
        "--xliff", "es=locale/messages.es.xlf",
        "--xliff", "fr=locale/messages.fr.xlf",
        "--output", "imported.json",
    )

    assert result["locales"] == ["en", "es", "fr"]
    assert read_table("imported.json") == table


def test_export_refuses_invalid_table(workspace, capsys):
    write_table("messages.json", {"k": {"en": "Hi {{name}}", "es": "Hola", "fr": "Salut {{name}}"}})

    with pytest.raises(SystemExit) as exc:
        main(["export", "--source", "messages.json", "--out-dir", "locale"])

    assert exc.value.code == 1
    result = json.loads(capsys.readouterr().out)
    assert result["status"] == "error"
    assert result["validation"]["errors"][0]["type"] == "invalid_interpolation"
    assert not (workspace / "locale").exists()


def test_validate_reports_coverage(workspace, capsys):
    write_table("messages.json", {
        "a": {"en": "A", "es": "A-es", "fr": "A-fr"},
        "b": {"en": "B", "es": "B-es", "fr": ""},
    })
    (workspace / "used.json").write_text(json.dumps(["a"]), encoding="utf-8")

    result = run(capsys, "validate", "--source", "messages.json", "--used-keys", "used.json")

    assert result["valid"] is True
    assert result["coverage"]["coverage_percentage"] == 75
    assert result["coverage"]["by_language"]["fr"]["percentage"] == 50
    assert {w["type"] for w in result["warnings"]} == {"incomplete_translation", "unused_key"}


def test_validate_duplicate_keys_fail(workspace, capsys):
    write_table("a.json", {"k": {"en": "A", "es": "A", "fr": "A"}})
    write_table("b.json", {"k": {"en": "B", "es": "B", "fr": "B"}})

    with pytest.raises(SystemExit) as exc:
        main(["validate", "--source", "a.json", "b.json"])

    assert exc.value.code == 1
    result = json.loads(capsys.readouterr().out)
    assert [e["type"] for e in result["errors"]] == ["duplicate_key"]


def test_cli_overrides_target_locales(workspace, capsys):
    write_table("messages.json", {"a": {"en": "A", "de": ""}})

    result = run(capsys, "--target-locales", "de", "validate", "--source", "messages.json")

    assert list(result["coverage"]["by_language"]) == ["de"]


def test_errors_reported_as_json(workspace, capsys):
    (workspace / "table.po").write_text("", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["validate", "--source", "table.po"])

    assert exc.value.code == 1
    error = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert error["status"] == "error"
    assert error["error_type"] == "UnsupportedFormatError"


def test_validate_reports_malformed_files(workspace, capsys):
    write_table("good.json", {"a": {"en": "A", "es": "A", "fr": "A"}})
    (workspace / "broken.json").write_text('{"k": "oops"}', encoding="utf-8")
    (workspace / "broken.xml").write_text("<resources/>", encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        main(["validate", "--source", "good.json", "broken.json", "broken.xml"])

    assert exc.value.code == 1
    result = json.loads(capsys.readouterr().out)
    assert [(e["type"], e["file"]) for e in result["errors"]] == [
        ("invalid_format", "broken.json"),
        ("invalid_format", "broken.xml"),
    ]
    assert result["errors"][0]["message"] == "Entry 'k' must be an object of locale -> text"
    assert result["coverage"]["total_keys"] == 1


def test_default_table_path_follows_output_format(workspace, capsys):
    with open(workspace / "i18nsync.yaml", "a", encoding="utf-8") as f:
        f.write("output_format: xml\n")
    write_table("header.i18n.json", {"title": {"en": "Title", "es": "Titulo", "fr": ""}})

    result = run(capsys, "merge", "--inputs", "header.i18n.json")
    assert result["output"] == "messages.xml"

    write_table("extracted.json", {"title": {"en": "Title"}, "fresh": {"en": "Fresh"}})
    result = run(capsys, "sync", "--new", "extracted.json")

    assert result["output"] == "messages.xml"
    assert result["result"]["added"] == ["fresh"]
    assert read_table("messages.xml")["title"]["es"] == "Titulo"


def test_split_names_components(workspace, capsys):
    write_table("all.json", {"title": {"en": "Title"}, "copyright": {"en": "(c)"}})
    (workspace / "manifest.json").write_text(
        json.dumps({"header": ["title"], "parts/footer.yaml": ["copyright"]}),
        encoding="utf-8",
    )

    result = run(capsys, "split", "--source", "all.json", "--manifest", "manifest.json", "--out-dir", "components")

    assert result["created"] == {"components/header.i18n.json": 1, "parts/footer.yaml": 1}
    assert read_table("components/header.i18n.json") == {"title": {"en": "Title"}}
