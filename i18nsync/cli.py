#!/usr/bin/env python3
"""
i18n-sync - keep an all-in-one translation table in sync with XLIFF

Commands:
    sync     - Reconcile freshly extracted keys with the persisted table
    merge    - Combine per-component tables into one table
    split    - Split a merged table back into per-component tables
    export   - Validate the table and write one XLIFF file per locale
    import   - Read translated XLIFF files back into a table
    validate - Check completeness, placeholders and duplicate keys
    formats  - List supported table formats

Typical workflow:
    1. i18n-sync sync --new extracted.json --existing src/i18n/messages.xml
       → Adds new keys with empty slots, keeps every existing translation

    2. [Translators fill in messages.xml]

    3. i18n-sync validate --source src/i18n/messages.xml

    4. i18n-sync export --source src/i18n/messages.xml --out-dir src/locale
       → Writes messages.en.xlf, messages.es.xlf, ...
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import XLIFF_FORMATS, WorkspaceConfig, load_config
from .converters import json_to_multiple_xliff, merge_xliff_files
from .format_handlers import FormatRegistry, read_table, write_table
from .logging_config import setup_logger
from .merger import (
    count_missing,
    merge_multiple_files,
    merge_translations,
    sort_translation_keys,
    split_translations,
)
from .models import TranslationTable, ValidationError
from .validator import (
    calculate_coverage,
    find_unused_keys,
    validate_duplicate_keys,
    validate_translations,
)

logger = logging.getLogger(__name__)


def _load_files(paths: list[str]) -> dict[str, TranslationTable]:
    files = {}
    for path in paths:
        files[path] = read_table(path)
        logger.info("Loaded %s (%d keys)", path, len(files[path]))
    return files


def _load_checked_files(paths: list[str]) -> tuple[dict[str, TranslationTable], list[ValidationError]]:
    """Load table files, reporting malformed ones instead of raising."""
    files = {}
    errors = []
    for path in paths:
        handler = FormatRegistry.detect_format(path)
        content = Path(path).read_text(encoding="utf-8")
        problems = handler.validate_content(content)
        if problems:
            errors.extend(
                ValidationError(type="invalid_format", key="", message=message, file=path)
                for message in problems
            )
            continue
        files[path] = handler.parse(content)
        logger.info("Loaded %s (%d keys)", path, len(files[path]))
    return files, errors


def _combine(files: dict[str, TranslationTable]) -> TranslationTable:
    """Union of several tables for validation; later files win per key."""
    combined: TranslationTable = {}
    for translations in files.values():
        combined.update(translations)
    return combined


def cmd_sync(args, config: WorkspaceConfig) -> dict:
    """Merge a new extraction into the existing translation table."""
    new_translations = read_table(args.new)
    existing_file = args.existing or config.table_file_name()
    existing_path = Path(existing_file)
    existing = read_table(existing_file) if existing_path.exists() else {}
    if not existing_path.exists():
        logger.info("No existing table at %s, starting fresh", existing_file)

    clean_unused = args.clean_unused or config.clean_unused
    merged, result = merge_translations(
        new_translations,
        existing,
        list(config.target_locales),
        preserve_existing=config.preserve_existing and not args.overwrite,
        clean_unused=clean_unused,
        source_locale=config.source_locale,
    )

    if args.sort_keys or config.sort_keys:
        merged = sort_translation_keys(merged)

    output = args.output or existing_file
    write_table(output, merged)

    if result.added:
        logger.info("Added %d keys", len(result.added))
    if result.updated:
        logger.warning("Updated source for %d keys: %s", len(result.updated), ', '.join(result.updated))
    if result.removed and not clean_unused:
        logger.warning("%d unused keys kept (use --clean-unused to remove)", len(result.removed))

    missing = count_missing(merged, list(config.target_locales))
    for locale, count in missing.items():
        if count:
            logger.warning("Missing translations for %s: %d", locale, count)

    return {
        "status": "ok",
        "output": output,
        "total_keys": len(merged),
        "result": result.to_dict(),
        "missing": missing,
        "summary": (
            f"{len(merged)} keys written to {output}: {len(result.added)} added, "
            f"{len(result.updated)} updated, {len(result.removed)} unused."
        ),
    }


def cmd_merge(args, config: WorkspaceConfig) -> dict:
    """Merge per-component files into one table."""
    files = _load_files(args.inputs)
    merged = merge_multiple_files(files)

    if args.sort_keys or config.sort_keys:
        merged = sort_translation_keys(merged)

    output = args.output or config.table_file_name()
    write_table(output, merged)
    logger.info("Created %s (%d keys); original files preserved", output, len(merged))

    return {
        "status": "ok",
        "output": output,
        "total_keys": len(merged),
        "files": len(files),
        "summary": f"Merged {len(files)} files into {output} ({len(merged)} keys).",
    }


def cmd_split(args, config: WorkspaceConfig) -> dict:
    """
    Split a merged table using a manifest of file -> keys.

    Manifest entries without a file extension are component names; their
    files are named with translation_file_naming inside --out-dir.
    """
    translations = read_table(args.source)
    try:
        manifest = json.loads(Path(args.manifest).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in manifest: {e}")
    if not isinstance(manifest, dict):
        raise ValueError("Manifest root must map output files to lists of keys")

    files, missing = split_translations(translations, manifest)
    for key in missing:
        logger.warning("Key '%s' from manifest not found in %s", key, args.source)

    out_dir = Path(args.out_dir)
    created = {}
    for target, component in files.items():
        if Path(target).suffix:
            file_path = target
        else:
            file_path = str(out_dir / config.translation_file_name(target))
        if not component:
            logger.warning("No keys for %s, skipped", target)
            continue
        write_table(file_path, component)
        created[file_path] = len(component)
        logger.info("Created %s (%d keys)", file_path, len(component))

    return {
        "status": "ok",
        "created": created,
        "missing_keys": missing,
        "summary": f"Split {args.source} into {len(created)} files.",
    }


def cmd_export(args, config: WorkspaceConfig) -> dict:
    """Validate and export the table as XLIFF files."""
    files = _load_files(args.source)
    translations = merge_multiple_files(files)
    target_locales = list(config.target_locales)

    validation = validate_translations(
        translations,
        target_locales,
        config.source_locale,
        validate_interpolations=config.validate_interpolations,
    )
    if not validation.valid:
        for error in validation.errors:
            logger.error("%s: %s", error.key, error.message)
        return {
            "status": "error",
            "error": "Validation failed",
            "validation": validation.to_dict(),
            "summary": f"Export aborted: {len(validation.errors)} validation errors.",
        }
    for warning in validation.warnings:
        logger.warning("%s: %s", warning.key, warning.message)

    xliff_format = args.format or config.xliff_format
    documents = json_to_multiple_xliff(translations, config.source_locale, target_locales, xliff_format)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for locale, document in documents.items():
        path = out_dir / config.xliff_file_name(locale)
        path.write_text(document, encoding="utf-8")
        written.append(str(path))
        logger.info("Generated %s", path)

    return {
        "status": "ok",
        "format": xliff_format,
        "files": written,
        "warnings": len(validation.warnings),
        "summary": f"Exported {len(translations)} keys to {len(written)} XLIFF files.",
    }


def _parse_locale_file(value: str) -> tuple[str, str]:
    if '=' not in value:
        raise argparse.ArgumentTypeError(f"Expected LOCALE=FILE, got '{value}'")
    locale, path = value.split('=', 1)
    return locale.strip(), path.strip()


def cmd_import(args, config: WorkspaceConfig) -> dict:
    """Merge per-locale XLIFF files into a table."""
    xliff_files = {}
    for locale, path in args.xliff:
        xliff_files[locale] = Path(path).read_text(encoding="utf-8")

    translations = merge_xliff_files(xliff_files, config.source_locale)
    if config.sort_keys:
        translations = sort_translation_keys(translations)

    output = args.output or config.table_file_name()
    write_table(output, translations)
    logger.info("Created %s (%d keys)", output, len(translations))

    return {
        "status": "ok",
        "output": output,
        "locales": list(xliff_files),
        "total_keys": len(translations),
        "summary": f"Imported {len(xliff_files)} XLIFF files into {output}.",
    }


def cmd_validate(args, config: WorkspaceConfig) -> dict:
    """Run all validations and report coverage."""
    files, format_errors = _load_checked_files(args.source)
    translations = _combine(files)
    target_locales = list(config.target_locales)

    validation = validate_translations(
        translations,
        target_locales,
        config.source_locale,
        validate_interpolations=config.validate_interpolations,
    )
    duplicate_errors = validate_duplicate_keys(files)

    warnings = list(validation.warnings)
    if args.used_keys:
        used_keys = json.loads(Path(args.used_keys).read_text(encoding="utf-8"))
        warnings.extend(find_unused_keys(translations, used_keys))

    coverage = calculate_coverage(translations, target_locales)
    errors = format_errors + duplicate_errors + validation.errors

    for error in errors:
        logger.error("[%s] %s: %s", error.type, error.key, error.message)
    for warning in warnings:
        logger.warning("[%s] %s: %s", warning.type, warning.key, warning.message)
    logger.info(
        "Coverage: %d%% (%d/%d)",
        coverage.coverage_percentage, coverage.complete_translations, coverage.total_translations,
    )

    return {
        "status": "error" if errors else "ok",
        "valid": not errors,
        "errors": [e.to_dict() for e in errors],
        "warnings": [w.to_dict() for w in warnings],
        "coverage": coverage.to_dict(),
        "summary": (
            f"{len(errors)} errors, {len(warnings)} warnings, "
            f"{coverage.coverage_percentage}% coverage."
        ),
    }


def cmd_formats(args, config: WorkspaceConfig) -> dict:
    """List supported table formats."""
    formats = FormatRegistry.list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "xliff_formats": list(XLIFF_FORMATS),
        "summary": f"{len(formats)} table formats supported: {', '.join(f['name'] for f in formats)}",
    }


COMMANDS = {
    "sync": cmd_sync,
    "merge": cmd_merge,
    "split": cmd_split,
    "export": cmd_export,
    "import": cmd_import,
    "validate": cmd_validate,
    "formats": cmd_formats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18n-sync",
        description="i18n-sync - all-in-one translation tables and XLIFF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Table Formats:
  json     - {"key": {"en": "...", "es": "..."}}
  xml      - <translations><translation key="..."><en>...</en></translation></translations>
  yaml     - the JSON table written as YAML

Examples:
  i18n-sync sync --new extracted.json --existing messages.xml --sort-keys
  i18n-sync validate --source header.i18n.json footer.i18n.json
  i18n-sync export --source messages.xml --out-dir src/locale --format xliff
  i18n-sync import --xliff en=messages.en.xlf --xliff es=messages.es.xlf --output messages.json
        """,
    )
    parser.add_argument("--config", help="YAML configuration file (default: i18nsync.yaml)")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--source-locale", help="Source locale (overrides configuration)")
    parser.add_argument("--target-locales", help="Comma-separated target locales (overrides configuration)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sync_parser = subparsers.add_parser("sync", help="Merge new extraction into existing table")
    sync_parser.add_argument("--new", "-n", required=True, help="Freshly extracted table")
    sync_parser.add_argument("--existing", "-e",
                             help="Persisted table, created if missing (default: messages.<output_format>)")
    sync_parser.add_argument("--output", "-o", help="Output file (default: overwrite --existing)")
    sync_parser.add_argument("--clean-unused", action="store_true", help="Drop keys no longer extracted")
    sync_parser.add_argument("--overwrite", action="store_true", help="Replace existing translations with new text")
    sync_parser.add_argument("--sort-keys", action="store_true", help="Sort keys alphabetically")

    merge_parser = subparsers.add_parser("merge", help="Merge per-component tables")
    merge_parser.add_argument("--inputs", "-i", nargs="+", required=True, help="Component table files")
    merge_parser.add_argument("--output", "-o", help="Merged table file (default: messages.<output_format>)")
    merge_parser.add_argument("--sort-keys", action="store_true", help="Sort keys alphabetically")

    split_parser = subparsers.add_parser("split", help="Split merged table by component")
    split_parser.add_argument("--source", "-s", required=True, help="Merged table file")
    split_parser.add_argument("--manifest", "-m", required=True, help="JSON file mapping output file or component -> keys")
    split_parser.add_argument("--out-dir", "-d", default=".", help="Directory for component files (default: .)")

    export_parser = subparsers.add_parser("export", help="Export XLIFF files")
    export_parser.add_argument("--source", "-s", nargs="+", required=True, help="Table file(s)")
    export_parser.add_argument("--out-dir", "-o", required=True, help="Directory for XLIFF files")
    export_parser.add_argument("--format", "-f", choices=list(XLIFF_FORMATS), help="XLIFF format")

    import_parser = subparsers.add_parser("import", help="Import XLIFF files")
    import_parser.add_argument("--xliff", "-x", action="append", required=True, type=_parse_locale_file,
                               help="LOCALE=FILE, repeat per locale")
    import_parser.add_argument("--output", "-o", help="Table file to write (default: messages.<output_format>)")

    validate_parser = subparsers.add_parser("validate", help="Validate tables")
    validate_parser.add_argument("--source", "-s", nargs="+", required=True, help="Table file(s)")
    validate_parser.add_argument("--used-keys", "-u", help="JSON list of keys referenced by templates")

    subparsers.add_parser("formats", help="List supported table formats")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config(args.config).with_overrides(
            source_locale=args.source_locale,
            target_locales=tuple(code.strip() for code in args.target_locales.split(',') if code.strip())
            if args.target_locales else None,
            log_level=args.log_level.upper() if args.log_level else None,
        )
        setup_logger(config.log_level, config.log_file_path, config.log_to_console)

        result = COMMANDS[args.command](args, config)
        print(json.dumps(result, indent=2, ensure_ascii=False))
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)

    if result.get("status") == "error":
        sys.exit(1)


if __name__ == "__main__":
    main()
