#!/usr/bin/env python3
"""
JSON format handler for the canonical all-in-one translation table.

Structure:
```json
{
  "app.title": {
    "en": "Hello {{name}}",
    "es": "Hola {{name}}"
  }
}
```
"""

import json

from ..models import TranslationTable
from .base import FormatHandler, normalize_table


class JsonHandler(FormatHandler):
    """Handler for *.json translation tables."""

    @property
    def name(self) -> str:
        return "json"

    @property
    def file_extensions(self) -> list[str]:
        return ["json"]

    def parse(self, content: str) -> TranslationTable:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}")

        return normalize_table(data)

    def serialize(self, table: TranslationTable) -> str:
        return json.dumps(table, indent=2, ensure_ascii=False) + "\n"

    def validate_content(self, content: str) -> list[str]:
        """
        Validate JSON file format.

        Args:
            content: Raw JSON content

        Returns:
            List of validation error messages
        """
        errors = []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            errors.append(f"Invalid JSON syntax: {e.msg} at line {e.lineno}")
            return errors

        if not isinstance(data, dict):
            errors.append("Root element must be an object")
            return errors

        for key, langs in data.items():
            if not isinstance(langs, dict):
                errors.append(f"Entry '{key}' must be an object of locale -> text")

        return errors
