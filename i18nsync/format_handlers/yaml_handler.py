#!/usr/bin/env python3
"""
YAML format handler for translation tables.

Same shape as the JSON table, written as YAML for teams that prefer it:
```yaml
app.title:
  en: Hello {{name}}
  es: Hola {{name}}
```
"""

import yaml

from ..models import TranslationTable
from .base import FormatHandler, normalize_table


class YamlHandler(FormatHandler):
    """Handler for *.yml / *.yaml translation tables."""

    @property
    def name(self) -> str:
        return "yaml"

    @property
    def file_extensions(self) -> list[str]:
        return ["yml", "yaml"]

    def parse(self, content: str) -> TranslationTable:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}")

        return normalize_table(data)

    def serialize(self, table: TranslationTable) -> str:
        if not table:
            return "{}\n"
        return yaml.dump(
            table,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )

    def validate_content(self, content: str) -> list[str]:
        """Validate YAML file format."""
        errors = []

        try:
            data = yaml.safe_load(content)
            if data is not None and not isinstance(data, dict):
                errors.append("YAML root must be a mapping (dictionary)")
        except yaml.YAMLError as e:
            errors.append(f"Invalid YAML syntax: {e}")

        return errors
