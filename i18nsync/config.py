#!/usr/bin/env python3
"""
Workspace configuration.

Settings are read from a YAML file and passed explicitly to every
operation; nothing in the package reads ambient state after loading.

Example ``i18nsync.yaml``:
```yaml
source_locale: en
target_locales: [es, fr, de]
output_format: xml
xliff_format: xliff2
preserve_existing: true
clean_unused: false
logging:
  log_level: INFO
  log_to_console: true
```
"""

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

CONFIG_ENV_VAR = "I18NSYNC_CONFIG"
DEFAULT_CONFIG_FILE = "i18nsync.yaml"
DEFAULT_TABLE_STEM = "messages"

OUTPUT_FORMATS = ("json", "xml", "yaml")
XLIFF_FORMATS = ("xliff", "xliff2")


@dataclass(frozen=True)
class WorkspaceConfig:
    """Immutable settings shared by the extract, export and validate steps."""
    source_locale: str = "en"
    target_locales: tuple[str, ...] = ()
    translation_file_naming: str = "{component}.i18n.json"
    output_format: str = "json"
    xliff_format: str = "xliff2"
    xliff_file_naming: str = "messages.{locale}.xlf"
    preserve_existing: bool = True
    clean_unused: bool = False
    validate_interpolations: bool = True
    sort_keys: bool = False

    # Logging
    log_level: str = "INFO"
    log_file_path: Optional[str] = None
    log_to_console: bool = True

    config_file: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"Unknown output_format: {self.output_format}. Available: {', '.join(OUTPUT_FORMATS)}"
            )
        if self.xliff_format not in XLIFF_FORMATS:
            raise ConfigError(
                f"Unknown xliff_format: {self.xliff_format}. Available: {', '.join(XLIFF_FORMATS)}"
            )
        if self.source_locale in self.target_locales:
            raise ConfigError(
                f"Source locale '{self.source_locale}' cannot also be a target locale"
            )

    def xliff_file_name(self, locale: str) -> str:
        """File name of the XLIFF document for a locale, e.g. messages.es.xlf."""
        return self.xliff_file_naming.format(locale=locale)

    def translation_file_name(self, component: str) -> str:
        """File name of a component's table, e.g. header.i18n.json."""
        return self.translation_file_naming.format(component=component)

    def table_file_name(self, stem: str = DEFAULT_TABLE_STEM) -> str:
        """File name of a table written in output_format, e.g. messages.json."""
        return f"{stem}.{self.output_format}"

    def with_overrides(self, **overrides: Any) -> "WorkspaceConfig":
        """Copy with the given settings replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _resolve_config_path(path: Optional[str]) -> Path:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def _parse_locales(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(code.strip() for code in value.split(',') if code.strip())
    if isinstance(value, (list, tuple)):
        return tuple(str(code) for code in value)
    raise ConfigError("target_locales must be a list or a comma-separated string")


def config_from_dict(data: dict[str, Any], config_file: Optional[str] = None) -> WorkspaceConfig:
    """
    Build a WorkspaceConfig from a decoded YAML mapping.

    The ``logging`` section is flattened into the log_* settings.
    Unknown keys are rejected so typos do not pass silently.
    """
    data = dict(data)
    log_config = data.pop('logging', None) or {}
    if not isinstance(log_config, dict):
        raise ConfigError("'logging' section must be a mapping")

    known = {f.name for f in fields(WorkspaceConfig)} - {'config_file'}
    unknown = sorted((set(data) | set(log_config)) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")

    values = {**data, **log_config}
    if 'target_locales' in values:
        values['target_locales'] = _parse_locales(values['target_locales'])
    if 'log_level' in values:
        values['log_level'] = str(values['log_level']).upper()

    return WorkspaceConfig(config_file=config_file, **values)


def load_config(path: Optional[str] = None) -> WorkspaceConfig:
    """
    Load workspace configuration from YAML.

    The file is looked up at ``path``, then ``$I18NSYNC_CONFIG``, then
    ``i18nsync.yaml`` in the working directory. A missing file yields the
    defaults.

    Raises:
        ConfigError: If the file is unreadable, not a mapping or has bad values
    """
    config_path = _resolve_config_path(path)

    if not config_path.exists():
        if path:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return WorkspaceConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as stream:
            loaded = yaml.safe_load(stream)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file '{config_path}': {e}")
    except OSError as e:
        raise ConfigError(f"Could not read configuration file '{config_path}': {e}")

    if loaded is None:
        return WorkspaceConfig(config_file=str(config_path))
    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration file '{config_path}' must contain a YAML mapping")

    return config_from_dict(loaded, config_file=str(config_path))
