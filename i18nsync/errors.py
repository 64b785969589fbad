#!/usr/bin/env python3
"""Exceptions raised by i18nsync."""


class UnsupportedFormatError(ValueError):
    """Raised for an XLIFF version, output format or file extension we cannot handle."""


class ConfigError(ValueError):
    """Raised when the workspace configuration cannot be used."""
