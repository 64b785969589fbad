#!/usr/bin/env python3
"""
XLIFF interchange support.

Supported versions:
- XLIFF 2.0 (format name 'xliff2')
- XLIFF 1.2 (format name 'xliff')
"""

from .generator import (
    FORMAT_VERSIONS,
    generate_xliff,
    generate_xliff1,
    generate_xliff2,
    process_interpolations,
)
from .parser import extract_text, parse_xliff

__all__ = [
    'FORMAT_VERSIONS',
    'extract_text',
    'generate_xliff',
    'generate_xliff1',
    'generate_xliff2',
    'parse_xliff',
    'process_interpolations',
]
