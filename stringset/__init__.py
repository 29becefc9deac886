"""
Set-of-strings container with all-or-nothing bulk operations.
"""

from __future__ import annotations

from .errors import ConfigError, NotAStringError, StringSetError
from .string_set import MapStringSet, StringSet, new, new_with


__all__ = [
    "ConfigError",
    "MapStringSet",
    "NotAStringError",
    "StringSet",
    "StringSetError",
    "new",
    "new_with",
]
