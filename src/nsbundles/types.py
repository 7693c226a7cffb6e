"""Type aliases for the bundle domain.

Provides semantic type aliases used throughout the package and by user code
when annotating loader implementations and lookup call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from typing import TypeAlias

__all__ = [
    "BundlePath",
    "LocaleCode",
    "MessageKey",
    "MessageTable",
]

LocaleCode: TypeAlias = str
"""POSIX or BCP-47 locale code (e.g., 'en', 'en_US', 'zh-Hans-CN')."""

BundlePath: TypeAlias = str
"""Location of a text store as handed to a loader (e.g., 'messages/login')."""

MessageKey: TypeAlias = str
"""Key of a localized message, qualified ('login.title') or bare ('title')."""

MessageTable: TypeAlias = Mapping[str, str]
"""Locale-specific table of message keys to localized text."""
