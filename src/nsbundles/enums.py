"""Enumerations for nsbundles type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class EntryKind(StrEnum):
    """Aggregation target of a specification entry.

    StrEnum provides automatic string conversion: str(EntryKind.DEFAULT) == "default"
    """

    DEFAULT = "default"
    """Entry without namespace: merged into the default table"""

    NAMESPACED = "namespaced"
    """Entry with namespace: merged into that namespace's table"""


__all__ = [
    "EntryKind",
]
