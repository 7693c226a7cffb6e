"""Parsing of bundle specifications.

A specification lists the bundles that make up one message source, each
optionally assigned to a namespace:

    global/global, lang#global/languages, login#login/global

Entries are separated by ``,``. Inside an entry the first ``#`` separates
the namespace from the bundle path. Entries without a namespace (or with an
empty one) form the default namespace.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from nsbundles.constants import ENTRY_DELIMITER, NAMESPACE_MARKER
from nsbundles.enums import EntryKind

__all__ = [
    "SpecificationEntry",
    "join_specifications",
    "parse_specification",
]


@dataclass(frozen=True, slots=True)
class SpecificationEntry:
    """One ``[namespace#]path`` entry of a specification.

    Attributes:
        namespace: Trimmed namespace, None when absent or empty
        path: Trimmed bundle path; may be empty for a malformed entry such
              as ``"hello#"``, in which case loading it fails
    """

    namespace: str | None
    path: str

    @property
    def kind(self) -> EntryKind:
        """Aggregation target of this entry."""
        if self.namespace is None:
            return EntryKind.DEFAULT
        return EntryKind.NAMESPACED

    def __str__(self) -> str:
        if self.namespace is None:
            return self.path
        return f"{self.namespace}{NAMESPACE_MARKER}{self.path}"


def _parse_entry(token: str) -> SpecificationEntry:
    namespace, marker, path = token.partition(NAMESPACE_MARKER)
    if not marker:
        return SpecificationEntry(None, token.strip())
    return SpecificationEntry(namespace.strip() or None, path.strip())


def parse_specification(specification: str) -> tuple[SpecificationEntry, ...]:
    """Split a specification into its entries, preserving order.

    Whitespace-only tokens (including the empty token between two
    consecutive commas) produce no entry.

    Args:
        specification: Comma-separated ``[namespace#]path`` entries

    Returns:
        Entries in specification order

    Example:
        >>> parse_specification("global, lang#languages/lang")
        (SpecificationEntry(namespace=None, path='global'),
         SpecificationEntry(namespace='lang', path='languages/lang'))
        >>> parse_specification(" #world ,, ")
        (SpecificationEntry(namespace=None, path='world'),)
    """
    return tuple(
        _parse_entry(token.strip())
        for token in specification.split(ENTRY_DELIMITER)
        if token.strip()
    )


def join_specifications(*specifications: str) -> str:
    """Combine several specification strings into one.

    Blank parts are dropped; surrounding whitespace of each part is kept
    out of the result.

    Example:
        >>> join_specifications("global/global, lang#languages", "login#login/global")
        'global/global, lang#languages,login#login/global'
    """
    return ENTRY_DELIMITER.join(part.strip() for part in specifications if part.strip())
