"""Namespace-aware message bundle for a single locale.

NamespacedBundle is the read-only result of BundleResolver.resolve(): one
optional default table plus one table per namespace, all for the same locale.

Lookup rules for a raw key and separator ".":
    "login.title"   -> namespace "login" exists: key "title" in that table only
    "error.404"     -> no namespace "error": key "error.404" in the default table
    "title"         -> key "title" in the default table
    ".title"        -> empty namespace part: key ".title" in the default table

Thread Safety:
    Tables are wrapped in MappingProxyType at construction and never mutated
    afterwards. Concurrent lookups need no locking.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from nsbundles.constants import DEFAULT_SEPARATOR
from nsbundles.errors import InvalidConfigurationError, MissingKeyError

__all__ = ["NamespacedBundle", "normalize_separator"]

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, str] = MappingProxyType({})


def normalize_separator(separator: object) -> str:
    """Strip a namespace separator, rejecting None, empty and whitespace-only values.

    Raises:
        InvalidConfigurationError: If nothing is left after stripping
    """
    stripped = separator.strip() if isinstance(separator, str) else ""
    if not stripped:
        msg = "Separator cannot be None or empty"
        raise InvalidConfigurationError(msg, field="separator", value=separator)
    return stripped


class NamespacedBundle:
    """Immutable aggregate of a default table and namespaced tables.

    Instances are normally created by BundleResolver, which merges the
    tables of every specification entry before handing them over. Direct
    construction copies the given tables, so later changes to the caller's
    dicts do not leak into the bundle.

    Example:
        >>> bundle = NamespacedBundle(
        ...     default_table={"title": "Welcome"},
        ...     namespace_tables={"login": {"title": "Sign in"}},
        ...     locale="en",
        ... )
        >>> bundle.lookup("title")
        'Welcome'
        >>> bundle.lookup("login.title")
        'Sign in'

    Attributes:
        separator: Splits namespace from key at lookup time
        locale: Locale code the tables were loaded for
    """

    __slots__ = ("_default", "_locale", "_namespaces", "_separator")

    def __init__(
        self,
        *,
        default_table: Mapping[str, str] | None = None,
        namespace_tables: Mapping[str, Mapping[str, str]] | None = None,
        separator: str = DEFAULT_SEPARATOR,
        locale: str = "",
    ) -> None:
        """Freeze the given tables into a bundle.

        Args:
            default_table: Table for unqualified keys, None if no default entry exists
            namespace_tables: Namespace name to table
            separator: Separator between namespace and key; surrounding
                whitespace is stripped
            locale: Locale code the tables belong to

        Raises:
            InvalidConfigurationError: If separator is None, empty or whitespace
            ValueError: If a namespace name is empty
        """
        separator = normalize_separator(separator)

        namespaces: dict[str, Mapping[str, str]] = {}
        for name, table in (namespace_tables or {}).items():
            if not name:
                msg = "namespace name cannot be empty"
                raise ValueError(msg)
            namespaces[name] = MappingProxyType(dict(table))

        self._separator = separator
        self._locale = locale
        self._default: Mapping[str, str] | None = (
            None if default_table is None else MappingProxyType(dict(default_table))
        )
        self._namespaces: Mapping[str, Mapping[str, str]] = MappingProxyType(namespaces)

    @property
    def separator(self) -> str:
        """Separator between namespace and key."""
        return self._separator

    @property
    def locale(self) -> str:
        """Locale code the tables were loaded for."""
        return self._locale

    @property
    def namespaces(self) -> tuple[str, ...]:
        """Namespace names in the order they were first specified."""
        return tuple(self._namespaces)

    @property
    def has_default(self) -> bool:
        """Check if at least one unnamespaced entry contributed a table."""
        return self._default is not None

    @property
    def default_table(self) -> Mapping[str, str]:
        """Read-only view of the default table (empty if absent)."""
        return _EMPTY if self._default is None else self._default

    def namespace_table(self, namespace: str) -> Mapping[str, str]:
        """Read-only view of one namespace's table.

        Raises:
            KeyError: If the namespace does not exist in this bundle
        """
        return self._namespaces[namespace]

    def _select(self, raw_key: str) -> tuple[str | None, str, Mapping[str, str] | None]:
        namespace, found, key = raw_key.partition(self._separator)
        if found and namespace and namespace in self._namespaces:
            return namespace, key, self._namespaces[namespace]
        return None, raw_key, self._default

    def lookup(self, raw_key: str) -> str:
        """Resolve a qualified or bare key to its localized text.

        Only the first separator splits the key; any further separators are
        part of the key inside the namespace ("a.b.c" -> namespace "a",
        key "b.c").

        Args:
            raw_key: ``namespace<separator>key`` or a bare key

        Returns:
            Localized text

        Raises:
            MissingKeyError: If the selected table has no entry for the key.
                A key addressed to an existing namespace never falls back to
                the default table.
        """
        namespace, key, table = self._select(raw_key)
        if table is not None:
            try:
                return table[key]
            except KeyError:
                pass

        if namespace is None:
            msg = f"No message '{raw_key}' in default table for locale '{self._locale}'"
        else:
            msg = (
                f"No message '{key}' in namespace '{namespace}' "
                f"for locale '{self._locale}'"
            )
        logger.debug("Lookup failed: %s", msg)
        raise MissingKeyError(msg, key=raw_key, namespace=namespace, locale=self._locale)

    def get(self, raw_key: str, default: str | None = None) -> str | None:
        """Resolve a key like lookup(), returning default instead of raising."""
        try:
            return self.lookup(raw_key)
        except MissingKeyError:
            return default

    def __contains__(self, raw_key: object) -> bool:
        if not isinstance(raw_key, str):
            return False
        _, key, table = self._select(raw_key)
        return table is not None and key in table

    def keys(self) -> Iterator[str]:
        """Yield every key that lookup() resolves.

        Default keys are yielded bare, namespaced keys qualified with the
        separator. A default key that is shadowed by a namespace (its prefix
        names an existing namespace) is not reachable and is skipped.
        """
        for key in self.default_table:
            if self._select(key)[0] is None:
                yield key
        for name, table in self._namespaces.items():
            for key in table:
                yield f"{name}{self._separator}{key}"

    def __len__(self) -> int:
        return sum(1 for _ in self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamespacedBundle):
            return NotImplemented
        return (
            self._separator == other._separator
            and self._locale == other._locale
            and self._default == other._default
            and self._namespaces == other._namespaces
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"NamespacedBundle(locale={self._locale!r}, separator={self._separator!r}, "
            f"default={len(self.default_table)} keys, "
            f"namespaces={list(self._namespaces)!r})"
        )
