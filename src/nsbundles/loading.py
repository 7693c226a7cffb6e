"""Bundle loading infrastructure for BundleResolver.

Provides the protocol for bundle loaders and two implementations: an
in-memory loader and a filesystem loader reading gettext catalogs.

Components:
    BundleLoader - Protocol for loading message tables (structural typing)
    MappingBundleLoader - In-memory loader over nested dicts
    PathBundleLoader - Disk-based .po catalog loader with path-traversal prevention
    search_order - Locale candidate chain shared by both loaders

Both loaders search a locale from most to least specific, then the optional
fallback locale, then the locale-less base table:

    en_US -> en -> <fallback chain> -> <base>

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from babel.messages.pofile import read_po

from nsbundles.constants import DEFAULT_BUNDLE_EXTENSION
from nsbundles.errors import MissingResourceError
from nsbundles.locale_utils import locale_candidates, normalize_locale
from nsbundles.types import BundlePath, LocaleCode, MessageTable

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "BundleLoader",
    # Concrete loaders
    "MappingBundleLoader",
    "PathBundleLoader",
    # Helpers
    "search_order",
]

logger = logging.getLogger(__name__)


class BundleLoader(Protocol):
    """Protocol for loading the message table of one bundle path and locale.

    Any object with a matching load() method is accepted; locale fallback
    policy belongs to the loader, not to the resolver.

    Example:
        >>> class JsonLoader:
        ...     def load(self, path: str, locale: str) -> Mapping[str, str]:
        ...         file = Path(f"{path}.{locale}.json")
        ...         if not file.exists():
        ...             raise MissingResourceError(f"No bundle {path}", path=path, locale=locale)
        ...         return json.loads(file.read_text(encoding="utf-8"))
        ...
        >>> resolver = BundleResolver(JsonLoader())
    """

    def load(self, path: BundlePath, locale: LocaleCode) -> MessageTable:
        """Load the message table for a bundle path.

        Args:
            path: Effective bundle path (prefix and suffix already applied)
            locale: POSIX locale code

        Returns:
            Mapping of message keys to localized text

        Raises:
            MissingResourceError: If no table exists for this path and locale
        """
        ...


def search_order(
    locale: LocaleCode, fallback_locale: LocaleCode | None = None
) -> tuple[LocaleCode | None, ...]:
    """Return the locales to try for a bundle, ending with None for the base.

    Example:
        >>> search_order("de_AT", "en")
        ('de_AT', 'de', 'en', None)
    """
    chain = list(locale_candidates(locale))
    if fallback_locale is not None:
        chain.extend(locale_candidates(fallback_locale))
    return (*dict.fromkeys(chain), None)


def _not_found(path: BundlePath, locale: LocaleCode) -> MissingResourceError:
    msg = f"Can't find bundle for base name '{path}', locale '{locale}'"
    return MissingResourceError(msg, path=path, locale=locale)


class MappingBundleLoader:
    """In-memory loader over ``{path: {locale: table}}``.

    The locale key None holds the base table used when no locale candidate
    matches. Locale keys are normalized, so "en-US" and "en_US" are the same.

    Meant for tests, examples and small embedded catalogs. With
    ``record_calls=True`` (the default) every load() call is appended to
    ``calls`` as ``(path, locale)``; the list is never trimmed, so pass
    ``record_calls=False`` for long-lived loaders.

    Example:
        >>> loader = MappingBundleLoader({
        ...     "world": {"en": {"test.key": "value"}},
        ...     "global": {None: {"title": "Title"}},
        ... })
        >>> loader.load("world", "en_US")["test.key"]
        'value'
    """

    __slots__ = ("_fallback_locale", "_record_calls", "_tables", "calls")

    def __init__(
        self,
        tables: Mapping[BundlePath, Mapping[LocaleCode | None, MessageTable]],
        *,
        fallback_locale: LocaleCode | None = None,
        record_calls: bool = True,
    ) -> None:
        self._tables: dict[BundlePath, dict[LocaleCode | None, MessageTable]] = {
            path: {
                (None if locale is None else normalize_locale(locale)): MappingProxyType(
                    dict(table)
                )
                for locale, table in by_locale.items()
            }
            for path, by_locale in tables.items()
        }
        self._fallback_locale = fallback_locale
        self._record_calls = record_calls
        self.calls: list[tuple[BundlePath, LocaleCode]] = []

    def load(self, path: BundlePath, locale: LocaleCode) -> MessageTable:
        """Return the most specific table for path and locale.

        Raises:
            MissingResourceError: If the path is unknown or no candidate matches
        """
        if self._record_calls:
            self.calls.append((path, locale))
        by_locale = self._tables.get(path)
        if by_locale is not None:
            for candidate in search_order(locale, self._fallback_locale):
                if candidate in by_locale:
                    return by_locale[candidate]
        raise _not_found(path, locale)


@dataclass(frozen=True, slots=True)
class PathBundleLoader:
    """File system loader for gettext catalogs.

    For bundle path ``messages/login`` and locale ``en_US`` the candidates are
    ``messages/login_en_US.po``, ``messages/login_en.po``, then the fallback
    locale's candidates, then ``messages/login.po``, all relative to root_dir.
    Catalogs are parsed with Babel.

    Only entries with a non-fuzzy translation are kept, keyed by message id.
    Plural entries contribute their first form.

    Security:
        Locale codes containing path separators or ".." are rejected.
        Every candidate path is validated against the resolved root directory.

    Example:
        >>> loader = PathBundleLoader("locales")
        >>> table = loader.load("messages/login", "en_US")

    Attributes:
        root_dir: Directory all bundle paths are relative to
        extension: Catalog file extension (default ".po")
        fallback_locale: Locale searched after the requested one (optional)
    """

    root_dir: str
    extension: str = DEFAULT_BUNDLE_EXTENSION
    fallback_locale: LocaleCode | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory."""
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Validate locale code for path traversal attacks.

        Raises:
            ValueError: If locale contains unsafe path components
        """
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    def candidate_paths(self, path: BundlePath, locale: LocaleCode) -> tuple[Path, ...]:
        """Return the catalog files tried for path and locale, in order.

        Raises:
            ValueError: If locale is unsafe or a candidate escapes root_dir
        """
        self._validate_locale(locale)
        result: list[Path] = []
        for candidate in search_order(locale, self.fallback_locale):
            name = path if candidate is None else f"{path}_{candidate}"
            full_path = (self._resolved_root / f"{name}{self.extension}").resolve()
            if not full_path.is_relative_to(self._resolved_root):
                msg = (
                    f"Path traversal detected: resolved path escapes root directory. "
                    f"path='{path}', locale='{locale}'"
                )
                raise ValueError(msg)
            result.append(full_path)
        return tuple(result)

    def load(self, path: BundlePath, locale: LocaleCode) -> MessageTable:
        """Load the most specific catalog for path and locale.

        Raises:
            MissingResourceError: If path is empty or no candidate file exists
            ValueError: If locale or path would escape root_dir
            OSError: If an existing catalog cannot be read
        """
        if not path.strip():
            raise _not_found(path, locale)

        for full_path in self.candidate_paths(path, locale):
            if full_path.is_file():
                table = self._read_catalog(full_path)
                logger.debug("Loaded %d messages from %s", len(table), full_path)
                return table
        raise _not_found(path, locale)

    @staticmethod
    def _read_catalog(full_path: Path) -> MessageTable:
        with full_path.open("rb") as fileobj:
            catalog = read_po(fileobj)

        table: dict[str, str] = {}
        for message in catalog:
            if not message.id or message.fuzzy:
                continue
            key = message.id[0] if isinstance(message.id, tuple) else message.id
            text = message.string[0] if isinstance(message.string, tuple) else message.string
            if text:
                table[key] = text
        return MappingProxyType(table)
