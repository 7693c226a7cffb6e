"""Assembly of namespaced bundles from a specification.

BundleResolver turns a specification such as

    global/global, lang#global/languages, login#login/global

into a NamespacedBundle for one locale: every entry's table is obtained from
the BundleLoader and folded, in specification order, into either the default
table or its namespace's table. Later entries overwrite earlier ones on key
conflicts; tables of entries sharing a namespace are unioned.

Loading is fail-fast: the first MissingResourceError aborts the resolution
and nothing is returned.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nsbundles.bundle import NamespacedBundle, normalize_separator
from nsbundles.constants import DEFAULT_SEPARATOR
from nsbundles.loading import BundleLoader
from nsbundles.locale_utils import normalize_locale
from nsbundles.specification import parse_specification

if TYPE_CHECKING:
    from babel import Locale

__all__ = ["BundleResolver", "ResolverConfig"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for BundleResolver.

    Constructing ``ResolverConfig()`` with no arguments produces a usable
    configuration with separator ".".

    Attributes:
        separator: Splits namespace from key at lookup time. Surrounding
            whitespace is removed; must not be empty afterwards.
        name_prefix: Prepended verbatim to every bundle path (optional)
        name_suffix: Appended verbatim to every bundle path (optional)

    Example:
        >>> config = ResolverConfig(name_prefix="locales/", separator=":")
        >>> config.bundle_path("login/global")
        'locales/login/global'
    """

    separator: str = DEFAULT_SEPARATOR
    name_prefix: str | None = None
    name_suffix: str | None = None

    def __post_init__(self) -> None:
        """Validate and normalize the separator at construction time.

        Raises:
            InvalidConfigurationError: If separator is None, empty or whitespace
        """
        object.__setattr__(self, "separator", normalize_separator(self.separator))

    def bundle_path(self, path: str) -> str:
        """Return the effective loader path for a specification path."""
        return f"{self.name_prefix or ''}{path}{self.name_suffix or ''}"


class BundleResolver:
    """Builds NamespacedBundle instances through a BundleLoader.

    The resolver holds no per-call state and never caches; calling resolve()
    twice loads every table twice. Wrap it in a MessageSource for caching.

    Example:
        >>> loader = MappingBundleLoader({"world": {"en": {"test.key": "value"}}})
        >>> resolver = BundleResolver(loader)
        >>> bundle = resolver.resolve("hello#world", "en")
        >>> bundle.lookup("hello.test.key")
        'value'
    """

    __slots__ = ("_config", "_loader")

    def __init__(self, loader: BundleLoader, config: ResolverConfig | None = None) -> None:
        """Initialize resolver.

        Args:
            loader: Supplies the table of each bundle path and locale
            config: Separator and path affixes (default: ResolverConfig())
        """
        self._loader = loader
        self._config = config if config is not None else ResolverConfig()

    @property
    def config(self) -> ResolverConfig:
        """Configuration applied to every resolution."""
        return self._config

    @property
    def loader(self) -> BundleLoader:
        """Loader used for every bundle path."""
        return self._loader

    def resolve(self, specification: str, locale: str | Locale) -> NamespacedBundle:
        """Load and merge all bundles of a specification for one locale.

        Args:
            specification: Comma-separated ``[namespace#]path`` entries
            locale: Locale code (BCP-47 or POSIX) or babel.Locale

        Returns:
            Bundle stamped with the configured separator and the locale

        Raises:
            MissingResourceError: If any entry's bundle does not exist for the
                locale. Raised for the first such entry; later entries are
                not loaded.
        """
        locale_code = normalize_locale(locale)
        default_table: dict[str, str] | None = None
        namespace_tables: dict[str, dict[str, str]] = {}

        entries = parse_specification(specification)
        for entry in entries:
            path = self._config.bundle_path(entry.path)
            table = self._loader.load(path, locale_code)
            logger.debug(
                "Loaded %d messages from '%s' into %s",
                len(table),
                path,
                entry.namespace or "default namespace",
            )
            if entry.namespace is None:
                if default_table is None:
                    default_table = {}
                default_table.update(table)
            else:
                namespace_tables.setdefault(entry.namespace, {}).update(table)

        logger.info(
            "Resolved %d entries for locale %s: %d namespaces%s",
            len(entries),
            locale_code,
            len(namespace_tables),
            "" if default_table is None else " plus default",
        )
        return NamespacedBundle(
            default_table=default_table,
            namespace_tables=namespace_tables,
            separator=self._config.separator,
            locale=locale_code,
        )
