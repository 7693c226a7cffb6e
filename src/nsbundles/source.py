"""Cached message source over one or more bundle specifications.

MessageSource is the caller-facing layer: it keeps an ordered list of
specifications, resolves each one per locale through BundleResolver, caches
the resulting NamespacedBundle instances, and formats message arguments.

Lookup order for get_message():
    1. Each specification in order; the first bundle containing the key wins.
       A specification whose bundles are missing for the locale is skipped
       with a warning.
    2. The default message, if given.
    3. The key itself, if fallback_to_code is enabled.
    4. MissingKeyError.

Argument formatting:
    Placeholders ``{0}``, ``{1}``, ... are replaced by positional arguments.
    Numbers, dates and datetimes are formatted for the locale with Babel.
    Placeholders without a matching argument are left untouched.

Thread Safety:
    Bundles are immutable. The cache is guarded by an RWLock; resolution runs
    outside the lock, so concurrent misses for the same pair may each call
    the loader. The first bundle stored wins.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from babel import UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from nsbundles.constants import MAX_LOCALE_CACHE_SIZE
from nsbundles.errors import MissingKeyError, MissingResourceError
from nsbundles.locale_utils import get_babel_locale, get_system_locale, normalize_locale
from nsbundles.resolver import BundleResolver, ResolverConfig
from nsbundles.rwlock import RWLock

if TYPE_CHECKING:
    from babel import Locale

    from nsbundles.bundle import NamespacedBundle
    from nsbundles.loading import BundleLoader

__all__ = ["MessageSource", "format_message"]

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def _babel_locale_or_default(locale_code: str) -> Locale:
    try:
        return get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("Unknown locale '%s': %s. Formatting with en_US", locale_code, e)
        return get_babel_locale("en_US")


def _format_argument(value: object, locale_code: str) -> str:
    match value:
        case bool():
            return str(value)
        case int() | float() | Decimal():
            return babel_numbers.format_decimal(
                value, locale=_babel_locale_or_default(locale_code)
            )
        case datetime():
            return babel_dates.format_datetime(
                value, locale=_babel_locale_or_default(locale_code)
            )
        case date():
            return babel_dates.format_date(value, locale=_babel_locale_or_default(locale_code))
        case _:
            return str(value)


def format_message(text: str, args: Sequence[object], locale: str | Locale) -> str:
    """Substitute ``{n}`` placeholders with locale-formatted arguments.

    Without arguments the text is returned verbatim.

    Example:
        >>> format_message("{0} files in {1}", [1234, "inbox"], "de_DE")
        '1.234 files in inbox'
    """
    if not args:
        return text
    locale_code = normalize_locale(locale)

    def substitute(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(args):
            return match.group(0)
        return _format_argument(args[index], locale_code)

    return _PLACEHOLDER.sub(substitute, text)


class MessageSource:
    """Locale-aware message lookup across several bundle specifications.

    Example:
        >>> loader = PathBundleLoader("locales")
        >>> source = MessageSource(
        ...     loader,
        ...     "global/global, lang#global/languages",
        ...     "login#login/global",
        ... )
        >>> source.get_message("login.title", locale="de")
        'Anmelden'
        >>> source.get_message("lang.count", [3], locale="en")
        '3 languages'
    """

    __slots__ = ("_cache", "_cache_enabled", "_fallback_to_code", "_lock", "_resolver", "_specs")

    def __init__(
        self,
        loader: BundleLoader,
        *specifications: str,
        config: ResolverConfig | None = None,
        fallback_to_code: bool = False,
        cache: bool = True,
    ) -> None:
        """Initialize message source.

        Args:
            loader: Supplies the table of each bundle path and locale
            *specifications: Specification strings searched in order
            config: Resolver configuration (default: ResolverConfig())
            fallback_to_code: Return the key instead of raising when no
                specification contains it and no default is given
            cache: Keep resolved bundles per (specification, locale)

        Raises:
            ValueError: If a specification is blank
        """
        self._resolver = BundleResolver(loader, config)
        self._fallback_to_code = fallback_to_code
        self._cache_enabled = cache
        self._cache: dict[tuple[str, str], NamespacedBundle] = {}
        self._lock = RWLock()
        self._specs: tuple[str, ...] = ()
        self.add_specifications(*specifications)

    @property
    def resolver(self) -> BundleResolver:
        """Resolver used to build bundles."""
        return self._resolver

    @property
    def specifications(self) -> tuple[str, ...]:
        """Specifications in lookup order."""
        return self._specs

    @property
    def cache_size(self) -> int:
        """Number of cached (specification, locale) bundles."""
        with self._lock.read():
            return len(self._cache)

    @staticmethod
    def _clean(specifications: tuple[str, ...]) -> list[str]:
        cleaned = []
        for spec in specifications:
            if not spec or not spec.strip():
                msg = "Specification cannot be empty"
                raise ValueError(msg)
            cleaned.append(spec.strip())
        return cleaned

    def add_specifications(self, *specifications: str) -> None:
        """Append specifications, skipping ones already present.

        Raises:
            ValueError: If a specification is blank
        """
        cleaned = self._clean(specifications)
        with self._lock.write():
            self._specs = tuple(dict.fromkeys((*self._specs, *cleaned)))
            self._cache.clear()

    def set_specifications(self, *specifications: str) -> None:
        """Replace all specifications.

        Raises:
            ValueError: If a specification is blank
        """
        cleaned = self._clean(specifications)
        with self._lock.write():
            self._specs = tuple(dict.fromkeys(cleaned))
            self._cache.clear()

    def clear_cache(self) -> None:
        """Drop every cached bundle; the next lookup reloads through the loader."""
        with self._lock.write():
            self._cache.clear()
        logger.debug("Bundle cache cleared")

    def get_bundle(self, specification: str, locale: str | Locale) -> NamespacedBundle:
        """Return the bundle for a specification and locale, resolving on a miss.

        Raises:
            MissingResourceError: If a bundle of the specification is missing
        """
        locale_code = normalize_locale(locale)
        if not self._cache_enabled:
            return self._resolver.resolve(specification, locale_code)

        key = (specification, locale_code)
        with self._lock.read():
            cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for '%s' (%s)", specification, locale_code)
            return cached

        bundle = self._resolver.resolve(specification, locale_code)
        with self._lock.write():
            existing = self._cache.get(key)
            if existing is not None:
                return existing
            if len(self._cache) >= MAX_LOCALE_CACHE_SIZE:
                oldest = next(iter(self._cache))
                del self._cache[oldest]
                logger.debug("Evicted '%s' (%s) from bundle cache", *oldest)
            self._cache[key] = bundle
        return bundle

    def find_message(self, key: str, locale: str | Locale) -> str | None:
        """Return the unformatted text of the first bundle containing key.

        Specifications whose bundles are missing for the locale are skipped.
        """
        locale_code = normalize_locale(locale)
        for spec in self._specs:
            try:
                bundle = self.get_bundle(spec, locale_code)
            except MissingResourceError as e:
                logger.warning(
                    "Skipping specification '%s' for locale %s: %s", spec, locale_code, e
                )
                continue
            try:
                return bundle.lookup(key)
            except MissingKeyError:
                continue
        return None

    def get_message(
        self,
        key: str,
        args: Sequence[object] = (),
        locale: str | Locale | None = None,
        default: str | None = None,
    ) -> str:
        """Resolve and format a message.

        Args:
            key: Qualified (``namespace.key``) or bare key
            args: Positional arguments for ``{n}`` placeholders
            locale: Locale code or babel.Locale (default: system locale)
            default: Text used when no specification contains the key

        Returns:
            Formatted message

        Raises:
            MissingKeyError: If the key is found nowhere, no default is given
                and fallback_to_code is disabled
        """
        locale_code = get_system_locale() if locale is None else normalize_locale(locale)
        text = self.find_message(key, locale_code)
        if text is not None:
            return format_message(text, args, locale_code)
        if default is not None:
            return format_message(default, args, locale_code)
        if self._fallback_to_code:
            logger.debug("No message for '%s' (%s); returning key", key, locale_code)
            return key

        msg = f"No message found under key '{key}' for locale '{locale_code}'"
        raise MissingKeyError(msg, key=key, locale=locale_code)
