"""Locale utilities for normalization and fallback chains.

Centralizes locale handling used by loaders and the message source.
All locale input is normalized to POSIX form at the package boundary so that
cache keys and candidate file names are consistent.

Python 3.13+.
"""

from __future__ import annotations

import functools
import os
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "clear_locale_cache",
    "get_babel_locale",
    "get_system_locale",
    "locale_candidates",
    "normalize_locale",
]


def normalize_locale(locale: str | Locale) -> str:
    """Convert a locale code or Babel Locale to POSIX format.

    BCP-47 uses hyphens (en-US), while Babel/POSIX uses underscores (en_US).
    Babel Locale instances are converted with str(), which already yields
    POSIX form. Surrounding whitespace is removed.

    Args:
        locale: BCP-47 or POSIX locale code, or a babel.Locale

    Returns:
        POSIX-formatted locale code (e.g., "en_US", "pt_BR")

    Example:
        >>> normalize_locale("en-US")
        'en_US'
        >>> normalize_locale("en")
        'en'
    """
    return str(locale).strip().replace("-", "_")


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def clear_locale_cache() -> None:
    """Clear the cached Babel Locale objects."""
    get_babel_locale.cache_clear()


def _prefixes(parts: list[str], shortest: int) -> list[str]:
    return ["_".join(parts[:size]) for size in range(len(parts), shortest - 1, -1)]


def _is_script(part: str) -> bool:
    return len(part) == 4 and part.isalpha() and part.istitle()


@functools.lru_cache(maxsize=256)
def _candidates(locale_code: str) -> tuple[str, ...]:
    from babel import UnknownLocaleError  # noqa: PLC0415

    parts = locale_code.split("_")
    language, rest = parts[0], parts[1:]

    # Script given by the caller: scripted forms, then the same without script
    if rest and _is_script(rest[0]):
        chain = _prefixes(parts, 2) + _prefixes([language, *rest[1:]], 1)
        return tuple(dict.fromkeys(chain))

    chain = _prefixes(parts, 1)
    try:
        parsed = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError):
        return tuple(dict.fromkeys(chain))

    # Babel may rename the language (iw -> he); only its script is borrowed
    if rest and parsed.script and parsed.language == language:
        scripted = _prefixes([language, parsed.script, *rest], 2)
        chain = [chain[0], *scripted, *chain[1:]]
    return tuple(dict.fromkeys(chain))


def locale_candidates(locale: str | Locale) -> tuple[str, ...]:
    """Return the fallback chain for a locale, most specific first.

    The requested code always comes first, followed by its underscore
    prefixes down to the bare language. A script the caller gives puts the
    scripted forms before the script-less ones. Without one, the script Babel
    infers for a territory is spliced in after the requested code, keeping the
    caller's language, territory and variant. Babel's language aliases
    (iw, in, mo) never replace the requested language.

    Args:
        locale: BCP-47 or POSIX locale code, or a babel.Locale

    Returns:
        Candidate locale codes; empty for an empty locale

    Example:
        >>> locale_candidates("zh-Hans-CN")
        ('zh_Hans_CN', 'zh_Hans', 'zh_CN', 'zh')
        >>> locale_candidates("en_US")
        ('en_US', 'en')
        >>> locale_candidates("de_CH_1996")
        ('de_CH_1996', 'de_CH', 'de')
    """
    normalized = normalize_locale(locale)
    if not normalized:
        return ()
    return _candidates(normalized)


def _strip_posix_suffixes(value: str) -> str:
    return normalize_locale(re.split(r"[.@]", value, maxsplit=1)[0])


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales and strips encoding
    (".UTF-8") and modifier ("@euro") suffixes.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_US" as fallback.

    Returns:
        Detected locale code in POSIX format.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return _strip_posix_suffixes(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return _strip_posix_suffixes(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en_US"
