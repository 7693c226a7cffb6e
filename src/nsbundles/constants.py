"""Shared constants for nsbundles.

Constants are grouped by domain:
- Specification syntax: Characters that structure a bundle specification
- Lookup defaults: Values used when no configuration is supplied
- Cache limits: Memory bounds for the message source cache

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Specification syntax
    "ENTRY_DELIMITER",
    "NAMESPACE_MARKER",
    # Lookup defaults
    "DEFAULT_SEPARATOR",
    "DEFAULT_BUNDLE_EXTENSION",
    # Cache limits
    "MAX_LOCALE_CACHE_SIZE",
]

# ============================================================================
# SPECIFICATION SYNTAX
# ============================================================================

# Separates entries of a specification: "global, lang#languages/lang".
ENTRY_DELIMITER: str = ","

# Separates a namespace from a bundle path inside one entry: "lang#languages/lang".
# Fixed. Unrelated to the configurable lookup separator.
NAMESPACE_MARKER: str = "#"

# ============================================================================
# LOOKUP DEFAULTS
# ============================================================================

# Splits "namespace.key" at lookup time unless ResolverConfig overrides it.
DEFAULT_SEPARATOR: str = "."

# File extension PathBundleLoader appends to every candidate catalog name.
DEFAULT_BUNDLE_EXTENSION: str = ".po"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum (specification, locale) pairs kept by a MessageSource.
# Oldest entries are evicted first once the limit is reached.
MAX_LOCALE_CACHE_SIZE: int = 128
