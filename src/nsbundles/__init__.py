"""nsbundles - namespaced aggregation and lookup of localized message bundles.

Combines many independently maintained message bundles into one lookup
structure per locale. Each bundle is assigned a short namespace so that
unrelated bundles can reuse short key names without collision:

    >>> resolver = BundleResolver(PathBundleLoader("locales"))
    >>> bundle = resolver.resolve("global/global, login#login/global", "de")
    >>> bundle.lookup("login.title")     # key "title" of namespace "login"
    >>> bundle.lookup("title")           # key "title" of the default namespace

Public API:
    BundleResolver - Builds a NamespacedBundle from a specification and locale
    ResolverConfig - Separator and bundle path prefix/suffix
    NamespacedBundle - Immutable per-locale lookup structure
    MessageSource - Cached lookup over several specifications with argument formatting
    BundleLoader - Protocol for loaders; MappingBundleLoader, PathBundleLoader

Exceptions:
    BundleError - Base exception class
    MissingResourceError - A referenced bundle does not exist for the locale
    MissingKeyError - A key has no entry in the table it selects
    InvalidConfigurationError - Rejected resolver configuration
"""

from .bundle import NamespacedBundle
from .errors import (
    BundleError,
    InvalidConfigurationError,
    MissingKeyError,
    MissingResourceError,
)
from .loading import BundleLoader, MappingBundleLoader, PathBundleLoader
from .resolver import BundleResolver, ResolverConfig
from .source import MessageSource
from .specification import SpecificationEntry, parse_specification

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("nsbundles")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BundleError",
    "BundleLoader",
    "BundleResolver",
    "InvalidConfigurationError",
    "MappingBundleLoader",
    "MessageSource",
    "MissingKeyError",
    "MissingResourceError",
    "NamespacedBundle",
    "PathBundleLoader",
    "ResolverConfig",
    "SpecificationEntry",
    "__version__",
    "parse_specification",
]
