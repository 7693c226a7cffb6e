"""Exception hierarchy for bundle resolution and lookup.

All exceptions derive from BundleError and additionally subclass the
built-in exception a caller would naturally catch (LookupError, KeyError,
ValueError), so code written against the standard library keeps working.

Every exception stores the offending values as attributes for callers that
need more than the message text.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "BundleError",
    "InvalidConfigurationError",
    "MissingKeyError",
    "MissingResourceError",
]


class BundleError(Exception):
    """Base exception for all nsbundles errors."""


class MissingResourceError(BundleError, LookupError):
    """No table exists for a bundle path in the requested locale.

    Raised by loaders and propagated unchanged by BundleResolver.resolve().
    Resolution stops at the first missing bundle; no partial bundle is returned.

    Attributes:
        path: Effective bundle path handed to the loader
        locale: Locale code the table was requested for
    """

    def __init__(self, message: str, *, path: str = "", locale: str = "") -> None:
        """Initialize MissingResourceError.

        Args:
            message: Error message
            path: Effective bundle path handed to the loader
            locale: Locale code the table was requested for
        """
        super().__init__(message)
        self.path = path
        self.locale = locale


class MissingKeyError(BundleError, KeyError):
    """A qualified key has no entry in the table it selects.

    Raised per lookup; the bundle stays usable for further lookups.

    Attributes:
        key: Raw key as passed to lookup
        namespace: Namespace the key selected, None for the default table
        locale: Locale of the bundle that was searched
    """

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
        namespace: str | None = None,
        locale: str = "",
    ) -> None:
        """Initialize MissingKeyError.

        Args:
            message: Error message
            key: Raw key as passed to lookup
            namespace: Namespace the key selected, None for the default table
            locale: Locale of the bundle that was searched
        """
        super().__init__(message)
        self.key = key
        self.namespace = namespace
        self.locale = locale

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""


class InvalidConfigurationError(BundleError, ValueError):
    """Resolver configuration rejected at construction time.

    Attributes:
        field: Name of the rejected configuration field
        value: Value that was rejected
    """

    def __init__(self, message: str, *, field: str = "", value: object = None) -> None:
        """Initialize InvalidConfigurationError.

        Args:
            message: Error message
            field: Name of the rejected configuration field
            value: Value that was rejected
        """
        super().__init__(message)
        self.field = field
        self.value = value
