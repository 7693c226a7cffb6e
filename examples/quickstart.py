"""Quickstart example for nsbundles.

Demonstrates namespaced bundle resolution with in-memory tables, gettext
catalogs on disk, and the cached MessageSource.
"""

import tempfile
from pathlib import Path

from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from nsbundles import (
    BundleResolver,
    MappingBundleLoader,
    MessageSource,
    MissingKeyError,
    PathBundleLoader,
    ResolverConfig,
)

# Example 1: Namespaces over in-memory tables
print("=" * 50)
print("Example 1: Namespaced Lookup")
print("=" * 50)

loader = MappingBundleLoader({
    "global": {"en": {"title": "Welcome", "error.404": "Not found"}},
    "login": {"en": {"title": "Sign in"}},
})
bundle = BundleResolver(loader).resolve("global, login#login", "en")

print(bundle.lookup("title"))
# Output: Welcome
print(bundle.lookup("login.title"))
# Output: Sign in
print(bundle.lookup("error.404"))
# Output: Not found (no namespace "error", so the full key is used)

try:
    bundle.lookup("login.help")
except MissingKeyError as e:
    print(f"Missing: {e}")
# Output: Missing: No message 'help' in namespace 'login' for locale 'en'

# Example 2: Gettext catalogs on disk
print("\n" + "=" * 50)
print("Example 2: Catalogs With Locale Fallback")
print("=" * 50)


def write_catalog(path: Path, messages: dict[str, str]) -> None:
    catalog = Catalog()
    for key, text in messages.items():
        catalog.add(key, text)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as fileobj:
        write_po(fileobj, catalog)


with tempfile.TemporaryDirectory() as tmpdir:
    root = Path(tmpdir)
    write_catalog(root / "messages/global/global.po", {"title": "Welcome"})
    write_catalog(root / "messages/global/global_de.po", {"title": "Willkommen"})
    write_catalog(root / "messages/login/global_de.po", {"title": "Anmelden"})

    resolver = BundleResolver(
        PathBundleLoader(tmpdir), ResolverConfig(name_prefix="messages/")
    )
    bundle = resolver.resolve("global/global, login#login/global", "de-AT")
    print(bundle.lookup("title"))
    # Output: Willkommen (de_AT -> de)
    print(bundle.lookup("login.title"))
    # Output: Anmelden

# Example 3: MessageSource with arguments
print("\n" + "=" * 50)
print("Example 3: MessageSource")
print("=" * 50)

loader = MappingBundleLoader({
    "global": {"en": {"files": "{0} files"}, "de": {"files": "{0} Dateien"}},
    "login": {"en": {"title": "Sign in"}},
})
source = MessageSource(loader, "global", "login#login")

print(source.get_message("files", [1234567], locale="en"))
# Output: 1,234,567 files
print(source.get_message("files", [1234567], locale="de"))
# Output: 1.234.567 Dateien
print(source.get_message("login.help", locale="en", default="No help available"))
# Output: No help available
