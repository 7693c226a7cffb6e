"""Tests for bundle loaders: search order, in-memory and .po catalog loading."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import pytest

from nsbundles.errors import MissingResourceError
from nsbundles.loading import (
    BundleLoader,
    MappingBundleLoader,
    PathBundleLoader,
    search_order,
)
from nsbundles.resolver import BundleResolver, ResolverConfig

CatalogWriter: TypeAlias = Callable[..., Path]


class TestSearchOrder:
    """Test locale candidate chains used by both loaders."""

    def test_territory_then_language_then_base(self) -> None:
        """Most specific first, base last."""
        assert search_order("en_US") == ("en_US", "en", None)

    def test_fallback_locale_appended(self) -> None:
        """Fallback locale candidates come before the base."""
        assert search_order("de_AT", "en") == ("de_AT", "de", "en", None)

    def test_duplicates_removed(self) -> None:
        """Fallback sharing candidates with the locale adds nothing twice."""
        assert search_order("en_GB", "en_US") == ("en_GB", "en", "en_US", None)

    def test_empty_locale_searches_base_only(self) -> None:
        """Empty locale goes straight to the base table."""
        assert search_order("") == (None,)


class TestMappingBundleLoader:
    """Test the in-memory loader."""

    def test_exact_locale(self) -> None:
        """Table for the exact locale is returned."""
        loader = MappingBundleLoader({"world": {"en_US": {"a": "US"}, "en": {"a": "EN"}}})

        assert loader.load("world", "en_US")["a"] == "US"

    def test_language_fallback(self) -> None:
        """Territory-less table serves territory locales."""
        loader = MappingBundleLoader({"world": {"en": {"a": "EN"}}})

        assert loader.load("world", "en_GB")["a"] == "EN"

    def test_base_table(self) -> None:
        """Locale None table serves any locale."""
        loader = MappingBundleLoader({"world": {None: {"a": "base"}}})

        assert loader.load("world", "ja")["a"] == "base"

    def test_fallback_locale(self) -> None:
        """Configured fallback locale is consulted before the base."""
        loader = MappingBundleLoader(
            {"world": {"en": {"a": "EN"}, None: {"a": "base"}}}, fallback_locale="en"
        )

        assert loader.load("world", "fr")["a"] == "EN"

    def test_locale_keys_normalized(self) -> None:
        """BCP-47 keys match POSIX requests."""
        loader = MappingBundleLoader({"world": {"pt-BR": {"a": "BR"}}})

        assert loader.load("world", "pt_BR")["a"] == "BR"

    def test_unknown_path(self) -> None:
        """Unknown path raises MissingResourceError."""
        with pytest.raises(MissingResourceError, match="world"):
            MappingBundleLoader({}).load("world", "en")

    def test_no_matching_locale(self) -> None:
        """No candidate and no base raises MissingResourceError."""
        loader = MappingBundleLoader({"world": {"en": {"a": "EN"}}})

        with pytest.raises(MissingResourceError):
            loader.load("world", "fr")

    def test_tables_read_only(self) -> None:
        """Returned tables cannot be mutated."""
        table = MappingBundleLoader({"world": {"en": {"a": "EN"}}}).load("world", "en")

        with pytest.raises(TypeError):
            table["a"] = "changed"  # type: ignore[index]

    def test_calls_recorded(self) -> None:
        """Every call is recorded, including failing ones."""
        loader = MappingBundleLoader({"world": {"en": {}}})
        loader.load("world", "en")
        with pytest.raises(MissingResourceError):
            loader.load("absent", "de")

        assert loader.calls == [("world", "en"), ("absent", "de")]

    def test_recording_disabled(self) -> None:
        """record_calls=False keeps calls empty however often load() runs."""
        loader = MappingBundleLoader({"world": {"en": {"a": "EN"}}}, record_calls=False)
        for _ in range(100):
            loader.load("world", "en")

        assert loader.calls == []

    def test_deprecated_language_code_table(self) -> None:
        """A table stored under an aliased code like "iw" is found as requested."""
        loader = MappingBundleLoader({"world": {"iw": {"a": "IW"}, "he": {"a": "HE"}}})

        assert loader.load("world", "iw")["a"] == "IW"
        assert loader.load("world", "iw_IL")["a"] == "IW"

    def test_variant_table(self) -> None:
        """Variant tables win over the territory table."""
        loader = MappingBundleLoader(
            {"world": {"de_CH_1996": {"a": "1996"}, "de_CH": {"a": "CH"}}}
        )

        assert loader.load("world", "de_CH_1996")["a"] == "1996"

    def test_satisfies_protocol(self) -> None:
        """MappingBundleLoader is usable wherever a BundleLoader is expected."""
        loader: BundleLoader = MappingBundleLoader({})

        assert callable(loader.load)


class TestPathBundleLoader:
    """Test .po catalog loading from disk."""

    def test_loads_locale_catalog(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """path_<locale>.po is read into a table."""
        write_catalog("messages/world_en.po", {"test.key": "value", "other": "thing"})

        table = PathBundleLoader(str(tmp_path)).load("messages/world", "en")

        assert dict(table) == {"test.key": "value", "other": "thing"}

    def test_candidate_order(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """Most specific existing catalog wins."""
        write_catalog("world_en_US.po", {"a": "US"})
        write_catalog("world_en.po", {"a": "EN"})
        write_catalog("world.po", {"a": "base"})
        loader = PathBundleLoader(str(tmp_path))

        assert loader.load("world", "en_US")["a"] == "US"
        assert loader.load("world", "en_GB")["a"] == "EN"
        assert loader.load("world", "fr")["a"] == "base"

    def test_fallback_locale(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """fallback_locale is tried before the base catalog."""
        write_catalog("world_en.po", {"a": "EN"})
        write_catalog("world.po", {"a": "base"})

        loader = PathBundleLoader(str(tmp_path), fallback_locale="en")

        assert loader.load("world", "de")["a"] == "EN"

    def test_candidate_paths(self, tmp_path: Path) -> None:
        """candidate_paths lists files below root_dir in search order."""
        loader = PathBundleLoader(str(tmp_path), extension=".catalog")

        paths = loader.candidate_paths("m/world", "de_AT")

        root = tmp_path.resolve()
        assert paths == (
            root / "m" / "world_de_AT.catalog",
            root / "m" / "world_de.catalog",
            root / "m" / "world.catalog",
        )

    def test_custom_extension(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """Extension is configurable."""
        write_catalog("world_en.pot", {"a": "EN"})

        assert PathBundleLoader(str(tmp_path), extension=".pot").load("world", "en")["a"] == "EN"

    def test_missing_catalog(self, tmp_path: Path) -> None:
        """No candidate file raises MissingResourceError."""
        with pytest.raises(MissingResourceError) as exc_info:
            PathBundleLoader(str(tmp_path)).load("world", "en")

        assert exc_info.value.path == "world"
        assert exc_info.value.locale == "en"

    def test_empty_path(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """Empty path never matches a file, even '_en.po'."""
        write_catalog("_en.po", {"a": "EN"})

        with pytest.raises(MissingResourceError):
            PathBundleLoader(str(tmp_path)).load("", "en")

    def test_untranslated_and_fuzzy_skipped(
        self, tmp_path: Path, write_catalog: CatalogWriter
    ) -> None:
        """Only entries with a confirmed translation are kept."""
        write_catalog(
            "world_en.po",
            {"done": "Done", "todo": "", "unsure": "Maybe"},
            fuzzy=("unsure",),
        )

        table = PathBundleLoader(str(tmp_path)).load("world", "en")

        assert dict(table) == {"done": "Done"}

    def test_plural_first_form(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """Plural entries keep their first form under the singular id."""
        write_catalog("world_en.po", {"file": ("one file", "many files")})

        table = PathBundleLoader(str(tmp_path)).load("world", "en")

        assert table["file"] == "one file"

    def test_non_ascii_text(self, tmp_path: Path, write_catalog: CatalogWriter) -> None:
        """Catalog text round-trips through UTF-8."""
        write_catalog("world_lv.po", {"hello": "Sveiki, pasaule!", "home": "Mājas"})

        assert PathBundleLoader(str(tmp_path)).load("world", "lv")["home"] == "Mājas"

    @pytest.mark.parametrize("locale", ["../etc", "en/US", "en\\US"])
    def test_unsafe_locale_rejected(self, tmp_path: Path, locale: str) -> None:
        """Locales with path components raise ValueError."""
        with pytest.raises(ValueError, match="not allowed in locale"):
            PathBundleLoader(str(tmp_path)).load("world", locale)

    def test_path_escaping_root_rejected(self, tmp_path: Path) -> None:
        """Bundle paths resolving outside root_dir raise ValueError."""
        root = tmp_path / "root"
        root.mkdir()

        with pytest.raises(ValueError, match="Path traversal"):
            PathBundleLoader(str(root)).load("../secret", "en")

    def test_resolver_with_path_loader(
        self, tmp_path: Path, write_catalog: CatalogWriter
    ) -> None:
        """End to end: prefix-configured resolver reading catalogs."""
        write_catalog("messages/global/global_de.po", {"title": "Titel"})
        write_catalog("messages/global/languages_de.po", {"de": "Deutsch"})
        write_catalog("messages/login/global_de.po", {"title": "Anmelden"})

        resolver = BundleResolver(
            PathBundleLoader(str(tmp_path)), ResolverConfig(name_prefix="messages/")
        )
        bundle = resolver.resolve(
            "global/global, lang#global/languages, login#login/global", "de_DE"
        )

        assert bundle.lookup("title") == "Titel"
        assert bundle.lookup("lang.de") == "Deutsch"
        assert bundle.lookup("login.title") == "Anmelden"
