"""Pytest configuration for the nsbundles test suite.

Hypothesis profiles:
- dev: Local development with 200 examples
- ci: CI runs with 50 examples, derandomized
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- HYPOTHESIS_PROFILE env var -> explicit override
- CI=true environment variable -> "ci" profile
- Otherwise -> "dev" profile

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TypeAlias

import pytest
from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context."""
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# CATALOG FIXTURES
# =============================================================================

CatalogWriter: TypeAlias = Callable[..., Path]


@pytest.fixture
def write_catalog(tmp_path: Path) -> CatalogWriter:
    """Return a factory writing .po catalogs below tmp_path.

    Usage: write_catalog("messages/login_en.po", {"title": "Sign in"})
    Extra keyword ``fuzzy`` lists message ids to flag as fuzzy.
    """

    def _write(
        name: str,
        messages: Mapping[str, str | tuple[str, ...]],
        *,
        fuzzy: tuple[str, ...] = (),
    ) -> Path:
        catalog = Catalog(locale=None)
        for key, text in messages.items():
            msgid: str | tuple[str, str] = (key, f"{key}_plural") if isinstance(text, tuple) else key
            flags = ("fuzzy",) if key in fuzzy else ()
            catalog.add(msgid, text, flags=flags)

        target = tmp_path / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as fileobj:
            write_po(fileobj, catalog)
        return target

    return _write
