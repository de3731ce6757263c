"""Shared fixtures for the df12_mdx test suite.

The ``engine`` fixture builds one highlight engine for the whole session,
mirroring how production callers construct the engine once and reuse it.
"""

from __future__ import annotations

import typing as typ

import pytest

from df12_mdx.config import ThemeConfig
from df12_mdx.highlight import (
    HighlightEngine,
    SupportedLanguage,
    build_css_variables_theme,
    clear_shared_engines,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture(scope="session")
def engine() -> HighlightEngine:
    """Return an engine loaded with every supported language."""
    return HighlightEngine(
        tuple(SupportedLanguage), [build_css_variables_theme(ThemeConfig())]
    )


@pytest.fixture
def fresh_shared_engines() -> cabc.Iterator[None]:
    """Clear the process-wide engine cache before and after a test."""
    clear_shared_engines()
    yield
    clear_shared_engines()
