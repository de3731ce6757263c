"""Typed dataclasses describing df12_mdx pipeline configuration."""

from __future__ import annotations

import dataclasses as dc

from df12_mdx._constants import (
    DEFAULT_THEME_NAME,
    DEFAULT_VARIABLE_PREFIX,
    SECTION_HEADING_TAG,
    TITLE_HEADING_TAG,
)
from df12_mdx.highlight.languages import SupportedLanguage


class PipelineConfigError(ValueError):
    """Raised when the pipeline configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class ThemeConfig:
    """Highlight theme whose colors resolve through CSS custom properties.

    Attributes
    ----------
    name : str
        Theme identifier used by code blocks and as the markup CSS class.
    variable_prefix : str
        Prefix shared by every CSS variable the theme references.
    font_style : bool
        Emit italic and bold styling alongside the color variables.
    variable_defaults : tuple[tuple[str, str], ...]
        Fallback values keyed by variable suffix (``"token-keyword"``).
    """

    name: str = DEFAULT_THEME_NAME
    variable_prefix: str = DEFAULT_VARIABLE_PREFIX
    font_style: bool = True
    variable_defaults: tuple[tuple[str, str], ...] = ()


@dc.dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Process-level settings shared by every document run.

    Instances are hashable so engines can be cached per configuration.
    """

    languages: tuple[SupportedLanguage, ...] = tuple(SupportedLanguage)
    theme: ThemeConfig = dc.field(default_factory=ThemeConfig)
    section_heading: str = SECTION_HEADING_TAG
    title_heading: str = TITLE_HEADING_TAG


__all__ = ["PipelineConfig", "PipelineConfigError", "ThemeConfig"]
