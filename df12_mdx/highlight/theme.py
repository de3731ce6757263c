"""Pygments styles whose colors defer to CSS custom properties.

A CSS variables theme never embeds a concrete color: every token kind maps to
``var(<prefix><kind>)`` so already rendered markup can be restyled (for
example light and dark mode) by redefining the variables at display time.
Pygments accepts ``var(...)`` wherever a color is expected, so the theme is an
ordinary :class:`pygments.style.Style` subclass built on the fly.

Example
-------
>>> from df12_mdx.config import ThemeConfig
>>> from df12_mdx.highlight.theme import build_css_variables_theme
>>> theme = build_css_variables_theme(ThemeConfig())
>>> theme.style.background_color
'var(--shiki-background)'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from pygments.style import Style
from pygments.token import (
    Comment,
    Error,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Token,
)

if typ.TYPE_CHECKING:
    from pygments.token import _TokenType

    from df12_mdx.config import ThemeConfig

FOREGROUND = "foreground"
BACKGROUND = "background"

TOKEN_VARIABLES: dict[_TokenType, str] = {
    Token: FOREGROUND,
    Comment: "token-comment",
    Keyword: "token-keyword",
    Keyword.Constant: "token-constant",
    Name.Function: "token-function",
    Name.Class: "token-function",
    Name.Decorator: "token-function",
    Name.Variable: "token-parameter",
    Name.Attribute: "token-parameter",
    Name.Builtin: "token-constant",
    Name.Constant: "token-constant",
    Name.Tag: "token-keyword",
    Name.Label: "token-link",
    Number: "token-constant",
    String: "token-string",
    String.Interpol: "token-string-expression",
    String.Escape: "token-string-expression",
    Operator: "token-punctuation",
    Punctuation: "token-punctuation",
    Error: "token-keyword",
}

FONT_STYLES: dict[_TokenType, str] = {
    Comment: "italic",
    Generic.Emph: "italic",
    Generic.Strong: "bold",
    Generic.Heading: "bold",
}


@dc.dataclass(frozen=True, slots=True)
class ThemeDescriptor:
    """Named highlight theme ready to hand to a Pygments formatter.

    Attributes
    ----------
    name : str
        Theme identifier, also emitted as a CSS class on rendered blocks.
    variable_prefix : str
        Prefix of every CSS variable referenced by ``style``.
    style : type[Style]
        Pygments style class carrying ``var(...)`` colors.
    variable_defaults : tuple[tuple[str, str], ...]
        Fallback values baked into each ``var()`` reference.
    """

    name: str
    variable_prefix: str
    style: type[Style]
    variable_defaults: tuple[tuple[str, str], ...] = ()

    @property
    def css_class(self) -> str:
        """Return the class list applied to the wrapper of rendered blocks."""
        return f"shiki {self.name}"

    def variable(self, kind: str) -> str:
        """Return the ``var()`` reference for ``kind`` including any default."""
        return _variable(self.variable_prefix, kind, dict(self.variable_defaults))

    def stylesheet(self, selector: str = ":root") -> str:
        """Return CSS declaring every variable the theme references."""
        defaults = dict(self.variable_defaults)
        kinds = sorted({BACKGROUND, *TOKEN_VARIABLES.values()})
        lines = [
            f"  {self.variable_prefix}{kind}: {defaults[kind]};"
            for kind in kinds
            if kind in defaults
        ]
        return "\n".join([f"{selector} {{", *lines, "}"])


def _variable(prefix: str, kind: str, defaults: typ.Mapping[str, str]) -> str:
    """Format a CSS ``var()`` reference without whitespace (Pygments splits on it)."""
    fallback = defaults.get(kind)
    if fallback:
        return f"var({prefix}{kind},{fallback})"
    return f"var({prefix}{kind})"


def build_css_variables_theme(config: ThemeConfig) -> ThemeDescriptor:
    """Create a :class:`ThemeDescriptor` whose colors are CSS variables.

    Parameters
    ----------
    config : ThemeConfig
        Theme name, variable prefix, font styling flag, and variable defaults.

    Returns
    -------
    ThemeDescriptor
        Descriptor wrapping a freshly generated Pygments style class.
    """
    defaults = dict(config.variable_defaults)
    token_styles: dict[_TokenType, str] = {}
    for token, kind in TOKEN_VARIABLES.items():
        token_styles[token] = _variable(config.variable_prefix, kind, defaults)
    if config.font_style:
        for token, font in FONT_STYLES.items():
            token_styles[token] = f"{font} {token_styles.get(token, '')}".strip()

    background = _variable(config.variable_prefix, BACKGROUND, defaults)
    highlight = _variable(config.variable_prefix, "token-link", defaults)

    class CssVariablesStyle(Style):
        name = config.name
        background_color = background
        highlight_color = highlight
        styles = token_styles

    return ThemeDescriptor(
        name=config.name,
        variable_prefix=config.variable_prefix,
        style=CssVariablesStyle,
        variable_defaults=config.variable_defaults,
    )


__all__ = ["TOKEN_VARIABLES", "ThemeDescriptor", "build_css_variables_theme"]
