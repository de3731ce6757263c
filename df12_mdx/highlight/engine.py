"""Highlight engine wrapping Pygments for a fixed set of languages and themes.

An engine is built once (construct once, call many): construction resolves
every configured lexer class and theme up front, and afterwards the engine is
read-only. Each :meth:`HighlightEngine.render` call instantiates its own lexer
and formatter, so one engine can serve concurrent document runs without
sharing mutable rendering state.

Example
-------
>>> from df12_mdx.config import ThemeConfig
>>> from df12_mdx.highlight import HighlightEngine, build_css_variables_theme
>>> engine = HighlightEngine(["python"], [build_css_variables_theme(ThemeConfig())])
>>> "var(--shiki-token-keyword)" in engine.render_sync("def f(): pass", "py", "css-variables")
True
"""

from __future__ import annotations

import asyncio
import logging
import typing as typ

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import find_lexer_class_by_name
from pygments.util import ClassNotFound

from df12_mdx.errors import UnknownThemeError, UnsupportedLanguageError

from .languages import LEXER_BINDINGS, SupportedLanguage, resolve_language
from .theme import FOREGROUND, ThemeDescriptor, build_css_variables_theme

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pygments.lexer import Lexer

    from df12_mdx.config import PipelineConfig

logger = logging.getLogger(__name__)


def _load_lexer(language: SupportedLanguage) -> type[Lexer]:
    """Return the first lexer class Pygments provides for ``language``."""
    for alias in LEXER_BINDINGS[language].aliases:
        try:
            return find_lexer_class_by_name(alias)
        except ClassNotFound:
            continue
    raise UnsupportedLanguageError(str(language))


class HighlightEngine:
    """Render source text to themeable HTML for an enumerated language set."""

    def __init__(
        self,
        languages: cabc.Iterable[SupportedLanguage | str],
        themes: cabc.Iterable[ThemeDescriptor],
    ) -> None:
        """Resolve lexers and register themes.

        Parameters
        ----------
        languages : Iterable[SupportedLanguage | str]
            Languages (or aliases) the engine must be able to render.
        themes : Iterable[ThemeDescriptor]
            Themes available to :meth:`render`, addressed by name.

        Raises
        ------
        UnsupportedLanguageError
            If a language is unknown or has no usable Pygments lexer.
        ValueError
            If no theme is supplied.
        """
        self._lexers: dict[SupportedLanguage, type[Lexer]] = {}
        for entry in languages:
            language = resolve_language(entry)
            self._lexers[language] = _load_lexer(language)
        self._themes = {theme.name: theme for theme in themes}
        if not self._themes:
            msg = "A highlight engine needs at least one theme."
            raise ValueError(msg)

    @classmethod
    async def create(
        cls,
        languages: cabc.Iterable[SupportedLanguage | str],
        themes: cabc.Iterable[ThemeDescriptor],
    ) -> HighlightEngine:
        """Build an engine in a worker thread; lexer imports happen there."""
        return await asyncio.to_thread(cls, tuple(languages), tuple(themes))

    @classmethod
    async def from_config(cls, config: PipelineConfig) -> HighlightEngine:
        """Build an engine for the languages and theme in ``config``."""
        return await cls.create(
            config.languages, [build_css_variables_theme(config.theme)]
        )

    @property
    def languages(self) -> tuple[SupportedLanguage, ...]:
        """Return the languages this engine was built with."""
        return tuple(self._lexers)

    def theme(self, name: str) -> ThemeDescriptor:
        """Return the registered theme called ``name``.

        Raises
        ------
        UnknownThemeError
            If no theme of that name was registered.
        """
        try:
            return self._themes[name]
        except KeyError as exc:
            raise UnknownThemeError(name, self._themes) from exc

    def supports(self, language: str) -> bool:
        """Return whether ``language`` resolves to a loaded lexer."""
        try:
            return resolve_language(language) in self._lexers
        except UnsupportedLanguageError:
            return False

    def render_sync(
        self, text: str, language: str, theme: str | ThemeDescriptor
    ) -> str:
        """Return highlighted markup for ``text``.

        Parameters
        ----------
        text : str
            Raw source to highlight.
        language : str
            Language name or alias; must be one of :attr:`languages`.
        theme : str or ThemeDescriptor
            Registered theme name, or a descriptor used as-is.

        Returns
        -------
        str
            HTML fragment with inline ``var()`` styling.

        Raises
        ------
        UnsupportedLanguageError
            If ``language`` was not loaded into this engine.
        """
        resolved = resolve_language(language)
        lexer_class = self._lexers.get(resolved)
        if lexer_class is None:
            raise UnsupportedLanguageError(language)
        descriptor = theme if isinstance(theme, ThemeDescriptor) else self.theme(theme)
        lexer = lexer_class(**LEXER_BINDINGS[resolved].options)
        formatter = HtmlFormatter(
            style=descriptor.style,
            noclasses=True,
            wrapcode=True,
            cssclass=descriptor.css_class,
            cssstyles=f"color: {descriptor.variable(FOREGROUND)}",
        )
        return highlight(text, lexer, formatter)

    async def render(
        self, text: str, language: str, theme: str | ThemeDescriptor
    ) -> str:
        """Render ``text`` in a worker thread; see :meth:`render_sync`."""
        logger.debug("Highlighting %d characters as %s", len(text), language)
        return await asyncio.to_thread(self.render_sync, text, language, theme)


_SHARED_ENGINES: dict[PipelineConfig, HighlightEngine] = {}


async def get_shared_engine(config: PipelineConfig) -> HighlightEngine:
    """Return the process-wide engine for ``config``, building it on first use.

    Concurrent first calls may each build an engine; only the first one stored
    is ever returned, so every caller observes the same instance afterwards.
    """
    engine = _SHARED_ENGINES.get(config)
    if engine is None:
        built = await HighlightEngine.from_config(config)
        engine = _SHARED_ENGINES.setdefault(config, built)
        logger.debug("Highlight engine ready for %d languages", len(engine.languages))
    return engine


def clear_shared_engines() -> None:
    """Forget every cached engine; subsequent lookups rebuild them."""
    _SHARED_ENGINES.clear()


__all__ = [
    "HighlightEngine",
    "clear_shared_engines",
    "get_shared_engine",
]
