"""Syntax highlighting for code blocks: languages, themes, and the engine."""

from .engine import HighlightEngine, clear_shared_engines, get_shared_engine
from .languages import SupportedLanguage, resolve_language
from .theme import ThemeDescriptor, build_css_variables_theme

__all__ = [
    "HighlightEngine",
    "SupportedLanguage",
    "ThemeDescriptor",
    "build_css_variables_theme",
    "clear_shared_engines",
    "get_shared_engine",
    "resolve_language",
]
