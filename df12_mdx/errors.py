"""Exception types raised by the enrichment pipeline.

Every failure that aborts a document run derives from :class:`PipelineError`
so callers batching many documents can catch one type. Configuration problems
are reported separately through
:class:`~df12_mdx.config.PipelineConfigError` because they surface before any
document is processed.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class PipelineError(RuntimeError):
    """Raised when a pipeline stage cannot complete for a document."""


class UnsupportedLanguageError(PipelineError):
    """Raised when a code block requests a language the engine cannot render."""

    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"Unsupported highlight language: {language!r}")


class BindingSourceError(PipelineError):
    """Raised when a synthesized export cannot be turned into a declaration."""


class AnnotationError(PipelineError):
    """Raised when an author annotation does not describe a mapping."""


class UnknownThemeError(PipelineError):
    """Raised when a highlight theme is not registered with the engine."""

    def __init__(self, name: str, known: cabc.Iterable[str]) -> None:
        self.name = name
        available = ", ".join(sorted(known))
        super().__init__(f"Unknown theme '{name}'. Known themes: {available}")


__all__ = [
    "AnnotationError",
    "BindingSourceError",
    "PipelineError",
    "UnknownThemeError",
    "UnsupportedLanguageError",
]
