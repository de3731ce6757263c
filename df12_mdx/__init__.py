r"""Enrich parsed MDX document trees for rendering and metadata export.

The package runs an ordered chain of tree visitors over a document: author
annotations are normalised, fenced code blocks are classified and highlighted
with a CSS-variables theme, section headings receive unique identifiers, the
title is extracted, and a section index is exported as a top-level binding.

Exports
-------
- ``Pipeline`` and ``build_pipeline``: assemble and run the visitors.
- ``enrich_markdown``: parse Markdown and run the standard pipeline.
- ``HighlightEngine`` and ``get_shared_engine``: the highlighting backend.
- ``PipelineConfig`` and ``load_pipeline_config``: process configuration.

Examples
--------
>>> import asyncio
>>> from df12_mdx import enrich_markdown
>>> tree = asyncio.run(enrich_markdown("## Setup\n## Setup\n"))  # doctest: +SKIP
>>> [program.source for program in tree.programs]  # doctest: +SKIP
['export const sections = [{"title":"Setup","id":"setup"},{"title":"Setup","id":"setup-1"}]']
"""

from __future__ import annotations

from .config import PipelineConfig, load_pipeline_config
from .highlight import HighlightEngine, get_shared_engine
from .pipeline import Pipeline, RunResult, build_pipeline, enrich_markdown

__all__ = [
    "HighlightEngine",
    "Pipeline",
    "PipelineConfig",
    "RunResult",
    "build_pipeline",
    "enrich_markdown",
    "get_shared_engine",
    "load_pipeline_config",
]
