r"""Run the enrichment visitors over document trees.

A :class:`Pipeline` threads one tree through an ordered tuple of stages. Each
stage exposes ``run(tree)`` and returns the tree it was given (mutated in
place); stages may be synchronous or return an awaitable. Stages run strictly
one after another, so the only suspension points inside a document run are
the highlight engine calls.

Failures are exceptions derived from :class:`~df12_mdx.errors.PipelineError`.
:meth:`Pipeline.run` lets them propagate and leaves the partially mutated tree
unusable; :meth:`Pipeline.try_run` works on a copy and reports the outcome as
a :class:`RunResult`, so the caller's tree can be retried untouched.

Example
-------
>>> import asyncio
>>> from df12_mdx.pipeline import enrich_markdown
>>> tree = asyncio.run(enrich_markdown("# Guide\n\n## Setup\n"))  # doctest: +SKIP
>>> tree.title  # doctest: +SKIP
'Guide'
"""

from __future__ import annotations

import asyncio
import copy
import dataclasses as dc
import functools
import inspect
import logging
import typing as typ

from df12_mdx.config import PipelineConfig
from df12_mdx.errors import PipelineError
from df12_mdx.highlight import get_shared_engine
from df12_mdx.parser import parse_markdown
from df12_mdx.visitors import (
    AnnotationNormalizer,
    CodeBlockClassifier,
    ExportSynthesizer,
    HeadingSlugAssigner,
    SyntaxHighlighter,
    TitleExtractor,
    default_exports,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from df12_mdx.highlight import HighlightEngine
    from df12_mdx.tree import Root
    from df12_mdx.visitors.exports import ExportsFactory

logger = logging.getLogger(__name__)


class Stage(typ.Protocol):
    """A tree visitor: takes the tree and hands it back, possibly asynchronously."""

    def run(self, tree: Root) -> Root | cabc.Awaitable[Root]:
        """Transform ``tree`` in place and return it."""
        ...


@dc.dataclass(slots=True)
class RunResult:
    """Outcome of one isolated document run.

    Attributes
    ----------
    tree : Root | None
        Enriched tree when the run succeeded.
    error : PipelineError | None
        Failure that aborted the run, if any.
    """

    tree: Root | None
    error: PipelineError | None = None

    @property
    def ok(self) -> bool:
        """Return whether the run produced a tree."""
        return self.error is None

    def unwrap(self) -> Root:
        """Return the enriched tree or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return typ.cast("Root", self.tree)


class Pipeline:
    """Ordered chain of stages applied to one tree at a time."""

    def __init__(self, stages: cabc.Iterable[Stage]) -> None:
        self.stages = tuple(stages)

    async def run(self, tree: Root) -> Root:
        """Apply every stage to ``tree`` in order and return the result.

        Raises
        ------
        PipelineError
            If a stage fails. ``tree`` may then be partially mutated and
            should be discarded.
        """
        for stage in self.stages:
            name = type(stage).__name__
            logger.debug("Running stage %s", name)
            result = stage.run(tree)
            if inspect.isawaitable(result):
                result = await result
            tree = result
            logger.debug("Finished stage %s", name)
        return tree

    async def try_run(self, tree: Root) -> RunResult:
        """Run the pipeline on a copy of ``tree``, capturing pipeline errors."""
        working = copy.deepcopy(tree)
        try:
            enriched = await self.run(working)
        except PipelineError as exc:
            logger.warning("Document run failed: %s", exc)
            return RunResult(tree=None, error=exc)
        return RunResult(tree=enriched)

    async def run_many(self, trees: cabc.Iterable[Root]) -> list[RunResult]:
        """Run several documents concurrently; one failure does not stop the rest."""
        return list(await asyncio.gather(*(self.try_run(tree) for tree in trees)))


def build_pipeline(
    engine: HighlightEngine,
    config: PipelineConfig | None = None,
    *,
    get_exports: ExportsFactory | None = None,
) -> Pipeline:
    """Assemble the standard stages in dependency order.

    Parameters
    ----------
    engine : HighlightEngine
        Engine used by the highlighting stage; the caller owns it.
    config : PipelineConfig, optional
        Theme and heading settings; defaults to :class:`PipelineConfig()`.
    get_exports : callable, optional
        Metadata function mapping the final tree to ``{name: value}``;
        defaults to the section index.

    Returns
    -------
    Pipeline
        Annotation, classification, highlighting, slugs, title, exports.

    Raises
    ------
    UnknownThemeError
        If ``engine`` has no theme named by ``config.theme.name``.
    """
    config = config or PipelineConfig()
    engine.theme(config.theme.name)
    exports = get_exports or functools.partial(
        default_exports, tag=config.section_heading
    )
    return Pipeline(
        [
            AnnotationNormalizer(),
            CodeBlockClassifier(),
            SyntaxHighlighter(engine, config.theme.name),
            HeadingSlugAssigner(config.section_heading),
            TitleExtractor(config.title_heading),
            ExportSynthesizer(exports),
        ]
    )


async def enrich_markdown(
    text: str,
    config: PipelineConfig | None = None,
    *,
    engine: HighlightEngine | None = None,
) -> Root:
    """Parse ``text`` and run the standard pipeline over it.

    The process-wide engine for ``config`` is used unless ``engine`` is given.
    """
    config = config or PipelineConfig()
    engine = engine or await get_shared_engine(config)
    return await build_pipeline(engine, config).run(parse_markdown(text))


__all__ = [
    "Pipeline",
    "RunResult",
    "Stage",
    "build_pipeline",
    "enrich_markdown",
]
