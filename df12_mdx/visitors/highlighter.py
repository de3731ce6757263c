"""Replace code block text with highlighted markup from a shared engine.

This is the only asynchronous stage. It keeps every block's raw source on the
``pre`` element (``Element.code``) for consumers such as copy buttons, then
swaps the code text for markup produced by
:class:`~df12_mdx.highlight.HighlightEngine`. All blocks of a document are
rendered before any text is replaced, so an unsupported language aborts the
run without leaving a half-highlighted tree behind.
"""

from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import typing as typ

from df12_mdx._constants import DEFAULT_THEME_NAME
from df12_mdx.tree import Element, Root, Text, iter_elements

if typ.TYPE_CHECKING:
    from df12_mdx.highlight import HighlightEngine, ThemeDescriptor

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class _PendingBlock:
    """Code block waiting for its markup."""

    code: Element
    text: Text | None
    source: str
    language: str


def _code_child(pre: Element) -> Element | None:
    """Return the ``code`` element wrapped by ``pre`` when it is the first child."""
    first = pre.children[0] if pre.children else None
    if isinstance(first, Element) and first.tag == "code":
        return first
    return None


class SyntaxHighlighter:
    """Highlight classified code blocks with the engine handed in by the caller."""

    def __init__(
        self, engine: HighlightEngine, theme: str | ThemeDescriptor = DEFAULT_THEME_NAME
    ) -> None:
        """Bind the stage to an engine and the theme used for every block.

        Parameters
        ----------
        engine : HighlightEngine
            Engine shared across runs; owned by the caller.
        theme : str or ThemeDescriptor, optional
            Theme name registered with ``engine`` (defaults to
            ``"css-variables"``) or a descriptor.
        """
        self.engine = engine
        self.theme = theme

    async def run(self, tree: Root) -> Root:
        """Preserve raw code, highlight every block with a language, return ``tree``.

        Raises
        ------
        UnsupportedLanguageError
            If any block asks for a language the engine was not built with.
        """
        pending: list[_PendingBlock] = []
        for pre, _parent in iter_elements(tree, "pre"):
            code = _code_child(pre)
            if code is None:
                continue
            first = code.children[0] if code.children else None
            text = first if isinstance(first, Text) else None
            source = text.value if text is not None else ""
            pre.code = source
            if pre.language:
                pending.append(_PendingBlock(code, text, source, pre.language))

        if not pending:
            return tree

        markup = await asyncio.gather(
            *(
                self.engine.render(block.source, block.language, self.theme)
                for block in pending
            )
        )
        for block, html in zip(pending, markup, strict=True):
            if block.text is None:
                block.code.children.insert(0, Text(html))
            else:
                block.text.value = html
        logger.debug("Highlighted %d code blocks", len(pending))
        return tree


__all__ = ["SyntaxHighlighter"]
