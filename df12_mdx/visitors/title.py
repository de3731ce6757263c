"""Derive the document title from its first top-level heading."""

from __future__ import annotations

from df12_mdx._constants import TITLE_HEADING_TAG
from df12_mdx.tree import Root, iter_elements, to_string

from .exports import add_export


class TitleExtractor:
    """Set ``Root.title`` and export it as ``title`` unless already declared."""

    def __init__(self, tag: str = TITLE_HEADING_TAG, name: str = "title") -> None:
        self.tag = tag
        self.name = name

    def run(self, tree: Root) -> Root:
        """Record the first matching heading's text as the title; return ``tree``."""
        heading = next(iter_elements(tree, self.tag), None)
        if heading is None:
            return tree
        tree.title = to_string(heading[0]).strip()
        add_export(tree, self.name, tree.title)
        return tree


__all__ = ["TitleExtractor"]
