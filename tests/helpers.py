"""Tree builders shared by the stage tests."""

from __future__ import annotations

from df12_mdx._constants import LANGUAGE_CLASS_PREFIX
from df12_mdx.tree import Element, Text


def code_block(source: str, language: str | None = None) -> Element:
    """Return a ``pre > code`` block as produced by the Markdown parser."""
    class_name = [f"{LANGUAGE_CLASS_PREFIX}{language}"] if language else []
    return Element(
        "pre", [Element("code", [Text(source)], class_name=class_name)]
    )


def heading(text: str, *, tag: str = "h2", element_id: str | None = None) -> Element:
    """Return a heading element holding ``text``."""
    return Element(tag, [Text(text)], id=element_id)


__all__ = ["code_block", "heading"]
