"""Lift ``{{ ... }}`` author annotations into structured element metadata.

Authors attach metadata to a block by ending its text with a double-braced
mapping, for example ``## Create a contact {{ tag: 'POST', label: '/v1' }}``.
The braces enclose a YAML flow mapping, parsed with the same safe ruamel.yaml
loader as the configuration files. The annotation is removed from the text
and stored on :attr:`~df12_mdx.tree.Element.annotation`.

Code blocks are never scanned here because their text is source. Fence
annotations are read from the fence opener by :mod:`df12_mdx.parser`.
"""

from __future__ import annotations

import io
import logging
import re
import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from df12_mdx.errors import AnnotationError
from df12_mdx.tree import Element, Root, Text

if typ.TYPE_CHECKING:
    from df12_mdx.tree import JSONValue, Parent

logger = logging.getLogger(__name__)

ANNOTATION_PATTERN = re.compile(r"\s*\{\{(?P<body>(?:(?!\}\}).)*)\}\}\s*$", re.DOTALL)
VERBATIM_TAGS = frozenset({"pre", "code"})


def parse_annotation(body: str) -> dict[str, JSONValue]:
    """Parse the inside of a ``{{ ... }}`` annotation into a mapping.

    Raises
    ------
    AnnotationError
        If the text is not valid YAML or does not describe a mapping.
    """
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        loaded = loader.load(io.StringIO(f"{{{body}}}"))
    except YAMLError as exc:
        msg = f"Malformed annotation: {{{{{body}}}}}"
        raise AnnotationError(msg) from exc
    if not isinstance(loaded, dict):
        msg = f"Annotation must be a mapping: {{{{{body}}}}}"
        raise AnnotationError(msg)
    return {str(key): value for key, value in loaded.items()}


class AnnotationNormalizer:
    """Move trailing ``{{ ... }}`` annotations into ``Element.annotation``."""

    def run(self, tree: Root) -> Root:
        """Annotate every element of ``tree`` in place and return it."""
        self._visit(tree)
        return tree

    def _visit(self, parent: Parent) -> None:
        for child in parent.children:
            if not isinstance(child, Element) or child.tag in VERBATIM_TAGS:
                continue
            self._extract(child)
            self._visit(child)

    @staticmethod
    def _extract(element: Element) -> None:
        if not element.children:
            return
        last = element.children[-1]
        if not isinstance(last, Text):
            return
        match = ANNOTATION_PATTERN.search(last.value)
        if match is None:
            return
        element.annotation = parse_annotation(match.group("body"))
        last.value = last.value[: match.start()]
        logger.debug("Annotated <%s> with %s", element.tag, sorted(element.annotation))


__all__ = ["AnnotationNormalizer", "parse_annotation"]
