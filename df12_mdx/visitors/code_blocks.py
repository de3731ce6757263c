"""Record the language requested by each fenced code block on its container."""

from __future__ import annotations

from df12_mdx._constants import LANGUAGE_CLASS_PREFIX
from df12_mdx.tree import Element, Root, iter_elements


def code_language(code: Element) -> str | None:
    """Return the language encoded in a ``language-<name>`` class, if any."""
    for class_name in code.class_name:
        if class_name.startswith(LANGUAGE_CLASS_PREFIX):
            language = class_name.removeprefix(LANGUAGE_CLASS_PREFIX)
            return language or None
    return None


class CodeBlockClassifier:
    """Copy each ``code`` element's language onto its parent element.

    Blocks without a language class are left alone; that is the plain text
    case, not an error. Running the classifier twice yields the same result.
    """

    def run(self, tree: Root) -> Root:
        """Annotate code block containers in ``tree`` and return it."""
        for code, parent in iter_elements(tree, "code"):
            language = code_language(code)
            if language is not None and isinstance(parent, Element):
                parent.language = language
        return tree


__all__ = ["CodeBlockClassifier", "code_language"]
