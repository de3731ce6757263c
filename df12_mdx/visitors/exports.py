"""Synthesize top-level ``export const`` bindings from document metadata.

The synthesizer asks a metadata function for ``{name: value}`` pairs and adds
one :class:`~df12_mdx.tree.Program` per name to the end of the document. The
declaration is built directly as an :class:`~df12_mdx.tree.ExportBinding`;
its source text is derived from the value (JSON is a valid ECMAScript
expression), never parsed back.

An author who already declares the name wins: detection is a textual match of
``export const <name> =`` against each top-level program's source. Other
spellings of an equivalent declaration (``export let``, destructuring,
re-exports) are not recognised and will be duplicated.
"""

from __future__ import annotations

import logging
import re
import typing as typ

import msgspec.json

from df12_mdx._constants import EXPORT_DECLARATION_TEMPLATE, SECTION_HEADING_TAG
from df12_mdx.errors import BindingSourceError
from df12_mdx.tree import Element, ExportBinding, Program, Root, to_string

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from df12_mdx.tree import JSONValue, Node

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
RESERVED_WORDS = frozenset(
    {
        "await", "break", "case", "catch", "class", "const", "continue",
        "debugger", "default", "delete", "do", "else", "enum", "export",
        "extends", "false", "finally", "for", "function", "if", "import", "in",
        "instanceof", "let", "new", "null", "return", "super", "switch", "this",
        "throw", "true", "try", "typeof", "var", "void", "while", "with",
        "yield",
    }
)  # fmt: skip

ExportsFactory: typ.TypeAlias = "cabc.Callable[[Root], cabc.Mapping[str, JSONValue]]"


def declares(program: Program, name: str) -> bool:
    """Return whether ``program`` already declares the binding ``name``."""
    if any(binding.name == name for binding in program.declarations):
        return True
    pattern = rf"export\s+const\s+{re.escape(name)}\s*="
    return re.search(pattern, program.source) is not None


def build_export(name: str, value: JSONValue) -> Program:
    """Return a program node declaring ``export const <name> = <value>``.

    Raises
    ------
    BindingSourceError
        If ``name`` is not a usable identifier or ``value`` cannot be encoded
        as a literal.
    """
    if not IDENTIFIER_PATTERN.fullmatch(name) or name in RESERVED_WORDS:
        msg = f"Cannot export binding named {name!r}."
        raise BindingSourceError(msg)
    try:
        literal = msgspec.json.encode(value).decode("utf-8")
    except (TypeError, ValueError, msgspec.EncodeError) as exc:
        msg = f"Cannot encode the value exported as {name!r}: {exc}"
        raise BindingSourceError(msg) from exc
    source = EXPORT_DECLARATION_TEMPLATE.format(name=name, value=literal)
    return Program(source=source, declarations=[ExportBinding(name, value)])


def add_export(tree: Root, name: str, value: JSONValue) -> bool:
    """Append an export for ``name`` unless a top-level program declares it.

    Returns
    -------
    bool
        ``True`` when a declaration was appended, ``False`` when skipped.
    """
    if any(declares(program, name) for program in tree.programs):
        logger.debug("Keeping author declaration of %r", name)
        return False
    tree.children.append(build_export(name, value))
    return True


def get_sections(
    node: Root | Node, tag: str = SECTION_HEADING_TAG
) -> list[dict[str, JSONValue]]:
    """Collect section records for every heading under ``node``.

    Each record holds the heading's text and ``id`` with its annotation fields
    merged in (annotation keys win). Headings are not searched for nested
    headings; any other element is.

    Examples
    --------
    >>> from df12_mdx.tree import Element, Root, Text
    >>> tree = Root([Element("h2", [Text("FAQ")], id="faq")])
    >>> get_sections(tree)
    [{'title': 'FAQ', 'id': 'faq'}]
    """
    sections: list[dict[str, JSONValue]] = []
    children = node.children if isinstance(node, Root | Element) else []
    for child in children:
        if not isinstance(child, Element):
            continue
        if child.tag == tag:
            sections.append(
                {"title": to_string(child), "id": child.id, **(child.annotation or {})}
            )
        else:
            sections.extend(get_sections(child, tag))
    return sections


def default_exports(
    tree: Root, *, tag: str = SECTION_HEADING_TAG
) -> dict[str, JSONValue]:
    """Return the bindings every document gets: its section index."""
    return {"sections": get_sections(tree, tag)}


class ExportSynthesizer:
    """Append the bindings produced by ``get_exports`` to the document."""

    def __init__(self, get_exports: ExportsFactory = default_exports) -> None:
        self.get_exports = get_exports

    def run(self, tree: Root) -> Root:
        """Add every missing binding to ``tree`` and return it.

        Raises
        ------
        BindingSourceError
            If a computed binding cannot be turned into a declaration.
        """
        for name, value in self.get_exports(tree).items():
            add_export(tree, name, value)
        return tree


__all__ = [
    "ExportSynthesizer",
    "add_export",
    "build_export",
    "declares",
    "default_exports",
    "get_sections",
]
