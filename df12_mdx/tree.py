r"""Document tree nodes and walking helpers shared by every visitor.

The tree mirrors the hast model produced by MDX parsers: a :class:`Root`
holding :class:`Element`, :class:`Text`, and :class:`Program` nodes. Instead
of a free-form property bag, elements expose the fields the visitors read and
write (``language``, ``id``, ``code``, ``annotation``) as explicit optional
attributes; every other HTML attribute survives untouched in ``properties``.

Example
-------
>>> from df12_mdx.tree import Element, Root, Text, to_string
>>> heading = Element("h2", [Text("Install "), Element("code", [Text("pip")])])
>>> to_string(Root([heading]))
'Install pip'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

JSONValue: typ.TypeAlias = (
    "dict[str, JSONValue] | list[JSONValue] | str | int | float | bool | None"
)


@dc.dataclass(slots=True)
class Text:
    """Leaf node holding a run of character data.

    After highlighting, the text of a code node holds the rendered markup
    rather than the raw source.
    """

    value: str


@dc.dataclass(slots=True)
class ExportBinding:
    """Structured form of one ``export const <name> = <value>`` declaration.

    Attributes
    ----------
    name : str
        Identifier bound by the declaration.
    value : JSONValue
        Plain Python structure the identifier is bound to.
    """

    name: str
    value: JSONValue


@dc.dataclass(slots=True)
class Program:
    """Embedded ECMAScript module block (``import``/``export`` statements).

    Attributes
    ----------
    source : str
        Textual form of the block as it appears in the document.
    declarations : list[ExportBinding]
        Structured declarations for blocks synthesized by the pipeline. Author
        blocks are kept as source text only and leave this list empty.
    """

    source: str
    declarations: list[ExportBinding] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Element:
    """HTML element with explicit fields for pipeline-owned properties.

    Attributes
    ----------
    tag : str
        Lower-case tag name such as ``"pre"`` or ``"h2"``.
    children : list[Node]
        Ordered child nodes.
    class_name : list[str]
        Class list from the ``class`` attribute.
    properties : dict[str, str]
        Remaining attributes not modelled as explicit fields.
    language : str | None
        Highlight language requested by a child ``code`` element.
    id : str | None
        Element identifier; author supplied or assigned by the slug visitor.
    code : str | None
        Raw source of a code block, kept after highlighting replaces the text.
    annotation : dict[str, JSONValue] | None
        Structured metadata attached by the author with ``{{ ... }}``.
    """

    tag: str
    children: list[Node] = dc.field(default_factory=list)
    class_name: list[str] = dc.field(default_factory=list)
    properties: dict[str, str] = dc.field(default_factory=dict)
    language: str | None = None
    id: str | None = None
    code: str | None = None
    annotation: dict[str, JSONValue] | None = None


@dc.dataclass(slots=True)
class Root:
    """Top of a document tree.

    Attributes
    ----------
    children : list[Node]
        Top-level nodes, including the document's ``Program`` blocks.
    title : str | None
        Document title populated by the title visitor.
    """

    children: list[Node] = dc.field(default_factory=list)
    title: str | None = None

    @property
    def programs(self) -> list[Program]:
        """Return the top-level program blocks in document order."""
        return [child for child in self.children if isinstance(child, Program)]


Node: typ.TypeAlias = Element | Text | Program
Parent: typ.TypeAlias = Root | Element


def walk(node: Root | Node) -> cabc.Iterator[tuple[Node, Parent]]:
    """Yield ``(node, parent)`` pairs for every descendant in document order."""
    match node:
        case Root(children=children) | Element(children=children):
            for child in list(children):
                yield child, node
                yield from walk(child)
        case _:
            return


def iter_elements(
    node: Root | Node, tag: str | None = None
) -> cabc.Iterator[tuple[Element, Parent]]:
    """Yield ``(element, parent)`` pairs, optionally filtered by tag name."""
    for child, parent in walk(node):
        if isinstance(child, Element) and (tag is None or child.tag == tag):
            yield child, parent


def to_string(node: Root | Node) -> str:
    """Return the concatenated text content of ``node`` and its descendants."""
    match node:
        case Text(value=value):
            return value
        case Root(children=children) | Element(children=children):
            return "".join(to_string(child) for child in children)
        case _:
            return ""


__all__ = [
    "Element",
    "ExportBinding",
    "JSONValue",
    "Node",
    "Parent",
    "Program",
    "Root",
    "Text",
    "iter_elements",
    "to_string",
    "walk",
]
