r"""Build document trees from MDX-flavoured Markdown or from HTML fragments.

The pipeline itself is parser-agnostic; this module is the adapter used by
tests and by callers that start from text. Markdown is rendered with
Python-Markdown (fenced code, tables, sane lists) and the resulting HTML is
converted node by node with BeautifulSoup. Top-level ``import``/``export``
paragraphs are lifted out before rendering and become
:class:`~df12_mdx.tree.Program` nodes at their original position.

A fence opener may end with an annotation after its language, for example
``bash {{ title: 'cURL' }}``. Python-Markdown would not recognise such a
fence, so the annotation is taken off the opener first and attached to the
resulting ``pre`` element.

Example
-------
>>> from df12_mdx.parser import parse_markdown
>>> tree = parse_markdown("export const a = 1\n\n```python\nprint(1)\n```\n")
>>> [type(child).__name__ for child in tree.children]
['Program', 'Element']
"""

from __future__ import annotations

import re
import typing as typ

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from markdown import Markdown

from df12_mdx.tree import Element, Program, Root, Text, iter_elements
from df12_mdx.visitors.annotations import parse_annotation

if typ.TYPE_CHECKING:
    from df12_mdx.tree import JSONValue, Node

ESM_START_PATTERN = re.compile(r"^(?:export|import)\s")
FENCE_PATTERN = re.compile(r"^[ ]{0,3}([`~]{3,})")
FENCE_ANNOTATION_PATTERN = re.compile(
    r"^(?P<indent>[ ]{0,3})(?P<fence>[`~]{3,})[ ]*"
    r"(?P<language>[A-Za-z0-9_+#.-]+)?(?:,[^\s{]*)?[ ]*"
    r"\{\{(?P<body>(?:(?!\}\}).)*)\}\}[ ]*$"
)
FENCE_ANNOTATION_ID_PREFIX = "df12-fence-annotation-"
FENCED_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(
    r"^([`~]{3,})([A-Za-z0-9_+#.-]+)?(,[^\r\n]+)$", re.MULTILINE
)
MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def _normalize_fenced_blocks(text: str) -> str:
    """Outdent fences and drop ``,option`` suffixes from fence labels."""
    without_indent = FENCED_INDENT_PATTERN.sub(r"\1", text)

    def _strip_labels(match: re.Match[str]) -> str:
        fence, language, _extras = match.groups()
        return f"{fence}{language or ''}"

    return FENCE_LABEL_PATTERN.sub(_strip_labels, without_indent)


def _closes(line: str, fence: str) -> bool:
    match = FENCE_PATTERN.match(line)
    if match is None or line[match.end() :].strip():
        return False
    marker = match.group(1)
    return marker[0] == fence[0] and len(marker) >= len(fence)


def _lift_fence_annotations(
    text: str,
) -> tuple[str, dict[str, dict[str, JSONValue]]]:
    """Take ``{{ ... }}`` annotations off fence openers.

    Each annotated opener is rewritten to Python-Markdown's attribute form,
    ``{ .<language> #<token> }``. The token becomes the ``id`` of the rendered
    ``pre`` and keys the parsed annotation in the returned mapping.

    Raises
    ------
    AnnotationError
        If an annotation is not a valid mapping.
    """
    annotations: dict[str, dict[str, JSONValue]] = {}
    lines = text.split("\n")
    fence: str | None = None
    for index, line in enumerate(lines):
        if fence is not None:
            if _closes(line, fence):
                fence = None
            continue
        if match := FENCE_ANNOTATION_PATTERN.match(line):
            token = f"{FENCE_ANNOTATION_ID_PREFIX}{len(annotations)}"
            annotations[token] = parse_annotation(match.group("body"))
            language = match.group("language")
            attrs = f".{language} #{token}" if language else f"#{token}"
            fence = match.group("fence")
            lines[index] = f"{match.group('indent')}{fence}{{ {attrs} }}"
        elif opener := FENCE_PATTERN.match(line):
            fence = opener.group(1)
    return "\n".join(lines), annotations


def _attach_fence_annotations(
    root: Root, annotations: dict[str, dict[str, JSONValue]]
) -> None:
    for pre, _parent in iter_elements(root, "pre"):
        if pre.id is not None and pre.id in annotations:
            pre.annotation = annotations.pop(pre.id)
            pre.id = None


def split_program_blocks(text: str) -> list[tuple[bool, str]]:
    """Split ``text`` into ``(is_program, chunk)`` pairs in document order.

    A program block is a paragraph whose first line starts with ``import`` or
    ``export``; it runs until the next blank line. Lines inside fenced code
    are never treated as program blocks.
    """
    segments: list[tuple[bool, list[str]]] = []
    fence: str | None = None
    in_program = False
    previous_blank = True
    for line in text.splitlines():
        blank = not line.strip()
        if in_program:
            if blank:
                in_program = False
                previous_blank = True
            else:
                segments[-1][1].append(line)
            continue
        if fence is None and previous_blank and ESM_START_PATTERN.match(line):
            segments.append((True, [line]))
            in_program = True
            continue
        if match := FENCE_PATTERN.match(line):
            marker = match.group(1)
            if fence is None:
                fence = marker
            elif marker[0] == fence[0] and len(marker) >= len(fence):
                fence = None
        if not segments or segments[-1][0]:
            segments.append((False, []))
        segments[-1][1].append(line)
        previous_blank = blank
    return [(is_program, "\n".join(lines)) for is_program, lines in segments]


def _convert(node: object) -> Node | None:
    """Convert one BeautifulSoup node; comments and doctypes yield ``None``."""
    match node:
        case Tag():
            attributes = dict(node.attrs)
            class_name = attributes.pop("class", [])
            element_id = attributes.pop("id", None)
            properties = {
                key: " ".join(value) if isinstance(value, list) else str(value)
                for key, value in attributes.items()
            }
            return Element(
                tag=node.name,
                children=_convert_children(node),
                class_name=(
                    class_name.split() if isinstance(class_name, str) else list(class_name)
                ),
                properties=properties,
                id=element_id or None,
            )
        case PreformattedString():
            return None
        case NavigableString():
            return Text(str(node))
        case _:
            return None


def _convert_children(parent: Tag) -> list[Node]:
    children: list[Node] = []
    for child in parent.children:
        converted = _convert(child)
        if converted is not None:
            children.append(converted)
    return children


def from_html(html: str) -> Root:
    """Return a tree for an HTML fragment.

    ``class`` becomes :attr:`Element.class_name`, ``id`` becomes
    :attr:`Element.id`, every other attribute lands in ``properties``.
    Comments, doctypes, and processing instructions are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    return Root(children=_convert_children(soup))


def parse_markdown(text: str) -> Root:
    """Return a tree for MDX-flavoured Markdown ``text``.

    Parameters
    ----------
    text : str
        Markdown with optional top-level ``import``/``export`` paragraphs and
        ``{{ ... }}`` annotations (left in the text for the annotation stage).

    Returns
    -------
    Root
        Tree ready for :class:`~df12_mdx.pipeline.Pipeline`. Annotated fences
        carry their annotation on the ``pre`` element.

    Raises
    ------
    AnnotationError
        If a fence annotation is not a valid mapping.
    """
    root = Root()
    text, fence_annotations = _lift_fence_annotations(text)
    for is_program, chunk in split_program_blocks(_normalize_fenced_blocks(text)):
        if is_program:
            root.children.append(Program(source=chunk))
            continue
        if not chunk.strip():
            continue
        md = Markdown(extensions=MARKDOWN_EXTENSIONS)
        root.children.extend(from_html(md.convert(chunk)).children)
    _attach_fence_annotations(root, fence_annotations)
    return root


__all__ = ["from_html", "parse_markdown", "split_program_blocks"]
