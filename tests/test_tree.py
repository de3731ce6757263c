"""Unit tests for the document tree helpers in ``df12_mdx.tree``."""

from __future__ import annotations

from df12_mdx.tree import Element, Program, Root, Text, iter_elements, to_string, walk


def test_to_string_flattens_nested_text() -> None:
    """Text from every descendant should be concatenated in order."""
    node = Element("h2", [Text("Install "), Element("code", [Text("pip")]), Text("!")])
    assert to_string(node) == "Install pip!", "expected flattened heading text"


def test_to_string_ignores_programs() -> None:
    """Program blocks carry no document text."""
    tree = Root([Program("export const a = 1"), Element("p", [Text("Body")])])
    assert to_string(tree) == "Body"


def test_walk_yields_parents_in_document_order() -> None:
    """Each node should be paired with its direct parent, depth first."""
    inner = Element("code", [Text("x")])
    outer = Element("pre", [inner])
    tree = Root([outer, Text("tail")])
    visited = [(type(node).__name__, parent) for node, parent in walk(tree)]
    assert visited == [
        ("Element", tree),
        ("Element", outer),
        ("Text", inner),
        ("Text", tree),
    ]


def test_iter_elements_filters_by_tag() -> None:
    """Only elements with the requested tag should be produced."""
    tree = Root([Element("div", [Element("h2"), Element("p")]), Element("h2")])
    tags = [element.tag for element, _parent in iter_elements(tree, "h2")]
    assert tags == ["h2", "h2"]


def test_root_programs_lists_top_level_blocks_only() -> None:
    """``Root.programs`` should skip elements and text."""
    first = Program("import x from 'y'")
    second = Program("export const a = 1")
    tree = Root([first, Element("p"), second])
    assert tree.programs == [first, second]
