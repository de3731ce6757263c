"""Unit tests for the code block classifier."""

from __future__ import annotations

from df12_mdx.tree import Element, Root, Text
from df12_mdx.visitors import CodeBlockClassifier, code_language

from tests.helpers import code_block


def test_language_is_attached_to_container() -> None:
    """The ``pre`` container, not the ``code`` element, carries the language."""
    block = code_block("print(1)", "python")
    CodeBlockClassifier().run(Root([block]))
    assert block.language == "python"
    code = block.children[0]
    assert isinstance(code, Element)
    assert code.language is None, "code element itself should stay unannotated"


def test_classification_is_idempotent() -> None:
    """Running the classifier twice must give the same languages as once."""
    blocks = [code_block("a", "js"), code_block("b"), code_block("c", "go")]
    tree = Root(list(blocks))
    classifier = CodeBlockClassifier()
    classifier.run(tree)
    once = [block.language for block in blocks]
    classifier.run(tree)
    assert [block.language for block in blocks] == once == ["js", None, "go"]


def test_block_without_language_is_left_alone() -> None:
    """Plain blocks are a normal case and must not raise."""
    block = code_block("plain text")
    CodeBlockClassifier().run(Root([block]))
    assert block.language is None


def test_first_prefixed_class_wins() -> None:
    """Unrelated classes before the marker are skipped."""
    code = Element("code", [Text("x")], class_name=["hljs", "language-ts", "language-js"])
    assert code_language(code) == "ts"


def test_bare_prefix_is_not_a_language() -> None:
    """``language-`` with nothing after it means no language."""
    code = Element("code", class_name=["language-"])
    assert code_language(code) is None


def test_inline_code_at_root_is_ignored() -> None:
    """A code element whose parent is the root has no container to annotate."""
    tree = Root([Element("code", [Text("x")], class_name=["language-js"])])
    assert CodeBlockClassifier().run(tree) is tree
