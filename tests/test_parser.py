"""Unit tests for the Markdown and HTML input adapters."""

from __future__ import annotations

import typing as typ

from df12_mdx.parser import from_html, parse_markdown, split_program_blocks
from df12_mdx.tree import Element, Program, Text, iter_elements

SAMPLE_MDX = """\
import { Note } from '@/components'
export const description = 'Contacts API'

# Contacts

## List contacts {{ tag: 'GET', label: '/v1/contacts' }}

```python
print("hi")
```

<h2 id="custom">Custom heading</h2>
"""


def test_program_blocks_are_lifted_in_order() -> None:
    """Top-level import/export paragraphs become one ``Program`` node."""
    tree = parse_markdown(SAMPLE_MDX)
    assert isinstance(tree.children[0], Program)
    assert tree.children[0].source == (
        "import { Note } from '@/components'\n"
        "export const description = 'Contacts API'"
    )
    assert len(tree.programs) == 1


def test_fenced_code_follows_pre_code_convention() -> None:
    """Fences render as ``pre > code.language-<name>`` with raw text."""
    tree = parse_markdown(SAMPLE_MDX)
    (pre, _parent), = list(iter_elements(tree, "pre"))
    code = typ.cast("Element", pre.children[0])
    assert code.tag == "code"
    assert code.class_name == ["language-python"]
    assert code.children == [Text('print("hi")\n')]


def test_headings_keep_annotations_and_raw_html_ids() -> None:
    """Annotations stay in the text; raw HTML ids map onto ``Element.id``."""
    tree = parse_markdown(SAMPLE_MDX)
    headings = [element for element, _parent in iter_elements(tree, "h2")]
    assert [heading.id for heading in headings] == [None, "custom"]
    first = typ.cast("Text", headings[0].children[0])
    assert first.value.endswith("{{ tag: 'GET', label: '/v1/contacts' }}")


def test_exports_inside_fences_stay_code() -> None:
    """An ``export`` line inside a code fence is not a program block."""
    text = "```js\n\nexport const x = 1\n```\n"
    assert all(not is_program for is_program, _chunk in split_program_blocks(text))
    tree = parse_markdown(text)
    assert tree.programs == []


def test_fence_labels_are_normalised() -> None:
    """Indented fences and ``,option`` suffixes still produce a language class."""
    tree = parse_markdown("- Example\n\n  ```rust,no_run\n  fn main() {}\n  ```\n")
    codes = [element for element, _parent in iter_elements(tree, "code")]
    assert codes
    assert codes[0].class_name == ["language-rust"]


def test_from_html_maps_attributes_and_drops_comments() -> None:
    """Class and id get explicit fields; other attributes are kept as strings."""
    tree = from_html(
        '<!-- note --><div class="a b" id="main" data-x="1"><p>Hi</p></div>'
    )
    assert len(tree.children) == 1
    div = tree.children[0]
    assert isinstance(div, Element)
    assert div.class_name == ["a", "b"]
    assert div.id == "main"
    assert div.properties == {"data-x": "1"}
    assert div.children == [Element("p", [Text("Hi")])]


def test_fence_annotation_lands_on_the_code_block() -> None:
    """An annotated fence is still a code block and keeps its metadata."""
    text = "```bash {{ title: 'cURL' }}\ncurl -G https://api.example.com\n```\n"
    tree = parse_markdown(text)
    (pre, _parent), = list(iter_elements(tree, "pre"))
    assert pre.annotation == {"title": "cURL"}
    assert pre.id is None, "the placeholder id must not leak into the tree"
    code = typ.cast("Element", pre.children[0])
    assert code.class_name == ["language-bash"]
    assert code.children == [Text("curl -G https://api.example.com\n")]


def test_fence_annotations_pair_with_their_own_blocks() -> None:
    """Plain, indented, and annotated blocks keep their own metadata."""
    text = (
        "```python {{ title: 'Python' }}\nprint(1)\n```\n\n"
        "    indented\n\n"
        "```\nplain\n```\n\n"
        "```{{ title: 'Untyped' }}\n"
        "```js {{ inside: true }}\n"
        "```\n"
    )
    tree = parse_markdown(text)
    blocks = [pre for pre, _parent in iter_elements(tree, "pre")]
    assert [block.annotation for block in blocks] == [
        {"title": "Python"},
        None,
        None,
        {"title": "Untyped"},
    ]
    last = typ.cast("Element", blocks[-1].children[0])
    assert last.children == [Text("```js {{ inside: true }}\n")], (
        "annotation-like lines inside a fence are code"
    )
