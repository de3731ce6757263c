"""Behaviour tests for end-to-end document enrichment.

These pytest-bdd scenarios drive ``features/document_enrichment.feature``.
Each scenario parses a small MDX document, runs the standard pipeline with
the session highlight engine, and inspects the enriched tree.

Usage
-----
Run ``pytest tests/bdd/test_document_enrichment.py -v`` after installing the
test extra (``pip install -e .[test]``). No network access is required.
"""

from __future__ import annotations

import asyncio
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from df12_mdx.errors import UnsupportedLanguageError
from df12_mdx.parser import parse_markdown
from df12_mdx.pipeline import build_pipeline
from df12_mdx.tree import Text, iter_elements

if typ.TYPE_CHECKING:
    from df12_mdx.highlight import HighlightEngine
    from df12_mdx.pipeline import RunResult
    from df12_mdx.tree import Element, Root

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "document_enrichment.feature"
)
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given('a document with two "Setup" sections')
def given_duplicate_sections(scenario_state: dict[str, object]) -> None:
    """Parse a document whose two sections share their heading text."""
    scenario_state["tree"] = parse_markdown("## Setup\n\nFirst.\n\n## Setup\n\nSecond.\n")


@given("a document that already exports its sections")
def given_authored_sections(scenario_state: dict[str, object]) -> None:
    """Parse a document declaring ``sections`` itself."""
    scenario_state["tree"] = parse_markdown(
        "export const sections = [{ title: 'Manual' }]\n\n## Setup\n"
    )


@given("a document with a brainfuck code block")
def given_brainfuck_block(scenario_state: dict[str, object]) -> None:
    """Parse a document whose only code block uses an unsupported language."""
    scenario_state["tree"] = parse_markdown("## Code\n\n```brainfuck\n++[>+<-]\n```\n")


@when("I enrich the document")
def when_enrich(engine: HighlightEngine, scenario_state: dict[str, object]) -> None:
    """Run the standard pipeline, failing the scenario on any error."""
    tree = typ.cast("Root", scenario_state["tree"])
    scenario_state["tree"] = asyncio.run(build_pipeline(engine).run(tree))


@when("I try to enrich the document")
def when_try_enrich(engine: HighlightEngine, scenario_state: dict[str, object]) -> None:
    """Run the pipeline in isolation, capturing the outcome."""
    tree = typ.cast("Root", scenario_state["tree"])
    scenario_state["result"] = asyncio.run(build_pipeline(engine).try_run(tree))


@then('the section identifiers are "setup" and "setup-1"')
def then_distinct_ids(scenario_state: dict[str, object]) -> None:
    """Both headings carry unique identifiers in document order."""
    tree = typ.cast("Root", scenario_state["tree"])
    ids = [h2.id for h2, _parent in iter_elements(tree, "h2")]
    assert ids == ["setup", "setup-1"], f"unexpected heading ids: {ids!r}"


@then("the sections export lists both identifiers")
def then_sections_export(scenario_state: dict[str, object]) -> None:
    """The synthesized declaration carries both section records."""
    tree = typ.cast("Root", scenario_state["tree"])
    bindings = [
        binding
        for program in tree.programs
        for binding in program.declarations
        if binding.name == "sections"
    ]
    assert len(bindings) == 1, "expected one synthesized sections binding"
    assert bindings[0].value == [
        {"title": "Setup", "id": "setup"},
        {"title": "Setup", "id": "setup-1"},
    ]


@then("the document declares sections exactly once")
def then_single_declaration(scenario_state: dict[str, object]) -> None:
    """Only the authored declaration remains."""
    tree = typ.cast("Root", scenario_state["tree"])
    sources = [p.source for p in tree.programs if "sections" in p.source]
    assert sources == ["export const sections = [{ title: 'Manual' }]"]


@then("the run fails with an unsupported language error")
def then_run_fails(scenario_state: dict[str, object]) -> None:
    """The captured error names the unsupported language."""
    result = typ.cast("RunResult", scenario_state["result"])
    assert not result.ok
    assert isinstance(result.error, UnsupportedLanguageError)
    assert result.error.language == "brainfuck"


@then("the original code block is unchanged")
def then_code_unchanged(scenario_state: dict[str, object]) -> None:
    """No markup or pipeline properties leaked into the caller's tree."""
    tree = typ.cast("Root", scenario_state["tree"])
    (pre, _parent), = list(iter_elements(tree, "pre"))
    assert pre.language is None
    assert pre.code is None
    code = typ.cast("Element", pre.children[0])
    assert code.children == [Text("++[>+<-]\n")]
