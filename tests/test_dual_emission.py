"""Tests for emitting the widened and original variants together."""

import copy
import pytest
from pathlib import Path
from internalize.core.errors import MalformedInvocationError
from internalize.core.gate import (
    GatedItem,
    internalize,
    render_gated,
    expand_internal,
)
from internalize.core.types import GateConfig
from internalize.dsl.ast import (
    PUBLIC,
    INHERITED,
    DocAttribute,
    FnItem,
    Field,
    StructItem,
    ModItem,
)


DSL_EXAMPLES_PATH = Path(__file__).parent.parent / "internalize" / "dsl" / "examples"

NOTICE_LINES = [
    "/// This item is internal and could change or be removed without warning.",
    "///",
    "/// Be careful when relying on it.",
]


def doc_lines_before(lines, declaration):
    """Collect the doc lines directly above the first line starting with `declaration`."""
    index = next(i for i, line in enumerate(lines) if line.strip().startswith(declaration))
    docs = []
    for line in reversed(lines[:index]):
        if not line.strip().startswith("///"):
            break
        docs.insert(0, line.strip())
    return docs


@pytest.fixture
def person_module():
    return ModItem(
        name="person",
        items=[
            StructItem(
                name="Person",
                fields=[Field("name", "&'static str", PUBLIC), Field("ssn", "&'static str")],
            ),
            FnItem("person_maker", "fn person_maker() -> Person { todo!() }", attrs=[DocAttribute(" Makes a person.")]),
        ],
    )


def test_original_equals_input(person_module):
    """Test that the original variant is the untouched input."""
    before = copy.deepcopy(person_module)
    gated = internalize(person_module)

    assert gated.private is person_module
    assert gated.private == before


def test_widened_differs_only_in_markers_and_attrs(person_module):
    """Test that kinds, names and shapes are preserved in the widened copy."""
    gated = internalize(person_module)
    public, private = gated.public, gated.private

    assert public is not private
    assert type(public) is type(private)
    assert public.name == private.name
    assert len(public.items) == len(private.items)
    for widened, original in zip(public.items, private.items):
        assert type(widened) is type(original)
        assert widened.name == original.name

    struct = public.items[0]
    assert [f.name for f in struct.fields] == ["name", "ssn"]
    assert [f.ty for f in struct.fields] == ["&'static str", "&'static str"]
    assert public.items[1].source == private.items[1].source


def test_select_by_feature(person_module):
    """Test that exactly one variant is chosen for a build."""
    gated = internalize(person_module, GateConfig(feature="unstable"))

    assert gated.select({"unstable"}) is gated.public
    assert gated.select(["std", "unstable"]) is gated.public
    assert gated.select(set()) is gated.private
    assert gated.select({"internal"}) is gated.private


def test_select_single_feature_string(person_module):
    """Test that a bare string is one feature, not a set of characters."""
    gated = internalize(person_module)

    assert gated.select("internal") is gated.public
    assert gated.select("intern") is gated.private
    assert gated.select("") is gated.private


def test_default_feature_is_internal(person_module):
    """Test the default capability flag name."""
    assert internalize(person_module).feature == "internal"


def test_invalid_feature_name_rejected():
    """Test that the feature name is validated."""
    with pytest.raises(ValueError):
        GateConfig(feature="not a feature")
    with pytest.raises(ValueError):
        GateConfig(feature="")


@pytest.mark.parametrize("value", ["fn f() {}", None, 42, Field("a", "u8")])
def test_non_declaration_aborts(value):
    """Test that non-declaration input is a fatal error."""
    with pytest.raises(MalformedInvocationError):
        internalize(value)


def test_render_gated_order():
    """Test that the original comes first under `not(feature)`."""
    gated = internalize(FnItem("run", "fn run() {}", attrs=[DocAttribute(" Runs.")]))
    rendered = render_gated(gated)

    assert rendered.splitlines() == [
        '#[cfg(not(feature = "internal"))]',
        "/// Runs.",
        "fn run() {}",
        '#[cfg(feature = "internal")]',
        "/// This item is internal and could change or be removed without warning.",
        "///",
        "/// Be careful when relying on it.",
        "///",
        "/// ---",
        "///",
        "/// Runs.",
        "pub fn run() {}",
    ]


def test_expand_internal_from_source():
    """Test the text-level expansion of one declaration."""
    expanded = expand_internal("pub(crate) const LIMIT: usize = 64;", GateConfig(feature="unstable"))

    assert expanded.splitlines() == [
        '#[cfg(not(feature = "unstable"))]',
        "pub(crate) const LIMIT: usize = 64;",
        '#[cfg(feature = "unstable")]',
        "/// This item is internal and could change or be removed without warning.",
        "///",
        "/// Be careful when relying on it.",
        "pub const LIMIT: usize = 64;",
    ]


def test_expand_internal_rejects_non_item():
    """Test that text which is not an item aborts the expansion."""
    with pytest.raises(MalformedInvocationError, match="wasn't called on an item"):
        expand_internal("let x = 5;")


def test_gated_item_holds_report(person_module):
    """Test that the report travels with the gated pair."""
    gated = internalize(person_module)

    assert isinstance(gated, GatedItem)
    assert gated.report.get("person::Person.ssn").annotated
    assert not gated.report.get("person::Person.name").annotated
    assert gated.private.vis == INHERITED


def test_expand_person_example():
    """Test the full expansion of the example module."""
    expanded = expand_internal((DSL_EXAMPLES_PATH / "person.rs").read_text())
    private, public = expanded.split('#[cfg(feature = "internal")]\n')

    assert private.startswith('#[cfg(not(feature = "internal"))]\nmod person {')
    assert "This item is internal" not in private

    lines = public.splitlines()
    assert lines[:4] == NOTICE_LINES + ["pub mod person {"]
    assert doc_lines_before(lines, "pub ssn:") == NOTICE_LINES
    assert doc_lines_before(lines, "pub name:") == []
    assert doc_lines_before(lines, "pub fn person_maker") == NOTICE_LINES + [
        "///",
        "/// ---",
        "///",
        "/// Makes a person.",
    ]
    assert doc_lines_before(lines, "pub mod inner") == NOTICE_LINES
    assert doc_lines_before(lines, "pub static DEEP") == NOTICE_LINES
    assert doc_lines_before(lines, "pub fn default_ssn") == []
