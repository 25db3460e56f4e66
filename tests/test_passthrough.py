"""Tests for kinds that the rewriter leaves untouched."""

import copy
import pytest
from internalize.core.classifier import classify, is_declaration
from internalize.core.rewriter import VisibilityRewriter, widen
from internalize.core.types import DeclKind
from internalize.dsl.ast import (
    DocAttribute,
    MacroItem,
    VerbatimItem,
    FnItem,
    Field,
)


@pytest.mark.parametrize("item", [
    MacroItem("thread_local", "thread_local! { static X: u8 = 0; }", [DocAttribute(" Doc.")]),
    MacroItem("my::gen", "my::gen!(Foo);"),
    VerbatimItem("auto trait Marker {}"),
])
def test_macro_and_verbatim_are_identical(item):
    """Test that macro and verbatim nodes come back unchanged."""
    before = copy.deepcopy(item)
    rewriter = VisibilityRewriter()
    result = rewriter.rewrite(item)

    assert result == before
    assert rewriter.report.entries == []


def test_unknown_objects_pass_through():
    """Test that objects outside the declaration union are returned as-is."""
    marker = object()
    assert VisibilityRewriter().rewrite(marker) is marker


def test_classify_kinds():
    """Test that the classifier reports each node's kind."""
    assert classify(FnItem("f", "fn f() {}")) == DeclKind.FN
    assert classify(MacroItem("m", "m!();")) == DeclKind.MACRO
    assert classify(VerbatimItem("x")) == DeclKind.VERBATIM
    assert classify(Field("a", "u8")) is None
    assert classify("fn f() {}") is None


def test_is_declaration():
    """Test recognition of declaration nodes."""
    assert is_declaration(VerbatimItem("x"))
    assert not is_declaration(Field("a", "u8"))
    assert not is_declaration(None)


def test_widen_leaves_input_untouched():
    """Test that the functional widen works on a copy."""
    item = FnItem("f", "fn f() {}")
    widened = widen(item)

    assert item.attrs == []
    assert widened is not item
    assert widened.attrs != []


def test_registered_handler_replaces_passthrough(monkeypatch):
    """Test that a kind gains a rule once one is registered."""
    from internalize.rules import registry

    monkeypatch.setattr(registry, "WIDEN_REGISTRY", dict(registry.WIDEN_REGISTRY))
    seen = []

    def record(item, rewriter):
        seen.append(item)
        return item

    registry.register_handler(DeclKind.MACRO, record)
    macro = MacroItem("m", "m!();")
    VisibilityRewriter().rewrite(macro)

    assert seen == [macro]
    assert registry.get_handler(DeclKind.VERBATIM) is None
