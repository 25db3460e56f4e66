"""Per-kind visibility widening rules."""

from ..core.types import MemberKind
from ..dsl.ast import (
    LeafItem,
    StructItem,
    UnionItem,
    ModItem,
    ImplItem,
    ForeignModItem,
    Member,
)


IMPL_MEMBER_KINDS = frozenset({MemberKind.CONST, MemberKind.FN, MemberKind.TYPE})
FOREIGN_MEMBER_KINDS = frozenset({MemberKind.FN, MemberKind.STATIC, MemberKind.TYPE})


def widen_leaf(item: LeafItem, rewriter) -> LeafItem:
    """Widen a declaration that has no nested members."""
    rewriter.widen_marker(item, item.name, item.kind.value)
    return item


def widen_fields(item: StructItem | UnionItem, rewriter) -> StructItem | UnionItem:
    """Widen every field independently, then the struct or union itself."""
    for index, fld in enumerate(item.fields):
        label = fld.name if fld.name is not None else str(index)
        rewriter.widen_marker(fld, f"{item.name}.{label}", "field")
    rewriter.widen_marker(item, item.name, item.kind.value)
    return item


def widen_mod(item: ModItem, rewriter) -> ModItem:
    """
    Run the whole rewrite over an inline module body, then widen the module.

    Nested items are rewritten first so each one is judged by its own marker.
    """
    if item.items is not None:
        with rewriter.scope(item.name):
            item.items = [rewriter.rewrite(nested) for nested in item.items]
    rewriter.widen_marker(item, item.name, item.kind.value)
    return item


def _widen_members(members: list[Member], allowed: frozenset, rewriter) -> None:
    for member in members:
        if member.kind not in allowed:
            continue
        rewriter.widen_marker(member, member.name, member.kind.value)


def widen_impl(item: ImplItem, rewriter) -> ImplItem:
    """Widen associated consts, fns and types. The block has no marker."""
    with rewriter.scope(f"<{item.header}>"):
        _widen_members(item.members, IMPL_MEMBER_KINDS, rewriter)
    return item


def widen_foreign_mod(item: ForeignModItem, rewriter) -> ForeignModItem:
    """Widen foreign fns, statics and types. The block has no marker."""
    label = f"<extern {item.abi}>" if item.abi else "<extern>"
    with rewriter.scope(label):
        _widen_members(item.members, FOREIGN_MEMBER_KINDS, rewriter)
    return item
