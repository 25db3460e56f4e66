"""Registry of visibility widening rules by declaration kind."""

from typing import Callable
from ..core.types import DeclKind
from .widening import (
    widen_leaf,
    widen_fields,
    widen_mod,
    widen_impl,
    widen_foreign_mod,
)


WIDEN_REGISTRY: dict[DeclKind, Callable] = {
    DeclKind.CONST: widen_leaf,
    DeclKind.ENUM: widen_leaf,
    DeclKind.EXTERN_CRATE: widen_leaf,
    DeclKind.FN: widen_leaf,
    DeclKind.STATIC: widen_leaf,
    DeclKind.TRAIT: widen_leaf,
    DeclKind.TRAIT_ALIAS: widen_leaf,
    DeclKind.TYPE: widen_leaf,
    DeclKind.USE: widen_leaf,
    DeclKind.STRUCT: widen_fields,
    DeclKind.UNION: widen_fields,
    DeclKind.MOD: widen_mod,
    DeclKind.IMPL: widen_impl,
    DeclKind.FOREIGN_MOD: widen_foreign_mod,
}


def get_handler(kind: DeclKind) -> Callable | None:
    """Get the widening rule for a kind, or None to leave it untouched."""
    return WIDEN_REGISTRY.get(kind)


def register_handler(kind: DeclKind, handler: Callable) -> None:
    """Register a widening rule for a kind."""
    WIDEN_REGISTRY[kind] = handler
