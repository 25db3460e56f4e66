"""Declaration classifier."""

from ..core.types import DeclKind
from ..dsl.ast import ITEM_TYPES


def is_declaration(node: object) -> bool:
    """Whether `node` is one of the declaration node types."""
    return isinstance(node, ITEM_TYPES)


def classify(node: object) -> DeclKind | None:
    """
    Identify the kind of a declaration node.

    Anything that is not a declaration node classifies as None, which callers
    treat the same way as a kind with no widening rule.
    """
    if not is_declaration(node):
        return None
    return type(node).kind
