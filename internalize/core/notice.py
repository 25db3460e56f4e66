"""Synthesized documentation notice for items exposed only by the internal feature."""

from ..dsl.ast import Attribute, DocAttribute


INTERNAL_NOTICE: tuple[str, ...] = (
    "This item is internal and could change or be removed without warning.",
    "Be careful when relying on it.",
)

NOTICE_SEPARATOR = " ---"


def notice_block(with_separator: bool) -> list[DocAttribute]:
    """
    Build the doc lines inserted in front of an item's attributes.

    Each notice line is followed by a blank line. When the item already had
    attributes, a separator and a blank line close the block; otherwise the
    final blank line is dropped.
    """
    block: list[DocAttribute] = []
    for line in INTERNAL_NOTICE:
        block.append(DocAttribute(f" {line}"))
        block.append(DocAttribute(""))

    if with_separator:
        block.append(DocAttribute(NOTICE_SEPARATOR))
        block.append(DocAttribute(""))
    else:
        block.pop()

    return block


def add_internal_notice(attrs: list[Attribute]) -> None:
    """Insert the notice block at the front of `attrs`, in place."""
    was_empty = not attrs
    attrs[0:0] = notice_block(with_separator=not was_empty)


def has_internal_notice(attrs: list[Attribute]) -> bool:
    """Whether `attrs` starts with the notice block."""
    lead = [f" {line}" for line in INTERNAL_NOTICE]
    docs = [a.text for a in attrs[: len(lead) * 2 : 2] if isinstance(a, DocAttribute)]
    return docs == lead
