"""Printer that turns declaration nodes back into source text."""

from ..core.types import StructStyle, VisLevel
from .ast import (
    Visibility,
    Attribute,
    DocAttribute,
    LeafItem,
    Field,
    StructItem,
    UnionItem,
    ModItem,
    Member,
    ImplItem,
    ForeignModItem,
    MacroItem,
    VerbatimItem,
    Item,
)


INDENT = "    "


def render_visibility(vis: Visibility) -> str:
    """Render a marker with its trailing space, or nothing when inherited."""
    if vis.level == VisLevel.INHERITED:
        return ""
    if vis.level == VisLevel.IN_PATH:
        return f"pub(in {vis.path}) "
    return f"{vis.level.value} "


def render_attribute(attr: Attribute) -> str:
    if isinstance(attr, DocAttribute):
        return f"///{attr.text}"
    return f"#[{attr.tokens}]"


class DeclPrinter:
    """Renders declaration nodes as Rust-style source."""

    def render(self, item: Item) -> str:
        """Render one declaration."""
        return "\n".join(self._item_lines(item))

    def render_many(self, items: list[Item]) -> str:
        """Render declarations separated by blank lines."""
        return "\n\n".join(self.render(item) for item in items)

    def _item_lines(self, item: Item) -> list[str]:
        if isinstance(item, VerbatimItem):
            return [item.source]

        lines = [render_attribute(a) for a in item.attrs]

        if isinstance(item, LeafItem):
            lines.append(render_visibility(item.vis) + item.source)
        elif isinstance(item, StructItem):
            lines.extend(self._struct_lines(item))
        elif isinstance(item, UnionItem):
            head = f"{render_visibility(item.vis)}union {item.name}{self._generics(item.generics)}"
            lines.extend(self._block(head, self._field_lines(item.fields)))
        elif isinstance(item, ModItem):
            head = f"{render_visibility(item.vis)}mod {item.name}"
            if item.items is None:
                lines.append(head + ";")
            else:
                body: list[str] = []
                for index, nested in enumerate(item.items):
                    if index:
                        body.append("")
                    body.extend(self._item_lines(nested))
                lines.extend(self._block(head, body))
        elif isinstance(item, ImplItem):
            lines.extend(self._block(item.header, self._member_lines(item.members)))
        elif isinstance(item, ForeignModItem):
            head = f"extern {item.abi}" if item.abi else "extern"
            lines.extend(self._block(head, self._member_lines(item.members)))
        elif isinstance(item, MacroItem):
            lines.append(item.source)
        else:
            raise ValueError(f"Cannot render {type(item).__name__}")

        return lines

    def _generics(self, generics: str) -> str:
        if not generics:
            return ""
        if generics.startswith("<"):
            return generics
        return f" {generics}"

    def _block(self, head: str, body: list[str]) -> list[str]:
        if not body:
            return [head + " {}"]
        lines = [head + " {"]
        lines.extend(INDENT + line if line else line for line in body)
        lines.append("}")
        return lines

    def _struct_lines(self, item: StructItem) -> list[str]:
        head = f"{render_visibility(item.vis)}struct {item.name}{self._generics(item.generics)}"

        if item.style == StructStyle.UNIT:
            return [head + ";"]

        if item.style == StructStyle.TUPLE:
            # doc lines cannot share a line with the field they document
            if any(isinstance(a, DocAttribute) for fld in item.fields for a in fld.attrs):
                return self._tuple_lines(head, item)
            parts = []
            for fld in item.fields:
                attrs = "".join(f"{render_attribute(a)} " for a in fld.attrs)
                parts.append(f"{attrs}{render_visibility(fld.vis)}{fld.ty}")
            trailer = f" {item.trailer}" if item.trailer else ""
            return [f"{head}({', '.join(parts)}){trailer};"]

        return self._block(head, self._field_lines(item.fields))

    def _tuple_lines(self, head: str, item: StructItem) -> list[str]:
        lines = [head + "("]
        for fld in item.fields:
            lines.extend(INDENT + render_attribute(a) for a in fld.attrs)
            lines.append(f"{INDENT}{render_visibility(fld.vis)}{fld.ty},")
        trailer = f" {item.trailer}" if item.trailer else ""
        lines.append(f"){trailer};")
        return lines

    def _field_lines(self, fields: list[Field]) -> list[str]:
        lines = []
        for fld in fields:
            lines.extend(render_attribute(a) for a in fld.attrs)
            lines.append(f"{render_visibility(fld.vis)}{fld.name}: {fld.ty},")
        return lines

    def _member_lines(self, members: list[Member]) -> list[str]:
        lines = []
        for index, member in enumerate(members):
            if index:
                lines.append("")
            lines.extend(render_attribute(a) for a in member.attrs)
            lines.append(render_visibility(member.vis) + member.source)
        return lines
