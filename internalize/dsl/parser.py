"""Declaration parser using Lark grammar."""

from pathlib import Path
from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError
from ..core.errors import MalformedInvocationError
from ..core.types import MemberKind, StructStyle, VisLevel
from .ast import (
    Visibility,
    PUBLIC,
    INHERITED,
    DocAttribute,
    MetaAttribute,
    ConstItem,
    EnumItem,
    ExternCrateItem,
    FnItem,
    StaticItem,
    TraitItem,
    TraitAliasItem,
    TypeAliasItem,
    UseItem,
    Field,
    StructItem,
    UnionItem,
    ModItem,
    Member,
    ImplItem,
    ForeignModItem,
    MacroItem,
    Item,
)


GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


def _first_ident(children) -> str:
    for child in children:
        if isinstance(child, Token) and child.type == "IDENT":
            return child.value
    raise ValueError("Declaration has no name")


class DeclTransformer(Transformer):
    """Transform parse tree to declaration nodes, slicing verbatim text from `source`."""

    def __init__(self, source: str):
        super().__init__()
        self.source = source

    def _slice(self, meta) -> str:
        return self.source[meta.start_pos:meta.end_pos]

    def doc_attr(self, children):
        return DocAttribute(children[0].value[3:].rstrip("\r"))

    @v_args(meta=True)
    def meta_attr(self, meta, children):
        text = self._slice(meta)
        return MetaAttribute(text[text.index("[") + 1 : text.rindex("]")].strip())

    def vis_pub(self, children):
        return PUBLIC

    def vis_crate(self, children):
        return Visibility(VisLevel.CRATE)

    def vis_super(self, children):
        return Visibility(VisLevel.SUPER)

    def vis_self(self, children):
        return Visibility(VisLevel.SELF)

    @v_args(inline=True)
    def vis_in(self, path):
        return Visibility(VisLevel.IN_PATH, path)

    @v_args(meta=True)
    def vis_path(self, meta, children):
        return self._slice(meta)

    @v_args(meta=True)
    def const_item(self, meta, children):
        return ConstItem(name=_first_ident(children), source=self._slice(meta))

    @v_args(meta=True)
    def static_item(self, meta, children):
        return StaticItem(name=_first_ident(children), source=self._slice(meta))

    @v_args(meta=True)
    def fn_item(self, meta, children):
        return FnItem(name=_first_ident(children), source=self._slice(meta))

    @v_args(meta=True)
    def enum_item(self, meta, children):
        return EnumItem(name=_first_ident(children), source=self._slice(meta))

    @v_args(meta=True)
    def trait_item(self, meta, children):
        source = self._slice(meta)
        name = _first_ident(children)
        if source.rstrip().endswith(";"):
            return TraitAliasItem(name=name, source=source)
        return TraitItem(name=name, source=source)

    @v_args(meta=True)
    def type_item(self, meta, children):
        return TypeAliasItem(name=_first_ident(children), source=self._slice(meta))

    @v_args(meta=True)
    def use_item(self, meta, children):
        source = self._slice(meta)
        name = source[len("use"):].rstrip(";").strip()
        return UseItem(name=name, source=source)

    @v_args(meta=True)
    def extern_crate(self, meta, children):
        return ExternCrateItem(name=_first_ident(children), source=self._slice(meta))

    @v_args(meta=True)
    def macro_path(self, meta, children):
        return self._slice(meta)

    @v_args(meta=True)
    def macro_item(self, meta, children):
        return MacroItem(path=children[0], source=self._slice(meta))

    @v_args(meta=True)
    def generics(self, meta, children):
        return ("generics", self._slice(meta))

    @v_args(meta=True)
    def trailer(self, meta, children):
        return ("trailer", self._slice(meta))

    @v_args(meta=True)
    def ty(self, meta, children):
        return self._slice(meta)

    def named_field(self, children):
        attrs, vis = _attrs_and_vis(children)
        return Field(name=_first_ident(children), ty=children[-1], vis=vis or INHERITED, attrs=attrs)

    def tuple_field(self, children):
        attrs, vis = _attrs_and_vis(children)
        return Field(name=None, ty=children[-1], vis=vis or INHERITED, attrs=attrs)

    def named_fields(self, children):
        return list(children)

    def tuple_fields(self, children):
        return list(children)

    def _build_struct(self, children, style: StructStyle) -> StructItem:
        parts = dict(c for c in children if isinstance(c, tuple))
        fields = next((c for c in children if isinstance(c, list)), [])
        return StructItem(
            name=_first_ident(children),
            generics=parts.get("generics", ""),
            style=style,
            fields=fields,
            trailer=parts.get("trailer", ""),
        )

    def struct_named(self, children):
        return self._build_struct(children, StructStyle.NAMED)

    def struct_tuple(self, children):
        return self._build_struct(children, StructStyle.TUPLE)

    def struct_unit(self, children):
        return self._build_struct(children, StructStyle.UNIT)

    def union_item(self, children):
        parts = dict(c for c in children if isinstance(c, tuple))
        fields = next((c for c in children if isinstance(c, list)), [])
        return UnionItem(
            name=_first_ident(children),
            generics=parts.get("generics", ""),
            fields=fields,
        )

    def mod_decl(self, children):
        return ModItem(name=_first_ident(children), items=None)

    def mod_inline(self, children):
        return ModItem(name=_first_ident(children), items=list(children[1:]))

    @v_args(meta=True)
    def impl_head(self, meta, children):
        return self._slice(meta)

    def impl_item(self, children):
        return ImplItem(header=children[0], members=list(children[1:]))

    @v_args(meta=True)
    def impl_const(self, meta, children):
        return Member(MemberKind.CONST, _first_ident(children), self._slice(meta))

    @v_args(meta=True)
    def impl_fn(self, meta, children):
        return Member(MemberKind.FN, _first_ident(children), self._slice(meta))

    @v_args(meta=True)
    def impl_type(self, meta, children):
        return Member(MemberKind.TYPE, _first_ident(children), self._slice(meta))

    @v_args(meta=True)
    def member_macro(self, meta, children):
        return Member(MemberKind.MACRO, children[0], self._slice(meta))

    def impl_member(self, children):
        return _with_attrs_and_vis(children)

    def foreign_head(self, children):
        return children[0].value if children else None

    def foreign_mod(self, children):
        return ForeignModItem(abi=children[0], members=list(children[1:]))

    @v_args(meta=True)
    def foreign_fn(self, meta, children):
        return Member(MemberKind.FN, _first_ident(children), self._slice(meta))

    @v_args(meta=True)
    def foreign_static(self, meta, children):
        return Member(MemberKind.STATIC, _first_ident(children), self._slice(meta))

    @v_args(meta=True)
    def foreign_type(self, meta, children):
        return Member(MemberKind.TYPE, _first_ident(children), self._slice(meta))

    def foreign_member(self, children):
        return _with_attrs_and_vis(children)

    def item(self, children):
        return _with_attrs_and_vis(children)

    def start(self, children):
        return children[0]

    def file(self, children):
        return list(children)


def _attrs_and_vis(children) -> tuple[list, Visibility | None]:
    attrs = [c for c in children if isinstance(c, (DocAttribute, MetaAttribute))]
    vis = next((c for c in children if isinstance(c, Visibility)), None)
    return attrs, vis


def _with_attrs_and_vis(children):
    """Attach leading attributes and visibility to the node built last."""
    node = children[-1]
    attrs, vis = _attrs_and_vis(children[:-1])
    node.attrs = attrs
    if vis is not None and hasattr(node, "vis"):
        node.vis = vis
    return node


class DeclParser:
    """Parser for Rust-style declarations."""

    def __init__(self):
        with open(GRAMMAR_PATH) as f:
            grammar = f.read()
        self.parser = Lark(
            grammar,
            parser="lalr",
            start=["start", "file"],
            propagate_positions=True,
        )

    def _run(self, source: str, start: str):
        try:
            tree = self.parser.parse(source, start=start)
        except LarkError as e:
            raise MalformedInvocationError(
                f"`#[internal]` wasn't called on an item: {e}"
            ) from e
        return DeclTransformer(source).transform(tree)

    def parse(self, source: str) -> Item:
        """Parse exactly one declaration."""
        return self._run(source, "start")

    def parse_many(self, source: str) -> list[Item]:
        """Parse a sequence of declarations."""
        return self._run(source, "file")

    def parse_file(self, path: Path) -> list[Item]:
        """Parse every declaration in a file."""
        with open(path) as f:
            content = f.read()
        return self.parse_many(content)
