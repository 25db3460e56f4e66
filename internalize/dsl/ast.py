"""AST node definitions for declarations."""

from dataclasses import dataclass, field
from typing import ClassVar, Union
from ..core.types import DeclKind, MemberKind, StructStyle, VisLevel


@dataclass(frozen=True)
class Visibility:
    """Visibility marker of a declaration, field or member."""
    level: VisLevel
    path: str | None = None

    def is_fully_public(self) -> bool:
        return self.level == VisLevel.PUBLIC


PUBLIC = Visibility(VisLevel.PUBLIC)
INHERITED = Visibility(VisLevel.INHERITED)


@dataclass
class DocAttribute:
    """A single documentation line, stored with its leading space."""
    text: str


@dataclass
class MetaAttribute:
    """Any non-documentation attribute, stored as the text inside `#[...]`."""
    tokens: str


Attribute = Union[DocAttribute, MetaAttribute]


@dataclass
class LeafItem:
    """Declaration without nested members; `source` follows the visibility."""
    kind: ClassVar[DeclKind]
    name: str
    source: str
    vis: Visibility = INHERITED
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class ConstItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.CONST


@dataclass
class EnumItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.ENUM


@dataclass
class ExternCrateItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.EXTERN_CRATE


@dataclass
class FnItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.FN


@dataclass
class StaticItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.STATIC


@dataclass
class TraitItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.TRAIT


@dataclass
class TraitAliasItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.TRAIT_ALIAS


@dataclass
class TypeAliasItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.TYPE


@dataclass
class UseItem(LeafItem):
    kind: ClassVar[DeclKind] = DeclKind.USE


@dataclass
class Field:
    """Struct or union field. Tuple fields have no name."""
    name: str | None
    ty: str
    vis: Visibility = INHERITED
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class StructItem:
    kind: ClassVar[DeclKind] = DeclKind.STRUCT
    name: str
    generics: str = ""
    style: StructStyle = StructStyle.NAMED
    fields: list[Field] = field(default_factory=list)
    trailer: str = ""
    vis: Visibility = INHERITED
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class UnionItem:
    kind: ClassVar[DeclKind] = DeclKind.UNION
    name: str
    generics: str = ""
    fields: list[Field] = field(default_factory=list)
    vis: Visibility = INHERITED
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class ModItem:
    """Module declaration. `items` is None for `mod name;`."""
    kind: ClassVar[DeclKind] = DeclKind.MOD
    name: str
    items: list["Item"] | None = None
    vis: Visibility = INHERITED
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class Member:
    """Associated item of an impl block or foreign block."""
    kind: MemberKind
    name: str
    source: str
    vis: Visibility = INHERITED
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class ImplItem:
    kind: ClassVar[DeclKind] = DeclKind.IMPL
    header: str
    members: list[Member] = field(default_factory=list)
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class ForeignModItem:
    kind: ClassVar[DeclKind] = DeclKind.FOREIGN_MOD
    abi: str | None = None
    members: list[Member] = field(default_factory=list)
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class MacroItem:
    kind: ClassVar[DeclKind] = DeclKind.MACRO
    path: str
    source: str
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class VerbatimItem:
    """Tokens that do not form any recognized declaration."""
    kind: ClassVar[DeclKind] = DeclKind.VERBATIM
    source: str


Item = Union[
    ConstItem,
    EnumItem,
    ExternCrateItem,
    FnItem,
    ForeignModItem,
    ImplItem,
    MacroItem,
    ModItem,
    StaticItem,
    StructItem,
    TraitItem,
    TraitAliasItem,
    TypeAliasItem,
    UnionItem,
    UseItem,
    VerbatimItem,
]

ITEM_TYPES: tuple[type, ...] = (
    ConstItem,
    EnumItem,
    ExternCrateItem,
    FnItem,
    ForeignModItem,
    ImplItem,
    MacroItem,
    ModItem,
    StaticItem,
    StructItem,
    TraitItem,
    TraitAliasItem,
    TypeAliasItem,
    UnionItem,
    UseItem,
    VerbatimItem,
)
