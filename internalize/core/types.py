"""Core type definitions for the internalize transformer."""

import re
from enum import Enum
from pydantic import BaseModel, Field, field_validator


DEFAULT_FEATURE = "internal"

FEATURE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


class DeclKind(str, Enum):
    CONST = "const"
    ENUM = "enum"
    EXTERN_CRATE = "extern_crate"
    FN = "fn"
    FOREIGN_MOD = "foreign_mod"
    IMPL = "impl"
    MACRO = "macro"
    MOD = "mod"
    STATIC = "static"
    STRUCT = "struct"
    TRAIT = "trait"
    TRAIT_ALIAS = "trait_alias"
    TYPE = "type"
    UNION = "union"
    USE = "use"
    VERBATIM = "verbatim"


class MemberKind(str, Enum):
    CONST = "const"
    FN = "fn"
    TYPE = "type"
    STATIC = "static"
    MACRO = "macro"
    VERBATIM = "verbatim"


class VisLevel(str, Enum):
    PUBLIC = "pub"
    CRATE = "pub(crate)"
    SUPER = "pub(super)"
    SELF = "pub(self)"
    IN_PATH = "pub(in)"
    INHERITED = "inherited"


class StructStyle(str, Enum):
    NAMED = "named"
    TUPLE = "tuple"
    UNIT = "unit"


class GateConfig(BaseModel):
    """Build-time capability flag that selects between the two variants."""
    feature: str = DEFAULT_FEATURE

    @field_validator("feature")
    @classmethod
    def _check_feature(cls, value: str) -> str:
        if not FEATURE_NAME_PATTERN.match(value):
            raise ValueError(f"Invalid feature name: {value!r}")
        return value


class WidenedEntry(BaseModel):
    """One visibility marker visited by the rewriter."""
    path: str
    kind: str
    previous: VisLevel
    annotated: bool


class WidenReport(BaseModel):
    """Every marker visited while widening one declaration."""
    entries: list[WidenedEntry] = Field(default_factory=list)

    def annotated(self) -> list[WidenedEntry]:
        return [e for e in self.entries if e.annotated]

    def get(self, path: str) -> WidenedEntry | None:
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None
