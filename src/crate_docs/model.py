"""In-memory model of a rustdoc JSON document.

Every variant set (item payloads, types, generic arguments, bounds, where
predicates) is a closed group of frozen dataclasses joined by a ``Union``
alias. Consumers dispatch with ``isinstance`` and keep an explicit fallback
branch for the members they do not render.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union

LOCAL_CRATE_ID = 0


# -- type grammar ------------------------------------------------------------


@dataclass(frozen=True)
class ConstExpr:
    expr: str
    value: str | None = None
    is_literal: bool = False


@dataclass(frozen=True)
class Lifetime:
    name: str


@dataclass(frozen=True)
class Primitive:
    name: str


@dataclass(frozen=True)
class Generic:
    name: str


@dataclass(frozen=True)
class ResolvedPath:
    """A path to a type or trait, e.g. ``Vec<T>`` or ``std::io::Read``."""

    path: str
    id: str | None = None
    args: Optional["GenericArgs"] = None


@dataclass(frozen=True)
class BorrowedRef:
    type: "Type"
    lifetime: str | None = None
    is_mutable: bool = False


@dataclass(frozen=True)
class Tuple:
    elements: tuple["Type", ...] = ()


@dataclass(frozen=True)
class Slice:
    type: "Type"


@dataclass(frozen=True)
class Array:
    type: "Type"
    len: str


@dataclass(frozen=True)
class RawPointer:
    type: "Type"
    is_mutable: bool = False


@dataclass(frozen=True)
class ImplTrait:
    bounds: tuple["GenericBound", ...] = ()


@dataclass(frozen=True)
class PolyTrait:
    trait: ResolvedPath
    generic_params: tuple["GenericParamDef", ...] = ()


@dataclass(frozen=True)
class DynTrait:
    traits: tuple[PolyTrait, ...] = ()
    lifetime: str | None = None


@dataclass(frozen=True)
class FunctionHeader:
    is_const: bool = False
    is_async: bool = False
    is_unsafe: bool = False
    abi: str = "Rust"


@dataclass(frozen=True)
class FunctionSignature:
    inputs: tuple[tuple[str, "Type"], ...] = ()
    output: Optional["Type"] = None
    is_c_variadic: bool = False


@dataclass(frozen=True)
class FunctionPointer:
    sig: FunctionSignature
    generic_params: tuple["GenericParamDef", ...] = ()
    header: FunctionHeader = field(default_factory=FunctionHeader)


@dataclass(frozen=True)
class QualifiedPath:
    name: str
    self_type: "Type"
    trait: ResolvedPath | None = None
    args: Optional["GenericArgs"] = None


@dataclass(frozen=True)
class Infer:
    pass


@dataclass(frozen=True)
class Pat:
    type: "Type"


Type = Union[
    Primitive,
    Generic,
    ResolvedPath,
    BorrowedRef,
    Tuple,
    Slice,
    Array,
    RawPointer,
    ImplTrait,
    DynTrait,
    FunctionPointer,
    QualifiedPath,
    Infer,
    Pat,
]

# A constant term on the right of ``Item = ...`` or in a where-clause.
Term = Union[Type, ConstExpr]
GenericArg = Union[Lifetime, Type, ConstExpr]


@dataclass(frozen=True)
class AssocItemConstraint:
    """``Name = Term`` when ``equality`` is set, else ``Name: bounds``."""

    name: str
    args: Optional["GenericArgs"] = None
    equality: Term | None = None
    bounds: tuple["GenericBound", ...] = ()


@dataclass(frozen=True)
class AngleBracketed:
    args: tuple[GenericArg, ...] = ()
    constraints: tuple[AssocItemConstraint, ...] = ()


@dataclass(frozen=True)
class Parenthesized:
    inputs: tuple[Type, ...] = ()
    output: Type | None = None


@dataclass(frozen=True)
class ReturnTypeNotation:
    pass


GenericArgs = Union[AngleBracketed, Parenthesized, ReturnTypeNotation]


@dataclass(frozen=True)
class TraitBound:
    trait: ResolvedPath
    generic_params: tuple["GenericParamDef", ...] = ()
    modifier: str = "none"


@dataclass(frozen=True)
class Outlives:
    lifetime: str


@dataclass(frozen=True)
class UseBound:
    args: tuple[str, ...] = ()


GenericBound = Union[TraitBound, Outlives, UseBound]


@dataclass(frozen=True)
class LifetimeParam:
    outlives: tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeParam:
    bounds: tuple[GenericBound, ...] = ()
    default: Type | None = None
    is_synthetic: bool = False


@dataclass(frozen=True)
class ConstParam:
    type: Type
    default: str | None = None


GenericParamKind = Union[LifetimeParam, TypeParam, ConstParam]


@dataclass(frozen=True)
class GenericParamDef:
    name: str
    kind: GenericParamKind


@dataclass(frozen=True)
class BoundPredicate:
    type: Type
    bounds: tuple[GenericBound, ...] = ()
    generic_params: tuple[GenericParamDef, ...] = ()


@dataclass(frozen=True)
class LifetimePredicate:
    lifetime: str
    outlives: tuple[str, ...] = ()


@dataclass(frozen=True)
class EqPredicate:
    lhs: Type
    rhs: Term


WherePredicate = Union[BoundPredicate, LifetimePredicate, EqPredicate]


@dataclass(frozen=True)
class Generics:
    params: tuple[GenericParamDef, ...] = ()
    where_predicates: tuple[WherePredicate, ...] = ()


# -- item payloads -----------------------------------------------------------


@dataclass(frozen=True)
class Module:
    items: tuple[str, ...] = ()
    is_crate: bool = False
    is_stripped: bool = False


@dataclass(frozen=True)
class ExternCrate:
    name: str
    rename: str | None = None


@dataclass(frozen=True)
class Use:
    source: str
    name: str
    id: str | None = None
    is_glob: bool = False


@dataclass(frozen=True)
class UnitStruct:
    pass


@dataclass(frozen=True)
class TupleStruct:
    # None marks a field hidden from the documentation.
    fields: tuple[str | None, ...] = ()


@dataclass(frozen=True)
class PlainStruct:
    fields: tuple[str, ...] = ()
    has_stripped_fields: bool = False


StructKind = Union[UnitStruct, TupleStruct, PlainStruct]


@dataclass(frozen=True)
class Struct:
    kind: StructKind
    generics: Generics = field(default_factory=Generics)
    impls: tuple[str, ...] = ()


@dataclass(frozen=True)
class UnionItem:
    fields: tuple[str, ...] = ()
    generics: Generics = field(default_factory=Generics)
    impls: tuple[str, ...] = ()
    has_stripped_fields: bool = False


@dataclass(frozen=True)
class StructField:
    type: Type


@dataclass(frozen=True)
class Enum:
    variants: tuple[str, ...] = ()
    generics: Generics = field(default_factory=Generics)
    impls: tuple[str, ...] = ()
    has_stripped_variants: bool = False


@dataclass(frozen=True)
class PlainVariant:
    pass


@dataclass(frozen=True)
class TupleVariant:
    fields: tuple[str | None, ...] = ()


@dataclass(frozen=True)
class StructVariant:
    fields: tuple[str, ...] = ()
    has_stripped_fields: bool = False


VariantKind = Union[PlainVariant, TupleVariant, StructVariant]


@dataclass(frozen=True)
class Variant:
    kind: VariantKind
    discriminant: ConstExpr | None = None


@dataclass(frozen=True)
class Function:
    sig: FunctionSignature = field(default_factory=FunctionSignature)
    generics: Generics = field(default_factory=Generics)
    header: FunctionHeader = field(default_factory=FunctionHeader)
    has_body: bool = True


@dataclass(frozen=True)
class Trait:
    items: tuple[str, ...] = ()
    generics: Generics = field(default_factory=Generics)
    bounds: tuple[GenericBound, ...] = ()
    is_unsafe: bool = False
    is_auto: bool = False
    implementations: tuple[str, ...] = ()


@dataclass(frozen=True)
class TraitAlias:
    generics: Generics = field(default_factory=Generics)
    params: tuple[GenericBound, ...] = ()


@dataclass(frozen=True)
class Impl:
    for_type: Type
    trait: ResolvedPath | None = None
    items: tuple[str, ...] = ()
    generics: Generics = field(default_factory=Generics)
    is_unsafe: bool = False
    is_negative: bool = False
    is_synthetic: bool = False
    blanket_impl: Type | None = None


@dataclass(frozen=True)
class TypeAlias:
    type: Type
    generics: Generics = field(default_factory=Generics)


@dataclass(frozen=True)
class Constant:
    type: Type
    const: ConstExpr


@dataclass(frozen=True)
class Static:
    type: Type
    expr: str = ""
    is_mutable: bool = False
    is_unsafe: bool = False


@dataclass(frozen=True)
class ExternType:
    pass


@dataclass(frozen=True)
class Macro:
    body: str


@dataclass(frozen=True)
class ProcMacro:
    kind: str = "bang"
    helpers: tuple[str, ...] = ()


@dataclass(frozen=True)
class PrimitiveItem:
    name: str
    impls: tuple[str, ...] = ()


@dataclass(frozen=True)
class AssocConst:
    type: Type
    value: str | None = None


@dataclass(frozen=True)
class AssocType:
    generics: Generics = field(default_factory=Generics)
    bounds: tuple[GenericBound, ...] = ()
    type: Type | None = None


ItemInner = Union[
    Module,
    ExternCrate,
    Use,
    UnionItem,
    Struct,
    StructField,
    Enum,
    Variant,
    Function,
    Trait,
    TraitAlias,
    Impl,
    TypeAlias,
    Constant,
    Static,
    ExternType,
    Macro,
    ProcMacro,
    PrimitiveItem,
    AssocConst,
    AssocType,
]


# -- documents ---------------------------------------------------------------


@dataclass(frozen=True)
class Item:
    id: str
    inner: ItemInner
    crate_id: int = LOCAL_CRATE_ID
    name: str | None = None
    visibility: str = "public"
    docs: str | None = None

    @property
    def is_public(self) -> bool:
        return self.visibility == "public"

    @property
    def is_local(self) -> bool:
        return self.crate_id == LOCAL_CRATE_ID


@dataclass(frozen=True)
class PathSummary:
    path: tuple[str, ...]
    kind: str
    crate_id: int = LOCAL_CRATE_ID


@dataclass(frozen=True)
class ExternalCrate:
    name: str
    html_root_url: str | None = None


@dataclass(frozen=True)
class DocumentTree:
    """A parsed rustdoc JSON document for one crate version.

    The mappings are read-only views; a tree is never modified after it is
    built, so any number of readers may share one instance.
    """

    root: str
    format_version: int
    index: Mapping[str, Item]
    paths: Mapping[str, PathSummary]
    crate_version: str | None = None
    includes_private: bool = False
    external_crates: Mapping[str, ExternalCrate] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        for name in ("index", "paths", "external_crates"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def get(self, item_id: str) -> Item | None:
        return self.index.get(item_id)

    @property
    def root_item(self) -> Item | None:
        return self.index.get(self.root)
