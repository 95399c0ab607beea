"""Strict reader for rustdoc JSON documents.

``parse_crate`` maps the decoded JSON object onto :mod:`crate_docs.model`.
Anything that does not fit the expected shape raises :class:`SchemaError`
with a dotted location, e.g. ``index.42.inner.function.sig.inputs[0]``.
Enum-like values follow rustdoc's encoding: unit variants are bare strings,
data-carrying variants are single-key objects.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Final, TypeVar

from . import model as m

# The rustdoc JSON format revision this reader is written against.
FORMAT_VERSION: Final[int] = 56

T = TypeVar("T")


class SchemaError(ValueError):
    def __init__(self, where: str, message: str) -> None:
        super().__init__(f"{where}: {message}" if where else message)
        self.where = where


def peek_format_version(data: bytes | str | Any) -> int | None:
    """Best-effort read of ``format_version``; never raises."""

    if isinstance(data, (bytes, str)):
        try:
            data = json.loads(data)
        except (ValueError, RecursionError):
            return None
    if not isinstance(data, dict):
        return None
    value = data.get("format_version")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


# -- primitive accessors -----------------------------------------------------


def _obj(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(where, f"expected object, got {type(value).__name__}")
    return value


def _list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise SchemaError(where, f"expected array, got {type(value).__name__}")
    return value


def _req(obj: dict[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise SchemaError(where, f"missing field `{key}`")
    return obj[key]


def _str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(where, f"expected string, got {type(value).__name__}")
    return value


def _opt_str(value: Any, where: str) -> str | None:
    if value is None:
        return None
    return _str(value, where)


def _bool(value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise SchemaError(where, f"expected bool, got {type(value).__name__}")
    return value


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(where, f"expected integer, got {type(value).__name__}")
    return value


def _id(value: Any, where: str) -> str:
    # Integer ids in current formats, strings in older ones.
    if isinstance(value, bool):
        raise SchemaError(where, "expected id, got bool")
    if isinstance(value, (int, str)):
        return str(value)
    raise SchemaError(where, f"expected id, got {type(value).__name__}")


def _opt_id(value: Any, where: str) -> str | None:
    if value is None:
        return None
    return _id(value, where)


def _ids(value: Any, where: str) -> tuple[str, ...]:
    return tuple(_id(v, f"{where}[{i}]") for i, v in enumerate(_list(value, where)))


def _opt_ids(value: Any, where: str) -> tuple[str | None, ...]:
    return tuple(
        _opt_id(v, f"{where}[{i}]") for i, v in enumerate(_list(value, where))
    )


def _seq(value: Any, where: str, parse: Callable[[Any, str], T]) -> tuple[T, ...]:
    return tuple(parse(v, f"{where}[{i}]") for i, v in enumerate(_list(value, where)))


def _tagged(value: Any, where: str) -> tuple[str, Any]:
    """Split an externally tagged enum value into (tag, payload)."""

    if isinstance(value, str):
        return value, None
    obj = _obj(value, where)
    if len(obj) != 1:
        raise SchemaError(where, f"expected a single variant key, got {sorted(obj)}")
    ((tag, payload),) = obj.items()
    return tag, payload


# -- type grammar ------------------------------------------------------------


def _const_expr(value: Any, where: str) -> m.ConstExpr:
    obj = _obj(value, where)
    return m.ConstExpr(
        expr=_str(_req(obj, "expr", where), f"{where}.expr"),
        value=_opt_str(obj.get("value"), f"{where}.value"),
        is_literal=bool(obj.get("is_literal", False)),
    )


def _path(value: Any, where: str) -> m.ResolvedPath:
    obj = _obj(value, where)
    # Formats before 41 called the field `name`.
    raw = obj["path"] if "path" in obj else _req(obj, "name", where)
    args = obj.get("args")
    return m.ResolvedPath(
        path=_str(raw, f"{where}.path"),
        id=_opt_id(obj.get("id"), f"{where}.id"),
        args=None if args is None else _generic_args(args, f"{where}.args"),
    )


def _fn_sig(value: Any, where: str) -> m.FunctionSignature:
    obj = _obj(value, where)
    inputs = []
    for i, pair in enumerate(_list(_req(obj, "inputs", where), f"{where}.inputs")):
        at = f"{where}.inputs[{i}]"
        pair = _list(pair, at)
        if len(pair) != 2:
            raise SchemaError(at, "expected [name, type] pair")
        inputs.append((_str(pair[0], at), parse_type(pair[1], at)))
    output = obj.get("output")
    return m.FunctionSignature(
        inputs=tuple(inputs),
        output=None if output is None else parse_type(output, f"{where}.output"),
        is_c_variadic=bool(obj.get("is_c_variadic", False)),
    )


def _fn_header(value: Any, where: str) -> m.FunctionHeader:
    obj = _obj(value, where)
    abi = obj.get("abi", "Rust")
    if not isinstance(abi, str):
        abi, _ = _tagged(abi, f"{where}.abi")
    return m.FunctionHeader(
        is_const=_bool(_req(obj, "is_const", where), f"{where}.is_const"),
        is_async=_bool(_req(obj, "is_async", where), f"{where}.is_async"),
        is_unsafe=_bool(_req(obj, "is_unsafe", where), f"{where}.is_unsafe"),
        abi=abi,
    )


def _poly_trait(value: Any, where: str) -> m.PolyTrait:
    obj = _obj(value, where)
    return m.PolyTrait(
        trait=_path(_req(obj, "trait", where), f"{where}.trait"),
        generic_params=_seq(
            obj.get("generic_params", []), f"{where}.generic_params", _param_def
        ),
    )


def parse_type(value: Any, where: str = "type") -> m.Type:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "primitive":
        return m.Primitive(_str(p, at))
    if tag == "generic":
        return m.Generic(_str(p, at))
    if tag == "resolved_path":
        return _path(p, at)
    if tag == "borrowed_ref":
        obj = _obj(p, at)
        return m.BorrowedRef(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            lifetime=_opt_str(obj.get("lifetime"), f"{at}.lifetime"),
            is_mutable=_bool(_req(obj, "is_mutable", at), f"{at}.is_mutable"),
        )
    if tag == "tuple":
        return m.Tuple(_seq(p, at, parse_type))
    if tag == "slice":
        return m.Slice(parse_type(p, at))
    if tag == "array":
        obj = _obj(p, at)
        return m.Array(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            len=_str(_req(obj, "len", at), f"{at}.len"),
        )
    if tag == "raw_pointer":
        obj = _obj(p, at)
        return m.RawPointer(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            is_mutable=_bool(_req(obj, "is_mutable", at), f"{at}.is_mutable"),
        )
    if tag == "impl_trait":
        return m.ImplTrait(_seq(p, at, _bound))
    if tag == "dyn_trait":
        obj = _obj(p, at)
        return m.DynTrait(
            traits=_seq(_req(obj, "traits", at), f"{at}.traits", _poly_trait),
            lifetime=_opt_str(obj.get("lifetime"), f"{at}.lifetime"),
        )
    if tag == "function_pointer":
        obj = _obj(p, at)
        return m.FunctionPointer(
            sig=_fn_sig(_req(obj, "sig", at), f"{at}.sig"),
            generic_params=_seq(
                obj.get("generic_params", []), f"{at}.generic_params", _param_def
            ),
            header=_fn_header(_req(obj, "header", at), f"{at}.header"),
        )
    if tag == "qualified_path":
        obj = _obj(p, at)
        trait = obj.get("trait")
        args = obj.get("args")
        return m.QualifiedPath(
            name=_str(_req(obj, "name", at), f"{at}.name"),
            self_type=parse_type(_req(obj, "self_type", at), f"{at}.self_type"),
            trait=None if trait is None else _path(trait, f"{at}.trait"),
            args=None if args is None else _generic_args(args, f"{at}.args"),
        )
    if tag == "infer":
        return m.Infer()
    if tag == "pat":
        obj = _obj(p, at)
        return m.Pat(parse_type(_req(obj, "type", at), f"{at}.type"))
    raise SchemaError(where, f"unknown type variant `{tag}`")


def _term(value: Any, where: str) -> m.Term:
    tag, p = _tagged(value, where)
    if tag == "type":
        return parse_type(p, f"{where}.type")
    if tag == "constant":
        return _const_expr(p, f"{where}.constant")
    raise SchemaError(where, f"unknown term variant `{tag}`")


def _generic_arg(value: Any, where: str) -> m.GenericArg:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "lifetime":
        return m.Lifetime(_str(p, at))
    if tag == "type":
        return parse_type(p, at)
    if tag == "const":
        return _const_expr(p, at)
    if tag == "infer":
        return m.Infer()
    raise SchemaError(where, f"unknown generic argument `{tag}`")


def _constraint(value: Any, where: str) -> m.AssocItemConstraint:
    obj = _obj(value, where)
    args = obj.get("args")
    tag, p = _tagged(_req(obj, "binding", where), f"{where}.binding")
    at = f"{where}.binding.{tag}"
    equality = None
    bounds: tuple[m.GenericBound, ...] = ()
    if tag == "equality":
        equality = _term(p, at)
    elif tag == "constraint":
        bounds = _seq(p, at, _bound)
    else:
        raise SchemaError(f"{where}.binding", f"unknown binding `{tag}`")
    return m.AssocItemConstraint(
        name=_str(_req(obj, "name", where), f"{where}.name"),
        args=None if args is None else _generic_args(args, f"{where}.args"),
        equality=equality,
        bounds=bounds,
    )


def _generic_args(value: Any, where: str) -> m.GenericArgs:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "angle_bracketed":
        obj = _obj(p, at)
        # `bindings` is the pre-format-34 spelling of `constraints`.
        constraints = obj.get("constraints", obj.get("bindings", []))
        return m.AngleBracketed(
            args=_seq(_req(obj, "args", at), f"{at}.args", _generic_arg),
            constraints=_seq(constraints, f"{at}.constraints", _constraint),
        )
    if tag == "parenthesized":
        obj = _obj(p, at)
        output = obj.get("output")
        return m.Parenthesized(
            inputs=_seq(_req(obj, "inputs", at), f"{at}.inputs", parse_type),
            output=None if output is None else parse_type(output, f"{at}.output"),
        )
    if tag == "return_type_notation":
        return m.ReturnTypeNotation()
    raise SchemaError(where, f"unknown generic args variant `{tag}`")


def _bound(value: Any, where: str) -> m.GenericBound:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "trait_bound":
        obj = _obj(p, at)
        modifier = obj.get("modifier", "none")
        return m.TraitBound(
            trait=_path(_req(obj, "trait", at), f"{at}.trait"),
            generic_params=_seq(
                obj.get("generic_params", []), f"{at}.generic_params", _param_def
            ),
            modifier=_str(modifier, f"{at}.modifier"),
        )
    if tag == "outlives":
        return m.Outlives(_str(p, at))
    if tag == "use":
        names = []
        for i, arg in enumerate(_list(p, at)):
            if isinstance(arg, str):
                names.append(arg)
            else:
                _, name = _tagged(arg, f"{at}[{i}]")
                names.append(_str(name, f"{at}[{i}]"))
        return m.UseBound(tuple(names))
    raise SchemaError(where, f"unknown bound variant `{tag}`")


def _param_def(value: Any, where: str) -> m.GenericParamDef:
    obj = _obj(value, where)
    tag, p = _tagged(_req(obj, "kind", where), f"{where}.kind")
    at = f"{where}.kind.{tag}"
    kind: m.GenericParamKind
    if tag == "lifetime":
        kind = m.LifetimeParam(
            tuple(_str(v, at) for v in _list(_obj(p, at).get("outlives", []), at))
        )
    elif tag == "type":
        obj_p = _obj(p, at)
        default = obj_p.get("default")
        kind = m.TypeParam(
            bounds=_seq(obj_p.get("bounds", []), f"{at}.bounds", _bound),
            default=None if default is None else parse_type(default, f"{at}.default"),
            is_synthetic=bool(obj_p.get("is_synthetic", False)),
        )
    elif tag == "const":
        obj_p = _obj(p, at)
        kind = m.ConstParam(
            type=parse_type(_req(obj_p, "type", at), f"{at}.type"),
            default=_opt_str(obj_p.get("default"), f"{at}.default"),
        )
    else:
        raise SchemaError(f"{where}.kind", f"unknown generic param kind `{tag}`")
    return m.GenericParamDef(name=_str(_req(obj, "name", where), where), kind=kind)


def _where_predicate(value: Any, where: str) -> m.WherePredicate:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    obj = _obj(p, at)
    if tag == "bound_predicate":
        return m.BoundPredicate(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            bounds=_seq(obj.get("bounds", []), f"{at}.bounds", _bound),
            generic_params=_seq(
                obj.get("generic_params", []), f"{at}.generic_params", _param_def
            ),
        )
    if tag == "lifetime_predicate":
        return m.LifetimePredicate(
            lifetime=_str(_req(obj, "lifetime", at), f"{at}.lifetime"),
            outlives=tuple(
                _str(v, f"{at}.outlives") for v in _list(obj.get("outlives", []), at)
            ),
        )
    if tag == "eq_predicate":
        return m.EqPredicate(
            lhs=parse_type(_req(obj, "lhs", at), f"{at}.lhs"),
            rhs=_term(_req(obj, "rhs", at), f"{at}.rhs"),
        )
    raise SchemaError(where, f"unknown where predicate `{tag}`")


def _generics(value: Any, where: str) -> m.Generics:
    obj = _obj(value, where)
    return m.Generics(
        params=_seq(_req(obj, "params", where), f"{where}.params", _param_def),
        where_predicates=_seq(
            _req(obj, "where_predicates", where),
            f"{where}.where_predicates",
            _where_predicate,
        ),
    )


def _opt_generics(obj: dict[str, Any], where: str) -> m.Generics:
    value = obj.get("generics")
    if value is None:
        return m.Generics()
    return _generics(value, f"{where}.generics")


# -- items -------------------------------------------------------------------


def _struct_kind(value: Any, where: str) -> m.StructKind:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "unit":
        return m.UnitStruct()
    if tag == "tuple":
        return m.TupleStruct(_opt_ids(p, at))
    if tag == "plain":
        obj = _obj(p, at)
        return m.PlainStruct(
            fields=_ids(_req(obj, "fields", at), f"{at}.fields"),
            has_stripped_fields=bool(obj.get("has_stripped_fields", False)),
        )
    raise SchemaError(where, f"unknown struct kind `{tag}`")


def _variant_kind(value: Any, where: str) -> m.VariantKind:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "plain":
        return m.PlainVariant()
    if tag == "tuple":
        return m.TupleVariant(_opt_ids(p, at))
    if tag == "struct":
        obj = _obj(p, at)
        return m.StructVariant(
            fields=_ids(_req(obj, "fields", at), f"{at}.fields"),
            has_stripped_fields=bool(obj.get("has_stripped_fields", False)),
        )
    raise SchemaError(where, f"unknown variant kind `{tag}`")


def _function(p: Any, at: str) -> m.Function:
    obj = _obj(p, at)
    return m.Function(
        sig=_fn_sig(_req(obj, "sig", at), f"{at}.sig"),
        generics=_generics(_req(obj, "generics", at), f"{at}.generics"),
        header=_fn_header(_req(obj, "header", at), f"{at}.header"),
        has_body=_bool(_req(obj, "has_body", at), f"{at}.has_body"),
    )


def parse_item_inner(value: Any, where: str = "inner") -> m.ItemInner:
    tag, p = _tagged(value, where)
    at = f"{where}.{tag}"
    if tag == "module":
        obj = _obj(p, at)
        return m.Module(
            items=_ids(_req(obj, "items", at), f"{at}.items"),
            is_crate=bool(obj.get("is_crate", False)),
            is_stripped=bool(obj.get("is_stripped", False)),
        )
    if tag == "extern_crate":
        obj = _obj(p, at)
        return m.ExternCrate(
            name=_str(_req(obj, "name", at), f"{at}.name"),
            rename=_opt_str(obj.get("rename"), f"{at}.rename"),
        )
    if tag in ("use", "import"):
        obj = _obj(p, at)
        return m.Use(
            source=_str(_req(obj, "source", at), f"{at}.source"),
            name=_str(_req(obj, "name", at), f"{at}.name"),
            id=_opt_id(obj.get("id"), f"{at}.id"),
            is_glob=bool(obj.get("is_glob", obj.get("glob", False))),
        )
    if tag == "union":
        obj = _obj(p, at)
        return m.UnionItem(
            fields=_ids(_req(obj, "fields", at), f"{at}.fields"),
            generics=_opt_generics(obj, at),
            impls=_ids(obj.get("impls", []), f"{at}.impls"),
            has_stripped_fields=bool(obj.get("has_stripped_fields", False)),
        )
    if tag == "struct":
        obj = _obj(p, at)
        return m.Struct(
            kind=_struct_kind(_req(obj, "kind", at), f"{at}.kind"),
            generics=_opt_generics(obj, at),
            impls=_ids(obj.get("impls", []), f"{at}.impls"),
        )
    if tag == "struct_field":
        return m.StructField(parse_type(p, at))
    if tag == "enum":
        obj = _obj(p, at)
        return m.Enum(
            variants=_ids(_req(obj, "variants", at), f"{at}.variants"),
            generics=_opt_generics(obj, at),
            impls=_ids(obj.get("impls", []), f"{at}.impls"),
            has_stripped_variants=bool(obj.get("has_stripped_variants", False)),
        )
    if tag == "variant":
        obj = _obj(p, at)
        disc = obj.get("discriminant")
        return m.Variant(
            kind=_variant_kind(_req(obj, "kind", at), f"{at}.kind"),
            discriminant=None if disc is None else _const_expr(disc, f"{at}.disc"),
        )
    if tag == "function":
        return _function(p, at)
    if tag == "trait":
        obj = _obj(p, at)
        return m.Trait(
            items=_ids(_req(obj, "items", at), f"{at}.items"),
            generics=_opt_generics(obj, at),
            bounds=_seq(obj.get("bounds", []), f"{at}.bounds", _bound),
            is_unsafe=bool(obj.get("is_unsafe", False)),
            is_auto=bool(obj.get("is_auto", False)),
            implementations=_ids(
                obj.get("implementations", []), f"{at}.implementations"
            ),
        )
    if tag == "trait_alias":
        obj = _obj(p, at)
        return m.TraitAlias(
            generics=_opt_generics(obj, at),
            params=_seq(obj.get("params", []), f"{at}.params", _bound),
        )
    if tag == "impl":
        obj = _obj(p, at)
        trait = obj.get("trait")
        blanket = obj.get("blanket_impl")
        return m.Impl(
            for_type=parse_type(_req(obj, "for", at), f"{at}.for"),
            trait=None if trait is None else _path(trait, f"{at}.trait"),
            items=_ids(_req(obj, "items", at), f"{at}.items"),
            generics=_opt_generics(obj, at),
            is_unsafe=bool(obj.get("is_unsafe", False)),
            is_negative=bool(obj.get("is_negative", False)),
            is_synthetic=bool(obj.get("is_synthetic", False)),
            blanket_impl=None if blanket is None else parse_type(blanket, at),
        )
    if tag == "type_alias":
        obj = _obj(p, at)
        return m.TypeAlias(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            generics=_opt_generics(obj, at),
        )
    if tag == "constant":
        obj = _obj(p, at)
        return m.Constant(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            const=_const_expr(_req(obj, "const", at), f"{at}.const"),
        )
    if tag == "static":
        obj = _obj(p, at)
        return m.Static(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            expr=_str(obj.get("expr", ""), f"{at}.expr"),
            is_mutable=bool(obj.get("is_mutable", False)),
            is_unsafe=bool(obj.get("is_unsafe", False)),
        )
    if tag == "extern_type":
        return m.ExternType()
    if tag == "macro":
        return m.Macro(_str(p, at))
    if tag == "proc_macro":
        obj = _obj(p, at)
        return m.ProcMacro(
            kind=_str(obj.get("kind", "bang"), f"{at}.kind"),
            helpers=tuple(
                _str(h, f"{at}.helpers") for h in _list(obj.get("helpers", []), at)
            ),
        )
    if tag == "primitive":
        obj = _obj(p, at)
        return m.PrimitiveItem(
            name=_str(_req(obj, "name", at), f"{at}.name"),
            impls=_ids(obj.get("impls", []), f"{at}.impls"),
        )
    if tag == "assoc_const":
        obj = _obj(p, at)
        # Formats before 49 spelled `value` as `default`.
        value = obj.get("value", obj.get("default"))
        return m.AssocConst(
            type=parse_type(_req(obj, "type", at), f"{at}.type"),
            value=_opt_str(value, f"{at}.value"),
        )
    if tag == "assoc_type":
        obj = _obj(p, at)
        default = obj.get("type", obj.get("default"))
        return m.AssocType(
            generics=_opt_generics(obj, at),
            bounds=_seq(obj.get("bounds", []), f"{at}.bounds", _bound),
            type=None if default is None else parse_type(default, f"{at}.type"),
        )
    raise SchemaError(where, f"unknown item kind `{tag}`")


def _visibility(value: Any, where: str) -> str:
    tag, _ = _tagged(value, where)
    if tag not in ("public", "default", "crate", "restricted"):
        raise SchemaError(where, f"unknown visibility `{tag}`")
    return tag


def parse_item(value: Any, where: str = "item") -> m.Item:
    obj = _obj(value, where)
    return m.Item(
        id=_id(_req(obj, "id", where), f"{where}.id"),
        crate_id=_int(_req(obj, "crate_id", where), f"{where}.crate_id"),
        name=_opt_str(obj.get("name"), f"{where}.name"),
        visibility=_visibility(_req(obj, "visibility", where), f"{where}.visibility"),
        docs=_opt_str(obj.get("docs"), f"{where}.docs"),
        inner=parse_item_inner(_req(obj, "inner", where), f"{where}.inner"),
    )


def _path_summary(value: Any, where: str) -> m.PathSummary:
    obj = _obj(value, where)
    segments = _list(_req(obj, "path", where), f"{where}.path")
    return m.PathSummary(
        path=tuple(_str(s, f"{where}.path") for s in segments),
        kind=_str(_req(obj, "kind", where), f"{where}.kind"),
        crate_id=_int(_req(obj, "crate_id", where), f"{where}.crate_id"),
    )


def _external_crate(value: Any, where: str) -> m.ExternalCrate:
    obj = _obj(value, where)
    return m.ExternalCrate(
        name=_str(_req(obj, "name", where), f"{where}.name"),
        html_root_url=_opt_str(obj.get("html_root_url"), f"{where}.html_root_url"),
    )


def parse_crate(data: Any) -> m.DocumentTree:
    """Build a :class:`DocumentTree` from a decoded rustdoc JSON object."""

    obj = _obj(data, "")
    index_raw = _obj(_req(obj, "index", ""), "index")
    paths_raw = _obj(_req(obj, "paths", ""), "paths")
    externals_raw = _obj(obj.get("external_crates", {}), "external_crates")

    index = {}
    for key, raw in index_raw.items():
        item = parse_item(raw, f"index.{key}")
        index[item.id] = item

    return m.DocumentTree(
        root=_id(_req(obj, "root", ""), "root"),
        format_version=_int(_req(obj, "format_version", ""), "format_version"),
        index=index,
        paths={
            str(k): _path_summary(v, f"paths.{k}") for k, v in paths_raw.items()
        },
        crate_version=_opt_str(obj.get("crate_version"), "crate_version"),
        includes_private=bool(obj.get("includes_private", False)),
        external_crates={
            str(k): _external_crate(v, f"external_crates.{k}")
            for k, v in externals_raw.items()
        },
    )
