"""Render rustdoc types, generics and signatures as compact Rust-like text.

The output approximates source syntax; it is meant to be read, not compiled.
"""

from __future__ import annotations

from typing import Iterable

from . import model as m


def format_type(ty: m.Type) -> str:
    if isinstance(ty, (m.Primitive, m.Generic)):
        return ty.name
    if isinstance(ty, m.ResolvedPath):
        return format_path(ty)
    if isinstance(ty, m.BorrowedRef):
        out = "&"
        if ty.lifetime:
            out += ty.lifetime + " "
        if ty.is_mutable:
            out += "mut "
        return out + format_type(ty.type)
    if isinstance(ty, m.Tuple):
        return "(" + ", ".join(format_type(t) for t in ty.elements) + ")"
    if isinstance(ty, m.Slice):
        return f"[{format_type(ty.type)}]"
    if isinstance(ty, m.Array):
        return f"[{format_type(ty.type)}; {ty.len}]"
    if isinstance(ty, m.RawPointer):
        qualifier = "mut" if ty.is_mutable else "const"
        return f"*{qualifier} {format_type(ty.type)}"
    if isinstance(ty, m.ImplTrait):
        return "impl " + format_bounds(ty.bounds)
    if isinstance(ty, m.DynTrait):
        return format_dyn_trait(ty)
    if isinstance(ty, m.FunctionPointer):
        return format_fn_pointer(ty)
    if isinstance(ty, m.QualifiedPath):
        self_ty = format_type(ty.self_type)
        if ty.trait is not None:
            return f"<{self_ty} as {ty.trait.path}>::{ty.name}"
        return f"<{self_ty}>::{ty.name}"
    if isinstance(ty, m.Pat):
        return format_type(ty.type)
    # Infer, and anything a newer format may add.
    return "_"


def format_path(path: m.ResolvedPath) -> str:
    if path.args is None:
        return path.path
    return path.path + format_generic_args(path.args)


def _format_term(term: m.Term) -> str:
    if isinstance(term, m.ConstExpr):
        return term.expr
    return format_type(term)


def _format_generic_arg(arg: m.GenericArg) -> str:
    if isinstance(arg, m.Lifetime):
        return arg.name
    if isinstance(arg, m.ConstExpr):
        return arg.expr
    return format_type(arg)


def _format_constraint(c: m.AssocItemConstraint) -> str:
    if c.equality is not None:
        return f"{c.name} = {_format_term(c.equality)}"
    return f"{c.name}: {format_bounds(c.bounds)}"


def format_generic_args(args: m.GenericArgs) -> str:
    if isinstance(args, m.AngleBracketed):
        parts = [_format_generic_arg(a) for a in args.args]
        parts.extend(_format_constraint(c) for c in args.constraints)
        if not parts:
            return ""
        return "<" + ", ".join(parts) + ">"
    if isinstance(args, m.Parenthesized):
        out = "(" + ", ".join(format_type(t) for t in args.inputs) + ")"
        if args.output is not None:
            out += " -> " + format_type(args.output)
        return out
    return "(..)"


def format_bounds(bounds: Iterable[m.GenericBound]) -> str:
    parts = []
    for b in bounds:
        if isinstance(b, m.TraitBound):
            prefix = {"maybe": "?", "maybe_const": "~const "}.get(b.modifier, "")
            parts.append(prefix + format_path(b.trait))
        elif isinstance(b, m.Outlives):
            parts.append(b.lifetime)
        else:
            parts.append("use<..>")
    return " + ".join(parts)


def format_dyn_trait(dt: m.DynTrait) -> str:
    parts = [format_path(pt.trait) for pt in dt.traits]
    if dt.lifetime:
        parts.append(dt.lifetime)
    return "dyn " + " + ".join(parts)


def format_fn_pointer(fp: m.FunctionPointer) -> str:
    out = "fn(" + ", ".join(format_type(t) for _, t in fp.sig.inputs) + ")"
    if fp.sig.output is not None:
        out += " -> " + format_type(fp.sig.output)
    return out


def _format_generic_param(p: m.GenericParamDef) -> str:
    kind = p.kind
    if isinstance(kind, m.TypeParam):
        out = p.name
        if kind.bounds:
            out += ": " + format_bounds(kind.bounds)
        if kind.default is not None:
            out += " = " + format_type(kind.default)
        return out
    if isinstance(kind, m.ConstParam):
        out = f"const {p.name}: {format_type(kind.type)}"
        if kind.default is not None:
            out += f" = {kind.default}"
        return out
    return p.name


def format_generics(generics: m.Generics) -> str:
    """``<'a, T: Clone, const N: usize>``; synthetic ``impl Trait`` params are
    left out since they already show up in argument position."""

    params = [
        _format_generic_param(p)
        for p in generics.params
        if not (isinstance(p.kind, m.TypeParam) and p.kind.is_synthetic)
    ]
    if not params:
        return ""
    return "<" + ", ".join(params) + ">"


def _format_where_predicate(wp: m.WherePredicate) -> str:
    if isinstance(wp, m.BoundPredicate):
        return f"{format_type(wp.type)}: {format_bounds(wp.bounds)}"
    if isinstance(wp, m.LifetimePredicate):
        return f"{wp.lifetime}: {' + '.join(wp.outlives)}"
    return f"{format_type(wp.lhs)} = {_format_term(wp.rhs)}"


def format_where_clause(generics: m.Generics) -> str:
    if not generics.where_predicates:
        return ""
    preds = [_format_where_predicate(wp) for wp in generics.where_predicates]
    return "\nwhere\n    " + ",\n    ".join(preds)


def format_function_signature(name: str, f: m.Function) -> str:
    out = ""
    if f.header.is_const:
        out += "const "
    if f.header.is_async:
        out += "async "
    if f.header.is_unsafe:
        out += "unsafe "
    params = ", ".join(f"{n}: {format_type(t)}" for n, t in f.sig.inputs)
    out += f"fn {name}{format_generics(f.generics)}({params})"
    if f.sig.output is not None:
        out += " -> " + format_type(f.sig.output)
    return out + format_where_clause(f.generics)
