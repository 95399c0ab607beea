"""Markdown renderings of modules, items and search hits for LLM readers.

Every function here is a pure transformation of a DocumentTree and never
raises on sparse input: missing names render as ``_`` and missing modules
produce a one-line diagnostic instead of an error.
"""

from __future__ import annotations

from typing import Sequence

from . import model as m
from .signatures import (
    format_bounds,
    format_function_signature,
    format_generics,
    format_type,
    format_where_clause,
)

MAX_DOC_LINES = 200

# Section order of a module listing.
_SECTIONS = (
    ("Modules", (m.Module,)),
    ("Traits", (m.Trait,)),
    ("Structs", (m.Struct,)),
    ("Enums", (m.Enum,)),
    ("Functions", (m.Function,)),
    ("Type Aliases", (m.TypeAlias,)),
    ("Constants", (m.Constant,)),
    ("Macros", (m.Macro, m.ProcMacro)),
)

_KIND_LABELS: dict[type, str] = {
    m.Module: "mod",
    m.Function: "fn",
    m.Struct: "struct",
    m.Enum: "enum",
    m.Trait: "trait",
    m.TypeAlias: "type",
    m.Constant: "const",
    m.Macro: "macro",
    m.ProcMacro: "proc_macro",
    m.UnionItem: "union",
    m.Static: "static",
    m.Variant: "variant",
    m.StructField: "field",
    m.Impl: "impl",
    m.Use: "use",
    m.ExternCrate: "extern_crate",
    m.TraitAlias: "trait_alias",
    m.ExternType: "extern_type",
    m.AssocConst: "assoc_const",
    m.AssocType: "assoc_type",
    m.PrimitiveItem: "primitive",
}


def doc_lines(docs: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds, ``\\u2028`` and the other separators ``str.splitlines``
    honours stay inside their line.
    """

    if not docs:
        return []
    if docs.endswith("\n"):
        docs = docs[:-1]
    return [line.removesuffix("\r") for line in docs.split("\n")]


def first_sentence(docs: str) -> str:
    lines = doc_lines(docs)
    first_line = lines[0] if lines else ""
    pos = first_line.find(". ")
    if pos >= 0:
        return first_line[: pos + 1]
    return first_line


def _summary(item: m.Item) -> str:
    return first_sentence(item.docs) if item.docs else ""


def _name(item: m.Item) -> str:
    return item.name or "_"


def item_kind_label(inner: m.ItemInner) -> str:
    return _KIND_LABELS.get(type(inner), "item")


def item_path(tree: m.DocumentTree, item_id: str) -> str:
    summary = tree.paths.get(item_id)
    if summary is not None:
        return "::".join(summary.path)
    item = tree.index.get(item_id)
    if item is not None:
        return _name(item)
    return "_"


def format_module_listing(tree: m.DocumentTree, module_id: str) -> str:
    module_item = tree.index.get(module_id)
    if module_item is None:
        return "Module not found in index."
    if not isinstance(module_item.inner, m.Module):
        return "Item is not a module."

    out = [f"# Module `{module_item.name or '(root)'}`\n\n"]
    summary = _summary(module_item)
    if summary:
        out.append(f"{summary}\n\n")

    groups: dict[str, list[m.Item]] = {heading: [] for heading, _ in _SECTIONS}
    other: list[m.Item] = []
    for child_id in module_item.inner.items:
        child = tree.index.get(child_id)
        if child is None or not child.is_public:
            continue
        if isinstance(child.inner, (m.Use, m.ExternCrate)):
            continue
        for heading, kinds in _SECTIONS:
            if isinstance(child.inner, kinds):
                groups[heading].append(child)
                break
        else:
            other.append(child)

    sections = [(heading, groups[heading]) for heading, _ in _SECTIONS]
    sections.append(("Other", other))
    for heading, items in sections:
        if not items:
            continue
        out.append(f"## {heading}\n\n")
        for item in items:
            child_summary = _summary(item)
            if child_summary:
                out.append(f"- `{_name(item)}` -- {child_summary}\n")
            else:
                out.append(f"- `{_name(item)}`\n")
        out.append("\n")

    return "".join(out)


def _code_block(body: str) -> str:
    return f"```rust\n{body}\n```\n\n"


def _tuple_field_types(tree: m.DocumentTree, fields: Sequence[str | None]) -> str:
    parts = []
    for field_id in fields:
        field = tree.index.get(field_id) if field_id is not None else None
        if field is None:
            parts.append("/* private */")
        elif isinstance(field.inner, m.StructField):
            parts.append(format_type(field.inner.type))
        else:
            parts.append("_")
    return ", ".join(parts)


def _named_fields(
    tree: m.DocumentTree, fields: Sequence[str], *, indent: str, prefix: str
) -> str:
    out = ""
    for field_id in fields:
        field = tree.index.get(field_id)
        if field is None or not isinstance(field.inner, m.StructField):
            continue
        out += f"{indent}{prefix}{_name(field)}: {format_type(field.inner.type)},\n"
    return out


def format_struct_definition(tree: m.DocumentTree, name: str, s: m.Struct) -> str:
    out = f"struct {name}{format_generics(s.generics)}"
    kind = s.kind
    if isinstance(kind, m.TupleStruct):
        return out + f"({_tuple_field_types(tree, kind.fields)});"
    if isinstance(kind, m.PlainStruct):
        out += format_where_clause(s.generics) + " {\n"
        out += _named_fields(tree, kind.fields, indent="    ", prefix="pub ")
        if kind.has_stripped_fields:
            out += "    /* private fields */\n"
        return out + "}"
    return out + ";"


def format_enum_definition(tree: m.DocumentTree, name: str, e: m.Enum) -> str:
    out = f"enum {name}{format_generics(e.generics)}"
    out += format_where_clause(e.generics) + " {\n"
    for variant_id in e.variants:
        variant = tree.index.get(variant_id)
        if variant is None or not isinstance(variant.inner, m.Variant):
            continue
        out += f"    {_name(variant)}"
        kind = variant.inner.kind
        if isinstance(kind, m.TupleVariant):
            out += f"({_tuple_field_types(tree, kind.fields)})"
        elif isinstance(kind, m.StructVariant):
            out += " {\n"
            out += _named_fields(tree, kind.fields, indent="        ", prefix="")
            out += "    }"
        out += ",\n"
    return out + "}"


def format_trait_definition(tree: m.DocumentTree, name: str, t: m.Trait) -> str:
    out = "unsafe " if t.is_unsafe else ""
    out += f"trait {name}{format_generics(t.generics)}"
    if t.bounds:
        out += ": " + format_bounds(t.bounds)
    out += format_where_clause(t.generics) + " {\n"
    for member_id in t.items:
        member = tree.index.get(member_id)
        if member is None:
            continue
        inner = member.inner
        if isinstance(inner, m.Function):
            sig = format_function_signature(_name(member), inner)
            out += f"    {sig} {{ ... }}\n" if inner.has_body else f"    {sig};\n"
        elif isinstance(inner, m.AssocType):
            out += f"    type {_name(member)}"
            if inner.bounds:
                out += ": " + format_bounds(inner.bounds)
            if inner.type is not None:
                out += " = " + format_type(inner.type)
            out += ";\n"
        elif isinstance(inner, m.AssocConst):
            out += f"    const {_name(member)}: {format_type(inner.type)};\n"
    return out + "}"


def _struct_methods(tree: m.DocumentTree, s: m.Struct) -> str:
    methods = []
    for impl_id in s.impls:
        impl_item = tree.index.get(impl_id)
        if impl_item is None or not isinstance(impl_item.inner, m.Impl):
            continue
        # Trait impls are documented on the trait.
        if impl_item.inner.trait is not None:
            continue
        for method_id in impl_item.inner.items:
            method = tree.index.get(method_id)
            if method is None or not method.is_public:
                continue
            if isinstance(method.inner, m.Function):
                name = _name(method)
                methods.append((name, format_function_signature(name, method.inner)))

    if not methods:
        return ""
    out = "## Methods\n\n"
    for name, sig in methods:
        out += f"- `{name}`\n  ```rust\n  {sig}\n  ```\n"
    return out + "\n"


def format_item_detail(tree: m.DocumentTree, item: m.Item) -> str:
    name = _name(item)
    inner = item.inner
    if isinstance(inner, m.Function):
        out = f"# Function `{name}`\n\n"
        out += _code_block(format_function_signature(name, inner))
    elif isinstance(inner, m.Struct):
        out = f"# Struct `{name}`\n\n"
        out += _code_block(format_struct_definition(tree, name, inner))
        out += _struct_methods(tree, inner)
    elif isinstance(inner, m.Enum):
        out = f"# Enum `{name}`\n\n"
        out += _code_block(format_enum_definition(tree, name, inner))
    elif isinstance(inner, m.Trait):
        out = f"# Trait `{name}`\n\n"
        out += _code_block(format_trait_definition(tree, name, inner))
    elif isinstance(inner, m.TypeAlias):
        out = f"# Type Alias `{name}`\n\n"
        decl = f"type {name}{format_generics(inner.generics)} = "
        out += f"```rust\n{decl}{format_type(inner.type)};\n```\n\n"
    elif isinstance(inner, m.Constant):
        out = f"# Constant `{name}`\n\n"
        decl = f"const {name}: {format_type(inner.type)} = {inner.const.expr};"
        out += f"```rust\n{decl}\n```\n\n"
    elif isinstance(inner, m.Macro):
        out = f"# Macro `{name}`\n\n"
        out += _code_block(inner.body)
    else:
        out = f"# `{name}`\n\n"

    if item.docs is not None:
        lines = doc_lines(item.docs)
        if len(lines) > MAX_DOC_LINES:
            out += "\n".join(lines[:MAX_DOC_LINES]) + "\n"
            out += "\n... (truncated)\n"
        else:
            out += item.docs + "\n"

    return out


def format_search_results(
    tree: m.DocumentTree, matches: Sequence[tuple[str, m.Item]]
) -> str:
    out = []
    for i, (item_id, item) in enumerate(matches, start=1):
        line = f"{i}. [{item_kind_label(item.inner)}] `{item_path(tree, item_id)}`"
        summary = _summary(item)
        if summary:
            line += f" -- {summary}"
        out.append(line + "\n")
        if isinstance(item.inner, m.Function):
            sig = format_function_signature(_name(item), item.inner).strip()
            out.append(f"   `{sig}`\n")
    return "".join(out)
