"""Fakes for the HTTP layer and builders for synthetic rustdoc JSON."""

from __future__ import annotations

import gzip
import json
from typing import Any

import requests

from crate_docs.schema import FORMAT_VERSION


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        content: bytes = b"",
        headers: dict[str, str] | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.url = url


class FakeSession:
    """Stands in for requests.Session; replays queued responses in order."""

    def __init__(self, *responses: FakeResponse | BaseException) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def get(self, url: str, *, timeout: float, headers: dict[str, str]) -> FakeResponse:
        self.calls.append({"url": url, "timeout": timeout, "headers": headers})
        if not self.responses:
            raise requests.ConnectionError("no response queued")
        res = self.responses.pop(0)
        if isinstance(res, BaseException):
            raise res
        if res.url is None:
            res.url = url
        return res


# -- rustdoc JSON builders -----------------------------------------------------


def prim(name: str) -> dict[str, Any]:
    return {"primitive": name}


def generic(name: str) -> dict[str, Any]:
    return {"generic": name}


def resolved(path: str, *args: dict[str, Any], id: int | None = None) -> dict[str, Any]:
    generic_args = None
    if args:
        generic_args = {
            "angle_bracketed": {
                "args": [{"type": a} for a in args],
                "constraints": [],
            }
        }
    return {"resolved_path": {"path": path, "id": id, "args": generic_args}}


def trait_bound(path: str, *args: dict[str, Any], modifier: str = "none") -> dict[str, Any]:
    return {
        "trait_bound": {
            "trait": resolved(path, *args)["resolved_path"],
            "generic_params": [],
            "modifier": modifier,
        }
    }


def generics(params: list | None = None, where: list | None = None) -> dict[str, Any]:
    return {"params": params or [], "where_predicates": where or []}


def type_param(name: str, *bounds: dict[str, Any], synthetic: bool = False) -> dict[str, Any]:
    return {
        "name": name,
        "kind": {
            "type": {"bounds": list(bounds), "default": None, "is_synthetic": synthetic}
        },
    }


def header(**flags: bool) -> dict[str, Any]:
    return {
        "is_const": flags.get("is_const", False),
        "is_unsafe": flags.get("is_unsafe", False),
        "is_async": flags.get("is_async", False),
        "abi": "Rust",
    }


def function(
    inputs: list[tuple[str, dict[str, Any]]],
    output: dict[str, Any] | None = None,
    *,
    gens: dict[str, Any] | None = None,
    has_body: bool = True,
    **flags: bool,
) -> dict[str, Any]:
    return {
        "function": {
            "sig": {
                "inputs": [[n, t] for n, t in inputs],
                "output": output,
                "is_c_variadic": False,
            },
            "generics": gens or generics(),
            "header": header(**flags),
            "has_body": has_body,
        }
    }


def item(
    id: int,
    name: str | None,
    inner: dict[str, Any],
    *,
    docs: str | None = None,
    visibility: Any = "public",
    crate_id: int = 0,
) -> dict[str, Any]:
    return {
        "id": id,
        "crate_id": crate_id,
        "name": name,
        "span": None,
        "visibility": visibility,
        "docs": docs,
        "links": {},
        "attrs": [],
        "deprecation": None,
        "inner": inner,
    }


def module(items: list[int], *, is_crate: bool = False) -> dict[str, Any]:
    return {"module": {"is_crate": is_crate, "items": items, "is_stripped": False}}


def field(id: int, name: str, ty: dict[str, Any], **kw: Any) -> dict[str, Any]:
    return item(id, name, {"struct_field": ty}, **kw)


def crate_document(items: list[dict[str, Any]], paths: dict[str, Any], **extra: Any) -> dict[str, Any]:
    doc = {
        "root": 0,
        "crate_version": "1.2.3",
        "includes_private": False,
        "index": {str(i["id"]): i for i in items},
        "paths": paths,
        "external_crates": {
            "1": {"name": "std", "html_root_url": None},
        },
        "target": {"triple": "x86_64-unknown-linux-gnu", "target_features": []},
        "format_version": FORMAT_VERSION,
    }
    doc.update(extra)
    return doc


def demo_crate() -> dict[str, Any]:
    """A small crate exercising every section of the renderers.

    demo
    ├── de::{from_str, value::Error}
    ├── Config (plain struct, inherent + trait impl)
    ├── Mode (plain, tuple and struct variants)
    ├── Render (trait with method and associated type)
    ├── parse, MAX_RETRIES, Result, demo_macro
    ├── internal_helper (crate-private)
    └── pub use inner::Deep (inner itself is private)
    """

    config_ty = resolved("Config", id=2)
    error_ty = resolved("Error", id=13)
    string_ty = resolved("String", id=901)

    items = [
        item(
            0,
            "demo",
            module([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], is_crate=True),
            docs="Demo crate for tests. Second sentence.\n\nMore detail.",
        ),
        item(1, "de", module([11, 12]), docs="Deserialization."),
        item(
            11,
            "from_str",
            function([("s", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": prim("str")}})], resolved("Result", config_ty, error_ty)),
            docs="Parse a config from a string. Accepts TOML.",
        ),
        item(12, "value", module([13])),
        item(
            13,
            "Error",
            {"struct": {"kind": "unit", "generics": generics(), "impls": []}},
            docs="Value error.",
        ),
        item(
            2,
            "Config",
            {
                "struct": {
                    "kind": {"plain": {"fields": [30, 31], "has_stripped_fields": True}},
                    "generics": generics(),
                    "impls": [40, 41],
                }
            },
            docs="Runtime configuration. Built with new.",
        ),
        field(30, "name", string_ty),
        field(31, "retries", prim("u32")),
        item(
            40,
            None,
            {
                "impl": {
                    "is_unsafe": False,
                    "generics": generics(),
                    "provided_trait_methods": [],
                    "trait": None,
                    "for": config_ty,
                    "items": [42, 43],
                    "is_negative": False,
                    "is_synthetic": False,
                    "blanket_impl": None,
                }
            },
        ),
        item(
            42,
            "new",
            function([("name", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": prim("str")}})], config_ty),
            docs="Create a config.",
        ),
        item(43, "helper", function([("self", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": generic("Self")}})]), visibility="default"),
        item(
            41,
            None,
            {
                "impl": {
                    "is_unsafe": False,
                    "generics": generics(),
                    "provided_trait_methods": [],
                    "trait": {"path": "Render", "id": 4, "args": None},
                    "for": config_ty,
                    "items": [44],
                    "is_negative": False,
                    "is_synthetic": False,
                    "blanket_impl": None,
                }
            },
        ),
        item(44, "render", function([("self", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": generic("Self")}})], string_ty), visibility="default"),
        item(
            3,
            "Mode",
            {
                "enum": {
                    "generics": generics(),
                    "has_stripped_variants": False,
                    "variants": [50, 51, 53],
                    "impls": [],
                }
            },
            docs="Operating mode.",
        ),
        item(50, "Fast", {"variant": {"kind": "plain", "discriminant": None}}),
        item(51, "Level", {"variant": {"kind": {"tuple": [52]}, "discriminant": None}}),
        field(52, "0", prim("u8")),
        item(53, "Custom", {"variant": {"kind": {"struct": {"fields": [54], "has_stripped_fields": False}}, "discriminant": None}}),
        field(54, "depth", prim("u16")),
        item(
            4,
            "Render",
            {
                "trait": {
                    "is_auto": False,
                    "is_unsafe": False,
                    "is_dyn_compatible": True,
                    "items": [60, 61],
                    "generics": generics(),
                    "bounds": [trait_bound("Clone")],
                    "implementations": [41],
                }
            },
            docs="Things that render to text.",
        ),
        item(
            60,
            "render",
            function([("self", {"borrowed_ref": {"lifetime": None, "is_mutable": False, "type": generic("Self")}})], string_ty, has_body=False),
        ),
        item(61, "Output", {"assoc_type": {"generics": generics(), "bounds": [trait_bound("Clone")], "type": None}}),
        item(
            5,
            "parse",
            function(
                [("input", generic("T"))],
                resolved("Result", config_ty, error_ty),
                gens=generics(
                    [type_param("T", trait_bound("AsRef", prim("str")))],
                    [{"bound_predicate": {"type": generic("T"), "bounds": [trait_bound("Send")], "generic_params": []}}],
                ),
            ),
            docs="Parse input into a config.",
        ),
        item(
            6,
            None,
            {"use": {"source": "inner::Deep", "name": "Deep", "id": 20, "is_glob": False}},
        ),
        item(7, "internal_helper", function([]), visibility="crate"),
        item(8, "demo_macro", {"macro": "macro_rules! demo_macro {\n    () => { ... };\n}"}, docs="Builds a demo."),
        item(
            9,
            "MAX_RETRIES",
            {"constant": {"type": prim("u32"), "const": {"expr": "5", "value": "5", "is_literal": True}}},
            docs="Upper bound on retries.",
        ),
        item(
            10,
            "Result",
            {"type_alias": {"type": resolved("std::result::Result", generic("T"), error_ty), "generics": generics([type_param("T")])}},
            docs="Result alias.",
        ),
        item(21, "inner", module([20]), visibility="default"),
        item(20, "Deep", {"struct": {"kind": {"tuple": [22, None]}, "generics": generics(), "impls": []}}, docs="Deeply nested. Re-exported at the root."),
        field(22, "0", prim("u64")),
        item(100, "parse_external", function([]), crate_id=1),
    ]

    paths = {
        "0": {"crate_id": 0, "path": ["demo"], "kind": "module"},
        "1": {"crate_id": 0, "path": ["demo", "de"], "kind": "module"},
        "11": {"crate_id": 0, "path": ["demo", "de", "from_str"], "kind": "function"},
        "13": {"crate_id": 0, "path": ["demo", "de", "value", "Error"], "kind": "struct"},
        "2": {"crate_id": 0, "path": ["demo", "Config"], "kind": "struct"},
        "3": {"crate_id": 0, "path": ["demo", "Mode"], "kind": "enum"},
        "4": {"crate_id": 0, "path": ["demo", "Render"], "kind": "trait"},
        "5": {"crate_id": 0, "path": ["demo", "parse"], "kind": "function"},
        "20": {"crate_id": 0, "path": ["demo", "inner", "Deep"], "kind": "struct"},
        "901": {"crate_id": 1, "path": ["alloc", "string", "String"], "kind": "struct"},
    }
    return crate_document(items, paths)


def to_json_bytes(doc: dict[str, Any]) -> bytes:
    return json.dumps(doc).encode("utf-8")


def to_gzip_bytes(doc: dict[str, Any]) -> bytes:
    return gzip.compress(to_json_bytes(doc))
