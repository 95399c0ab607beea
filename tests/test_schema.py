import pytest

from crate_docs import model as m
from crate_docs.schema import (
    SchemaError,
    parse_crate,
    parse_item_inner,
    parse_type,
    peek_format_version,
)
from tests.builders import demo_crate, item, module


def test_parse_crate_builds_read_only_tree(demo_doc):
    tree = parse_crate(demo_doc)

    assert tree.root == "0"
    assert tree.format_version == 56
    assert tree.crate_version == "1.2.3"
    assert tree.root_item.name == "demo"
    assert tree.paths["20"].path == ("demo", "inner", "Deep")
    assert tree.external_crates["1"].name == "std"
    with pytest.raises(TypeError):
        tree.index["999"] = tree.root_item


def test_ids_are_normalized_to_strings(demo_tree):
    root = demo_tree.root_item
    assert isinstance(root.inner, m.Module)
    assert root.inner.items[:3] == ("1", "2", "3")
    deep = demo_tree.get("20")
    assert deep.inner.kind == m.TupleStruct(("22", None))


def test_string_ids_from_older_formats_are_accepted():
    doc = demo_crate()
    doc["root"] = "0:0"
    doc["index"] = {"0:0": item("0:0", "demo", module([]))}
    doc["paths"] = {}

    tree = parse_crate(doc)

    assert tree.root_item.name == "demo"


def test_visibility_variants(demo_tree):
    assert demo_tree.get("7").visibility == "crate"
    assert not demo_tree.get("7").is_public
    doc = demo_crate()
    doc["index"]["7"]["visibility"] = {"restricted": {"parent": 0, "path": "crate::de"}}
    assert parse_crate(doc).get("7").visibility == "restricted"


def test_missing_top_level_field_is_a_schema_error(demo_doc):
    del demo_doc["paths"]
    with pytest.raises(SchemaError, match="missing field `paths`"):
        parse_crate(demo_doc)


def test_unknown_item_kind_reports_location(demo_doc):
    demo_doc["index"]["9"]["inner"] = {"quantum_item": {}}
    with pytest.raises(SchemaError) as excinfo:
        parse_crate(demo_doc)
    assert excinfo.value.where == "index.9.inner"


def test_function_requires_header_flags(demo_doc):
    del demo_doc["index"]["5"]["inner"]["function"]["header"]["is_async"]
    with pytest.raises(SchemaError, match="is_async"):
        parse_crate(demo_doc)


def test_parse_type_variants():
    assert parse_type({"primitive": "u8"}) == m.Primitive("u8")
    assert parse_type("infer") == m.Infer()
    assert parse_type(
        {"borrowed_ref": {"lifetime": "'a", "is_mutable": True, "type": {"generic": "T"}}}
    ) == m.BorrowedRef(m.Generic("T"), "'a", True)
    assert parse_type({"array": {"type": {"primitive": "u8"}, "len": "32"}}) == m.Array(
        m.Primitive("u8"), "32"
    )
    assert parse_type({"tuple": []}) == m.Tuple(())


def test_legacy_path_and_binding_spellings():
    ty = parse_type(
        {
            "resolved_path": {
                "name": "Iterator",
                "id": 7,
                "args": {
                    "angle_bracketed": {
                        "args": [],
                        "bindings": [
                            {
                                "name": "Item",
                                "args": None,
                                "binding": {"equality": {"type": {"primitive": "u8"}}},
                            }
                        ],
                    }
                },
            }
        }
    )
    assert ty.path == "Iterator"
    assert ty.id == "7"
    assert ty.args.constraints[0] == m.AssocItemConstraint(
        name="Item", equality=m.Primitive("u8")
    )


def test_unknown_type_variant_is_rejected():
    with pytest.raises(SchemaError, match="unknown type variant `teleport`"):
        parse_type({"teleport": {}})


def test_multi_key_enum_value_is_rejected():
    with pytest.raises(SchemaError, match="single variant key"):
        parse_type({"primitive": "u8", "generic": "T"})


def test_parse_item_inner_assoc_const_accepts_old_default_key():
    inner = parse_item_inner({"assoc_const": {"type": {"primitive": "u32"}, "default": "1"}})
    assert inner == m.AssocConst(m.Primitive("u32"), "1")


@pytest.mark.parametrize(
    "data, expected",
    [
        (b'{"format_version": 41, "index": "garbage"}', 41),
        ('{"format_version": 56}', 56),
        ({"format_version": 57}, 57),
        (b"not json", None),
        (b'{"format_version": 56, "index": ' + b"[" * 100000 + b"]" * 100000 + b"}", None),
        ({"format_version": "56"}, None),
        ({"format_version": True}, None),
        ([1, 2], None),
    ],
)
def test_peek_format_version(data, expected):
    assert peek_format_version(data) == expected
