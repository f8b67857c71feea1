"""Schema flattening service tests."""

from __future__ import annotations

import pytest
from tabular_export.schema_management import (
    ArrayNode,
    ObjectNode,
    ScalarNode,
    SchemaError,
    compile_schema,
    flatten_schema,
)


def _object(**properties) -> dict:
    return {"type": "object", "properties": properties}


def _string(**extra) -> dict:
    return {"type": "string", **extra}


def _headers(schema, **kwargs) -> list[str]:
    return list(flatten_schema(compile_schema(schema), **kwargs).headers)


def test_flat_object_keeps_declaration_order_without_namespacing() -> None:
    schema = _object(first_name=_string(), last_name=_string(), age={"type": "number"})

    flattened = flatten_schema(compile_schema(schema))

    assert flattened.headers == ("first_name", "last_name", "age")
    assert [column.path for column in flattened] == [
        ("first_name",),
        ("last_name",),
        ("age",),
    ]


def test_nested_schema_matches_expected_columns() -> None:
    schema = {
        "type": "array",
        "items": _object(
            testObject=_object(
                testPropOne={"type": "number"},
                testPropTwo={"type": "number"},
                testPropThree=_string(),
            ),
            testNumber={"type": "number"},
            testString=_string(),
            testEmail=_string(),
            testDate={"type": "string", "format": "date-time"},
            testDateObject={"type": "string", "format": "date-time"},
            testArray={
                "type": "array",
                "items": _object(testPropOne={"type": "number"}, testPropTwo=_string()),
            },
            testObjectArrayWithoutKeys={"type": "object"},
            testPrimitiveArray={"type": "array", "items": {"type": "number"}},
        ),
    }

    headers = _headers(schema)

    assert headers == [
        "testObject.testPropOne",
        "testObject.testPropTwo",
        "testObject.testPropThree",
        "testNumber",
        "testString",
        "testEmail",
        "testDate",
        "testDateObject",
        *[
            f"testArray_{index}.{prop}"
            for index in range(5)
            for prop in ("testPropOne", "testPropTwo")
        ],
        *[f"testPrimitiveArray_{index}" for index in range(5)],
    ]


def test_array_paths_splice_index_after_array_key() -> None:
    schema = _object(
        user=_object(
            tags={"type": "array", "items": _string()},
            orders={"type": "array", "items": _object(sku=_string(), qty={"type": "integer"})},
        )
    )

    flattened = flatten_schema(compile_schema(schema), max_array_elements=2)

    assert [(column.header, column.path) for column in flattened] == [
        ("user.tags_0", ("user", "tags", 0)),
        ("user.tags_1", ("user", "tags", 1)),
        ("user.orders_0.sku", ("user", "orders", 0, "sku")),
        ("user.orders_0.qty", ("user", "orders", 0, "qty")),
        ("user.orders_1.sku", ("user", "orders", 1, "sku")),
        ("user.orders_1.qty", ("user", "orders", 1, "qty")),
    ]


def test_objects_inside_array_items_are_not_dot_joined_with_the_array_key() -> None:
    schema = _object(
        orders={
            "type": "array",
            "items": _object(
                address=_object(city=_string()),
                lines={"type": "array", "items": _object(sku=_string())},
            ),
        }
    )

    flattened = flatten_schema(compile_schema(schema), max_array_elements=2)

    assert [(column.header, column.path) for column in flattened][:4] == [
        ("orders_0.address.city", ("orders", 0, "address", "city")),
        ("orders_0.lines_0", ("orders", 0, "lines", 0, "sku")),
        ("orders_0.lines_1", ("orders", 0, "lines", 1, "sku")),
        ("orders_1.address.city", ("orders", 1, "address", "city")),
    ]


def test_every_array_contributes_exactly_the_configured_number_of_groups() -> None:
    schema = _object(tags={"type": "array", "items": _string()})

    assert _headers(schema) == [f"tags_{index}" for index in range(5)]
    assert _headers(schema, max_array_elements=1) == ["tags_0"]


def test_labels_replace_keys_and_suppress_dot_joining() -> None:
    schema = _object(
        user=_object(
            first_name=_string(title="First Name"),
            last_name=_string(),
        )
    )

    assert _headers(schema) == ["First Name", "user.last_name"]


def test_wildcard_item_label_numbers_elements_from_one() -> None:
    schema = _object(tags={"type": "array", "items": _string(title="Tag*")})

    assert _headers(schema, max_array_elements=3) == ["Tag", "Tag 2", "Tag 3"]


def test_bare_wildcard_label_falls_back_to_array_key() -> None:
    schema = _object(
        person=_object(
            contacts={
                "type": "array",
                "items": {**_object(name=_string(), phone=_string()), "title": "*"},
            }
        )
    )

    assert _headers(schema, max_array_elements=2) == [
        "person.contacts.name",
        "person.contacts.phone",
        "person.contacts 2.name",
        "person.contacts 2.phone",
    ]


def test_wildcard_label_wins_over_enclosing_object_key() -> None:
    schema = _object(
        person=_object(
            contacts={
                "type": "array",
                "items": {**_object(name=_string()), "title": "Contact*"},
            }
        )
    )

    flattened = flatten_schema(compile_schema(schema), max_array_elements=2)

    assert [(column.header, column.path) for column in flattened] == [
        ("Contact", ("person", "contacts", 0, "name")),
        ("Contact 2", ("person", "contacts", 1, "name")),
    ]


def test_free_form_objects_produce_no_columns() -> None:
    schema = _object(id=_string(), metadata={"type": "object"})

    assert _headers(schema) == ["id"]


def test_overlay_substitutes_schema_at_dotted_path() -> None:
    schema = _object(first_name=_string(), details=_object(tag={"type": "object"}))
    overlay = {"details.tag": compile_schema(_object(id={"type": "number"}, name=_string()))}

    assert _headers(schema, overlay=overlay) == ["first_name", "details.tag.id", "details.tag.name"]


def test_overlay_lookup_uses_base_path() -> None:
    item = ObjectNode(children=(("tag", ObjectNode()),))
    overlay = {"items.tag": ObjectNode(children=(("id", ScalarNode("number")),))}

    flattened = flatten_schema(ArrayNode(item=item), overlay=overlay, base_path="items")

    assert flattened.headers == ("tag.id",)


def test_flattening_is_deterministic() -> None:
    schema = compile_schema(
        _object(a=_string(), b={"type": "array", "items": _object(c=_string(), d=_string())})
    )

    assert flatten_schema(schema) == flatten_schema(schema)


def test_colliding_headers_raise_schema_error() -> None:
    schema = {
        "type": "object",
        "properties": {
            "customer": _object(zip=_string()),
            "customer.zip": _string(),
        },
    }

    with pytest.raises(SchemaError, match="Duplicate flattened column"):
        flatten_schema(compile_schema(schema))


def test_unrecognised_node_kind_raises_schema_error() -> None:
    schema = ObjectNode(children=(("broken", "not-a-node"),))  # type: ignore[arg-type]

    with pytest.raises(SchemaError, match="Unsupported schema node"):
        flatten_schema(schema)


def test_root_scalar_has_no_columns() -> None:
    assert flatten_schema(ScalarNode("number")).headers == ()
