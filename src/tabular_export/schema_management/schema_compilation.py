"""Schema declaration parsing and compilation service."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import DATE_SCALAR_TYPE, ArrayNode, ObjectNode, ScalarNode, SchemaNode

SCALAR_TYPES: tuple[str, ...] = ("string", "number", "integer", "boolean", "null")


class SchemaError(Exception):
    """Raised for schema parsing or flattening failures."""


def load_schema_text(text: str) -> Mapping[str, Any]:
    """Parse declared schema text (JSON) into a mapping."""
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid schema text: {exc}") from exc
    if not isinstance(parsed, Mapping):
        raise SchemaError("Schema root must be a JSON object.")
    return parsed


def compile_schema(declaration: Any, *, required: bool = False) -> SchemaNode:
    """Compile a JSON-Schema style declaration into schema nodes.

    Args:
      declaration: Mapping using ``type``, ``properties``, ``items``, ``required``
        and ``title``/``label`` keys. Already compiled nodes are returned as-is.
      required: Informational flag recorded on the returned node.

    Returns:
      The root schema node.

    Raises:
      SchemaError: If a node is not a mapping or declares an unknown type.
    """
    if isinstance(declaration, ScalarNode | ObjectNode | ArrayNode):
        return declaration
    if not isinstance(declaration, Mapping):
        raise SchemaError("Schema nodes must be objects.")

    label = _declared_label(declaration)
    node_types = _declared_types(declaration)

    if "object" in node_types or (not node_types and "properties" in declaration):
        return _compile_object(declaration, label=label, required=required)
    if "array" in node_types:
        return ArrayNode(
            item=compile_schema(_first_item(declaration)),
            label=label,
            required=required,
        )
    if not node_types and declaration.get("format") in ("date-time", "date"):
        return ScalarNode(scalar_type=DATE_SCALAR_TYPE, label=label, required=required)

    scalar_types = [node_type for node_type in node_types if node_type != "null"] or list(
        node_types
    )
    if not scalar_types:
        raise SchemaError("Schema node does not declare a type.")
    scalar_type = scalar_types[0]
    if scalar_type not in SCALAR_TYPES:
        raise SchemaError(f"Unsupported schema type: {scalar_type}")
    if declaration.get("format") in ("date-time", "date"):
        scalar_type = DATE_SCALAR_TYPE
    return ScalarNode(scalar_type=scalar_type, label=label, required=required)


def _compile_object(declaration: Mapping[str, Any], *, label: str | None, required: bool):
    properties = declaration.get("properties")
    if properties is None:
        return ObjectNode(children=None, label=label, required=required)
    if not isinstance(properties, Mapping):
        raise SchemaError("Object properties must be a mapping.")
    required_names = declaration.get("required") or ()
    if isinstance(required_names, str) or not isinstance(required_names, Sequence):
        raise SchemaError("Object required entries must be a list of names.")
    children = tuple(
        (str(name), compile_schema(child, required=name in required_names))
        for name, child in properties.items()
    )
    return ObjectNode(children=children, label=label, required=required)


def _first_item(declaration: Mapping[str, Any]) -> Any:
    items = declaration.get("items")
    if isinstance(items, Sequence) and not isinstance(items, str):
        if not items:
            raise SchemaError("Array items list must not be empty.")
        return items[0]
    if items is None:
        raise SchemaError("Array schema requires items.")
    return items


def _declared_types(declaration: Mapping[str, Any]) -> tuple[str, ...]:
    node_type = declaration.get("type")
    if isinstance(node_type, list):
        filtered = [value for value in node_type if isinstance(value, str) and value != "null"]
        return tuple(filtered) if filtered else ("null",)
    if isinstance(node_type, str):
        return (node_type,)
    if node_type is not None:
        raise SchemaError(f"Unsupported schema type: {node_type!r}")
    return ()


def _declared_label(declaration: Mapping[str, Any]) -> str | None:
    label = declaration.get("label", declaration.get("title"))
    if label is None:
        return None
    if not isinstance(label, str):
        raise SchemaError("Schema labels must be strings.")
    return label
