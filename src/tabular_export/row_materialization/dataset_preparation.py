"""Response payload preparation ahead of flattening."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from tabular_export.schema_management import ArrayNode, ObjectNode, ScalarNode, SchemaNode

from .cell_normalization import escape_quotes


@dataclass(frozen=True)
class TabularDataset:
    """Records ready to be flattened against ``schema``."""

    schema: SchemaNode
    records: Sequence[Any]
    base_path: str = ""


@dataclass(frozen=True)
class ScalarPassthrough:
    """A bare scalar payload that bypasses flattening."""

    value: Any


PreparedDataset = TabularDataset | ScalarPassthrough


def prepare_dataset(
    schema: SchemaNode,
    payload: Any,
    *,
    result_key: str | None = None,
) -> PreparedDataset:
    """Narrow, wrap or bypass ``payload`` so that every record is one row.

    When ``result_key`` names a child of an object schema and the payload carries
    that key, both are narrowed to it. A root array schema flattens its item
    schema, and a non-sequence payload becomes a one-element sequence.
    """
    if isinstance(schema, ScalarNode) or not _is_structured(payload):
        return ScalarPassthrough(value=escape_quotes(payload))

    base_path = ""
    if result_key and isinstance(payload, Mapping) and result_key in payload:
        child = _object_child(schema, result_key)
        if child is not None:
            schema, payload, base_path = child, payload[result_key], result_key

    if isinstance(schema, ArrayNode):
        schema = schema.item
    if payload is None:
        records: Sequence[Any] = ()
    elif isinstance(payload, Sequence) and not isinstance(payload, str | bytes):
        records = payload
    else:
        records = (payload,)
    return TabularDataset(schema=schema, records=records, base_path=base_path)


def _object_child(schema: SchemaNode, name: str) -> SchemaNode | None:
    if not isinstance(schema, ObjectNode) or schema.children is None:
        return None
    for child_name, child in schema.children:
        if child_name == name:
            return child
    return None


def _is_structured(payload: Any) -> bool:
    if isinstance(payload, Mapping):
        return True
    return isinstance(payload, Sequence) and not isinstance(payload, str | bytes)
