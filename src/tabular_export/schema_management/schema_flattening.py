"""Schema flattening service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from .schema_compilation import SchemaError
from .schema_models import (
    WILDCARD_LABEL,
    ArrayNode,
    ColumnDefinition,
    FlattenedSchema,
    FlatteningContext,
    ObjectNode,
    ScalarNode,
    SchemaNode,
)

DEFAULT_MAX_ARRAY_ELEMENTS = 5

_LOGGER = logging.getLogger(__name__)


def flatten_schema(
    schema: SchemaNode,
    *,
    overlay: Mapping[str, SchemaNode] | None = None,
    max_array_elements: int = DEFAULT_MAX_ARRAY_ELEMENTS,
    base_path: str = "",
) -> FlattenedSchema:
    """Return the deterministic column layout for ``schema``.

    ``base_path`` is the dotted path of ``schema`` inside the declared route schema
    and is used only for overlay lookups; root columns are never namespaced.
    """
    if max_array_elements < 1:
        raise SchemaError("max_array_elements must be greater than zero.")
    columns = _flatten_field(
        schema,
        FlatteningContext(base_path=base_path),
        overlay=overlay or {},
        max_array_elements=max_array_elements,
    )
    _ensure_unique_headers(columns)
    _LOGGER.debug("Flattened schema at '%s' into %d columns", base_path, len(columns))
    return FlattenedSchema(columns=columns)


def _flatten_field(
    node: SchemaNode,
    context: FlatteningContext,
    *,
    overlay: Mapping[str, SchemaNode],
    max_array_elements: int,
) -> tuple[ColumnDefinition, ...]:
    substitute = overlay.get(context.base_path)
    if substitute is not None:
        context = replace(context, label_override=node.label or context.label_override)
        node = substitute
    return _flatten_node(node, context, overlay=overlay, max_array_elements=max_array_elements)


def _flatten_node(
    node: SchemaNode,
    context: FlatteningContext,
    *,
    overlay: Mapping[str, SchemaNode],
    max_array_elements: int,
) -> tuple[ColumnDefinition, ...]:
    match node:
        case ScalarNode():
            return _flatten_scalar(node, context)
        case ObjectNode():
            return _flatten_object(
                node, context, overlay=overlay, max_array_elements=max_array_elements
            )
        case ArrayNode():
            return _flatten_array(
                node, context, overlay=overlay, max_array_elements=max_array_elements
            )
        case _:
            raise SchemaError(f"Unsupported schema node: {type(node).__name__}")


def _flatten_scalar(node: ScalarNode, context: FlatteningContext) -> tuple[ColumnDefinition, ...]:
    if context.key is None:
        return ()
    label = node.label or context.label_override
    return (
        ColumnDefinition(
            header=label or context.key,
            path=(context.key,),
            labelled=label is not None,
            scalar_type=node.scalar_type,
        ),
    )


def _flatten_object(
    node: ObjectNode,
    context: FlatteningContext,
    *,
    overlay: Mapping[str, SchemaNode],
    max_array_elements: int,
) -> tuple[ColumnDefinition, ...]:
    if node.children is None:
        return ()

    columns: list[ColumnDefinition] = []
    for name, child in node.children:
        columns.extend(
            _flatten_field(
                child,
                context.child(name),
                overlay=overlay,
                max_array_elements=max_array_elements,
            )
        )
    if context.key is None:
        return tuple(columns)

    key = context.key
    return tuple(
        replace(
            column,
            header=(
                column.header
                if context.parent_is_array_item or column.labelled
                else f"{key}.{column.header}"
            ),
            path=(key, *column.path),
        )
        for column in columns
    )


def _flatten_array(
    node: ArrayNode,
    context: FlatteningContext,
    *,
    overlay: Mapping[str, SchemaNode],
    max_array_elements: int,
) -> tuple[ColumnDefinition, ...]:
    item_context = FlatteningContext(
        key=context.key,
        base_path=context.base_path,
        parent_is_array_item=True,
    )
    template = _flatten_node(
        node.item, item_context, overlay=overlay, max_array_elements=max_array_elements
    )
    if context.key is None or not template:
        return template

    array_label = node.label or context.label_override
    item_label = node.item.label
    wildcard = item_label is not None and item_label.endswith(WILDCARD_LABEL)
    single = len(template) == 1

    columns: list[ColumnDefinition] = []
    for index in range(max_array_elements):
        for column in template:
            if wildcard:
                own_label = item_label[: -len(WILDCARD_LABEL)] or array_label
                base = own_label or context.key
                name = base if index == 0 else f"{base} {index + 1}"
                labelled = own_label is not None
            else:
                name = f"{array_label or context.key}_{index}"
                labelled = array_label is not None
            columns.append(
                replace(
                    column,
                    header=name if single else f"{name}.{column.header}",
                    path=(column.path[0], index, *column.path[1:]),
                    labelled=labelled,
                )
            )
    return tuple(columns)


def _ensure_unique_headers(columns: tuple[ColumnDefinition, ...]) -> None:
    seen: set[str] = set()
    for column in columns:
        if column.header in seen:
            raise SchemaError(f"Duplicate flattened column detected: {column.header}")
        seen.add(column.header)
