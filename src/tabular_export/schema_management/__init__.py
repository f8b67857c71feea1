"""Schema management exports."""

from .schema_compilation import SchemaError, compile_schema, load_schema_text
from .schema_flattening import DEFAULT_MAX_ARRAY_ELEMENTS, flatten_schema
from .schema_models import (
    DATE_SCALAR_TYPE,
    WILDCARD_LABEL,
    ArrayNode,
    ColumnDefinition,
    FlattenedSchema,
    FlatteningContext,
    ObjectNode,
    PathSegment,
    ScalarNode,
    SchemaNode,
    join_schema_path,
)

__all__ = [
    "ArrayNode",
    "ColumnDefinition",
    "DATE_SCALAR_TYPE",
    "DEFAULT_MAX_ARRAY_ELEMENTS",
    "FlattenedSchema",
    "FlatteningContext",
    "ObjectNode",
    "PathSegment",
    "ScalarNode",
    "SchemaError",
    "SchemaNode",
    "WILDCARD_LABEL",
    "compile_schema",
    "flatten_schema",
    "join_schema_path",
    "load_schema_text",
]
