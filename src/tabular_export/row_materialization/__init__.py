"""Row materialisation exports."""

from .cell_normalization import (
    DEFAULT_GUARD,
    DEFAULT_NEUTRALIZER,
    DEFAULT_RISKY_CHARACTERS,
    InjectionGuard,
    escape_quotes,
    format_timestamp,
    normalize_cell,
    parse_timestamp,
)
from .dataset_preparation import (
    PreparedDataset,
    ScalarPassthrough,
    TabularDataset,
    prepare_dataset,
)
from .row_materializer import iter_rows, materialize_record, materialize_row, resolve_path

__all__ = [
    "DEFAULT_GUARD",
    "DEFAULT_NEUTRALIZER",
    "DEFAULT_RISKY_CHARACTERS",
    "InjectionGuard",
    "PreparedDataset",
    "ScalarPassthrough",
    "TabularDataset",
    "escape_quotes",
    "format_timestamp",
    "iter_rows",
    "materialize_record",
    "materialize_row",
    "normalize_cell",
    "parse_timestamp",
    "prepare_dataset",
    "resolve_path",
]
