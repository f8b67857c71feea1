"""Schema-driven flattening of nested payloads into CSV and XLSX tables."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
