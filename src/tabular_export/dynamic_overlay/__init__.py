"""Dynamic schema overlay exports."""

from .overlay_resolution import (
    DEFAULT_MAX_CONCURRENCY,
    OverlayResolutionError,
    OverlayResolver,
    resolve_overlay,
    resolve_overlay_sync,
)

__all__ = [
    "DEFAULT_MAX_CONCURRENCY",
    "OverlayResolutionError",
    "OverlayResolver",
    "resolve_overlay",
    "resolve_overlay_sync",
]
