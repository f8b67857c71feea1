"""Dynamic schema overlay resolution service."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import Any, TypeAlias

from tabular_export.schema_management import SchemaNode, compile_schema

DEFAULT_MAX_CONCURRENCY = 8

OverlayResolver: TypeAlias = Callable[[Any], Any | Awaitable[Any]]

_LOGGER = logging.getLogger(__name__)


class OverlayResolutionError(Exception):
    """Raised when a dynamic schema resolver fails."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Dynamic schema resolver for '{path}' failed.")
        self.path = path


async def resolve_overlay(
    resolvers: Mapping[str, OverlayResolver],
    context: Any = None,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> Mapping[str, SchemaNode]:
    """Run every resolver once, concurrently, and return ``path -> schema``.

    Coroutine resolvers are awaited on the running loop; plain callables run on a
    worker thread. The first failure cancels the remaining resolvers and is raised
    as :class:`OverlayResolutionError`; no partial overlay is returned.

    Args:
      resolvers: Dotted schema path mapped to its resolver.
      context: Value handed to every resolver (usually the request).
      max_concurrency: Upper bound on resolvers running at the same time.

    Raises:
      OverlayResolutionError: If any resolver raises or returns an invalid schema.
    """
    if not resolvers:
        return MappingProxyType({})
    if max_concurrency < 1:
        raise ValueError("max_concurrency must be greater than zero.")

    _LOGGER.debug("Resolving %d dynamic schema paths", len(resolvers))
    semaphore = asyncio.Semaphore(max_concurrency)
    try:
        async with asyncio.TaskGroup() as group:
            tasks = {
                path: group.create_task(_run_resolver(path, resolver, context, semaphore))
                for path, resolver in resolvers.items()
            }
    except ExceptionGroup as failures:
        first = failures.exceptions[0]
        _LOGGER.debug("Dynamic schema resolution aborted: %s", first)
        raise first

    return MappingProxyType({path: task.result() for path, task in tasks.items()})


def resolve_overlay_sync(
    resolvers: Mapping[str, OverlayResolver],
    context: Any = None,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> Mapping[str, SchemaNode]:
    """Blocking wrapper around :func:`resolve_overlay` for callers without a loop."""
    return asyncio.run(resolve_overlay(resolvers, context, max_concurrency=max_concurrency))


async def _run_resolver(
    path: str,
    resolver: OverlayResolver,
    context: Any,
    semaphore: asyncio.Semaphore,
) -> SchemaNode:
    async with semaphore:
        try:
            if inspect.iscoroutinefunction(resolver):
                resolved = await resolver(context)
            else:
                resolved = await asyncio.to_thread(resolver, context)
                if inspect.isawaitable(resolved):
                    resolved = await resolved
            return compile_schema(resolved)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            raise OverlayResolutionError(path) from exc
