"""Dynamic schema overlay resolution tests."""

from __future__ import annotations

import asyncio
import threading

import pytest
from tabular_export.dynamic_overlay import (
    OverlayResolutionError,
    resolve_overlay,
    resolve_overlay_sync,
)
from tabular_export.schema_management import ObjectNode, ScalarNode

_TAG_SCHEMA = {
    "type": "object",
    "properties": {"id": {"type": "number"}, "name": {"type": "string"}},
}


def test_resolves_coroutine_and_plain_resolvers() -> None:
    seen_contexts: list[object] = []

    async def tag_resolver(context):
        seen_contexts.append(context)
        return _TAG_SCHEMA

    def owner_resolver(context):
        seen_contexts.append(context)
        return ScalarNode(label="Owner")

    overlay = resolve_overlay_sync({"tag": tag_resolver, "owner": owner_resolver}, "request")

    assert overlay["owner"] == ScalarNode(label="Owner")
    assert isinstance(overlay["tag"], ObjectNode)
    assert [name for name, _ in overlay["tag"].children or ()] == ["id", "name"]
    assert seen_contexts == ["request", "request"]


def test_empty_declaration_resolves_to_empty_overlay() -> None:
    assert dict(resolve_overlay_sync({})) == {}


def test_resolvers_run_concurrently() -> None:
    async def scenario():
        barrier = asyncio.Barrier(2)

        async def resolver(_context):
            await asyncio.wait_for(barrier.wait(), timeout=2)
            return {"type": "string"}

        return await resolve_overlay({"a": resolver, "b": resolver})

    overlay = asyncio.run(scenario())

    assert set(overlay) == {"a", "b"}


def test_concurrency_is_bounded() -> None:
    lock = threading.Lock()
    active = {"now": 0, "max": 0}

    async def resolver(_context):
        with lock:
            active["now"] += 1
            active["max"] = max(active["max"], active["now"])
        await asyncio.sleep(0.01)
        with lock:
            active["now"] -= 1
        return {"type": "string"}

    resolvers = {f"field_{index}": resolver for index in range(6)}
    overlay = resolve_overlay_sync(resolvers, max_concurrency=2)

    assert len(overlay) == 6
    assert active["max"] <= 2


def test_first_failure_aborts_and_cancels_siblings() -> None:
    cancelled: list[str] = []

    async def slow_resolver(_context):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append("slow")
            raise
        return {"type": "string"}

    async def failing_resolver(_context):
        await asyncio.sleep(0)
        raise RuntimeError("ERROR")

    with pytest.raises(OverlayResolutionError) as exc_info:
        resolve_overlay_sync({"slow": slow_resolver, "tag": failing_resolver})

    assert exc_info.value.path == "tag"
    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert cancelled == ["slow"]


def test_failure_discards_successful_siblings() -> None:
    def ok_resolver(_context):
        return {"type": "string"}

    def failing_resolver(_context):
        raise ValueError("boom")

    with pytest.raises(OverlayResolutionError, match="'broken'"):
        resolve_overlay_sync({"ok": ok_resolver, "broken": failing_resolver})


def test_invalid_resolved_schema_is_a_resolution_failure() -> None:
    def resolver(_context):
        return "not a schema"

    with pytest.raises(OverlayResolutionError):
        resolve_overlay_sync({"tag": resolver})
