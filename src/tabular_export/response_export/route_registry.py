"""Immutable route -> response schema registry."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .export_contracts import RouteDeclaration


class RouteRegistry:
    """Lookup table built once at startup and shared read-only afterwards."""

    def __init__(self, routes: Mapping[tuple[str, str], RouteDeclaration]) -> None:
        self._routes = MappingProxyType(dict(routes))

    @classmethod
    def from_routes(cls, routes: Iterable[RouteDeclaration]) -> RouteRegistry:
        table: dict[tuple[str, str], RouteDeclaration] = {}
        for route in routes:
            if route.schema is None:
                continue
            table[(route.path, route.method.upper())] = route
        return cls(table)

    def lookup(self, path: str, method: str) -> RouteDeclaration | None:
        return self._routes.get((path, method.upper()))

    def __contains__(self, key: object) -> bool:
        return key in self._routes

    def __len__(self) -> int:
        return len(self._routes)
