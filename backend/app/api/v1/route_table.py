# app/api/v1/route_table.py
"""
Explicit route tables.

Each router module declares a list of Route entries (method, path, endpoint,
capability). register_routes() attaches them to an APIRouter together with
the access dependencies of their capability; request bodies are validated by
the pydantic models in the endpoint signatures.
"""
from dataclasses import dataclass
from typing import Any, Callable

from fastapi import APIRouter

from app.api.v1.deps import CAPABILITY_DEPENDENCIES, Capability


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    endpoint: Callable[..., Any]
    capability: Capability = Capability.PUBLIC
    status_code: int = 200
    summary: str | None = None


def register_routes(router: APIRouter, table: list[Route]) -> APIRouter:
    for route in table:
        router.add_api_route(
            route.path,
            route.endpoint,
            methods=[route.method],
            status_code=route.status_code,
            dependencies=list(CAPABILITY_DEPENDENCIES[route.capability]),
            summary=route.summary,
        )
    return router
