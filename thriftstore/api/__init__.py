"""HTTP layer: routers, request schemas and auth dependencies."""

from __future__ import annotations

from typing import Iterable

import structlog
from fastapi import APIRouter, FastAPI

from .routers import ALL_ROUTERS

logger = structlog.get_logger(__name__)


def register_routes(app: FastAPI, routers: Iterable[APIRouter] = ALL_ROUTERS) -> None:
    mounted = []
    for router in routers:
        app.include_router(router)
        mounted.append(router.prefix or "/")
    logger.debug("routes_registered", prefixes=mounted)


__all__ = ["register_routes"]
