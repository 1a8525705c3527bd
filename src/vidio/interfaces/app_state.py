"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from vidio.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from vidio.application.use_cases import ResolvePlayUrlUseCase


class AppState(State):
    """FastAPI application state.

    Lifecycle managed by composition.py::lifespan().
    """

    config: AppConfig
    http_client: httpx.AsyncClient
    resolve_uc: ResolvePlayUrlUseCase
