"""FastAPI dependency injection."""

from __future__ import annotations

from metre.config import Settings, settings
from metre.engine.workspace import Workspace

# Single in-memory workspace shared by every request
_workspace = Workspace(seed_default_layer=settings.seed_default_layer)


def get_settings() -> Settings:
    return settings


def get_workspace() -> Workspace:
    return _workspace


def reset_workspace(seed_default_layer: bool | None = None) -> Workspace:
    global _workspace
    seed = settings.seed_default_layer if seed_default_layer is None else seed_default_layer
    _workspace = Workspace(seed_default_layer=seed)
    return _workspace
