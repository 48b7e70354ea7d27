"""SQLALCHEMY_ENGINE_OPTIONS computed per component from presets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from superset_operator.gunicorn import Preset


class ComponentType(str, Enum):
    """Kinds of Superset components managed by the operator."""

    WEB_SERVER = "web-server"
    CELERY_WORKER = "celery-worker"
    CELERY_BEAT = "celery-beat"
    CELERY_FLOWER = "celery-flower"
    WEBSOCKET_SERVER = "websocket-server"
    MCP_SERVER = "mcp-server"
    INIT = "init"


@dataclass
class SQLAlchemyEngineOptionsSpec:
    """User-facing engine pool settings; None fields fall back to the preset."""

    preset: Optional[str] = None
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    pool_recycle: Optional[int] = None
    pool_pre_ping: Optional[bool] = None
    pool_timeout: Optional[int] = None


@dataclass
class EngineOptions:
    """Resolved engine options ready for rendering."""

    use_null_pool: bool = False
    pool_size: int = 0
    max_overflow: int = 0
    pool_recycle: int = 0
    pool_pre_ping: bool = False
    pool_timeout: int = 0


_ALWAYS_NULL_POOL = {ComponentType.CELERY_BEAT, ComponentType.INIT}


def _pool_size(component_type: str, preset: str, workers: int, threads: int) -> int:
    if component_type == ComponentType.WEB_SERVER:
        if preset == Preset.PERFORMANCE:
            return workers
        if preset == Preset.AGGRESSIVE:
            return workers * threads
        return 1
    if component_type == ComponentType.CELERY_WORKER:
        # For celery components, workers carries the celery concurrency.
        if preset in (Preset.PERFORMANCE, Preset.AGGRESSIVE):
            return workers
        return 1
    if component_type == ComponentType.MCP_SERVER:
        if preset == Preset.PERFORMANCE:
            return 10
        if preset == Preset.AGGRESSIVE:
            return 20
        return 5
    return 1


def _apply_overrides(result: EngineOptions, spec: Optional[SQLAlchemyEngineOptionsSpec]) -> None:
    if spec is None:
        return
    for name in ("pool_size", "max_overflow", "pool_recycle", "pool_pre_ping", "pool_timeout"):
        value = getattr(spec, name)
        if value is not None:
            setattr(result, name, value)


def compute_engine_options(
    component_type: str,
    top_level: Optional[SQLAlchemyEngineOptionsSpec],
    per_component: Optional[SQLAlchemyEngineOptionsSpec],
    workers: int,
    threads: int,
) -> Optional[EngineOptions]:
    """Compute engine options for a component, or None when the preset is disabled.

    The per-component spec wins over the top-level one.
    """
    effective = per_component if per_component is not None else top_level

    preset = Preset.BALANCED.value
    if effective is not None and effective.preset is not None:
        preset = effective.preset
    if preset == Preset.DISABLED:
        return None

    if component_type in _ALWAYS_NULL_POOL:
        preset = Preset.CONSERVATIVE.value

    if preset == Preset.CONSERVATIVE:
        result = EngineOptions(use_null_pool=True)
    else:
        result = EngineOptions(
            pool_size=_pool_size(component_type, preset, workers, threads),
            max_overflow=-1,
            pool_recycle=3600,
        )
    _apply_overrides(result, effective)
    return result