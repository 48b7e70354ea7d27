"""Celery worker settings, resolved from presets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from superset_operator.gunicorn import Preset

DEFAULT_POOL = "prefork"

_PRESET_CONCURRENCY = {
    Preset.CONSERVATIVE: 2,
    Preset.PERFORMANCE: 8,
    Preset.AGGRESSIVE: 16,
}
_DEFAULT_CONCURRENCY = 4


@dataclass
class CeleryWorkerProcessSpec:
    """User-facing Celery worker settings; None fields fall back to the preset."""

    preset: Optional[str] = None
    concurrency: Optional[int] = None
    pool: Optional[str] = None
    optimization: Optional[str] = None
    max_tasks_per_child: Optional[int] = None
    max_memory_per_child: Optional[int] = None
    prefetch_multiplier: Optional[int] = None
    soft_time_limit: Optional[int] = None
    time_limit: Optional[int] = None


@dataclass(frozen=True)
class ResolvedCelery:
    """Concrete Celery worker parameters."""

    disabled: bool = False
    concurrency: int = 0
    pool: str = ""
    optimization: str = ""
    max_tasks_per_child: int = 0
    max_memory_per_child: int = 0
    prefetch_multiplier: int = 0
    soft_time_limit: int = 0
    time_limit: int = 0

    def command(self) -> list[str]:
        """The celery worker command line."""
        cmd = [
            "celery",
            "--app=superset.tasks.celery_app:app",
            "worker",
            f"--pool={self.pool}",
            "-O",
            self.optimization,
            "-c",
            str(self.concurrency),
        ]
        optional = (
            ("--max-tasks-per-child", self.max_tasks_per_child),
            ("--max-memory-per-child", self.max_memory_per_child),
            ("--prefetch-multiplier", self.prefetch_multiplier),
            ("--soft-time-limit", self.soft_time_limit),
            ("--time-limit", self.time_limit),
        )
        cmd.extend(f"{flag}={value}" for flag, value in optional if value > 0)
        return cmd


def _pick(value, default):
    return default if value is None else value


def resolve_celery(spec: Optional[CeleryWorkerProcessSpec]) -> ResolvedCelery:
    """Resolve a spec into concrete values; None yields the balanced defaults."""
    preset = Preset.BALANCED.value
    if spec is not None and spec.preset is not None:
        preset = spec.preset
    if preset == Preset.DISABLED:
        return ResolvedCelery(disabled=True)

    s = spec or CeleryWorkerProcessSpec()
    return ResolvedCelery(
        concurrency=_pick(s.concurrency, _PRESET_CONCURRENCY.get(preset, _DEFAULT_CONCURRENCY)),
        pool=_pick(s.pool, DEFAULT_POOL),
        optimization=_pick(s.optimization, "fair"),
        max_tasks_per_child=_pick(s.max_tasks_per_child, 0),
        max_memory_per_child=_pick(s.max_memory_per_child, 0),
        prefetch_multiplier=_pick(s.prefetch_multiplier, 4),
        soft_time_limit=_pick(s.soft_time_limit, 0),
        time_limit=_pick(s.time_limit, 0),
    )