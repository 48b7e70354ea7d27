"""Gunicorn settings for the Superset web server, resolved from presets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Preset(str, Enum):
    """Named tuning presets shared by the web server, workers and engine pools."""

    DISABLED = "disabled"
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    PERFORMANCE = "performance"
    AGGRESSIVE = "aggressive"


DEFAULT_WORKER_CLASS = "gthread"

ENV_SERVER_WORKER_AMOUNT = "SERVER_WORKER_AMOUNT"
ENV_SERVER_THREADS_AMOUNT = "SERVER_THREADS_AMOUNT"
ENV_SERVER_WORKER_CLASS = "SERVER_WORKER_CLASS"
ENV_GUNICORN_TIMEOUT = "GUNICORN_TIMEOUT"
ENV_GUNICORN_KEEPALIVE = "GUNICORN_KEEPALIVE"
ENV_WORKER_MAX_REQUESTS = "WORKER_MAX_REQUESTS"
ENV_WORKER_MAX_REQUESTS_JITTER = "WORKER_MAX_REQUESTS_JITTER"
ENV_SERVER_LIMIT_REQUEST_LINE = "SERVER_LIMIT_REQUEST_LINE"
ENV_SERVER_LIMIT_REQUEST_FIELD_SIZE = "SERVER_LIMIT_REQUEST_FIELD_SIZE"
ENV_GUNICORN_LOGLEVEL = "GUNICORN_LOGLEVEL"

_PRESET_WORKERS_THREADS = {
    Preset.CONSERVATIVE: (1, 4),
    Preset.PERFORMANCE: (4, 8),
    Preset.AGGRESSIVE: (8, 16),
}
_DEFAULT_WORKERS_THREADS = (2, 8)


@dataclass
class GunicornSpec:
    """User-facing Gunicorn settings; any field left as None falls back to the preset."""

    preset: Optional[str] = None
    workers: Optional[int] = None
    threads: Optional[int] = None
    worker_class: Optional[str] = None
    timeout: Optional[int] = None
    keep_alive: Optional[int] = None
    max_requests: Optional[int] = None
    max_requests_jitter: Optional[int] = None
    limit_request_line: Optional[int] = None
    limit_request_field_size: Optional[int] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class ResolvedGunicorn:
    """Concrete Gunicorn parameters."""

    disabled: bool = False
    workers: int = 0
    threads: int = 0
    worker_class: str = ""
    timeout: int = 0
    keep_alive: int = 0
    max_requests: int = 0
    max_requests_jitter: int = 0
    limit_request_line: int = 0
    limit_request_field_size: int = 0
    log_level: str = ""

    def env_vars(self) -> dict[str, str]:
        """Environment variables to inject into the web server container, in order."""
        return {
            ENV_SERVER_WORKER_AMOUNT: str(self.workers),
            ENV_SERVER_THREADS_AMOUNT: str(self.threads),
            ENV_SERVER_WORKER_CLASS: self.worker_class,
            ENV_GUNICORN_TIMEOUT: str(self.timeout),
            ENV_GUNICORN_KEEPALIVE: str(self.keep_alive),
            ENV_WORKER_MAX_REQUESTS: str(self.max_requests),
            ENV_WORKER_MAX_REQUESTS_JITTER: str(self.max_requests_jitter),
            ENV_SERVER_LIMIT_REQUEST_LINE: str(self.limit_request_line),
            ENV_SERVER_LIMIT_REQUEST_FIELD_SIZE: str(self.limit_request_field_size),
            ENV_GUNICORN_LOGLEVEL: self.log_level,
        }


def _pick(value, default):
    return default if value is None else value


def resolve_gunicorn(spec: Optional[GunicornSpec]) -> ResolvedGunicorn:
    """Resolve a spec into concrete values; None yields the balanced defaults."""
    preset = Preset.BALANCED.value
    if spec is not None and spec.preset is not None:
        preset = spec.preset
    if preset == Preset.DISABLED:
        return ResolvedGunicorn(disabled=True)

    workers, threads = _PRESET_WORKERS_THREADS.get(preset, _DEFAULT_WORKERS_THREADS)
    s = spec or GunicornSpec()
    return ResolvedGunicorn(
        workers=_pick(s.workers, workers),
        threads=_pick(s.threads, threads),
        worker_class=_pick(s.worker_class, DEFAULT_WORKER_CLASS),
        timeout=_pick(s.timeout, 60),
        keep_alive=_pick(s.keep_alive, 2),
        max_requests=_pick(s.max_requests, 0),
        max_requests_jitter=_pick(s.max_requests_jitter, 0),
        limit_request_line=_pick(s.limit_request_line, 0),
        limit_request_field_size=_pick(s.limit_request_field_size, 0),
        log_level=_pick(s.log_level, "info"),
    )