"""Policies and helpers for the Superset initialization pod."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Mapping, Optional


class RetentionPolicy(str, Enum):
    """What to do with an init pod once it has finished."""

    DELETE = "Delete"
    RETAIN = "Retain"
    RETAIN_ON_FAILURE = "RetainOnFailure"


DEFAULT_INIT_TIMEOUT = timedelta(seconds=300)
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETENTION_POLICY = RetentionPolicy.DELETE
INIT_REQUEUE_INTERVAL = timedelta(seconds=10)

INIT_STATE_PENDING = "Pending"
INIT_STATE_RUNNING = "Running"
INIT_STATE_COMPLETE = "Complete"
INIT_STATE_FAILED = "Failed"

PHASE_INITIALIZING = "Initializing"
PHASE_RUNNING = "Running"
PHASE_DEGRADED = "Degraded"
PHASE_SUSPENDED = "Suspended"

POD_FAILED = "Failed"

MAX_TERMINATION_MESSAGE_LEN = 256

_BACKOFF_BASE_SECONDS = 10.0
_BACKOFF_CAP_SECONDS = 300.0


@dataclass
class InitSpec:
    """Initialization settings on the parent Superset resource."""

    disabled: Optional[bool] = None


def calculate_backoff(attempt: int) -> timedelta:
    """Exponential backoff: 10s, 20s, 40s, 80s, ... capped at 300s."""
    exponent = attempt - 1
    if exponent >= 10:
        seconds = _BACKOFF_CAP_SECONDS
    else:
        seconds = min(_BACKOFF_BASE_SECONDS * 2.0**exponent, _BACKOFF_CAP_SECONDS)
    return timedelta(seconds=int(seconds))


def pod_failure_message(pod: Mapping[str, Any]) -> str:
    """Describe why a pod failed, from the first terminated container status."""
    statuses = (pod.get("status") or {}).get("containerStatuses") or []
    for status in statuses:
        terminated = (status.get("state") or {}).get("terminated")
        if terminated is None:
            continue
        msg = f"Exit code {terminated.get('exitCode', 0)}"
        reason = terminated.get("reason") or ""
        if reason:
            msg += ": " + reason
        detail = terminated.get("message") or ""
        if detail:
            if len(detail) > MAX_TERMINATION_MESSAGE_LEN:
                detail = detail[:MAX_TERMINATION_MESSAGE_LEN] + "..."
            msg += ": " + detail
        return msg
    return "Pod failed"


def should_delete_pod(policy: str, phase: str) -> bool:
    """Whether a finished init pod should be deleted under the given retention policy."""
    if policy == RetentionPolicy.RETAIN:
        return False
    if policy == RetentionPolicy.RETAIN_ON_FAILURE:
        return phase != POD_FAILED
    return True


def is_init_disabled(init_spec: Optional[InitSpec]) -> bool:
    """Whether initialization is explicitly disabled."""
    return init_spec is not None and bool(init_spec.disabled)