import pytest

from superset_operator.celery import CeleryWorkerProcessSpec, resolve_celery
from superset_operator.gunicorn import Preset


def test_nil_spec():
    c = resolve_celery(None)
    assert c.disabled is False
    assert c.concurrency == 4
    assert c.pool == "prefork"
    assert c.optimization == "fair"
    assert c.max_tasks_per_child == 0
    assert c.max_memory_per_child == 0
    assert c.prefetch_multiplier == 4
    assert c.soft_time_limit == 0
    assert c.time_limit == 0


@pytest.mark.parametrize(
    "preset,concurrency",
    [
        (Preset.CONSERVATIVE, 2),
        (Preset.BALANCED, 4),
        (Preset.PERFORMANCE, 8),
        (Preset.AGGRESSIVE, 16),
    ],
)
def test_presets(preset, concurrency):
    c = resolve_celery(CeleryWorkerProcessSpec(preset=preset.value))
    assert c.concurrency == concurrency
    assert c.pool == "prefork"


def test_disabled():
    c = resolve_celery(CeleryWorkerProcessSpec(preset=Preset.DISABLED))
    assert c.disabled is True


def test_field_overrides():
    c = resolve_celery(
        CeleryWorkerProcessSpec(preset=Preset.CONSERVATIVE, concurrency=12, pool="gevent")
    )
    assert c.concurrency == 12
    assert c.pool == "gevent"
    assert c.optimization == "fair"


def test_command():
    assert resolve_celery(None).command() == [
        "celery",
        "--app=superset.tasks.celery_app:app",
        "worker",
        "--pool=prefork",
        "-O",
        "fair",
        "-c",
        "4",
        "--prefetch-multiplier=4",
    ]


def test_command_with_optional_flags():
    c = resolve_celery(
        CeleryWorkerProcessSpec(
            max_tasks_per_child=100,
            max_memory_per_child=200000,
            soft_time_limit=300,
            time_limit=600,
        )
    )
    cmd = c.command()
    assert "--max-tasks-per-child=100" in cmd
    assert "--max-memory-per-child=200000" in cmd
    assert "--soft-time-limit=300" in cmd
    assert "--time-limit=600" in cmd


def test_command_omits_zero_prefetch():
    cmd = resolve_celery(CeleryWorkerProcessSpec(prefetch_multiplier=0)).command()
    assert not any(arg.startswith("--prefetch-multiplier") for arg in cmd)