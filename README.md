# superset-operator

Building blocks for running Apache Superset on Kubernetes. The package turns
high-level component settings (a preset plus optional overrides) into
concrete values: Gunicorn environment variables, Celery worker command
lines, SQLAlchemy engine pool options, and Deployment and Service specs
held in plain dataclasses.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Presets

Gunicorn, Celery and SQLAlchemy settings share one preset scale,
`superset_operator.gunicorn.Preset`: `disabled`, `conservative`, `balanced`
(the default), `performance` and `aggressive`. Any field set explicitly on a
spec takes precedence over the preset's default.

## Gunicorn

```python
from superset_operator.gunicorn import GunicornSpec, resolve_gunicorn

g = resolve_gunicorn(GunicornSpec(preset="performance", timeout=120))
g.workers, g.threads      # (4, 8)
g.env_vars()              # {"SERVER_WORKER_AMOUNT": "4", "SERVER_THREADS_AMOUNT": "8", ...}
```

`resolve_gunicorn(None)` gives the balanced defaults: 2 workers, 8 threads,
the `gthread` worker class, a 60 s timeout, a keep-alive of 2 and `info`
logging. A `disabled` preset gives a `ResolvedGunicorn` with
`disabled=True`. `env_vars()` returns the ten environment variables, in a
fixed order, as a dict of strings.

## Celery

```python
from superset_operator.celery import CeleryWorkerProcessSpec, resolve_celery

c = resolve_celery(None)
c.command()
# ['celery', '--app=superset.tasks.celery_app:app', 'worker',
#  '--pool=prefork', '-O', 'fair', '-c', '4', '--prefetch-multiplier=4']
```

Concurrency follows the preset (2, 4, 8 or 16). Optional flags such as
`--max-tasks-per-child` or `--time-limit` appear in the command only when
their value is greater than zero.

## SQLAlchemy engine options

```python
from superset_operator.engine_options import (
    ComponentType, SQLAlchemyEngineOptionsSpec, compute_engine_options,
)

opts = compute_engine_options(
    ComponentType.WEB_SERVER,
    SQLAlchemyEngineOptionsSpec(preset="aggressive"),
    None,
    4,
    8,
)
opts.pool_size     # 32
opts.max_overflow  # -1
```

The per-component spec, when given, replaces the top-level one. A
`disabled` preset returns `None`; a `conservative` preset gives
`use_null_pool=True`. Celery beat and init always use a null pool.

## Workloads

- `superset_operator.deployment.build_deployment_spec` builds a
  `DeploymentSpec` from a `FlatComponentSpec` and a `DeploymentConfig`.
  The config's default command, args and ports apply when the container
  template leaves them empty; `force_replicas` wins over everything, and
  with autoscaling set the replica count is left to the autoscaler
  (`None`). Selector labels always win over user pod labels.
- `superset_operator.services.build_service_spec` builds the matching
  `ServiceSpec`; `resolve_container_port` picks its target port.
  `preserve_service_allocated_fields` returns a copy of the desired spec
  carrying the cluster-assigned addresses of the existing one (cleared for
  `ExternalName` services). `build_checksum_annotations` and
  `names_to_delete` help with rollouts and pruning.
- `superset_operator.helpers` merges label and annotation maps, the second
  map winning on shared keys.
- `superset_operator.initpod` holds the init-task helpers: exponential
  backoff (`calculate_backoff`), failure messages from terminated
  containers (`pod_failure_message`), retention decisions
  (`should_delete_pod`) and `is_init_disabled`.

## What this package does not do

It does not talk to a Kubernetes cluster: there is no controller, no
reconcile loop, no client and no command to run. It also does not render
`superset_config.py`; the engine options it computes are values only. It
builds specs in memory and leaves applying them to the caller.