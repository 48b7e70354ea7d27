"""Resolve Superset component settings into Gunicorn, Celery, SQLAlchemy and workload specs."""

__version__ = "0.1.0"

__all__ = [
    "celery",
    "deployment",
    "engine_options",
    "gunicorn",
    "helpers",
    "initpod",
    "services",
]