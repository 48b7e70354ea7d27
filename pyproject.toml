[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "superset-operator"
version = "0.1.0"
description = "Resolve Superset component settings into Gunicorn, Celery, SQLAlchemy and Kubernetes workload specs"
requires-python = ">=3.10"
dependencies = []
keywords = ["superset", "kubernetes", "operator", "gunicorn", "celery", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["superset_operator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
