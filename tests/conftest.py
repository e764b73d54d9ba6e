"""Shared pytest fixtures for the figma-docker-init test suite.

Provides reusable fixtures for:
- A temporary working directory holding a target project
- ``package.json`` and bundler config writers
- A temporary templates root with a small template
- Deterministic port assignments
- Wide, uncoloured console output for substring assertions
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, patch

import pytest

from figma_docker_init.config import Config
from figma_docker_init.utils import console

FIXED_PORTS: dict[str, int] = {"DEV_PORT": 3000, "PROD_PORT": 8080, "NGINX_PORT": 80}


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop Rich from wrapping long messages so assertions can match them."""
    monkeypatch.setattr(console, "width", 1000)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A temporary directory that is also the current working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def project_dir(work_dir: Path) -> Path:
    """Empty target project directory inside the working directory."""
    path = work_dir / "my-app"
    path.mkdir()
    return path


@pytest.fixture
def write_package_json(project_dir: Path) -> Callable[..., Path]:
    """Factory writing ``package.json`` into ``project_dir``.

    Usage::

        write_package_json(name="demo", dependencies={"react": "^18"})
    """

    def _write(**fields: Any) -> Path:
        path = project_dir / "package.json"
        path.write_text(json.dumps(fields, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_config(project_dir: Path) -> Callable[[str, str], Path]:
    """Factory writing a bundler config file (dedented) into ``project_dir``."""

    def _write(filename: str, content: str) -> Path:
        path = project_dir / filename
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def templates_dir(work_dir: Path) -> Path:
    """Templates root holding one ``docker`` template with two files."""
    root = work_dir / "templates"
    template = root / "docker"
    template.mkdir(parents=True)
    (template / "Dockerfile").write_text(
        "FROM node:20-alpine\nEXPOSE {{DEV_PORT}}\n", encoding="utf-8"
    )
    (template / "docker-compose.yml").write_text(
        textwrap.dedent(
            """\
            services:
              app:
                container_name: {{PROJECT_NAME}}
                ports:
                  - "{{PROD_PORT}}:{{NGINX_PORT}}"
            """
        ),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def config(templates_dir: Path) -> Config:
    """A ``Config`` pointing at the temporary templates root."""
    return Config(templates_dir=templates_dir)


# ---------------------------------------------------------------------------
# Ports
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_ports():
    """Patch port allocation in the project inspector to return ``FIXED_PORTS``."""
    with patch(
        "figma_docker_init.detector.project.assign_dynamic_ports",
        new=AsyncMock(return_value=dict(FIXED_PORTS)),
    ) as mock:
        yield mock


@pytest.fixture
def full_values() -> dict[str, Any]:
    """A complete set of project values."""
    return {
        "PROJECT_NAME": "demo",
        "BUILD_OUTPUT_DIR": "dist",
        "FRAMEWORK": "react-vite",
        "TYPESCRIPT": True,
        "UI_LIBRARY": "none",
        "DEPENDENCY_COUNT": 2,
        **FIXED_PORTS,
    }
