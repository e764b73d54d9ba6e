"""Integration tests for the detect-then-copy flow with the bundled templates.

These tests run real detection (package.json, bundler config, local port
probing) and copy each bundled template into a temporary project, then
verify that the generated files are complete and well formed.

No external services (Docker, Node) are required.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from figma_docker_init.config import Config
from figma_docker_init.detector import detect_project_values
from figma_docker_init.scaffolder import copy_template
from figma_docker_init.scaffolder.validator import PLACEHOLDER_PATTERN

BUNDLED_TEMPLATES = ("basic", "ui-heavy")


@pytest.fixture
def figma_export(
    project_dir: Path,
    write_package_json: Callable[..., Path],
    write_config: Callable[[str, str], Path],
) -> Path:
    """A typical Figma-exported React + Vite + TypeScript project."""
    write_package_json(
        name="figma-export",
        dependencies={"react": "^18.2.0", "react-dom": "^18.2.0", "@mui/material": "^5.15.0"},
        devDependencies={"vite": "^5.0.0", "typescript": "^5.3.0", "@types/react": "^18.2.0"},
    )
    write_config(
        "vite.config.ts",
        """\
        import { defineConfig } from 'vite'
        import react from '@vitejs/plugin-react'

        export default defineConfig({
          plugins: [react()],
          build: {
            outDir: 'build'
          }
        })
        """,
    )
    return project_dir


def _assert_fully_rendered(project: Path, created: list[str]) -> None:
    for name in created:
        content = (project / name).read_text(encoding="utf-8")
        assert PLACEHOLDER_PATTERN.search(content) is None, f"unrendered placeholder in {name}"


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.integration
class TestScaffoldBundledTemplates:
    """Copy the bundled templates with real detection."""

    async def test_detection_on_figma_export(self, figma_export: Path):
        values: dict[str, Any] = await detect_project_values(figma_export)

        assert values["PROJECT_NAME"] == "figma-export"
        assert values["FRAMEWORK"] == "react-vite"
        assert values["TYPESCRIPT"] is True
        assert values["UI_LIBRARY"] == "Material-UI"
        assert values["BUILD_OUTPUT_DIR"] == "build"
        assert values["DEPENDENCY_COUNT"] == 6
        for key in ("DEV_PORT", "PROD_PORT", "NGINX_PORT"):
            assert isinstance(values[key], int)
            assert 1 <= values[key] <= 65535

    @pytest.mark.parametrize("template", BUNDLED_TEMPLATES)
    async def test_copy_bundled_template(self, template: str, figma_export: Path):
        result = await copy_template(template, figma_export, Config())

        for name in ("Dockerfile", "docker-compose.yml", "nginx.conf", ".dockerignore", "DOCKER.md"):
            assert name in result.created
        assert result.skipped == []
        _assert_fully_rendered(figma_export, result.created)

    @pytest.mark.parametrize("template", BUNDLED_TEMPLATES)
    async def test_compose_file_is_valid_yaml(self, template: str, figma_export: Path):
        result = await copy_template(template, figma_export)

        compose = yaml.safe_load((figma_export / "docker-compose.yml").read_text(encoding="utf-8"))
        assert isinstance(compose, dict)
        app = compose["services"]["app"]
        assert app["container_name"] == "figma-export"
        assert app["ports"] == [f"{result.values['PROD_PORT']}:{result.values['NGINX_PORT']}"]

    @pytest.mark.parametrize("template", BUNDLED_TEMPLATES)
    async def test_dockerfile_uses_detected_output_dir(self, template: str, figma_export: Path):
        await copy_template(template, figma_export)
        dockerfile = (figma_export / "Dockerfile").read_text(encoding="utf-8")
        assert "/app/build" in dockerfile

    async def test_second_run_is_idempotent(self, figma_export: Path):
        first = await copy_template("basic", figma_export)
        snapshot = {name: (figma_export / name).read_text() for name in first.created}

        second = await copy_template("basic", figma_export)
        assert second.created == []
        assert sorted(second.skipped) == sorted(first.created)
        for name, content in snapshot.items():
            assert (figma_export / name).read_text() == content

    async def test_bare_directory_uses_defaults(self, project_dir: Path):
        result = await copy_template("basic", project_dir)

        assert result.values["PROJECT_NAME"] == "my-app"
        assert result.values["FRAMEWORK"] == "vanilla"
        compose = yaml.safe_load((project_dir / "docker-compose.yml").read_text(encoding="utf-8"))
        assert compose["services"]["app"]["container_name"] == "my-app"
