"""Project metadata detection.

Builds the flat ``ProjectValues`` mapping that templates are rendered with,
from the target's ``package.json``, its bundler config and the local port
situation.  Detection is best effort: a missing or broken ``package.json``
only produces a warning and default values.  The one error that propagates
is a ``ValidationError`` for a project directory outside the working
directory.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

from ..config import Config, DetectionConfig
from ..errors import ValidationError
from ..utils import load_json, print_error, print_warning
from ..validation import validate_project_directory, validate_project_name
from .config_parser import detect_build_output_dir
from .ports import assign_dynamic_ports

ProjectValues = dict[str, Union[str, int, bool]]

REQUIRED_VARIABLES: tuple[str, ...] = (
    "PROJECT_NAME",
    "BUILD_OUTPUT_DIR",
    "FRAMEWORK",
    "TYPESCRIPT",
    "UI_LIBRARY",
    "DEPENDENCY_COUNT",
    "DEV_PORT",
    "PROD_PORT",
    "NGINX_PORT",
)

# (bundler name, marker packages, UI frameworks it is combined with),
# in priority order.  Next.js is checked before all of these.
FRAMEWORK_TABLE: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("vite", ("vite",), ("react", "vue", "svelte")),
    ("webpack", ("webpack", "webpack-cli"), ("react", "vue")),
    ("rollup", ("rollup",), ("react", "vue", "svelte")),
)
UI_FRAMEWORKS: tuple[str, ...] = ("react", "vue", "svelte")


# ---------------------------------------------------------------------------
# Dependency analysis (pure)
# ---------------------------------------------------------------------------


def collect_dependencies(package: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``dependencies`` and ``devDependencies``; dev entries win on collision."""
    deps: dict[str, Any] = {}
    for section in ("dependencies", "devDependencies"):
        entries = package.get(section)
        if isinstance(entries, Mapping):
            deps.update(entries)
    return deps


def detect_typescript(deps: Mapping[str, Any]) -> bool:
    """True if any dependency mentions ``typescript`` or is an ``@types/`` package."""
    return any("typescript" in name or name.startswith("@types/") for name in deps)


def detect_ui_library(
    deps: Mapping[str, Any], detection: DetectionConfig | None = None
) -> str:
    """Return the first UI library in priority order found in *deps*, else ``"none"``."""
    detection = detection or DetectionConfig()
    for label, markers in detection.ui_libraries:
        if any(marker in deps for marker in markers):
            return label
    return "none"


def detect_framework(deps: Mapping[str, Any]) -> str:
    """Resolve the framework name, e.g. ``"next.js"``, ``"react-vite"`` or ``"vanilla"``."""
    if "next" in deps:
        return "next.js"
    for bundler, markers, ui_frameworks in FRAMEWORK_TABLE:
        if not any(marker in deps for marker in markers):
            continue
        for ui in ui_frameworks:
            if ui in deps:
                return f"{ui}-{bundler}"
        return bundler
    for ui in UI_FRAMEWORKS:
        if ui in deps:
            return ui
    return "vanilla"


# ---------------------------------------------------------------------------
# package.json loading
# ---------------------------------------------------------------------------


async def _load_package_json(package_path: Path) -> dict[str, Any] | None:
    """Return the parsed ``package.json``, or ``None`` if absent or unreadable."""
    if not package_path.is_file():
        return None
    try:
        return await asyncio.to_thread(load_json, package_path)
    except (OSError, ValueError, RecursionError) as exc:
        kind = "read" if isinstance(exc, OSError) else "parse"
        print_warning(
            f"Warning: Could not {kind} package.json at {package_path}. "
            f"Error: {exc}. This may be due to invalid JSON syntax or permission "
            "issues. Using default project values."
        )
        return None


def _project_name(package: Mapping[str, Any] | None, detection: DetectionConfig) -> str:
    name = package.get("name") if package else None
    if not name:
        return detection.default_project_name
    try:
        return validate_project_name(name)
    except ValidationError as exc:
        print_warning(
            f"Warning: package.json name {name!r} is not usable ({exc}). "
            f"Using default project name {detection.default_project_name!r}."
        )
        return detection.default_project_name


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


async def detect_project_values(
    project_dir: str | Path = ".", config: Config | None = None
) -> ProjectValues:
    """Detect every value templates can reference for *project_dir*.

    Args:
        project_dir: Project root; must lie within the current working
            directory.
        config: Optional configuration (detection defaults and port set).

    Returns:
        A fresh mapping containing all of ``REQUIRED_VARIABLES``.

    Raises:
        ValidationError: If *project_dir* is invalid or outside the working
            directory.
    """
    config = config or Config()
    detection = config.detection

    try:
        root = validate_project_directory(str(project_dir))
    except ValidationError as exc:
        print_error(f"Invalid project directory: {exc}")
        raise

    package = await _load_package_json(root / "package.json")
    deps = collect_dependencies(package) if package else {}

    values: ProjectValues = {
        "PROJECT_NAME": _project_name(package, detection),
        "BUILD_OUTPUT_DIR": (
            await detect_build_output_dir(root, detection.config_extensions)
            or detection.default_build_output_dir
        ),
        "FRAMEWORK": detect_framework(deps),
        "TYPESCRIPT": detect_typescript(deps),
        "UI_LIBRARY": detect_ui_library(deps, detection),
        "DEPENDENCY_COUNT": len(deps),
    }
    values.update(await assign_dynamic_ports(config.ports))
    return values
