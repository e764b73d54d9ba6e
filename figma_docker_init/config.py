"""figma-docker-init configuration.

Centralised, typed configuration for project detection and template
copying.  All settings use frozen Pydantic v2 models so they are validated at
construction time and cannot be mutated once handed to a component.  Every
component accepts an optional ``Config`` and falls back to the defaults
below, which keeps tests free to substitute e.g. the default port set.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError

# Bundled templates live next to the package modules.
_DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

_ENV_PREFIX = "FIGMA_DOCKER_INIT_"


class PortConfig(BaseModel):
    """Default port per service and the probing budget used on conflict."""

    model_config = ConfigDict(frozen=True)

    dev: int = Field(default=3000, ge=1, le=65535)
    prod: int = Field(default=8080, ge=1, le=65535)
    nginx: int = Field(default=80, ge=1, le=65535)
    max_attempts: int = Field(
        default=100, ge=1, description="Ports probed before giving up on a service"
    )

    def as_dict(self) -> dict[str, int]:
        """Return the defaults keyed by template variable name."""
        return {
            "DEV_PORT": self.dev,
            "PROD_PORT": self.prod,
            "NGINX_PORT": self.nginx,
        }


class DetectionConfig(BaseModel):
    """Knobs for the project inspector and bundler config scraping."""

    model_config = ConfigDict(frozen=True)

    config_extensions: tuple[str, ...] = Field(
        default=("js", "ts"),
        description="Bundler config extensions, in preference order",
    )
    default_build_output_dir: str = Field(default="dist")
    default_project_name: str = Field(default="my-app")

    # Label -> marker packages.  Order is the detection priority.
    ui_libraries: tuple[tuple[str, tuple[str, ...]], ...] = Field(
        default=(
            ("Material-UI", ("@mui/material", "@mui/core")),
            ("Ant Design", ("antd", "@ant-design/icons")),
            ("Chakra UI", ("@chakra-ui/react",)),
            ("Mantine", ("@mantine/core",)),
            ("Bootstrap", ("react-bootstrap", "bootstrap")),
            ("Tailwind CSS", ("tailwindcss",)),
        )
    )


class Config(BaseModel):
    """Global figma-docker-init configuration.

    Instances are typically created once by the CLI entry point and then
    passed through the rest of the system.
    """

    model_config = ConfigDict(frozen=True)

    templates_dir: Path = Field(default=_DEFAULT_TEMPLATES_DIR)
    ports: PortConfig = Field(default_factory=PortConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)

    # ------------------------------------------------------------------
    # Loading helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from JSON.

        Raises:
            ConfigError: If the file is missing, unreadable, not JSON, or
                fails validation.
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Could not read config file {path}: {exc}") from exc
        try:
            return cls.model_validate_json(raw)
        except PydanticValidationError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FIGMA_DOCKER_INIT_TEMPLATES_DIR, FIGMA_DOCKER_INIT_DEV_PORT,
            FIGMA_DOCKER_INIT_PROD_PORT, FIGMA_DOCKER_INIT_NGINX_PORT,
            FIGMA_DOCKER_INIT_MAX_PORT_ATTEMPTS.

        Raises:
            ConfigError: If a variable holds a non-integer or out-of-range
                value.
        """
        port_kwargs: dict[str, Any] = {}
        for field, suffix in (
            ("dev", "DEV_PORT"),
            ("prod", "PROD_PORT"),
            ("nginx", "NGINX_PORT"),
            ("max_attempts", "MAX_PORT_ATTEMPTS"),
        ):
            raw = os.environ.get(_ENV_PREFIX + suffix)
            if not raw:
                continue
            try:
                port_kwargs[field] = int(raw)
            except ValueError as exc:
                raise ConfigError(
                    f"{_ENV_PREFIX}{suffix} must be an integer, got {raw!r}"
                ) from exc

        kwargs: dict[str, Any] = {}
        templates_dir = os.environ.get(_ENV_PREFIX + "TEMPLATES_DIR")
        if templates_dir:
            kwargs["templates_dir"] = Path(templates_dir)

        try:
            return cls(ports=PortConfig(**port_kwargs), **kwargs)
        except PydanticValidationError as exc:
            raise ConfigError(f"Invalid environment configuration: {exc}") from exc

