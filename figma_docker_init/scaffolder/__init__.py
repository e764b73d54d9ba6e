"""figma-docker-init scaffolder -- validates, renders and copies templates.

This module takes a template name and a target project directory, detects
the project values and writes the rendered template files into the target.

Quick usage::

    from figma_docker_init.scaffolder import copy_template

    result = await copy_template("basic", "./my-app")
    result.created  # ["Dockerfile", "docker-compose.yml", ...]
"""

from figma_docker_init.scaffolder.generator import CopyResult, TemplateCopier, copy_template
from figma_docker_init.scaffolder.templates import TemplateRenderer, replace_template_variables
from figma_docker_init.scaffolder.validator import (
    ValidationResult,
    check_build_compatibility,
    validate_template,
)

__all__ = [
    "CopyResult",
    "TemplateCopier",
    "TemplateRenderer",
    "ValidationResult",
    "check_build_compatibility",
    "copy_template",
    "replace_template_variables",
    "validate_template",
]
