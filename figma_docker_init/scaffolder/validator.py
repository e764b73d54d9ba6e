"""Template validation and build compatibility checks.

Produces ``ValidationResult`` objects: ``errors`` abort a template run,
``warnings`` are printed and otherwise ignored.
"""

from __future__ import annotations

import re
import stat
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, computed_field

from ..detector.project import REQUIRED_VARIABLES
from ..errors import ValidationError
from ..validation import validate_file_path

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")
UNSAFE_MARKERS: tuple[str, ...] = ("<script", "javascript:")


class ValidationResult(BaseModel):
    """Errors and warnings collected by a validation pass."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def ok(self) -> bool:
        """True when no errors were recorded."""
        return not self.errors


def _scan_file(name: str, content: str, values: Mapping[str, Any], result: ValidationResult) -> None:
    for match in PLACEHOLDER_PATTERN.finditer(content):
        variable = match.group(1)
        if variable not in values:
            result.warnings.append(
                f'Undefined template variable "{variable}" found in file "{name}". '
                "This may cause incomplete template processing."
            )

    opening = content.count("{{")
    closing = content.count("}}")
    if opening != closing:
        result.errors.append(
            f'Template syntax error in "{name}": Unmatched template braces '
            f"({{{{ and }}}}). Found {opening} opening braces and {closing} "
            "closing braces."
        )

    if any(marker in content for marker in UNSAFE_MARKERS):
        result.warnings.append(
            f'Potentially unsafe content detected in "{name}". '
            "Please review template content for security."
        )


def validate_template(template_dir: str | Path, values: Mapping[str, Any]) -> ValidationResult:
    """Validate every file directly inside *template_dir* against *values*.

    Checks that all required variables are present, that ``{{`` and ``}}``
    are balanced in each file, and warns about placeholders with no value
    and about script-like content.  Subdirectories are ignored.

    Raises:
        OSError: If the directory cannot be listed or an entry cannot be
            stat'd.  Problems reading an individual file are reported as
            errors in the result instead.
    """
    template_path = Path(template_dir)
    result = ValidationResult()

    missing = [name for name in REQUIRED_VARIABLES if name not in values]
    if missing:
        result.errors.append(f"Missing required variables: {', '.join(missing)}")

    for entry in sorted(template_path.iterdir()):
        if not stat.S_ISREG(entry.stat().st_mode):
            continue
        try:
            validate_file_path(entry.name, template_path)
            content = entry.read_text(encoding="utf-8")
        except (OSError, ValueError, ValidationError) as exc:
            result.errors.append(
                f'Failed to validate template file "{entry.name}" at {entry}. '
                f"Error: {exc}. This may be due to file read permission issues, "
                "invalid file path, or corrupted file content."
            )
            continue
        _scan_file(entry.name, content, values, result)

    return result


def check_build_compatibility(framework: str, build_output_dir: str | None) -> ValidationResult:
    """Advisory checks on the framework/output-directory pair.

    Only ever produces warnings.
    """
    result = ValidationResult()
    if "vite" in framework and not build_output_dir:
        result.warnings.append(
            "Vite framework detected but no build output directory specified"
        )
    if "next.js" in framework and build_output_dir != "out":
        result.warnings.append(
            'Next.js typically uses "out" as build directory, '
            f'but detected "{build_output_dir or "none"}"'
        )
    return result
