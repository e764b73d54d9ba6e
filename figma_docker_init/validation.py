"""Input sanitisation and validation.

Every external string (template names, directories, ports, project names
and template variable values) passes through one of these functions before
it reaches the filesystem or the network.  Each function either returns a
cleaned value or raises ``ValidationError``; none of them perform I/O.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from .errors import ValidationError
from .utils import is_within

_CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")
_TEMPLATE_NAME = re.compile(r"^[A-Za-z0-9_-]+$")
_PROJECT_NAME = re.compile(r"^[A-Za-z0-9._-]+$")


def sanitize_string(value: Any, max_length: int = 255) -> str:
    """Strip control characters and surrounding whitespace from *value*.

    Raises:
        ValidationError: If *value* is not a string or the cleaned result
            is longer than *max_length*.
    """
    if not isinstance(value, str):
        raise ValidationError("Input must be a string")
    sanitized = _CONTROL_CHARS.sub("", value).strip()
    if len(sanitized) > max_length:
        raise ValidationError(
            f"Input exceeds maximum length of {max_length} characters"
        )
    return sanitized


def validate_template_name(name: Any) -> str:
    """Validate a template name.

    Only letters, digits, hyphens and underscores are accepted, which rules
    out any path separator or ``..`` component.
    """
    sanitized = sanitize_string(name, 50)
    if not _TEMPLATE_NAME.match(sanitized):
        raise ValidationError(
            "Template name contains invalid characters. Only alphanumeric "
            "characters, hyphens, and underscores are allowed."
        )
    return sanitized


def validate_project_directory(directory: Any) -> Path:
    """Resolve *directory* and require it to sit inside the working directory."""
    sanitized = sanitize_string(directory, 4096)
    resolved = Path(sanitized).resolve()
    if not is_within(resolved, Path.cwd()):
        raise ValidationError(
            "Project directory must be within the current working directory"
        )
    return resolved


def validate_port(port: Any) -> int:
    """Coerce *port* to an integer in the range 1-65535."""
    if isinstance(port, bool):
        raise ValidationError("Port must be a valid number between 1 and 65535")
    try:
        number = int(port.strip(), 10) if isinstance(port, str) else int(port)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(
            "Port must be a valid number between 1 and 65535"
        ) from exc
    if number < 1 or number > 65535:
        raise ValidationError("Port must be a valid number between 1 and 65535")
    return number


def validate_project_name(name: Any) -> str:
    """Validate an npm-style project name (letters, digits, ``.``, ``_``, ``-``)."""
    sanitized = sanitize_string(name, 100)
    if not _PROJECT_NAME.match(sanitized):
        raise ValidationError("Project name contains invalid characters")
    return sanitized


def sanitize_template_variable(value: Any) -> str | int | float | bool:
    """Make a value safe to substitute into a template.

    Strings lose any ``<`` and ``>`` characters.  Booleans and numbers pass
    through unchanged.  Anything else is converted to its string form and
    sanitised with a 1000 character limit.
    """
    if isinstance(value, str):
        return value.replace("<", "").replace(">", "").strip()
    if isinstance(value, (bool, int, float)):
        return value
    return sanitize_string(str(value), 1000)


def validate_file_path(file_path: Any, base_dir: str | Path) -> Path:
    """Resolve *file_path* against *base_dir* and require it to stay inside."""
    sanitized = sanitize_string(file_path, 4096)
    resolved = (Path(base_dir) / sanitized).resolve()
    if not is_within(resolved, base_dir):
        raise ValidationError("File path is outside allowed directory")
    return resolved
