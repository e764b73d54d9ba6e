"""Placeholder substitution and template discovery.

Templates are flat directories of files containing ``{{NAME}}`` placeholders.
There is no expression language: each placeholder is replaced by the
sanitised value of ``NAME`` or, when no value exists, left exactly as it is.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..config import Config
from ..errors import ValidationError
from ..utils import print_warning
from ..validation import sanitize_template_variable
from .validator import PLACEHOLDER_PATTERN


def _format_value(value: Any) -> str:
    """Render a sanitised value the way the generated config files expect it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def replace_template_variables(content: str, values: Mapping[str, Any]) -> str:
    """Substitute every ``{{NAME}}`` in *content* that has a value in *values*.

    All occurrences of one name are replaced together.  Unknown names, and
    names whose value fails sanitisation, keep their original placeholder.
    """
    result = content
    seen: set[str] = set()

    for match in PLACEHOLDER_PATTERN.finditer(content):
        name = match.group(1)
        if name in seen:
            continue
        seen.add(name)

        if values.get(name) is None:
            continue
        try:
            replacement = _format_value(sanitize_template_variable(values[name]))
        except ValidationError as exc:
            print_warning(
                f'Warning: Failed to sanitize template variable "{name}". '
                f"Error: {exc}. Keeping original placeholder."
            )
            continue

        token = re.compile(r"\{\{" + re.escape(name) + r"\}\}")
        result = token.sub(lambda _m, text=replacement: text, result)

    return result


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Locates templates under a templates root and renders their files.

    Each immediate subdirectory of the root is one template; each regular
    file directly inside it is one output file.
    """

    def __init__(self, templates_dir: str | Path | None = None) -> None:
        if templates_dir is None:
            templates_dir = Config().templates_dir
        self.templates_dir = Path(templates_dir)

    def list_templates(self) -> list[str]:
        """Return the sorted names of all templates; empty if the root is missing."""
        if not self.templates_dir.is_dir():
            return []
        return sorted(p.name for p in self.templates_dir.iterdir() if p.is_dir())

    def template_path(self, name: str) -> Path:
        """Return the directory of template *name* (which may not exist)."""
        return self.templates_dir / name

    def exists(self, name: str) -> bool:
        """True if template *name* is a directory under the templates root."""
        return self.template_path(name).is_dir()

    def list_files(self, name: str) -> list[str]:
        """Return the names of the regular files directly inside template *name*.

        Raises:
            OSError: If the template directory cannot be listed.
        """
        return sorted(p.name for p in self.template_path(name).iterdir() if p.is_file())

    def render(self, content: str, values: Mapping[str, Any]) -> str:
        """Render template *content* with *values*."""
        return replace_template_variables(content, values)
