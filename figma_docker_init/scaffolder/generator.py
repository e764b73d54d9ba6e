"""Template copying orchestrator.

Takes a template name and a target project directory, detects the project
values, validates the template against them and writes every template file
that does not already exist in the target, with placeholders substituted.

Detection problems degrade to defaults; anything that goes wrong while
validating or writing files aborts the run with ``TemplateError``.  Files
written before the failure stay on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from rich.markup import escape

from ..config import Config
from ..detector.project import detect_project_values
from ..errors import TemplateError, ValidationError
from ..utils import (
    console,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    read_text,
    write_text,
)
from ..validation import validate_file_path, validate_project_directory, validate_template_name
from .templates import TemplateRenderer
from .validator import ValidationResult, check_build_compatibility, validate_template


class CopyResult(BaseModel):
    """Outcome of a successful template copy."""

    template: str
    target_dir: Path
    created: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    values: dict[str, Any] = Field(default_factory=dict)


class TemplateCopier:
    """Copies one template into one target directory.

    Holds the configuration and a ``TemplateRenderer`` bound to the
    configured templates root.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.renderer = TemplateRenderer(self.config.templates_dir)

    # -- Public API --------------------------------------------------------

    async def copy(self, template_name: str, target_dir: str | Path = ".") -> CopyResult:
        """Run the full copy pipeline.

        Raises:
            ValidationError: If the template name or target directory is
                invalid.
            TemplateError: If the template is missing, fails validation, or
                a file cannot be processed.
        """
        name = validate_template_name(template_name)
        target = validate_project_directory(str(target_dir))

        if not self.renderer.exists(name):
            available = ", ".join(self.renderer.list_templates()) or "none"
            print_error(f'Template "{name}" not found!')
            console.print(f"[yellow]Available templates: {escape(available)}[/yellow]")
            raise TemplateError(f'Template "{name}" not found')

        print_info(f'Setting up Docker configuration for "{name}" template...\n')

        values = await detect_project_values(target, self.config)
        print_summary_table(values, title="Detected Project")
        template_path = self.renderer.template_path(name)

        self._report(
            "Template validation",
            await asyncio.to_thread(validate_template, template_path, values),
        )
        self._report(
            "Build compatibility",
            check_build_compatibility(
                str(values["FRAMEWORK"]), str(values["BUILD_OUTPUT_DIR"])
            ),
        )

        result = CopyResult(template=name, target_dir=target, values=values)
        for filename in self._list_files(name, template_path):
            await self._copy_file(filename, template_path, target, values, result)

        _print_summary(result)
        return result

    # -- Steps -------------------------------------------------------------

    @staticmethod
    def _report(label: str, validation: ValidationResult) -> None:
        """Print a validation result and abort if it carries errors."""
        if validation.errors:
            console.print(f"[red]{label} errors:[/red]")
            for error in validation.errors:
                console.print(f"  [red]✗[/red] {escape(error)}")
            raise TemplateError(f"{label} failed", validation.errors)

        if validation.warnings:
            console.print(f"[yellow]{label} warnings:[/yellow]")
            for warning in validation.warnings:
                console.print(f"  [yellow]⚠[/yellow] {escape(warning)}")

    def _list_files(self, name: str, template_path: Path) -> list[str]:
        try:
            return self.renderer.list_files(name)
        except OSError as exc:
            message = (
                f"Failed to read template directory at {template_path}. Error: {exc}. "
                "This may be due to directory not found, permission issues, or invalid path."
            )
            print_error(f"Error: {message}")
            raise TemplateError(message) from exc

    async def _copy_file(
        self,
        filename: str,
        template_path: Path,
        target: Path,
        values: dict[str, Any],
        result: CopyResult,
    ) -> None:
        source = template_path / filename
        destination = target / filename

        try:
            validate_file_path(str(source), self.config.templates_dir)
            validate_file_path(str(destination), target)
        except ValidationError as exc:
            print_error(f"Error processing {filename}: {exc}")
            raise TemplateError(f"Error processing {filename}: {exc}") from exc

        if await asyncio.to_thread(destination.exists):
            console.print(f"  [yellow]Skipped[/yellow] {escape(filename)} (already exists)")
            result.skipped.append(filename)
            return

        try:
            content = await read_text(source)
        except (OSError, UnicodeDecodeError) as exc:
            message = (
                f'Failed to read template file "{filename}" from {source}. Error: {exc}. '
                "This may be due to file not found, permission issues, or corrupted file."
            )
            print_error(f"Error: {message}")
            raise TemplateError(message) from exc

        rendered = self.renderer.render(content, values)

        try:
            await write_text(destination, rendered)
        except OSError as exc:
            message = (
                f'Failed to write template file "{filename}" to {destination}. Error: {exc}. '
                "This may be due to insufficient permissions, disk space issues, or invalid file path."
            )
            print_error(f"Error: {message}")
            raise TemplateError(message) from exc

        console.print(f"  [green]Created[/green] {escape(filename)}")
        result.created.append(filename)


async def copy_template(
    template_name: str, target_dir: str | Path = ".", config: Config | None = None
) -> CopyResult:
    """Copy template *template_name* into *target_dir*.  See ``TemplateCopier.copy``."""
    return await TemplateCopier(config).copy(template_name, target_dir)


# ---------------------------------------------------------------------------
# Summary output
# ---------------------------------------------------------------------------


def _print_summary(result: CopyResult) -> None:
    values = result.values
    print_success("\nSetup Complete!")
    console.print(f"[bold]Files created:[/bold] {len(result.created)}")
    console.print(f"[bold]Files skipped:[/bold] {len(result.skipped)}")

    if result.created:
        console.print("\n[bold]Port Assignments:[/bold]")
        console.print(f"  [blue]Development server:[/blue] http://localhost:{values.get('DEV_PORT')}")
        console.print(f"  [blue]Production server:[/blue] http://localhost:{values.get('PROD_PORT')}")
        console.print(f"  [blue]Nginx proxy:[/blue] http://localhost:{values.get('NGINX_PORT')}")

        console.print("\n[bold]Next Steps:[/bold]")
        console.print("1. Review and customize the generated Docker configuration files")
        console.print("2. Update environment variables in .env.example and rename to .env")
        console.print("3. Build and run your Docker container:")
        console.print("   [blue]docker-compose up --build[/blue]")
        if (result.target_dir / "DOCKER.md").exists():
            console.print("4. Read DOCKER.md for detailed documentation and advanced usage")

    if result.skipped:
        console.print("\n[yellow]Note: Some files were skipped because they already exist.[/yellow]")
        console.print("[yellow]Remove existing files if you want to regenerate them.[/yellow]")
