"""Command-line interface for figma-docker-init.

Usage::

    figma-docker-init basic
    figma-docker-init ui-heavy --target ./apps/web
    figma-docker-init --list
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from types import TracebackType

from rich.markup import escape

from . import __version__
from .config import Config
from .errors import DockerInitError, TemplateError
from .scaffolder import TemplateRenderer, copy_template
from .utils import console, print_error, print_warning

PROG = "figma-docker-init"


# ---------------------------------------------------------------------------
# Informational commands
# ---------------------------------------------------------------------------


def show_help() -> None:
    """Print usage, bundled templates, options and examples."""
    console.print(
        f"""
[bold blue]Figma Docker Init[/bold blue]
Quick-start Docker setup for Figma-exported React/Vite/TypeScript projects

[bold]Usage:[/bold]
  {PROG} \\[template] \\[options]

[bold]Templates:[/bold]
  basic      Basic Docker setup with minimal configuration
  ui-heavy   Optimized for UI-heavy applications with advanced caching

[bold]Options:[/bold]
  -h, --help     Show this help message
  -v, --version  Show version number
  --list         List available templates
  --target DIR   Project directory to set up (default: current directory)

[bold]Examples:[/bold]
  {PROG} basic
  {PROG} ui-heavy
  {PROG} --list
"""
    )


def show_version() -> None:
    """Print the installed version."""
    console.print(f"[blue]{PROG} v{__version__}[/blue]")


def list_templates(config: Config | None = None) -> None:
    """Print every template directory under the templates root."""
    config = config or Config()
    console.print("[bold]Available Templates:[/bold]\n")

    if not config.templates_dir.is_dir():
        print_error(
            f"Error: Templates directory not found at {config.templates_dir}. "
            "Please ensure the templates directory exists and is accessible."
        )
        return

    templates = TemplateRenderer(config.templates_dir).list_templates()
    if not templates:
        print_warning("No templates available")
        return

    for name in templates:
        console.print(f"  [blue]{escape(name)}[/blue]")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _handle_uncaught(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    """Process-wide backstop: report the error and exit non-zero."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    print_error(f"Error: {exc}")
    sys.exit(1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, add_help=False)
    parser.add_argument("template", nargs="?", help="Template name (see --list)")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("--list", action="store_true")
    parser.add_argument("--target", default=".", help="Project directory (default: .)")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``figma-docker-init``."""
    sys.excepthook = _handle_uncaught

    raw_args = sys.argv[1:] if argv is None else argv
    args = _build_parser().parse_args(raw_args)

    if not raw_args or args.help:
        show_help()
        return
    if args.version:
        show_version()
        return

    try:
        config = Config.from_env()
    except DockerInitError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)

    if args.list:
        list_templates(config)
        return

    if not args.template:
        print_error("Please specify a template name!")
        show_help()
        sys.exit(1)

    if not (Path(args.target) / "package.json").exists():
        print_warning("Warning: No package.json found in current directory.")
        print_warning("Make sure you're in the root of your project.\n")

    try:
        asyncio.run(copy_template(args.template, args.target, config))
    except TemplateError:
        # Details were already printed by the copier.
        sys.exit(1)
    except Exception as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
