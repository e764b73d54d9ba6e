"""Bundler config scraping.

Reads ``vite.config``, ``rollup.config`` and ``webpack.config`` files as plain
text and pulls the build output directory out with a regular expression.
The configs are never executed or parsed as JavaScript: anything the
patterns do not recognise (computed values, nested objects before the
output key, unusual quoting) is simply reported as "not found".
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from ..config import DetectionConfig
from ..utils import read_text

# Pattern per bundler.  Each has exactly one capture group.
VITE_OUTDIR_PATTERN = re.compile(r"build\s*:\s*\{[^}]*outDir\s*:\s*['\"]([^'\"]+)['\"]")
ROLLUP_OUTDIR_PATTERN = re.compile(r"output\s*:\s*\{[^}]*dir\s*:\s*['\"]([^'\"]+)['\"]")
WEBPACK_OUTDIR_PATTERN = re.compile(
    r"output\s*:\s*\{[^}]*path\s*:\s*path\.resolve\([^,]+,\s*['\"]([^'\"]+)['\"]"
)


async def parse_config(
    config_path: str | Path,
    pattern: str | re.Pattern[str],
    extensions: Sequence[str] | None = None,
) -> str | None:
    """Extract the first capture group of *pattern* from a config file.

    If *config_path* already ends in one of *extensions* only that file is
    read.  Otherwise each extension is appended in order and the first file
    that can be read is used, whether or not the pattern matches it.

    Returns:
        The captured value, or ``None`` when no file could be read or the
        pattern did not match.
    """
    if extensions is None:
        extensions = DetectionConfig().config_extensions
    path_str = str(config_path)

    if any(path_str.endswith(f".{ext}") for ext in extensions):
        candidates = [path_str]
    else:
        candidates = [f"{path_str}.{ext}" for ext in extensions]

    for candidate in candidates:
        try:
            content = await read_text(candidate, errors="replace")
        except OSError:
            continue
        match = re.search(pattern, content)
        return match.group(1) if match else None

    return None


async def parse_vite_config(
    project_dir: str | Path, extensions: Sequence[str] | None = None
) -> str | None:
    """Return ``build.outDir`` from ``vite.config.{js,ts}``."""
    return await parse_config(
        Path(project_dir) / "vite.config", VITE_OUTDIR_PATTERN, extensions
    )


async def parse_rollup_config(
    project_dir: str | Path, extensions: Sequence[str] | None = None
) -> str | None:
    """Return ``output.dir`` from ``rollup.config.{js,ts}``."""
    return await parse_config(
        Path(project_dir) / "rollup.config", ROLLUP_OUTDIR_PATTERN, extensions
    )


async def parse_webpack_config(
    project_dir: str | Path, extensions: Sequence[str] | None = None
) -> str | None:
    """Return the directory passed to ``path.resolve`` for ``output.path`` in ``webpack.config``."""
    return await parse_config(
        Path(project_dir) / "webpack.config", WEBPACK_OUTDIR_PATTERN, extensions
    )


async def detect_build_output_dir(
    project_dir: str | Path, extensions: Sequence[str] | None = None
) -> str | None:
    """Detect the build output directory, trying Vite, then Rollup, then Webpack.

    The first bundler that yields a value wins; ``None`` if none do.
    """
    for parser in (parse_vite_config, parse_rollup_config, parse_webpack_config):
        output_dir = await parser(project_dir, extensions)
        if output_dir:
            return output_dir
    return None
