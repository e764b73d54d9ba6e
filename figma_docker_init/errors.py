"""Exception hierarchy for figma-docker-init.

Every error raised on purpose by the package derives from
``DockerInitError``.  Each subclass exposes a ``kind`` attribute (the class
name) so catch sites and the CLI can tell them apart without ``isinstance``
chains.
"""

from __future__ import annotations


class DockerInitError(Exception):
    """Base class for all figma-docker-init failures."""

    kind: str = "DockerInitError"

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls.kind = cls.__name__


class ValidationError(DockerInitError):
    """Raised when caller input is malformed or unsafe.

    Covers template names, project directories, ports, project names and
    file paths escaping their sandbox directory.
    """


class ConfigError(DockerInitError):
    """Raised when configuration cannot be loaded or is invalid."""


class TemplateError(DockerInitError):
    """Raised when a template run must abort.

    Carries every collected message in ``errors`` so the CLI can print them
    all before exiting.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        self.errors = list(errors) if errors else [message]
        super().__init__(message)
