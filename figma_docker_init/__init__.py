"""figma-docker-init -- quick-start Docker setup for frontend projects.

Detects a project's framework, bundler output directory and free local
ports, then copies a Docker template into it with the detected values
substituted for its ``{{NAME}}`` placeholders.
"""

__version__ = "1.0.0"
