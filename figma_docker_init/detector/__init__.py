"""Project detection -- bundler config scraping, port allocation and metadata.

Quick usage::

    from figma_docker_init.detector import detect_project_values

    values = await detect_project_values("./my-app")
    values["FRAMEWORK"]  # e.g. "react-vite"
"""

from figma_docker_init.detector.config_parser import (
    detect_build_output_dir,
    parse_config,
    parse_rollup_config,
    parse_vite_config,
    parse_webpack_config,
)
from figma_docker_init.detector.ports import (
    assign_dynamic_ports,
    check_port_availability,
    find_available_port,
)
from figma_docker_init.detector.project import (
    REQUIRED_VARIABLES,
    ProjectValues,
    detect_project_values,
)

__all__ = [
    "REQUIRED_VARIABLES",
    "ProjectValues",
    "assign_dynamic_ports",
    "check_port_availability",
    "detect_build_output_dir",
    "detect_project_values",
    "find_available_port",
    "parse_config",
    "parse_rollup_config",
    "parse_vite_config",
    "parse_webpack_config",
]
