"""Local port allocation.

Ports are probed by binding a transient TCP listener on ``127.0.0.1`` and
closing it straight away.  The result is a hint, not a reservation: another
process may grab the port between the probe and the moment the generated
Docker setup actually uses it.
"""

from __future__ import annotations

import asyncio
import socket

from ..config import PortConfig
from ..errors import ValidationError
from ..utils import print_error, print_warning
from ..validation import validate_port

PROBE_HOST = "127.0.0.1"


def _probe(port: int) -> str | None:
    """Bind and release *port*; return the bind error message, or ``None`` if free."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((PROBE_HOST, port))
        sock.listen(1)
        return None
    except OSError as exc:
        return str(exc)
    finally:
        sock.close()


async def check_port_availability(port: int | str) -> bool:
    """Check whether a TCP port can be bound on the loopback interface.

    Invalid port values are reported and yield ``False``; this coroutine
    never raises for a bad port.
    """
    try:
        number = validate_port(port)
    except ValidationError as exc:
        print_error(f"Invalid port for availability check: {exc}")
        return False

    error = await asyncio.to_thread(_probe, number)
    if error is not None:
        print_warning(f"Port {number} availability check failed: {error}")
        return False
    return True


async def find_available_port(start_port: int, max_attempts: int = 100) -> int:
    """Probe ``start_port``, ``start_port + 1``, ... and return the first free port.

    Raises:
        RuntimeError: If none of the *max_attempts* ports is free.
    """
    for offset in range(max_attempts):
        port = start_port + offset
        if await check_port_availability(port):
            return port
    raise RuntimeError(
        f"Could not find available port starting from {start_port} "
        f"after {max_attempts} attempts"
    )


async def assign_dynamic_ports(ports: PortConfig | None = None) -> dict[str, int]:
    """Pick a port for each of ``DEV_PORT``, ``PROD_PORT`` and ``NGINX_PORT``.

    A busy default is replaced by the next free port above it.  If no
    replacement is found the default is kept anyway, so this never fails on
    port contention.  Services are resolved one after another and may end up
    sharing a port.
    """
    ports = ports or PortConfig()
    assigned: dict[str, int] = {}

    for key, default_port in ports.as_dict().items():
        if await check_port_availability(default_port):
            assigned[key] = default_port
            continue
        try:
            assigned[key] = await find_available_port(
                default_port + 1, ports.max_attempts
            )
            print_warning(
                f"Port {default_port} is in use, assigned {assigned[key]} instead"
            )
        except RuntimeError as exc:
            print_error(f"Error finding available port for {key}: {exc}")
            assigned[key] = default_port

    return assigned
