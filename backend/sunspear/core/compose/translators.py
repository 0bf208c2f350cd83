# -*- coding: utf-8 -*-
"""
Field translators.

Each function normalizes one polymorphic manifest field into the shape the
engine adapter expects. None of them raise: unrecognized shapes give empty
output.
"""

from typing import Any, Dict, List, Tuple

from sunspear.core.compose.constants import DEFAULT_HOST_IP, DEFAULT_PROTOCOL

PortBindings = Dict[str, Tuple[str, str]]


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_path(source: str) -> bool:
    return source.startswith("/") or source.startswith(".")


def parse_environment(environment: Any) -> List[str]:
    """Environment as ``KEY=VALUE`` strings."""
    if isinstance(environment, list):
        return [item for item in environment if isinstance(item, str)]
    if isinstance(environment, dict):
        return [f"{key}={_format_value(value)}" for key, value in environment.items()]
    return []


def parse_ports(ports: List[str], host_ip: str = DEFAULT_HOST_IP) -> Tuple[List[str], PortBindings]:
    """
    Translate port entries into exposed ports and host bindings.

    Accepted forms: ``"container"``, ``"host:container"`` and
    ``"ip:host:container"``; the container part may carry ``/proto``.

    Args:
        ports: Port entries
        host_ip: Bind address for entries that do not name one

    Returns:
        (exposed ``"<port>/<proto>"`` keys in order, key -> (host_ip, host_port))
    """
    exposed: List[str] = []
    bindings: PortBindings = {}

    for entry in ports or []:
        parts = str(entry).strip().split(":")
        if len(parts) == 3:
            bind_ip, host_port, container_port = parts
        elif len(parts) == 2:
            bind_ip = host_ip
            host_port, container_port = parts
        elif len(parts) == 1:
            bind_ip = host_ip
            host_port = container_port = parts[0]
        else:
            continue

        host_port = host_port.split("/", 1)[0]
        if not container_port:
            continue
        if "/" not in container_port:
            container_port = f"{container_port}/{DEFAULT_PROTOCOL}"

        if container_port not in bindings:
            exposed.append(container_port)
        bindings[container_port] = (bind_ip or host_ip, host_port)

    return exposed, bindings


def parse_volumes(volumes: List[str], project: str) -> List[str]:
    """
    Scope named volumes to the project.

    ``"data"`` becomes ``"{project}-data"``; ``"cache:/path"`` becomes
    ``"{project}-cache:/path"``. Sources starting with ``/`` or ``.`` are bind
    mounts and stay untouched.
    """
    result = []
    for entry in volumes or []:
        if ":" not in entry:
            result.append(f"{project}-{entry}")
            continue
        source, rest = entry.split(":", 1)
        if _is_path(source):
            result.append(entry)
        else:
            result.append(f"{project}-{source}:{rest}")
    return result


def named_volumes(binds: List[str]) -> List[str]:
    """Named volumes referenced by translated binds, without duplicates."""
    names: List[str] = []
    for bind in binds:
        source = bind.split(":", 1)[0]
        if source and not _is_path(source) and source not in names:
            names.append(source)
    return names


def parse_labels(labels: Any) -> Dict[str, str]:
    """Labels as a plain string mapping; list entries need ``KEY=VALUE``."""
    if isinstance(labels, list):
        result = {}
        for item in labels:
            if isinstance(item, str) and "=" in item:
                key, value = item.split("=", 1)
                result[key] = value
        return result
    if isinstance(labels, dict):
        return {str(key): _format_value(value) for key, value in labels.items()}
    return {}


def parse_command(command: Any) -> List[str]:
    """Command tokens; empty means keep the image default."""
    if isinstance(command, str):
        return command.split()
    if isinstance(command, list):
        return [item for item in command if isinstance(item, str)]
    return []


def parse_depends_on(depends_on: Any) -> List[str]:
    """
    Dependency names.

    The mapping form contributes its keys only; conditions such as
    ``service_healthy`` are not honoured.
    """
    if isinstance(depends_on, list):
        names = [item for item in depends_on if isinstance(item, str)]
    elif isinstance(depends_on, dict):
        names = [str(key) for key in depends_on]
    else:
        return []
    return list(dict.fromkeys(names))
