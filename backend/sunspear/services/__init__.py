"""
Engine Services

Adapters over external systems.
"""

from .docker_service import (
    ContainerInfo,
    ContainerSpec,
    ContainerStatus,
    DockerService,
    docker_operation,
    docker_service,
)

__all__ = [
    "ContainerInfo",
    "ContainerSpec",
    "ContainerStatus",
    "DockerService",
    "docker_operation",
    "docker_service",
]
