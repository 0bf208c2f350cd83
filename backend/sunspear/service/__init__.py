"""
Service Module

API-facing service layer
"""

from .compose_service import ComposeService
from .app_service import AppService
from .container_service import ContainerService
from .resource_service import ResourceService

__all__ = [
    "ComposeService",
    "AppService",
    "ContainerService",
    "ResourceService",
]
