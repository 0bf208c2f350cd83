"""
API Routers Module

FastAPI routers
"""

from .compose_router import compose_router
from .app_router import app_router
from .container_router import container_router
from .image_router import image_router
from .network_router import network_router
from .volume_router import volume_router

__all__ = [
    "compose_router",
    "app_router",
    "container_router",
    "image_router",
    "network_router",
    "volume_router",
]
