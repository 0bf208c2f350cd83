"""
Database Schemas

Pydantic models for request/response validation.
"""

from .compose import (
    DeployRequest,
    ValidateRequest,
    ValidateResponse,
    ComposeProjectResponse,
    TemplateResponse,
)
from .app import (
    EnvVarSpec,
    AppEnvVars,
    CatalogApp,
    EnvEntry,
    InstallRequest,
    InstalledAppResponse,
)
from .engine import PullImageRequest

__all__ = [
    # Compose
    "DeployRequest",
    "ValidateRequest",
    "ValidateResponse",
    "ComposeProjectResponse",
    "TemplateResponse",
    # Marketplace
    "EnvVarSpec",
    "AppEnvVars",
    "CatalogApp",
    "EnvEntry",
    "InstallRequest",
    "InstalledAppResponse",
    # Engine
    "PullImageRequest",
]
