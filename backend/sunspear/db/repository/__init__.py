"""
Database Repositories

Repository pattern implementation for data access.
"""

from .base_repository import BaseRepository
from .compose_project_repository import ComposeProjectRepository
from .installed_app_repository import InstalledAppRepository

__all__ = [
    "BaseRepository",
    "ComposeProjectRepository",
    "InstalledAppRepository",
]
