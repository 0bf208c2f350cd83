"""
Database Models

SQLAlchemy ORM models for the application.
"""

from .compose_project import ComposeProject, ProjectStatus
from .installed_app import InstalledApp

__all__ = [
    "ComposeProject",
    "ProjectStatus",
    "InstalledApp",
]
