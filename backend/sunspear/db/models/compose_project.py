"""
Compose Project Model

A named deployment of one compose manifest: one network, one or more containers.
"""

import json
from enum import Enum
from typing import List

from sqlalchemy import Column, String, Text, Index

from sunspear.db.base import Base, BaseModel


class ProjectStatus(str, Enum):
    """Persisted lifecycle status"""
    RUNNING = "running"
    STOPPED = "stopped"


class ComposeProject(Base, BaseModel):
    """
    Compose project table

    Id lists are stored as JSON arrays of strings. Container and network
    lists are written once at deploy time and never updated afterwards.
    """
    __tablename__ = "compose_projects"

    name = Column(String(255), nullable=False, unique=True, comment="Project name")
    description = Column(Text, nullable=False, default="", comment="Free-text description")
    yaml_content = Column(Text, nullable=False, comment="Original manifest text")
    status = Column(String(32), nullable=False, default=ProjectStatus.STOPPED.value, comment="running/stopped")
    container_ids = Column(Text, nullable=False, default="[]", comment="JSON array of container ids")
    network_ids = Column(Text, nullable=False, default="[]", comment="JSON array of network ids")
    volume_names = Column(Text, nullable=False, default="[]", comment="JSON array of volume names")

    __table_args__ = (
        Index("idx_compose_project_create_time", "create_time"),
    )

    @property
    def container_id_list(self) -> List[str]:
        return json.loads(self.container_ids or "[]")

    @property
    def network_id_list(self) -> List[str]:
        return json.loads(self.network_ids or "[]")

    @property
    def volume_name_list(self) -> List[str]:
        return json.loads(self.volume_names or "[]")

    def __repr__(self):
        return f"<ComposeProject(id={self.id}, name={self.name}, status={self.status})>"
