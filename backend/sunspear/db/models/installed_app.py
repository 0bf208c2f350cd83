"""
Installed App Model

Marketplace apps installed as a single container. Rows are immutable between
install and uninstall.
"""

import json
from typing import Dict, List

from sqlalchemy import Column, String, Text, Index

from sunspear.db.base import Base, BaseModel


class InstalledApp(Base, BaseModel):
    """
    Installed app table

    create_time is the install timestamp.
    """
    __tablename__ = "installed_apps"

    app_id = Column(String(128), nullable=False, comment="Catalog app id")
    app_name = Column(String(255), nullable=False, comment="Display name")
    container_ids = Column(Text, nullable=False, default="[]", comment="JSON array of container ids")
    config = Column(Text, nullable=False, default="{}", comment="JSON object of install options")
    status = Column(String(32), nullable=False, default="running", comment="Install status")

    __table_args__ = (
        Index("idx_installed_app_app_id", "app_id"),
    )

    @property
    def container_id_list(self) -> List[str]:
        return json.loads(self.container_ids or "[]")

    @property
    def config_map(self) -> Dict[str, str]:
        return json.loads(self.config or "{}")

    def __repr__(self):
        return f"<InstalledApp(id={self.id}, app_id={self.app_id}, app_name={self.app_name})>"
