"""
Compose Project Repository

Data access layer for compose project rows. Id-list arguments are JSON array
strings; callers own the encoding.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sunspear.db.models.compose_project import ComposeProject
from sunspear.db.repository.base_repository import BaseRepository
from sunspear.db.session import async_with_session


class ComposeProjectRepository(BaseRepository[ComposeProject]):
    """Compose project repository"""

    def __init__(self):
        super().__init__(ComposeProject)

    @async_with_session
    async def insert_project(
        self,
        session: AsyncSession,
        name: str,
        description: str,
        yaml_content: str,
        status: str,
        container_ids: str,
        network_ids: str,
        volume_names: str,
    ) -> int:
        """Insert a project row and return the store-assigned id"""
        project = await self.create(
            session,
            name=name,
            description=description,
            yaml_content=yaml_content,
            status=status,
            container_ids=container_ids,
            network_ids=network_ids,
            volume_names=volume_names,
        )
        return project.id

    @async_with_session
    async def get_project(self, session: AsyncSession, project_id: int) -> Optional[ComposeProject]:
        """Get project by ID"""
        return await self.get_by_id(session, project_id)

    @async_with_session
    async def get_project_by_name(self, session: AsyncSession, name: str) -> Optional[ComposeProject]:
        """Get project by its unique name"""
        result = await session.execute(select(ComposeProject).where(ComposeProject.name == name))
        return result.scalar_one_or_none()

    @async_with_session
    async def list_projects(self, session: AsyncSession) -> List[ComposeProject]:
        """List all projects, newest first"""
        return await self.get_all(session, order_by=["-create_time", "-id"])

    @async_with_session
    async def update_status(self, session: AsyncSession, project_id: int, status: str) -> bool:
        """Set the lifecycle status; returns False when the row is gone"""
        matched = await self.update_fields(session, project_id, status=status, update_time=datetime.now())
        return matched > 0

    @async_with_session
    async def delete_project(self, session: AsyncSession, project_id: int) -> Optional[ComposeProject]:
        """Delete project"""
        return await self.delete(session, project_id)
