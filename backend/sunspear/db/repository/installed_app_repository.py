"""
Installed App Repository

Data access layer for marketplace installs.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from sunspear.db.models.installed_app import InstalledApp
from sunspear.db.repository.base_repository import BaseRepository
from sunspear.db.session import async_with_session


class InstalledAppRepository(BaseRepository[InstalledApp]):
    """Installed app repository"""

    def __init__(self):
        super().__init__(InstalledApp)

    @async_with_session
    async def insert_app(
        self,
        session: AsyncSession,
        app_id: str,
        app_name: str,
        container_ids: str,
        config: str,
        status: str = "running",
    ) -> int:
        """Record an installed app and return its id"""
        app = await self.create(
            session,
            app_id=app_id,
            app_name=app_name,
            container_ids=container_ids,
            config=config,
            status=status,
        )
        return app.id

    @async_with_session
    async def get_app(self, session: AsyncSession, installed_id: int) -> Optional[InstalledApp]:
        return await self.get_by_id(session, installed_id)

    @async_with_session
    async def list_apps(self, session: AsyncSession) -> List[InstalledApp]:
        """List installed apps, oldest first"""
        return await self.get_all(session, order_by=["create_time", "id"])

    @async_with_session
    async def delete_app(self, session: AsyncSession, installed_id: int) -> Optional[InstalledApp]:
        return await self.delete(session, installed_id)
