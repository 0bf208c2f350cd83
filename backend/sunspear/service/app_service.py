"""
App Service

API-facing layer over the marketplace catalog and installer.
"""

import logging
from typing import Optional

from sunspear.config.logging_config import log_print
from sunspear.core.marketplace import MarketplaceInstaller
from sunspear.db.schemas import InstalledAppResponse, InstallRequest
from sunspear.utils.model.response_model import BaseResponse, ListResponse

logger = logging.getLogger(__name__)


class AppService:
    """Marketplace service"""

    def __init__(self, installer: Optional[MarketplaceInstaller] = None):
        self.installer = installer or MarketplaceInstaller()

    @property
    def catalog(self):
        return self.installer.catalog

    @log_print
    async def list_apps(self):
        return ListResponse.success(items=self.catalog.list_apps())

    @log_print
    async def get_app(self, app_id: str):
        return BaseResponse.success(data=self.catalog.get_app(app_id))

    @log_print
    async def install(self, app_id: str, data: InstallRequest):
        """Install a catalog app as one container"""
        installed = await self.installer.install(app_id, data)
        return BaseResponse.created(
            data=InstalledAppResponse.model_validate(installed),
            message=f"App {app_id} installed"
        )

    @log_print
    async def list_installed(self):
        apps = await self.installer.list_installed()
        items = [InstalledAppResponse.model_validate(a) for a in apps]
        return ListResponse.success(items=items)

    @log_print
    async def get_installed(self, installed_id: int):
        installed = await self.installer.get_installed(installed_id)
        return BaseResponse.success(data=InstalledAppResponse.model_validate(installed))

    @log_print
    async def uninstall(self, installed_id: int):
        await self.installer.uninstall(installed_id)
        return BaseResponse.success(data={"id": installed_id}, message="App uninstalled")
