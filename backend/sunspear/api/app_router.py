"""
App API Router

Marketplace catalog and install routes
"""

from fastapi import APIRouter, Path, status
from sunspear.service.app_service import AppService
from sunspear.db.schemas import InstallRequest

app_router = APIRouter(prefix="/apps", tags=["apps"])

app_service = AppService()


@app_router.get(
    "",
    summary="List catalog apps",
    operation_id="list_apps"
)
async def list_apps():
    return await app_service.list_apps()


@app_router.get(
    "/installed",
    summary="List installed apps",
    operation_id="list_installed_apps"
)
async def list_installed():
    return await app_service.list_installed()


@app_router.get(
    "/installed/{installed_id}",
    summary="Get installed app",
    operation_id="get_installed_app"
)
async def get_installed(installed_id: int = Path(..., description="Installed app ID")):
    return await app_service.get_installed(installed_id)


@app_router.post(
    "/installed/{installed_id}/uninstall",
    summary="Uninstall app",
    operation_id="uninstall_app"
)
async def uninstall(installed_id: int = Path(..., description="Installed app ID")):
    """Stop and remove the app's containers, then the record"""
    return await app_service.uninstall(installed_id)


@app_router.get(
    "/{app_id}",
    summary="Get catalog app",
    operation_id="get_app"
)
async def get_app(app_id: str = Path(..., description="Catalog app ID")):
    return await app_service.get_app(app_id)


@app_router.post(
    "/{app_id}/install",
    summary="Install catalog app",
    operation_id="install_app",
    status_code=status.HTTP_201_CREATED,
)
async def install(
    app_id: str = Path(..., description="Catalog app ID"),
    data: InstallRequest = None,
):
    """Pull, create and start the app container"""
    return await app_service.install(app_id, data or InstallRequest())
