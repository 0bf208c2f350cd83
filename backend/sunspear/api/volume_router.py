"""
Volume API Router

Engine volume routes
"""

from fastapi import APIRouter, Path, Query
from sunspear.service.resource_service import ResourceService

volume_router = APIRouter(prefix="/volumes", tags=["volumes"])

volume_service = ResourceService()


@volume_router.get(
    "",
    summary="List volumes",
    operation_id="list_volumes"
)
async def list_volumes():
    return await volume_service.list_volumes()


@volume_router.delete(
    "/{name}",
    summary="Remove volume",
    operation_id="remove_volume"
)
async def remove_volume(
    name: str = Path(..., description="Volume name"),
    force: bool = Query(False, description="Remove even when in use"),
):
    return await volume_service.remove_volume(name, force=force)
