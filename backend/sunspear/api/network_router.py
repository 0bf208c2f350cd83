"""
Network API Router

Engine network routes
"""

from fastapi import APIRouter, Path
from sunspear.service.resource_service import ResourceService

network_router = APIRouter(prefix="/networks", tags=["networks"])

network_service = ResourceService()


@network_router.get(
    "",
    summary="List networks",
    operation_id="list_networks"
)
async def list_networks():
    return await network_service.list_networks()


@network_router.delete(
    "/{network_id}",
    summary="Remove network",
    operation_id="remove_network"
)
async def remove_network(network_id: str = Path(..., description="Network ID or name")):
    return await network_service.remove_network(network_id)
