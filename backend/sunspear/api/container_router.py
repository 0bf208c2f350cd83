"""
Container API Router

Single-container lifecycle routes
"""

from typing import Optional
from fastapi import APIRouter, Path, Query
from sunspear.service.container_service import ContainerService

container_router = APIRouter(prefix="/containers", tags=["containers"])

container_service = ContainerService()


@container_router.get(
    "",
    summary="List containers",
    operation_id="list_containers"
)
async def list_containers(
    all: bool = Query(True, description="Include stopped containers"),
    project: Optional[str] = Query(None, description="Only containers of this compose project"),
):
    return await container_service.list_containers(include_stopped=all, project=project)


@container_router.get(
    "/{container_id}",
    summary="Inspect container",
    operation_id="inspect_container"
)
async def inspect_container(container_id: str = Path(..., description="Container ID or name")):
    return await container_service.inspect_container(container_id)


@container_router.post(
    "/{container_id}/start",
    summary="Start container",
    operation_id="start_container"
)
async def start_container(container_id: str = Path(..., description="Container ID or name")):
    return await container_service.start_container(container_id)


@container_router.post(
    "/{container_id}/stop",
    summary="Stop container",
    operation_id="stop_container"
)
async def stop_container(container_id: str = Path(..., description="Container ID or name")):
    return await container_service.stop_container(container_id)


@container_router.post(
    "/{container_id}/restart",
    summary="Restart container",
    operation_id="restart_container"
)
async def restart_container(container_id: str = Path(..., description="Container ID or name")):
    return await container_service.restart_container(container_id)


@container_router.delete(
    "/{container_id}",
    summary="Remove container",
    operation_id="remove_container"
)
async def remove_container(
    container_id: str = Path(..., description="Container ID or name"),
    force: bool = Query(False, description="Kill a running container first"),
):
    return await container_service.remove_container(container_id, force=force)


@container_router.get(
    "/{container_id}/logs",
    summary="Container logs",
    operation_id="get_container_logs"
)
async def get_logs(
    container_id: str = Path(..., description="Container ID or name"),
    tail: int = Query(100, ge=1, le=10000, description="Number of lines from the end"),
):
    return await container_service.get_logs(container_id, tail=tail)
