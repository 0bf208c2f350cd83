"""
Compose API Router

Compose project deploy, lifecycle, validation and template routes
"""

from fastapi import APIRouter, Path, status
from sunspear.service.compose_service import ComposeService
from sunspear.db.schemas import DeployRequest, ValidateRequest

compose_router = APIRouter(prefix="/compose", tags=["compose"])

compose_service = ComposeService()


@compose_router.get(
    "/projects",
    summary="List compose projects",
    operation_id="list_compose_projects"
)
async def list_projects():
    """All projects, newest first"""
    return await compose_service.list_projects()


@compose_router.post(
    "/projects",
    summary="Deploy a compose project",
    operation_id="deploy_compose_project",
    status_code=status.HTTP_201_CREATED,
)
async def deploy_project(data: DeployRequest):
    """
    Deploy a manifest

    Creates the project network and starts every service in dependency
    order. A failed deploy leaves nothing behind.
    """
    return await compose_service.deploy(data)


@compose_router.post(
    "/validate",
    summary="Validate a compose manifest",
    operation_id="validate_compose_manifest"
)
async def validate_manifest(data: ValidateRequest):
    """Parse and check service dependencies, no engine calls"""
    return await compose_service.validate(data.yaml)


@compose_router.get(
    "/templates",
    summary="List compose templates",
    operation_id="list_compose_templates"
)
async def list_templates():
    return await compose_service.list_templates()


@compose_router.get(
    "/templates/{name}",
    summary="Get compose template",
    operation_id="get_compose_template"
)
async def get_template(name: str = Path(..., description="Template name")):
    return await compose_service.get_template(name)


@compose_router.get(
    "/projects/{project_id}",
    summary="Get compose project",
    operation_id="get_compose_project"
)
async def get_project(project_id: int = Path(..., description="Project ID")):
    return await compose_service.get_project(project_id)


@compose_router.delete(
    "/projects/{project_id}",
    summary="Delete compose project",
    operation_id="delete_compose_project"
)
async def delete_project(project_id: int = Path(..., description="Project ID")):
    """Remove containers and network, then the record"""
    return await compose_service.delete_project(project_id)


@compose_router.post(
    "/projects/{project_id}/start",
    summary="Start compose project",
    operation_id="start_compose_project"
)
async def start_project(project_id: int = Path(..., description="Project ID")):
    return await compose_service.start_project(project_id)


@compose_router.post(
    "/projects/{project_id}/stop",
    summary="Stop compose project",
    operation_id="stop_compose_project"
)
async def stop_project(project_id: int = Path(..., description="Project ID")):
    return await compose_service.stop_project(project_id)


@compose_router.post(
    "/projects/{project_id}/restart",
    summary="Restart compose project",
    operation_id="restart_compose_project"
)
async def restart_project(project_id: int = Path(..., description="Project ID")):
    return await compose_service.restart_project(project_id)
