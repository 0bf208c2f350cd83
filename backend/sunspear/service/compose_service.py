"""
Compose Service

API-facing layer over the compose orchestrator and template store. Domain
errors propagate to the registered exception handlers.
"""

import logging
from typing import Optional

from sunspear.config.logging_config import log_print
from sunspear.core.compose import ComposeOrchestrator, TemplateStore
from sunspear.db.schemas import (
    ComposeProjectResponse,
    DeployRequest,
    TemplateResponse,
    ValidateResponse,
)
from sunspear.utils.model.response_model import BaseResponse, ListResponse

logger = logging.getLogger(__name__)


class ComposeService:
    """
    Compose project service

    Deploy, lifecycle control, validation and templates
    """

    def __init__(self, orchestrator: Optional[ComposeOrchestrator] = None, templates: Optional[TemplateStore] = None):
        self.orchestrator = orchestrator or ComposeOrchestrator()
        self.templates = templates or TemplateStore()

    @log_print
    async def list_projects(self):
        projects = await self.orchestrator.list_projects()
        items = [ComposeProjectResponse.model_validate(p) for p in projects]
        return ListResponse.success(items=items, total=len(items))

    @log_print
    async def deploy(self, data: DeployRequest):
        """Deploy a new project"""
        project = await self.orchestrator.deploy(data.name, data.description, data.yaml)
        return BaseResponse.created(
            data=ComposeProjectResponse.model_validate(project),
            message=f"Project {data.name} deployed"
        )

    @log_print
    async def validate(self, yaml_content: str):
        """Parse and order a manifest without side effects"""
        manifest = self.orchestrator.validate(yaml_content)
        return BaseResponse.success(
            data=ValidateResponse(valid=True, services=manifest.service_names, version=manifest.version)
        )

    @log_print
    async def get_project(self, project_id: int):
        project = await self.orchestrator.get_project(project_id)
        return BaseResponse.success(data=ComposeProjectResponse.model_validate(project))

    @log_print
    async def delete_project(self, project_id: int):
        await self.orchestrator.delete_project(project_id)
        return BaseResponse.success(data={"id": project_id}, message="Project deleted")

    @log_print
    async def start_project(self, project_id: int):
        await self.orchestrator.start_project(project_id)
        return BaseResponse.success(data={"id": project_id, "status": "running"}, message="Project started")

    @log_print
    async def stop_project(self, project_id: int):
        await self.orchestrator.stop_project(project_id)
        return BaseResponse.success(data={"id": project_id, "status": "stopped"}, message="Project stopped")

    @log_print
    async def restart_project(self, project_id: int):
        await self.orchestrator.restart_project(project_id)
        return BaseResponse.success(data={"id": project_id, "status": "running"}, message="Project restarted")

    @log_print
    async def list_templates(self):
        items = [TemplateResponse(**t.to_dict()) for t in self.templates.list_templates()]
        return ListResponse.success(items=items)

    @log_print
    async def get_template(self, name: str):
        template = self.templates.get_template(name)
        return BaseResponse.success(data=TemplateResponse(**template.to_dict()))
