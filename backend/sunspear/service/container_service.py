"""
Container Service

Thin lifecycle controls over single containers.
"""

import logging
from typing import Optional

from sunspear.config.logging_config import log_print
from sunspear.core.compose.constants import PROJECT_LABEL
from sunspear.services.docker_service import DockerService, docker_service
from sunspear.utils.model.response_model import BaseResponse, ListResponse

logger = logging.getLogger(__name__)


class ContainerService:
    """Container lifecycle service"""

    def __init__(self, engine: Optional[DockerService] = None):
        self.engine = engine or docker_service

    @log_print
    async def list_containers(self, include_stopped: bool = True, project: Optional[str] = None):
        """List containers, optionally only those of one compose project"""
        labels = {PROJECT_LABEL: project} if project else None
        containers = await self.engine.list_containers(include_stopped=include_stopped, labels=labels)
        return ListResponse.success(items=containers)

    @log_print
    async def inspect_container(self, container_id: str):
        details = await self.engine.inspect_container(container_id)
        return BaseResponse.success(data=details)

    @log_print
    async def start_container(self, container_id: str):
        await self.engine.start_container(container_id)
        return BaseResponse.success(data={"id": container_id}, message="Container started")

    @log_print
    async def stop_container(self, container_id: str):
        await self.engine.stop_container(container_id)
        return BaseResponse.success(data={"id": container_id}, message="Container stopped")

    @log_print
    async def restart_container(self, container_id: str):
        await self.engine.restart_container(container_id)
        return BaseResponse.success(data={"id": container_id}, message="Container restarted")

    @log_print
    async def remove_container(self, container_id: str, force: bool = False):
        await self.engine.remove_container(container_id, force=force)
        return BaseResponse.success(data={"id": container_id}, message="Container removed")

    @log_print
    async def get_logs(self, container_id: str, tail: int = 100):
        logs = await self.engine.get_container_logs(container_id, tail=tail)
        return BaseResponse.success(data={"id": container_id, "logs": logs})
