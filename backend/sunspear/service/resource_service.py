"""
Resource Service

Images, networks and volumes on the engine, outside any compose project.
"""

import logging
from typing import Optional

from sunspear.config.logging_config import log_print
from sunspear.services.docker_service import DockerService, docker_service
from sunspear.utils.model.response_model import BaseResponse, ListResponse

logger = logging.getLogger(__name__)


class ResourceService:
    """Engine image, network and volume service"""

    def __init__(self, engine: Optional[DockerService] = None):
        self.engine = engine or docker_service

    @log_print
    async def list_images(self):
        return ListResponse.success(items=await self.engine.list_images())

    @log_print
    async def pull_image(self, image: str):
        """Pull an image and wait for the pull to finish"""
        await self.engine.pull_image(image)
        return BaseResponse.created(data={"image": image}, message="Image pulled")

    @log_print
    async def remove_image(self, image: str, force: bool = False):
        await self.engine.remove_image(image, force=force)
        return BaseResponse.success(data={"id": image}, message="Image removed")

    @log_print
    async def list_networks(self):
        return ListResponse.success(items=await self.engine.list_networks())

    @log_print
    async def remove_network(self, network_id: str):
        await self.engine.remove_network(network_id)
        return BaseResponse.success(data={"id": network_id}, message="Network removed")

    @log_print
    async def list_volumes(self):
        return ListResponse.success(items=await self.engine.list_volumes())

    @log_print
    async def remove_volume(self, name: str, force: bool = False):
        await self.engine.remove_volume(name, force=force)
        return BaseResponse.success(data={"name": name}, message="Volume removed")
