# -*- coding: utf-8 -*-
"""
Marketplace installer.

Installs a catalog app as one container: pull the pinned image, create the
container with the caller's env/port/volume choices, start it, then record it.
"""

import json
import logging
from typing import Dict, List, Optional, Tuple

from sunspear.core.compose.constants import APP_LABEL, DEFAULT_HOST_IP, DEFAULT_PROTOCOL
from sunspear.core.marketplace.catalog import AppCatalog
from sunspear.config import DockerConfig
from sunspear.db.models.installed_app import InstalledApp
from sunspear.db.repository.installed_app_repository import InstalledAppRepository
from sunspear.db.schemas.app import CatalogApp, InstallRequest
from sunspear.services.docker_service import ContainerSpec, DockerService, docker_service
from sunspear.utils.exceptions import EngineError, NotFoundError, ValidationException

logger = logging.getLogger(__name__)

RESTART_POLICY = "unless-stopped"


def build_app_container_spec(app: CatalogApp, request: InstallRequest) -> ContainerSpec:
    """
    Container spec for an install.

    Only ports and volumes the caller supplied are mapped; catalog ports are
    looked up by label and unknown labels are ignored.
    """
    exposed_ports: List[str] = []
    port_bindings: Dict[str, Tuple[str, str]] = {}
    for label, host_port in request.ports.items():
        container_port = app.ports.get(label)
        if container_port is None:
            continue
        key = f"{container_port}/{DEFAULT_PROTOCOL}"
        if key not in port_bindings:
            exposed_ports.append(key)
        port_bindings[key] = (DEFAULT_HOST_IP, str(host_port))

    binds = [
        f"{host_path}:{container_path}"
        for container_path, host_path in request.volumes.items()
        if host_path
    ]

    return ContainerSpec(
        name=request.name or f"{app.id}-app",
        image=app.image,
        environment=[f"{entry.name}={entry.value}" for entry in request.env if entry.value],
        exposed_ports=exposed_ports,
        port_bindings=port_bindings,
        binds=binds,
        labels={APP_LABEL: app.id},
        restart_policy=RESTART_POLICY,
    )


class MarketplaceInstaller:
    """Install and uninstall catalog apps"""

    def __init__(
        self,
        catalog: Optional[AppCatalog] = None,
        engine: Optional[DockerService] = None,
        store: Optional[InstalledAppRepository] = None,
        stop_timeout: Optional[int] = None,
    ):
        self.catalog = catalog or AppCatalog()
        self.engine = engine or docker_service
        self.store = store or InstalledAppRepository()
        self.stop_timeout = DockerConfig.STOP_TIMEOUT if stop_timeout is None else stop_timeout

    @staticmethod
    def check_required_env(app: CatalogApp, request: InstallRequest) -> None:
        """
        Raises:
            ValidationException: Naming the first required variable that is
                missing or empty
        """
        provided = {entry.name: entry.value for entry in request.env}
        for required in app.env_vars.required:
            if not provided.get(required.name):
                raise ValidationException(
                    errors=[{"name": required.name, "msg": "required environment variable is missing"}],
                    message=f"missing required environment variable: {required.name}",
                )

    async def install(self, app_id: str, request: InstallRequest) -> InstalledApp:
        """
        Install a catalog app.

        Raises:
            NotFoundError: Unknown app id
            ValidationException: A required env var is missing, before any engine call
            EngineError: Pull/create/start failed; a created container is removed
            PersistenceError: Recording failed; the container is stopped and removed
        """
        app = self.catalog.get_app(app_id)
        self.check_required_env(app, request)

        await self.engine.pull_image(app.image)

        spec = build_app_container_spec(app, request)
        container_id = await self.engine.create_container(spec)

        try:
            await self.engine.start_container(container_id)
        except EngineError:
            logger.error(f"Failed to start {spec.name}, removing container {container_id[:12]}")
            await self._discard(container_id, stop=False)
            raise

        try:
            installed_id = await self.store.insert_app(
                app_id=app.id,
                app_name=app.name,
                container_ids=json.dumps([container_id]),
                config=json.dumps({"containerName": spec.name}),
            )
        except Exception:
            logger.error(f"Failed to record install of {app.id}, removing container {container_id[:12]}")
            await self._discard(container_id, stop=True)
            raise

        logger.info(f"Installed {app.id} as {spec.name} ({container_id[:12]})")
        return await self.get_installed(installed_id)

    async def _discard(self, container_id: str, stop: bool) -> None:
        if stop:
            try:
                await self.engine.stop_container(container_id, timeout=self.stop_timeout)
            except EngineError as e:
                logger.warning(f"Failed to stop container {container_id[:12]}: {e.message}")
        try:
            await self.engine.remove_container(container_id, force=True)
        except EngineError as e:
            logger.warning(f"Failed to remove container {container_id[:12]}: {e.message}")

    async def list_installed(self) -> List[InstalledApp]:
        return await self.store.list_apps()

    async def get_installed(self, installed_id: int) -> InstalledApp:
        """
        Raises:
            NotFoundError: Unknown installed app id
        """
        installed = await self.store.get_app(installed_id)
        if installed is None:
            raise NotFoundError(
                f"installed app {installed_id} not found",
                resource_type="installed_app",
                resource_id=str(installed_id),
            )
        return installed

    async def uninstall(self, installed_id: int) -> None:
        """Stop and remove every tracked container, then delete the row."""
        installed = await self.get_installed(installed_id)

        for container_id in installed.container_id_list:
            await self._discard(container_id, stop=True)

        await self.store.delete_app(installed_id)
        logger.info(f"Uninstalled {installed.app_id} ({installed_id})")
