# -*- coding: utf-8 -*-
"""
Compose orchestrator.

Deploys a manifest as one project: a project network plus one container per
service, started in dependency order. A deploy either fully succeeds and is
recorded, or everything it created is removed again and nothing is recorded.

Project rows are never cached; each operation re-reads the row, acts on the
engine and writes back.
"""

import asyncio
import json
import logging
from typing import List, Optional

from sunspear.config import DockerConfig
from sunspear.core.compose.constants import NETWORK_DRIVER, NETWORK_PREFIX, PROJECT_LABEL, SERVICE_LABEL
from sunspear.core.compose.manifest import ManifestSpec, ServiceSpec, parse_manifest
from sunspear.core.compose.resolver import resolve_service_order
from sunspear.core.compose.translators import (
    named_volumes,
    parse_command,
    parse_environment,
    parse_labels,
    parse_ports,
    parse_volumes,
)
from sunspear.db.models.compose_project import ComposeProject, ProjectStatus
from sunspear.db.repository.compose_project_repository import ComposeProjectRepository
from sunspear.services.docker_service import ContainerSpec, DockerService, docker_service
from sunspear.utils.exceptions import ConflictError, EngineError, NotFoundError

logger = logging.getLogger(__name__)


def network_name(project: str) -> str:
    return f"{NETWORK_PREFIX}-{project}"


def container_name(project: str, service: str) -> str:
    return f"{project}-{service}"


def build_container_spec(project: str, service: str, spec: ServiceSpec) -> ContainerSpec:
    """Translate one service entry into a container spec for the engine."""
    exposed_ports, port_bindings = parse_ports(spec.ports)

    labels = parse_labels(spec.labels)
    labels[PROJECT_LABEL] = project
    labels[SERVICE_LABEL] = service

    return ContainerSpec(
        name=container_name(project, service),
        image=spec.image,
        environment=parse_environment(spec.environment),
        exposed_ports=exposed_ports,
        port_bindings=port_bindings,
        binds=parse_volumes(spec.volumes, project),
        labels=labels,
        command=parse_command(spec.command),
        restart_policy=spec.restart or None,
    )


class ComposeOrchestrator:
    """Lifecycle of compose projects."""

    def __init__(
        self,
        engine: Optional[DockerService] = None,
        store: Optional[ComposeProjectRepository] = None,
        stop_timeout: Optional[int] = None,
        restart_pause: Optional[float] = None,
    ):
        """
        Args:
            engine: Engine adapter
            store: Project store
            stop_timeout: Grace period for container stops, seconds
            restart_pause: Pause between stop and start on restart, seconds
        """
        self.engine = engine or docker_service
        self.store = store or ComposeProjectRepository()
        self.stop_timeout = DockerConfig.STOP_TIMEOUT if stop_timeout is None else stop_timeout
        self.restart_pause = DockerConfig.RESTART_PAUSE if restart_pause is None else restart_pause

    def validate(self, yaml_content: str) -> ManifestSpec:
        """
        Check a manifest without touching the engine.

        Goes beyond parsing: the services are also ordered, so a manifest that
        parses but depends on an undeclared service, or whose dependencies
        form a cycle, is rejected here just as deploy would reject it.

        Raises:
            ManifestParseError: Not YAML, a malformed field, or no services
            UnknownDependencyError: A depends_on entry names no declared service
            DependencyCycleError: The dependencies form a cycle
        """
        manifest = parse_manifest(yaml_content)
        resolve_service_order(manifest.services)
        return manifest

    async def deploy(self, name: str, description: str, yaml_content: str) -> ComposeProject:
        """
        Deploy a manifest as a new project.

        Args:
            name: Unique project name
            description: Free text
            yaml_content: Manifest text, stored verbatim

        Returns:
            The persisted project, re-read from the store

        Raises:
            ManifestParseError, UnknownDependencyError, DependencyCycleError:
                before any engine call
            ConflictError: A project with this name exists
            EngineError, PersistenceError: after rolling back
        """
        manifest = parse_manifest(yaml_content)
        order = resolve_service_order(manifest.services)

        if await self.store.get_project_by_name(name) is not None:
            raise ConflictError(f"compose project {name} already exists")

        logger.info(f"Deploying project {name}: {' -> '.join(order)}")

        network_id = await self.engine.create_network(
            network_name(name),
            driver=NETWORK_DRIVER,
            internal=False,
            labels={PROJECT_LABEL: name},
        )
        network_ids = [network_id]
        container_ids: List[str] = []
        volume_names: List[str] = []

        try:
            for service in order:
                container_id = await self._provision(name, service, manifest.services[service], network_id, container_ids)
                logger.info(f"Project {name}: service {service} started ({container_id[:12]})")

                for volume in named_volumes(parse_volumes(manifest.services[service].volumes, name)):
                    if volume not in volume_names:
                        volume_names.append(volume)

            project_id = await self.store.insert_project(
                name=name,
                description=description,
                yaml_content=yaml_content,
                status=ProjectStatus.RUNNING.value,
                container_ids=json.dumps(container_ids),
                network_ids=json.dumps(network_ids),
                volume_names=json.dumps(volume_names),
            )
        except Exception:
            logger.error(f"Deploy of project {name} failed, rolling back")
            await self._rollback(container_ids, network_ids)
            raise

        return await self.get_project(project_id)

    async def _provision(
        self,
        project: str,
        service: str,
        spec: ServiceSpec,
        network_id: str,
        container_ids: List[str],
    ) -> str:
        """Pull, create, attach and start one service container.

        The container id is appended to ``container_ids`` as soon as it exists.
        """
        step = f"failed to pull image {spec.image}"
        try:
            await self.engine.pull_image(spec.image)

            step = f"failed to create container {service}"
            container_id = await self.engine.create_container(build_container_spec(project, service, spec))
            container_ids.append(container_id)

            step = f"failed to connect {service} to network"
            await self.engine.connect_network(network_id, container_id, aliases=[service])

            step = f"failed to start container {service}"
            await self.engine.start_container(container_id)
        except EngineError as e:
            raise type(e)(
                message=f"{step}: {e.message}",
                operation=e.operation,
                details={**e.details, "service": service},
            ) from e

        return container_id

    async def _rollback(self, container_ids: List[str], network_ids: List[str]) -> None:
        """Force-remove created containers newest first, then the networks."""
        for container_id in reversed(container_ids):
            try:
                await self.engine.remove_container(container_id, force=True)
            except EngineError as e:
                logger.warning(f"Rollback: failed to remove container {container_id[:12]}: {e.message}")

        for network_id in network_ids:
            try:
                await self.engine.remove_network(network_id)
            except EngineError as e:
                logger.warning(f"Rollback: failed to remove network {network_id[:12]}: {e.message}")

    async def list_projects(self) -> List[ComposeProject]:
        return await self.store.list_projects()

    async def get_project(self, project_id: int) -> ComposeProject:
        """
        Raises:
            NotFoundError: Unknown project id
        """
        project = await self.store.get_project(project_id)
        if project is None:
            raise NotFoundError(
                f"compose project {project_id} not found",
                resource_type="compose_project",
                resource_id=str(project_id),
            )
        return project

    async def _set_status(self, project_id: int, status: ProjectStatus) -> None:
        if not await self.store.update_status(project_id, status.value):
            raise NotFoundError(
                f"compose project {project_id} not found",
                resource_type="compose_project",
                resource_id=str(project_id),
            )

    async def stop_project(self, project_id: int) -> None:
        """Stop every container of a project; individual failures are only logged."""
        project = await self.get_project(project_id)

        for container_id in project.container_id_list:
            try:
                await self.engine.stop_container(container_id, timeout=self.stop_timeout)
            except EngineError as e:
                logger.warning(f"Project {project.name}: failed to stop container {container_id[:12]}: {e.message}")

        await self._set_status(project_id, ProjectStatus.STOPPED)
        logger.info(f"Project {project.name} stopped")

    async def start_project(self, project_id: int) -> None:
        """
        Start every container in stored order.

        The first failure is raised and the status is left as it was.
        """
        project = await self.get_project(project_id)

        for container_id in project.container_id_list:
            await self.engine.start_container(container_id)

        await self._set_status(project_id, ProjectStatus.RUNNING)
        logger.info(f"Project {project.name} started")

    async def restart_project(self, project_id: int) -> None:
        await self.stop_project(project_id)
        await asyncio.sleep(self.restart_pause)
        await self.start_project(project_id)

    async def delete_project(self, project_id: int) -> None:
        """
        Tear down containers and the network, then delete the row.

        Engine failures are logged and skipped so a project whose containers
        are already gone can still be deleted.
        """
        project = await self.get_project(project_id)

        for container_id in project.container_id_list:
            try:
                await self.engine.stop_container(container_id, timeout=self.stop_timeout)
            except EngineError as e:
                logger.warning(f"Project {project.name}: failed to stop container {container_id[:12]}: {e.message}")
            try:
                await self.engine.remove_container(container_id, force=True)
            except EngineError as e:
                logger.warning(f"Project {project.name}: failed to remove container {container_id[:12]}: {e.message}")

        for network_id in project.network_id_list:
            try:
                await self.engine.remove_network(network_id)
            except EngineError as e:
                logger.warning(f"Project {project.name}: failed to remove network {network_id[:12]}: {e.message}")

        await self.store.delete_project(project_id)
        logger.info(f"Project {project.name} deleted")
