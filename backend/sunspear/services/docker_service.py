"""Docker engine adapter for compose stacks and marketplace apps."""

import asyncio
import logging
from typing import Optional, Dict, List, Tuple
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from functools import wraps

import docker
from docker.models.containers import Container
from docker.errors import NotFound, APIError

from sunspear.config import DockerConfig
from sunspear.utils.exceptions import EngineError, EngineNotFoundError

logger = logging.getLogger(__name__)


def _parse_created(value) -> Optional[datetime]:
    """Engine timestamps are RFC 3339 strings, or epoch seconds for images."""
    if not value:
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    try:
        return datetime.fromisoformat(str(value)[:26].replace("Z", "+00:00"))  # Trim to microseconds
    except ValueError:
        return None


class ContainerStatus(str, Enum):
    """Container status enum."""
    RUNNING = "running"
    CREATED = "created"
    RESTARTING = "restarting"
    EXITED = "exited"
    PAUSED = "paused"
    DEAD = "dead"
    UNKNOWN = "unknown"


@dataclass
class ContainerInfo:
    """Container information."""
    id: str
    name: str
    image: str
    status: ContainerStatus
    labels: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @classmethod
    def from_container(cls, container: Container) -> "ContainerInfo":
        """Create ContainerInfo from Docker container."""
        try:
            status = ContainerStatus(container.status)
        except ValueError:
            status = ContainerStatus.UNKNOWN

        attrs = container.attrs or {}

        config = attrs.get("Config") or {}

        return cls(
            id=container.id,
            name=container.name,
            image=config.get("Image", ""),
            status=status,
            labels=container.labels or {},
            created_at=_parse_created(attrs.get("Created")),
        )


@dataclass
class ImageInfo:
    """Image summary."""
    id: str
    tags: List[str] = field(default_factory=list)
    size: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_attrs(cls, attrs: dict) -> "ImageInfo":
        return cls(
            id=attrs.get("Id", ""),
            tags=attrs.get("RepoTags") or [],
            size=attrs.get("Size") or 0,
            created_at=_parse_created(attrs.get("Created")),
        )


@dataclass
class NetworkInfo:
    """Network summary."""
    id: str
    name: str
    driver: str = ""
    scope: str = ""
    internal: bool = False
    labels: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_attrs(cls, attrs: dict) -> "NetworkInfo":
        return cls(
            id=attrs.get("Id", ""),
            name=attrs.get("Name", ""),
            driver=attrs.get("Driver") or "",
            scope=attrs.get("Scope") or "",
            internal=bool(attrs.get("Internal")),
            labels=attrs.get("Labels") or {},
        )


@dataclass
class VolumeInfo:
    """Volume summary."""
    name: str
    driver: str = ""
    mountpoint: str = ""
    labels: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    @classmethod
    def from_attrs(cls, attrs: dict) -> "VolumeInfo":
        return cls(
            name=attrs.get("Name", ""),
            driver=attrs.get("Driver") or "",
            mountpoint=attrs.get("Mountpoint") or "",
            labels=attrs.get("Labels") or {},
            created_at=_parse_created(attrs.get("CreatedAt")),
        )


@dataclass
class ContainerSpec:
    """Everything needed to create one container.

    ``exposed_ports`` holds ``"<port>/<proto>"`` keys; ``port_bindings`` maps
    those keys to ``(host_ip, host_port)``.
    """
    name: str
    image: str
    environment: List[str] = field(default_factory=list)
    exposed_ports: List[str] = field(default_factory=list)
    port_bindings: Dict[str, Tuple[str, str]] = field(default_factory=dict)
    binds: List[str] = field(default_factory=list)
    labels: Dict[str, str] = field(default_factory=dict)
    command: List[str] = field(default_factory=list)
    restart_policy: Optional[str] = None


def docker_operation(operation_name: str):
    """Decorator for Docker operations with error handling."""
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except EngineError:
                raise
            except NotFound as e:
                raise EngineNotFoundError(
                    message=str(e),
                    operation=operation_name,
                ) from e
            except APIError as e:
                raise EngineError(
                    message=str(e),
                    operation=operation_name,
                    details={"status_code": getattr(e, "status_code", None)},
                ) from e
            except Exception as e:
                raise EngineError(
                    message=str(e),
                    operation=operation_name,
                ) from e
        return wrapper
    return decorator


def _split_port(port_key: str) -> Tuple[int, str]:
    port, _, proto = port_key.partition("/")
    return int(port), proto or "tcp"


class DockerService:
    """Adapter over the local Docker engine.

    Every blocking SDK call runs in a worker thread so one slow pull does not
    stall the event loop.
    """

    def __init__(self, base_url: Optional[str] = None, client: Optional[docker.DockerClient] = None):
        """Initialize Docker service.

        Args:
            base_url: Engine socket URL; empty means ``docker.from_env()``
            client: Pre-built client (tests)
        """
        self._base_url = base_url if base_url is not None else DockerConfig.BASE_URL
        self._client: Optional[docker.DockerClient] = client

    @property
    def client(self) -> docker.DockerClient:
        """Get Docker client, creating if needed."""
        if self._client is None:
            if self._base_url:
                self._client = docker.DockerClient(base_url=self._base_url)
            else:
                self._client = docker.from_env()
        return self._client

    @docker_operation("ping")
    async def ping(self) -> bool:
        """Check that the engine answers."""
        return await asyncio.to_thread(self.client.ping)

    @docker_operation("pull_image")
    async def pull_image(self, image: str) -> None:
        """Pull an image, draining the progress stream until it ends.

        Args:
            image: Image reference, tag defaults to ``latest``

        Raises:
            EngineError: The engine reported an error in the stream
        """
        def _pull():
            for chunk in self.client.api.pull(image, stream=True, decode=True):
                if isinstance(chunk, dict) and chunk.get("error"):
                    raise EngineError(
                        message=chunk["error"],
                        operation="pull_image",
                        details={"image": image},
                    )

        logger.info(f"Pulling image {image}")
        await asyncio.to_thread(_pull)

    @docker_operation("create_container")
    async def create_container(self, spec: ContainerSpec) -> str:
        """Create (but do not start) a container.

        Returns:
            The new container id
        """
        def _create():
            api = self.client.api
            host_config = api.create_host_config(
                port_bindings=dict(spec.port_bindings) or None,
                binds=list(spec.binds) or None,
                restart_policy={"Name": spec.restart_policy} if spec.restart_policy else None,
            )
            return api.create_container(
                image=spec.image,
                command=list(spec.command) or None,
                environment=list(spec.environment) or None,
                ports=[_split_port(p) for p in spec.exposed_ports] or None,
                labels=dict(spec.labels),
                host_config=host_config,
                name=spec.name,
            )

        resp = await asyncio.to_thread(_create)
        logger.info(f"Created container {spec.name} ({resp['Id'][:12]})")
        return resp["Id"]

    @docker_operation("start_container")
    async def start_container(self, container_id: str) -> None:
        await asyncio.to_thread(self.client.api.start, container_id)

    @docker_operation("stop_container")
    async def stop_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        """Stop a container.

        Args:
            container_id: Container id or name
            timeout: Grace period in seconds before the engine kills it
        """
        await asyncio.to_thread(
            self.client.api.stop,
            container_id,
            timeout=DockerConfig.STOP_TIMEOUT if timeout is None else timeout,
        )

    @docker_operation("restart_container")
    async def restart_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        await asyncio.to_thread(
            self.client.api.restart,
            container_id,
            timeout=DockerConfig.STOP_TIMEOUT if timeout is None else timeout,
        )

    @docker_operation("remove_container")
    async def remove_container(self, container_id: str, force: bool = False) -> None:
        await asyncio.to_thread(self.client.api.remove_container, container_id, force=force)

    @docker_operation("create_network")
    async def create_network(
        self,
        name: str,
        driver: str = "bridge",
        internal: bool = False,
        labels: Optional[Dict[str, str]] = None,
    ) -> str:
        """Create a network.

        Returns:
            The new network id
        """
        resp = await asyncio.to_thread(
            self.client.api.create_network,
            name,
            driver=driver,
            internal=internal,
            labels=labels,
        )
        logger.info(f"Created network {name} ({resp['Id'][:12]})")
        return resp["Id"]

    @docker_operation("remove_network")
    async def remove_network(self, network_id: str) -> None:
        await asyncio.to_thread(self.client.api.remove_network, network_id)

    @docker_operation("connect_network")
    async def connect_network(
        self,
        network_id: str,
        container_id: str,
        aliases: Optional[List[str]] = None,
    ) -> None:
        """Attach a container to a network, optionally under DNS aliases."""
        await asyncio.to_thread(
            self.client.api.connect_container_to_network,
            container_id,
            network_id,
            aliases=aliases,
        )

    @docker_operation("list_containers")
    async def list_containers(
        self,
        include_stopped: bool = True,
        labels: Optional[Dict[str, str]] = None,
    ) -> List[ContainerInfo]:
        """List containers.

        Args:
            include_stopped: Whether to include stopped containers
            labels: Only containers carrying all of these labels

        Returns:
            List of ContainerInfo
        """
        filters = {}
        if labels:
            filters["label"] = [f"{key}={value}" for key, value in labels.items()]

        containers = await asyncio.to_thread(
            self.client.containers.list,
            all=include_stopped,
            filters=filters,
        )

        return [ContainerInfo.from_container(c) for c in containers]

    @docker_operation("get_container_logs")
    async def get_container_logs(self, container_id: str, tail: int = 100) -> str:
        """Get the last ``tail`` lines of a container's output."""
        logs = await asyncio.to_thread(
            self.client.api.logs,
            container_id,
            stdout=True,
            stderr=True,
            tail=tail,
        )
        return logs.decode("utf-8", errors="replace") if isinstance(logs, bytes) else logs

    @docker_operation("inspect_container")
    async def inspect_container(self, container_id: str) -> dict:
        """Full engine view of one container."""
        return await asyncio.to_thread(self.client.api.inspect_container, container_id)

    @docker_operation("list_images")
    async def list_images(self) -> List[ImageInfo]:
        images = await asyncio.to_thread(self.client.api.images)
        return [ImageInfo.from_attrs(attrs) for attrs in images]

    @docker_operation("remove_image")
    async def remove_image(self, image: str, force: bool = False) -> None:
        await asyncio.to_thread(self.client.api.remove_image, image, force=force)
        logger.info(f"Removed image {image}")

    @docker_operation("list_networks")
    async def list_networks(self) -> List[NetworkInfo]:
        networks = await asyncio.to_thread(self.client.api.networks)
        return [NetworkInfo.from_attrs(attrs) for attrs in networks]

    @docker_operation("list_volumes")
    async def list_volumes(self) -> List[VolumeInfo]:
        """List volumes. The engine answers ``{"Volumes": null}`` when there are none."""
        resp = await asyncio.to_thread(self.client.api.volumes)
        return [VolumeInfo.from_attrs(attrs) for attrs in (resp or {}).get("Volumes") or []]

    @docker_operation("remove_volume")
    async def remove_volume(self, name: str, force: bool = False) -> None:
        await asyncio.to_thread(self.client.api.remove_volume, name, force=force)
        logger.info(f"Removed volume {name}")


# Global Docker service instance
docker_service = DockerService()
