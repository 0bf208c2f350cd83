"""Tests for Docker service."""

import pytest
from unittest.mock import MagicMock

from docker.errors import APIError, NotFound, DockerException

from sunspear.services.docker_service import (
    DockerService,
    ContainerInfo,
    ContainerSpec,
    ContainerStatus,
    ImageInfo,
    NetworkInfo,
    VolumeInfo,
    docker_operation,
)
from sunspear.utils.exceptions import EngineError, EngineNotFoundError


@pytest.fixture
def service(mock_docker_client):
    return DockerService(client=mock_docker_client)


class TestContainerStatus:
    """Tests for ContainerStatus enum."""

    def test_status_values(self):
        """Test status enum values."""
        assert ContainerStatus.RUNNING.value == "running"
        assert ContainerStatus.EXITED.value == "exited"
        assert ContainerStatus.UNKNOWN.value == "unknown"


class TestContainerInfo:
    """Tests for ContainerInfo dataclass."""

    def test_from_container(self):
        """Test creating ContainerInfo from Docker container."""
        mock_container = MagicMock()
        mock_container.id = "abc123"
        mock_container.name = "shop-web"
        mock_container.status = "running"
        mock_container.labels = {"com.sunspear.project": "shop"}
        mock_container.attrs = {
            "Created": "2024-01-01T00:00:00.000000Z",
            "Config": {"Image": "nginx:alpine"},
        }

        info = ContainerInfo.from_container(mock_container)

        assert info.id == "abc123"
        assert info.name == "shop-web"
        assert info.image == "nginx:alpine"
        assert info.status == ContainerStatus.RUNNING
        assert info.labels == {"com.sunspear.project": "shop"}
        assert info.created_at.year == 2024

    def test_from_container_unknown_status(self):
        """Test handling unknown status."""
        mock_container = MagicMock()
        mock_container.id = "abc123"
        mock_container.name = "test-container"
        mock_container.status = "removing-ish"
        mock_container.labels = {}
        mock_container.attrs = {"Created": "not-a-date"}

        info = ContainerInfo.from_container(mock_container)

        assert info.status == ContainerStatus.UNKNOWN
        assert info.created_at is None
        assert info.image == ""


class TestDockerOperation:
    """Tests for the docker_operation error mapping."""

    @pytest.mark.asyncio
    async def test_not_found(self):
        @docker_operation("inspect")
        async def op():
            raise NotFound("No such container: abc")

        with pytest.raises(EngineNotFoundError) as exc_info:
            await op()

        assert exc_info.value.operation == "inspect"
        assert exc_info.value.code == 502

    @pytest.mark.asyncio
    async def test_api_error(self):
        response = MagicMock(status_code=409)

        @docker_operation("create_container")
        async def op():
            raise APIError("Conflict", response=response)

        with pytest.raises(EngineError) as exc_info:
            await op()

        assert exc_info.value.details == {"status_code": 409}
        assert not isinstance(exc_info.value, EngineNotFoundError)

    @pytest.mark.asyncio
    async def test_other_errors_wrapped(self):
        @docker_operation("ping")
        async def op():
            raise DockerException("Error while fetching server API version")

        with pytest.raises(EngineError) as exc_info:
            await op()

        assert "server API version" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, DockerException)


class TestDockerService:
    """Tests for DockerService class."""

    def test_init(self):
        """The client is created lazily."""
        service = DockerService()

        assert service._client is None

    @pytest.mark.asyncio
    async def test_ping(self, service, mock_docker_client):
        assert await service.ping() is True
        mock_docker_client.ping.assert_called_once()

    @pytest.mark.asyncio
    async def test_ping_unavailable(self, service, mock_docker_client):
        mock_docker_client.ping.side_effect = DockerException("connection refused")

        with pytest.raises(EngineError) as exc_info:
            await service.ping()

        assert exc_info.value.operation == "ping"

    @pytest.mark.asyncio
    async def test_pull_image_drains_stream(self, service, mock_docker_client):
        chunks = [{"status": "Pulling fs layer"}, {"status": "Downloaded newer image"}]
        consumed = []

        def stream():
            for chunk in chunks:
                consumed.append(chunk)
                yield chunk

        mock_docker_client.api.pull.return_value = stream()

        await service.pull_image("nginx:alpine")

        mock_docker_client.api.pull.assert_called_once_with("nginx:alpine", stream=True, decode=True)
        assert consumed == chunks

    @pytest.mark.asyncio
    async def test_pull_image_stream_error(self, service, mock_docker_client):
        mock_docker_client.api.pull.return_value = iter([
            {"status": "Pulling"},
            {"error": "manifest for nginx:nope not found"},
        ])

        with pytest.raises(EngineError) as exc_info:
            await service.pull_image("nginx:nope")

        assert exc_info.value.message == "manifest for nginx:nope not found"
        assert exc_info.value.operation == "pull_image"

    @pytest.mark.asyncio
    async def test_create_container(self, service, mock_docker_client):
        api = mock_docker_client.api
        api.create_host_config.return_value = {"host": "config"}
        api.create_container.return_value = {"Id": "f00dbabe" * 8}
        spec = ContainerSpec(
            name="shop-db",
            image="postgres:16",
            environment=["POSTGRES_PASSWORD=x"],
            exposed_ports=["5432/tcp", "53/udp"],
            port_bindings={"5432/tcp": ("0.0.0.0", "15432")},
            binds=["shop-data:/var/lib/postgresql/data"],
            labels={"com.sunspear.project": "shop"},
            command=["postgres", "-c", "fsync=off"],
            restart_policy="always",
        )

        container_id = await service.create_container(spec)

        assert container_id == "f00dbabe" * 8
        api.create_host_config.assert_called_once_with(
            port_bindings={"5432/tcp": ("0.0.0.0", "15432")},
            binds=["shop-data:/var/lib/postgresql/data"],
            restart_policy={"Name": "always"},
        )
        api.create_container.assert_called_once_with(
            image="postgres:16",
            command=["postgres", "-c", "fsync=off"],
            environment=["POSTGRES_PASSWORD=x"],
            ports=[(5432, "tcp"), (53, "udp")],
            labels={"com.sunspear.project": "shop"},
            host_config={"host": "config"},
            name="shop-db",
        )

    @pytest.mark.asyncio
    async def test_create_container_minimal(self, service, mock_docker_client):
        api = mock_docker_client.api
        api.create_container.return_value = {"Id": "abc"}

        await service.create_container(ContainerSpec(name="p-s", image="busybox"))

        api.create_host_config.assert_called_once_with(port_bindings=None, binds=None, restart_policy=None)
        kwargs = api.create_container.call_args.kwargs
        assert kwargs["command"] is None
        assert kwargs["ports"] is None

    @pytest.mark.asyncio
    async def test_create_container_conflict(self, service, mock_docker_client):
        mock_docker_client.api.create_container.side_effect = APIError(
            "Conflict. The container name is already in use", response=MagicMock(status_code=409)
        )

        with pytest.raises(EngineError) as exc_info:
            await service.create_container(ContainerSpec(name="dup", image="busybox"))

        assert exc_info.value.operation == "create_container"

    @pytest.mark.asyncio
    async def test_lifecycle_calls(self, service, mock_docker_client):
        api = mock_docker_client.api

        await service.start_container("abc")
        await service.stop_container("abc", timeout=5)
        await service.restart_container("abc", timeout=3)
        await service.remove_container("abc", force=True)

        api.start.assert_called_once_with("abc")
        api.stop.assert_called_once_with("abc", timeout=5)
        api.restart.assert_called_once_with("abc", timeout=3)
        api.remove_container.assert_called_once_with("abc", force=True)

    @pytest.mark.asyncio
    async def test_stop_default_timeout(self, service, mock_docker_client):
        await service.stop_container("abc")

        mock_docker_client.api.stop.assert_called_once_with("abc", timeout=10)

    @pytest.mark.asyncio
    async def test_stop_missing_container(self, service, mock_docker_client):
        mock_docker_client.api.stop.side_effect = NotFound("No such container: abc")

        with pytest.raises(EngineNotFoundError):
            await service.stop_container("abc")

    @pytest.mark.asyncio
    async def test_network_calls(self, service, mock_docker_client):
        api = mock_docker_client.api
        api.create_network.return_value = {"Id": "net123456789abc"}

        network_id = await service.create_network("sunspear-shop", labels={"com.sunspear.project": "shop"})
        await service.connect_network(network_id, "c1", aliases=["web"])
        await service.remove_network(network_id)

        assert network_id == "net123456789abc"
        api.create_network.assert_called_once_with(
            "sunspear-shop", driver="bridge", internal=False, labels={"com.sunspear.project": "shop"}
        )
        api.connect_container_to_network.assert_called_once_with("c1", "net123456789abc", aliases=["web"])
        api.remove_network.assert_called_once_with("net123456789abc")

    @pytest.mark.asyncio
    async def test_list_containers_by_label(self, service, mock_docker_client):
        container = MagicMock(id="abc", status="exited", labels={}, attrs={})
        container.name = "shop-web"
        mock_docker_client.containers.list.return_value = [container]

        result = await service.list_containers(include_stopped=True, labels={"com.sunspear.project": "shop"})

        mock_docker_client.containers.list.assert_called_once_with(
            all=True, filters={"label": ["com.sunspear.project=shop"]}
        )
        assert [c.name for c in result] == ["shop-web"]
        assert result[0].status == ContainerStatus.EXITED

    @pytest.mark.asyncio
    async def test_get_container_logs(self, service, mock_docker_client):
        mock_docker_client.api.logs.return_value = b"line 1\nline 2\n"

        logs = await service.get_container_logs("abc", tail=2)

        assert logs == "line 1\nline 2\n"
        mock_docker_client.api.logs.assert_called_once_with("abc", stdout=True, stderr=True, tail=2)

    @pytest.mark.asyncio
    async def test_inspect_container(self, service, mock_docker_client):
        mock_docker_client.api.inspect_container.return_value = {"Id": "abc", "State": {"Status": "running"}}

        details = await service.inspect_container("abc")

        assert details["State"]["Status"] == "running"
        mock_docker_client.api.inspect_container.assert_called_once_with("abc")

    @pytest.mark.asyncio
    async def test_inspect_missing_container(self, service, mock_docker_client):
        mock_docker_client.api.inspect_container.side_effect = NotFound("No such container: abc")

        with pytest.raises(EngineNotFoundError) as exc_info:
            await service.inspect_container("abc")

        assert exc_info.value.operation == "inspect_container"


class TestEngineResources:
    """Tests for image, network and volume calls."""

    @pytest.mark.asyncio
    async def test_list_images(self, service, mock_docker_client):
        mock_docker_client.api.images.return_value = [
            {"Id": "sha256:aaa", "RepoTags": ["nginx:alpine"], "Size": 4096, "Created": 1704067200},
            {"Id": "sha256:bbb", "RepoTags": None, "Size": 10},
        ]

        images = await service.list_images()

        assert images[0] == ImageInfo(
            id="sha256:aaa", tags=["nginx:alpine"], size=4096, created_at=images[0].created_at
        )
        assert images[0].created_at.year == 2024
        assert images[1].tags == []
        assert images[1].created_at is None

    @pytest.mark.asyncio
    async def test_remove_image(self, service, mock_docker_client):
        await service.remove_image("nginx:alpine", force=True)

        mock_docker_client.api.remove_image.assert_called_once_with("nginx:alpine", force=True)

    @pytest.mark.asyncio
    async def test_remove_image_in_use(self, service, mock_docker_client):
        mock_docker_client.api.remove_image.side_effect = APIError(
            "conflict: unable to remove repository reference", response=MagicMock(status_code=409)
        )

        with pytest.raises(EngineError) as exc_info:
            await service.remove_image("nginx:alpine")

        assert exc_info.value.operation == "remove_image"
        assert exc_info.value.details == {"status_code": 409}

    @pytest.mark.asyncio
    async def test_list_networks(self, service, mock_docker_client):
        mock_docker_client.api.networks.return_value = [
            {
                "Id": "net1",
                "Name": "sunspear-shop",
                "Driver": "bridge",
                "Scope": "local",
                "Internal": False,
                "Labels": {"com.sunspear.project": "shop"},
            },
            {"Id": "net2", "Name": "host", "Driver": "host", "Labels": None},
        ]

        networks = await service.list_networks()

        assert networks[0] == NetworkInfo(
            id="net1",
            name="sunspear-shop",
            driver="bridge",
            scope="local",
            internal=False,
            labels={"com.sunspear.project": "shop"},
        )
        assert networks[1].labels == {}

    @pytest.mark.asyncio
    async def test_list_volumes(self, service, mock_docker_client):
        mock_docker_client.api.volumes.return_value = {
            "Volumes": [
                {
                    "Name": "shop-data",
                    "Driver": "local",
                    "Mountpoint": "/var/lib/docker/volumes/shop-data/_data",
                    "Labels": None,
                    "CreatedAt": "2024-03-01T10:00:00Z",
                }
            ],
            "Warnings": None,
        }

        volumes = await service.list_volumes()

        assert [v.name for v in volumes] == ["shop-data"]
        assert volumes[0].labels == {}
        assert volumes[0].created_at.month == 3

    @pytest.mark.asyncio
    async def test_list_volumes_none(self, service, mock_docker_client):
        mock_docker_client.api.volumes.return_value = {"Volumes": None, "Warnings": None}

        assert await service.list_volumes() == []

    @pytest.mark.asyncio
    async def test_remove_volume(self, service, mock_docker_client):
        await service.remove_volume("shop-data", force=True)

        mock_docker_client.api.remove_volume.assert_called_once_with("shop-data", force=True)

    @pytest.mark.asyncio
    async def test_remove_missing_volume(self, service, mock_docker_client):
        mock_docker_client.api.remove_volume.side_effect = NotFound("no such volume")

        with pytest.raises(EngineNotFoundError):
            await service.remove_volume("gone")

    def test_volume_info_bad_timestamp(self):
        info = VolumeInfo.from_attrs({"Name": "v", "CreatedAt": "yesterday"})

        assert info.created_at is None
