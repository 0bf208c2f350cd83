"""Pytest configuration and fixtures for backend tests."""

import os
import sys
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import MagicMock, AsyncMock

import pytest

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

# Settings are read at import time, so point the store and logs at a scratch
# directory before anything imports sunspear.
_scratch = Path(tempfile.mkdtemp(prefix="sunspear-tests-"))
os.environ.setdefault("SUNSPEAR_DB_PATH", str(_scratch / "sunspear-test.db"))
os.environ.setdefault("SUNSPEAR_LOG_DIR", str(_scratch / "logs"))

from sunspear.db.models import ComposeProject, InstalledApp  # noqa: E402
from sunspear.utils.exceptions import PersistenceError  # noqa: E402


class FakeProjectStore:
    """In-memory project store with the repository's interface."""

    def __init__(self):
        self.rows: Dict[int, ComposeProject] = {}
        self.next_id = 1
        self.fail_insert = False
        self.status_updates: List[tuple] = []

    async def insert_project(self, name, description, yaml_content, status, container_ids, network_ids, volume_names):
        if self.fail_insert:
            raise PersistenceError("disk I/O error", operation="insert_project")
        now = datetime(2024, 1, 1) + timedelta(seconds=self.next_id)
        project = ComposeProject(
            id=self.next_id,
            name=name,
            description=description,
            yaml_content=yaml_content,
            status=status,
            container_ids=container_ids,
            network_ids=network_ids,
            volume_names=volume_names,
            create_time=now,
            update_time=now,
        )
        self.rows[project.id] = project
        self.next_id += 1
        return project.id

    async def get_project(self, project_id) -> Optional[ComposeProject]:
        return self.rows.get(project_id)

    async def get_project_by_name(self, name) -> Optional[ComposeProject]:
        return next((p for p in self.rows.values() if p.name == name), None)

    async def list_projects(self) -> List[ComposeProject]:
        return sorted(self.rows.values(), key=lambda p: (p.create_time, p.id), reverse=True)

    async def update_status(self, project_id, status) -> bool:
        self.status_updates.append((project_id, status))
        if project_id not in self.rows:
            return False
        self.rows[project_id].status = status
        return True

    async def delete_project(self, project_id):
        return self.rows.pop(project_id, None)


class FakeAppStore:
    """In-memory installed-app store."""

    def __init__(self):
        self.rows: Dict[int, InstalledApp] = {}
        self.next_id = 1
        self.fail_insert = False

    async def insert_app(self, app_id, app_name, container_ids, config, status="running"):
        if self.fail_insert:
            raise PersistenceError("database is locked", operation="insert_app")
        app = InstalledApp(
            id=self.next_id,
            app_id=app_id,
            app_name=app_name,
            container_ids=container_ids,
            config=config,
            status=status,
            create_time=datetime(2024, 1, 1),
            update_time=datetime(2024, 1, 1),
        )
        self.rows[app.id] = app
        self.next_id += 1
        return app.id

    async def get_app(self, installed_id):
        return self.rows.get(installed_id)

    async def list_apps(self):
        return list(self.rows.values())

    async def delete_app(self, installed_id):
        return self.rows.pop(installed_id, None)


@pytest.fixture
def mock_docker_client():
    """Create mock Docker client."""
    mock = MagicMock()
    mock.ping.return_value = True
    mock.api = MagicMock()
    mock.containers = MagicMock()
    return mock


@pytest.fixture
def mock_engine():
    """Engine adapter double; container ids are derived from container names."""
    engine = MagicMock()
    engine.ping = AsyncMock(return_value=True)
    engine.pull_image = AsyncMock()
    engine.create_network = AsyncMock(return_value="net-1")
    engine.remove_network = AsyncMock()
    engine.connect_network = AsyncMock()
    engine.create_container = AsyncMock(side_effect=lambda spec: f"id-{spec.name}")
    engine.start_container = AsyncMock()
    engine.stop_container = AsyncMock()
    engine.restart_container = AsyncMock()
    engine.remove_container = AsyncMock()
    engine.list_containers = AsyncMock(return_value=[])
    engine.get_container_logs = AsyncMock(return_value="")
    engine.inspect_container = AsyncMock(return_value={})
    engine.list_images = AsyncMock(return_value=[])
    engine.remove_image = AsyncMock()
    engine.list_networks = AsyncMock(return_value=[])
    engine.list_volumes = AsyncMock(return_value=[])
    engine.remove_volume = AsyncMock()
    return engine


@pytest.fixture
def project_store():
    return FakeProjectStore()


@pytest.fixture
def app_store():
    return FakeAppStore()


@pytest.fixture
def two_tier_manifest():
    """db has no dependencies, web depends on db."""
    return """
version: "3.8"
services:
  web:
    image: nginx:alpine
    ports:
      - "8080:80"
    volumes:
      - static:/usr/share/nginx/html
      - ./conf:/etc/nginx/conf.d
    depends_on:
      - db
  db:
    image: postgres:16
    environment:
      POSTGRES_PASSWORD: secret
    volumes:
      - data:/var/lib/postgresql/data
    restart: unless-stopped
"""
