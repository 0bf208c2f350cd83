"""Tests for configuration loading."""

import logging
import os

import pytest

from sunspear.config import DatabaseConfig, DockerConfig, LogConfig, Settings, log_print
from sunspear.config.logging_config import redact, summarize
from sunspear.config.settings import deep_merge, load_yaml_config
from sunspear.services.docker_service import ContainerSpec, ContainerStatus


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_override_wins(self):
        assert deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_sections_merge(self):
        base = {"docker": {"stop_timeout": 10, "network_prefix": "sunspear"}}
        local = {"docker": {"stop_timeout": 30}}

        merged = deep_merge(base, local)

        assert merged == {"docker": {"stop_timeout": 30, "network_prefix": "sunspear"}}
        assert base["docker"]["stop_timeout"] == 10

    def test_scalar_replaces_section(self):
        assert deep_merge({"docker": {"base_url": ""}}, {"docker": None}) == {"docker": None}


class TestLoadYamlConfig:
    """Tests for load_yaml_config."""

    def test_explicit_base_file(self, monkeypatch, tmp_path):
        path = tmp_path / "alt.yaml"
        path.write_text("docker:\n  stop_timeout: 3\n")
        monkeypatch.setenv("SUNSPEAR_CONFIG", str(path))

        assert load_yaml_config()["docker"]["stop_timeout"] == 3

    def test_non_mapping_rejected(self, monkeypatch, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        monkeypatch.setenv("SUNSPEAR_CONFIG", str(path))

        with pytest.raises(ValueError):
            load_yaml_config()

    def test_bundled_example_loads(self, monkeypatch):
        monkeypatch.delenv("SUNSPEAR_CONFIG", raising=False)

        config = load_yaml_config()

        assert config["docker"]["network_prefix"] == "sunspear"


class TestConfigSections:
    """Tests for the resolved configuration."""

    def test_environment_overrides_paths(self):
        assert DatabaseConfig.PATH == os.environ["SUNSPEAR_DB_PATH"]
        assert LogConfig.DIR == os.environ["SUNSPEAR_LOG_DIR"]

    def test_database_url(self):
        assert DatabaseConfig.get_async_database_url() == f"sqlite+aiosqlite:///{DatabaseConfig.PATH}"

    def test_docker_defaults(self):
        assert DockerConfig.NETWORK_PREFIX == "sunspear"
        assert DockerConfig.LABEL_PREFIX == "com.sunspear"
        assert DockerConfig.STOP_TIMEOUT == 10

    def test_settings_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SUNSPEAR_PORT", "9999")

        settings = Settings()

        assert settings.port == 9999
        assert settings.app_name == "Sunspear"


class TestLogPrint:
    """Tests for the call-tracing decorator and its helpers."""

    def test_redact_env_assignments(self):
        assert redact("POSTGRES_PASSWORD=secret TZ=UTC") == "POSTGRES_PASSWORD=*** TZ=UTC"
        assert redact("api_key: abc123") == "api_key: ***"

    def test_summarize_dataclass_and_enum(self):
        spec = ContainerSpec(name="shop-db", image="postgres:16", environment=["POSTGRES_PASSWORD=x"])

        text = summarize(spec)

        assert '"name": "shop-db"' in text
        assert "POSTGRES_PASSWORD=***" in text
        assert summarize(ContainerStatus.RUNNING) == "running"

    def test_summarize_truncates(self):
        assert summarize("x" * 2000).endswith("... (truncated)")

    @pytest.mark.asyncio
    async def test_async_passthrough(self, caplog):
        @log_print
        async def deploy(name):
            return {"name": name}

        with caplog.at_level(logging.INFO):
            assert await deploy("shop") == {"name": "shop"}

        assert "name='shop'" in caplog.text
        assert "[Return]" in caplog.text

    def test_sync_reraises(self, caplog):
        @log_print
        def explode():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            explode()

        assert "[Exception]" in caplog.text
