"""
Configuration Module

YAML configuration in three layers, later layers winning key by key:

1. ``config.yaml`` beside this module, or the bundled ``config.example.yaml``
   (``SUNSPEAR_CONFIG`` may point at another base file)
2. ``config.local.yaml`` beside this module, when present
3. a few environment variables for paths (``SUNSPEAR_DB_PATH``, ``SUNSPEAR_LOG_DIR``)
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List
from functools import lru_cache
from pydantic_settings import BaseSettings

CONFIG_DIR = Path(__file__).parent


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge ``override`` into a copy of ``base``; nested sections merge, anything else is replaced.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML configuration {path}: {e}") from e
    except OSError as e:
        raise RuntimeError(f"Error loading configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data


def _base_config_path() -> Path:
    explicit = os.environ.get("SUNSPEAR_CONFIG")
    if explicit:
        return Path(explicit)

    for name in ("config.yaml", "config.example.yaml"):
        if (CONFIG_DIR / name).exists():
            return CONFIG_DIR / name

    raise FileNotFoundError(
        f"Configuration file not found. Please create {CONFIG_DIR / 'config.yaml'} "
        f"based on {CONFIG_DIR / 'config.example.yaml'}"
    )


def load_yaml_config() -> Dict[str, Any]:
    """
    Load the base configuration and apply ``config.local.yaml`` on top.

    Returns:
        Dictionary of top-level sections (server, database, docker, ...)
    """
    config = _read_yaml(_base_config_path())

    local_path = CONFIG_DIR / "config.local.yaml"
    if local_path.exists():
        config = deep_merge(config, _read_yaml(local_path))

    return config


_config = load_yaml_config()


# ============================================================================
# Database Configuration
# ============================================================================

class DatabaseConfig:
    """Embedded SQLite store configuration"""

    _db_config = _config.get("database", {})

    PATH = os.environ.get("SUNSPEAR_DB_PATH") or _db_config.get("path", "./data/database/sunspear.db")
    BUSY_TIMEOUT = _db_config.get("busy_timeout", 30)
    ECHO = _db_config.get("echo", False)

    @classmethod
    def ensure_exists(cls):
        """Ensure the database directory exists"""
        Path(cls.PATH).parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_async_database_url(cls) -> str:
        return f"sqlite+aiosqlite:///{cls.PATH}"


# ============================================================================
# Server Configuration
# ============================================================================

class ServerConfig:
    """Server configuration management"""

    _server_config = _config.get("server", {})

    HOST = _server_config.get("host", "0.0.0.0")
    PORT = _server_config.get("port", 8080)
    RELOAD = _server_config.get("reload", False)
    DEBUG = _server_config.get("debug", False)
    CORS_ORIGINS = _server_config.get("cors_origins", ["http://localhost:3000", "http://localhost:5173"])


# ============================================================================
# Docker Engine Configuration
# ============================================================================

class DockerConfig:
    """Container engine configuration"""

    _docker_config = _config.get("docker", {})

    # Empty means docker.from_env() (honours DOCKER_HOST)
    BASE_URL = _docker_config.get("base_url", "")
    NETWORK_PREFIX = _docker_config.get("network_prefix", "sunspear")
    LABEL_PREFIX = _docker_config.get("label_prefix", "com.sunspear")
    # Seconds
    STOP_TIMEOUT = _docker_config.get("stop_timeout", 10)
    RESTART_PAUSE = _docker_config.get("restart_pause", 1.0)


# ============================================================================
# Compose Configuration
# ============================================================================

class ComposeConfig:
    """Compose stack configuration"""

    _compose_config = _config.get("compose", {})

    TEMPLATES_DIR = Path(_compose_config.get("templates_dir", "./data/apps/compose-templates"))


# ============================================================================
# Marketplace Configuration
# ============================================================================

class MarketplaceConfig:
    """App marketplace configuration"""

    _marketplace_config = _config.get("marketplace", {})

    CATALOG_PATH = Path(_marketplace_config.get("catalog_path", "./data/apps/apps.json"))


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Log file configuration"""

    _log_config = _config.get("logging", {})

    DIR = os.environ.get("SUNSPEAR_LOG_DIR") or _log_config.get("dir", "./logs")
    LEVEL = _log_config.get("level", "INFO")
    FILE_NAME = _log_config.get("file_name", "sunspear")
    BACKUP_COUNT = _log_config.get("backup_count", 30)


# ============================================================================
# Pydantic Settings
# ============================================================================

class Settings(BaseSettings):
    """Application settings with validation"""

    # Application
    app_name: str = "Sunspear"
    debug: bool = ServerConfig.DEBUG

    # Database
    database_url: str = DatabaseConfig.get_async_database_url()

    # Docker
    docker_base_url: str = DockerConfig.BASE_URL
    docker_network_prefix: str = DockerConfig.NETWORK_PREFIX
    docker_label_prefix: str = DockerConfig.LABEL_PREFIX
    docker_stop_timeout: int = DockerConfig.STOP_TIMEOUT
    docker_restart_pause: float = DockerConfig.RESTART_PAUSE

    # Compose / Marketplace
    compose_templates_dir: Path = ComposeConfig.TEMPLATES_DIR
    marketplace_catalog_path: Path = MarketplaceConfig.CATALOG_PATH

    # Server
    host: str = ServerConfig.HOST
    port: int = ServerConfig.PORT
    cors_origins: List[str] = ServerConfig.CORS_ORIGINS

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "SUNSPEAR_"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    DatabaseConfig.ensure_exists()
    return Settings()


__all__ = [
    "load_yaml_config",
    "DatabaseConfig",
    "ServerConfig",
    "DockerConfig",
    "ComposeConfig",
    "MarketplaceConfig",
    "LogConfig",
    "Settings",
    "get_settings",
]
