# -*- coding: utf-8 -*-
"""
Constants for compose stacks and marketplace containers.
"""

from sunspear.config import DockerConfig

# Labels injected on every managed container, used to find a project's containers
PROJECT_LABEL = f"{DockerConfig.LABEL_PREFIX}.project"
SERVICE_LABEL = f"{DockerConfig.LABEL_PREFIX}.service"
APP_LABEL = f"{DockerConfig.LABEL_PREFIX}.app"

# Project network: "{NETWORK_PREFIX}-{project}"
NETWORK_PREFIX = DockerConfig.NETWORK_PREFIX
NETWORK_DRIVER = "bridge"

DEFAULT_PROTOCOL = "tcp"
DEFAULT_HOST_IP = "0.0.0.0"

TEMPLATE_SUFFIX = ".yml"
