# -*- coding: utf-8 -*-
"""
Compose manifest decoding.

Turns manifest text into a ``ManifestSpec``. Only the document shape is
checked here; dependency and port correctness are left to later stages so
that validation reports exactly what a deploy would see, without side effects.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import yaml

from sunspear.utils.exceptions import ManifestParseError


@dataclass
class ServiceSpec:
    """One service entry of a manifest.

    ``environment``, ``labels``, ``command`` and ``depends_on`` keep their raw
    decoded shape; the translators normalize them.
    """
    image: str = ""
    ports: List[str] = field(default_factory=list)
    environment: Any = None
    volumes: List[str] = field(default_factory=list)
    labels: Any = None
    command: Any = None
    restart: str = ""
    depends_on: Any = None
    networks: List[str] = field(default_factory=list)


@dataclass
class ManifestSpec:
    """A decoded manifest: version tag, services in document order, declarations."""
    version: str = ""
    services: Dict[str, ServiceSpec] = field(default_factory=dict)
    networks: Dict[str, Any] = field(default_factory=dict)
    volumes: Dict[str, Any] = field(default_factory=dict)

    @property
    def service_names(self) -> List[str]:
        return list(self.services.keys())


NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class ManifestLoader(yaml.SafeLoader):
    """SafeLoader that leaves plain numbers as their source text.

    YAML 1.1 reads ``2222:22`` as a base-60 integer and ``3.10`` as the float 3.1.
    Every manifest field is consumed as text, so numbers are never resolved.
    Booleans and nulls are still resolved.
    """


ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _scalar_list(value: Any, field_name: str, service: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestParseError(
            f"service {service}: '{field_name}' must be a list, got {type(value).__name__}"
        )
    items = []
    for item in value:
        if isinstance(item, (dict, list)):
            raise ManifestParseError(f"service {service}: '{field_name}' entries must be scalars")
        items.append(str(item))
    return items


def _mapping(value: Any, field_name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestParseError(f"'{field_name}' must be a mapping")
    return value


def _parse_service(name: str, raw: Any) -> ServiceSpec:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ManifestParseError(f"service {name} must be a mapping")

    image = raw.get("image")
    restart = raw.get("restart")

    return ServiceSpec(
        image="" if image is None else str(image),
        ports=_scalar_list(raw.get("ports"), "ports", name),
        environment=raw.get("environment"),
        volumes=_scalar_list(raw.get("volumes"), "volumes", name),
        labels=raw.get("labels"),
        command=raw.get("command"),
        restart="" if restart is None else str(restart),
        depends_on=raw.get("depends_on"),
        networks=_scalar_list(raw.get("networks"), "networks", name),
    )


def parse_manifest(text: str) -> ManifestSpec:
    """Decode manifest text.

    Args:
        text: YAML manifest

    Returns:
        ManifestSpec with at least one service

    Raises:
        ManifestParseError: Invalid YAML, wrong shape, or no services
    """
    try:
        document = yaml.load(text, Loader=ManifestLoader)
    except yaml.YAMLError as e:
        raise ManifestParseError(f"failed to parse YAML: {e}") from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ManifestParseError("manifest must be a mapping")

    raw_services = _mapping(document.get("services"), "services")
    if not raw_services:
        raise ManifestParseError("no services defined in compose file")

    version = document.get("version")

    return ManifestSpec(
        version="" if version is None else str(version),
        services={str(name): _parse_service(str(name), raw) for name, raw in raw_services.items()},
        networks=_mapping(document.get("networks"), "networks"),
        volumes=_mapping(document.get("volumes"), "volumes"),
    )
