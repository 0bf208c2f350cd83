# -*- coding: utf-8 -*-
"""
Compose stacks.

This module provides:
- Manifest decoding and field translation
- Service start order resolution
- Project deploy/stop/start/restart/delete with rollback
- Bundled compose templates
"""

from sunspear.core.compose.manifest import ManifestSpec, ServiceSpec, parse_manifest
from sunspear.core.compose.resolver import resolve_service_order
from sunspear.core.compose.orchestrator import ComposeOrchestrator, build_container_spec
from sunspear.core.compose.templates import ComposeTemplate, TemplateStore

__all__ = [
    "ManifestSpec",
    "ServiceSpec",
    "parse_manifest",
    "resolve_service_order",
    "ComposeOrchestrator",
    "build_container_spec",
    "ComposeTemplate",
    "TemplateStore",
]
