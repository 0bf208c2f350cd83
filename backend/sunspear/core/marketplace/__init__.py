# -*- coding: utf-8 -*-
"""
App marketplace.

This module provides:
- The static app catalog
- Single-container install/uninstall
"""

from sunspear.core.marketplace.catalog import AppCatalog
from sunspear.core.marketplace.installer import MarketplaceInstaller, build_app_container_spec

__all__ = [
    "AppCatalog",
    "MarketplaceInstaller",
    "build_app_container_spec",
]
