# -*- coding: utf-8 -*-
"""
App catalog.

Loads the marketplace catalog from a JSON file, writing the bundled default
catalog there on first use.
"""

import json
import logging
import shutil
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from sunspear.config import MarketplaceConfig
from sunspear.db.schemas.app import CatalogApp
from sunspear.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "default_catalog.json"


class AppCatalog:
    """Static list of installable single-container apps"""

    def __init__(self, catalog_path: Optional[Path] = None, default_path: Optional[Path] = None):
        self.catalog_path = Path(catalog_path or MarketplaceConfig.CATALOG_PATH)
        self.default_path = Path(default_path or DEFAULT_CATALOG_PATH)
        self._apps: Optional[List[CatalogApp]] = None

    def load(self) -> List[CatalogApp]:
        """
        (Re)load the catalog file.

        Raises:
            ValueError: The catalog file is not valid JSON or has invalid entries
        """
        if not self.catalog_path.exists():
            self.catalog_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(self.default_path, self.catalog_path)
            logger.info(f"Wrote default app catalog to {self.catalog_path}")

        try:
            with open(self.catalog_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            apps = [CatalogApp.model_validate(entry) for entry in data.get("apps", [])]
        except (json.JSONDecodeError, ValidationError, AttributeError) as e:
            raise ValueError(f"Invalid app catalog {self.catalog_path}: {e}") from e

        self._apps = apps
        logger.info(f"Loaded {len(apps)} apps from {self.catalog_path}")
        return apps

    def list_apps(self) -> List[CatalogApp]:
        if self._apps is None:
            self.load()
        return list(self._apps)

    def get_app(self, app_id: str) -> CatalogApp:
        """
        Raises:
            NotFoundError: No app with this id
        """
        for app in self.list_apps():
            if app.id == app_id:
                return app
        raise NotFoundError(f"app {app_id} not found", resource_type="app", resource_id=app_id)
