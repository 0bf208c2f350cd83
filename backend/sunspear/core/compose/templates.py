# -*- coding: utf-8 -*-
"""
Compose template store.

Templates are ``*.yml`` files in one directory. Bundled defaults are copied
in on startup when missing; existing files are never overwritten.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from sunspear.config import ComposeConfig
from sunspear.core.compose.constants import TEMPLATE_SUFFIX
from sunspear.utils.exceptions import BusinessException, NotFoundError

logger = logging.getLogger(__name__)

BUNDLED_TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass
class ComposeTemplate:
    """One compose template"""
    name: str
    description: str
    yaml: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "yaml": self.yaml,
        }


class TemplateStore:
    """
    Compose template lookup

    Usage:
        store = TemplateStore()
        store.ensure_defaults()
        template = store.get_template("wordpress")
    """

    def __init__(self, templates_dir: Optional[Path] = None, bundled_dir: Optional[Path] = None):
        self.templates_dir = Path(templates_dir or ComposeConfig.TEMPLATES_DIR)
        self.bundled_dir = Path(bundled_dir or BUNDLED_TEMPLATES_DIR)

    def ensure_defaults(self) -> List[str]:
        """
        Copy bundled templates that are missing from the templates directory.

        Returns:
            Names of the templates written
        """
        self.templates_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for source in sorted(self.bundled_dir.glob(f"*{TEMPLATE_SUFFIX}")):
            target = self.templates_dir / source.name
            if target.exists():
                continue
            shutil.copyfile(source, target)
            written.append(source.stem)

        if written:
            logger.info(f"Seeded compose templates: {', '.join(written)}")
        return written

    def list_templates(self) -> List[ComposeTemplate]:
        """All templates sorted by name; empty when the directory is missing."""
        if not self.templates_dir.is_dir():
            return []

        return [
            self._load(path)
            for path in sorted(self.templates_dir.glob(f"*{TEMPLATE_SUFFIX}"))
            if path.is_file()
        ]

    def get_template(self, name: str) -> ComposeTemplate:
        """
        Read one template by name.

        Raises:
            BusinessException: Name is empty or escapes the templates directory
            NotFoundError: No such template
        """
        if not name or ".." in name or "/" in name or "\\" in name:
            raise BusinessException(f"invalid template name: {name!r}")

        base = self.templates_dir.resolve()
        path = (self.templates_dir / f"{name}{TEMPLATE_SUFFIX}").resolve()
        if path.parent != base:
            raise BusinessException(f"invalid template name: {name!r}")

        if not path.is_file():
            raise NotFoundError(f"template {name} not found", resource_type="template", resource_id=name)

        return self._load(path)

    @staticmethod
    def _load(path: Path) -> ComposeTemplate:
        name = path.stem
        return ComposeTemplate(
            name=name,
            description=f"{name[:1].upper()}{name[1:]} compose stack",
            yaml=path.read_text(encoding="utf-8"),
        )
