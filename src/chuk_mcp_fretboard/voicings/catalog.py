"""
Template catalog - the library of movable voicing templates.

Templates are read once from YAML and kept in file order, which is the
preference order the builder starts from.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_fretboard.models.voicing import VoicingTemplate

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_FILE = Path(__file__).parent / "library" / "templates.yaml"


class TemplateLibrary:
    """
    Read-only collection of voicing templates.

    Unlike style packs, a malformed template is a configuration error and
    raises on load instead of being skipped.
    """

    def __init__(self, path: Path | None = None):
        """
        Initialize the library.

        Args:
            path: YAML catalog to read (defaults to the built-in catalog)
        """
        self.path = path or DEFAULT_TEMPLATES_FILE
        self._templates: tuple[VoicingTemplate, ...] | None = None

    @classmethod
    def from_templates(cls, templates: list[VoicingTemplate]) -> TemplateLibrary:
        """Build a library from in-memory templates (no file access)."""
        library = cls()
        library._templates = tuple(templates)
        return library

    @property
    def templates(self) -> tuple[VoicingTemplate, ...]:
        """All templates in preference order."""
        if self._templates is None:
            self._templates = self._load()
        return self._templates

    def templates_for(self, kind: str) -> list[VoicingTemplate]:
        """Templates applicable to a chord kind, in preference order."""
        return [template for template in self.templates if template.applies_to(kind)]

    def get_template(self, template_id: str) -> VoicingTemplate | None:
        for template in self.templates:
            if template.id == template_id:
                return template
        return None

    def kinds(self) -> list[str]:
        """Every chord kind covered by at least one template."""
        seen: dict[str, None] = {}
        for template in self.templates:
            for kind in template.kinds:
                seen.setdefault(kind, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self.templates)

    def _load(self) -> tuple[VoicingTemplate, ...]:
        with open(self.path) as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        templates = tuple(
            VoicingTemplate.model_validate(entry) for entry in data.get("templates", [])
        )
        logger.debug("Loaded %d voicing templates from %s", len(templates), self.path)
        return templates
