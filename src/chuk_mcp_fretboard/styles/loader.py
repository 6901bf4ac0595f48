"""
Style loader - discovers and loads style packs.

Style packs can come from:
1. Built-in library (shipped with package)
2. Project styles (user's project/styles directory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_mcp_fretboard.constants import DEFAULT_STYLE, ErrorMessages
from chuk_mcp_fretboard.models.style import Cadences, StyleMetadata, StylePack

logger = logging.getLogger(__name__)


class StyleLoader:
    """
    Discovers and loads style pack definitions.

    Style packs are loaded from YAML files in the library and project
    directories. Project styles override library styles with the same name.
    Loaded packs are frozen and cached, so one loader can be shared by every
    generation call.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
        default_style: str = DEFAULT_STYLE,
    ):
        """
        Initialize the style loader.

        Args:
            library_path: Path to built-in style library
            project_path: Path to project styles directory
            default_style: Pack used when a requested style is unknown
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self.default_style = default_style
        self._cache: dict[str, StylePack] = {}

    def list_styles(self) -> list[StyleMetadata]:
        """
        List all available styles.

        Returns styles from both library and project, with project
        styles taking precedence.
        """
        return [StyleMetadata.from_style(style) for style in self.all_styles()]

    def all_styles(self) -> list[StylePack]:
        """Load every available style pack, project overriding library."""
        styles: dict[str, StylePack] = {}
        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                style = self._load_style_file(path)
                if style:
                    styles[style.name] = style
        return list(styles.values())

    def get_style(self, name: str) -> StylePack | None:
        """
        Get a style by name.

        Project styles take precedence over library styles.

        Args:
            name: Style name

        Returns:
            StylePack if found, None otherwise
        """
        if name in self._cache:
            return self._cache[name]

        for directory in (self.project_path, self.library_path):
            if directory is None:
                continue
            style_file = directory / f"{name}.yaml"
            if style_file.exists():
                style = self._load_style_file(style_file)
                if style:
                    self._cache[name] = style
                    return style

        return None

    def resolve(self, name: str | None) -> StylePack:
        """
        Get a style, falling back to the default pack for unknown names.

        Raises:
            ValueError: If even the default pack cannot be loaded
        """
        if name:
            style = self.get_style(name)
            if style:
                return style
            logger.debug("Unknown style %r, using %s", name, self.default_style)

        style = self.get_style(self.default_style)
        if style is None:
            raise ValueError(ErrorMessages.STYLE_NOT_FOUND.format(name=self.default_style))
        return style

    def _load_style_file(self, path: Path) -> StylePack | None:
        """Load a style pack from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)

            return self._parse_style(data)
        except (OSError, yaml.YAMLError, ValidationError, AttributeError, TypeError, ValueError):
            logger.warning("Skipping unreadable style file %s", path, exc_info=True)
            return None

    def _parse_style(self, data: dict[str, Any]) -> StylePack:
        """Parse a style pack from YAML data."""
        cadence_data = data.get("cadences", {})
        cadences = Cadences(
            **{quality: tuple(states) for quality, states in cadence_data.items()}
        )

        return StylePack(
            name=data.get("name", "unknown"),
            display_name=data.get("display_name", ""),
            description=data.get("description", ""),
            start=data.get("start", {}),
            transitions=data.get("transitions", {}),
            allowed_borrowed=frozenset(data.get("allowed_borrowed", [])),
            default_extensions=data.get("default_extensions", {}),
            templates=data.get("templates", []),
            cadences=cadences,
            rest_probability=data.get("rest_probability", 0.0),
        )

    def clear_cache(self) -> None:
        """Clear the style cache."""
        self._cache.clear()
