"""YAML-backed configuration for the HTML numbering converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from html_numbering.exceptions import ConfigError


@dataclass
class StyleConfig:
    """Word paragraph style names used by the generator."""

    heading_prefix: str = "Heading"  # e.g. "Heading 1", "Heading 2"
    body_style: str = "Normal"
    list_paragraph_style: str = "List Paragraph"


@dataclass
class NumberingConfig:
    """Layout of generated numbering levels, in twentieths of a point."""

    indent_twips: int = 720
    hanging_twips: int = 360
    number_headings: bool = True


@dataclass
class Config:
    """Top-level converter configuration."""

    style: StyleConfig = field(default_factory=StyleConfig)
    numbering: NumberingConfig = field(default_factory=NumberingConfig)
    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        """Load configuration from a YAML file."""
        try:
            text = path.read_text(encoding="utf-8")
            data = yaml.safe_load(text) or {}
        except FileNotFoundError:
            raise ConfigError(f"Config file not found: {path}")
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}")

        return cls._from_dict(data)

    @classmethod
    def from_yaml_string(cls, text: str) -> Config:
        """Load configuration from a YAML string."""
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML: {exc}")
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> Config:
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top level, got {type(data).__name__}")

        style_data = data.get("style") or {}
        numbering_data = data.get("numbering") or {}

        return cls(
            style=StyleConfig(**{k: v for k, v in style_data.items() if k in StyleConfig.__dataclass_fields__}),
            numbering=NumberingConfig(
                **{k: v for k, v in numbering_data.items() if k in NumberingConfig.__dataclass_fields__}
            ),
            verbose=data.get("verbose", False),
        )

    @classmethod
    def default(cls) -> Config:
        """Return the default configuration."""
        return cls()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> Config:
        """Load config from path, or return defaults if path is None."""
        if path is None:
            return cls.default()
        return cls.from_yaml(path)
