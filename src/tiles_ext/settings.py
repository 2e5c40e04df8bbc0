from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import IO, List, Optional

import yaml

from .exceptions import SettingsError
from .lines import LineType

logger = logging.getLogger(__name__)


@dataclass
class LineSettings:
    default_mode: str = "covering"
    exclusive: bool = False

    @property
    def line_type(self) -> LineType:
        """The configured mode as a LineType; raises UnknownLineModeError if invalid."""
        return LineType.parse(self.default_mode)


@dataclass
class MapSettings:
    wall_chars: List[str] = field(default_factory=lambda: ["#"])


@dataclass
class LoggingSettings:
    level: str = "INFO"


@dataclass
class Settings:
    lines: LineSettings = field(default_factory=LineSettings)
    map: MapSettings = field(default_factory=MapSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @staticmethod
    def _read(stream: IO[str], source: object) -> dict:
        data = yaml.safe_load(stream) or {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings in {source} must be a mapping, got {type(data).__name__}")
        return data

    @classmethod
    def _merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in overlay.items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def _section(data: dict, name: str, section_cls: type) -> dict:
        raw = data.get(name) or {}
        if not isinstance(raw, dict):
            raise SettingsError(f"'{name}' settings must be a mapping")
        unknown = sorted(set(raw) - {f.name for f in dataclasses.fields(section_cls)})
        if unknown:
            raise SettingsError(f"Unknown '{name}' settings: {', '.join(map(str, unknown))}")
        return raw

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        unknown = sorted(set(data) - {f.name for f in dataclasses.fields(cls)})
        if unknown:
            raise SettingsError(f"Unknown settings sections: {', '.join(map(str, unknown))}")
        map_raw = cls._section(data, "map", MapSettings)
        return Settings(
            lines=LineSettings(**cls._section(data, "lines", LineSettings)),
            map=MapSettings(wall_chars=[str(c) for c in map_raw.get("wall_chars", ["#"])]),
            logging=LoggingSettings(**cls._section(data, "logging", LoggingSettings)),
        )

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load the packaged defaults, overlaid with ``user_path`` when it exists.

        Raises SettingsError for unknown keys or non-mapping sections, and
        yaml.YAMLError for malformed YAML.
        """
        with resources.files("tiles_ext.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
            data = cls._read(f, "default_settings.yaml")

        if user_path is not None:
            if user_path.exists():
                with user_path.open("r", encoding="utf-8") as f:
                    data = cls._merge(data, cls._read(f, user_path))
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        settings = cls._from_dict(data)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(dataclasses.asdict(self), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
