"""
Configuration schema for polygon filters.

Defines the YAML layout for a polygon filter: the field to read, the
polygon vertices and the log level of the geopoly_filter loggers.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from geopoly_filter.errors import InvalidFieldError, InvalidPolygonError
from geopoly_filter.filter import GeoPolygonFilter
from geopoly_filter.logging import LogEvent, create_logger
from geopoly_filter.segment import FieldDataCache

logger = create_logger("config")

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class FilterConfig:
    """
    Polygon filter configuration.

    Loaded from YAML and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    field_name: str
    points: Tuple[Tuple[float, float], ...]
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate filter configuration."""
        if not self.field_name or not isinstance(self.field_name, str):
            raise InvalidFieldError(
                f"field_name must be a non-empty string, got {self.field_name!r}"
            )

        try:
            points = tuple((float(lat), float(lon)) for lat, lon in self.points)
        except (TypeError, ValueError) as e:
            raise InvalidPolygonError(
                f"points must be a list of [lat, lon] pairs: {e}"
            ) from e
        if len(points) < 3:
            raise InvalidPolygonError(
                f"Polygon for '{self.field_name}' must have at least 3 points, "
                f"got {len(points)}"
            )
        object.__setattr__(self, "points", points)

        level = str(self.log_level).upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )
        object.__setattr__(self, "log_level", level)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterConfig":
        """
        Build configuration from a parsed mapping.

        Raises:
            ValueError: If required keys are missing
        """
        if not isinstance(data, dict):
            raise ValueError(f"Filter config must be a mapping, got {type(data).__name__}")

        missing = {"field_name", "points"} - set(data)
        if missing:
            raise ValueError(f"Filter config missing keys: {sorted(missing)}")

        return cls(
            field_name=data["field_name"],
            points=data["points"],
            log_level=data.get("log_level", "INFO"),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "FilterConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            field_name: "location"
            log_level: "INFO"
            points:
              - [0.0, 0.0]
              - [0.0, 10.0]
              - [10.0, 10.0]
              - [10.0, 0.0]
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f)

        config = cls.from_dict(data)
        logger.info(
            event=LogEvent.CONFIG_LOADED,
            message="Filter configuration loaded",
            metadata={
                'path': str(yaml_path),
                'field': config.field_name,
                'vertices': len(config.points),
            }
        )
        return config

    def apply_log_level(self) -> None:
        """Set the level of every geopoly_filter logger."""
        logging.getLogger("geopoly_filter").setLevel(self.logging_level)
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("geopoly_filter."):
                logging.getLogger(name).setLevel(self.logging_level)

    def build_filter(
        self,
        field_data_cache: Optional[FieldDataCache] = None
    ) -> GeoPolygonFilter:
        return GeoPolygonFilter(
            points=self.points,
            field_name=self.field_name,
            field_data_cache=field_data_cache,
        )
