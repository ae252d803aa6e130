"""
Configuration schema for the convex hull aggregation.

This module defines the configuration structure for the aggregator: its
name, the geo-point field it reads, point store sizing and log level.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict
import yaml

from geohull.logging import level_from_name
from geohull.storage import DEFAULT_GROWTH_FACTOR, DEFAULT_INITIAL_CAPACITY


@dataclass(frozen=True)
class StoreConfig:
    """Point store sizing."""

    initial_capacity: int = DEFAULT_INITIAL_CAPACITY
    growth_factor: float = DEFAULT_GROWTH_FACTOR

    def __post_init__(self):
        """Validate store configuration."""
        if not isinstance(self.initial_capacity, int) or self.initial_capacity < 0:
            raise ValueError(
                f"initial_capacity must be an int >= 0, got {self.initial_capacity!r}"
            )

        if not isinstance(self.growth_factor, (int, float)) or self.growth_factor <= 1.0:
            raise ValueError(
                f"growth_factor must be > 1.0, got {self.growth_factor!r}"
            )


@dataclass(frozen=True)
class AggregatorConfig:
    """
    Main configuration for a convex hull aggregation.

    Loaded from YAML and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    name: str = "convex_hull"
    geo_field: str = "location"
    store: StoreConfig = field(default_factory=StoreConfig)
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate aggregator configuration."""
        if not self.name:
            raise ValueError("name cannot be empty")

        if not self.geo_field:
            raise ValueError("geo_field cannot be empty")

        level_from_name(self.log_level)

    @property
    def logging_level(self) -> int:
        """log_level as a logging module constant."""
        return level_from_name(self.log_level)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregatorConfig":
        """
        Build configuration from a plain dict.

        Raises:
            ValueError: If values are invalid or unknown store keys are present
        """
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

        try:
            store = StoreConfig(**(data.get("store") or {}))
            return cls(
                name=data.get("name", "convex_hull"),
                geo_field=data.get("field", "location"),
                store=store,
                log_level=data.get("log_level", "INFO"),
            )
        except TypeError as e:
            raise ValueError(f"Invalid config: {e}")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "AggregatorConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            name: "hull_by_region"
            field: "location"
            log_level: "INFO"

            store:
              initial_capacity: 10
              growth_factor: 1.125

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If YAML or values are invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}")

        return cls.from_dict(data or {})
