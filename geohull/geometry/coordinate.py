"""
Coordinate Module
=================

Exact-equality geographic coordinate.

Design:
- Frozen dataclass (hashable, immutable)
- Equality is exact float equality on both components, no epsilon
- (lon, lat) order, matching GeoJSON
"""

from dataclasses import dataclass
from typing import Any, Tuple


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable (longitude, latitude) pair.

    Two coordinates are the same set member only when both components
    compare equal as floats. (1.0, 2.0) and (1.0 + 1e-15, 2.0) are distinct.

    Attributes:
        lon: Longitude (x)
        lat: Latitude (y)
    """

    lon: float
    lat: float

    def as_tuple(self) -> Tuple[float, float]:
        """Return (lon, lat)."""
        return (self.lon, self.lat)

    def sort_key(self) -> Tuple[float, float]:
        """Canonical ordering key: lowest latitude first, then lowest longitude."""
        return (self.lat, self.lon)

    @classmethod
    def from_value(cls, value: Any) -> "Coordinate":
        """
        Parse a geo-point value.

        Accepted forms:
            [lon, lat] or (lon, lat)
            {"lon": ..., "lat": ...}
            "lat,lon"
            Coordinate (returned as is)

        Raises:
            ValueError: If the value is not a recognised geo-point form
        """
        if isinstance(value, Coordinate):
            return value

        try:
            if isinstance(value, dict):
                return cls(lon=float(value["lon"]), lat=float(value["lat"]))

            if isinstance(value, str):
                parts = value.split(",")
                if len(parts) != 2:
                    raise ValueError(f"expected 'lat,lon', got {value!r}")
                return cls(lon=float(parts[1]), lat=float(parts[0]))

            if isinstance(value, (list, tuple)) and len(value) == 2:
                return cls(lon=float(value[0]), lat=float(value[1]))
        except KeyError as e:
            raise ValueError(f"Missing geo-point field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid geo-point value {value!r}: {e}")

        raise ValueError(f"Unsupported geo-point value: {value!r}")

    def __repr__(self) -> str:
        return f"Coordinate(lon={self.lon!r}, lat={self.lat!r})"
