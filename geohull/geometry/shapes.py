"""
Hull Shapes Module
==================

Pure geometric representations of a hull - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Tagged by GeometryType (GeoJSON type names)
- Fail-fast validation in __post_init__
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from geohull.geometry.coordinate import Coordinate


class GeometryType(str, Enum):
    """GeoJSON geometry type of a hull."""
    POINT = "Point"
    LINE = "LineString"
    POLYGON = "Polygon"


@dataclass(frozen=True)
class HullGeometry:
    """
    Immutable hull geometry.

    Invariants:
        - POINT: exactly 1 coordinate
        - LINE: exactly 2 coordinates (the extreme points)
        - POLYGON: closed ring (first == last) of at least 4 coordinates

    Example:
        >>> line = HullGeometry(
        ...     type=GeometryType.LINE,
        ...     coordinates=(Coordinate(0.0, 0.0), Coordinate(2.0, 2.0))
        ... )
        >>> line.to_dict()
        {'type': 'LineString', 'coordinates': [[0.0, 0.0], [2.0, 2.0]]}
    """
    type: GeometryType
    coordinates: Tuple[Coordinate, ...]

    def __post_init__(self):
        """Validate invariants."""
        count = len(self.coordinates)
        if self.type == GeometryType.POINT and count != 1:
            raise ValueError(f"Point geometry needs 1 coordinate, got {count}")
        if self.type == GeometryType.LINE and count != 2:
            raise ValueError(f"Line geometry needs 2 coordinates, got {count}")
        if self.type == GeometryType.POLYGON:
            if count < 4:
                raise ValueError(
                    f"Polygon ring needs at least 4 coordinates, got {count}"
                )
            if self.coordinates[0] != self.coordinates[-1]:
                raise ValueError("Polygon ring must be closed (first == last)")

    @property
    def vertex_count(self) -> int:
        """Number of distinct vertices (closing point not counted)."""
        if self.type == GeometryType.POLYGON:
            return len(self.coordinates) - 1
        return len(self.coordinates)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a GeoJSON geometry object."""
        positions = [[c.lon, c.lat] for c in self.coordinates]
        if self.type == GeometryType.POINT:
            coordinates: Any = positions[0]
        elif self.type == GeometryType.LINE:
            coordinates = positions
        else:
            coordinates = [positions]
        return {'type': self.type.value, 'coordinates': coordinates}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HullGeometry':
        """Deserialize from a GeoJSON geometry object.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            geometry_type = GeometryType(data['type'])
            raw = data['coordinates']
            if geometry_type == GeometryType.POINT:
                positions = [raw]
            elif geometry_type == GeometryType.LINE:
                positions = list(raw)
            else:
                if len(raw) != 1:
                    raise ValueError("hull polygons have exactly one ring")
                positions = list(raw[0])

            return cls(
                type=geometry_type,
                coordinates=tuple(Coordinate.from_value(p) for p in positions)
            )
        except KeyError as e:
            raise ValueError(f"Missing required geometry field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid geometry data: {e}")
