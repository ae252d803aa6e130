"""
Geometry Layer
==============

Bounded Context: Pure geometric values and the hull reduction.

Responsibilities:
- Coordinate value object (exact equality)
- Hull shapes (Point, LineString, Polygon)
- Convex hull reduction with canonical output
- NO state, NO point accumulation
"""

from geohull.geometry.coordinate import Coordinate
from geohull.geometry.shapes import GeometryType, HullGeometry
from geohull.geometry.hull import compute_convex_hull

__all__ = [
    "Coordinate",
    "GeometryType",
    "HullGeometry",
    "compute_convex_hull",
]
