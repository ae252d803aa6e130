"""
Hull Reducer Module
===================

Stateless reduction of a point set to its convex hull.

Design:
- Pure function (no state, input never mutated)
- GEOS (via shapely) does the hull numerics
- Output is canonical: counter-clockwise rings starting at the vertex with
  the lowest latitude (then lowest longitude), line endpoints ordered by the
  same key, so any insertion order of the same set gives the same geometry

Degenerate inputs:
    0 points           -> None (absent)
    1 point            -> Point
    2 points           -> LineString
    >=3 collinear      -> LineString between the two extreme points
    otherwise          -> Polygon
"""

from typing import Iterable, List, Optional

import numpy as np
from shapely.errors import GEOSException
from shapely.geometry import LineString, MultiPoint, Point, Polygon
from shapely.geometry.polygon import orient

from geohull.geometry.coordinate import Coordinate
from geohull.geometry.shapes import GeometryType, HullGeometry
from geohull.logging import LogEvent, StructuredLogger, create_logger

_logger = create_logger("hull")


def compute_convex_hull(
    points: Iterable[Coordinate],
    logger: Optional[StructuredLogger] = None
) -> Optional[HullGeometry]:
    """
    Compute the convex hull of a set of distinct coordinates.

    Args:
        points: Distinct coordinates (a PointSet); order is irrelevant
        logger: Receives geometry engine rejections (default: geohull.hull)

    Returns:
        HullGeometry, or None when there are no points or the geometry
        engine rejects the input (non-finite coordinates)
    """
    log = logger or _logger
    unique: List[Coordinate] = list(points)
    if not unique:
        return None

    if len(unique) == 1:
        return HullGeometry(type=GeometryType.POINT, coordinates=(unique[0],))

    array = np.array([c.as_tuple() for c in unique], dtype=np.float64)
    try:
        hull = MultiPoint(array).convex_hull
    except GEOSException as e:
        log.warning(
            event=LogEvent.HULL_COMPUTATION_ERROR,
            message="Geometry engine rejected point set",
            metadata={'point_count': len(unique)},
            exc_info=e
        )
        return None

    if hull.is_empty:
        return None
    if isinstance(hull, Polygon):
        return _canonical_polygon(hull)
    if isinstance(hull, LineString):
        return _canonical_line(hull)
    if isinstance(hull, Point):
        return HullGeometry(
            type=GeometryType.POINT,
            coordinates=(Coordinate(float(hull.x), float(hull.y)),)
        )

    log.warning(
        event=LogEvent.HULL_COMPUTATION_ERROR,
        message=f"Unexpected hull geometry type: {hull.geom_type}",
        metadata={'point_count': len(unique)}
    )
    return None


def _canonical_line(hull: LineString) -> HullGeometry:
    """Extreme points of a (possibly multi-vertex) collinear hull."""
    ends = sorted(
        {Coordinate(float(x), float(y)) for x, y in hull.coords},
        key=Coordinate.sort_key
    )
    return HullGeometry(
        type=GeometryType.LINE,
        coordinates=(ends[0], ends[-1])
    )


def _canonical_polygon(hull: Polygon) -> HullGeometry:
    """Counter-clockwise closed ring starting at the canonical vertex."""
    ring = np.asarray(orient(hull, sign=1.0).exterior.coords)[:-1]

    # lexsort: last key is primary -> latitude, then longitude
    start = int(np.lexsort((ring[:, 0], ring[:, 1]))[0])
    ring = np.roll(ring, -start, axis=0)

    vertices = tuple(Coordinate(float(x), float(y)) for x, y in ring)
    return HullGeometry(
        type=GeometryType.POLYGON,
        coordinates=vertices + (vertices[0],)
    )
