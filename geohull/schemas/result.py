"""
Hull Result Schema
==================

Bounded Context: Per-bucket aggregation results

This module defines the value object handed to downstream serializers.

Design:
- ConvexHullResult: named per-bucket result; geometry None means absent
- The empty result (unmapped field, untouched bucket) has the same shape
- to_dict()/from_dict() use GeoJSON geometry objects

Message Flow:
    BucketedPointStore → compute_convex_hull → HullGeometry → ConvexHullResult → JSON
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from geohull.geometry.shapes import HullGeometry


@dataclass(frozen=True)
class ConvexHullResult:
    """
    Result of building one bucket.

    Attributes:
        name: Aggregation name
        geometry: Hull geometry, None when the bucket is absent
        metadata: Caller metadata passed through unchanged

    Results compare by value but are not hashable.

    Example (absent):
        >>> ConvexHullResult(name="hull").to_dict()
        {'name': 'hull', 'geometry': None}
    """
    name: str
    geometry: Optional[HullGeometry] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    # Unhashable: metadata is a mutable dict.
    __hash__ = None

    @property
    def is_empty(self) -> bool:
        """True when no geometry was produced."""
        return self.geometry is None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        result: Dict[str, Any] = {
            'name': self.name,
            'geometry': self.geometry.to_dict() if self.geometry else None,
        }
        if self.metadata:
            result['meta'] = dict(self.metadata)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConvexHullResult':
        """Deserialize from dict.

        Raises:
            ValueError: If required fields missing or invalid
        """
        try:
            geometry_data = data.get('geometry')
            return cls(
                name=str(data['name']),
                geometry=(
                    HullGeometry.from_dict(geometry_data)
                    if geometry_data is not None else None
                ),
                metadata=dict(data.get('meta') or {})
            )
        except KeyError as e:
            raise ValueError(f"Missing required result field: {e}")
