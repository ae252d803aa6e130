"""
Geo-point value sources.

A value source yields the coordinates a document carries for the aggregated
field. "No values for this document" is an empty sequence; "field unmapped
for the whole context" is the absence of a source (None) and is decided once,
when the aggregator is created.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence

from geohull.geometry.coordinate import Coordinate


class GeoPointValueSource(Protocol):
    """Per-document geo-point provider."""

    def points(self, doc_id: int) -> Sequence[Coordinate]:
        """Coordinates of doc_id (empty when the document has none)."""
        ...


class InMemoryValueSource:
    """
    Dict-backed value source.

    Usage:
        source = InMemoryValueSource({
            0: [(2.0, 3.0)],
            1: [[0.0, 0.0], {"lon": 1.0, "lat": 1.0}],
        })
        source.points(1)  # [Coordinate(0.0, 0.0), Coordinate(1.0, 1.0)]
        source.points(9)  # []
    """

    def __init__(self, values: Mapping[int, Iterable[Any]]):
        """
        Args:
            values: {doc_id: geo-point values}; values are parsed eagerly

        Raises:
            ValueError: If a value is not a recognised geo-point form
        """
        self._values: Dict[int, List[Coordinate]] = {}
        for doc_id, raw in values.items():
            try:
                self._values[doc_id] = [Coordinate.from_value(v) for v in raw]
            except ValueError as e:
                raise ValueError(f"Document {doc_id}: {e}")

    def points(self, doc_id: int) -> Sequence[Coordinate]:
        return self._values.get(doc_id, [])

    @classmethod
    def from_documents(
        cls,
        documents: Sequence[Mapping[str, Any]],
        field: str
    ) -> Optional["InMemoryValueSource"]:
        """
        Build a source from dict documents.

        Documents are keyed by their "id" entry, or by position when absent.
        A field value may be a single geo-point or a list of them.

        Returns:
            None when no document carries the field (field unmapped)

        Raises:
            ValueError: If a field value is malformed
        """
        values: Dict[int, List[Any]] = {}
        mapped = False
        for position, document in enumerate(documents):
            doc_id = int(document.get("id", position))
            if field not in document:
                continue
            mapped = True
            values[doc_id] = _as_point_list(document[field])

        if not mapped:
            return None
        return cls(values)

    def __len__(self) -> int:
        """Return number of documents with values."""
        return len(self._values)

    def __repr__(self) -> str:
        return f"InMemoryValueSource(documents={len(self._values)})"


def _as_point_list(value: Any) -> List[Any]:
    """Normalise a single geo-point or a list of them to a list."""
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    if isinstance(value, (list, tuple)):
        # [lon, lat] is one point; [[lon, lat], ...] is many
        if len(value) == 2 and all(isinstance(v, (int, float)) for v in value):
            return [value]
        return list(value)
    raise ValueError(f"Unsupported geo-point value: {value!r}")
