"""
Test ConvexHullAggregator
=========================

Collect/build lifecycle, unmapped short-circuit and factory selection.

Usage:
    pytest test_aggregator.py
"""

import json

import pytest
from shapely.errors import GEOSException

from geohull import (
    AggregatorConfig,
    ConvexHullAggregator,
    ConvexHullAggregatorFactory,
    Coordinate,
    GeometryType,
    InMemoryValueSource,
    StoreConfig,
)
from geohull.geometry import hull as hull_module


class CountingSource:
    """Value source that records which documents were read."""

    def __init__(self, values):
        self.values = values
        self.reads = []

    def points(self, doc_id):
        self.reads.append(doc_id)
        return [Coordinate(float(lon), float(lat)) for lon, lat in self.values.get(doc_id, [])]


@pytest.fixture
def source():
    return InMemoryValueSource({
        0: [(0, 0)],
        1: [(0, 1), (1, 0)],
        2: [(1, 1)],
        3: [(0.5, 0.5)],
        4: [(2.0, 3.0)],
        5: [],
    })


def test_build_polygon_bucket(source):
    aggregator = ConvexHullAggregator("hull", source)
    for doc_id in range(4):
        aggregator.collect(doc_id, 0)

    result = aggregator.build(0)

    assert result.name == "hull"
    assert result.geometry.type == GeometryType.POLYGON
    assert [c.as_tuple() for c in result.geometry.coordinates] == [
        (0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0)
    ]


def test_build_single_point_bucket(source):
    aggregator = ConvexHullAggregator("hull", source)
    aggregator.collect(4, 2)
    aggregator.collect(4, 2)

    result = aggregator.build(2)

    assert result.geometry.type == GeometryType.POINT
    assert result.geometry.coordinates == (Coordinate(2.0, 3.0),)


def test_buckets_are_independent(source):
    aggregator = ConvexHullAggregator("hull", source)
    aggregator.collect(0, 1)
    aggregator.collect(2, 1)
    aggregator.collect(4, 9)

    assert aggregator.build(1).geometry.type == GeometryType.LINE
    assert aggregator.build(9).geometry.type == GeometryType.POINT


def test_build_uncollected_bucket_is_empty(source):
    aggregator = ConvexHullAggregator("hull", source)
    aggregator.collect(0, 0)

    assert aggregator.build(1).is_empty
    assert aggregator.build(500).is_empty
    assert aggregator.build(1) == aggregator.build_empty()


def test_document_without_values_leaves_bucket_absent(source):
    aggregator = ConvexHullAggregator("hull", source)
    aggregator.collect(5, 3)
    aggregator.collect(42, 3)

    assert aggregator.build(3).is_empty
    assert 3 not in aggregator.store


def test_build_is_repeatable(source):
    aggregator = ConvexHullAggregator("hull", source)
    for doc_id in range(4):
        aggregator.collect(doc_id, 0)

    assert aggregator.build(0) == aggregator.build(0)


def test_build_reflects_later_collection(source):
    aggregator = ConvexHullAggregator("hull", source)
    aggregator.collect(0, 0)
    assert aggregator.build(0).geometry.type == GeometryType.POINT

    aggregator.collect(2, 0)

    assert aggregator.build(0).geometry.type == GeometryType.LINE


def test_unmapped_returns_empty_without_touching_store(monkeypatch):
    aggregator = ConvexHullAggregator("hull", None)

    def fail(*args, **kwargs):
        raise AssertionError("store must not be consulted")

    monkeypatch.setattr(aggregator.store, "get", fail)
    monkeypatch.setattr(aggregator.store, "collect_many", fail)

    aggregator.collect(0, 0)

    assert not aggregator.is_mapped
    assert aggregator.build(0).is_empty
    assert aggregator.build(7).to_dict() == {'name': 'hull', 'geometry': None}


def test_collect_reads_each_document_once():
    counting = CountingSource({0: [(0, 0)], 1: [(1, 1)]})
    aggregator = ConvexHullAggregator("hull", counting)

    aggregator.collect(0, 0)
    aggregator.collect(1, 0)
    aggregator.build(0)
    aggregator.build(0)

    assert counting.reads == [0, 1]


def test_metadata_passed_through(source):
    aggregator = ConvexHullAggregator("hull", source, metadata={'color': 'red'})
    aggregator.collect(4, 0)

    assert aggregator.build(0).metadata == {'color': 'red'}
    assert aggregator.build(1).metadata == {'color': 'red'}
    assert aggregator.build_empty().to_dict()['meta'] == {'color': 'red'}


def test_store_sizing_from_config(source):
    config = AggregatorConfig(store=StoreConfig(initial_capacity=2, growth_factor=2.0))
    aggregator = ConvexHullAggregator("hull", source, config=config)

    assert aggregator.store.capacity == 2

    aggregator.collect(4, 2)

    assert aggregator.store.capacity == 4


def test_results_survive_release(source):
    with ConvexHullAggregator("hull", source) as aggregator:
        aggregator.collect(0, 0)
        aggregator.collect(2, 0)
        result = aggregator.build(0)

    assert aggregator.store.capacity == 0
    assert result.geometry.type == GeometryType.LINE


def test_release_is_idempotent(source):
    aggregator = ConvexHullAggregator("hull", source)
    aggregator.collect(0, 0)

    aggregator.release()
    aggregator.release()

    assert aggregator.build(0).is_empty


def test_factory_creates_unmapped_for_missing_source():
    factory = ConvexHullAggregatorFactory("hull")

    aggregator = factory.create(None)

    assert not aggregator.is_mapped
    assert aggregator.name == "hull"


def test_factory_creates_mapped(source):
    factory = ConvexHullAggregatorFactory("hull", metadata={'k': 1})

    aggregator = factory.create(source)
    aggregator.collect(4, 0)

    assert aggregator.is_mapped
    assert aggregator.build(0).metadata == {'k': 1}


def test_negative_bucket_is_programmer_error(source):
    aggregator = ConvexHullAggregator("hull", source)

    with pytest.raises(ValueError):
        aggregator.collect(0, -1)


def logged_events(caplog, logger_name):
    return [
        json.loads(record.getMessage())['event']
        for record in caplog.records if record.name == logger_name
    ]


def test_log_level_is_per_aggregation(source, caplog):
    verbose = ConvexHullAggregator(
        "verbose", source, config=AggregatorConfig(name="verbose", log_level="DEBUG")
    )
    quiet = ConvexHullAggregator(
        "quiet", source, config=AggregatorConfig(name="quiet", log_level="ERROR")
    )

    verbose.build(99)
    quiet.build(99)

    assert logged_events(caplog, "geohull.aggregator.verbose") == ["bucket.empty"]
    assert logged_events(caplog, "geohull.aggregator.quiet") == []


def test_hull_rejection_logged_at_configured_level(source, caplog, monkeypatch):
    def reject(points):
        raise GEOSException("non-finite coordinates")

    monkeypatch.setattr(hull_module, "MultiPoint", reject)
    loud = ConvexHullAggregator(
        "loud", source, config=AggregatorConfig(name="loud", log_level="WARNING")
    )
    silent = ConvexHullAggregator(
        "silent", source, config=AggregatorConfig(name="silent", log_level="ERROR")
    )

    for aggregator in (loud, silent):
        aggregator.collect(1, 0)
        assert aggregator.build(0).is_empty

    assert logged_events(caplog, "geohull.aggregator.loud") == ["error.hull_computation"]
    assert logged_events(caplog, "geohull.aggregator.silent") == []
    assert logged_events(caplog, "geohull.hull") == []
