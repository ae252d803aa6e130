"""
Hull Pipeline Module
====================

Bounded Context: Bucket driver for convex hull aggregation.

Design:
- Orchestrator: collection phase, then build phase, then release
- Builder pattern: Fluent configuration
- Fail Fast: Validation at build time, not runtime

Usage:
    pipeline = (
        PipelineBuilder()
        .with_name("hull_by_region")
        .with_value_source(source)
        .add_document(0, bucket_id=0)
        .add_document(1, bucket_id=0)
        .add_document(2, bucket_id=5)
        .build()
    )
    results = pipeline.process()   # {0: ConvexHullResult, 5: ConvexHullResult}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from geohull.aggregator import ConvexHullAggregatorFactory
from geohull.config import AggregatorConfig
from geohull.logging import LogEvent, create_logger
from geohull.schemas.result import ConvexHullResult
from geohull.value_source import GeoPointValueSource


@dataclass
class PipelineConfig:
    """
    Pipeline configuration.

    Design:
    - All dependencies injected
    - Validated at construction
    """

    name: str
    value_source: Optional[GeoPointValueSource]
    assignments: List[Tuple[int, int]]
    aggregator_config: AggregatorConfig
    metadata: Dict[str, Any] = field(default_factory=dict)


class HullPipeline:
    """
    Runs documents through one aggregator and builds every touched bucket.

    Design:
    - Single Responsibility: orchestration only
    - Delegates collection and reduction to ConvexHullAggregator
    - Buckets that only received documents without values still get a
      (empty) result, in ascending ordinal order
    """

    def __init__(self, config: PipelineConfig):
        self.config = config
        self._validate_config()
        self.logger = create_logger(
            "pipeline",
            level=config.aggregator_config.logging_level,
            logger_name=f"geohull.pipeline.{config.name}"
        )

    def _validate_config(self) -> None:
        """Validate configuration (fail fast)."""
        if not self.config.name:
            raise ValueError("Pipeline name cannot be empty")

        for doc_id, bucket_id in self.config.assignments:
            if bucket_id < 0:
                raise ValueError(
                    f"Document {doc_id} assigned to negative bucket {bucket_id}"
                )

    def process(self) -> Dict[int, ConvexHullResult]:
        """
        Collect all documents, build every assigned bucket, release.

        Returns:
            {bucket_id: ConvexHullResult} for each bucket with at least one
            assigned document
        """
        factory = ConvexHullAggregatorFactory(
            name=self.config.name,
            config=self.config.aggregator_config,
            metadata=self.config.metadata
        )

        self.logger.info(
            event=LogEvent.PIPELINE_STARTED,
            message=f"Collecting {len(self.config.assignments)} documents",
            metadata={'name': self.config.name}
        )

        with factory.create(self.config.value_source) as aggregator:
            for doc_id, bucket_id in self.config.assignments:
                aggregator.collect(doc_id, bucket_id)

            buckets = sorted({bucket_id for _, bucket_id in self.config.assignments})
            results = {bucket_id: aggregator.build(bucket_id) for bucket_id in buckets}

        non_empty = sum(1 for r in results.values() if not r.is_empty)
        self.logger.info(
            event=LogEvent.PIPELINE_COMPLETED,
            message=f"Built {len(results)} buckets ({non_empty} with geometry)",
            metadata={
                'name': self.config.name,
                'bucket_count': len(results),
                'non_empty_count': non_empty,
            }
        )
        return results


class PipelineBuilder:
    """
    Fluent builder for HullPipeline.

    Design:
    - Immutable-ish: each with_*/add_* returns self for chaining
    - Validation deferred to build()
    """

    def __init__(self):
        self._name: Optional[str] = None
        self._value_source: Optional[GeoPointValueSource] = None
        self._config: Optional[AggregatorConfig] = None
        self._metadata: Dict[str, Any] = {}
        self._assignments: List[Tuple[int, int]] = []

    def with_name(self, name: str) -> "PipelineBuilder":
        """Set aggregation name (default: config name)."""
        self._name = name
        return self

    def with_value_source(
        self,
        value_source: Optional[GeoPointValueSource]
    ) -> "PipelineBuilder":
        """Set value source; None means the field is unmapped."""
        self._value_source = value_source
        return self

    def with_config(self, config: AggregatorConfig) -> "PipelineBuilder":
        """Set aggregator configuration."""
        self._config = config
        return self

    def with_metadata(self, metadata: Dict[str, Any]) -> "PipelineBuilder":
        """Set metadata copied into every result."""
        self._metadata = dict(metadata)
        return self

    def add_document(self, doc_id: int, bucket_id: int) -> "PipelineBuilder":
        """Assign one document to one bucket."""
        self._assignments.append((doc_id, bucket_id))
        return self

    def add_documents(self, assignments: Iterable[Tuple[int, int]]) -> "PipelineBuilder":
        """Assign many (doc_id, bucket_id) pairs."""
        for doc_id, bucket_id in assignments:
            self.add_document(doc_id, bucket_id)
        return self

    def build(self) -> HullPipeline:
        """
        Build pipeline.

        Raises:
            ValueError: If an assignment is invalid
        """
        config = self._config or AggregatorConfig()
        return HullPipeline(PipelineConfig(
            name=self._name or config.name,
            value_source=self._value_source,
            assignments=list(self._assignments),
            aggregator_config=config,
            metadata=dict(self._metadata),
        ))
