"""
geohull CLI - Main entry point.

Computes per-bucket convex hulls for a YAML file of documents and prints the
results as JSON.
"""

import argparse
import json
import sys
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from geohull.config import AggregatorConfig
from geohull.pipeline import PipelineBuilder
from geohull.value_source import InMemoryValueSource


def load_documents(documents_path: str) -> List[Dict[str, Any]]:
    """
    Load documents from a YAML file.

    Accepted layouts:
        - a top-level list of documents
        - a mapping with a "documents" list

    Each document is a mapping with a "bucket" ordinal, an optional "id"
    and the geo-point field.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If YAML is invalid or documents are malformed
    """
    path = Path(documents_path)

    if not path.exists():
        raise FileNotFoundError(f"Documents file not found: {documents_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {documents_path}: {e}")

    if isinstance(data, dict):
        data = data.get("documents")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of documents in {documents_path}")

    for position, document in enumerate(data):
        if not isinstance(document, dict):
            raise ValueError(f"Document {position} is not a mapping")
        if "bucket" not in document:
            raise ValueError(f"Document {position} has no 'bucket'")
        bucket = document["bucket"]
        if isinstance(bucket, bool) or not isinstance(bucket, int) or bucket < 0:
            raise ValueError(
                f"Document {position} bucket must be an int >= 0, "
                f"got {document['bucket']!r}"
            )

    return data


def run_hull(
    documents_path: str,
    config_path: Optional[str] = None,
    field: Optional[str] = None,
    name: Optional[str] = None
) -> Dict[str, Any]:
    """
    Run the hull pipeline over a documents file.

    Returns:
        {"<bucket>": result dict, ...} in ascending bucket order
    """
    config = (
        AggregatorConfig.from_yaml(Path(config_path))
        if config_path else AggregatorConfig()
    )
    geo_field = field or config.geo_field

    documents = load_documents(documents_path)
    source = InMemoryValueSource.from_documents(documents, geo_field)

    assignments = [
        (int(document.get("id", position)), int(document["bucket"]))
        for position, document in enumerate(documents)
    ]

    results = (
        PipelineBuilder()
        .with_name(name or config.name)
        .with_config(config)
        .with_value_source(source)
        .add_documents(assignments)
        .build()
        .process()
    )
    return {str(bucket_id): result.to_dict() for bucket_id, result in results.items()}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="geohull-cli",
        description="geohull CLI - Per-bucket convex hulls of geo-points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Hulls for every bucket in a documents file
  geohull-cli hull data/documents.yaml

  # Aggregation settings from YAML, pretty-printed
  geohull-cli hull data/documents.yaml --config config/hull.yaml --indent 2

  # Read another geo-point field
  geohull-cli hull data/documents.yaml --field pickup
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    hull = subparsers.add_parser('hull', help='Compute per-bucket convex hulls')
    hull.add_argument('documents', help='Path to documents YAML')
    hull.add_argument('--config', help='Path to aggregator config YAML')
    hull.add_argument('--field', help='Geo-point field (default: from config)')
    hull.add_argument('--name', help='Aggregation name (default: from config)')
    hull.add_argument(
        '--indent',
        type=int,
        default=None,
        help='JSON indent (default: compact)'
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == 'hull':
            output = run_hull(args.documents, args.config, args.field, args.name)
            print(json.dumps(output, indent=args.indent))

    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
