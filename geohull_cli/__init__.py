"""
geohull CLI

Command-line interface for computing per-bucket convex hulls from a
documents file.
"""

from .cli import main, run_hull, load_documents

__all__ = ['main', 'run_hull', 'load_documents']
