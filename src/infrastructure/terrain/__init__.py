"""Infrastructure adapters for the terrain bounded context.

This module provides the infrastructure layer implementations for terrain
operations, including reading elevations from the OS Terrain 50 binary index.
"""

from .binary_index import BinaryIndexReader, BinaryIndexRepository

__all__ = ["BinaryIndexReader", "BinaryIndexRepository"]
