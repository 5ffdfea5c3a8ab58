"""OS Terrain 50 Domain Layer.

This package contains the core business logic organized by bounded contexts:
- terrain: Grid locations, binary index addressing, elevation decoding, infill
"""

from domain import terrain

__all__ = ["terrain"]
