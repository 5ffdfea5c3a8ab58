"""Terrain Bounded Context - Error Hierarchy.

Custom exceptions for elevation lookups against the OS Terrain 50 binary index.

Missing data files surface as the builtin FileNotFoundError and permission
problems as PermissionError; everything else derives from TerrainError.
"""

from __future__ import annotations


class TerrainError(Exception):
    """Base error for terrain operations."""


# ---------------------------------------------------------------------------
# Request Errors
# ---------------------------------------------------------------------------
class EmptyInputError(TerrainError):
    """No locations were supplied to a lookup."""


class InvalidRequestError(TerrainError):
    """Request payload does not match the expected location list shape."""


# ---------------------------------------------------------------------------
# Data File Errors
# ---------------------------------------------------------------------------
class UnreadableDataFileError(TerrainError):
    """Data file exists but could not be opened or read."""


class TruncatedDataFileError(TerrainError):
    """A read returned fewer bytes than the fixed field width.

    Attributes:
        offset: Absolute file offset of the failed read
        expected: Number of bytes requested
        actual: Number of bytes returned
    """

    def __init__(self, offset: int, expected: int, actual: int) -> None:
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Short read at offset {offset}: expected {expected} bytes, got {actual}"
        )


class InvalidSignatureError(TerrainError):
    """Data file does not start with the OS Terrain 50 signature."""
