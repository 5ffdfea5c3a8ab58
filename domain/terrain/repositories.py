"""Domain Port(s) for Terrain I/O.

Defines interfaces (Protocols) that infrastructure adapters must implement.
No concrete I/O here.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from .value_objects import DataBlockAddress


class ElevationReader(Protocol):
    """Positioned reads against an open elevation index."""

    def read_data_block_address(self, slot_offset: int) -> DataBlockAddress | None:
        """Read the data-block address stored at slot_offset.

        Returns None when no data block exists for the 10km cell.
        """
        ...

    def read_sample(self, block: DataBlockAddress, sample_offset: int) -> bytes:
        """Read the raw 2-byte elevation sample at block.base + sample_offset."""
        ...


class ElevationRepository(Protocol):
    """Port for opening an elevation index for one batch of reads.

    Implementations live in infrastructure (e.g., the OS Terrain 50 binary
    adapter). The returned context manager must release its resources on
    every exit path.
    """

    def open(self) -> AbstractContextManager[ElevationReader]:
        """Open the index read-only for the duration of a with block."""
        ...
