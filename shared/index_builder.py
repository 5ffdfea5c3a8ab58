"""Writer for small synthetic OS Terrain 50 binary index files.

Used by scripts/gen_fixtures.py and by tests that need a real file on disk.
Real data files are produced by the separate OS Terrain 50 compiler; this
writer only covers what fixtures need: a signature, the full header section
and a handful of data blocks.

Location: shared/ (not tests/) to avoid scripts->tests dependency.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from domain.terrain.services import (
    ADDRESS_LENGTH,
    DATA_BLOCK_LENGTH,
    ELEVATIONS_PER_COL,
    FILE_SIGNATURE,
    GRIDS_PER_ROW_100,
    HEADER_BLOCK_LENGTH,
    METRES_IN_100_GRID,
    resolve_address,
)

GRID_ROWS_100 = 13  # 100km grid rows in the full 91 grid block
HEADER_SECTION_LENGTH = GRIDS_PER_ROW_100 * GRID_ROWS_100 * HEADER_BLOCK_LENGTH


def grid_identifier(col_100: int, row_100: int) -> str:
    """Two-letter OS grid square name for a 100km grid (e.g. "SH").

    Letters run A-Z without I, in 5x5 blocks from the north-west.
    """
    first = (19 - row_100) - (19 - row_100) % 5 + (col_100 + 10) // 5
    second = (19 - row_100) * 5 % 25 + col_100 % 5
    letters = []
    for index in (first, second):
        if index > 7:
            index += 1  # Skip "I"
        letters.append(chr(ord("A") + index))
    return "".join(letters)


def build_index(
    blocks: Mapping[tuple[int, int], NDArray[np.integer]],
    signature: bytes = FILE_SIGNATURE,
) -> bytes:
    """Build index file contents.

    Args:
        blocks: Data blocks keyed by any (easting, northing) inside the 10km
            square they cover. Values are 200x200 arrays of elevation x 10,
            row 0 being the southernmost row.
        signature: File signature; override to produce invalid files (keep
            the length unchanged so addresses still resolve)

    Returns:
        Complete file contents. 10km squares without a block get address 0.
    """
    header = bytearray(HEADER_SECTION_LENGTH)
    for row_100 in range(GRID_ROWS_100):
        for col_100 in range(GRIDS_PER_ROW_100):
            grid_offset = (row_100 * GRIDS_PER_ROW_100 + col_100) * HEADER_BLOCK_LENGTH
            header[grid_offset : grid_offset + 2] = grid_identifier(
                col_100, row_100
            ).encode("ascii")

    data = bytearray()
    next_address = len(signature) + HEADER_SECTION_LENGTH
    for (easting, northing), elevations_x10 in blocks.items():
        if easting >= GRIDS_PER_ROW_100 * METRES_IN_100_GRID:
            raise ValueError(f"Easting {easting} is outside the grid")
        samples = np.asarray(elevations_x10)
        if samples.shape != (ELEVATIONS_PER_COL, ELEVATIONS_PER_COL):
            raise ValueError(f"Data block must be 200x200, got {samples.shape}")

        # Slot offsets are absolute; the header section follows the signature
        slot = resolve_address(easting, northing).address_slot_offset - len(FILE_SIGNATURE)
        header[slot : slot + ADDRESS_LENGTH] = np.array(
            [next_address], dtype="<u4"
        ).tobytes()

        data += samples.astype("<i2").tobytes()
        next_address += DATA_BLOCK_LENGTH

    return signature + bytes(header) + bytes(data)


def write_index_file(
    path: Path,
    blocks: Mapping[tuple[int, int], NDArray[np.integer]],
    signature: bytes = FILE_SIGNATURE,
) -> Path:
    """Write a synthetic index file to path and return path."""
    path.write_bytes(build_index(blocks, signature=signature))
    return path


def gradient_block(low_x10: int = 0, high_x10: int = 10_000) -> NDArray[np.int16]:
    """200x200 block of elevations x 10 rising from south-west to north-east."""
    values = np.linspace(
        low_x10, high_x10, ELEVATIONS_PER_COL * ELEVATIONS_PER_COL
    ).round()
    return values.astype(np.int16).reshape(ELEVATIONS_PER_COL, ELEVATIONS_PER_COL)
