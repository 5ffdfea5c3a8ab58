"""Terrain Bounded Context - Domain Services.

Pure domain logic for OS Terrain 50 lookups.
NO I/O operations - file reading is implemented by infrastructure adapters
under `src/infrastructure/terrain/binary_index.py` via domain ports.

Binary index layout (little-endian throughout):
    signature | 91 grid-block headers | data blocks

    Each grid-block header covers one 100km square of the 7 x 13 British
    National Grid block and holds a 2-byte grid identifier ("SV", "NN", ...)
    followed by 100 four-byte data-block addresses, one per 10km square.
    Each data block is a 200 x 200 array of int16 samples (elevation x 10)
    at 50m spacing, rows running south to north.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from domain.terrain.value_objects import GridAddress, Location

# ---------------------------------------------------------------------------
# Constants: British National Grid
# ---------------------------------------------------------------------------
GRIDS_PER_ROW_100 = 7  # 100km grids per row in the full 91 grid block
METRES_IN_100_GRID = 100_000
METRES_IN_10_GRID = 10_000
DATA_COLS_IN_10_GRID = 10  # 10km squares per row of a 100km grid

# ---------------------------------------------------------------------------
# Constants: Binary Index Format
# ---------------------------------------------------------------------------
FILE_SIGNATURE = b"OSTerrain50"
MAX_NUM_DATA_BLOCKS = 100  # Address slots per grid-block header
GRID_IDENT_LENGTH = 2
ADDRESS_LENGTH = 4
HEADER_BLOCK_LENGTH = GRID_IDENT_LENGTH + MAX_NUM_DATA_BLOCKS * ADDRESS_LENGTH

ELEVATIONS_PER_COL = 200  # Samples per row/column of a data block
ELEVATION_DATA_LENGTH = 2
ELEVATION_DISTANCE = 50  # Metres between samples, also the infill spacing
DATA_BLOCK_LENGTH = ELEVATIONS_PER_COL * ELEVATIONS_PER_COL * ELEVATION_DATA_LENGTH

# Explicit byte order keeps decoding independent of the host
_SAMPLE_DTYPE = np.dtype("<i2")


# ---------------------------------------------------------------------------
# Address Resolution
# ---------------------------------------------------------------------------
def resolve_address(easting: int, northing: int) -> GridAddress:
    """Map a grid coordinate to its offsets in the binary index.

    All arithmetic is integer floor division and modulo, so equal inputs
    always yield equal offsets. Coordinates outside the GB envelope are not
    rejected; they resolve to offsets whose contents are the caller's concern.

    Args:
        easting: Metres east of the false origin
        northing: Metres north of the false origin

    Returns:
        GridAddress with the header offset, the address slot offset and the
        sample offset relative to the data block's base address.

    Example:
        >>> resolve_address(260993, 354380).address_slot_offset
        9483
    """
    # 100km grid block within the header section
    cols_100 = easting // METRES_IN_100_GRID
    rows_100 = northing // METRES_IN_100_GRID
    grid_blocks_to_jump = rows_100 * GRIDS_PER_ROW_100 + cols_100
    header_offset = len(FILE_SIGNATURE) + grid_blocks_to_jump * HEADER_BLOCK_LENGTH

    # 10km square within the grid block
    east_rem = easting % METRES_IN_100_GRID
    north_rem = northing % METRES_IN_100_GRID
    addr_col = east_rem // METRES_IN_10_GRID
    addr_row = north_rem // METRES_IN_10_GRID
    slots_to_jump = addr_row * DATA_COLS_IN_10_GRID + addr_col
    address_slot_offset = header_offset + GRID_IDENT_LENGTH + slots_to_jump * ADDRESS_LENGTH

    # 50m sample within the data block
    east_fine = east_rem % METRES_IN_10_GRID
    north_fine = north_rem % METRES_IN_10_GRID
    sample_col = east_fine // ELEVATION_DISTANCE
    sample_row = north_fine // ELEVATION_DISTANCE
    sample_offset = (sample_row * ELEVATIONS_PER_COL + sample_col) * ELEVATION_DATA_LENGTH

    return GridAddress(
        header_offset=header_offset,
        address_slot_offset=address_slot_offset,
        sample_offset=sample_offset,
    )


def resolve_location(location: Location) -> GridAddress:
    """Resolve offsets for a Location."""
    return resolve_address(location.easting, location.northing)


# ---------------------------------------------------------------------------
# Elevation Decoding
# ---------------------------------------------------------------------------
def decode_elevation(raw: bytes) -> float:
    """Decode a stored 2-byte sample to metres.

    Samples are signed 16-bit little-endian integers holding elevation x 10,
    so one decimal place survives storage.

    Raises:
        ValueError: If raw is not exactly 2 bytes
    """
    if len(raw) != ELEVATION_DATA_LENGTH:
        raise ValueError(
            f"Elevation sample must be {ELEVATION_DATA_LENGTH} bytes, got {len(raw)}"
        )
    elevation_x10 = int(np.frombuffer(raw, dtype=_SAMPLE_DTYPE)[0])
    return elevation_x10 / 10


def decode_unsigned_elevation(value: int) -> float:
    """Decode a sample already extracted as an unsigned 16-bit integer.

    Values >= 2**15 are negative elevations read without sign, e.g. 65529
    is -7 and decodes to -0.7.
    """
    if value >= 2**15:
        value -= 2**16
    return value / 10


# ---------------------------------------------------------------------------
# Infill Generation
# ---------------------------------------------------------------------------
def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def get_infills(start: Location, end: Location, include_start: bool) -> list[Location]:
    """Create locations every ELEVATION_DISTANCE metres between two points.

    Chaining segments (p1, p2), (p2, p3), ... with include_start True only
    for the first yields an ordered polyline without duplicates:

        get_infills(p1, p2, True)   -> p1, infills, p2
        get_infills(p2, p3, False)  ->     infills, p3

    Positions are accumulated in floats from start and only rounded to whole
    metres when emitted, so rounding never compounds along the segment.

    Args:
        start: Segment start
        end: Segment end
        include_start: Whether to emit start as the first location

    Returns:
        [start?] + intermediate locations + [end]; generated locations have
        no elevation.
    """
    coords: list[Location] = [start] if include_start else []

    easting_diff = float(end.easting - start.easting)
    northing_diff = float(end.northing - start.northing)
    diagonal_diff = math.hypot(easting_diff, northing_diff)

    if diagonal_diff > ELEVATION_DISTANCE:
        steps = diagonal_diff / ELEVATION_DISTANCE
        delta_east = easting_diff / steps
        delta_north = northing_diff / steps

        cumulative_east = float(start.easting)
        cumulative_north = float(start.northing)
        for _ in range(math.ceil(steps) - 1):
            cumulative_east += delta_east
            cumulative_north += delta_north
            coords.append(
                Location(
                    easting=_round_half_away(cumulative_east),
                    northing=_round_half_away(cumulative_north),
                )
            )

    coords.append(end)
    return coords


def expand_with_infills(locations: Sequence[Location]) -> list[Location]:
    """Infill every consecutive pair of locations into one polyline.

    Fewer than two locations are returned unchanged (as a new list).
    """
    if len(locations) < 2:
        return list(locations)

    expanded: list[Location] = []
    for i in range(1, len(locations)):
        expanded.extend(get_infills(locations[i - 1], locations[i], include_start=(i == 1)))
    return expanded
