"""Single source of truth for the sample binary index fixture.

This module defines the sample index contents and the elevations tests
expect to read back. Used by both:
- scripts/gen_fixtures.py (writes tests/fixtures/osterrain50_sample.bin)
- tests/conftest.py (writes the same file under tmp_path)

Location: shared/ (not tests/) to avoid scripts->tests dependency.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shared.index_builder import gradient_block

SAMPLE_INDEX_NAME = "osterrain50_sample.bin"

# Snowdon summit, 10km square SH65 (grid SH)
SNOWDON = (260993, 354380)
SNOWDON_ELEVATION = 1084.9
# Sample indices (row, col) of SNOWDON inside its data block
SNOWDON_SAMPLE = (87, 19)

# Luccombe, 10km square SZ57; stored below sea level to cover negative values
LUCCOMBE = (456542, 78503)
LUCCOMBE_ELEVATION = -0.7
LUCCOMBE_SAMPLE = (170, 130)

# Irish Sea, square SC (Isle of Man area) - excluded, no data block
IRISH_SEA = (230000, 480000)


def sample_blocks() -> dict[tuple[int, int], NDArray[np.int16]]:
    """Data blocks of the sample index keyed by a point inside each square."""
    snowdon = gradient_block(500, 9_000)
    snowdon[SNOWDON_SAMPLE] = round(SNOWDON_ELEVATION * 10)

    luccombe = gradient_block(0, 2_000)
    luccombe[LUCCOMBE_SAMPLE] = round(LUCCOMBE_ELEVATION * 10)

    return {SNOWDON: snowdon, LUCCOMBE: luccombe}
