#!/usr/bin/env python3
"""Generate the synthetic OS Terrain 50 binary index fixture.

Writes a small but complete index: signature, all 91 grid-block headers and
data blocks for the squares listed in shared/fixtures_expected.py. Values are
synthetic, not real terrain data.

Usage:
    python scripts/gen_fixtures.py

Output:
    tests/fixtures/osterrain50_sample.bin

Dependencies:
    This script imports from shared/ (not tests/) to avoid circular
    dependencies between scripts and tests packages.
"""

from __future__ import annotations

from pathlib import Path

from application.elevation_lookup import ElevationLookupService
from domain.terrain.value_objects import Location
from shared.fixtures_expected import (
    IRISH_SEA,
    LUCCOMBE,
    LUCCOMBE_ELEVATION,
    SAMPLE_INDEX_NAME,
    SNOWDON,
    SNOWDON_ELEVATION,
    sample_blocks,
)
from shared.index_builder import write_index_file

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


def main() -> int:
    ensure_dir()

    path = write_index_file(FIXTURES_DIR / SAMPLE_INDEX_NAME, sample_blocks())
    size = path.stat().st_size
    print(f"  Created: {path.name} ({size / 1024:.1f}KB)")

    # Read the known values back through the real lookup path
    service = ElevationLookupService.from_data_file(path, verify_signature=True)
    expected = {SNOWDON: SNOWDON_ELEVATION, LUCCOMBE: LUCCOMBE_ELEVATION, IRISH_SEA: 0.0}
    locations = [Location(easting=e, northing=n) for e, n in expected]
    results = service.lookup(locations)

    for location, want in zip(results, expected.values()):
        if location.elevation != want:
            print(
                f"ERROR: ({location.easting}, {location.northing}) read back "
                f"{location.elevation}, expected {want}"
            )
            return 1
        print(f"  ({location.easting}, {location.northing}) -> {location.elevation}")

    print(f"\nFixture {path.name} verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
