"""Root pytest configuration for all tests.

Index files are built on the fly under tmp_path from the definitions in
shared/fixtures_expected.py, so no binary fixtures need to be checked in.
Run scripts/gen_fixtures.py to write the same sample file to tests/fixtures/.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from shared.fixtures_expected import SAMPLE_INDEX_NAME, sample_blocks
from shared.index_builder import write_index_file


@pytest.fixture
def sample_index(tmp_path: Path) -> Path:
    """Path to a freshly written sample index (Snowdon and Luccombe blocks)."""
    return write_index_file(tmp_path / SAMPLE_INDEX_NAME, sample_blocks())


@pytest.fixture
def empty_index(tmp_path: Path) -> Path:
    """Path to an index with a full header section but no data blocks."""
    return write_index_file(tmp_path / "all_sea.bin", {})
