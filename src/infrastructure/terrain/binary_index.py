"""OS Terrain 50 binary index adapter for ElevationRepository.

Implements positioned reads against the custom binary index compiled from
OS Terrain 50 ASCII data, returning raw samples and explicit present/absent
data-block addresses to the domain.

Lifecycle (to avoid resource leaks):
1) Check the file exists and is a regular file
2) Open read-only with a context manager for one batch of lookups
3) Optionally verify the file signature
4) Seek + fixed-width read per address slot and sample
5) Close the handle on every exit path, including errors
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

import numpy as np

from domain.terrain.errors import (
    InvalidSignatureError,
    TruncatedDataFileError,
    UnreadableDataFileError,
)
from domain.terrain.services import (
    ADDRESS_LENGTH,
    ELEVATION_DATA_LENGTH,
    FILE_SIGNATURE,
)
from domain.terrain.value_objects import DataBlockAddress

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

_ADDRESS_DTYPE = np.dtype("<u4")


class BinaryIndexReader:
    """Positioned reads over an already-open binary index handle.

    Obtain one through BinaryIndexRepository.open(); the reader does not own
    the handle and must not be used after the with block exits.
    """

    def __init__(self, fp: BinaryIO, name: str) -> None:
        self._fp = fp
        self._name = name

    def _read_exact(self, offset: int, length: int) -> bytes:
        try:
            self._fp.seek(offset)
            data = self._fp.read(length)
        except OSError as e:
            logger.error(
                "Failed to read %s at offset %d (errno=%s, strerror=%s)",
                self._name,
                offset,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise UnreadableDataFileError(f"Could not read {self._name}") from e
        except (OverflowError, ValueError) as e:
            # Offset beyond what the OS can seek to, so necessarily past the end
            raise TruncatedDataFileError(offset, length, 0) from e
        if len(data) != length:
            raise TruncatedDataFileError(offset, length, len(data))
        return data

    def read_signature(self) -> bytes:
        """Return the bytes where the file signature should be."""
        return self._read_exact(0, len(FILE_SIGNATURE))

    def read_data_block_address(self, slot_offset: int) -> DataBlockAddress | None:
        """Read a 4-byte little-endian unsigned data-block address.

        A stored address of 0 means no data block exists for the 10km square
        (sea, or a landmass outside the dataset) and is returned as None.
        """
        raw = self._read_exact(slot_offset, ADDRESS_LENGTH)
        address = int(np.frombuffer(raw, dtype=_ADDRESS_DTYPE)[0])
        if address == 0:
            return None
        return DataBlockAddress(base=address)

    def read_sample(self, block: DataBlockAddress, sample_offset: int) -> bytes:
        """Read the raw 2-byte sample at block.base + sample_offset."""
        return self._read_exact(block.sample_position(sample_offset), ELEVATION_DATA_LENGTH)


class BinaryIndexRepository:
    """Infrastructure adapter for the OS Terrain 50 binary index file.

    Parameters
    ----------
    data_file: Path | str
        Path to the binary index produced by the OS Terrain 50 compiler.
    verify_signature: bool
        If True, every open() checks the file signature before any lookup
        and raises InvalidSignatureError on mismatch.
    """

    def __init__(self, data_file: Path | str, verify_signature: bool = False) -> None:
        self.data_file = Path(data_file)
        self.verify_signature = verify_signature

    def _check_exists(self) -> None:
        # Raise with full path to aid debugging; logs only ever carry the name
        if not self.data_file.exists():
            raise FileNotFoundError(str(self.data_file))
        if not self.data_file.is_file():
            raise UnreadableDataFileError(f"Not a regular file: {self.data_file.name}")

    @contextmanager
    def open(self) -> Iterator[BinaryIndexReader]:
        """Open the index read-only for one batch of lookups.

        Raises:
            FileNotFoundError: If the data file does not exist
            PermissionError: If the data file cannot be opened for reading
            UnreadableDataFileError: On any other OS error while opening
            InvalidSignatureError: If verify_signature is set and the check fails
        """
        self._check_exists()
        name = self.data_file.name

        try:
            fp = self.data_file.open("rb")
        except PermissionError as e:
            # Re-raise with filename only to avoid leaking full path in logs
            raise PermissionError(name) from e
        except OSError as e:
            logger.error(
                "Failed to open %s (errno=%s, strerror=%s)",
                name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise UnreadableDataFileError(f"Could not open {name}") from e

        with fp:
            reader = BinaryIndexReader(fp, name)
            if self.verify_signature:
                self._check_signature(reader)
            logger.debug("Binary index %s: opened for reading", name)
            yield reader

    def _check_signature(self, reader: BinaryIndexReader) -> None:
        try:
            signature = reader.read_signature()
        except TruncatedDataFileError as e:
            raise InvalidSignatureError(
                f"{self.data_file.name} is too short to be an OS Terrain 50 data file"
            ) from e
        if signature != FILE_SIGNATURE:
            logger.warning("Binary index %s: signature mismatch", self.data_file.name)
            raise InvalidSignatureError(
                f"{self.data_file.name} is not a valid OS Terrain 50 binary data file"
            )

    def verify(self) -> None:
        """Run the existence, readability and signature checks in one go.

        Useful while setting up a deployment; lookups do not need it once a
        valid data file is in place.
        """
        with self.open() as reader:
            if not self.verify_signature:
                self._check_signature(reader)
