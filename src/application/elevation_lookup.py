"""Elevation lookup application service.

Orchestrates domain services and the binary index adapter: optional infill
expansion, then one pass over the data file resolving, reading and decoding
each location.

The request/response helpers at the bottom carry the JSON contract of the
browser client ({"locations": [...], "doInfills": bool} in, a location list
out) without tying the core to any HTTP framework.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domain.terrain.errors import EmptyInputError, InvalidRequestError
from domain.terrain.repositories import ElevationRepository
from domain.terrain.services import (
    decode_elevation,
    expand_with_infills,
    resolve_location,
)
from domain.terrain.value_objects import ElevationRequest, Location
from infrastructure.terrain.binary_index import BinaryIndexRepository

logger = logging.getLogger(__name__)

# Data file used when a caller does not name one
DEFAULT_DATA_FILE = Path(os.getenv("OSTERRAIN50_DATA_FILE", "OSTerrain50.bin"))

# Elevation reported where no data block exists (sea, excluded landmass)
NO_DATA_ELEVATION = 0.0


class ElevationLookupService:
    """Looks up elevations for batches of grid locations.

    Stateless between calls: each lookup opens the repository once, reads
    every point, and releases the file before returning or raising.
    """

    def __init__(self, repository: ElevationRepository) -> None:
        self.repository = repository

    @classmethod
    def from_data_file(
        cls, data_file: Path | str, *, verify_signature: bool = False
    ) -> "ElevationLookupService":
        """Build a service reading the OS Terrain 50 binary index at data_file."""
        return cls(BinaryIndexRepository(data_file, verify_signature=verify_signature))

    def lookup(
        self, locations: Sequence[Location], do_infill: bool = False
    ) -> list[Location]:
        """Return locations with elevations populated.

        Args:
            locations: Ordered grid locations; elevations are ignored
            do_infill: If True and at least two locations are given, add
                locations every 50m along each consecutive pair

        Returns:
            New Location objects in path order. The list is longer than the
            input when infill added points.

        Raises:
            EmptyInputError: If locations is empty
            FileNotFoundError, PermissionError: If the data file cannot be opened
            TerrainError: On unreadable, truncated or mis-signed data files
        """
        if not locations:
            raise EmptyInputError("Need at least one location")

        points = expand_with_infills(locations) if do_infill else list(locations)

        results: list[Location] = []
        with self.repository.open() as reader:
            for point in points:
                address = resolve_location(point)
                block = reader.read_data_block_address(address.address_slot_offset)
                if block is None:
                    elevation = NO_DATA_ELEVATION
                else:
                    raw = reader.read_sample(block, address.sample_offset)
                    elevation = decode_elevation(raw)
                results.append(point.with_elevation(elevation))

        logger.debug(
            "Looked up %d locations (%d requested, infill=%s)",
            len(results),
            len(locations),
            do_infill,
        )
        return results


# ---------------------------------------------------------------------------
# Request / Response Contract
# ---------------------------------------------------------------------------
def parse_request(payload: str | bytes | Mapping[str, Any]) -> ElevationRequest:
    """Validate a request body into an ElevationRequest.

    Raises:
        InvalidRequestError: If the payload is not valid JSON or does not
            match the location list shape
    """
    try:
        if isinstance(payload, (str, bytes)):
            return ElevationRequest.model_validate_json(payload)
        return ElevationRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError(
            f"Invalid elevation request ({e.error_count()} errors)"
        ) from e


def get_elevations(
    payload: str | bytes | Mapping[str, Any],
    *,
    data_file: Path | str | None = None,
    verify_signature: bool = False,
) -> list[dict[str, Any]]:
    """Serve one elevation request end to end.

    Returns the populated locations as plain dicts, ready for json.dumps.
    Whole-metre elevations are ints, so no-data points read {"elevation": 0}.
    Errors propagate; use render_error to build the error body.
    """
    request = parse_request(payload)
    service = ElevationLookupService.from_data_file(
        data_file if data_file is not None else DEFAULT_DATA_FILE,
        verify_signature=verify_signature,
    )
    results = service.lookup(request.locations, request.do_infills)
    return [_to_wire(location) for location in results]


def _to_wire(location: Location) -> dict[str, Any]:
    # Whole-metre elevations, including no-data points, go out as integers
    body = location.model_dump()
    elevation = body["elevation"]
    if elevation is not None and float(elevation).is_integer():
        body["elevation"] = int(elevation)
    return body


def render_error(error: Exception, show_errors: bool = False) -> str:
    """JSON error body for a failed request.

    With show_errors the message is returned as {"Error": message}; otherwise
    the body is an empty object so nothing about the deployment leaks.
    """
    logger.warning("Elevation request failed: %s", type(error).__name__)
    if show_errors:
        return json.dumps({"Error": str(error)})
    return "{}"
