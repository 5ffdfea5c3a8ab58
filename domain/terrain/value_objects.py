"""Terrain Bounded Context - Value Objects.

Immutable data structures for grid locations and binary index addressing.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------
class Location(BaseModel):
    """British National Grid coordinate with optional elevation (Value Object).

    Easting and northing are whole metres from the grid's false origin.
    Elevation is None until a lookup populates it; lookups never modify the
    caller's instance, they return a populated copy.

    Invariants:
        easting >= 0
        northing >= 0

    Note: Lax mode coerces numeric strings ("260993") to int, since browser
    form inputs arrive as strings.
    """

    easting: int = Field(ge=0)
    northing: int = Field(ge=0)
    elevation: float | None = None

    model_config = ConfigDict(frozen=True)

    def with_elevation(self, elevation: float) -> "Location":
        """Return a copy of this location with elevation set."""
        return self.model_copy(update={"elevation": float(elevation)})


# ---------------------------------------------------------------------------
# Binary Index Addressing
# ---------------------------------------------------------------------------
class GridAddress(BaseModel):
    """Byte offsets resolved for one coordinate (Value Object).

    Fields:
        header_offset: Start of the 100km grid-block header record
        address_slot_offset: The 4-byte data-block address slot for the 10km cell
        sample_offset: Sample position relative to the data block's base address
    """

    header_offset: int = Field(ge=0)
    address_slot_offset: int = Field(ge=0)
    sample_offset: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)


class DataBlockAddress(BaseModel):
    """Base offset of a data block that exists in the file (Value Object).

    Absence (sea, or a landmass excluded from the dataset) is represented by
    None at the storage boundary, so a DataBlockAddress always points at data.
    """

    base: int = Field(gt=0)

    model_config = ConfigDict(frozen=True)

    def sample_position(self, sample_offset: int) -> int:
        """Absolute file offset of a sample within this block."""
        return self.base + sample_offset


# ---------------------------------------------------------------------------
# Request Contract
# ---------------------------------------------------------------------------
class ElevationRequest(BaseModel):
    """Lookup request as posted by the browser client.

    Wire shape: {"locations": [{easting, northing, elevation}, ...],
    "doInfills": bool}
    """

    locations: list[Location]
    do_infills: bool = Field(default=False, alias="doInfills")

    model_config = ConfigDict(frozen=True, populate_by_name=True)
