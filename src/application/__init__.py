"""Application Layer.

Services that orchestrate domain logic over infrastructure adapters.
"""

from .elevation_lookup import (
    ElevationLookupService,
    get_elevations,
    parse_request,
    render_error,
)

__all__ = ["ElevationLookupService", "get_elevations", "parse_request", "render_error"]
