"""Terrain Bounded Context.

Responsible for British National Grid elevation lookups:
- Value Objects: Location, GridAddress, DataBlockAddress, ElevationRequest
- Services: resolve_address, decode_elevation, get_infills
- Ports: ElevationRepository, ElevationReader
"""
