"""
Fog of Secrets Models Package

Typed views of the authority's roster and the derived map.
"""

from .player import (
    ZERO_HANDLE,
    PlayerRecord,
    PlayerEntry,
    DisplayEntry,
    normalize_address,
    same_address,
    format_address,
)
from .board import (
    ENCRYPTED_ZONE,
    PUBLIC_ZONE,
    MapBounds,
    MapCell,
    RosterSummary,
    RosterSnapshot,
)

__all__ = [
    "ZERO_HANDLE",
    "PlayerRecord",
    "PlayerEntry",
    "DisplayEntry",
    "normalize_address",
    "same_address",
    "format_address",
    "ENCRYPTED_ZONE",
    "PUBLIC_ZONE",
    "MapBounds",
    "MapCell",
    "RosterSummary",
    "RosterSnapshot",
]
