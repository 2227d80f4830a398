"""
Board Model - map bounds, derived cells and roster snapshots
"""
from dataclasses import dataclass
from typing import Tuple

from .player import PlayerEntry, DisplayEntry

ENCRYPTED_ZONE = "encrypted"
PUBLIC_ZONE = "public"


@dataclass(frozen=True)
class MapBounds:
    """
    Grid size and the count of low-index cells reserved for the encrypted zone.
    Cells are 1-based: 1..encrypted_cells is encrypted, the rest is public.
    """
    total_cells: int
    encrypted_cells: int

    def __post_init__(self):
        if not 0 <= self.encrypted_cells <= self.total_cells:
            raise ValueError(
                f"invalid bounds: encrypted_cells={self.encrypted_cells}, total_cells={self.total_cells}"
            )

    def zone_of(self, index: int) -> str:
        return ENCRYPTED_ZONE if index <= self.encrypted_cells else PUBLIC_ZONE

    def in_encrypted_zone(self, index: int) -> bool:
        return 1 <= index <= self.encrypted_cells

    def in_public_zone(self, index: int) -> bool:
        return self.encrypted_cells < index <= self.total_cells


@dataclass(frozen=True)
class MapCell:
    index: int
    zone: str
    occupants: Tuple[DisplayEntry, ...] = ()


@dataclass(frozen=True)
class RosterSummary:
    total: int
    encrypted: int
    public: int


@dataclass(frozen=True)
class RosterSnapshot:
    """One consistent read of the authority, stamped with wall-clock seconds"""
    bounds: MapBounds
    entries: Tuple[PlayerEntry, ...]
    fetched_at: float
