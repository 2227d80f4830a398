"""
State Reconciler - merges a fresh roster read with cached decryptions

All functions here are pure: inputs are never mutated, so a refresh and a
pending decryption can both work from the same cache without losing either.
"""
from typing import Dict, Iterable, Mapping, Sequence, Tuple

from fogofsecrets.model import (
    DisplayEntry,
    MapBounds,
    MapCell,
    PlayerEntry,
    RosterSummary,
)


def resolve_position(entry: PlayerEntry, cache: Mapping[str, int]):
    """Public cell, cached decryption, or None while still hidden"""
    if not entry.is_encrypted:
        return entry.public_position
    return cache.get(entry.key)


def prune_cache(entries: Iterable[PlayerEntry], cache: Mapping[str, int]) -> Dict[str, int]:
    """Drop decryptions for addresses no longer on the roster, keep the rest verbatim"""
    present = {entry.key for entry in entries}
    return {address: value for address, value in cache.items() if address in present}


def _display_order(item: DisplayEntry):
    # Own entry first, then everyone else by lower-cased address
    return (not item.is_current_user, item.entry.key)


def reconcile(
    fresh_entries: Sequence[PlayerEntry],
    cache: Mapping[str, int],
) -> Tuple[Tuple[DisplayEntry, ...], Dict[str, int]]:
    """
    Resolve display positions for a fresh roster read.

    Returns:
        (display entries sorted for presentation, pruned cache)
    """
    pruned = prune_cache(fresh_entries, cache)
    display = [
        DisplayEntry(entry=entry, display_position=resolve_position(entry, pruned))
        for entry in fresh_entries
    ]
    display.sort(key=_display_order)
    return tuple(display), pruned


def summarize(entries: Sequence[DisplayEntry]) -> RosterSummary:
    encrypted = sum(1 for e in entries if e.is_encrypted)
    return RosterSummary(total=len(entries), encrypted=encrypted, public=len(entries) - encrypted)


def build_grid(bounds: MapBounds, entries: Sequence[DisplayEntry]) -> Tuple[MapCell, ...]:
    """
    Every cell 1..total_cells with its zone and occupants.
    Unresolved encrypted entries occupy no cell until decrypted.
    """
    by_cell: Dict[int, list] = {}
    for item in entries:
        if item.display_position is not None:
            by_cell.setdefault(item.display_position, []).append(item)

    return tuple(
        MapCell(
            index=index,
            zone=bounds.zone_of(index),
            occupants=tuple(by_cell.get(index, ())),
        )
        for index in range(1, bounds.total_cells + 1)
    )
