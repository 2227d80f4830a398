"""
Session State - explicit state plus pure transitions

Each transition takes the prior state and an event and returns the next
state. Nothing here mutates its inputs; the session controller applies
transitions one at a time on the event loop.
"""
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from fogofsecrets.config import GAME_CONFIG
from fogofsecrets.model import (
    DisplayEntry,
    MapBounds,
    MapCell,
    PlayerEntry,
    RosterSnapshot,
    RosterSummary,
    normalize_address,
    same_address,
)
from fogofsecrets.reconcile import build_grid, reconcile, summarize


def default_bounds() -> MapBounds:
    return MapBounds(
        total_cells=GAME_CONFIG["default_total_cells"],
        encrypted_cells=GAME_CONFIG["default_encrypted_cells"],
    )


@dataclass(frozen=True)
class SessionState:
    session_address: Optional[str] = None
    bounds: MapBounds = field(default_factory=default_bounds)
    entries: Tuple[PlayerEntry, ...] = ()
    cache: Mapping[str, int] = field(default_factory=dict)
    loading: bool = False
    error: Optional[str] = None
    tx_pending: bool = False
    decrypting: Optional[str] = None
    last_updated: Optional[float] = None

    @property
    def connected(self) -> bool:
        return self.session_address is not None

    def display_entries(self) -> Tuple[DisplayEntry, ...]:
        display, _ = reconcile(self.entries, self.cache)
        return display

    def summary(self) -> RosterSummary:
        return summarize(self.display_entries())

    def cells(self) -> Tuple[MapCell, ...]:
        return build_grid(self.bounds, self.display_entries())

    def own_entry(self) -> Optional[PlayerEntry]:
        for entry in self.entries:
            if entry.is_current_user:
                return entry
        return None


def _retag(entries, session_address: Optional[str]) -> Tuple[PlayerEntry, ...]:
    return tuple(
        replace(entry, is_current_user=same_address(entry.address, session_address))
        for entry in entries
    )


def initial_state(session_address: Optional[str] = None) -> SessionState:
    return SessionState(session_address=session_address)


# ============================================================================
# Roster loading
# ============================================================================

def load_started(state: SessionState) -> SessionState:
    return replace(state, loading=True, error=None)


def players_loaded(state: SessionState, snapshot: RosterSnapshot) -> SessionState:
    """Adopt a fresh snapshot; cached decryptions for players still present survive"""
    entries = _retag(snapshot.entries, state.session_address)
    _, pruned = reconcile(entries, state.cache)
    return replace(
        state,
        bounds=snapshot.bounds,
        entries=entries,
        cache=pruned,
        loading=False,
        last_updated=snapshot.fetched_at,
    )


def load_failed(state: SessionState, message: str) -> SessionState:
    """Last good snapshot stays on screen with an error flag"""
    return replace(state, loading=False, error=message)


# ============================================================================
# Wallet
# ============================================================================

def wallet_changed(state: SessionState, address: Optional[str]) -> SessionState:
    cache = state.cache if address is not None else {}
    return replace(
        state,
        session_address=address,
        entries=_retag(state.entries, address),
        cache=cache,
        decrypting=state.decrypting if address is not None else None,
    )


# ============================================================================
# Decryption
# ============================================================================

def decrypt_started(state: SessionState, address: str) -> SessionState:
    return replace(state, decrypting=address, error=None)


def position_decrypted(state: SessionState, address: str, value: int) -> SessionState:
    """
    Record a decrypted cell for the session's own address.
    A result that arrives after the wallet changed is discarded.
    """
    decrypting = None if same_address(state.decrypting, address) else state.decrypting
    if not same_address(address, state.session_address):
        return replace(state, decrypting=decrypting)

    cache = dict(state.cache)
    cache[normalize_address(address)] = value
    return replace(state, cache=cache, decrypting=decrypting)


def decrypt_failed(state: SessionState, address: str, message: str) -> SessionState:
    decrypting = None if same_address(state.decrypting, address) else state.decrypting
    return replace(state, decrypting=decrypting, error=message)


# ============================================================================
# Transactions and banners
# ============================================================================

def tx_started(state: SessionState) -> SessionState:
    return replace(state, tx_pending=True, error=None)


def tx_finished(state: SessionState, error: Optional[str] = None) -> SessionState:
    return replace(state, tx_pending=False, error=error)


def error_raised(state: SessionState, message: str) -> SessionState:
    return replace(state, error=message)
