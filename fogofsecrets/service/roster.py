"""
Roster Reader - pulls bounds, roster and per-player records into a snapshot
"""
import asyncio
import time
from typing import Callable, Optional

from fogofsecrets.errors import ReadFailure
from fogofsecrets.model import PlayerEntry, RosterSnapshot

from .authority import AssignmentAuthority


class RosterReader:
    """Normalizes authority reads; never touches the decryption cache"""

    def __init__(
        self,
        authority: AssignmentAuthority,
        session_address: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.authority = authority
        self.session_address = session_address
        self.clock = clock

    async def load_players(self) -> RosterSnapshot:
        """
        Read the whole game state.

        1. Map bounds
        2. Address roster
        3. Every player record, concurrently; records that don't exist are dropped
        4. Tag the session's own entry

        Raises:
            ReadFailure: any underlying read failed
        """
        try:
            bounds = await self.authority.get_map_bounds()
            addresses = await self.authority.get_all_players()
            records = await asyncio.gather(
                *(self.authority.get_player_info(address) for address in addresses)
            )
        except ReadFailure:
            raise
        except Exception as e:
            print(f"[Roster] Failed to load player data: {e}")
            raise ReadFailure("load_players", e) from e

        entries = tuple(
            PlayerEntry.from_record(record, self.session_address)
            for record in records
            if record.exists
        )
        dropped = len(records) - len(entries)
        if dropped:
            print(f"[Roster] Skipped {dropped} roster entries without a player record")

        return RosterSnapshot(bounds=bounds, entries=entries, fetched_at=self.clock())
