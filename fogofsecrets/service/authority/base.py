"""
Assignment Authority interface

The authority is the only authoritative, mutable shared resource. Reads may
run concurrently; start_game() returns only after the write is confirmed.
"""
from typing import Any, Dict, List

from fogofsecrets.model import MapBounds, PlayerRecord


class AssignmentAuthority:
    """Read/write surface of the position-assignment contract"""

    contract_address: str

    async def get_map_bounds(self) -> MapBounds:
        raise NotImplementedError

    async def get_all_players(self) -> List[str]:
        """Addresses in join order, without duplicates"""
        raise NotImplementedError

    async def get_player_info(self, address: str) -> PlayerRecord:
        raise NotImplementedError

    async def has_player(self, address: str) -> bool:
        raise NotImplementedError

    async def player_count(self) -> int:
        raise NotImplementedError

    async def start_game(self, signer) -> Dict[str, Any]:
        """
        Join (or re-roll) as the signer's address and wait for confirmation.

        Returns:
            Transaction receipt
        """
        raise NotImplementedError
