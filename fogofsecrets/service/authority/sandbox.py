"""
Sandbox Authority - in-process stand-in for the position-assignment contract

Mirrors the deployed contract closely enough for local play and tests:
first call assigns a zone and a cell, later calls by the same address are
no-ops. Every cell is sealed in the confidential store behind an opaque
handle readable through the ACL by the owner; public cells are also stored
in the clear.
"""
import secrets
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from fogofsecrets.config import GAME_CONFIG
from fogofsecrets.errors import TransactionFailure
from fogofsecrets.model import MapBounds, PlayerRecord, normalize_address

from .base import AssignmentAuthority
from .strategy import AssignmentStrategy, WeightedZoneStrategy


@dataclass(frozen=True)
class PositionAssigned:
    """Mirror of the PlayerPositionAssigned event"""
    player: str
    is_encrypted: bool
    block_number: int


class SandboxAuthority(AssignmentAuthority):
    def __init__(
        self,
        bounds: Optional[MapBounds] = None,
        strategy: Optional[AssignmentStrategy] = None,
        contract_address: Optional[str] = None,
    ):
        self.bounds = bounds or MapBounds(
            GAME_CONFIG["default_total_cells"], GAME_CONFIG["default_encrypted_cells"]
        )
        self.strategy = strategy or WeightedZoneStrategy(self.bounds)
        self.contract_address = contract_address or GAME_CONFIG["sandbox_contract_address"]

        self._records: Dict[str, PlayerRecord] = {}
        self._roster: List[str] = []
        self.events: List[PositionAssigned] = []
        self.block_number = 0

        # Confidential store: handle -> plaintext, handle -> allowed readers
        self._ciphertexts: Dict[str, int] = {}
        self._acl: Dict[str, Set[str]] = {}

    # ========================================================================
    # Reads
    # ========================================================================

    async def get_map_bounds(self) -> MapBounds:
        return self.bounds

    async def get_all_players(self) -> List[str]:
        return list(self._roster)

    async def get_player_info(self, address: str) -> PlayerRecord:
        record = self._records.get(normalize_address(address))
        if record is None:
            return PlayerRecord(address=address, exists=False, is_encrypted=False)
        return record

    async def has_player(self, address: str) -> bool:
        return normalize_address(address) in self._records

    async def player_count(self) -> int:
        return len(self._roster)

    # ========================================================================
    # Writes
    # ========================================================================

    async def start_game(self, signer) -> Dict[str, Any]:
        return self.join(signer.address)

    def join(self, caller: str) -> Dict[str, Any]:
        """
        Assign a position to caller once; repeat calls keep the first outcome.
        Both zones store the cell as a handle the owner may decrypt; public
        cells are also kept in the clear.

        Raises:
            TransactionFailure: the assignment reverted, nothing was recorded
        """
        key = normalize_address(caller)
        outcome = None
        if key not in self._records:
            try:
                outcome = self.strategy.assign_zone(caller)
            except ValueError as e:
                print(f"[Authority] startGame reverted for {caller}: {e}")
                raise TransactionFailure("startGame", str(e)) from e

        self.block_number += 1
        if outcome is not None:
            is_encrypted, index = outcome
            handle = self._encrypt(index, caller)
            public_position = 0 if is_encrypted else index

            self._records[key] = PlayerRecord(caller, True, is_encrypted, handle, public_position)
            self._roster.append(caller)
            self.events.append(PositionAssigned(caller, is_encrypted, self.block_number))
            print(f"[Authority] {caller} joined the {'encrypted' if is_encrypted else 'public'} zone")

        return {
            "status": 1,
            "transactionHash": "0x" + secrets.token_hex(32),
            "blockNumber": self.block_number,
            "from": caller,
        }

    def _encrypt(self, value: int, owner: str) -> str:
        handle = "0x" + secrets.token_hex(32)
        self._ciphertexts[handle] = value
        self._acl[handle] = {normalize_address(owner), normalize_address(self.contract_address)}
        return handle

    # ========================================================================
    # Confidential store (used by the sandbox decryption service)
    # ========================================================================

    def is_allowed(self, handle: str, address: str) -> bool:
        return normalize_address(address) in self._acl.get(handle.lower(), set())

    def plaintext_of(self, handle: str) -> int:
        """Oracle access for cross-checks; bypasses the ACL"""
        return self._ciphertexts[handle.lower()]
