"""
Game Session - orchestrates roster reads, joins and decryptions
Holds the current SessionState and applies transitions as results arrive
"""
import time
from typing import Callable, Optional, Tuple

from fogofsecrets.errors import (
    DecryptFailed,
    DecryptionServiceUnready,
    ReadFailure,
    SignerUnavailable,
    TransactionFailure,
    UnauthorizedDecrypt,
)
from fogofsecrets.model import DisplayEntry, MapCell, RosterSummary, same_address
from fogofsecrets.service import RosterReader
from fogofsecrets.service.authority import AssignmentAuthority
from fogofsecrets.service.decryption import DecryptionExchange, DecryptionService
from fogofsecrets.session_logger import SessionLogger
from fogofsecrets import state as transitions
from fogofsecrets.state import SessionState

LOAD_ERROR = "Unable to load game state. Please try again."
CONNECT_WALLET = "Connect your wallet to start the game."
TX_ERROR = "Transaction failed. Please ensure you are on the right network and try again."
SERVICE_UNREADY = "Encryption service is not ready yet."
SIGNER_UNAVAILABLE = "Wallet signer is not available."
NOT_OWNER = "You can only decrypt your own position."
NOTHING_TO_DECRYPT = "There is no encrypted position to decrypt."
DECRYPT_ERROR = "Could not decrypt position. Please retry shortly."


class GameSession:
    """Single wallet identity, single logical session"""

    def __init__(
        self,
        authority: AssignmentAuthority,
        decryption_service: Optional[DecryptionService] = None,
        signer=None,
        logger: Optional[SessionLogger] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.authority = authority
        self.decryption_service = decryption_service
        self.signer = signer
        self.logger = logger
        self.clock = clock
        self.state: SessionState = transitions.initial_state(signer.address if signer else None)

    # ========================================================================
    # Derived views
    # ========================================================================

    @property
    def session_address(self) -> Optional[str]:
        return self.state.session_address

    @property
    def display_entries(self) -> Tuple[DisplayEntry, ...]:
        return self.state.display_entries()

    @property
    def summary(self) -> RosterSummary:
        return self.state.summary()

    @property
    def cells(self) -> Tuple[MapCell, ...]:
        return self.state.cells()

    @property
    def service_ready(self) -> bool:
        return self.decryption_service is not None and self.decryption_service.ready

    # ========================================================================
    # Wallet
    # ========================================================================

    def connect(self, signer):
        self.signer = signer
        self.state = transitions.wallet_changed(self.state, signer.address)
        print(f"[Session] Wallet connected: {signer.address}")

    def disconnect(self):
        self.signer = None
        self.state = transitions.wallet_changed(self.state, None)
        print("[Session] Wallet disconnected, cleared decrypted positions")

    # ========================================================================
    # Operations
    # ========================================================================

    async def refresh(self) -> SessionState:
        """Reload the roster; on failure the last good snapshot stays"""
        self.state = transitions.load_started(self.state)
        reader = RosterReader(self.authority, self.session_address, self.clock)
        try:
            snapshot = await reader.load_players()
        except ReadFailure as e:
            print(f"[Session] {e}")
            self._log_error(str(e))
            self.state = transitions.load_failed(self.state, LOAD_ERROR)
            return self.state

        self.state = transitions.players_loaded(self.state, snapshot)
        if self.logger:
            self.logger.log_roster(snapshot, self.summary)
        return self.state

    async def start_game(self) -> SessionState:
        """Join the map (or re-roll, which keeps the first outcome), then reload"""
        if self.signer is None:
            self.state = transitions.error_raised(self.state, CONNECT_WALLET)
            return self.state

        self.state = transitions.tx_started(self.state)
        try:
            receipt = await self.authority.start_game(self.signer)
        except TransactionFailure as e:
            print(f"[Session] {e}")
            self._log_error(str(e))
            self.state = transitions.tx_finished(self.state, TX_ERROR)
            return self.state

        self.state = transitions.tx_finished(self.state)
        if self.logger:
            self.logger.log_join(receipt)
        return await self.refresh()

    async def decrypt_position(self, address: Optional[str] = None) -> SessionState:
        """
        Decrypt a player's encrypted cell (the session's own by default)
        and record it in the cache.
        """
        target = address or self.session_address
        exchange = DecryptionExchange(
            self.decryption_service,
            self.signer,
            self.authority.contract_address,
            clock=self.clock,
        )
        try:
            exchange.check_access(target)
        except DecryptionServiceUnready:
            self.state = transitions.error_raised(self.state, SERVICE_UNREADY)
            return self.state
        except SignerUnavailable:
            self.state = transitions.error_raised(self.state, SIGNER_UNAVAILABLE)
            return self.state
        except UnauthorizedDecrypt:
            self.state = transitions.error_raised(self.state, NOT_OWNER)
            return self.state

        entry = next((e for e in self.state.entries if same_address(e.address, target)), None)
        if entry is None or not entry.is_encrypted:
            self.state = transitions.error_raised(self.state, NOTHING_TO_DECRYPT)
            return self.state

        record = entry.as_record()
        self.state = transitions.decrypt_started(self.state, entry.address)
        try:
            value = await exchange.decrypt(record)
        except DecryptFailed as e:
            self._log_error(str(e))
            self.state = transitions.decrypt_failed(self.state, entry.address, DECRYPT_ERROR)
            return self.state

        self.state = transitions.position_decrypted(self.state, entry.address, value)
        print(f"[Decrypt] ✓ Position decrypted: cell #{value}")
        if self.logger:
            self.logger.log_decrypted_position(entry.address, value)
        return self.state

    def _log_error(self, message: str):
        if self.logger:
            self.logger.log_error(message)
