"""
Player Model

Records read back from the assignment authority. A player's cell is either
public or held as an opaque ciphertext handle that only its owner may decrypt.
"""
from dataclasses import dataclass
from typing import Optional

ZERO_HANDLE = "0x" + "00" * 32


def normalize_address(address: str) -> str:
    """Addresses compare case-insensitively everywhere"""
    return address.lower()


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    if a is None or b is None:
        return False
    return normalize_address(a) == normalize_address(b)


def format_address(address: str) -> str:
    """Short label used in the grid and the player list"""
    return f"{address[:6]}…{address[-4:]}"


@dataclass(frozen=True)
class PlayerRecord:
    """
    Raw getPlayerInfo result for one address.

    Encrypted players carry their cell only behind the encrypted_position
    handle (public_position is 0). Public players carry it in the clear in
    public_position and also behind an owner-decryptable handle.
    """
    address: str
    exists: bool
    is_encrypted: bool
    encrypted_position: str = ZERO_HANDLE
    public_position: int = 0


@dataclass(frozen=True)
class PlayerEntry:
    """A record that exists, tagged with whether it belongs to this session"""
    address: str
    is_encrypted: bool
    encrypted_position: str
    public_position: int
    is_current_user: bool = False

    @classmethod
    def from_record(cls, record: PlayerRecord, session_address: Optional[str]) -> "PlayerEntry":
        return cls(
            address=record.address,
            is_encrypted=record.is_encrypted,
            encrypted_position=record.encrypted_position,
            public_position=record.public_position,
            is_current_user=same_address(record.address, session_address),
        )

    @property
    def key(self) -> str:
        return normalize_address(self.address)

    def as_record(self) -> PlayerRecord:
        return PlayerRecord(
            address=self.address,
            exists=True,
            is_encrypted=self.is_encrypted,
            encrypted_position=self.encrypted_position,
            public_position=self.public_position,
        )


@dataclass(frozen=True)
class DisplayEntry:
    """PlayerEntry plus the resolved cell; None while an encrypted cell is hidden"""
    entry: PlayerEntry
    display_position: Optional[int]

    @property
    def address(self) -> str:
        return self.entry.address

    @property
    def is_encrypted(self) -> bool:
        return self.entry.is_encrypted

    @property
    def is_current_user(self) -> bool:
        return self.entry.is_current_user

    @property
    def label(self) -> str:
        return format_address(self.entry.address)
