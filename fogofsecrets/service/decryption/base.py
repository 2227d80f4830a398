"""
Decryption service interface and the values exchanged with it
"""
from dataclasses import dataclass
from typing import Dict, List


def strip_hex_prefix(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


@dataclass(frozen=True)
class DecryptionKeypair:
    """
    One-time keypair (hex, no 0x prefix) scoped to a single decryption request.
    Built fresh per call and never stored beyond it.
    """
    public_key: str
    private_key: str

    def __repr__(self) -> str:
        return f"DecryptionKeypair(public_key={self.public_key[:16]}…)"


@dataclass(frozen=True)
class HandleContractPair:
    handle: str
    contract_address: str

    def to_dict(self) -> Dict[str, str]:
        return {"handle": self.handle, "contractAddress": self.contract_address}


class DecryptionService:
    """Confidential-computation side of the exchange, reached as an opaque authority"""

    @property
    def ready(self) -> bool:
        raise NotImplementedError

    def generate_keypair(self) -> DecryptionKeypair:
        raise NotImplementedError

    async def user_decrypt(
        self,
        handle_contract_pairs: List[HandleContractPair],
        private_key: str,
        public_key: str,
        signature: str,
        contract_addresses: List[str],
        user_address: str,
        start_timestamp: str,
        duration_days: str,
    ) -> Dict[str, int]:
        """
        Returns:
            Mapping from ciphertext handle to plaintext value
        """
        raise NotImplementedError
