"""
Wallet Signer - the active session identity

Wraps an eth_account LocalAccount. Signatures come back 0x-prefixed; callers
that need the bare hex strip the prefix themselves.
"""
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount


class WalletSigner:
    def __init__(self, account: LocalAccount):
        self.account = account

    @classmethod
    def from_private_key(cls, private_key: str) -> "WalletSigner":
        return cls(Account.from_key(private_key))

    @classmethod
    def create(cls) -> "WalletSigner":
        """Throwaway identity, used by the sandbox"""
        return cls(Account.create())

    @property
    def address(self) -> str:
        return self.account.address

    async def sign_typed_data(
        self,
        domain: Dict[str, Any],
        types: Dict[str, Any],
        message: Dict[str, Any],
    ) -> str:
        signed = self.account.sign_typed_data(
            domain_data=domain,
            message_types=types,
            message_data=message,
        )
        return "0x" + bytes(signed.signature).hex()

    def sign_transaction(self, tx: Dict[str, Any]) -> str:
        signed = self.account.sign_transaction(tx)
        return "0x" + bytes(signed.raw_transaction).hex()


def load_signer(private_key: Optional[str]) -> Optional[WalletSigner]:
    if not private_key:
        return None
    return WalletSigner.from_private_key(private_key)
