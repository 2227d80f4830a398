"""
Decryption Exchange - lets an owner recover the plaintext of their own cell

One request = one fresh keypair, one signed authorization, one round trip to
the decryption service. The caller records the result; nothing here is
written on failure.
"""
import time
from typing import Callable, Optional

from fogofsecrets.config import DECRYPTION_CONFIG
from fogofsecrets.errors import (
    DecryptFailed,
    DecryptionResponseInvalid,
    DecryptionServiceUnready,
    SignerUnavailable,
    UnauthorizedDecrypt,
)
from fogofsecrets.model import PlayerRecord, normalize_address, same_address

from .base import DecryptionService, HandleContractPair, strip_hex_prefix
from .eip712 import build_user_decrypt_request


class DecryptionExchange:
    def __init__(
        self,
        service: Optional[DecryptionService],
        signer,
        contract_address: str,
        duration_days: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.service = service
        self.signer = signer
        self.contract_address = contract_address
        self.duration_days = duration_days if duration_days is not None else DECRYPTION_CONFIG["duration_days"]
        self.clock = clock

    def check_access(self, owner: Optional[str]) -> str:
        """
        Service, then signer, then ownership of owner's position.

        Returns:
            The session address
        """
        if self.service is None or not self.service.ready:
            raise DecryptionServiceUnready()
        if self.signer is None:
            raise SignerUnavailable()

        user_address = self.signer.address
        if not same_address(owner, user_address):
            raise UnauthorizedDecrypt(owner, user_address)
        return user_address

    def check_preconditions(self, record: PlayerRecord) -> str:
        """
        Reject before any signing or network traffic.

        Returns:
            The session address allowed to decrypt record
        """
        user_address = self.check_access(record.address)
        if not record.is_encrypted:
            raise DecryptFailed(record.encrypted_position, "position is public")
        return user_address

    async def decrypt(self, record: PlayerRecord) -> int:
        """
        Decrypt the owner's own encrypted position.

        Raises:
            DecryptionServiceUnready, SignerUnavailable, UnauthorizedDecrypt:
                preconditions, nothing was signed or sent
            DecryptFailed: the exchange itself failed
            DecryptionResponseInvalid: no usable value for the handle
        """
        user_address = self.check_preconditions(record)
        handle = record.encrypted_position

        try:
            keypair = self.service.generate_keypair()
            contract_addresses = [self.contract_address]
            start_timestamp = str(int(self.clock()))
            duration_days = str(self.duration_days)

            request = build_user_decrypt_request(
                keypair.public_key, contract_addresses, start_timestamp, duration_days
            )
            signature = await self.signer.sign_typed_data(request.domain, request.types, request.message)

            print(f"[Decrypt] Requesting user decryption for {handle[:10]}…")
            decrypted = await self.service.user_decrypt(
                [HandleContractPair(handle, self.contract_address)],
                keypair.private_key,
                keypair.public_key,
                strip_hex_prefix(signature),
                contract_addresses,
                normalize_address(user_address),
                start_timestamp,
                duration_days,
            )
        except DecryptFailed:
            raise
        except Exception as e:
            print(f"[Decrypt] Failed to decrypt position: {e}")
            raise DecryptFailed(handle, str(e)) from e

        value = _lookup_handle(decrypted, handle)
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecryptionResponseInvalid(handle, value)
        return value


def _lookup_handle(decrypted, handle: str):
    if not isinstance(decrypted, dict):
        return None
    if handle in decrypted:
        return decrypted[handle]
    for key, value in decrypted.items():
        if isinstance(key, str) and key.lower() == handle.lower():
            return value
    return None
