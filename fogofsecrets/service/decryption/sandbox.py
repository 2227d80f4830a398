"""
Sandbox Decryption Service - in-process user decryption over SandboxAuthority

Performs the same checks a real decryption service would before revealing
anything: signature, validity window, contract list and ACL.
"""
import secrets
import time
from typing import Callable, Dict, List, Optional

from eth_keys import keys

from fogofsecrets.errors import DecryptFailed
from fogofsecrets.model import normalize_address, same_address
from fogofsecrets.service.authority import SandboxAuthority

from .base import DecryptionKeypair, DecryptionService, HandleContractPair
from .eip712 import build_user_decrypt_request, recover_signer, window_is_open

MAX_DURATION_DAYS = 365


class SandboxDecryptionService(DecryptionService):
    def __init__(
        self,
        authority: SandboxAuthority,
        clock: Callable[[], float] = time.time,
        domain_config: Optional[Dict] = None,
    ):
        self.authority = authority
        self.clock = clock
        self.domain_config = domain_config
        self.requests = 0

    @property
    def ready(self) -> bool:
        return True

    def generate_keypair(self) -> DecryptionKeypair:
        private_key = keys.PrivateKey(secrets.token_bytes(32))
        return DecryptionKeypair(
            public_key=private_key.public_key.to_bytes().hex(),
            private_key=private_key.to_bytes().hex(),
        )

    def authorize(
        self,
        handle_contract_pairs: List[HandleContractPair],
        public_key: str,
        signature: str,
        contract_addresses: List[str],
        user_address: str,
        start_timestamp: str,
        duration_days: str,
    ) -> Dict[str, int]:
        """Validate a user decryption request and reveal the plaintexts"""
        self.requests += 1
        first_handle = handle_contract_pairs[0].handle if handle_contract_pairs else "-"

        def reject(reason: str):
            print(f"[Sandbox] Rejected user decryption: {reason}")
            raise DecryptFailed(first_handle, reason)

        try:
            start, days = int(start_timestamp), int(duration_days)
        except ValueError:
            reject("malformed validity window")
        if not 0 < days <= MAX_DURATION_DAYS:
            reject(f"duration must be 1..{MAX_DURATION_DAYS} days")
        if not window_is_open(start, days, self.clock()):
            reject("authorization is outside its validity window")

        request = build_user_decrypt_request(
            public_key, contract_addresses, start_timestamp, duration_days, self.domain_config
        )
        try:
            signer = recover_signer(request, signature)
        except Exception as e:
            reject(f"bad signature: {e}")
        if not same_address(signer, user_address):
            reject("signature does not match user address")

        allowed_contracts = {normalize_address(a) for a in contract_addresses}
        revealed: Dict[str, int] = {}
        for pair in handle_contract_pairs:
            if normalize_address(pair.contract_address) not in allowed_contracts:
                reject(f"contract {pair.contract_address} is not authorized")
            if not same_address(pair.contract_address, self.authority.contract_address):
                reject(f"unknown contract {pair.contract_address}")
            if not self.authority.is_allowed(pair.handle, user_address):
                reject(f"{user_address} is not allowed to decrypt {pair.handle}")
            revealed[pair.handle] = self.authority.plaintext_of(pair.handle)
        return revealed

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
        return self.authorize(
            handle_contract_pairs,
            public_key,
            signature,
            contract_addresses,
            user_address,
            start_timestamp,
            duration_days,
        )
