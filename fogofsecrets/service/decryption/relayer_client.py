"""
Relayer Client - user decryption through an HTTP relayer

The relayer never sees the one-time private key: it reseals each plaintext
under the one-time public key and the value is opened locally.
"""
from typing import Dict, List, Optional

import httpx

from fogofsecrets.config import NETWORK_CONFIG
from fogofsecrets.service.crypto_ops import (
    create_reseal_context,
    generate_one_time_keypair,
    open_sealed_value,
    serialize_crypto_context,
)

from .base import DecryptionKeypair, DecryptionService, HandleContractPair


class RelayerDecryptionService(DecryptionService):
    """Decryption service backed by a relayer; ready once the context exists"""

    def __init__(
        self,
        relayer_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.relayer_url = (relayer_url or NETWORK_CONFIG["relayer_url"]).rstrip("/")
        self.timeout = timeout or NETWORK_CONFIG["connection_timeout"] * 3
        self.transport = transport
        self.cc = None
        self._cc_b64: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self.cc is not None

    def initialize(self):
        """Create the reseal context (slow; done once per session)"""
        if self.cc is None:
            self.cc = create_reseal_context()
            self._cc_b64 = serialize_crypto_context(self.cc)
            print("[Decrypt] Encryption service ready")

    def generate_keypair(self) -> DecryptionKeypair:
        return generate_one_time_keypair(self.cc)

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
        payload = {
            "handleContractPairs": [pair.to_dict() for pair in handle_contract_pairs],
            "publicKey": public_key,
            "signature": signature,
            "contractAddresses": contract_addresses,
            "userAddress": user_address,
            "startTimestamp": start_timestamp,
            "durationDays": duration_days,
            "cryptoContext": self._cc_b64,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(f"{self.relayer_url}/v1/user-decrypt", json=payload)
                response.raise_for_status()
                sealed = response.json()["response"]
        except Exception as e:
            print(f"[Network] Error requesting user decryption from {self.relayer_url}: {e}")
            raise

        return {
            handle: open_sealed_value(self.cc, private_key, ciphertext_b64)
            for handle, ciphertext_b64 in sealed.items()
        }

    async def check_health(self) -> bool:
        try:
            async with httpx.AsyncClient(timeout=5, transport=self.transport) as client:
                response = await client.get(f"{self.relayer_url}/health")
                response.raise_for_status()
                return True
        except Exception:
            return False
