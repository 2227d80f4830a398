"""
Decryption Service - selective decryption of a player's own cell

Structure:
- base.py: service interface, one-time keypair value type
- eip712.py: UserDecryptRequestVerification typed data
- exchange.py: DecryptionExchange (keypair -> sign -> submit -> extract)
- sandbox.py: in-process service over SandboxAuthority
- relayer_client.py: HTTP relayer with OpenFHE reseal (imported explicitly)
"""

from .base import DecryptionKeypair, DecryptionService, HandleContractPair, strip_hex_prefix
from .eip712 import (
    PRIMARY_TYPE,
    USER_DECRYPT_TYPES,
    TypedDataRequest,
    build_user_decrypt_request,
    decryption_domain,
    recover_signer,
)
from .exchange import DecryptionExchange
from .sandbox import SandboxDecryptionService

__all__ = [
    "DecryptionKeypair",
    "DecryptionService",
    "HandleContractPair",
    "strip_hex_prefix",
    "PRIMARY_TYPE",
    "USER_DECRYPT_TYPES",
    "TypedDataRequest",
    "build_user_decrypt_request",
    "decryption_domain",
    "recover_signer",
    "DecryptionExchange",
    "SandboxDecryptionService",
]
