"""
EIP-712 authorization for user decryption

The signed message binds the one-time public key to the contracts whose
ciphertexts may be revealed and to a validity window.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import to_checksum_address

from fogofsecrets.config import DECRYPTION_CONFIG

from .base import strip_hex_prefix

PRIMARY_TYPE = "UserDecryptRequestVerification"

USER_DECRYPT_TYPES: Dict[str, List[Dict[str, str]]] = {
    PRIMARY_TYPE: [
        {"name": "publicKey", "type": "bytes"},
        {"name": "contractAddresses", "type": "address[]"},
        {"name": "startTimestamp", "type": "uint256"},
        {"name": "durationDays", "type": "uint256"},
    ]
}

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class TypedDataRequest:
    domain: Dict[str, Any]
    types: Dict[str, List[Dict[str, str]]]
    message: Dict[str, Any]


def decryption_domain(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    config = config or DECRYPTION_CONFIG
    return {
        "name": config["domain_name"],
        "version": config["domain_version"],
        "chainId": int(config["domain_chain_id"]),
        "verifyingContract": to_checksum_address(config["verifying_contract"]),
    }


def build_user_decrypt_request(
    public_key: str,
    contract_addresses: Sequence[str],
    start_timestamp: str,
    duration_days: str,
    config: Optional[Dict[str, Any]] = None,
) -> TypedDataRequest:
    message = {
        "publicKey": bytes.fromhex(strip_hex_prefix(public_key)),
        "contractAddresses": [to_checksum_address(a) for a in contract_addresses],
        "startTimestamp": int(start_timestamp),
        "durationDays": int(duration_days),
    }
    return TypedDataRequest(domain=decryption_domain(config), types=USER_DECRYPT_TYPES, message=message)


def recover_signer(request: TypedDataRequest, signature: str) -> str:
    """Address that produced signature (hex, with or without 0x) over request"""
    signable = encode_typed_data(
        domain_data=request.domain,
        message_types=request.types,
        message_data=request.message,
    )
    return Account.recover_message(signable, signature=bytes.fromhex(strip_hex_prefix(signature)))


def window_is_open(start_timestamp: int, duration_days: int, now: float) -> bool:
    return start_timestamp <= now < start_timestamp + duration_days * SECONDS_PER_DAY
