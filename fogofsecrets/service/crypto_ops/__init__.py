"""
Crypto Operations - OpenFHE reseal of decrypted positions

Structure:
- context.py: BFV context for one-time reseal keys
- serialization.py: OpenFHE objects to/from base64 and hex
- key_generation.py: one-time keypairs, seal/open of a single value
"""

from .context import create_reseal_context
from .serialization import (
    serialize_crypto_context,
    deserialize_crypto_context,
    serialize_public_key_hex,
    deserialize_public_key_hex,
    serialize_private_key_hex,
    deserialize_private_key_hex,
    serialize_ciphertext,
    deserialize_ciphertext,
)
from .key_generation import generate_one_time_keypair, seal_value, open_sealed_value

__all__ = [
    'create_reseal_context',
    'serialize_crypto_context',
    'deserialize_crypto_context',
    'serialize_public_key_hex',
    'deserialize_public_key_hex',
    'serialize_private_key_hex',
    'deserialize_private_key_hex',
    'serialize_ciphertext',
    'deserialize_ciphertext',
    'generate_one_time_keypair',
    'seal_value',
    'open_sealed_value',
]
