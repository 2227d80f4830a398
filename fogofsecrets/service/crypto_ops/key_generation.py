from fogofsecrets.service.decryption.base import DecryptionKeypair

from .serialization import (
    serialize_public_key_hex,
    serialize_private_key_hex,
    deserialize_public_key_hex,
    deserialize_private_key_hex,
    serialize_ciphertext,
    deserialize_ciphertext,
)

# ============================================================================
# One-time reseal keys
# ============================================================================

def generate_one_time_keypair(cc) -> DecryptionKeypair:
    """
    Generate a fresh keypair for a single user decryption request.

    Args:
        cc: CryptoContext

    Returns:
        DecryptionKeypair holding both halves as hex
    """
    keypair = cc.KeyGen()
    return DecryptionKeypair(
        public_key=serialize_public_key_hex(keypair.publicKey),
        private_key=serialize_private_key_hex(keypair.secretKey),
    )


def seal_value(cc, public_key_hex: str, value: int) -> str:
    """
    Encrypt a plaintext cell index under the requester's one-time public key.

    Returns:
        Base64 ciphertext
    """
    public_key = deserialize_public_key_hex(public_key_hex)
    plaintext = cc.MakePackedPlaintext([value])
    return serialize_ciphertext(cc.Encrypt(public_key, plaintext))


def open_sealed_value(cc, private_key_hex: str, ciphertext_b64: str) -> int:
    """
    Decrypt a resealed value with the one-time private key.
    """
    secret_key = deserialize_private_key_hex(private_key_hex)
    ciphertext = deserialize_ciphertext(ciphertext_b64)
    plaintext = cc.Decrypt(secret_key, ciphertext)
    plaintext.SetLength(1)
    return int(plaintext.GetPackedValue()[0])
