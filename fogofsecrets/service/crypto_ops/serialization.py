from openfhe import *
import base64
import tempfile
import os

# ============================================================================
# Serialization (File-based for reliability)
# ============================================================================

def _serialize_to_bytes(obj, serialize_func) -> bytes:
    """
    Helper: Serialize OpenFHE object to raw bytes via temp file.
    """
    with tempfile.NamedTemporaryFile(delete=False, suffix='.bin') as f:
        temp_path = f.name

    try:
        result = serialize_func(temp_path)
        if not result:
            raise RuntimeError(f"Serialization failed for {type(obj)}")

        with open(temp_path, 'rb') as f:
            return f.read()
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)


def _deserialize_from_bytes(data: bytes, deserialize_func):
    """
    Helper: Deserialize OpenFHE object from raw bytes via temp file.
    """
    with tempfile.NamedTemporaryFile(delete=False, suffix='.bin') as f:
        f.write(data)
        temp_path = f.name

    try:
        obj, success = deserialize_func(temp_path)
        if not success:
            raise RuntimeError("Deserialization failed")
        return obj
    finally:
        if os.path.exists(temp_path):
            os.remove(temp_path)


def serialize_crypto_context(cc) -> str:
    """
    Serialize CryptoContext to base64 string.
    """
    data = _serialize_to_bytes(cc, lambda path: SerializeToFile(path, cc, BINARY))
    return base64.b64encode(data).decode('utf-8')


def deserialize_crypto_context(cc_b64: str):
    """
    Deserialize CryptoContext from base64 string.
    Note: features are not serialized, so they are re-enabled here.
    """
    cc = _deserialize_from_bytes(
        base64.b64decode(cc_b64),
        lambda path: DeserializeCryptoContext(path, BINARY),
    )
    cc.Enable(PKESchemeFeature.PKE)
    cc.Enable(PKESchemeFeature.KEYSWITCH)
    cc.Enable(PKESchemeFeature.LEVELEDSHE)
    return cc


def serialize_public_key_hex(public_key) -> str:
    """
    Serialize public key to hex (signed as EIP-712 `bytes`).
    """
    return _serialize_to_bytes(
        public_key, lambda path: SerializeToFile(path, public_key, BINARY)
    ).hex()


def deserialize_public_key_hex(pk_hex: str):
    return _deserialize_from_bytes(
        bytes.fromhex(pk_hex), lambda path: DeserializePublicKey(path, BINARY)
    )


def serialize_private_key_hex(private_key) -> str:
    return _serialize_to_bytes(
        private_key, lambda path: SerializeToFile(path, private_key, BINARY)
    ).hex()


def deserialize_private_key_hex(sk_hex: str):
    return _deserialize_from_bytes(
        bytes.fromhex(sk_hex), lambda path: DeserializePrivateKey(path, BINARY)
    )


def serialize_ciphertext(ciphertext) -> str:
    """
    Serialize ciphertext to base64 string.
    """
    data = _serialize_to_bytes(ciphertext, lambda path: SerializeToFile(path, ciphertext, BINARY))
    return base64.b64encode(data).decode('utf-8')


def deserialize_ciphertext(ct_b64: str):
    """
    Deserialize ciphertext from base64 string.
    """
    return _deserialize_from_bytes(
        base64.b64decode(ct_b64), lambda path: DeserializeCiphertext(path, BINARY)
    )
