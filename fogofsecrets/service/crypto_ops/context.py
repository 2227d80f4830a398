from openfhe import *

from fogofsecrets.config import CRYPTO_CONFIG


# ============================================================================
# OpenFHE Context for resealed plaintexts
# ============================================================================

def create_reseal_context():
    """
    Create the BFVrns context used to reseal a single decrypted cell index
    under a requester's one-time public key.

    Returns:
        OpenFHE CryptoContext with public-key encryption enabled
    """
    parameters = CCParamsBFVRNS()

    # Cell indices are tiny; a small prime modulus is plenty
    parameters.SetPlaintextModulus(CRYPTO_CONFIG["plain_modulus"])

    # Batch size must be power of 2 for BFV
    parameters.SetBatchSize(CRYPTO_CONFIG["batch_size"])

    # Only encrypt/decrypt, no homomorphic evaluation
    parameters.SetMultiplicativeDepth(CRYPTO_CONFIG["multiplicative_depth"])

    cc = GenCryptoContext(parameters)
    cc.Enable(PKESchemeFeature.PKE)
    cc.Enable(PKESchemeFeature.KEYSWITCH)
    cc.Enable(PKESchemeFeature.LEVELEDSHE)

    return cc
