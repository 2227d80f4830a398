"""
Error taxonomy for roster reads, decryption and transactions.

Every failure is scoped to a single invocation; the session turns these into
banner messages and keeps its last good state.
"""
from typing import Optional


class FogOfSecretsError(Exception):
    """Base class for all client errors"""


class ReadFailure(FogOfSecretsError):
    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"read failed during {operation}{detail}")


class UnauthorizedDecrypt(FogOfSecretsError):
    def __init__(self, owner: str, requester: str) -> None:
        self.owner = owner
        self.requester = requester
        super().__init__(f"{requester} may not decrypt the position of {owner}")


class DecryptionServiceUnready(FogOfSecretsError):
    def __init__(self) -> None:
        super().__init__("decryption service is not initialized")


class SignerUnavailable(FogOfSecretsError):
    def __init__(self) -> None:
        super().__init__("no active signer for this session")


class DecryptFailed(FogOfSecretsError):
    def __init__(self, handle: str, reason: str) -> None:
        self.handle = handle
        self.reason = reason
        super().__init__(f"decryption of {handle} failed: {reason}")


class DecryptionResponseInvalid(DecryptFailed):
    def __init__(self, handle: str, value: object = None) -> None:
        self.value = value
        super().__init__(handle, f"unexpected decrypted value {value!r}")


class TransactionFailure(FogOfSecretsError):
    def __init__(self, action: str, reason: str, tx_hash: Optional[str] = None) -> None:
        self.action = action
        self.reason = reason
        self.tx_hash = tx_hash
        suffix = f" (tx {tx_hash})" if tx_hash else ""
        super().__init__(f"{action} failed: {reason}{suffix}")
