"""
Services - authority access, roster reads, decryption

crypto_ops pulls in OpenFHE and is only imported by the relayer paths.
"""

from .roster import RosterReader

__all__ = ["RosterReader"]
