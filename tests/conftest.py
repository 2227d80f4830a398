import pytest

from fogofsecrets.model import MapBounds
from fogofsecrets.service.authority import SandboxAuthority, ScriptedStrategy
from fogofsecrets.service.decryption import SandboxDecryptionService
from fogofsecrets.signer import WalletSigner

NOW = 1_760_000_000


@pytest.fixture
def bounds():
    return MapBounds(total_cells=100, encrypted_cells=50)


@pytest.fixture
def alice():
    return WalletSigner.create()


@pytest.fixture
def bob():
    return WalletSigner.create()


@pytest.fixture
def authority(bounds, alice, bob):
    """Alice lands in encrypted cell 23, Bob in public cell 77"""
    strategy = ScriptedStrategy(bounds, {alice.address: (True, 23), bob.address: (False, 77)})
    return SandboxAuthority(bounds, strategy)


@pytest.fixture
def decryption_service(authority):
    return SandboxDecryptionService(authority, clock=lambda: NOW + 60)


@pytest.fixture
def clock():
    return lambda: NOW
