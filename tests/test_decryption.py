import asyncio

import pytest

from fogofsecrets.errors import (
    DecryptFailed,
    DecryptionResponseInvalid,
    DecryptionServiceUnready,
    SignerUnavailable,
    UnauthorizedDecrypt,
)
from fogofsecrets.service.decryption import (
    DecryptionExchange,
    DecryptionKeypair,
    DecryptionService,
    build_user_decrypt_request,
    recover_signer,
)
from fogofsecrets.service.decryption.eip712 import window_is_open

from .conftest import NOW


class RecordingService(DecryptionService):
    """Captures what the exchange submits and answers with a canned response"""

    def __init__(self, response=None, ready=True, error=None):
        self.response = response
        self._ready = ready
        self.error = error
        self.calls = []

    @property
    def ready(self):
        return self._ready

    def generate_keypair(self):
        return DecryptionKeypair(public_key="aa" * 32, private_key="bb" * 32)

    async def user_decrypt(self, handle_contract_pairs, private_key, public_key, signature,
                           contract_addresses, user_address, start_timestamp, duration_days):
        self.calls.append(dict(
            pairs=handle_contract_pairs,
            private_key=private_key,
            public_key=public_key,
            signature=signature,
            contract_addresses=contract_addresses,
            user_address=user_address,
            start_timestamp=start_timestamp,
            duration_days=duration_days,
        ))
        if self.error:
            raise self.error
        return self.response


def joined_record(authority, signer):
    asyncio.run(authority.start_game(signer))
    return asyncio.run(authority.get_player_info(signer.address))


def test_owner_recovers_assigned_cell(authority, decryption_service, alice, clock):
    record = joined_record(authority, alice)
    exchange = DecryptionExchange(decryption_service, alice, authority.contract_address, clock=clock)

    value = asyncio.run(exchange.decrypt(record))

    assert value == authority.plaintext_of(record.encrypted_position) == 23
    assert decryption_service.requests == 1


def test_other_player_cannot_decrypt(authority, decryption_service, alice, bob, clock):
    record = joined_record(authority, alice)
    exchange = DecryptionExchange(decryption_service, bob, authority.contract_address, clock=clock)

    with pytest.raises(UnauthorizedDecrypt):
        asyncio.run(exchange.decrypt(record))
    assert decryption_service.requests == 0


def test_unready_service_rejected_before_signing(authority, alice, clock):
    record = joined_record(authority, alice)
    service = RecordingService(ready=False)

    with pytest.raises(DecryptionServiceUnready):
        asyncio.run(DecryptionExchange(service, alice, authority.contract_address, clock=clock).decrypt(record))
    with pytest.raises(DecryptionServiceUnready):
        asyncio.run(DecryptionExchange(None, alice, authority.contract_address, clock=clock).decrypt(record))
    assert service.calls == []


def test_missing_signer_rejected(authority, alice, clock):
    record = joined_record(authority, alice)
    service = RecordingService()

    with pytest.raises(SignerUnavailable):
        asyncio.run(DecryptionExchange(service, None, authority.contract_address, clock=clock).decrypt(record))
    assert service.calls == []


def test_public_record_has_nothing_to_decrypt(authority, bob, clock):
    record = joined_record(authority, bob)
    service = RecordingService()

    with pytest.raises(DecryptFailed):
        asyncio.run(DecryptionExchange(service, bob, authority.contract_address, clock=clock).decrypt(record))
    assert service.calls == []


def test_request_payload_shape(authority, alice, clock):
    record = joined_record(authority, alice)
    handle = record.encrypted_position
    service = RecordingService(response={handle: 23})
    exchange = DecryptionExchange(service, alice, authority.contract_address, clock=clock)

    assert asyncio.run(exchange.decrypt(record)) == 23

    (call,) = service.calls
    assert [(p.handle, p.contract_address) for p in call["pairs"]] == [(handle, authority.contract_address)]
    assert call["contract_addresses"] == [authority.contract_address]
    assert call["user_address"] == alice.address.lower()
    assert call["start_timestamp"] == str(NOW)
    assert call["duration_days"] == "7"
    assert not call["signature"].startswith("0x")
    assert call["public_key"] == "aa" * 32


def test_signature_binds_key_contracts_and_window(authority, alice, clock):
    record = joined_record(authority, alice)
    service = RecordingService(response={record.encrypted_position: 23})
    asyncio.run(DecryptionExchange(service, alice, authority.contract_address, clock=clock).decrypt(record))

    (call,) = service.calls
    request = build_user_decrypt_request(
        call["public_key"], call["contract_addresses"], call["start_timestamp"], call["duration_days"]
    )
    assert recover_signer(request, call["signature"]) == alice.address

    tampered = build_user_decrypt_request(
        "cc" * 32, call["contract_addresses"], call["start_timestamp"], call["duration_days"]
    )
    assert recover_signer(tampered, call["signature"]) != alice.address


def test_handle_lookup_is_case_insensitive(authority, alice, clock):
    record = joined_record(authority, alice)
    service = RecordingService(response={record.encrypted_position.upper().replace("0X", "0x"): 23})

    value = asyncio.run(DecryptionExchange(service, alice, authority.contract_address, clock=clock).decrypt(record))
    assert value == 23


@pytest.mark.parametrize("response", [{}, {"0xother": 5}, None, "23"])
def test_missing_value_is_invalid_response(authority, alice, clock, response):
    record = joined_record(authority, alice)
    service = RecordingService(response=response)

    with pytest.raises(DecryptionResponseInvalid):
        asyncio.run(DecryptionExchange(service, alice, authority.contract_address, clock=clock).decrypt(record))


@pytest.mark.parametrize("value", [True, "23", 23.0])
def test_non_integer_value_is_invalid_response(authority, alice, clock, value):
    record = joined_record(authority, alice)
    service = RecordingService(response={record.encrypted_position: value})

    with pytest.raises(DecryptionResponseInvalid) as excinfo:
        asyncio.run(DecryptionExchange(service, alice, authority.contract_address, clock=clock).decrypt(record))
    assert excinfo.value.value == value


def test_service_errors_become_decrypt_failed(authority, alice, clock):
    record = joined_record(authority, alice)
    service = RecordingService(error=ConnectionError("relayer unreachable"))

    with pytest.raises(DecryptFailed) as excinfo:
        asyncio.run(DecryptionExchange(service, alice, authority.contract_address, clock=clock).decrypt(record))
    assert "relayer unreachable" in excinfo.value.reason


def test_sandbox_rejects_expired_authorization(authority, alice):
    from fogofsecrets.service.decryption import SandboxDecryptionService

    record = joined_record(authority, alice)
    eight_days_later = SandboxDecryptionService(authority, clock=lambda: NOW + 8 * 86400)
    exchange = DecryptionExchange(eight_days_later, alice, authority.contract_address, clock=lambda: NOW)

    with pytest.raises(DecryptFailed) as excinfo:
        asyncio.run(exchange.decrypt(record))
    assert "validity window" in excinfo.value.reason


def test_sandbox_rejects_foreign_contract(authority, decryption_service, alice, clock):
    record = joined_record(authority, alice)
    exchange = DecryptionExchange(
        decryption_service, alice, "0x0000000000000000000000000000000000000bad", clock=clock
    )

    with pytest.raises(DecryptFailed):
        asyncio.run(exchange.decrypt(record))


def test_sandbox_rejects_signature_from_someone_else(authority, decryption_service, alice, bob):
    from fogofsecrets.service.decryption import HandleContractPair

    record = joined_record(authority, alice)
    keypair = decryption_service.generate_keypair()
    contracts = [authority.contract_address]
    request = build_user_decrypt_request(keypair.public_key, contracts, str(NOW), "7")
    bob_signature = asyncio.run(bob.sign_typed_data(request.domain, request.types, request.message))

    with pytest.raises(DecryptFailed) as excinfo:
        decryption_service.authorize(
            [HandleContractPair(record.encrypted_position, authority.contract_address)],
            keypair.public_key,
            bob_signature[2:],
            contracts,
            alice.address.lower(),
            str(NOW),
            "7",
        )
    assert "signature" in excinfo.value.reason


def test_validity_window_bounds():
    assert window_is_open(NOW, 7, NOW)
    assert window_is_open(NOW, 7, NOW + 7 * 86400 - 1)
    assert not window_is_open(NOW, 7, NOW + 7 * 86400)
    assert not window_is_open(NOW, 7, NOW - 1)


def test_keypairs_are_fresh_per_request(decryption_service):
    assert decryption_service.generate_keypair() != decryption_service.generate_keypair()
    assert "private_key" not in repr(decryption_service.generate_keypair())


def sign_request(signer, keypair, contracts, duration_days="7"):
    request = build_user_decrypt_request(keypair.public_key, contracts, str(NOW), duration_days)
    return asyncio.run(signer.sign_typed_data(request.domain, request.types, request.message))


def test_public_handle_reveals_public_cell_to_owner(authority, decryption_service, bob):
    from fogofsecrets.service.decryption import HandleContractPair

    record = joined_record(authority, bob)
    keypair = decryption_service.generate_keypair()
    contracts = [authority.contract_address]

    revealed = decryption_service.authorize(
        [HandleContractPair(record.encrypted_position, authority.contract_address)],
        keypair.public_key,
        sign_request(bob, keypair, contracts)[2:],
        contracts,
        bob.address.lower(),
        str(NOW),
        "7",
    )
    assert revealed == {record.encrypted_position: record.public_position}


def test_explicit_zero_duration_is_not_replaced(authority, alice, clock):
    record = joined_record(authority, alice)
    service = RecordingService(response={record.encrypted_position: 23})
    exchange = DecryptionExchange(service, alice, authority.contract_address, duration_days=0, clock=clock)

    asyncio.run(exchange.decrypt(record))
    assert service.calls[0]["duration_days"] == "0"


def test_sandbox_rejects_zero_day_window(authority, decryption_service, alice, clock):
    record = joined_record(authority, alice)
    exchange = DecryptionExchange(
        decryption_service, alice, authority.contract_address, duration_days=0, clock=clock
    )

    with pytest.raises(DecryptFailed) as excinfo:
        asyncio.run(exchange.decrypt(record))
    assert "duration" in excinfo.value.reason
