import asyncio

import httpx
import pytest

pytest.importorskip("openfhe")

from fogofsecrets import http_server  # noqa: E402
from fogofsecrets.errors import DecryptFailed  # noqa: E402
from fogofsecrets.service.decryption import DecryptionExchange  # noqa: E402
from fogofsecrets.service.decryption.relayer_client import RelayerDecryptionService  # noqa: E402


@pytest.fixture(scope="module")
def relayer_service():
    service = RelayerDecryptionService(
        "http://relayer.test", transport=httpx.ASGITransport(app=http_server.app)
    )
    service.initialize()
    return service


def test_unready_until_initialized():
    assert not RelayerDecryptionService("http://relayer.test").ready


def test_health(authority, relayer_service):
    http_server.initialize_server(authority)
    assert asyncio.run(relayer_service.check_health())


def test_owner_decrypts_through_relayer(authority, alice, relayer_service):
    http_server.initialize_server(authority)
    asyncio.run(authority.start_game(alice))
    record = asyncio.run(authority.get_player_info(alice.address))

    exchange = DecryptionExchange(relayer_service, alice, authority.contract_address)
    assert asyncio.run(exchange.decrypt(record)) == 23
    assert http_server.state.decryption.requests == 1


def test_relayer_refuses_foreign_contract(authority, alice, relayer_service):
    http_server.initialize_server(authority)
    asyncio.run(authority.start_game(alice))
    record = asyncio.run(authority.get_player_info(alice.address))

    exchange = DecryptionExchange(
        relayer_service, alice, "0x0000000000000000000000000000000000000bad"
    )
    with pytest.raises(DecryptFailed) as excinfo:
        asyncio.run(exchange.decrypt(record))
    assert "403" in excinfo.value.reason


def test_malformed_request_is_400(authority):
    http_server.initialize_server(authority)

    async def post():
        transport = httpx.ASGITransport(app=http_server.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://relayer.test") as client:
            return await client.post("/v1/user-decrypt", json={"publicKey": "00"})

    assert asyncio.run(post()).status_code == 400
