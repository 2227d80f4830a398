"""
RPC Authority - JSON-RPC access to the deployed position-assignment contract
"""
import asyncio
import itertools
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_checksum_address

from fogofsecrets.config import CHAIN_CONFIG, NETWORK_CONFIG
from fogofsecrets.errors import ReadFailure, TransactionFailure
from fogofsecrets.model import MapBounds, PlayerRecord

from .base import AssignmentAuthority


# name -> (signature, input types, output types)
CONTRACT_FUNCTIONS: Dict[str, Tuple[str, List[str], List[str]]] = {
    "getMapBounds": ("getMapBounds()", [], ["uint8", "uint8"]),
    "getAllPlayers": ("getAllPlayers()", [], ["address[]"]),
    "getPlayerInfo": ("getPlayerInfo(address)", ["address"], ["bool", "bool", "bytes32", "uint8"]),
    "hasPlayer": ("hasPlayer(address)", ["address"], ["bool"]),
    "playerCount": ("playerCount()", [], ["uint256"]),
    "startGame": ("startGame()", [], []),
}


class JsonRpcError(Exception):
    def __init__(self, error: Dict[str, Any]):
        self.code = error.get("code")
        self.data = error.get("data")
        super().__init__(f"JSON-RPC error {self.code}: {error.get('message')}")


def function_selector(signature: str) -> bytes:
    return keccak(text=signature)[:4]


def encode_call(name: str, args: Sequence[Any] = ()) -> str:
    signature, input_types, _ = CONTRACT_FUNCTIONS[name]
    calldata = function_selector(signature) + encode(input_types, list(args))
    return "0x" + calldata.hex()


def decode_result(name: str, data: str) -> tuple:
    _, _, output_types = CONTRACT_FUNCTIONS[name]
    raw = bytes.fromhex(data[2:] if data.startswith("0x") else data)
    return decode(output_types, raw)


class RpcAuthority(AssignmentAuthority):
    """Reads via eth_call, joins via a signed startGame() transaction"""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        contract_address: Optional[str] = None,
        chain_id: Optional[int] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        poll_interval: Optional[float] = None,
    ):
        self.rpc_url = rpc_url or CHAIN_CONFIG["rpc_url"]
        self.contract_address = to_checksum_address(contract_address or CHAIN_CONFIG["contract_address"])
        self.chain_id = chain_id if chain_id is not None else CHAIN_CONFIG["chain_id"]
        self.timeout = timeout or NETWORK_CONFIG["connection_timeout"]
        self.transport = transport
        self.poll_interval = poll_interval if poll_interval is not None else NETWORK_CONFIG["receipt_poll_interval"]
        self._ids = itertools.count(1)

    async def _rpc(self, method: str, params: List[Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            data = response.json()
        if data.get("error"):
            raise JsonRpcError(data["error"])
        return data["result"]

    async def _call(self, name: str, *args: Any) -> tuple:
        try:
            result = await self._rpc(
                "eth_call",
                [{"to": self.contract_address, "data": encode_call(name, args)}, "latest"],
            )
            return decode_result(name, result)
        except (httpx.HTTPError, JsonRpcError, DecodingError, KeyError, ValueError) as e:
            print(f"[Authority] Error calling {name}: {e}")
            raise ReadFailure(name, e) from e

    # ========================================================================
    # Reads
    # ========================================================================

    async def get_map_bounds(self) -> MapBounds:
        total_cells, encrypted_cells = await self._call("getMapBounds")
        return MapBounds(total_cells=int(total_cells), encrypted_cells=int(encrypted_cells))

    async def get_all_players(self) -> List[str]:
        (players,) = await self._call("getAllPlayers")
        return [to_checksum_address(p) for p in players]

    async def get_player_info(self, address: str) -> PlayerRecord:
        exists, is_encrypted, handle, public_position = await self._call(
            "getPlayerInfo", to_checksum_address(address)
        )
        return PlayerRecord(
            address=to_checksum_address(address),
            exists=bool(exists),
            is_encrypted=bool(is_encrypted),
            encrypted_position="0x" + bytes(handle).hex(),
            public_position=int(public_position),
        )

    async def has_player(self, address: str) -> bool:
        (present,) = await self._call("hasPlayer", to_checksum_address(address))
        return bool(present)

    async def player_count(self) -> int:
        (count,) = await self._call("playerCount")
        return int(count)

    # ========================================================================
    # Writes
    # ========================================================================

    async def start_game(self, signer) -> Dict[str, Any]:
        sender = to_checksum_address(signer.address)
        data = encode_call("startGame")
        tx_hash = None
        try:
            nonce = int(await self._rpc("eth_getTransactionCount", [sender, "pending"]), 16)
            gas_price = int(await self._rpc("eth_gasPrice", []), 16)
            gas = int(
                await self._rpc("eth_estimateGas", [{"from": sender, "to": self.contract_address, "data": data}]),
                16,
            )
            tx = {
                "to": self.contract_address,
                "data": data,
                "value": 0,
                "nonce": nonce,
                "gas": int(gas * CHAIN_CONFIG["gas_limit_margin"]),
                "gasPrice": gas_price,
                "chainId": self.chain_id,
            }
            tx_hash = await self._rpc("eth_sendRawTransaction", [signer.sign_transaction(tx)])
            print(f"[Authority] Sent startGame transaction: {tx_hash}")
            receipt = await self._wait_for_receipt(tx_hash)
            status = int(receipt.get("status", "0x0"), 16)
            block_number = int(receipt["blockNumber"], 16) if status == 1 else None
        except TransactionFailure:
            raise
        except Exception as e:
            print(f"[Authority] startGame failed: {e}")
            raise TransactionFailure("startGame", str(e), tx_hash) from e

        if status != 1:
            raise TransactionFailure("startGame", "transaction reverted", tx_hash)

        print(f"[Authority] startGame confirmed in block {block_number}")
        return receipt

    async def _wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        timeout = NETWORK_CONFIG["receipt_timeout"]
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while loop.time() <= deadline:
            receipt = await self._rpc("eth_getTransactionReceipt", [tx_hash])
            if receipt is not None:
                return receipt
            await asyncio.sleep(self.poll_interval)
        raise TransactionFailure("startGame", f"no receipt after {timeout}s", tx_hash)
