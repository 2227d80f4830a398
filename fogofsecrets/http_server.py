"""
HTTP Server for Sandbox Mode - local relayer for user decryption
"""
import threading
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException

from fogofsecrets.errors import DecryptFailed
from fogofsecrets.service.authority import SandboxAuthority
from fogofsecrets.service.crypto_ops import deserialize_crypto_context, seal_value
from fogofsecrets.service.decryption import HandleContractPair, SandboxDecryptionService

app = FastAPI()

# Global state - set by GameSession in sandbox mode
class ServerState:
    def __init__(self):
        self.decryption: Optional[SandboxDecryptionService] = None

state = ServerState()


def initialize_server(authority: SandboxAuthority):
    """Serve decryptions for the given sandbox authority"""
    state.decryption = SandboxDecryptionService(authority)


def start_http_server(authority: SandboxAuthority, port: int) -> threading.Thread:
    """Start the relayer in a background thread"""
    initialize_server(authority)

    def run_server():
        uvicorn.run(app, host="127.0.0.1", port=port, log_level="warning")

    thread = threading.Thread(target=run_server, daemon=True)
    thread.start()
    print(f"[HTTP] Sandbox relayer started at http://127.0.0.1:{port}")
    return thread


@app.get("/health")
async def health():
    return {"ready": state.decryption is not None}


@app.post("/v1/user-decrypt")
async def user_decrypt(request: dict):
    """
    Authorize a user decryption and reseal each plaintext under the
    requester's one-time public key.
    """
    if state.decryption is None:
        raise HTTPException(status_code=503, detail="Sandbox not initialized")

    try:
        pairs = [
            HandleContractPair(p["handle"], p["contractAddress"])
            for p in request["handleContractPairs"]
        ]
        revealed = state.decryption.authorize(
            pairs,
            request["publicKey"],
            request["signature"],
            request["contractAddresses"],
            request["userAddress"],
            request["startTimestamp"],
            request["durationDays"],
        )
    except DecryptFailed as e:
        raise HTTPException(status_code=403, detail=str(e))
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Malformed request: {e}")

    print(f"[HTTP] 🔓 User decryption authorized for {request['userAddress']}")

    try:
        cc = deserialize_crypto_context(request["cryptoContext"])
        sealed = {
            handle: seal_value(cc, request["publicKey"], value)
            for handle, value in revealed.items()
        }
    except Exception as e:
        print(f"[HTTP] ❌ Reseal error: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    return {"response": sealed}
