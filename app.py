"""
Main Application - Fog of Secrets map client with TUI
"""
from textual.app import App
import asyncio

# Import screens
from fogofsecrets.screens import LoadingScreen, MapScreen

from fogofsecrets.config import CHAIN_CONFIG, GAME_CONFIG, NETWORK_CONFIG
from fogofsecrets.http_server import start_http_server
from fogofsecrets.model import MapBounds
from fogofsecrets.service.authority import RpcAuthority, SandboxAuthority, create_strategy
from fogofsecrets.service.decryption.relayer_client import RelayerDecryptionService
from fogofsecrets.session import GameSession
from fogofsecrets.session_logger import SessionLogger
from fogofsecrets.signer import WalletSigner, load_signer


def build_sandbox_session() -> GameSession:
    """Local authority + local relayer; a throwaway wallet unless one is configured"""
    bounds = MapBounds(GAME_CONFIG["default_total_cells"], GAME_CONFIG["default_encrypted_cells"])
    authority = SandboxAuthority(bounds, create_strategy(GAME_CONFIG["zone_strategy"], bounds))

    port = GAME_CONFIG["sandbox_http_port"]
    start_http_server(authority, port)

    signer = load_signer(CHAIN_CONFIG["private_key"]) or WalletSigner.create()
    service = RelayerDecryptionService(f"http://127.0.0.1:{port}")
    return GameSession(authority, service, signer, SessionLogger(signer.address))


def build_chain_session() -> GameSession:
    signer = load_signer(CHAIN_CONFIG["private_key"])
    authority = RpcAuthority()
    service = RelayerDecryptionService(NETWORK_CONFIG["relayer_url"])
    return GameSession(authority, service, signer, SessionLogger(signer.address if signer else None))


class FogOfSecretsApp(App):
    """Main Fog of Secrets TUI Application"""

    TITLE = "Fog of Secrets"
    SUB_TITLE = "Encrypted Map Edition"

    def __init__(self):
        super().__init__()
        self.session: GameSession = None

    async def on_mount(self) -> None:
        """Initialize application"""
        # Run setup in background worker so UI remains responsive
        self.run_worker(self._start_session(), exclusive=True)

    async def _start_session(self) -> None:
        loading_screen = LoadingScreen()
        self.push_screen(loading_screen)
        await asyncio.sleep(0.3)

        mode = GAME_CONFIG["mode"]
        loading_screen.add_status(f"Starting {mode} session...", "yellow")
        self.session = build_sandbox_session() if mode == "sandbox" else build_chain_session()

        if self.session.session_address:
            loading_screen.add_status(f"✓ Wallet {self.session.session_address}", "green")
        else:
            loading_screen.add_status("No wallet configured (read-only)", "yellow")
        await asyncio.sleep(0.3)

        # OpenFHE context generation is CPU bound
        loading_screen.add_status("Initializing encryption service...", "yellow")
        service = self.session.decryption_service
        await asyncio.to_thread(service.initialize)
        if not await service.check_health():
            loading_screen.add_status(f"⚠ Relayer at {service.relayer_url} is not responding", "red")
            await asyncio.sleep(1)

        loading_screen.add_status("Loading players...", "yellow")
        await self.session.refresh()

        self.pop_screen()
        self.push_screen(MapScreen(self.session))


# ============================================================================
# Entry Point
# ============================================================================

async def run_tui():
    """Run the map client with TUI"""
    app = FogOfSecretsApp()
    await app.run_async()


def main():
    asyncio.run(run_tui())


if __name__ == "__main__":
    main()
