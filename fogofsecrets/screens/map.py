"""
Map Screen - mission control for joining, refreshing and decrypting
"""
import asyncio
from datetime import datetime

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from fogofsecrets.session import GameSession

from .components import MapGrid, PlayerList


class MapScreen(Screen):
    """Main screen: stats, service status, error banner, grid and player list"""

    CSS = """
    MapScreen {
        background: $surface;
    }

    #stats {
        height: auto;
        padding: 0 1;
        color: $text;
    }

    #service {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }

    #error_banner {
        height: auto;
        padding: 0 1;
        background: $error 30%;
        color: $text;
        display: none;
    }

    #error_banner.visible {
        display: block;
    }

    #layout {
        height: auto;
    }
    """

    BINDINGS = [
        Binding("s", "start_game", "Start Game"),
        Binding("r", "refresh_map", "Refresh Map"),
        Binding("d", "decrypt", "Decrypt my position"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, session: GameSession):
        super().__init__()
        self.session = session

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="stats")
        yield Static("", id="service")
        yield Static("", id="error_banner")
        with VerticalScroll():
            with Horizontal(id="layout"):
                yield MapGrid(id="map_grid")
                yield PlayerList(id="player_list")
        yield Footer()

    def on_mount(self) -> None:
        self.render_state()

    def render_state(self) -> None:
        """Redraw everything from the session's current state"""
        state = self.session.state
        summary = self.session.summary

        stats = (
            f"Total players: {summary.total}   "
            f"Encrypted agents: {summary.encrypted}   "
            f"Public explorers: {summary.public}"
        )
        if state.last_updated is not None:
            stats += f"   Last updated: {datetime.fromtimestamp(state.last_updated).strftime('%H:%M:%S')}"
        if state.tx_pending:
            stats += "   [yellow]Assigning position…[/]"
        self.query_one("#stats", Static).update(stats)

        wallet = state.session_address or "not connected"
        service = "[green]ready[/]" if self.session.service_ready else "[yellow]initializing…[/]"
        self.query_one("#service", Static).update(f"Wallet: {wallet}   Encryption service: {service}")

        banner = self.query_one("#error_banner", Static)
        if state.error:
            banner.update(f"❌ {state.error}")
            banner.add_class("visible")
        else:
            banner.remove_class("visible")

        self.query_one("#map_grid", MapGrid).show_cells(self.session.cells, loading=state.loading)
        self.query_one("#player_list", PlayerList).show_players(
            self.session.display_entries,
            summary,
            decrypting=state.decrypting,
            loading=state.loading,
        )

    async def _run_and_render(self, operation) -> None:
        task = asyncio.ensure_future(operation)
        # let the operation flag itself as pending before the first redraw
        await asyncio.sleep(0)
        self.render_state()
        await task
        self.render_state()

    def action_start_game(self) -> None:
        if self.session.state.tx_pending:
            return
        self.run_worker(self._run_and_render(self.session.start_game()), group="tx")

    def action_refresh_map(self) -> None:
        if self.session.state.loading:
            return
        self.run_worker(self._run_and_render(self.session.refresh()), group="load")

    def action_decrypt(self) -> None:
        if self.session.state.decrypting is not None:
            return
        self.run_worker(self._run_and_render(self.session.decrypt_position()), group="decrypt")

    def action_quit(self) -> None:
        self.app.exit()
