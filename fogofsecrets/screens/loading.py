"""
Loading Screen - shown while the authority and encryption service come up
"""
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Header, LoadingIndicator, Static


class LoadingScreen(Screen):
    CSS = """
    #loading_content {
        width: 60;
        height: auto;
    }

    #loading_title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
    }

    #status_text {
        width: 100%;
        text-align: center;
        color: $text-muted;
    }
    """

    def compose(self) -> ComposeResult:
        yield Header()
        with Center():
            with Vertical(id="loading_content"):
                yield Static("🗺️  Preparing the map", id="loading_title")
                yield LoadingIndicator()
                yield Static("", id="status_text")

    def add_status(self, message: str, style: str = "white"):
        """Replace the status line"""
        try:
            status = self.query_one("#status_text", Static)
        except NoMatches:
            return
        status.update(f"[{style}]{message}[/]")
