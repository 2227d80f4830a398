"""
Shared UI Components - map grid and player list
"""
from typing import Optional, Sequence

from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from fogofsecrets.config import UI_CONFIG
from fogofsecrets.model import ENCRYPTED_ZONE, PUBLIC_ZONE, DisplayEntry, MapCell, RosterSummary


ZONE_STYLES = {
    ENCRYPTED_ZONE: "on #2b1d4a",
    PUBLIC_ZONE: "on #12362a",
}

SELF_STYLE = "bold #F4D03F"
OCCUPANT_STYLE = "#00BFFF"


def render_cell(cell: MapCell, max_labels: int) -> Text:
    """Cell id, then up to max_labels occupants and a +N overflow marker"""
    text = Text(style=ZONE_STYLES[cell.zone])
    text.append(f"{cell.index}\n", style="bold")

    if not cell.occupants:
        text.append("Encrypted" if cell.zone == ENCRYPTED_ZONE else "Open", style="dim")
        return text

    for occupant in cell.occupants[:max_labels]:
        text.append(f"{occupant.label}\n", style=SELF_STYLE if occupant.is_current_user else OCCUPANT_STYLE)
    extra = len(cell.occupants) - max_labels
    if extra > 0:
        text.append(f"+{extra}", style="dim")
    return text


def player_status(player: DisplayEntry, decrypting: Optional[str]) -> str:
    if decrypting is not None and decrypting.lower() == player.address.lower():
        return "Decrypting…"
    if player.is_encrypted:
        if player.display_position is not None:
            return f"Decrypted cell #{player.display_position}"
        return "Encrypted zone"
    return f"Public cell #{player.entry.public_position}"


class MapGrid(Static):
    """Grid of all cells, encrypted zone first"""

    DEFAULT_CSS = """
    MapGrid {
        width: 2fr;
        height: auto;
        padding: 0 1;
    }
    """

    def show_cells(self, cells: Sequence[MapCell], loading: bool = False) -> None:
        columns = UI_CONFIG["grid_columns"]
        max_labels = UI_CONFIG["max_occupant_labels"]

        table = Table(
            title="Map Overview" + (" (updating…)" if loading else ""),
            show_header=False,
            show_lines=True,
            expand=True,
            padding=0,
        )
        for _ in range(columns):
            table.add_column(justify="center", ratio=1)

        for row_start in range(0, len(cells), columns):
            row = [render_cell(cell, max_labels) for cell in cells[row_start:row_start + columns]]
            row.extend(Text("") for _ in range(columns - len(row)))
            table.add_row(*row)

        self.update(table)


class PlayerList(Static):
    """Every player with zone tags, resolved cell and ciphertext handle"""

    DEFAULT_CSS = """
    PlayerList {
        width: 1fr;
        height: auto;
        padding: 0 1;
    }
    """

    def show_players(
        self,
        players: Sequence[DisplayEntry],
        summary: RosterSummary,
        decrypting: Optional[str] = None,
        loading: bool = False,
    ) -> None:
        if not players:
            message = "Loading player data…" if loading else "No players have joined yet. Be the first to drop in."
            self.update(Text(message, style="dim"))
            return

        table = Table(
            title=f"Player Intelligence ({summary.encrypted} encrypted, {summary.public} public)",
            expand=True,
        )
        table.add_column("Player")
        table.add_column("Tags")
        table.add_column("Status")
        table.add_column("Ciphertext", overflow="ellipsis", max_width=18)

        for player in players:
            tags = Text()
            if player.is_encrypted:
                tags.append("Encrypted", style="bold magenta")
            else:
                tags.append("Public", style="bold green")
            if player.is_current_user:
                tags.append(" You", style=SELF_STYLE)

            table.add_row(
                Text(player.label, style=SELF_STYLE if player.is_current_user else ""),
                tags,
                player_status(player, decrypting),
                player.entry.encrypted_position,
            )

        self.update(table)
