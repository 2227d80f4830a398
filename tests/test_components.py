import asyncio

from textual.app import App
from textual.widgets import Static

from fogofsecrets.model import ENCRYPTED_ZONE, PUBLIC_ZONE, DisplayEntry, MapCell, PlayerEntry
from fogofsecrets.screens import LoadingScreen, player_status, render_cell

ME = "0xCafe000000000000000000000000000000000001"
PUB = "0xaaaa000000000000000000000000000000000002"
SPY = "0xbbbb000000000000000000000000000000000003"


def shown(address, encrypted, position, me=False):
    entry = PlayerEntry(address, encrypted, "0x" + "12" * 32, 0 if encrypted else position, me)
    return DisplayEntry(entry, position)


def test_empty_cells_show_their_zone():
    assert "Encrypted" in render_cell(MapCell(3, ENCRYPTED_ZONE), 2).plain
    assert "Open" in render_cell(MapCell(60, PUBLIC_ZONE), 2).plain


def test_crowded_cell_shows_overflow():
    occupants = (shown(ME, False, 60, me=True), shown(PUB, False, 60), shown(SPY, False, 60))
    text = render_cell(MapCell(60, PUBLIC_ZONE, occupants), 2).plain

    assert text.startswith("60")
    assert "0xCafe…0001" in text
    assert "+1" in text
    assert "0xbbbb" not in text


def test_player_status():
    assert player_status(shown(ME, True, None, me=True), None) == "Encrypted zone"
    assert player_status(shown(ME, True, 23, me=True), None) == "Decrypted cell #23"
    assert player_status(shown(ME, True, None, me=True), ME.lower()) == "Decrypting…"
    assert player_status(shown(PUB, False, 77), ME) == "Public cell #77"


def test_loading_screen_accepts_status_before_and_after_mount():
    async def run():
        screen = LoadingScreen()
        screen.add_status("Starting sandbox session...")

        app = App()
        async with app.run_test() as pilot:
            await app.push_screen(screen)
            screen.add_status("Loading players...", "yellow")
            await pilot.pause()
            assert screen.query_one("#status_text", Static) is not None
            assert screen.query_one("#loading_title", Static) is not None

    asyncio.run(run())
