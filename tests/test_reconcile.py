from fogofsecrets.model import ENCRYPTED_ZONE, PUBLIC_ZONE, MapBounds, PlayerEntry
from fogofsecrets.reconcile import build_grid, prune_cache, reconcile, resolve_position, summarize

ME = "0xCafe000000000000000000000000000000000001"
PUB = "0xaaaa000000000000000000000000000000000002"
SPY = "0xBbBb000000000000000000000000000000000003"
GONE = "0xdddd000000000000000000000000000000000004"

HANDLE = "0x" + "12" * 32
ZERO = "0x" + "00" * 32


def entries(session=ME):
    return (
        PlayerEntry(SPY, True, "0x" + "34" * 32, 0, False),
        PlayerEntry(PUB, False, ZERO, 77, False),
        PlayerEntry(ME, True, HANDLE, 0, session == ME),
    )


def test_public_players_resolve_to_public_cell():
    assert resolve_position(entries()[1], {}) == 77


def test_encrypted_players_hidden_until_decrypted():
    me = entries()[2]
    assert resolve_position(me, {}) is None
    assert resolve_position(me, {ME.lower(): 23}) == 23


def test_public_cell_wins_over_stale_cache():
    assert resolve_position(entries()[1], {PUB.lower(): 3}) == 77


def test_prune_drops_departed_addresses_only():
    cache = {ME.lower(): 23, GONE.lower(): 9}
    assert prune_cache(entries(), cache) == {ME.lower(): 23}
    assert cache == {ME.lower(): 23, GONE.lower(): 9}


def test_reconcile_orders_self_first_then_by_address():
    display, _ = reconcile(entries(), {})
    assert [d.address for d in display] == [ME, PUB, SPY]


def test_cached_decryption_survives_refresh():
    cache = {ME.lower(): 23}
    display, pruned = reconcile(entries(), cache)

    mine = display[0]
    assert mine.is_current_user and mine.display_position == 23
    assert pruned == cache


def test_reconcile_is_idempotent():
    cache = {ME.lower(): 23, GONE.lower(): 9}
    first = reconcile(entries(), cache)
    second = reconcile(entries(), first[1])
    assert first == second


def test_summary_counts_by_zone():
    display, _ = reconcile(entries(), {})
    summary = summarize(display)
    assert (summary.total, summary.encrypted, summary.public) == (3, 2, 1)


def test_grid_places_resolved_players():
    bounds = MapBounds(100, 50)
    display, _ = reconcile(entries(), {ME.lower(): 23})
    cells = build_grid(bounds, display)

    assert len(cells) == 100
    assert cells[0].index == 1 and cells[-1].index == 100
    assert cells[22].zone == ENCRYPTED_ZONE
    assert [o.address for o in cells[22].occupants] == [ME]
    assert cells[76].zone == PUBLIC_ZONE
    assert [o.address for o in cells[76].occupants] == [PUB]
    assert sum(len(c.occupants) for c in cells) == 2


def test_shared_cell_lists_every_occupant():
    twins = (
        PlayerEntry(PUB, False, ZERO, 60, False),
        PlayerEntry(GONE, False, ZERO, 60, False),
    )
    display, _ = reconcile(twins, {})
    cells = build_grid(MapBounds(100, 50), display)
    assert len(cells[59].occupants) == 2


def test_without_wallet_encrypted_entries_stay_hidden():
    display, _ = reconcile(entries(session=None), {})
    assert not any(d.is_current_user for d in display)
    assert [d.display_position for d in display if d.is_encrypted] == [None, None]


def test_zone_boundaries():
    bounds = MapBounds(100, 50)
    assert bounds.zone_of(50) == ENCRYPTED_ZONE
    assert bounds.zone_of(51) == PUBLIC_ZONE
    assert bounds.in_encrypted_zone(1) and not bounds.in_encrypted_zone(0)
    assert bounds.in_public_zone(100) and not bounds.in_public_zone(101)
