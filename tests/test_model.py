import pytest

from tagwm.wm.config import LAYOUTS
from tagwm.wm.model import Client, Monitor, SizeHints, monocle, tile


def _monitor(width=1000, height=800, **kwargs):
    m = Monitor(mx=0, my=0, mw=width, mh=height, wx=0, wy=0, ww=width, wh=height, **kwargs)
    return m


def _client(mon, window, tags=1, bw=1, **kwargs):
    c = Client(window=window, tags=tags, bw=bw, mon=mon, **kwargs)
    mon.clients.append(c)
    mon.stack.append(c)
    return c


def _resize(c, x, y, w, h):
    c.x, c.y, c.w, c.h = x, y, w, h


def _overlap(a, b):
    return not (
        a.x + a.outer_width() <= b.x
        or b.x + b.outer_width() <= a.x
        or a.y + a.outer_height() <= b.y
        or b.y + b.outer_height() <= a.y
    )


def test_outer_size_includes_borders():
    c = Client(window=1, w=100, h=50, bw=3)
    assert c.outer_width() == 106
    assert c.outer_height() == 56


def test_visibility_follows_monitor_tagset():
    m = _monitor()
    shown = _client(m, 1, tags=1)
    hidden = _client(m, 2, tags=2)
    assert shown.is_visible()
    assert not hidden.is_visible()
    m.tagset[m.seltags] = 3
    assert hidden.is_visible()
    assert not Client(window=3, tags=1).is_visible()


def test_apply_size_hints_enforces_bar_height_minimum():
    m = _monitor()
    c = _client(m, 1)
    x, y, w, h, changed = c.apply_size_hints(10, 10, 0, -5, False, 1000, 800, 20, False)
    assert (w, h) == (20, 20)
    assert changed


def test_apply_size_hints_unchanged_geometry():
    m = _monitor()
    c = _client(m, 1, x=10, y=20, w=300, h=200)
    result = c.apply_size_hints(10, 20, 300, 200, False, 1000, 800, 20, False)
    assert result == (10, 20, 300, 200, False)


def test_increment_hints_round_down():
    m = _monitor()
    c = _client(m, 1, hints=SizeHints(incw=10, inch=10))
    _, _, w, h, _ = c.apply_size_hints(0, 0, 105, 99, False, 1000, 800, 20, True)
    assert w % 10 == 0 and h % 10 == 0
    assert w == 100


def test_hints_ignored_for_tiled_client_without_resize_hints():
    m = _monitor()
    c = _client(m, 1, hints=SizeHints(incw=10, inch=10))
    _, _, w, h, _ = c.apply_size_hints(0, 0, 105, 99, False, 1000, 800, 20, False)
    assert (w, h) == (105, 99)


def test_floating_layout_applies_hints():
    m = _monitor()
    m.lt[m.sellt] = LAYOUTS[1]
    c = _client(m, 1, hints=SizeHints(maxw=150, maxh=120))
    _, _, w, h, _ = c.apply_size_hints(0, 0, 400, 400, False, 1000, 800, 20, False)
    assert (w, h) == (150, 120)


def test_max_aspect_limits_width():
    m = _monitor()
    c = _client(m, 1, isfloating=True, hints=SizeHints(mina=0.5, maxa=1.0))
    _, _, w, h, _ = c.apply_size_hints(0, 0, 200, 100, False, 1000, 800, 20, False)
    assert w == h


def test_minimum_size_hint():
    m = _monitor()
    c = _client(m, 1, isfloating=True, hints=SizeHints(minw=300, minh=250))
    _, _, w, h, _ = c.apply_size_hints(0, 0, 50, 50, False, 1000, 800, 20, False)
    assert (w, h) == (300, 250)


def test_interactive_clamps_to_screen():
    m = _monitor()
    c = _client(m, 1, w=100, h=80, bw=1)
    x, y, _, _, _ = c.apply_size_hints(5000, 5000, 100, 80, True, 1000, 800, 20, False)
    assert x == 1000 - c.outer_width()
    assert y == 800 - c.outer_height()
    x, y, _, _, _ = c.apply_size_hints(-500, -500, 100, 80, True, 1000, 800, 20, False)
    assert (x, y) == (0, 0)


def test_non_interactive_clamps_to_window_area():
    m = _monitor()
    m.wx, m.wy = 100, 50
    c = _client(m, 1, w=100, h=80, bw=1)
    x, y, _, _, _ = c.apply_size_hints(m.wx + m.ww, m.wy + m.wh, 100, 80, False, 1000, 800, 20, False)
    assert x == m.wx + m.ww - c.outer_width()
    assert y == m.wy + m.wh - c.outer_height()
    x, y, _, _, _ = c.apply_size_hints(-1000, -1000, 100, 80, False, 1000, 800, 20, False)
    assert (x, y) == (m.wx, m.wy)


def test_update_bar_pos_top_bottom_hidden():
    m = Monitor(mx=0, my=10, mw=1000, mh=800)
    m.update_bar_pos(20)
    assert (m.by, m.wy, m.wh) == (m.my, m.my + 20, m.mh - 20)
    m.topbar = False
    m.update_bar_pos(20)
    assert m.wy == m.my
    assert m.by == m.wy + m.wh
    m.showbar = False
    m.update_bar_pos(20)
    assert (m.by, m.wy, m.wh) == (-20, m.my, m.mh)


def test_intersect():
    m = _monitor()
    assert m.intersect(10, 10, 30, 40) == 30 * 40
    assert m.intersect(2000, 2000, 10, 10) == 0
    assert m.intersect(-10, 0, 20, 10) == 10 * 10


def test_visible_and_tiled_filters_keep_order():
    m = _monitor()
    a = _client(m, 1)
    b = _client(m, 2, isfloating=True)
    _client(m, 3, tags=4)
    d = _client(m, 4)
    assert m.visible_clients() == [a, b, d]
    assert m.tiled_clients() == [a, d]


def test_default_monitor_layouts():
    m = Monitor()
    assert m.lt == [LAYOUTS[0], LAYOUTS[1]]
    assert m.ltsymbol == LAYOUTS[0].symbol
    assert m.tagset == [1, 1]


def test_tile_single_client_fills_area():
    m = _monitor()
    c = _client(m, 1, bw=1)
    tile(m, 10, _resize)
    assert (c.x, c.y) == (m.wx + 10, m.wy + 10)
    assert c.x + c.outer_width() <= m.wx + m.ww
    assert c.y + c.outer_height() <= m.wy + m.wh


def test_tile_master_and_stack_do_not_overlap():
    m = _monitor()
    clients = [_client(m, i) for i in range(4)]
    tile(m, 10, _resize)
    master, stack = clients[0], clients[1:]
    assert all(master.x + master.outer_width() <= s.x for s in stack)
    for i, a in enumerate(clients):
        assert m.wx <= a.x and a.x + a.outer_width() <= m.wx + m.ww
        assert m.wy <= a.y and a.y + a.outer_height() <= m.wy + m.wh
        for b in clients[i + 1 :]:
            assert not _overlap(a, b)
    assert [s.y for s in stack] == sorted(s.y for s in stack)


def test_tile_without_master_uses_one_column():
    m = _monitor(nmaster=0)
    clients = [_client(m, i) for i in range(3)]
    tile(m, 10, _resize)
    assert len({c.x for c in clients}) == 1


def test_tile_skips_floating_and_hidden():
    m = _monitor()
    floating = _client(m, 1, isfloating=True, x=5, y=6, w=7, h=8)
    hidden = _client(m, 2, tags=2, x=1, y=2, w=3, h=4)
    tile(m, 10, _resize)
    assert (floating.x, floating.y, floating.w, floating.h) == (5, 6, 7, 8)
    assert (hidden.x, hidden.y, hidden.w, hidden.h) == (1, 2, 3, 4)


def test_monocle_fills_area_and_sets_symbol():
    m = _monitor()
    a = _client(m, 1, bw=2)
    b = _client(m, 2, bw=2)
    monocle(m, _resize)
    assert m.ltsymbol == "[2]"
    for c in (a, b):
        assert (c.x, c.y) == (m.wx, m.wy)
        assert (c.outer_width(), c.outer_height()) == (m.ww, m.wh)


def test_monocle_without_visible_clients_keeps_symbol():
    m = _monitor()
    _client(m, 1, tags=2)
    before = m.ltsymbol
    monocle(m, _resize)
    assert m.ltsymbol == before


@pytest.mark.parametrize("count", [1, 2, 5])
def test_tile_resizes_every_tiled_client(count):
    m = _monitor()
    clients = [_client(m, i) for i in range(count)]
    seen = []
    tile(m, 10, lambda c, x, y, w, h: (seen.append(c), _resize(c, x, y, w, h)))
    assert seen == clients