import io

import pytest

from tagwm.wm.bindings import (
    NUMLOCK_MASK,
    bar_click,
    clean_mask,
    dispatch_button,
    dispatch_key,
    main,
)
from tagwm.wm.config import (
    BUTTON1,
    BUTTON3,
    LAYOUTS,
    LOCK_MASK,
    MODKEY,
    SHIFT_MASK,
    XK_1,
    XK_I,
    XK_M,
    XK_Q,
    XK_TAB,
    Action,
    Click,
    default_config,
)
from tagwm.wm.manager import WindowManager


@pytest.fixture
def wm():
    return WindowManager(default_config(), 1000, 800, 20)


def current_tags(manager):
    m = manager.selmon
    return m.tagset[m.seltags]


def test_clean_mask_strips_lock_and_numlock():
    assert clean_mask(MODKEY | LOCK_MASK | NUMLOCK_MASK, NUMLOCK_MASK) == MODKEY


def test_clean_mask_drops_non_modifier_bits():
    assert clean_mask(MODKEY | SHIFT_MASK | (1 << 13), 0) == MODKEY | SHIFT_MASK


def test_view_key_selects_tag(wm):
    performed = dispatch_key(wm, MODKEY, XK_1 + 1)
    assert performed == [Action.VIEW]
    assert current_tags(wm) == 1 << 1


def test_key_matches_with_capslock(wm):
    dispatch_key(wm, MODKEY | LOCK_MASK, XK_1 + 4)
    assert current_tags(wm) == 1 << 4


def test_tab_returns_to_previous_tags(wm):
    dispatch_key(wm, MODKEY, XK_1 + 2)
    dispatch_key(wm, MODKEY, XK_TAB)
    assert current_tags(wm) == 1


def test_unbound_key_does_nothing(wm):
    assert dispatch_key(wm, SHIFT_MASK, XK_1) == []
    assert current_tags(wm) == 1


def test_quit_key_stops(wm):
    dispatch_key(wm, MODKEY | SHIFT_MASK, XK_Q)
    assert wm.running is False


def test_tag_key_moves_client(wm):
    client = wm.manage(1, 0, 0, 100, 100, "term")
    dispatch_key(wm, MODKEY | SHIFT_MASK, XK_1 + 2)
    assert client.tags == 1 << 2


def test_incnmaster_key(wm):
    before = wm.selmon.nmaster
    dispatch_key(wm, MODKEY, XK_I)
    assert wm.selmon.nmaster == before + 1


def test_monocle_key_sets_layout(wm):
    wm.manage(1, 0, 0, 100, 100, "term")
    dispatch_key(wm, MODKEY, XK_M)
    m = wm.selmon
    assert m.lt[m.sellt] == LAYOUTS[2]
    assert m.ltsymbol == "[1]"


def test_tag_bar_button_views_clicked_tag(wm):
    performed = dispatch_button(wm, Click.TAG_BAR, 0, BUTTON1, 3)
    assert performed == [Action.VIEW]
    assert current_tags(wm) == 1 << 3


def test_lt_symbol_button3_selects_monocle(wm):
    dispatch_button(wm, Click.LT_SYMBOL, 0, BUTTON3)
    m = wm.selmon
    assert m.lt[m.sellt] == LAYOUTS[2]


def test_client_button_toggles_floating(wm):
    client = wm.manage(1, 0, 0, 100, 100, "term")
    assert client.isfloating is False
    dispatch_button(wm, Click.CLIENT_WIN, MODKEY, 2)
    assert client.isfloating is True


def test_move_drag_is_not_performed(wm):
    wm.manage(1, 0, 0, 100, 100, "term")
    assert dispatch_button(wm, Click.CLIENT_WIN, MODKEY, BUTTON1) == []


def test_killclient_removes_selected(wm):
    wm.manage(1, 0, 0, 100, 100, "term")
    dispatch_key(wm, MODKEY | SHIFT_MASK, 0x0063)
    assert wm.client_for(1) is None


def _measure(text):
    return 10 * len(text) + 8


def test_bar_click_regions(wm):
    tags = wm.config.tags
    assert bar_click(wm, 0, _measure, "status") == (Click.TAG_BAR, 0)
    first = _measure(tags[0])
    assert bar_click(wm, first, _measure, "status") == (Click.TAG_BAR, 1)
    end = sum(_measure(t) for t in tags)
    assert bar_click(wm, end - 1, _measure, "status") == (Click.TAG_BAR, len(tags) - 1)
    assert bar_click(wm, end, _measure, "status") == (Click.LT_SYMBOL, None)
    title_x = end + _measure(wm.selmon.ltsymbol)
    assert bar_click(wm, title_x, _measure, "status") == (Click.WIN_TITLE, None)
    assert bar_click(wm, wm.selmon.ww - 1, _measure, "status") == (Click.STATUS_TEXT, None)


def test_main_version_and_usage(capsys):
    assert main(["-v"]) == 1
    assert "6.2" in capsys.readouterr().err
    assert main(["-x"]) == 1
    assert "usage" in capsys.readouterr().err


def test_main_reads_events(monkeypatch, capsys):
    script = "map 7 0 0 100 100 xterm\nbogus\ndump\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(script))
    assert main([]) == 0
    captured = capsys.readouterr()
    lines = captured.out.splitlines()
    assert lines[0].startswith("monitor 0")
    assert lines[1].startswith("7 ")
    assert lines[1].endswith("*")
    assert "bogus" in captured.err


def test_main_stops_after_quit(monkeypatch, capsys):
    script = f"key {MODKEY | SHIFT_MASK} {XK_Q}\ndump\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(script))
    assert main([]) == 0
    assert capsys.readouterr().out == ""