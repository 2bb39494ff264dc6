import pytest

from tagwm.wm.config import (
    ALL_TAGS,
    MODKEY,
    Action,
    ButtonBinding,
    Click,
    Config,
    KeyBinding,
    Layout,
    default_config,
)


def test_tag_mask_covers_all_tags():
    config = default_config()
    mask = config.tag_mask()
    assert mask == (1 << len(config.tags)) - 1
    for i in range(len(config.tags)):
        assert mask & (1 << i)
    assert not mask & (1 << len(config.tags))


def test_tag_mask_with_custom_tags():
    assert Config(tags=("a", "b", "c")).tag_mask() == 0b111


def test_too_many_tags_rejected():
    with pytest.raises(ValueError):
        Config(tags=tuple(str(i) for i in range(32)))


def test_no_layouts_rejected():
    with pytest.raises(ValueError):
        Config(layouts=())


def test_first_layout_is_tiling():
    config = default_config()
    assert config.layouts[0] == Layout("[T]=", "tile")
    assert config.layouts[1].arrange is None


def test_rules_from_configuration():
    config = default_config()
    firefox = [r for r in config.rules if r.wm_class == "Firefox"]
    assert len(firefox) == 1
    assert firefox[0].tags == 1 << 8
    assert not firefox[0].isfloating
    assert all(r.monitor == -1 for r in config.rules)


def test_each_tag_has_four_keys():
    config = default_config()
    for i in range(len(config.tags)):
        bound = [
            k for k in config.keys
            if k.action in (Action.VIEW, Action.TOGGLEVIEW, Action.TAG, Action.TOGGLETAG)
            and k.arg == 1 << i
        ]
        assert {k.action for k in bound} == {
            Action.VIEW, Action.TOGGLEVIEW, Action.TAG, Action.TOGGLETAG
        }
        assert len({k.keysym for k in bound}) == 1


def test_key_bindings_are_unique():
    keys = default_config().keys
    assert len({(k.mod, k.keysym) for k in keys}) == len(keys)


def test_view_all_binding():
    keys = default_config().keys
    view_all = [k for k in keys if k.action is Action.VIEW and k.arg == ALL_TAGS]
    assert len(view_all) == 1
    assert view_all[0].arg & default_config().tag_mask() == default_config().tag_mask()


def test_spawn_terminal_binding():
    config = default_config()
    spawns = [k for k in config.keys if k.action is Action.SPAWN and k.arg == config.term_command]
    assert spawns and spawns[0].arg == ("st",)


def test_tag_bar_buttons_take_zero_argument():
    buttons = default_config().buttons
    tag_bar = [b for b in buttons if b.click is Click.TAG_BAR]
    assert len(tag_bar) == 4
    assert all(b.arg == 0 for b in tag_bar)


def test_client_window_buttons_use_modkey():
    buttons = default_config().buttons
    client = [b for b in buttons if b.click is Click.CLIENT_WIN]
    assert {b.action for b in client} == {
        Action.MOVEMOUSE, Action.TOGGLEFLOATING, Action.RESIZEMOUSE
    }
    assert all(b.mask == MODKEY for b in client)


def test_bindings_are_immutable():
    binding = KeyBinding(0, 1, Action.QUIT)
    with pytest.raises(AttributeError):
        binding.keysym = 2
    button = ButtonBinding(Click.ROOT_WIN, 0, 1, Action.ZOOM)
    assert button.arg is None


def test_dmenu_command_uses_monitor_zero():
    config = default_config()
    assert config.dmenu_command[0] == "dmenu_run"
    assert config.dmenu_command[config.dmenu_command.index("-m") + 1] == "0"