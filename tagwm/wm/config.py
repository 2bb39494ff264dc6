"""Window manager configuration: appearance, tags, rules, layouts and bindings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Union

SHIFT_MASK = 1 << 0
LOCK_MASK = 1 << 1
CONTROL_MASK = 1 << 2
MOD1_MASK = 1 << 3
MOD2_MASK = 1 << 4
MOD3_MASK = 1 << 5
MOD4_MASK = 1 << 6
MOD5_MASK = 1 << 7
MODKEY = MOD4_MASK

BUTTON1 = 1
BUTTON2 = 2
BUTTON3 = 3

ALL_TAGS = 0xFFFFFFFF

XK_SPACE = 0x0020
XK_COMMA = 0x002C
XK_PERIOD = 0x002E
XK_0 = 0x0030
XK_1 = 0x0031
XK_B = 0x0062
XK_C = 0x0063
XK_D = 0x0064
XK_F = 0x0066
XK_H = 0x0068
XK_I = 0x0069
XK_J = 0x006A
XK_K = 0x006B
XK_L = 0x006C
XK_M = 0x006D
XK_Q = 0x0071
XK_R = 0x0072
XK_S = 0x0073
XK_T = 0x0074
XK_U = 0x0075
XK_TAB = 0xFF09
XK_RETURN = 0xFF0D
XK_F2 = 0xFFBF
XK_F3 = 0xFFC0
XK_F10 = 0xFFC7
XK_F11 = 0xFFC8
XK_VOLDOWN = 0x1008FF11
XK_VOLTOG = 0x1008FF12
XK_VOLUP = 0x1008FF13

MAX_TAGS = 31


class Action(enum.Enum):
    """Commands that keys and buttons can trigger."""

    SPAWN = "spawn"
    TOGGLEBAR = "togglebar"
    FOCUSSTACK = "focusstack"
    INCNMASTER = "incnmaster"
    SETMFACT = "setmfact"
    ZOOM = "zoom"
    VIEW = "view"
    KILLCLIENT = "killclient"
    SETLAYOUT = "setlayout"
    TOGGLEFLOATING = "togglefloating"
    FOCUSMON = "focusmon"
    TAGMON = "tagmon"
    TOGGLEVIEW = "toggleview"
    TAG = "tag"
    TOGGLETAG = "toggletag"
    QUIT = "quit"
    MOVEMOUSE = "movemouse"
    RESIZEMOUSE = "resizemouse"


class Click(enum.IntEnum):
    """Where a mouse button was pressed."""

    TAG_BAR = 0
    LT_SYMBOL = 1
    STATUS_TEXT = 2
    WIN_TITLE = 3
    CLIENT_WIN = 4
    ROOT_WIN = 5


@dataclass(frozen=True)
class Rule:
    """Placement rule matched against a new window's class, instance and title."""

    wm_class: Optional[str]
    instance: Optional[str]
    title: Optional[str]
    tags: int
    isfloating: bool
    monitor: int


@dataclass(frozen=True)
class Layout:
    """A layout symbol and the name of its arrange function (None: floating)."""

    symbol: str
    arrange: Optional[str]


Argument = Union[None, int, float, str, Layout, tuple]


@dataclass(frozen=True)
class KeyBinding:
    mod: int
    keysym: int
    action: Action
    arg: Argument = None


@dataclass(frozen=True)
class ButtonBinding:
    click: Click
    mask: int
    button: int
    action: Action
    arg: Argument = None


TAGS = (">_", "://", "]$", "(+)", ":)", ">_<", "@/", "^0^", "*/*")

RULES = (
    Rule("Gimp", None, None, 0, True, -1),
    Rule("Firefox", None, None, 1 << 8, False, -1),
    Rule("Viewnior", None, None, 0, True, -1),
)

LAYOUTS = (
    Layout("[T]=", "tile"),
    Layout(">F<>", None),
    Layout("(M):", "monocle"),
)

COL_GRAY1 = "#262626"
COL_GRAY2 = "#aaaaaa"
COL_GRAY3 = "#cccccc"
COL_GRAY4 = "#161616"
COL_CYAN = "#bababa"

FONTS = ("Roboto Mono:size=8",)
DMENU_FONT = "Roboto Mono:size=8"

COLORS = {
    "norm": (COL_GRAY2, COL_GRAY1, COL_GRAY4),
    "sel": (COL_GRAY4, COL_CYAN, COL_GRAY2),
}

DMENU_COMMAND = (
    "dmenu_run", "-m", "0", "-fn", DMENU_FONT, "-nb", COL_GRAY1, "-nf", COL_GRAY3,
    "-sb", COL_CYAN, "-sf", COL_GRAY4,
)
TERM_COMMAND = ("st",)
VOLUP = ("amixer", "set", "Master", "5%+")
VOLDOWN = ("amixer", "set", "Master", "5%-")
VOLTOGGLE = ("amixer", "set", "Master", "toggle")
LIGHTUP = ("light", "-A", "10")
LIGHTDOWN = ("light", "-U", "10")
NNN = ("st", "-e", "nnn")
WWW = ("firefox",)
REBOOT = ("reboot",)
SHUTDOWN = ("poweroff",)


def _tag_keys(keysym: int, tag: int) -> tuple[KeyBinding, ...]:
    mask = 1 << tag
    return (
        KeyBinding(MODKEY, keysym, Action.VIEW, mask),
        KeyBinding(MODKEY | CONTROL_MASK, keysym, Action.TOGGLEVIEW, mask),
        KeyBinding(MODKEY | SHIFT_MASK, keysym, Action.TAG, mask),
        KeyBinding(MODKEY | CONTROL_MASK | SHIFT_MASK, keysym, Action.TOGGLETAG, mask),
    )


KEYS = (
    KeyBinding(MODKEY, XK_D, Action.SPAWN, DMENU_COMMAND),
    KeyBinding(MODKEY | SHIFT_MASK, XK_RETURN, Action.SPAWN, TERM_COMMAND),
    KeyBinding(0, XK_VOLUP, Action.SPAWN, VOLUP),
    KeyBinding(0, XK_VOLDOWN, Action.SPAWN, VOLDOWN),
    KeyBinding(0, XK_VOLTOG, Action.SPAWN, VOLTOGGLE),
    KeyBinding(MODKEY, XK_F11, Action.SPAWN, LIGHTUP),
    KeyBinding(MODKEY, XK_F10, Action.SPAWN, LIGHTDOWN),
    KeyBinding(MODKEY, XK_F3, Action.SPAWN, NNN),
    KeyBinding(MODKEY, XK_F2, Action.SPAWN, WWW),
    KeyBinding(MODKEY | MOD1_MASK, XK_R, Action.SPAWN, REBOOT),
    KeyBinding(MODKEY | MOD1_MASK, XK_S, Action.SPAWN, SHUTDOWN),
    KeyBinding(MODKEY, XK_B, Action.TOGGLEBAR),
    KeyBinding(MODKEY, XK_J, Action.FOCUSSTACK, +1),
    KeyBinding(MODKEY, XK_K, Action.FOCUSSTACK, -1),
    KeyBinding(MODKEY, XK_I, Action.INCNMASTER, +1),
    KeyBinding(MODKEY, XK_U, Action.INCNMASTER, -1),
    KeyBinding(MODKEY, XK_H, Action.SETMFACT, -0.05),
    KeyBinding(MODKEY, XK_L, Action.SETMFACT, +0.05),
    KeyBinding(MODKEY, XK_RETURN, Action.ZOOM),
    KeyBinding(MODKEY, XK_TAB, Action.VIEW, 0),
    KeyBinding(MODKEY | SHIFT_MASK, XK_C, Action.KILLCLIENT),
    KeyBinding(MODKEY, XK_T, Action.SETLAYOUT, LAYOUTS[0]),
    KeyBinding(MODKEY, XK_F, Action.SETLAYOUT, LAYOUTS[1]),
    KeyBinding(MODKEY, XK_M, Action.SETLAYOUT, LAYOUTS[2]),
    KeyBinding(MODKEY, XK_SPACE, Action.SETLAYOUT),
    KeyBinding(MODKEY | SHIFT_MASK, XK_SPACE, Action.TOGGLEFLOATING),
    KeyBinding(MODKEY, XK_0, Action.VIEW, ALL_TAGS),
    KeyBinding(MODKEY | SHIFT_MASK, XK_0, Action.TAG, ALL_TAGS),
    KeyBinding(MODKEY, XK_COMMA, Action.FOCUSMON, -1),
    KeyBinding(MODKEY, XK_PERIOD, Action.FOCUSMON, +1),
    KeyBinding(MODKEY | SHIFT_MASK, XK_COMMA, Action.TAGMON, -1),
    KeyBinding(MODKEY | SHIFT_MASK, XK_PERIOD, Action.TAGMON, +1),
    *(binding for tag in range(9) for binding in _tag_keys(XK_1 + tag, tag)),
    KeyBinding(MODKEY | SHIFT_MASK, XK_Q, Action.QUIT),
)

BUTTONS = (
    ButtonBinding(Click.LT_SYMBOL, 0, BUTTON1, Action.SETLAYOUT),
    ButtonBinding(Click.LT_SYMBOL, 0, BUTTON3, Action.SETLAYOUT, LAYOUTS[2]),
    ButtonBinding(Click.WIN_TITLE, 0, BUTTON2, Action.ZOOM),
    ButtonBinding(Click.STATUS_TEXT, 0, BUTTON2, Action.SPAWN, TERM_COMMAND),
    ButtonBinding(Click.CLIENT_WIN, MODKEY, BUTTON1, Action.MOVEMOUSE),
    ButtonBinding(Click.CLIENT_WIN, MODKEY, BUTTON2, Action.TOGGLEFLOATING),
    ButtonBinding(Click.CLIENT_WIN, MODKEY, BUTTON3, Action.RESIZEMOUSE),
    ButtonBinding(Click.TAG_BAR, 0, BUTTON1, Action.VIEW, 0),
    ButtonBinding(Click.TAG_BAR, 0, BUTTON3, Action.TOGGLEVIEW, 0),
    ButtonBinding(Click.TAG_BAR, MODKEY, BUTTON1, Action.TAG, 0),
    ButtonBinding(Click.TAG_BAR, MODKEY, BUTTON3, Action.TOGGLETAG, 0),
)


@dataclass(frozen=True)
class Config:
    """Everything the window manager is configured with."""

    border_px: int = 1
    gap_px: int = 10
    snap: int = 32
    show_bar: bool = True
    top_bar: bool = True
    fonts: tuple = FONTS
    dmenu_font: str = DMENU_FONT
    colors: dict = field(default_factory=lambda: dict(COLORS))
    tags: tuple = TAGS
    rules: tuple = RULES
    mfact: float = 0.55
    nmaster: int = 1
    resize_hints: bool = False
    layouts: tuple = LAYOUTS
    modkey: int = MODKEY
    keys: tuple = KEYS
    buttons: tuple = BUTTONS
    dmenu_command: tuple = DMENU_COMMAND
    term_command: tuple = TERM_COMMAND

    def __post_init__(self) -> None:
        if len(self.tags) > MAX_TAGS:
            raise ValueError(f"at most {MAX_TAGS} tags fit into the tag mask")
        if not self.layouts:
            raise ValueError("at least one layout is required")

    def tag_mask(self) -> int:
        """Bit mask covering every configured tag."""
        return (1 << len(self.tags)) - 1


def default_config() -> Config:
    """The stock configuration."""
    return Config()