"""Key and mouse binding dispatch, bar hit-testing and the window manager command."""

from __future__ import annotations

import shlex
import sys
from typing import Callable, Optional, Sequence

from tagwm.wm.config import (
    CONTROL_MASK,
    LOCK_MASK,
    MOD1_MASK,
    MOD2_MASK,
    MOD3_MASK,
    MOD4_MASK,
    MOD5_MASK,
    SHIFT_MASK,
    Action,
    Argument,
    Click,
    default_config,
)
from tagwm.wm.manager import WindowManager

VERSION = "6.2"
NUMLOCK_MASK = MOD2_MASK
DEFAULT_SCREEN_WIDTH = 1024
DEFAULT_SCREEN_HEIGHT = 768
DEFAULT_BAR_HEIGHT = 18

_MODIFIERS = (
    SHIFT_MASK | CONTROL_MASK | MOD1_MASK | MOD2_MASK | MOD3_MASK | MOD4_MASK | MOD5_MASK
)


def clean_mask(mask: int, numlockmask: int) -> int:
    """Drop Lock, NumLock and any non-modifier bits from a modifier state."""
    return mask & ~(numlockmask | LOCK_MASK) & _MODIFIERS


def _killclient(manager: WindowManager) -> None:
    sel = manager.selmon.sel
    if sel is not None:
        manager.unmanage(sel)


_HANDLERS: dict[Action, Callable[[WindowManager, Argument], None]] = {
    Action.SPAWN: lambda wm, arg: wm.spawn(arg),
    Action.TOGGLEBAR: lambda wm, arg: wm.togglebar(),
    Action.FOCUSSTACK: lambda wm, arg: wm.focusstack(arg),
    Action.INCNMASTER: lambda wm, arg: wm.incnmaster(arg),
    Action.SETMFACT: lambda wm, arg: wm.setmfact(arg),
    Action.ZOOM: lambda wm, arg: wm.zoom(),
    Action.VIEW: lambda wm, arg: wm.view(arg or 0),
    Action.KILLCLIENT: lambda wm, arg: _killclient(wm),
    Action.SETLAYOUT: lambda wm, arg: wm.setlayout(arg),
    Action.TOGGLEFLOATING: lambda wm, arg: wm.togglefloating(),
    Action.FOCUSMON: lambda wm, arg: wm.focusmon(arg),
    Action.TAGMON: lambda wm, arg: wm.tagmon(arg),
    Action.TOGGLEVIEW: lambda wm, arg: wm.toggleview(arg or 0),
    Action.TAG: lambda wm, arg: wm.tag(arg or 0),
    Action.TOGGLETAG: lambda wm, arg: wm.toggletag(arg or 0),
    Action.QUIT: lambda wm, arg: wm.quit(),
}


def _perform(manager: WindowManager, action: Action, arg: Argument) -> bool:
    """Run one action; pointer drags need a live pointer grab and are not run here."""
    handler = _HANDLERS.get(action)
    if handler is None:
        return False
    handler(manager, arg)
    return True


def dispatch_key(manager: WindowManager, modifiers: int, keysym: int) -> list[Action]:
    """Run every key binding matching a key press; return the actions run."""
    state = clean_mask(modifiers, NUMLOCK_MASK)
    performed = []
    for binding in manager.config.keys:
        if binding.keysym == keysym and clean_mask(binding.mod, NUMLOCK_MASK) == state:
            if _perform(manager, binding.action, binding.arg):
                performed.append(binding.action)
    return performed


def dispatch_button(
    manager: WindowManager,
    click: Click,
    modifiers: int,
    button: int,
    tag_index: Optional[int] = None,
) -> list[Action]:
    """Run every button binding matching a press at ``click``; return the actions run.

    A tag-bar binding without its own argument acts on the clicked tag.
    """
    state = clean_mask(modifiers, NUMLOCK_MASK)
    clicked_tag = 1 << tag_index if tag_index is not None else 0
    performed = []
    for binding in manager.config.buttons:
        if (
            binding.click == click
            and binding.button == button
            and clean_mask(binding.mask, NUMLOCK_MASK) == state
        ):
            arg = binding.arg
            if click == Click.TAG_BAR and not arg:
                arg = clicked_tag
            if _perform(manager, binding.action, arg):
                performed.append(binding.action)
    return performed


def bar_click(
    manager: WindowManager, x: int, measure: Callable[[str], int], status_text: str
) -> tuple[Click, Optional[int]]:
    """Find what part of the selected monitor's bar lies at ``x``.

    ``measure`` gives the drawn width of a text including its padding.
    Returns the click area and, for the tag bar, the tag index.
    """
    tags = manager.config.tags
    pos = 0
    index = 0
    while True:
        pos += measure(tags[index])
        if x < pos:
            break
        index += 1
        if index >= len(tags):
            break
    if index < len(tags):
        return Click.TAG_BAR, index
    m = manager.selmon
    if x < pos + measure(m.ltsymbol):
        return Click.LT_SYMBOL, None
    if x > m.ww - measure(status_text):
        return Click.STATUS_TEXT, None
    return Click.WIN_TITLE, None


def _dump(manager: WindowManager) -> None:
    for m in manager.monitors:
        print(f"monitor {m.num} {m.ltsymbol}")
        for c in m.clients:
            mark = " *" if c is m.sel else ""
            print(f"{c.window} {c.x} {c.y} {c.w} {c.h} {c.tags}{mark}")


def _handle(manager: WindowManager, words: list[str]) -> None:
    command, args = words[0], words[1:]
    if command == "map":
        window, x, y, w, h = (int(v, 0) for v in args[:5])
        wm_class = args[5] if len(args) > 5 else None
        instance = args[6] if len(args) > 6 else None
        name = " ".join(args[7:])
        if manager.client_for(window) is None:
            manager.manage(window, x, y, w, h, name, wm_class, instance)
    elif command == "unmap":
        client = manager.client_for(int(args[0], 0))
        if client is not None:
            manager.unmanage(client)
    elif command == "key":
        dispatch_key(manager, int(args[0], 0), int(args[1], 0))
    elif command == "button":
        tag_index = int(args[3], 0) if len(args) > 3 else None
        dispatch_button(
            manager, Click[args[0].upper()], int(args[1], 0), int(args[2], 0), tag_index
        )
    elif command == "configure":
        manager.update_geometry(int(args[0], 0), int(args[1], 0))
    elif command == "fullscreen":
        client = manager.client_for(int(args[0], 0))
        if client is not None:
            manager.setfullscreen(client, args[1] != "0")
    elif command == "dump":
        _dump(manager)
    else:
        raise ValueError(f"unknown event {command!r}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the window manager, reading events as text lines from stdin."""
    args = sys.argv[1:] if argv is None else list(argv)
    if args == ["-v"]:
        print(f"tagwm-{VERSION}", file=sys.stderr)
        return 1
    if args:
        print("usage: tagwm [-v]", file=sys.stderr)
        return 1
    manager = WindowManager(
        default_config(), DEFAULT_SCREEN_WIDTH, DEFAULT_SCREEN_HEIGHT, DEFAULT_BAR_HEIGHT
    )
    for line in sys.stdin:
        if not manager.running:
            break
        words = shlex.split(line)
        if not words:
            continue
        try:
            _handle(manager, words)
        except (ValueError, KeyError, IndexError) as exc:
            print(f"tagwm: bad event {line.strip()!r}: {exc}", file=sys.stderr)
    return 0