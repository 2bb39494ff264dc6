"""Clients, monitors and the tiling layouts that arrange them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from tagwm.wm.config import LAYOUTS, Layout

LTSYMBOL_SIZE = 16

ResizeFunc = Callable[["Client", int, int, int, int], None]


def _cmod(value: int, divisor: int) -> int:
    """Remainder with the sign of the dividend, as integer hardware computes it."""
    return int(math.fmod(value, divisor))


@dataclass
class SizeHints:
    """Size constraints a client asks for (ICCCM WM_NORMAL_HINTS)."""

    basew: int = 0
    baseh: int = 0
    incw: int = 0
    inch: int = 0
    maxw: int = 0
    maxh: int = 0
    minw: int = 0
    minh: int = 0
    mina: float = 0.0
    maxa: float = 0.0


@dataclass(eq=False)
class Client:
    """A managed top-level window."""

    window: int
    name: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    oldx: int = 0
    oldy: int = 0
    oldw: int = 0
    oldh: int = 0
    bw: int = 0
    oldbw: int = 0
    tags: int = 0
    hints: SizeHints = field(default_factory=SizeHints)
    isfixed: bool = False
    isfloating: bool = False
    isurgent: bool = False
    neverfocus: bool = False
    oldstate: bool = False
    isfullscreen: bool = False
    mon: Optional["Monitor"] = None

    def outer_width(self) -> int:
        """Width including both borders."""
        return self.w + 2 * self.bw

    def outer_height(self) -> int:
        """Height including both borders."""
        return self.h + 2 * self.bw

    def is_visible(self) -> bool:
        """Whether the client carries a tag its monitor currently shows."""
        if self.mon is None:
            return False
        return bool(self.tags & self.mon.tagset[self.mon.seltags])

    def apply_size_hints(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        interact: bool,
        screen_width: int,
        screen_height: int,
        bar_height: int,
        respect_hints: bool,
    ) -> tuple[int, int, int, int, bool]:
        """Constrain a requested geometry.

        Returns the adjusted ``(x, y, w, h)`` followed by whether it differs
        from the client's current geometry.
        """
        m = self.mon
        w = max(1, w)
        h = max(1, h)
        if interact:
            if x > screen_width:
                x = screen_width - self.outer_width()
            if y > screen_height:
                y = screen_height - self.outer_height()
            if x + w + 2 * self.bw < 0:
                x = 0
            if y + h + 2 * self.bw < 0:
                y = 0
        elif m is not None:
            if x >= m.wx + m.ww:
                x = m.wx + m.ww - self.outer_width()
            if y >= m.wy + m.wh:
                y = m.wy + m.wh - self.outer_height()
            if x + w + 2 * self.bw <= m.wx:
                x = m.wx
            if y + h + 2 * self.bw <= m.wy:
                y = m.wy
        h = max(h, bar_height)
        w = max(w, bar_height)

        floating_layout = m is not None and m.lt[m.sellt].arrange is None
        if respect_hints or self.isfloating or floating_layout:
            hints = self.hints
            # see the last two sentences of ICCCM 4.1.2.3
            baseismin = hints.basew == hints.minw and hints.baseh == hints.minh
            if not baseismin:
                w -= hints.basew
                h -= hints.baseh
            if hints.mina > 0 and hints.maxa > 0:
                if hints.maxa < w / h:
                    w = int(h * hints.maxa + 0.5)
                elif hints.mina < h / w:
                    h = int(w * hints.mina + 0.5)
            if baseismin:
                w -= hints.basew
                h -= hints.baseh
            if hints.incw:
                w -= _cmod(w, hints.incw)
            if hints.inch:
                h -= _cmod(h, hints.inch)
            w = max(w + hints.basew, hints.minw)
            h = max(h + hints.baseh, hints.minh)
            if hints.maxw:
                w = min(w, hints.maxw)
            if hints.maxh:
                h = min(h, hints.maxh)
        changed = x != self.x or y != self.y or w != self.w or h != self.h
        return x, y, w, h, changed


def _default_layouts() -> list[Layout]:
    return [LAYOUTS[0], LAYOUTS[1 % len(LAYOUTS)]]


@dataclass(eq=False)
class Monitor:
    """A screen area with its own clients, focus stack, tags and layouts."""

    num: int = 0
    mx: int = 0
    my: int = 0
    mw: int = 0
    mh: int = 0
    wx: int = 0
    wy: int = 0
    ww: int = 0
    wh: int = 0
    by: int = 0
    mfact: float = 0.55
    nmaster: int = 1
    showbar: bool = True
    topbar: bool = True
    tagset: list[int] = field(default_factory=lambda: [1, 1])
    seltags: int = 0
    sellt: int = 0
    lt: list[Layout] = field(default_factory=_default_layouts)
    ltsymbol: str = ""
    clients: list[Client] = field(default_factory=list)
    stack: list[Client] = field(default_factory=list)
    sel: Optional[Client] = None

    def __post_init__(self) -> None:
        if not self.ltsymbol:
            self.ltsymbol = self.lt[0].symbol[: LTSYMBOL_SIZE - 1]

    def update_bar_pos(self, bar_height: int) -> None:
        """Recompute the window area and bar position from the screen area."""
        self.wy = self.my
        self.wh = self.mh
        if self.showbar:
            self.wh -= bar_height
            self.by = self.wy if self.topbar else self.wy + self.wh
            self.wy = self.wy + bar_height if self.topbar else self.wy
        else:
            self.by = -bar_height

    def visible_clients(self) -> list[Client]:
        """Clients shown on the current tags, in client order."""
        return [c for c in self.clients if c.is_visible()]

    def tiled_clients(self) -> list[Client]:
        """Visible clients that are not floating, in client order."""
        return [c for c in self.clients if not c.isfloating and c.is_visible()]

    def intersect(self, x: int, y: int, w: int, h: int) -> int:
        """Area a rectangle shares with this monitor's window area."""
        width = max(0, min(x + w, self.wx + self.ww) - max(x, self.wx))
        height = max(0, min(y + h, self.wy + self.wh) - max(y, self.wy))
        return width * height


def tile(monitor: Monitor, gap: int, resize: ResizeFunc) -> None:
    """Master column on the left, stack column on the right, with gaps."""
    tiled = monitor.tiled_clients()
    n = len(tiled)
    if n == 0:
        return
    if n > monitor.nmaster:
        mw = int(monitor.ww * monitor.mfact) if monitor.nmaster else 0
        ns = 2 if monitor.nmaster > 0 else 1
    else:
        mw = monitor.ww
        ns = 1
    my = ty = gap
    for i, c in enumerate(tiled):
        if i < monitor.nmaster:
            h = (monitor.wh - my) // (min(n, monitor.nmaster) - i) - gap
            resize(
                c,
                monitor.wx + gap,
                monitor.wy + my,
                mw - 2 * c.bw - gap * (5 - ns) // 2,
                h - 2 * c.bw,
            )
            my += c.outer_height() + gap
        else:
            h = (monitor.wh - ty) // (n - i) - gap
            resize(
                c,
                monitor.wx + mw + gap // ns,
                monitor.wy + ty,
                monitor.ww - mw - 2 * c.bw - gap * (5 - ns) // 2,
                h - 2 * c.bw,
            )
            ty += c.outer_height() + gap


def monocle(monitor: Monitor, resize: ResizeFunc) -> None:
    """Every tiled client fills the window area; the symbol shows the count."""
    visible = len(monitor.visible_clients())
    if visible > 0:
        monitor.ltsymbol = f"[{visible}]"[: LTSYMBOL_SIZE - 1]
    for c in monitor.tiled_clients():
        resize(c, monitor.wx, monitor.wy, monitor.ww - 2 * c.bw, monitor.wh - 2 * c.bw)