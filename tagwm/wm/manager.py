"""Window manager state: clients, monitors, focus, tags and layouts."""

from __future__ import annotations

import subprocess
import sys
from typing import Optional, Sequence

from tagwm.wm.config import Config, Layout
from tagwm.wm.model import LTSYMBOL_SIZE, Client, Monitor, SizeHints, monocle, tile

BROKEN = "broken"
NAME_SIZE = 256


class WindowManager:
    """Tracks managed clients across monitors and applies window manager commands."""

    def __init__(
        self, config: Config, screen_width: int, screen_height: int, bar_height: int
    ) -> None:
        self.config = config
        self.sw = screen_width
        self.sh = screen_height
        self.bh = bar_height
        self.monitors: list[Monitor] = []
        self.selmon: Optional[Monitor] = None
        self.running = True
        self._update_monitors()
        self.focus(None)

    # -- monitors -----------------------------------------------------------

    def _create_monitor(self) -> Monitor:
        layouts = self.config.layouts
        return Monitor(
            mfact=self.config.mfact,
            nmaster=self.config.nmaster,
            showbar=self.config.show_bar,
            topbar=self.config.top_bar,
            lt=[layouts[0], layouts[1 % len(layouts)]],
        )

    def _update_monitors(self) -> bool:
        dirty = False
        if not self.monitors:
            self.monitors.append(self._create_monitor())
        first = self.monitors[0]
        if first.mw != self.sw or first.mh != self.sh:
            dirty = True
            first.mw = first.ww = self.sw
            first.mh = first.wh = self.sh
            first.update_bar_pos(self.bh)
        if dirty or self.selmon is None:
            self.selmon = first
        return dirty

    def update_geometry(self, width: int, height: int) -> bool:
        """React to a new root window size; True if anything was rearranged."""
        dirty = self.sw != width or self.sh != height
        self.sw = width
        self.sh = height
        if self._update_monitors() or dirty:
            for m in self.monitors:
                for c in m.clients:
                    if c.isfullscreen:
                        self._resize_client(c, m.mx, m.my, m.mw, m.mh)
            self.focus(None)
            self.arrange(None)
            return True
        return False

    def dirtomon(self, direction: int) -> Monitor:
        """The monitor after (direction > 0) or before the selected one, wrapping."""
        index = self.monitors.index(self.selmon)
        if direction > 0:
            return self.monitors[(index + 1) % len(self.monitors)]
        return self.monitors[index - 1]

    def recttomon(self, x: int, y: int, w: int, h: int) -> Monitor:
        """The monitor sharing the largest area with a rectangle."""
        best = self.selmon
        area = 0
        for m in self.monitors:
            a = m.intersect(x, y, w, h)
            if a > area:
                area = a
                best = m
        return best

    # -- client lists -------------------------------------------------------

    @staticmethod
    def _attach(c: Client) -> None:
        c.mon.clients.insert(0, c)

    def _attach_aside(self, c: Client) -> None:
        at = next(
            (w for w in c.mon.clients if not w.isfloating and w.tags & c.tags), None
        )
        if at is None:
            self._attach(c)
        else:
            c.mon.clients.insert(c.mon.clients.index(at) + 1, c)

    @staticmethod
    def _attach_stack(c: Client) -> None:
        c.mon.stack.insert(0, c)

    @staticmethod
    def _detach(c: Client) -> None:
        c.mon.clients.remove(c)

    @staticmethod
    def _detach_stack(c: Client) -> None:
        m = c.mon
        m.stack.remove(c)
        if c is m.sel:
            m.sel = next((t for t in m.stack if t.is_visible()), None)

    def client_for(self, window: int) -> Optional[Client]:
        """The managed client of a window, if any."""
        for m in self.monitors:
            for c in m.clients:
                if c.window == window:
                    return c
        return None

    # -- managing -----------------------------------------------------------

    def apply_rules(
        self, client: Client, wm_class: Optional[str], instance: Optional[str]
    ) -> None:
        """Set floating state, tags and monitor from the configured rules."""
        cls = wm_class or BROKEN
        inst = instance or BROKEN
        client.isfloating = False
        client.tags = 0
        for rule in self.config.rules:
            if (
                (rule.title is None or rule.title in client.name)
                and (rule.wm_class is None or rule.wm_class in cls)
                and (rule.instance is None or rule.instance in inst)
            ):
                client.isfloating = rule.isfloating
                client.tags |= rule.tags
                target = next((m for m in self.monitors if m.num == rule.monitor), None)
                if target is not None:
                    client.mon = target
        masked = client.tags & self.config.tag_mask()
        client.tags = masked if masked else client.mon.tagset[client.mon.seltags]

    def manage(
        self,
        window: int,
        x: int,
        y: int,
        width: int,
        height: int,
        name: str = "",
        wm_class: Optional[str] = None,
        instance: Optional[str] = None,
        transient_for: Optional[int] = None,
        hints: Optional[SizeHints] = None,
    ) -> Client:
        """Start managing a new window and return its client."""
        c = Client(
            window=window,
            name=(name or "")[: NAME_SIZE - 1] or BROKEN,
            x=x, y=y, w=width, h=height,
            oldx=x, oldy=y, oldw=width, oldh=height,
        )
        parent = self.client_for(transient_for) if transient_for is not None else None
        if parent is not None:
            c.mon = parent.mon
            c.tags = parent.tags
        else:
            c.mon = self.selmon
            self.apply_rules(c, wm_class, instance)

        m = c.mon
        if c.x + c.outer_width() > m.mx + m.mw:
            c.x = m.mx + m.mw - c.outer_width()
        if c.y + c.outer_height() > m.my + m.mh:
            c.y = m.my + m.mh - c.outer_height()
        c.x = max(c.x, m.mx)
        # only fix the y offset if the client's centre might cover the bar
        covers_bar = (
            m.by == m.my
            and c.x + c.w // 2 >= m.wx
            and c.x + c.w // 2 < m.wx + m.ww
        )
        c.y = max(c.y, self.bh if covers_bar else m.my)
        c.bw = self.config.border_px

        c.hints = hints if hints is not None else SizeHints()
        h = c.hints
        c.isfixed = bool(h.maxw and h.maxh and h.maxw == h.minw and h.maxh == h.minh)
        if not c.isfloating:
            c.isfloating = c.oldstate = transient_for is not None or c.isfixed
        self._attach_aside(c)
        self._attach_stack(c)
        m.sel = c
        self.arrange(m)
        self.focus(None)
        return c

    def unmanage(self, client: Client) -> None:
        """Stop managing a client."""
        m = client.mon
        if client not in m.clients:
            raise ValueError(f"window {client.window} is not managed")
        self._detach(client)
        self._detach_stack(client)
        self.focus(None)
        self.arrange(m)

    # -- geometry -----------------------------------------------------------

    def _resize_client(self, c: Client, x: int, y: int, w: int, h: int) -> None:
        c.oldx, c.x = c.x, x
        c.oldy, c.y = c.y, y
        c.oldw, c.w = c.w, w
        c.oldh, c.h = c.h, h

    def resize(self, client: Client, x: int, y: int, w: int, h: int, interact: bool) -> None:
        """Move and resize a client within its size hints."""
        x, y, w, h, changed = client.apply_size_hints(
            x, y, w, h, interact, self.sw, self.sh, self.bh, self.config.resize_hints
        )
        if changed:
            self._resize_client(client, x, y, w, h)

    def _tiling_resize(self, c: Client, x: int, y: int, w: int, h: int) -> None:
        self.resize(c, x, y, w, h, False)

    def _showhide(self, m: Monitor) -> None:
        for c in m.stack:
            if c.is_visible() and not c.isfullscreen and (
                m.lt[m.sellt].arrange is None or c.isfloating
            ):
                self.resize(c, c.x, c.y, c.w, c.h, False)

    def _arrange_monitor(self, m: Monitor) -> None:
        layout = m.lt[m.sellt]
        m.ltsymbol = layout.symbol[: LTSYMBOL_SIZE - 1]
        if layout.arrange == "tile":
            tile(m, self.config.gap_px, self._tiling_resize)
        elif layout.arrange == "monocle":
            monocle(m, self._tiling_resize)

    def arrange(self, monitor: Optional[Monitor]) -> None:
        """Lay out one monitor, or every monitor when ``monitor`` is None."""
        targets = [monitor] if monitor is not None else list(self.monitors)
        for m in targets:
            self._showhide(m)
        for m in targets:
            self._arrange_monitor(m)

    # -- focus --------------------------------------------------------------

    def focus(self, client: Optional[Client]) -> None:
        """Focus a client, or the topmost visible one when given None."""
        if client is None or not client.is_visible():
            client = next((c for c in self.selmon.stack if c.is_visible()), None)
        if client is not None:
            if client.mon is not self.selmon:
                self.selmon = client.mon
            client.isurgent = False
            self._detach_stack(client)
            self._attach_stack(client)
        self.selmon.sel = client

    def focusstack(self, direction: int) -> None:
        """Focus the next (direction > 0) or previous visible client."""
        sel = self.selmon.sel
        if sel is None:
            return
        clients = self.selmon.clients
        index = clients.index(sel)
        target = None
        if direction > 0:
            after = [c for c in clients[index + 1 :] if c.is_visible()]
            every = [c for c in clients if c.is_visible()]
            candidates = after or every
            target = candidates[0] if candidates else None
        else:
            before = [c for c in clients[:index] if c.is_visible()]
            rest = [c for c in clients[index:] if c.is_visible()]
            candidates = before or rest
            target = candidates[-1] if candidates else None
        if target is not None:
            self.focus(target)

    def focusmon(self, direction: int) -> None:
        """Move the focus to another monitor."""
        if len(self.monitors) < 2:
            return
        m = self.dirtomon(direction)
        if m is self.selmon:
            return
        self.selmon = m
        self.focus(None)

    def tagmon(self, direction: int) -> None:
        """Send the focused client to another monitor."""
        if self.selmon.sel is None or len(self.monitors) < 2:
            return
        self.sendmon(self.selmon.sel, self.dirtomon(direction))

    def sendmon(self, client: Client, monitor: Monitor) -> None:
        """Move a client to ``monitor``, taking that monitor's current tags."""
        if client.mon is monitor:
            return
        self._detach(client)
        self._detach_stack(client)
        client.mon = monitor
        client.tags = monitor.tagset[monitor.seltags]
        self._attach_aside(client)
        self._attach_stack(client)
        self.focus(None)
        self.arrange(None)

    # -- tags ---------------------------------------------------------------

    def view(self, tags: int) -> None:
        """Show ``tags``; 0 switches back to the previous tag set."""
        m = self.selmon
        mask = self.config.tag_mask()
        if tags & mask == m.tagset[m.seltags]:
            return
        m.seltags ^= 1
        if tags & mask:
            m.tagset[m.seltags] = tags & mask
        self.focus(None)
        self.arrange(m)

    def toggleview(self, tags: int) -> None:
        """Add or remove ``tags`` from the shown tag set."""
        m = self.selmon
        newtagset = m.tagset[m.seltags] ^ (tags & self.config.tag_mask())
        if newtagset:
            m.tagset[m.seltags] = newtagset
            self.focus(None)
            self.arrange(m)

    def tag(self, tags: int) -> None:
        """Put the focused client on ``tags``."""
        sel = self.selmon.sel
        masked = tags & self.config.tag_mask()
        if sel is not None and masked:
            sel.tags = masked
            self.focus(None)
            self.arrange(self.selmon)

    def toggletag(self, tags: int) -> None:
        """Add or remove ``tags`` on the focused client, never leaving it tagless."""
        sel = self.selmon.sel
        if sel is None:
            return
        newtags = sel.tags ^ (tags & self.config.tag_mask())
        if newtags:
            sel.tags = newtags
            self.focus(None)
            self.arrange(self.selmon)

    # -- layout commands ----------------------------------------------------

    def setlayout(self, layout: Optional[Layout]) -> None:
        """Switch to ``layout``, or toggle to the previous one when None."""
        m = self.selmon
        if layout is None or layout != m.lt[m.sellt]:
            m.sellt ^= 1
        if layout is not None:
            m.lt[m.sellt] = layout
        m.ltsymbol = m.lt[m.sellt].symbol[: LTSYMBOL_SIZE - 1]
        if m.sel is not None:
            self.arrange(m)

    def setmfact(self, delta: Optional[float]) -> None:
        """Change the master area factor; values above 1.0 set it to ``delta - 1``."""
        m = self.selmon
        if delta is None or m.lt[m.sellt].arrange is None:
            return
        f = delta + m.mfact if delta < 1.0 else delta - 1.0
        if f < 0.1 or f > 0.9:
            return
        m.mfact = f
        self.arrange(m)

    def incnmaster(self, delta: int) -> None:
        """Change the number of clients in the master area."""
        self.selmon.nmaster = max(self.selmon.nmaster + delta, 0)
        self.arrange(self.selmon)

    def _pop(self, c: Client) -> None:
        self._detach(c)
        self._attach(c)
        self.focus(c)
        self.arrange(c.mon)

    def zoom(self) -> None:
        """Swap the focused client with the master, or the master with the next."""
        m = self.selmon
        c = m.sel
        if m.lt[m.sellt].arrange is None or (c is not None and c.isfloating):
            return
        if c is None:
            return
        tiled = m.tiled_clients()
        if tiled and c is tiled[0]:
            if len(tiled) < 2:
                return
            c = tiled[1]
        self._pop(c)

    def togglefloating(self) -> None:
        """Toggle floating on the focused client; fixed-size clients stay floating."""
        sel = self.selmon.sel
        if sel is None or sel.isfullscreen:
            return
        sel.isfloating = not sel.isfloating or sel.isfixed
        if sel.isfloating:
            self.resize(sel, sel.x, sel.y, sel.w, sel.h, False)
        self.arrange(self.selmon)

    def togglebar(self) -> None:
        """Show or hide the bar on the selected monitor."""
        m = self.selmon
        m.showbar = not m.showbar
        m.update_bar_pos(self.bh)
        self.arrange(m)

    def setfullscreen(self, client: Client, fullscreen: bool) -> None:
        """Make a client cover its monitor, or restore its former geometry."""
        if fullscreen and not client.isfullscreen:
            client.isfullscreen = True
            client.oldstate = client.isfloating
            client.oldbw = client.bw
            client.bw = 0
            client.isfloating = True
            m = client.mon
            self._resize_client(client, m.mx, m.my, m.mw, m.mh)
        elif not fullscreen and client.isfullscreen:
            client.isfullscreen = False
            client.isfloating = client.oldstate
            client.bw = client.oldbw
            client.x, client.y = client.oldx, client.oldy
            client.w, client.h = client.oldw, client.oldh
            self._resize_client(client, client.x, client.y, client.w, client.h)
            self.arrange(client.mon)

    # -- processes ----------------------------------------------------------

    def spawn(self, command: Sequence[str]) -> Optional[subprocess.Popen]:
        """Start a program in its own session."""
        argv = list(command)
        if tuple(command) == tuple(self.config.dmenu_command) and "-m" in argv:
            argv[argv.index("-m") + 1] = str(self.selmon.num)
        try:
            return subprocess.Popen(argv, start_new_session=True)
        except OSError as exc:
            print(f"tagwm: execvp {argv[0] if argv else ''} failed: {exc}", file=sys.stderr)
            return None

    def quit(self) -> None:
        """Ask the event loop to stop."""
        self.running = False