# tagwm

tagwm has two parts:

- `tagwm.status` builds a status line. It collects small pieces of system
  information, such as CPU and memory use, battery, network, disk,
  temperature, date and time, and joins them into one line of text.
- `tagwm.wm` models a dynamic, tag-based tiling window manager. It covers
  clients, monitors, tags, rules, the tile and monocle layouts, focus handling,
  and key and button bindings.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install .[test]
```

## The status line

```
tagwm-status -s
```

With `-s`, the status line is written to standard output once a second
(every 1000 ms) until the process gets SIGINT or SIGTERM. Without `-s`, the
line is set as the root window name by running `xsetroot -name`. This needs
`DISPLAY` to be set and `xsetroot` to be installed, and the name is cleared on
exit. Any other option, or any argument that is left over, prints
`usage: ... [-s]` and exits with status 1.

The default line is built by `tagwm.status.bar.default_components()`. It
shows wireless quality and ESSID on `wlp3s0`, CPU usage, the temperature from
`/sys/class/thermal/thermal_zone0/temp`, used RAM, and the date and time. Each
entry is a `Component` that holds a function, a printf-style format and an
optional argument. `render_status(components, unknown, maxlen)` joins the
entries into one line. A component that returns `None` is shown as `unknown`
(by default `n/a`). The line is cut off before it reaches `maxlen` bytes.

The components are plain functions and can be called directly:

```python
from tagwm.status.fmt import fmt_human
from tagwm.status.system import datetime, load_avg, uptime
from tagwm.status.memory import ram_used
from tagwm.status.bar import default_components, render_status

print(fmt_human(1536, 1024))        # "1.5 Ki"
print(datetime("%F %T"))
print(load_avg(), uptime(), ram_used())

print(render_status(default_components(), "n/a", 2048))
```

The components are grouped by module:

- `tagwm.status.system`: `datetime`, `disk_free`, `disk_perc`, `disk_total`,
  `disk_used`, `entropy`, `hostname`, `ipv4`, `ipv6`, `kernel_release`,
  `keyboard_indicators(fmt, led_mask)`, `keymap_layout(symbols, group)`,
  `load_avg`, `num_files`, `run_command`, `uptime`, `gid`, `uid`, `username`
- `tagwm.status.cpu`: `cpu_freq`, `cpu_perc` (backed by `CpuUsage`)
- `tagwm.status.memory`: `ram_free`, `ram_perc`, `ram_total`, `ram_used`
- `tagwm.status.swap`: `swap_free`, `swap_perc`, `swap_total`, `swap_used`
- `tagwm.status.power`: `battery_perc`, `battery_state`, `battery_remaining`,
  `temp`
- `tagwm.status.network`: `netspeed_rx`, `netspeed_tx` (backed by `NetSpeed`),
  `wifi_perc`, `wifi_essid`, `rssi_to_perc`
- `tagwm.status.volume`: `vol_perc` (OSS mixer device)

Most of these read Linux files under `/proc` and `/sys`. Components that keep
state between calls (`cpu_perc`, `CpuUsage`, `netspeed_rx`, `netspeed_tx`,
`NetSpeed`) return `None` on their first call, because they have nothing to
compare against yet. `keyboard_indicators` and `keymap_layout` do not query a
display. They format an LED mask or an XKB symbols string that the caller
supplies.

## The window manager

```
tagwm -v
```

prints `tagwm-6.2` to standard error and exits with status 1.

Run without arguments, `tagwm` builds a `WindowManager` with the default
configuration, a 1024x768 screen and an 18-pixel bar. It then reads events as
text lines from standard input, one event per line:

```
map WINDOW X Y W H [CLASS [INSTANCE [NAME...]]]
unmap WINDOW
key MODIFIERS KEYSYM
button CLICK MODIFIERS BUTTON [TAG_INDEX]
configure WIDTH HEIGHT
fullscreen WINDOW 0|1
dump
```

Numbers may be written in decimal or hex (`0x40`). `CLICK` is one of
`tag_bar`, `lt_symbol`, `status_text`, `win_title`, `client_win` or
`root_win`. `dump` prints every monitor's number and layout symbol, followed
by one line per client: window, x, y, width, height and tags, with `*` marking
the selected client. A line that cannot be understood is reported on standard
error and skipped. The quit binding (Mod4+Shift+q) stops the loop.

For example, with Mod4 being `0x40`:

```
printf 'map 1 0 0 400 300\nmap 2 0 0 400 300\nkey 0x40 0x6d\ndump\n' | tagwm
```

This maps two windows, switches to the monocle layout, and prints the
resulting state.

The model can also be driven from Python:

```python
from tagwm.wm.config import default_config
from tagwm.wm.manager import WindowManager
from tagwm.wm.bindings import dispatch_key

wm = WindowManager(default_config(), 1920, 1080, 18)
a = wm.manage(1, 0, 0, 800, 600, "term")
b = wm.manage(2, 0, 0, 800, 600, "editor")
wm.zoom()
wm.view(1 << 1)
```

`WindowManager` provides `manage`, `unmanage`, `client_for`, `apply_rules`,
`arrange`, `resize`, `focus`, `focusstack`, `focusmon`, `tagmon`, `sendmon`,
`dirtomon`, `recttomon`, `view`, `toggleview`, `tag`, `toggletag`,
`setlayout`, `setmfact`, `incnmaster`, `zoom`, `togglefloating`, `togglebar`,
`setfullscreen`, `update_geometry`, `spawn` and `quit`. `spawn` starts the
program in a new session. `tagwm.wm.model` holds `Client`, `Monitor`,
`SizeHints` and the `tile` and `monocle` layouts. `tagwm.wm.config` holds
`Config`, `Rule`, `Layout`, `KeyBinding`, `ButtonBinding` and the
`Action`/`Click` enums, and `default_config()` returns the stock setup.
`tagwm.wm.bindings` provides `dispatch_key`, `dispatch_button`, `bar_click`
and `clean_mask`.

### What it does not do

`tagwm` does not connect to an X server. It does not reparent, move or draw
real windows, draws no bar, and grabs no keys or buttons. Window geometry
exists only in the model, and events come only from the text lines described
above. It always has a single monitor. The move-with-mouse and
resize-with-mouse bindings are recognised but not carried out. The kill
binding stops managing the selected client rather than closing a window.