# sixelterm

Pieces of a terminal emulator, written in plain Python with no
third-party dependencies:

- `sixelterm.sixel` — a DEC sixel graphics decoder. `SixelParser`
  takes sixel data and produces a BGRA pixel buffer; it handles the
  VT340 default palette, repeat introducers (`!`), raster attributes
  (`"`), HLS and RGB colour definitions (`#`), carriage return (`$`)
  and next line (`-`). `SixelImage` is the indexed pixel buffer with
  its palette, and `ParseState` names the parser states.
- `sixelterm.hls` — `hls_to_rgb(hue, lum, sat)`, the sixel HLS colour
  model (blue at 0°, red at 120°, green at 240°), returning a packed
  `0xRRGGBB` integer.
- `sixelterm.keys` — the special-key table (`KEYS`) mapping key
  symbols and modifier state to the sequences sent to the application:
  `lookup_key`, `mask_matches`, `Modifier`, `KeyBinding`.
- `sixelterm.settings` — the default terminal settings (`Settings`)
  and loading of X resource style overrides: `parse_resource_database`,
  `load_resource`, `ResourceType`, `Resource`, `RESOURCES`.
- `sixelterm.args` — short-option parsing in the classic
  `-abc -f value` style: `iter_options` and `UsageError`.
- `sixelterm.urls` — finding a URL under a clicked cell (`url_at`)
  and handing it to an opener program (`open_url_on_click`), opening
  the clipboard text (`open_copied`), and running a plumber on a
  selection in a process's working directory (`plumb`,
  `subprocess_cwd`).
- `sixelterm.scrollback` — a history ring with scroll up/down
  (`Scrollback`), moving placed images along with the view
  (`PlacedImage`, `scroll_images`), starting a sixel parser for a
  device control string (`dcs_handle`) and synchronized-update
  tracking (`SyncUpdate`).

## Installing

    pip install sixelterm

For the tests:

    pip install "sixelterm[test]"
    pytest

## Decoding a sixel image

```python
from sixelterm.sixel import SixelParser

parser = SixelParser(fgcolor=0, bgcolor=0, use_private_register=True,
                     cell_width=8, cell_height=16)
parser.parse(b"#1;2;100;0;0~~~")
pixels = parser.finalize()   # bytes, 4 per pixel: blue, green, red, alpha
width, height = parser.image.width, parser.image.height
```

`parse` can be called repeatedly as data arrives and returns the number
of bytes it consumed; once an ESC byte is seen the rest is ignored.
`finalize` trims the buffer to the drawn extent, rounded up to whole
cells, and returns the pixels.

## Looking up a key

```python
from sixelterm.keys import Modifier, lookup_key

lookup_key("Up", Modifier.CONTROL, appkeypad=False, appcursor=False, numlock=False)
```

returns `"\033[1;5A"`, the sequence for Ctrl+Up; a key without an entry
gives `None`. Numlock and the layout switch bit are ignored when
matching modifiers.

## Settings from a resource database

```python
from sixelterm.settings import Settings, parse_resource_database

db = parse_resource_database("st.font: monospace:size=12\nst.tabspaces: 8\n")
settings = Settings()
loaded = settings.apply_resources(db, "st", "St")   # ["font", "tabspaces"]
```

## Command-line options

```python
from sixelterm.args import iter_options

for option, value in iter_options(["-a", "-g", "80x24", "file"], takes_value="g"):
    ...
```

yields `("a", None)`, `("g", "80x24")` and then `(None, "file")`; an
option that needs a value but has none raises `UsageError`.

## What this package does not do

It provides no terminal program and no command to run: there is no
window, no font rendering, no pseudo-terminal or shell handling, and no
parser for escape sequences other than sixel data. The modules are
building blocks to be driven by such a program.