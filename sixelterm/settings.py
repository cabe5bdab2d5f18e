"""Terminal settings and loading them from an X resource database."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

__all__ = [
    "ResourceType",
    "Resource",
    "RESOURCES",
    "DEFAULT_NAME",
    "DEFAULT_CLASS",
    "Settings",
    "parse_resource_database",
    "load_resource",
]

DEFAULT_NAME = "st"
DEFAULT_CLASS = "St"

_BASE_COLORS = (
    "#333333",
    "#c4265e",
    "#86b42b",
    "#b3b42b",
    "#6a7ec8",
    "#8c6bc8",
    "#56adbc",
    "#e3e3dd",
    "#666666",
    "#f92672",
    "#a6e22e",
    "#e2e22e",
    "#819aff",
    "#ae81ff",
    "#66d9ef",
    "#f8f8f2",
)

_EXTRA_COLORS = (
    "#f92672",  # 256: cursor
    "#555555",  # 257: reverse cursor
    "#1b1d1e",  # 258: background
    "#f8f8f2",  # 259: foreground
)


def _default_colors() -> List[Optional[str]]:
    return list(_BASE_COLORS) + [None] * (256 - len(_BASE_COLORS)) + list(_EXTRA_COLORS)


class ResourceType(Enum):
    """How the text of a resource is converted."""

    STRING = 0
    INTEGER = 1
    FLOAT = 2


@dataclass(frozen=True)
class Resource:
    """A resource name and the setting it feeds.

    ``index`` is set when the setting is one entry of a list, such as a
    colour in ``colorname``.
    """

    name: str
    type: ResourceType
    attribute: str
    index: Optional[int] = None


def _color(name: str, index: int) -> Resource:
    return Resource(name, ResourceType.STRING, "colorname", index)


RESOURCES: Tuple[Resource, ...] = (
    Resource("font", ResourceType.STRING, "font"),
    *(_color(f"color{i}", i) for i in range(16)),
    _color("background", 258),
    _color("foreground", 259),
    _color("cursorColor", 256),
    Resource("termname", ResourceType.STRING, "termname"),
    Resource("shell", ResourceType.STRING, "shell"),
    Resource("minlatency", ResourceType.INTEGER, "minlatency"),
    Resource("maxlatency", ResourceType.INTEGER, "maxlatency"),
    Resource("blinktimeout", ResourceType.INTEGER, "blinktimeout"),
    Resource("bellvolume", ResourceType.INTEGER, "bellvolume"),
    Resource("tabspaces", ResourceType.INTEGER, "tabspaces"),
    Resource("borderpx", ResourceType.INTEGER, "borderpx"),
    Resource("cwscale", ResourceType.FLOAT, "cwscale"),
    Resource("chscale", ResourceType.FLOAT, "chscale"),
    Resource("alpha", ResourceType.FLOAT, "alpha"),
)


@dataclass
class Settings:
    """Appearance and behaviour settings of the terminal."""

    font: str = "monospace:style=regular:size=11"
    font2: List[str] = field(default_factory=lambda: ["emoji:size=10"])
    borderpx: int = 1
    url_opener: str = "xdg-open"
    shell: str = "/bin/sh"
    utmp: Optional[str] = None
    scroll: Optional[str] = None
    stty_args: str = "stty raw pass8 nl -echo -iexten -cstopb 38400"
    vtiden: str = "\033[?6c"
    cwscale: float = 1.0
    chscale: float = 1.0
    worddelimiters: str = " "
    doubleclicktimeout: int = 300
    tripleclicktimeout: int = 600
    allowaltscreen: bool = True
    allowwindowops: bool = False
    minlatency: float = 8
    maxlatency: float = 33
    su_timeout: int = 200
    blinktimeout: int = 800
    cursorthickness: int = 2
    bellvolume: int = 0
    termname: str = "st-256color"
    tabspaces: int = 4
    alpha: float = 0.8
    colorname: List[Optional[str]] = field(default_factory=_default_colors)
    defaultbg: int = 258
    defaultfg: int = 259
    defaultcs: int = 256
    defaultrcs: int = 257
    cursorstyle: int = 5
    stcursor: int = 0x2603
    cols: int = 80
    rows: int = 24
    mouseshape: str = "xterm"
    defaultattr: int = 11
    plumb_cmd: str = "plumb"
    ascii_printable: str = (
        " !\"#$%&'()*+,-./0123456789:;<=>?"
        "@ABCDEFGHIJKLMNOPQRSTUVWXYZ[\\]^_"
        "`abcdefghijklmnopqrstuvwxyz{|}~"
    )

    def apply_resources(self, database, name=None, klass=None):
        """Load every known resource found in ``database`` into these settings.

        Return the names of the resources that were found, in table order.
        """
        loaded = []
        for resource in RESOURCES:
            value = load_resource(database, name, klass, resource)
            if value is None:
                continue
            if resource.index is None:
                setattr(self, resource.attribute, value)
            else:
                getattr(self, resource.attribute)[resource.index] = value
            loaded.append(resource.name)
        return loaded


_OCTAL = re.compile(r"[0-7]{3}")


def _unescape(value: str) -> str:
    out = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value):
            nxt = value[i + 1]
            if nxt == "n":
                out.append("\n")
                i += 2
                continue
            if nxt in "\\ \t":
                out.append(nxt)
                i += 2
                continue
            octal = _OCTAL.match(value, i + 1)
            if octal:
                out.append(chr(int(octal.group(), 8)))
                i += 4
                continue
        out.append(ch)
        i += 1
    return "".join(out)


def _logical_lines(text: str):
    pending = ""
    for raw in text.splitlines():
        if raw.endswith("\\") and not raw.endswith("\\\\"):
            pending += raw[:-1]
            continue
        yield pending + raw
        pending = ""
    if pending:
        yield pending


def parse_resource_database(text: str) -> Dict[str, str]:
    """Parse resource manager text into a mapping of specifications to values.

    Comment lines (``!``) and directives (``#``) are skipped, as are lines
    without a colon.  A later entry for the same specification replaces an
    earlier one.
    """
    database: Dict[str, str] = {}
    for line in _logical_lines(text):
        stripped = line.lstrip(" \t")
        if not stripped or stripped[0] in "!#":
            continue
        spec, sep, value = stripped.partition(":")
        if not sep:
            continue
        spec = "".join(spec.split())
        if not spec:
            continue
        database[spec] = _unescape(value.lstrip(" \t"))
    return database


_Component = Tuple[bool, str]


def _split_spec(spec: str) -> List[_Component]:
    components: List[_Component] = []
    loose = False
    current = ""
    for ch in spec:
        if ch in ".*":
            if current:
                components.append((loose, current))
                current = ""
                loose = False
            loose = loose or ch == "*"
        else:
            current += ch
    if current:
        components.append((loose, current))
    return components


def _match(entry: Sequence[_Component], names: Sequence[str], classes: Sequence[str]):
    """Score how well an entry matches a query; ``None`` if it does not."""

    def walk(e: int, q: int):
        if e == len(entry) and q == len(names):
            return ()
        if e == len(entry) or q == len(names):
            return None
        loose, comp = entry[e]
        options = []
        if comp == names[q]:
            kind = 3
        elif comp == classes[q]:
            kind = 2
        elif comp == "?":
            kind = 1
        else:
            kind = 0
        if kind:
            rest = walk(e + 1, q + 1)
            if rest is not None:
                options.append(((kind, 0 if loose else 1),) + rest)
        if loose:
            rest = walk(e, q + 1)
            if rest is not None:
                options.append(((0, 0),) + rest)
        return max(options) if options else None

    return walk(0, 0)


def _lookup(database: Dict[str, str], names: Sequence[str], classes: Sequence[str]) -> Optional[str]:
    best_score = None
    best_value = None
    for spec, value in database.items():
        score = _match(_split_spec(spec), names, classes)
        if score is not None and (best_score is None or score > best_score):
            best_score, best_value = score, value
    return best_value


_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))", re.I)


def _to_int(text: str) -> int:
    found = _INT.match(text)
    return int(found.group(1)) if found else 0


def _to_float(text: str) -> float:
    found = _FLOAT.match(text)
    return float(found.group(1)) if found else 0.0


def load_resource(database, name, klass, resource):
    """Look up one resource under ``name.<resource>`` / ``klass.<resource>``.

    ``name`` and ``klass`` default to ``st`` and ``St``.  Return the value
    converted for the resource's type, or ``None`` when it is not set.
    Integers and floats are read from the leading part of the text, as zero
    when it holds no number.
    """
    names = (name or DEFAULT_NAME, resource.name)
    classes = (klass or DEFAULT_CLASS, resource.name)
    text = _lookup(database, names, classes)
    if text is None:
        return None
    if resource.type is ResourceType.INTEGER:
        return _to_int(text)
    if resource.type is ResourceType.FLOAT:
        return _to_float(text)
    return text