"""Translation of special keys to the byte sequences sent to the terminal.

Key symbols are named as in X11 without the ``XK_`` prefix, for example
``"Up"``, ``"KP_Enter"`` or ``"F5"``.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Optional, Union

__all__ = ["Modifier", "KeyBinding", "KEYS", "IGNORED_MODIFIERS", "mask_matches", "lookup_key"]


class Modifier(IntFlag):
    """Modifier state bits as reported by the X server."""

    NONE = 0
    SHIFT = 1 << 0
    LOCK = 1 << 1
    CONTROL = 1 << 2
    MOD1 = 1 << 3
    MOD2 = 1 << 4
    MOD3 = 1 << 5
    MOD4 = 1 << 6
    MOD5 = 1 << 7
    SWITCH = 1 << 13


#: State bits ignored when matching: numlock and the keyboard layout switch.
IGNORED_MODIFIERS = Modifier.MOD2 | Modifier.SWITCH


@dataclass(frozen=True)
class KeyBinding:
    """One entry of the key table.

    ``mask`` of ``None`` matches any modifier state.  ``appkey`` and
    ``appcursor`` are 0 when the mode does not matter, positive when the
    entry applies only with the mode on and negative when only with it off;
    an ``appkey`` of 2 is also skipped while numlock is active.
    """

    keysym: str
    mask: Optional[Modifier]
    string: str
    appkey: int = 0
    appcursor: int = 0

    def applies(self, state, appkeypad, appcursor, numlock):
        """Tell whether this entry is chosen for the given state and modes."""
        if not mask_matches(self.mask, state):
            return False
        if (self.appkey < 0) if appkeypad else (self.appkey > 0):
            return False
        if numlock and self.appkey == 2:
            return False
        if (self.appcursor < 0) if appcursor else (self.appcursor > 0):
            return False
        return True


def mask_matches(mask: Optional[Union[Modifier, int]], state: Union[Modifier, int]) -> bool:
    """Tell whether a binding mask matches an event state.

    ``None`` matches every state; otherwise the state, without the ignored
    bits, must equal the mask exactly.
    """
    if mask is None:
        return True
    return int(mask) == int(state) & ~int(IGNORED_MODIFIERS)


_ANY = None
_NO = Modifier.NONE
_S = Modifier.SHIFT
_C = Modifier.CONTROL
_A = Modifier.MOD1
_M3 = Modifier.MOD3
_M4 = Modifier.MOD4


def _b(keysym, mask, string, appkey=0, appcursor=0):
    return KeyBinding(keysym, mask, string, appkey, appcursor)


_KEYPAD = (
    _b("KP_Home", _S, "\033[2J", 0, -1),
    _b("KP_Home", _S, "\033[1;2H", 0, +1),
    _b("KP_Home", _ANY, "\033[H", 0, -1),
    _b("KP_Home", _ANY, "\033[1~", 0, +1),
    _b("KP_Up", _ANY, "\033Ox", +1, 0),
    _b("KP_Up", _ANY, "\033[A", 0, -1),
    _b("KP_Up", _ANY, "\033OA", 0, +1),
    _b("KP_Down", _ANY, "\033Or", +1, 0),
    _b("KP_Down", _ANY, "\033[B", 0, -1),
    _b("KP_Down", _ANY, "\033OB", 0, +1),
    _b("KP_Left", _ANY, "\033Ot", +1, 0),
    _b("KP_Left", _ANY, "\033[D", 0, -1),
    _b("KP_Left", _ANY, "\033OD", 0, +1),
    _b("KP_Right", _ANY, "\033Ov", +1, 0),
    _b("KP_Right", _ANY, "\033[C", 0, -1),
    _b("KP_Right", _ANY, "\033OC", 0, +1),
    _b("KP_Prior", _S, "\033[5;2~"),
    _b("KP_Prior", _ANY, "\033[5~"),
    _b("KP_Begin", _ANY, "\033[E"),
    _b("KP_End", _C, "\033[J", -1),
    _b("KP_End", _C, "\033[1;5F", +1),
    _b("KP_End", _S, "\033[K", -1),
    _b("KP_End", _S, "\033[1;2F", +1),
    _b("KP_End", _ANY, "\033[4~"),
    _b("KP_Next", _S, "\033[6;2~"),
    _b("KP_Next", _ANY, "\033[6~"),
    _b("KP_Insert", _S, "\033[2;2~", +1),
    _b("KP_Insert", _S, "\033[4l", -1),
    _b("KP_Insert", _C, "\033[L", -1),
    _b("KP_Insert", _C, "\033[2;5~", +1),
    _b("KP_Insert", _ANY, "\033[4h", -1),
    _b("KP_Insert", _ANY, "\033[2~", +1),
    _b("KP_Delete", _C, "\033[M", -1),
    _b("KP_Delete", _C, "\033[3;5~", +1),
    _b("KP_Delete", _S, "\033[2K", -1),
    _b("KP_Delete", _S, "\033[3;2~", +1),
    _b("KP_Delete", _ANY, "\033[P", -1),
    _b("KP_Delete", _ANY, "\033[3~", +1),
    _b("KP_Multiply", _ANY, "\033Oj", +2),
    _b("KP_Add", _ANY, "\033Ok", +2),
    _b("KP_Enter", _ANY, "\033OM", +2),
    _b("KP_Enter", _ANY, "\r", -1),
    _b("KP_Subtract", _ANY, "\033Om", +2),
    _b("KP_Decimal", _ANY, "\033On", +2),
    _b("KP_Divide", _ANY, "\033Oo", +2),
) + tuple(_b(f"KP_{digit}", _ANY, f"\033O{letter}", +2) for digit, letter in enumerate("pqrstuvwxy"))

# Modifier combinations for the arrow keys, in table order, with their xterm codes.
_ARROW_MODS = (
    (_S, 2),
    (_A, 3),
    (_S | _A, 4),
    (_C, 5),
    (_S | _C, 6),
    (_C | _A, 7),
    (_S | _C | _A, 8),
)


def _arrow(keysym, letter):
    yield from (_b(keysym, mask, f"\033[1;{code}{letter}") for mask, code in _ARROW_MODS)
    yield _b(keysym, _ANY, f"\033[{letter}", 0, -1)
    yield _b(keysym, _ANY, f"\033O{letter}", 0, +1)


_ARROWS = tuple(
    binding
    for keysym, letter in (("Up", "A"), ("Down", "B"), ("Left", "D"), ("Right", "C"))
    for binding in _arrow(keysym, letter)
)

_EDITING = (
    _b("ISO_Left_Tab", _S, "\033[Z"),
    _b("Return", _A, "\033\r"),
    _b("Return", _ANY, "\r"),
    _b("Insert", _S, "\033[4l", -1),
    _b("Insert", _S, "\033[2;2~", +1),
    _b("Insert", _C, "\033[L", -1),
    _b("Insert", _C, "\033[2;5~", +1),
    _b("Insert", _ANY, "\033[4h", -1),
    _b("Insert", _ANY, "\033[2~", +1),
    _b("Delete", _C, "\033[M", -1),
    _b("Delete", _C, "\033[3;5~", +1),
    _b("Delete", _S, "\033[2K", -1),
    _b("Delete", _S, "\033[3;2~", +1),
    _b("Delete", _ANY, "\033[P", -1),
    _b("Delete", _ANY, "\033[3~", +1),
    _b("BackSpace", _NO, "\177"),
    _b("BackSpace", _A, "\033\177"),
    _b("Home", _S, "\033[2J", 0, -1),
    _b("Home", _S, "\033[1;2H", 0, +1),
    _b("Home", _ANY, "\033[H", 0, -1),
    _b("Home", _ANY, "\033[1~", 0, +1),
    _b("End", _C, "\033[J", -1),
    _b("End", _C, "\033[1;5F", +1),
    _b("End", _S, "\033[K", -1),
    _b("End", _S, "\033[1;2F", +1),
    _b("End", _ANY, "\033[4~"),
    _b("Prior", _C, "\033[5;5~"),
    _b("Prior", _S, "\033[5;2~"),
    _b("Prior", _ANY, "\033[5~"),
    _b("Next", _C, "\033[6;5~"),
    _b("Next", _S, "\033[6;2~"),
    _b("Next", _ANY, "\033[6~"),
)

# Final bytes of F1-F4 and numeric codes of F5-F12.
_PF_LETTERS = "PQRS"
_F_CODES = (15, 17, 18, 19, 20, 21, 23, 24)


def _function_string(number, code):
    """Sequence for function key ``number`` (1-12) with xterm modifier ``code``."""
    if number <= 4:
        letter = _PF_LETTERS[number - 1]
        return f"\033O{letter}" if code == 1 else f"\033[1;{code}{letter}"
    base = _F_CODES[number - 5]
    return f"\033[{base}~" if code == 1 else f"\033[{base};{code}~"


def _function_keys():
    for number in range(1, 13):
        keysym = f"F{number}"
        yield _b(keysym, _NO, _function_string(number, 1))
        yield _b(keysym, _S, _function_string(number, 2))
        yield _b(keysym, _C, _function_string(number, 5))
        yield _b(keysym, _M4, _function_string(number, 6))
        yield _b(keysym, _A, _function_string(number, 3))
        if number <= 3:
            yield _b(keysym, _M3, _function_string(number, 4))
    for number in range(13, 25):
        yield _b(f"F{number}", _NO, _function_string(number - 12, 2))
    for number in range(25, 36):
        yield _b(f"F{number}", _NO, _function_string(number - 24, 5))


#: The key table, searched in order; the first applicable entry wins.
KEYS = _KEYPAD + _ARROWS + _EDITING + tuple(_function_keys())


def lookup_key(keysym, state=Modifier.NONE, appkeypad=False, appcursor=False, numlock=False):
    """Return the string a special key sends, or ``None`` if it has no entry.

    ``appkeypad`` and ``appcursor`` are the terminal's keypad and cursor
    application modes; ``numlock`` is the terminal's numlock mode.
    """
    for binding in KEYS:
        if binding.keysym == keysym and binding.applies(state, appkeypad, appcursor, numlock):
            return binding.string
    return None