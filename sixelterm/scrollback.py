"""Scrollback history, image placement and synchronized updates."""

import sys
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .sixel import SixelParser

__all__ = [
    "HISTSIZE",
    "MAX_IMAGE_DISTANCE",
    "PlacedImage",
    "Scrollback",
    "SyncUpdate",
    "scroll_images",
    "dcs_handle",
]

HISTSIZE = 2000

#: Distance in lines from the view beyond which an image is dropped.
MAX_IMAGE_DISTANCE = 10000


@dataclass
class PlacedImage:
    """A decoded image placed on the terminal grid."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    pixels: bytes = b""
    should_delete: bool = False


def scroll_images(images: Sequence[PlacedImage], n: int, max_distance: int = MAX_IMAGE_DISTANCE):
    """Move every image ``n`` lines down and mark those too far away.

    Return the images marked for deletion by this call.
    """
    marked = []
    for image in images:
        image.y += n
        if abs(image.y) > max_distance:
            print(f"image at y={image.y} exceeded maximum distance", file=sys.stderr)
            image.should_delete = True
            marked.append(image)
    return marked


def dcs_handle(final: str, cell_width: int, cell_height: int) -> Optional[SixelParser]:
    """Start the handler of a device control string with final byte ``final``.

    Return a sixel parser for ``q``; report anything else and return ``None``.
    """
    if final == "q":
        return SixelParser(0, 0, True, cell_width, cell_height)
    print(f"erresc: unknown csi {final!r}", file=sys.stderr)
    return None


class Scrollback:
    """The visible screen with a ring of lines that scrolled off its top."""

    def __init__(self, screen, history_size: int = HISTSIZE, blank="", images=None):
        self.screen = list(screen)
        self.history_size = history_size
        self.history = [blank] * history_size
        self.histi = 0
        self.scr = 0
        self.altscreen = False
        self.dirty = False
        self.images: List[PlacedImage] = list(images) if images is not None else []

    @property
    def rows(self) -> int:
        return len(self.screen)

    def line(self, y: int):
        """Return the line shown at row ``y`` of the view."""
        if y < self.scr:
            index = (y + self.histi - self.scr + self.history_size + 1) % self.history_size
            return self.history[index]
        return self.screen[y - self.scr]

    def push(self, line) -> None:
        """Save a line that scrolled off the top of the screen."""
        self.histi = (self.histi + 1) % self.history_size
        self.history[self.histi] = line

    def scroll_up(self, n: int) -> int:
        """Scroll the view ``n`` lines back into history; return lines moved.

        A negative ``n`` scrolls the screen height less ``-n`` lines.
        """
        if n < 0:
            n = self.rows + n
        if self.scr + n > self.histi:
            n = self.histi - self.scr
        if not n:
            return 0
        moved = 0
        if self.scr <= self.history_size - n:
            self.scr += n
            self.dirty = True
            moved = n
        scroll_images(self.images, n)
        return moved

    def scroll_down(self, n: int) -> int:
        """Scroll the view ``n`` lines towards the screen; return lines moved.

        A negative ``n`` scrolls the screen height less ``-n`` lines.
        """
        if n < 0:
            n = self.rows + n
        if n > self.scr:
            n = self.scr
        if self.scr > 0:
            self.scr -= n
            self.dirty = True
        scroll_images(self.images, -n)
        return n


class SyncUpdate:
    """Synchronized-update state that lapses after a timeout."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started = 0.0
        self.active = False
        self.write_aborted = False

    def begin(self) -> None:
        """Start holding back drawing."""
        self._started = self._clock()
        self.active = True

    def end(self) -> None:
        """Stop holding back drawing."""
        self.active = False

    def in_sync(self, timeout: float) -> bool:
        """Tell whether an update is in progress, ending it after ``timeout`` ms."""
        if self.active and (self._clock() - self._started) * 1000.0 >= timeout:
            self.active = False
        return self.active

    @property
    def read_pending(self) -> bool:
        """Whether a write was cut short and more input is waiting."""
        return self.write_aborted