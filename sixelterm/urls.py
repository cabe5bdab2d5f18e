"""Opening URLs and selections with external programs."""

import shlex
import subprocess
import sys
from typing import Optional, Sequence

__all__ = [
    "URL_MAX",
    "url_at",
    "open_url_on_click",
    "open_copied",
    "subprocess_cwd",
    "plumb",
]

#: Longest URL, in characters, taken from the screen.
URL_MAX = 199


def url_at(grid: Sequence[Sequence[str]], col: int, row: int) -> Optional[str]:
    """Return the URL under the cell at ``col``, ``row`` or ``None``.

    ``grid`` holds the screen rows, each a sequence of one-character cells of
    the same width.  The word under the cell is followed across wrapped
    rows; it counts as a URL when it starts with ``http``.
    """
    lines = [list(line) for line in grid]
    nrows = len(lines)
    ncols = len(lines[row])

    if lines[row][col] == " ":
        return None

    row_start, col_start = row, col
    while True:
        if col_start == 0:
            if row_start == 0 or lines[row_start - 1][ncols - 1] == " ":
                break
            row_start, col_start = row_start - 1, ncols - 1
        elif lines[row_start][col_start - 1] == " ":
            break
        else:
            col_start -= 1

    row_end, col_end = row, col
    while lines[row_end][col_end] != " ":
        col_end += 1
        if col_end >= ncols - 1:
            if row_end + 1 >= nrows or lines[row_end + 1][0] == " ":
                break
            row_end, col_end = row_end + 1, 0
    if col_end >= ncols:
        row_end, col_end = row_end + 1, 0

    chars = []
    while True:
        chars.append(lines[row_start][col_start])
        col_start += 1
        if col_start == ncols:
            row_start, col_start = row_start + 1, 0
        if (
            len(chars) >= URL_MAX
            or (row_start, col_start) == (row_end, col_end)
            or row_start >= nrows
        ):
            break

    url = "".join(chars)
    return url if url.startswith("http") else None


def open_url_on_click(grid, col, row, opener="xdg-open") -> Optional[str]:
    """Open the URL under the clicked cell with ``opener``; return the URL."""
    url = url_at(grid, col, row)
    if url is None:
        return None
    subprocess.run([*shlex.split(opener), url])
    return url


def open_copied(clipboard: Optional[str], opener: str = "xdg-open"):
    """Start ``opener`` on the clipboard text in the background.

    Return the started process, or ``None`` when nothing was copied.
    """
    if not clipboard:
        print("Warning: nothing copied to clipboard", file=sys.stderr)
        return None
    return subprocess.Popen([*shlex.split(opener), clipboard])


def subprocess_cwd(pid: int) -> str:
    """Return a path naming the working directory of process ``pid``."""
    if sys.platform.startswith("linux"):
        return f"/proc/{pid}/cwd"
    raise OSError(f"cannot find the working directory of process {pid} on {sys.platform}")


def plumb(selection: Optional[str], pid: int, command: str = "plumb") -> Optional[int]:
    """Run ``command`` on the selection in the working directory of ``pid``.

    Wait for it and return its exit status; 1 when it could not be started.
    Return ``None`` when there is no selection or no directory to run in.
    """
    if selection is None:
        return None
    try:
        cwd = subprocess_cwd(pid)
    except OSError:
        return None
    try:
        finished = subprocess.run([command, selection], cwd=cwd)
    except OSError:
        return 1
    return finished.returncode