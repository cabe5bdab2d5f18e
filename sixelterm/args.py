"""Parsing of short command-line options in the traditional Unix style."""

from typing import Container, Iterable, Iterator, Optional, Tuple

__all__ = ["UsageError", "iter_options"]


class UsageError(Exception):
    """An option that needs a value was given none."""

    def __init__(self, option: str):
        super().__init__(f"option requires an argument -- '{option}'")
        self.option = option


def iter_options(
    argv: Iterable[str], takes_value: Container[str] = ()
) -> Iterator[Tuple[Optional[str], str]]:
    """Walk the arguments after the program name.

    Yield ``(option, value)`` for every option, with ``value`` ``None`` for
    options that take no value, then ``(None, operand)`` for every operand.
    Options may be clustered (``-ab``); an option in ``takes_value`` takes the
    rest of its cluster or, if that is empty, the next argument.  Parsing of
    options stops at the first argument that is not an option, at ``-`` and
    after ``--``.  A missing value raises :class:`UsageError`.
    """
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if not (arg.startswith("-") and len(arg) > 1):
            break
        i += 1
        if arg == "--":
            break
        pos = 1
        while pos < len(arg):
            opt = arg[pos]
            pos += 1
            if opt not in takes_value:
                yield opt, None
                continue
            rest = arg[pos:]
            if rest:
                value = rest
            elif i < len(args):
                value = args[i]
                i += 1
            else:
                raise UsageError(opt)
            yield opt, value
            break
    for operand in args[i:]:
        yield None, operand