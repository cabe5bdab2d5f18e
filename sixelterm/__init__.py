"""Terminal emulator building blocks: sixel decoding, key tables, settings, options, URLs and scrollback."""

__version__ = "0.8.5"

__all__ = ["args", "hls", "keys", "scrollback", "settings", "sixel", "urls"]