"""
ANSI escape codes and terminal control functions.
"""

from .utils import encode_text, write_bytes

ALT_SCREEN_ON = "\x1b[?1049h"
ALT_SCREEN_OFF = "\x1b[?1049l"

# 1000: report button presses, 1006: SGR extended coordinates.
MOUSE_ON = "\x1b[?1000h\x1b[?1006h"
MOUSE_OFF = "\x1b[?1006l\x1b[?1000l"


def hide_cursor() -> None:
    write_bytes(b"\x1b[?25l")


def show_cursor() -> None:
    write_bytes(b"\x1b[?25h")


def enter_alt_screen() -> None:
    write_bytes(encode_text(ALT_SCREEN_ON))


def exit_alt_screen() -> None:
    write_bytes(encode_text(ALT_SCREEN_OFF))


def enable_mouse() -> None:
    """Ask the terminal to report mouse button presses (SGR encoding)."""
    write_bytes(encode_text(MOUSE_ON))


def disable_mouse() -> None:
    write_bytes(encode_text(MOUSE_OFF))


def write(text: str) -> None:
    """
    Write text to the terminal.

    Args:
        text: Text to write
    """
    if text:
        write_bytes(encode_text(text))
