"""
Raw mode terminal input and event decoding.

Bytes read from the terminal are decoded into three event kinds:
``KeyEvent`` (a key constant and/or a printable character), ``MouseEvent``
(a button press or release at a 0-indexed cell) and ``OtherEvent`` for
anything the toolkit does not act on.
"""

import logging
import os
import re
import select
import shutil
import sys
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

try:
    import termios  # type: ignore
    import tty  # type: ignore
except Exception:  # pragma: no cover
    termios = None  # type: ignore
    tty = None  # type: ignore

from . import ansi

logger = logging.getLogger(__name__)

# Key constants
KEY_ENTER = "\r"
KEY_ESC = "\x1b"
KEY_BACKSPACE = "\x08"
# Note: most terminals send DEL (0x7f) for backspace.
KEY_DELETE = "\x7f"
KEY_TAB = "\t"
KEY_SPACE = " "
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_HOME = "KEY_HOME"
KEY_END = "KEY_END"
KEY_PAGEUP = "KEY_PAGEUP"
KEY_PAGEDOWN = "KEY_PAGEDOWN"
KEY_INSERT = "KEY_INSERT"
# Forward delete (ESC [ 3 ~), distinct from 0x7f.
KEY_DEL = "KEY_DEL"
KEY_SHIFTTAB = "KEY_SHIFTTAB"

KEY_NAMES = {
    "KEY_ENTER": KEY_ENTER,
    "KEY_ESC": KEY_ESC,
    "KEY_BACKSPACE": KEY_BACKSPACE,
    "KEY_DELETE": KEY_DELETE,
    "KEY_TAB": KEY_TAB,
    "KEY_SPACE": KEY_SPACE,
    "KEY_UP": KEY_UP,
    "KEY_DOWN": KEY_DOWN,
    "KEY_LEFT": KEY_LEFT,
    "KEY_RIGHT": KEY_RIGHT,
    "KEY_HOME": KEY_HOME,
    "KEY_END": KEY_END,
    "KEY_PAGEUP": KEY_PAGEUP,
    "KEY_PAGEDOWN": KEY_PAGEDOWN,
    "KEY_INSERT": KEY_INSERT,
    "KEY_DEL": KEY_DEL,
    "KEY_SHIFTTAB": KEY_SHIFTTAB,
}

MOUSE_LEFT = 0
MOUSE_MIDDLE = 1
MOUSE_RIGHT = 2
MOUSE_RELEASE = 3
MOUSE_WHEEL_UP = 64
MOUSE_WHEEL_DOWN = 65

_MAX_SEQUENCE_LEN = 32
_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")
_CSI_RE = re.compile(r"^\x1b\[[0-9;]*([A-Za-z])$")


@dataclass
class KeyEvent:
    key: Optional[str]
    ch: Optional[str] = None


@dataclass
class MouseEvent:
    x: int
    y: int
    button: int = MOUSE_LEFT
    pressed: bool = True


@dataclass
class OtherEvent:
    data: bytes = b""


Event = Union[KeyEvent, MouseEvent, OtherEvent]


def key_from_name(name: str) -> Optional[str]:
    """Map ``"KEY_ESC"``-style names (or a single literal character) to a key constant."""
    s = str(name)
    if s.upper() in KEY_NAMES:
        return KEY_NAMES[s.upper()]
    if len(s) == 1:
        return s
    return None


def parse_ansi_sequence(seq: str) -> Optional[str]:
    """
    Parse ANSI escape sequence to key constant.

    Args:
        seq: Escape sequence (including ESC)

    Returns:
        Key constant or None if not recognized
    """
    # SS3 variants (common in some terminals / keypad modes)
    if len(seq) == 3 and seq.startswith("\x1bO"):
        return {
            "A": KEY_UP,
            "B": KEY_DOWN,
            "C": KEY_RIGHT,
            "D": KEY_LEFT,
            "H": KEY_HOME,
            "F": KEY_END,
        }.get(seq[2])

    # Tilde-terminated CSI sequences
    tilde = {
        "\x1b[1~": KEY_HOME,
        "\x1b[7~": KEY_HOME,
        "\x1b[4~": KEY_END,
        "\x1b[8~": KEY_END,
        "\x1b[5~": KEY_PAGEUP,
        "\x1b[6~": KEY_PAGEDOWN,
        "\x1b[2~": KEY_INSERT,
        "\x1b[3~": KEY_DEL,
    }
    if seq in tilde:
        return tilde[seq]

    if seq == "\x1b[Z":
        return KEY_SHIFTTAB

    # CSI with modifiers, e.g. ESC [ 1 ; 2 B: the final letter names the key.
    m = _CSI_RE.match(seq)
    if m:
        return {
            "A": KEY_UP,
            "B": KEY_DOWN,
            "C": KEY_RIGHT,
            "D": KEY_LEFT,
            "H": KEY_HOME,
            "F": KEY_END,
        }.get(m.group(1))
    return None


def is_printable(ch: str) -> bool:
    """
    Check if character is printable.

    Args:
        ch: Character to check

    Returns:
        True if printable
    """
    if not ch or len(ch) != 1:
        return False
    code = ord(ch)
    return 32 <= code <= 126 or code >= 160


def _mouse_button(cb: int) -> int:
    if cb & 64:
        return MOUSE_WHEEL_UP + (cb & 1)
    return cb & 3


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC0 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF8:
        return 4
    return 1


def _decode_csi(buf: bytes, final: bool) -> Optional[Tuple[Event, int]]:
    # X10 mouse report: ESC [ M b x y, each byte offset by 32.
    if buf[2:3] == b"M":
        if len(buf) < 6:
            return (OtherEvent(bytes(buf)), len(buf)) if final else None
        cb = buf[3] - 32
        if cb & 32:
            return OtherEvent(bytes(buf[:6])), 6
        button = _mouse_button(cb)
        return MouseEvent(x=buf[4] - 33, y=buf[5] - 33, button=button, pressed=button != MOUSE_RELEASE), 6

    end = None
    for i in range(2, min(len(buf), _MAX_SEQUENCE_LEN)):
        if 0x40 <= buf[i] <= 0x7E:
            end = i
            break
    if end is None:
        if final or len(buf) >= _MAX_SEQUENCE_LEN:
            return OtherEvent(bytes(buf)), len(buf)
        return None

    raw = bytes(buf[:end + 1])
    seq = raw.decode("ascii", errors="replace")

    m = _SGR_MOUSE_RE.match(seq)
    if m:
        cb = int(m.group(1))
        if cb & 32:
            # Motion reports are not requested; drop them if a terminal sends one anyway.
            return OtherEvent(raw), len(raw)
        return MouseEvent(
            x=int(m.group(2)) - 1,
            y=int(m.group(3)) - 1,
            button=_mouse_button(cb),
            pressed=m.group(4) == "M",
        ), len(raw)

    key = parse_ansi_sequence(seq)
    if key is None:
        logger.debug("unrecognized escape sequence %r", seq)
        return OtherEvent(raw), len(raw)
    return KeyEvent(key), len(raw)


def decode_event(buf: bytes, *, final: bool = True) -> Optional[Tuple[Event, int]]:
    """Decode the first event in ``buf``.

    Returns ``(event, bytes_consumed)``, or None when ``buf`` is empty or ends
    in an incomplete sequence and ``final`` is False (more bytes may follow).
    With ``final`` True an incomplete sequence is resolved as well as it can
    be: a lone ESC becomes ``KEY_ESC``.
    """
    if not buf:
        return None

    b0 = buf[0]
    if b0 == 0x1B:
        if len(buf) == 1:
            return (KeyEvent(KEY_ESC), 1) if final else None
        b1 = buf[1]
        if b1 == ord("["):
            if len(buf) == 2:
                return (KeyEvent(KEY_ESC), 1) if final else None
            return _decode_csi(buf, final)
        if b1 == ord("O"):
            if len(buf) < 3:
                return (KeyEvent(KEY_ESC), 1) if final else None
            seq = bytes(buf[:3]).decode("ascii", errors="replace")
            key = parse_ansi_sequence(seq)
            if key is None:
                return OtherEvent(bytes(buf[:3])), 3
            return KeyEvent(key), 3
        # ESC followed by anything else: report the ESC on its own.
        return KeyEvent(KEY_ESC), 1

    if b0 in (0x0D, 0x0A):
        return KeyEvent(KEY_ENTER), 1
    if b0 == 0x08:
        return KeyEvent(KEY_BACKSPACE), 1
    if b0 == 0x7F:
        return KeyEvent(KEY_DELETE), 1
    if b0 == 0x09:
        return KeyEvent(KEY_TAB), 1
    if b0 == 0x20:
        return KeyEvent(KEY_SPACE), 1
    if b0 < 0x20:
        return OtherEvent(bytes(buf[:1])), 1

    n = _utf8_length(b0)
    # A lead byte without its continuation bytes is dropped on its own so the
    # keys typed after it still decode.
    if any(not 0x80 <= b < 0xC0 for b in buf[1:n]):
        return OtherEvent(bytes(buf[:1])), 1
    if len(buf) < n:
        return (OtherEvent(bytes(buf)), len(buf)) if final else None
    ch = bytes(buf[:n]).decode("utf-8", errors="replace")
    if len(ch) == 1 and is_printable(ch) and ch != "\ufffd":
        return KeyEvent(None, ch), n
    return OtherEvent(bytes(buf[:n])), n


def parse_event(data: bytes) -> Event:
    """Decode a complete chunk of input bytes into its first event."""
    res = decode_event(data, final=True)
    if res is None:
        return OtherEvent(bytes(data))
    return res[0]


def terminal_size() -> Tuple[int, int]:
    """Return ``(cols, rows)`` of the controlling terminal."""
    size = shutil.get_terminal_size(fallback=(80, 24))
    return (int(size.columns), int(size.lines))


@dataclass
class _StreamState:
    fd: int
    inbuf: bytearray = field(default_factory=bytearray)
    tty_saved_attrs: Optional[list] = None
    tty_raw_applied: bool = False


class TerminalInput:
    """
    Context manager for raw mode terminal input.

    Example:
        >>> with TerminalInput() as inp:
        ...     ev = inp.poll_event()
        ...     if isinstance(ev, KeyEvent) and ev.key == KEY_ESC:
        ...         print("Escape pressed")
    """

    def __init__(
        self,
        fd: Optional[int] = None,
        *,
        mouse: bool = True,
        alt_screen: bool = True,
        hide_cursor: bool = True,
        escape_timeout: float = 0.05,
    ):
        """Initialize terminal input.

        Args:
            fd: File descriptor to read (default: stdin)
            mouse: Enable mouse click reporting while active
            alt_screen: Switch to the alternate screen while active
            hide_cursor: Hide the text cursor while active
            escape_timeout: Seconds to wait for the rest of an escape sequence
        """
        self._fd = int(fd) if fd is not None else sys.stdin.fileno()
        self._st = _StreamState(fd=self._fd)
        self.mouse = mouse
        self.alt_screen = alt_screen
        self.hide_cursor = hide_cursor
        self.escape_timeout = escape_timeout

    def __enter__(self):
        self.enable_raw_mode()
        if self.alt_screen:
            ansi.enter_alt_screen()
        if self.hide_cursor:
            ansi.hide_cursor()
        if self.mouse:
            ansi.enable_mouse()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if self.mouse:
                ansi.disable_mouse()
            if self.hide_cursor:
                ansi.show_cursor()
            if self.alt_screen:
                ansi.exit_alt_screen()
        finally:
            self.disable_raw_mode()
        return False

    def enable_raw_mode(self) -> None:
        if termios is None or tty is None:
            return
        try:
            if not os.isatty(self._fd):
                return
        except OSError:
            return

        try:
            if self._st.tty_saved_attrs is None:
                self._st.tty_saved_attrs = termios.tcgetattr(self._fd)
            tty.setraw(self._fd, when=termios.TCSANOW)
            self._st.tty_raw_applied = True
        except termios.error:
            logger.warning("could not switch fd %d to raw mode", self._fd)
            self._st.tty_raw_applied = False

    def disable_raw_mode(self) -> None:
        if termios is None or not self._st.tty_raw_applied:
            return
        saved = self._st.tty_saved_attrs
        if saved is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, saved)
        finally:
            self._st.tty_raw_applied = False

    def _fill_inbuf(self, timeout: Optional[float]) -> bool:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return False
        data = os.read(self._fd, 1024)
        if not data:
            return False
        self._st.inbuf.extend(data)
        return True

    def poll_event(self, timeout: Optional[float] = None) -> Optional[Event]:
        """
        Wait for the next input event.

        Args:
            timeout: Seconds to wait (None = block)

        Returns:
            The decoded event, or None on timeout / end of input
        """
        if not self._st.inbuf:
            if not self._fill_inbuf(timeout):
                return None

        while True:
            res = decode_event(bytes(self._st.inbuf), final=False)
            if res is None:
                if self._fill_inbuf(self.escape_timeout):
                    continue
                res = decode_event(bytes(self._st.inbuf), final=True)
                if res is None:
                    return None
            event, consumed = res
            del self._st.inbuf[:consumed]
            return event
