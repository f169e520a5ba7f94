from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .ansi import write


DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

COLOR_DEFAULT = 0x0000
COLOR_BLACK = 0x0001
COLOR_RED = 0x0002
COLOR_GREEN = 0x0003
COLOR_YELLOW = 0x0004
COLOR_BLUE = 0x0005
COLOR_MAGENTA = 0x0006
COLOR_CYAN = 0x0007
COLOR_WHITE = 0x0008

ATTR_BOLD = 0x0100
ATTR_UNDERLINE = 0x0200
ATTR_REVERSE = 0x0400

_COLOR_MASK = 0x00FF

_COLOR_NAMES = {
    "DEFAULT": COLOR_DEFAULT,
    "BLACK": COLOR_BLACK,
    "RED": COLOR_RED,
    "GREEN": COLOR_GREEN,
    "YELLOW": COLOR_YELLOW,
    "BROWN": COLOR_YELLOW,
    "BLUE": COLOR_BLUE,
    "MAGENTA": COLOR_MAGENTA,
    "CYAN": COLOR_CYAN,
    "WHITE": COLOR_WHITE,
    "GREY": COLOR_WHITE,
}

_ATTR_NAMES = {
    "BOLD": ATTR_BOLD,
    "BRIGHT": ATTR_BOLD,
    "UNDERLINE": ATTR_UNDERLINE,
    "REVERSE": ATTR_REVERSE,
}


def color_from_desc(color_desc: str) -> int:
    """Parse a description such as ``"cyan bold"`` into a color value.

    The first color name wins; attribute names may appear anywhere. Unknown
    words are ignored.
    """
    color: Optional[int] = None
    attrs = 0
    for raw in (color_desc or "").replace("+", " ").replace("\t", " ").split(" "):
        tok = raw.strip().upper()
        if not tok:
            continue
        if tok in _ATTR_NAMES:
            attrs |= _ATTR_NAMES[tok]
            continue
        if tok in _COLOR_NAMES and color is None:
            color = _COLOR_NAMES[tok]
    return (COLOR_DEFAULT if color is None else color) | attrs


def sgr_for(fg: int, bg: int) -> str:
    """Return the SGR sequence selecting ``fg`` on ``bg``."""
    parts = ["0"]
    if fg & ATTR_BOLD:
        parts.append("1")
    if fg & ATTR_UNDERLINE:
        parts.append("4")
    if (fg | bg) & ATTR_REVERSE:
        parts.append("7")

    fg_color = fg & _COLOR_MASK
    if fg_color:
        parts.append(str(30 + fg_color - 1))
    bg_color = bg & _COLOR_MASK
    if bg_color:
        parts.append(str(40 + bg_color - 1))

    return "\x1b[" + ";".join(parts) + "m"


@dataclass(frozen=True)
class Cell:
    ch: str = " "
    fg: int = COLOR_DEFAULT
    bg: int = COLOR_DEFAULT


@dataclass
class CellSurface:
    """Off-screen grid of cells painted to the terminal on ``present()``.

    Coordinates are 0-indexed ``(x, y)``. Writes outside the grid are
    silently dropped so callers can draw partly off-screen boxes.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    _cells: List[Cell] = field(default_factory=list)
    _painted: Optional[List[List[Cell]]] = None

    def __post_init__(self) -> None:
        if not self._cells:
            self._cells = [Cell() for _ in range(self.width * self.height)]

    def _idx(self, x: int, y: int) -> int:
        return int(y) * self.width + int(x)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> Cell:
        if not self._inside(x, y):
            return Cell()
        return self._cells[self._idx(x, y)]

    def set_cell(self, x: int, y: int, ch: str, fg: int = COLOR_DEFAULT, bg: int = COLOR_DEFAULT) -> None:
        if not self._inside(x, y):
            return
        s = "" if ch is None else str(ch)
        if not s:
            s = " "
        self._cells[self._idx(x, y)] = Cell(s[0], int(fg), int(bg))

    def write_text(self, x: int, y: int, text: str, fg: int = COLOR_DEFAULT, bg: int = COLOR_DEFAULT) -> None:
        for dx, ch in enumerate("" if text is None else str(text)):
            self.set_cell(x + dx, y, ch, fg, bg)

    def row_text(self, y: int) -> str:
        if not 0 <= y < self.height:
            return ""
        start = self._idx(0, y)
        return "".join(c.ch for c in self._cells[start:start + self.width])

    def clear(self, fg: int = COLOR_DEFAULT, bg: int = COLOR_DEFAULT) -> None:
        self._cells = [Cell(" ", fg, bg) for _ in range(self.width * self.height)]

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self._cells = [Cell() for _ in range(self.width * self.height)]
        self.invalidate()

    def invalidate(self) -> None:
        """Force the next ``present()`` to repaint every row."""
        self._painted = None

    def _rows(self) -> List[List[Cell]]:
        return [self._cells[y * self.width:(y + 1) * self.width] for y in range(self.height)]

    def render_rows(self, rows: List[int]) -> str:
        parts: List[str] = []
        for y in rows:
            parts.append(f"\x1b[{y + 1};1H")
            last: Optional[tuple] = None
            start = self._idx(0, y)
            for cell in self._cells[start:start + self.width]:
                key = (cell.fg, cell.bg)
                if key != last:
                    parts.append(sgr_for(cell.fg, cell.bg))
                    last = key
                parts.append(cell.ch)
        if parts:
            parts.append("\x1b[0m")
        return "".join(parts)

    def present(self) -> int:
        """Paint changed rows to the terminal. Returns the number of rows painted."""
        rows = self._rows()
        prev = self._painted
        if prev is None or len(prev) != len(rows):
            dirty = list(range(self.height))
        else:
            dirty = [y for y in range(self.height) if prev[y] != rows[y]]

        if dirty:
            write(self.render_rows(dirty))
        self._painted = rows
        return len(dirty)
