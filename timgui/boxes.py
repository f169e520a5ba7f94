"""
Box drawing helpers.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from .screen import COLOR_DEFAULT, CellSurface


@dataclass(frozen=True)
class BoxStyle:
    tl: str
    tr: str
    bl: str
    br: str
    h: str
    v: str
    lt: str
    rt: str


_BOX_STYLES: Dict[str, BoxStyle] = {
    "ascii": BoxStyle(tl="+", tr="+", bl="+", br="+", h="-", v="|", lt="+", rt="+"),
    "single": BoxStyle(tl="┌", tr="┐", bl="└", br="┘", h="─", v="│", lt="├", rt="┤"),
    "double": BoxStyle(tl="╔", tr="╗", bl="╚", br="╝", h="═", v="║", lt="╟", rt="╢"),
    "rounded": BoxStyle(tl="╭", tr="╮", bl="╰", br="╯", h="─", v="│", lt="⎬", rt="⎨"),
}


def get_box_style(name: Optional[str]) -> BoxStyle:
    return _BOX_STYLES.get(str(name or "").lower(), _BOX_STYLES["rounded"])


def write_text(
    surface: Optional[CellSurface],
    x: int,
    y: int,
    text: str,
    fg: int = COLOR_DEFAULT,
    bg: int = COLOR_DEFAULT,
) -> None:
    """Write ``text`` left to right starting at ``(x, y)``."""
    if surface is None:
        return
    surface.write_text(x, y, text, fg, bg)


def draw_box(
    surface: Optional[CellSurface],
    x: int,
    y: int,
    width: int,
    height: int,
    title: str = "",
    fg: int = COLOR_DEFAULT,
    bg: int = COLOR_DEFAULT,
    style: str = "rounded",
) -> None:
    """Draw a box border with ``title`` centred on the top edge (0-indexed)."""
    if surface is None or width < 2 or height < 2:
        return

    st = get_box_style(style)

    surface.set_cell(x, y, st.tl, fg, bg)
    surface.set_cell(x + width - 1, y, st.tr, fg, bg)
    surface.set_cell(x, y + height - 1, st.bl, fg, bg)
    surface.set_cell(x + width - 1, y + height - 1, st.br, fg, bg)

    for dx in range(1, width - 1):
        surface.set_cell(x + dx, y, st.h, fg, bg)
        surface.set_cell(x + dx, y + height - 1, st.h, fg, bg)

    for dy in range(1, height - 1):
        surface.set_cell(x, y + dy, st.v, fg, bg)
        surface.set_cell(x + width - 1, y + dy, st.v, fg, bg)

    if title:
        write_text(surface, x + (width - len(title)) // 2, y, title, fg, bg)
