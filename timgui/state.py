"""
Cross-frame state: focus coordinates and the input gathered for one frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Set, Tuple

from .config import TimguiConfig, get_config
from .input import MOUSE_LEFT, Event, KeyEvent, MouseEvent, is_printable
from .screen import ATTR_BOLD, COLOR_CYAN, COLOR_DEFAULT, CellSurface, color_from_desc


@dataclass
class Colors:
    default: int = COLOR_DEFAULT
    selected: int = COLOR_CYAN
    cursor: int = COLOR_CYAN | ATTR_BOLD

    @classmethod
    def from_config(cls, cfg: Optional[TimguiConfig] = None) -> "Colors":
        c = (get_config() if cfg is None else cfg).colors
        return cls(
            default=color_from_desc(c.default),
            selected=color_from_desc(c.selected),
            cursor=color_from_desc(c.cursor),
        )


@dataclass
class FrameState:
    """
    Focus and input state shared by every ``compose_box`` call of a session.

    Attributes:
        surface: Cell surface boxes are drawn on (None = input handling only)
        colors: Colors for unfocused, focused-box and focused-element drawing
        box_style: Border glyph set used by ``compose_box``
        focus_box: Index of the focused box among boxes declared this frame
        focus_elem: Index of the focused element among the box's selectable
            elements, -1 when the box has none
        boxes_seen: Boxes composed so far in the current pass
        keys_down: Keys pressed since the last flush
        pending_text: Printable character waiting for a focused text edit
        pending_click: Unclaimed left-click position ``(x, y)``
        needs_redraw: A focus change made this pass stale
    """

    surface: Optional[CellSurface] = None
    colors: Colors = field(default_factory=Colors)
    box_style: str = "rounded"
    focus_box: int = 0
    focus_elem: int = 0
    boxes_seen: int = 0
    keys_down: Set[str] = field(default_factory=set)
    pending_text: Optional[str] = None
    pending_click: Optional[Tuple[int, int]] = None
    needs_redraw: bool = False

    def register_event(self, event: Event) -> None:
        if isinstance(event, KeyEvent):
            if event.key is not None:
                self.keys_down.add(event.key)
            if event.ch and is_printable(event.ch):
                self.pending_text = event.ch
        elif isinstance(event, MouseEvent):
            if event.pressed and event.button == MOUSE_LEFT:
                self.pending_click = (int(event.x), int(event.y))

    def key_down(self, *keys: str) -> bool:
        return any(k in self.keys_down for k in keys)

    def consume_key(self, key: str) -> bool:
        """Remove ``key`` so later boxes in this pass do not see it."""
        if key in self.keys_down:
            self.keys_down.discard(key)
            return True
        return False

    def take_text(self) -> Optional[str]:
        ch = self.pending_text
        self.pending_text = None
        return ch

    def flush(self) -> bool:
        """
        Finish a pass.

        Clamps ``focus_box`` into the boxes declared this pass, drops the
        pass's input and resets the box counter.

        Returns:
            True if the caller must compose the same frame again
        """
        if self.boxes_seen > 0:
            if self.focus_box >= self.boxes_seen:
                self.focus_box = self.boxes_seen - 1
                self.needs_redraw = True
            elif self.focus_box < 0:
                self.focus_box = 0
                self.needs_redraw = True
        else:
            # Nothing was drawn, so nothing can be stale.
            self.focus_box = 0

        self.boxes_seen = 0
        self.keys_down.clear()
        self.pending_text = None
        self.pending_click = None

        redraw = self.needs_redraw
        self.needs_redraw = False
        return redraw


def new_frame_state(
    surface: Optional[CellSurface] = None,
    *,
    config: Optional[TimguiConfig] = None,
) -> FrameState:
    cfg = get_config() if config is None else config
    return FrameState(surface=surface, colors=Colors.from_config(cfg), box_style=cfg.box.style)
