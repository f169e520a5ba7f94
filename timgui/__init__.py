"""
timgui - an immediate-mode widget toolkit for the terminal.

Every frame the caller redeclares the whole UI as boxes of elements; the
toolkit draws them onto a cell surface and turns keyboard and mouse input
into changes of the caller's data and of the focused element.

This library provides:
- Frame state tracking focus across frames
- Box composition with arrow-key and mouse focus handling
- Text edit, radio option, check box, button and separator elements
- A cell surface that paints only changed rows
- Raw mode terminal input with mouse reporting
"""

__version__ = "0.1.0"
__author__ = "timgui contributors"

from .bindings import Ref, AttrRef, ItemRef
from .boxes import BoxStyle, draw_box, get_box_style, write_text
from .compose import compose_box, box_size
from .config import TimguiConfig, get_config, configure, load_config
from .elements import Element, TextEdit, RadioOption, CheckBox, Button, Separator, ELEMENT_TYPES
from .input import (
    KEY_ENTER, KEY_ESC, KEY_BACKSPACE, KEY_DELETE, KEY_SPACE, KEY_TAB,
    KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT,
    MOUSE_LEFT, MOUSE_MIDDLE, MOUSE_RIGHT, MOUSE_RELEASE,
    KeyEvent, MouseEvent, OtherEvent, Event,
    TerminalInput, decode_event, parse_event, terminal_size,
)
from .screen import (
    Cell, CellSurface,
    COLOR_DEFAULT, COLOR_BLACK, COLOR_RED, COLOR_GREEN, COLOR_YELLOW,
    COLOR_BLUE, COLOR_MAGENTA, COLOR_CYAN, COLOR_WHITE,
    ATTR_BOLD, ATTR_UNDERLINE, ATTR_REVERSE,
    color_from_desc, sgr_for,
)
from .session import Session
from .state import Colors, FrameState, new_frame_state

__all__ = [
    "Ref", "AttrRef", "ItemRef",
    "BoxStyle", "draw_box", "get_box_style", "write_text",
    "compose_box", "box_size",
    "TimguiConfig", "get_config", "configure", "load_config",
    "Element", "TextEdit", "RadioOption", "CheckBox", "Button", "Separator", "ELEMENT_TYPES",
    "KEY_ENTER", "KEY_ESC", "KEY_BACKSPACE", "KEY_DELETE", "KEY_SPACE", "KEY_TAB",
    "KEY_UP", "KEY_DOWN", "KEY_LEFT", "KEY_RIGHT",
    "MOUSE_LEFT", "MOUSE_MIDDLE", "MOUSE_RIGHT", "MOUSE_RELEASE",
    "KeyEvent", "MouseEvent", "OtherEvent", "Event",
    "TerminalInput", "decode_event", "parse_event", "terminal_size",
    "Cell", "CellSurface",
    "COLOR_DEFAULT", "COLOR_BLACK", "COLOR_RED", "COLOR_GREEN", "COLOR_YELLOW",
    "COLOR_BLUE", "COLOR_MAGENTA", "COLOR_CYAN", "COLOR_WHITE",
    "ATTR_BOLD", "ATTR_UNDERLINE", "ATTR_REVERSE",
    "color_from_desc", "sgr_for",
    "Session",
    "Colors",
    "FrameState",
    "new_frame_state",
]
