"""
Box elements.

Each element is rebuilt by the caller every frame and edits caller data
through a binding (see ``timgui.bindings``). ``draw()`` both paints the
element and applies at most one change to its binding for the pass, with
a mouse click taking precedence over space, and space over the element's
own key.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .boxes import get_box_style, write_text
from .input import KEY_BACKSPACE, KEY_DELETE, KEY_ENTER, KEY_SPACE

if TYPE_CHECKING:
    from .state import FrameState


class Element:
    """Base class of the five element kinds.

    Attributes:
        selectable: Whether the element takes a focus slot in its box
    """

    selectable: bool = True

    def required_width(self) -> int:
        raise NotImplementedError

    def draw(
        self,
        state: "FrameState",
        x: int,
        y: int,
        width: int,
        box_selected: bool,
        selected: bool,
        clicked: bool,
    ) -> None:
        """
        Paint the element and react to this pass's input.

        Args:
            state: Frame state (input, colors, surface)
            x: Column of the element's first cell
            y: Row of the element
            width: Content width shared by every element of the box
            box_selected: The enclosing box holds focus
            selected: This element holds focus
            clicked: A mouse click on this element selected it this pass
        """
        raise NotImplementedError


@dataclass
class TextEdit(Element):
    text: Any

    def required_width(self) -> int:
        return len(self.text.get()) + 2

    def _edit(self, state: "FrameState") -> bool:
        value = self.text.get()
        if state.key_down(KEY_SPACE):
            self.text.set(value + " ")
            return True
        ch = state.take_text()
        if ch is not None:
            self.text.set(value + ch)
            return True
        if value and state.key_down(KEY_BACKSPACE, KEY_DELETE):
            self.text.set(value[:-1])
            return True
        return False

    def draw(
        self,
        state: "FrameState",
        x: int,
        y: int,
        width: int,
        box_selected: bool,
        selected: bool,
        clicked: bool,
    ) -> None:
        # A click only moves focus here; typing starts with the next event.
        if selected and not clicked and self._edit(state):
            state.needs_redraw = True

        fg = state.colors.cursor if selected else state.colors.default
        bg = state.colors.default
        surface = state.surface
        if surface is None:
            return

        value = self.text.get()
        surface.set_cell(x, y, "[", fg, bg)
        surface.set_cell(x + width, y, "]", fg, bg)
        write_text(surface, x + 1, y, value, fg, bg)
        for dx in range(1 + len(value), width):
            surface.set_cell(x + dx, y, "․", state.colors.default, bg)


@dataclass
class RadioOption(Element):
    option_id: Any
    value: Any
    text: str = ""

    def required_width(self) -> int:
        return len(self.text) + 4

    def draw(
        self,
        state: "FrameState",
        x: int,
        y: int,
        width: int,
        box_selected: bool,
        selected: bool,
        clicked: bool,
    ) -> None:
        if selected and (clicked or state.key_down(KEY_SPACE)):
            self.value.set(self.option_id)
            state.needs_redraw = True

        fg = state.colors.cursor if selected else state.colors.default
        bg = state.colors.default
        write_text(state.surface, x, y, "❪ ❫ " + self.text, fg, bg)
        if state.surface is not None and self.value.get() == self.option_id:
            state.surface.set_cell(x + 1, y, "●", fg, bg)


@dataclass
class CheckBox(Element):
    value: Any
    text: str = ""

    def required_width(self) -> int:
        return len(self.text) + 4

    def draw(
        self,
        state: "FrameState",
        x: int,
        y: int,
        width: int,
        box_selected: bool,
        selected: bool,
        clicked: bool,
    ) -> None:
        if selected and (clicked or state.key_down(KEY_SPACE)):
            self.value.set(not self.value.get())

        fg = state.colors.cursor if selected else state.colors.default
        brackets = "[✖] " if self.value.get() else "[ ] "
        write_text(state.surface, x, y, brackets + self.text, fg, state.colors.default)


@dataclass
class Button(Element):
    text: str
    callback: Callable[[], Any]

    def required_width(self) -> int:
        return len(self.text)

    def draw(
        self,
        state: "FrameState",
        x: int,
        y: int,
        width: int,
        box_selected: bool,
        selected: bool,
        clicked: bool,
    ) -> None:
        bg = state.colors.default
        if selected:
            if clicked or state.key_down(KEY_ENTER, KEY_SPACE):
                self.callback()
            bg = state.colors.selected
        write_text(state.surface, x + (width - len(self.text)) // 2, y, self.text, state.colors.default, bg)


@dataclass
class Separator(Element):
    text: str = ""

    selectable = False

    def required_width(self) -> int:
        return len(self.text)

    def draw(
        self,
        state: "FrameState",
        x: int,
        y: int,
        width: int,
        box_selected: bool,
        selected: bool,
        clicked: bool,
    ) -> None:
        surface = state.surface
        if surface is None:
            return
        fg = state.colors.selected if box_selected else state.colors.default
        bg = state.colors.default
        st = get_box_style(state.box_style)
        for dx in range(-1, width + 1):
            surface.set_cell(x + dx, y, st.h, fg, bg)
        surface.set_cell(x - 2, y, st.lt, fg, bg)
        surface.set_cell(x + width + 1, y, st.rt, fg, bg)
        write_text(surface, x + (width - len(self.text)) // 2, y, self.text, fg, bg)


ELEMENT_TYPES = (TextEdit, RadioOption, CheckBox, Button, Separator)
