"""
Box composition: layout, focus movement and per-element dispatch.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .boxes import draw_box
from .elements import ELEMENT_TYPES, Element
from .input import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP
from .state import FrameState


def _clamp_focus_elem(focus_elem: int, selectable_count: int) -> int:
    if selectable_count <= 0:
        return -1
    return max(0, min(focus_elem, selectable_count - 1))


def _move_focus(state: FrameState, selectable_count: int) -> None:
    if state.key_down(KEY_UP) and state.focus_elem > 0:
        state.focus_elem -= 1

    if state.key_down(KEY_DOWN):
        state.focus_elem += 1

    state.focus_elem = _clamp_focus_elem(state.focus_elem, selectable_count)

    # Left/right change which box is current for the rest of this pass, so
    # the key is removed before a later box can act on it again.
    if state.key_down(KEY_LEFT) and state.focus_box > 0:
        state.focus_box -= 1
        state.consume_key(KEY_LEFT)
        state.needs_redraw = True

    if state.key_down(KEY_RIGHT):
        state.focus_box += 1
        state.consume_key(KEY_RIGHT)
        state.needs_redraw = True


def box_size(title: str, elements: Sequence[Element]) -> Tuple[int, int]:
    """Return ``(width, height)`` of the box frame ``compose_box`` would draw."""
    max_width = max([len(title)] + [e.required_width() for e in elements])
    return (max_width + 4, len(elements) + 2)


def compose_box(
    state: FrameState,
    x: int,
    y: int,
    title: str,
    elements: Sequence[Element],
) -> None:
    """
    Declare one box for the current pass.

    Draws the box at ``(x, y)`` with its elements one per row, moves focus in
    response to arrow keys when this box holds focus, hands a pending mouse
    click to the selectable element under it, and lets each element react to
    the pass's input.

    Args:
        state: Session frame state
        x: Column of the box's left border
        y: Row of the box's top border
        title: Text centred on the top border
        elements: Elements in display order
    """
    for e in elements:
        if not isinstance(e, ELEMENT_TYPES):
            raise TypeError(f"compose_box() expects one of the element kinds, got {type(e).__name__}")

    # Only this box's elements may claim the click; it is put back for later
    # boxes if none of them does.
    click: Optional[Tuple[int, int]] = state.pending_click
    state.pending_click = None
    click_consumed = False

    max_width = max([len(title)] + [e.required_width() for e in elements])
    selectable_count = sum(1 for e in elements if e.selectable)

    box_id = state.boxes_seen
    if state.focus_box == box_id:
        _move_focus(state, selectable_count)

    box_selected = state.focus_box == box_id

    fg = state.colors.selected if box_selected else state.colors.default
    draw_box(
        state.surface,
        x,
        y,
        max_width + 4,
        len(elements) + 2,
        title,
        fg,
        state.colors.default,
        style=state.box_style,
    )

    elem_x = x + 2
    elem_index = -1
    for i, e in enumerate(elements):
        elem_y = y + 1 + i
        if e.selectable:
            elem_index += 1
        selected = box_selected and e.selectable and elem_index == state.focus_elem

        clicked = False
        if (
            click is not None
            and not click_consumed
            and e.selectable
            and click[1] == elem_y
            and x + 1 <= click[0] <= x + max_width + 2
        ):
            clicked = True
            click_consumed = True
            selected = True
            state.focus_box = box_id
            state.focus_elem = elem_index
            state.needs_redraw = True

        e.draw(state, elem_x, elem_y, max_width, box_selected, selected, clicked)

    if click is not None and not click_consumed:
        state.pending_click = click

    state.boxes_seen += 1
