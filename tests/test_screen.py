import pytest

from timgui import screen
from timgui.boxes import draw_box, get_box_style
from timgui.screen import (
    ATTR_BOLD,
    ATTR_REVERSE,
    ATTR_UNDERLINE,
    COLOR_BLUE,
    COLOR_CYAN,
    COLOR_DEFAULT,
    COLOR_RED,
    CellSurface,
    color_from_desc,
    sgr_for,
)


@pytest.fixture
def painted(monkeypatch):
    out = []
    monkeypatch.setattr(screen, "write", out.append)
    return out


@pytest.mark.parametrize(
    "desc, value",
    [
        ("cyan", COLOR_CYAN),
        ("cyan bold", COLOR_CYAN | ATTR_BOLD),
        ("BRIGHT red", COLOR_RED | ATTR_BOLD),
        ("red+underline", COLOR_RED | ATTR_UNDERLINE),
        ("blue cyan", COLOR_BLUE),
        ("sparkly", COLOR_DEFAULT),
        ("", COLOR_DEFAULT),
        ("reverse", COLOR_DEFAULT | ATTR_REVERSE),
    ],
)
def test_color_from_desc(desc, value):
    assert color_from_desc(desc) == value


def test_sgr_for():
    assert sgr_for(COLOR_DEFAULT, COLOR_DEFAULT) == "\x1b[0m"
    assert sgr_for(COLOR_CYAN | ATTR_BOLD, COLOR_BLUE) == "\x1b[0;1;36;44m"
    assert sgr_for(COLOR_RED | ATTR_UNDERLINE, COLOR_DEFAULT) == "\x1b[0;4;31m"


def test_writes_outside_surface_are_dropped():
    s = CellSurface(width=5, height=2)
    s.write_text(3, 0, "abcdef")
    s.write_text(-2, 1, "xyz")
    s.set_cell(0, 5, "q")

    assert s.row_text(0) == "   ab"
    assert s.row_text(1) == "z    "
    assert s.row_text(5) == ""
    assert s.get_cell(9, 9).ch == " "


def test_set_cell_keeps_colors():
    s = CellSurface(width=3, height=1)
    s.set_cell(1, 0, "x", COLOR_CYAN, COLOR_BLUE)
    cell = s.get_cell(1, 0)
    assert (cell.ch, cell.fg, cell.bg) == ("x", COLOR_CYAN, COLOR_BLUE)


def test_present_paints_only_changed_rows(painted):
    s = CellSurface(width=4, height=3)
    assert s.present() == 3
    assert len(painted) == 1

    assert s.present() == 0
    assert len(painted) == 1

    s.write_text(0, 1, "hi")
    assert s.present() == 1
    assert "\x1b[2;1H" in painted[-1]
    assert "hi" in painted[-1]


def test_clear_then_identical_redraw_paints_nothing(painted):
    s = CellSurface(width=4, height=2)
    s.write_text(0, 0, "ab")
    s.present()

    s.clear()
    s.write_text(0, 0, "ab")
    assert s.present() == 0


def test_resize_forces_full_repaint(painted):
    s = CellSurface(width=4, height=2)
    s.present()
    s.resize(6, 3)

    assert (s.width, s.height) == (6, 3)
    assert s.present() == 3


def test_render_rows_switches_colors_once_per_run():
    s = CellSurface(width=3, height=1)
    s.write_text(0, 0, "abc", COLOR_CYAN)
    out = s.render_rows([0])
    assert out == "\x1b[1;1H\x1b[0;36mabc\x1b[0m"


def test_draw_box_with_centred_title():
    s = CellSurface(width=10, height=3)
    draw_box(s, 0, 0, 8, 3, "ab", COLOR_DEFAULT, COLOR_DEFAULT, style="single")

    assert s.row_text(0) == "┌──ab──┐  "
    assert s.row_text(1) == "│      │  "
    assert s.row_text(2) == "└──────┘  "


def test_unknown_box_style_falls_back_to_rounded():
    assert get_box_style("wavy") == get_box_style("rounded")
    assert get_box_style("ascii").tl == "+"
