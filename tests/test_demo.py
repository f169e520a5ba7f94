import pytest

from timgui import screen
from timgui.config import TimguiConfig
from timgui.demo import OTHER_DIR, DemoData, build_redraw
from timgui.input import KEY_DOWN, KEY_ENTER, KEY_RIGHT, KEY_SPACE, KeyEvent, MouseEvent
from timgui.screen import CellSurface
from timgui.session import Session


class ScriptedEvents:
    def __init__(self, events):
        self.events = list(events)

    def poll_event(self, timeout=None):
        return self.events.pop(0) if self.events else None


@pytest.fixture(autouse=True)
def painted(monkeypatch):
    out = []
    monkeypatch.setattr(screen, "write", out.append)
    return out


def run_demo(events):
    data = DemoData()
    session = Session(config=TimguiConfig(), surface=CellSurface(width=60, height=10), events=ScriptedEvents(events))
    session.run(build_redraw(data, session))
    return data, session


def test_keyboard_walkthrough():
    keys = [KEY_SPACE, KEY_RIGHT, KEY_DOWN, KEY_SPACE, KEY_RIGHT, KEY_ENTER, KEY_SPACE]
    data, session = run_demo([KeyEvent(k) for k in keys])

    assert data.run is True
    assert (data.tree, data.ls) == (True, False)
    assert data.selected_dir == 1
    assert data.command_line() == ["tree ~"]
    assert session.events.events == [KeyEvent(KEY_SPACE)]


def test_other_directory_with_mouse_and_typing():
    # Dirs box starts at column 16; its rows are 2.. and "Other:" is row 5.
    events = [MouseEvent(18, 5), MouseEvent(18, 6)] + [KeyEvent(None, ch) for ch in "/tmp"]
    data, _ = run_demo(events)

    assert data.selected_dir == OTHER_DIR
    assert data.other_dir == "/tmp"
    assert data.directory() == "/tmp"
    assert data.run is False
    assert data.command_line() == []


def test_demo_layout():
    data, session = run_demo([])
    rows = [session.surface.row_text(y) for y in range(10)]

    assert "Commands" in rows[1]
    assert "Dirs" in rows[1]
    assert "Run!" in rows[2]
    assert "❪●❫ /" in rows[2]
