import pytest

from timgui import config
from timgui.screen import CellSurface
from timgui.state import FrameState


_ENV_VARS = (
    "TIMGUI_CONFIG",
    "TIMGUI_APP_CONFIG",
    "TIMGUI_MOUSE",
    "TIMGUI_ALT_SCREEN",
    "TIMGUI_MAX_REDRAW_PASSES",
    "TIMGUI_BOX_STYLE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "_override_global_config_path", None)
    monkeypatch.setattr(config, "_override_app_config_path", None)
    config.get_config.cache_clear()
    yield
    config.get_config.cache_clear()


@pytest.fixture
def surface():
    return CellSurface(width=60, height=12)


@pytest.fixture
def state(surface):
    return FrameState(surface=surface)
