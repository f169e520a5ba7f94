from timgui import config
from timgui.config import SessionConfig, TimguiConfig, configure, get_config, load_config
from timgui.screen import ATTR_BOLD, COLOR_GREEN, COLOR_YELLOW
from timgui.state import Colors, new_frame_state


def test_defaults_without_config_files():
    cfg = load_config()
    assert cfg == TimguiConfig()
    assert cfg.session.exit_keys == ("KEY_ESC",)
    assert cfg.box.style == "rounded"


def test_app_config_in_working_directory(tmp_path):
    (tmp_path / "timgui.toml").write_text(
        '[colors]\nselected = "green"\n'
        '[session]\nmax_redraw_passes = 4\nexit_keys = "q"\n'
        '[box]\nstyle = "double"\n'
    )

    cfg = load_config()
    assert cfg.colors.selected == "green"
    assert cfg.colors.cursor == "cyan bold"
    assert cfg.session == SessionConfig(max_redraw_passes=4, exit_keys=("q",))
    assert cfg.box.style == "double"


def test_app_config_overrides_global_config(tmp_path):
    global_cfg = tmp_path / "global.toml"
    global_cfg.write_text('[terminal]\nmouse = false\nescape_timeout_ms = 10\n[box]\nstyle = "ascii"\n')
    app_cfg = tmp_path / "app.toml"
    app_cfg.write_text('[box]\nstyle = "single"\n')

    cfg = load_config(global_config_path=global_cfg, app_config_path=app_cfg)
    assert cfg.terminal.mouse is False
    assert cfg.terminal.escape_timeout_ms == 10
    assert cfg.box.style == "single"


def test_invalid_numbers_keep_defaults(tmp_path):
    app_cfg = tmp_path / "app.toml"
    app_cfg.write_text('[session]\nmax_redraw_passes = "lots"\n')

    assert load_config(app_config_path=app_cfg).session.max_redraw_passes == 16


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TIMGUI_MOUSE", "0")
    monkeypatch.setenv("TIMGUI_ALT_SCREEN", "yes")
    monkeypatch.setenv("TIMGUI_MAX_REDRAW_PASSES", "5")
    monkeypatch.setenv("TIMGUI_BOX_STYLE", "ascii")

    cfg = load_config()
    assert cfg.terminal.mouse is False
    assert cfg.terminal.alt_screen is True
    assert cfg.session.max_redraw_passes == 5
    assert cfg.box.style == "ascii"


def test_env_override_with_bad_int_is_ignored(monkeypatch):
    monkeypatch.setenv("TIMGUI_MAX_REDRAW_PASSES", "many")
    assert load_config().session.max_redraw_passes == 16


def test_app_config_path_from_env(monkeypatch, tmp_path):
    path = tmp_path / "elsewhere.toml"
    path.write_text('[colors]\ncursor = "yellow"\n')
    monkeypatch.setenv("TIMGUI_APP_CONFIG", str(path))

    assert load_config().colors.cursor == "yellow"


def test_configure_replaces_cached_config(tmp_path):
    assert get_config() is get_config()

    path = tmp_path / "app.toml"
    path.write_text('[box]\nstyle = "double"\n')
    cfg = configure(app_config_path=path)

    assert cfg.box.style == "double"
    assert get_config() is cfg
    assert config._override_app_config_path == path


def test_colors_from_config(tmp_path):
    path = tmp_path / "app.toml"
    path.write_text('[colors]\nselected = "green"\ncursor = "yellow bright"\n')
    cfg = load_config(app_config_path=path)

    colors = Colors.from_config(cfg)
    assert colors.selected == COLOR_GREEN
    assert colors.cursor == COLOR_YELLOW | ATTR_BOLD

    state = new_frame_state(config=cfg)
    assert state.colors == colors
    assert state.surface is None
