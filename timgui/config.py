from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


_MOUSE_ENVVAR = "TIMGUI_MOUSE"
_ALT_SCREEN_ENVVAR = "TIMGUI_ALT_SCREEN"
_MAX_REDRAW_PASSES_ENVVAR = "TIMGUI_MAX_REDRAW_PASSES"
_BOX_STYLE_ENVVAR = "TIMGUI_BOX_STYLE"

_GLOBAL_CONFIG_ENVVAR = "TIMGUI_CONFIG"
_APP_CONFIG_ENVVAR = "TIMGUI_APP_CONFIG"


_override_global_config_path: Optional[Path] = None
_override_app_config_path: Optional[Path] = None


def _bool_from_env(var_name: str, default: bool) -> bool:
    raw = os.getenv(var_name)
    if raw is None:
        return default
    val = str(raw).strip().lower()
    return val in ("1", "true", "yes", "on")


def _int_from_env(var_name: str, default: int) -> int:
    raw = os.getenv(var_name)
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


@dataclass(frozen=True)
class ColorsConfig:
    default: str = "default"
    selected: str = "cyan"
    cursor: str = "cyan bold"


@dataclass(frozen=True)
class TerminalConfig:
    mouse: bool = True
    alt_screen: bool = True
    hide_cursor: bool = True
    escape_timeout_ms: int = 50


@dataclass(frozen=True)
class SessionConfig:
    max_redraw_passes: int = 16
    exit_keys: Tuple[str, ...] = ("KEY_ESC",)


@dataclass(frozen=True)
class BoxConfig:
    style: str = "rounded"


@dataclass(frozen=True)
class TimguiConfig:
    colors: ColorsConfig = field(default_factory=ColorsConfig)
    terminal: TerminalConfig = field(default_factory=TerminalConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    box: BoxConfig = field(default_factory=BoxConfig)


def _default_global_config_path() -> Optional[Path]:
    p = os.getenv(_GLOBAL_CONFIG_ENVVAR)
    if p:
        return Path(p)

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "timgui" / "config.toml"

    home = Path.home()
    return home / ".config" / "timgui" / "config.toml"


def _default_app_config_path() -> Optional[Path]:
    p = os.getenv(_APP_CONFIG_ENVVAR)
    if p:
        return Path(p)

    cwd_cfg = Path.cwd() / "timgui.toml"
    if cwd_cfg.exists() and cwd_cfg.is_file():
        return cwd_cfg

    return None


def _load_toml(path: Path) -> dict:
    try:
        import tomllib  # py3.11+
    except ModuleNotFoundError as e:
        raise RuntimeError("tomllib is required to read timgui TOML config") from e

    raw = path.read_bytes()
    data = tomllib.loads(raw.decode("utf-8", errors="replace"))
    if not isinstance(data, dict):
        return {}
    logger.debug("loaded config from %s", path)
    return data


def _config_from_dict(base: TimguiConfig, data: dict) -> TimguiConfig:
    if not isinstance(data, dict):
        return base

    colors = base.colors
    colors_data = data.get("colors")
    if isinstance(colors_data, dict):
        for k in ("default", "selected", "cursor"):
            if k in colors_data:
                v = colors_data.get(k)
                colors = replace(colors, **{k: "" if v is None else str(v)})

    terminal = base.terminal
    terminal_data = data.get("terminal")
    if isinstance(terminal_data, dict):
        for k in ("mouse", "alt_screen", "hide_cursor"):
            if k in terminal_data:
                terminal = replace(terminal, **{k: bool(terminal_data.get(k))})
        if "escape_timeout_ms" in terminal_data:
            try:
                terminal = replace(terminal, escape_timeout_ms=int(terminal_data.get("escape_timeout_ms")))
            except (TypeError, ValueError):
                pass

    session = base.session
    session_data = data.get("session")
    if isinstance(session_data, dict):
        if "max_redraw_passes" in session_data:
            try:
                session = replace(session, max_redraw_passes=int(session_data.get("max_redraw_passes")))
            except (TypeError, ValueError):
                pass
        if "exit_keys" in session_data:
            v = session_data.get("exit_keys")
            if isinstance(v, str):
                v = [v]
            if isinstance(v, (list, tuple)):
                session = replace(session, exit_keys=tuple(str(x) for x in v))

    box = base.box
    box_data = data.get("box")
    if isinstance(box_data, dict) and "style" in box_data:
        v = box_data.get("style")
        box = replace(box, style="rounded" if v is None else str(v))

    return replace(base, colors=colors, terminal=terminal, session=session, box=box)


def _apply_env_overrides(cfg: TimguiConfig) -> TimguiConfig:
    terminal = cfg.terminal
    session = cfg.session
    box = cfg.box

    if os.getenv(_MOUSE_ENVVAR) is not None:
        terminal = replace(terminal, mouse=_bool_from_env(_MOUSE_ENVVAR, terminal.mouse))
    if os.getenv(_ALT_SCREEN_ENVVAR) is not None:
        terminal = replace(terminal, alt_screen=_bool_from_env(_ALT_SCREEN_ENVVAR, terminal.alt_screen))

    if os.getenv(_MAX_REDRAW_PASSES_ENVVAR) is not None:
        session = replace(
            session,
            max_redraw_passes=_int_from_env(_MAX_REDRAW_PASSES_ENVVAR, session.max_redraw_passes),
        )

    if os.getenv(_BOX_STYLE_ENVVAR):
        box = replace(box, style=str(os.getenv(_BOX_STYLE_ENVVAR)))

    return replace(cfg, terminal=terminal, session=session, box=box)


def load_config(
    *,
    global_config_path: Optional[str | Path] = None,
    app_config_path: Optional[str | Path] = None,
) -> TimguiConfig:
    cfg = TimguiConfig()

    gpath = Path(global_config_path) if global_config_path is not None else _default_global_config_path()
    if gpath is not None and gpath.exists() and gpath.is_file():
        cfg = _config_from_dict(cfg, _load_toml(gpath))

    apath = Path(app_config_path) if app_config_path is not None else _default_app_config_path()
    if apath is not None and apath.exists() and apath.is_file():
        cfg = _config_from_dict(cfg, _load_toml(apath))

    cfg = _apply_env_overrides(cfg)
    return cfg


def configure(
    *,
    global_config_path: Optional[str | Path] = None,
    app_config_path: Optional[str | Path] = None,
) -> TimguiConfig:
    global _override_global_config_path
    global _override_app_config_path

    _override_global_config_path = Path(global_config_path) if global_config_path is not None else None
    _override_app_config_path = Path(app_config_path) if app_config_path is not None else None

    get_config.cache_clear()
    return get_config()


@lru_cache(maxsize=1)
def get_config() -> TimguiConfig:
    return load_config(
        global_config_path=_override_global_config_path,
        app_config_path=_override_app_config_path,
    )
