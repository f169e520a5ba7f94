"""
Demo program: pick a command and a directory, then press Run!

Usage:
    python -m timgui [--log FILE] [--debug] [--config FILE]

Arrow keys move between elements and boxes, space toggles / selects,
enter presses the button, the mouse clicks anything, Esc quits.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import List, Optional

from .bindings import AttrRef
from .compose import compose_box
from .config import configure
from .elements import Button, CheckBox, RadioOption, TextEdit
from .session import Session
from .state import FrameState

logger = logging.getLogger(__name__)

OTHER_DIR = 5


@dataclass
class DemoData:
    tree: bool = False
    ls: bool = False
    selected_dir: int = 0
    other_dir: str = ""
    run: bool = False

    def directory(self) -> str:
        return {0: "/", 1: "~", 2: "~/Downloads"}.get(self.selected_dir, self.other_dir)

    def command_line(self) -> List[str]:
        commands = [name for name, on in (("tree", self.tree), ("ls", self.ls)) if on]
        return [f"{cmd} {self.directory()}" for cmd in commands]


def build_redraw(data: DemoData, session: Session):
    def on_run() -> None:
        data.run = True
        session.stop()

    def redraw(state: FrameState) -> None:
        compose_box(state, 2, 1, "Commands", [
            CheckBox(AttrRef(data, "tree"), "tree"),
            CheckBox(AttrRef(data, "ls"), "ls"),
        ])

        selected = AttrRef(data, "selected_dir")
        compose_box(state, 16, 1, "Dirs", [
            RadioOption(0, selected, "/"),
            RadioOption(1, selected, "~"),
            RadioOption(2, selected, "~/Downloads"),
            RadioOption(OTHER_DIR, selected, "Other:"),
            TextEdit(AttrRef(data, "other_dir")),
        ])

        compose_box(state, 38, 1, "", [
            Button("Run!", on_run),
        ])

    return redraw


def setup_logging(log_file: Optional[str], debug: bool) -> None:
    # stdout belongs to the UI, so logging only ever goes to a file.
    if not log_file:
        return
    logging.basicConfig(
        filename=log_file,
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="timgui", description="timgui demo")
    parser.add_argument("--log", metavar="FILE", help="write log output to FILE")
    parser.add_argument("--debug", action="store_true", help="log at debug level")
    parser.add_argument("--config", metavar="FILE", help="application config file (TOML)")
    args = parser.parse_args(argv)

    setup_logging(args.log, args.debug)
    cfg = configure(app_config_path=args.config) if args.config else None

    data = DemoData()
    with Session(config=cfg) as session:
        session.run(build_redraw(data, session))

    if data.run:
        for line in data.command_line():
            print(line)
    logger.info("demo finished (run=%s)", data.run)
    return 0
