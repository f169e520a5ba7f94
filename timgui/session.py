"""Interactive session runtime.

Ties the frame state, the cell surface and the terminal event source
together and runs the poll / compose / flush / present loop.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Protocol

from .config import TimguiConfig, get_config
from .input import Event, KeyEvent, TerminalInput, key_from_name, terminal_size
from .screen import CellSurface
from .state import FrameState, new_frame_state
from .utils import clear_output_fd, set_output_fd

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    def poll_event(self, timeout: Optional[float] = None) -> Optional[Event]:
        ...


Redraw = Callable[[FrameState], None]


class Session:
    """
    One interactive run of an immediate-mode UI.

    Example:
        >>> def redraw(state):
        ...     compose_box(state, 2, 1, "Commands", [CheckBox(tree, "tree")])
        >>> with Session() as session:
        ...     session.run(redraw)
    """

    def __init__(
        self,
        *,
        config: Optional[TimguiConfig] = None,
        surface: Optional[CellSurface] = None,
        events: Optional[EventSource] = None,
        exit_keys: Optional[Iterable[str]] = None,
        output_fd: Optional[int] = None,
    ):
        """
        Initialize the session.

        Args:
            config: Configuration (default: ``get_config()``)
            surface: Cell surface to draw on (default: sized to the terminal)
            events: Event source (default: a ``TerminalInput`` opened on enter)
            exit_keys: Keys that end ``run()`` (default: from config)
            output_fd: File descriptor terminal output goes to while the
                session is entered (default: stdout)
        """
        self.config = get_config() if config is None else config
        if surface is None:
            cols, rows = terminal_size()
            surface = CellSurface(width=cols, height=rows)
        self.surface = surface
        self.state = new_frame_state(surface, config=self.config)

        if exit_keys is None:
            exit_keys = [key_from_name(k) for k in self.config.session.exit_keys]
        self.exit_keys = {k for k in exit_keys if k}

        self.output_fd = output_fd
        self._own_input = events is None
        self._terminal: Optional[TerminalInput] = None
        self.events: Optional[EventSource] = events
        self._running = False

    def __enter__(self):
        if self.output_fd is not None:
            set_output_fd(self.output_fd)
        if self._own_input:
            term = self.config.terminal
            self._terminal = TerminalInput(
                mouse=term.mouse,
                alt_screen=term.alt_screen,
                hide_cursor=term.hide_cursor,
                escape_timeout=max(0, term.escape_timeout_ms) / 1000.0,
            )
            self._terminal.__enter__()
            self.events = self._terminal
            self.surface.invalidate()
            logger.debug("terminal session started (%dx%d)", self.surface.width, self.surface.height)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if self._terminal is not None:
                try:
                    self._terminal.__exit__(exc_type, exc_val, exc_tb)
                finally:
                    self._terminal = None
                    self.events = None
                logger.debug("terminal session closed")
        finally:
            if self.output_fd is not None:
                clear_output_fd()
        return False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """End ``run()`` once the current frame has been presented."""
        self._running = False

    def _sync_size(self) -> None:
        if not self._own_input:
            return
        cols, rows = terminal_size()
        if (cols, rows) != (self.surface.width, self.surface.height):
            logger.debug("terminal resized to %dx%d", cols, rows)
            self.surface.resize(cols, rows)

    def frame(self, redraw: Redraw) -> int:
        """
        Compose one frame, repeating the passes until focus settles.

        Args:
            redraw: Callback declaring every box of the UI

        Returns:
            Number of passes run
        """
        max_passes = max(1, int(self.config.session.max_redraw_passes))
        passes = 0
        while True:
            self.surface.clear(self.state.colors.default, self.state.colors.default)
            redraw(self.state)
            passes += 1
            if not self.state.flush():
                break
            if passes >= max_passes:
                logger.warning("focus did not settle after %d redraw passes", passes)
                break

        self.surface.present()
        return passes

    def handle_event(self, event: Event, redraw: Redraw) -> bool:
        """Feed one event through a frame. Returns False for an exit key."""
        if isinstance(event, KeyEvent) and (event.key in self.exit_keys or event.ch in self.exit_keys):
            return False
        self.state.register_event(event)
        self._sync_size()
        self.frame(redraw)
        return True

    def run(self, redraw: Redraw) -> None:
        """
        Run the UI until an exit key, ``stop()`` or end of input.

        Exceptions raised by ``redraw`` or by button callbacks propagate.
        """
        if self.events is None:
            raise RuntimeError("Session has no event source. Use it as a context manager or pass events=...")

        self._running = True
        self.frame(redraw)
        try:
            while self._running:
                event = self.events.poll_event()
                if event is None:
                    break
                if not self.handle_event(event, redraw):
                    break
        finally:
            self._running = False
