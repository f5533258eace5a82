"""Top-level dashboard state machine: one input event in, one transition out."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from netdash_core.focus import FocusController
from netdash_core.layout import DEFAULT_HEIGHT, DEFAULT_WIDTH, DashboardLayout, compute_layout
from netdash_core.models import KeyEvent, ListPane, OutputViewport, ResizeEvent
from netdash_core.output_buffer import OutputBuffer

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "ctrl+c"})
FOCUS_KEY = "tab"
TOGGLE_KEY = "space"
CONFIRM_KEY = "enter"
NAV_KEYS = {"up": -1, "down": 1}


class CommandSink(Protocol):
    def send(self, text: str) -> bool: ...


@dataclass
class DashboardState:
    panes: list[ListPane]
    output: OutputViewport = field(default_factory=OutputViewport)
    exit_label: str = "Exit"
    running: bool = True
    focus: FocusController = field(init=False)
    layout: DashboardLayout = field(init=False)

    def __post_init__(self) -> None:
        self.focus = FocusController(self.panes, self.output)
        self.resize(DEFAULT_WIDTH, DEFAULT_HEIGHT)

    def resize(self, width: int, height: int) -> None:
        self.layout = compute_layout(width, height, len(self.panes))
        for pane, size in zip(self.panes, self.layout.panes):
            pane.set_view_height(size.inner_height)

    @property
    def output_height(self) -> int:
        return self.layout.output.inner_height

    def to_dict(self) -> dict:
        return {
            "focus_index": self.focus.focus_index,
            "output_focused": self.focus.output_focused,
            "running": self.running,
            "panes": [pane.to_dict() for pane in self.panes],
            "selected": {pane.title: pane.selected_labels() for pane in self.panes if pane.is_menu},
        }


class DashboardController:
    """Routes each event to focus, the focused pane, the output viewport or the session."""

    def __init__(self, state: DashboardState, session: CommandSink, buffer: OutputBuffer) -> None:
        self.state = state
        self.session = session
        self.buffer = buffer

    def dispatch(self, event: KeyEvent | ResizeEvent) -> bool:
        """Apply one event. Returns False once the dashboard should exit."""
        if not self.state.running:
            return False
        if isinstance(event, ResizeEvent):
            self.state.resize(event.width, event.height)
            return True

        key = event.key
        focused = self.state.focus.current()

        if key in QUIT_KEYS:
            self._terminate("quit key")
        elif key == FOCUS_KEY:
            self.state.focus.advance()
        elif key == TOGGLE_KEY and focused is not None:
            focused.toggle_selection()
            focused.handle_key(key)
        elif key in NAV_KEYS:
            if focused is not None:
                focused.move_cursor(NAV_KEYS[key])
            else:
                self._scroll_output(key)
        elif key == CONFIRM_KEY and focused is not None and not focused.is_menu:
            self._confirm(focused)
        elif focused is not None:
            focused.handle_key(key)
        else:
            self._scroll_output(key)
        return self.state.running

    def _confirm(self, pane: ListPane) -> None:
        label = pane.current_label()
        if not label:
            return
        if label == self.state.exit_label:
            self._terminate("exit command")
            return
        logger.info("dispatching command %r", label)
        self.session.send(label)

    def _scroll_output(self, key: str) -> None:
        total = len(self.buffer.snapshot().splitlines())
        self.state.output.handle_key(key, total, self.state.output_height)

    def _terminate(self, reason: str) -> None:
        logger.info("terminating: %s", reason)
        self.state.running = False
