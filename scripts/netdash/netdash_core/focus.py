"""Single-owner keyboard focus across the list panes and the output pane."""

from __future__ import annotations

from netdash_core.models import ListPane, OutputViewport


class FocusController:
    """Cycles focus through ``panes[0..N-1]`` then the output pane (index N)."""

    def __init__(self, panes: list[ListPane], output: OutputViewport, start: int = 0) -> None:
        self.panes = panes
        self.output = output
        self.focus_index = start % (len(panes) + 1)
        for pane in self.panes:
            pane.focused = False
        self.output.focused = False
        self._set_flag(self.focus_index, True)

    @property
    def output_focused(self) -> bool:
        return self.focus_index == len(self.panes)

    def current(self) -> ListPane | None:
        """Focused list pane, or None while the output pane holds focus."""
        if self.output_focused:
            return None
        return self.panes[self.focus_index]

    def advance(self) -> None:
        previous = self.focus_index
        self.focus_index = (previous + 1) % (len(self.panes) + 1)
        self._set_flag(previous, False)
        self._set_flag(self.focus_index, True)

    def _set_flag(self, index: int, value: bool) -> None:
        if index < len(self.panes):
            self.panes[index].focused = value
        else:
            self.output.focused = value
