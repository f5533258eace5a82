"""Deterministic pane geometry for a given terminal size."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
BORDER = 2


@dataclass(frozen=True)
class PaneSize:
    width: int
    height: int

    @property
    def inner_width(self) -> int:
        return max(0, self.width - BORDER)

    @property
    def inner_height(self) -> int:
        return max(0, self.height - BORDER)


@dataclass(frozen=True)
class DashboardLayout:
    width: int
    height: int
    panes: tuple[PaneSize, ...]
    output: PaneSize

    @property
    def top_height(self) -> int:
        return self.panes[0].height if self.panes else 0


def compute_layout(width: int, height: int, pane_count: int) -> DashboardLayout:
    """List panes split the top half evenly; the output pane takes the rest.

    Leftover columns from the integer split go to the right-most pane so the
    row always spans the full width.
    """
    width = max(0, int(width))
    height = max(0, int(height))
    if pane_count <= 0:
        return DashboardLayout(width, height, (), PaneSize(width, height))

    top_height = height // 2
    base = width // pane_count
    widths = [base] * pane_count
    widths[-1] += width - base * pane_count
    panes = tuple(PaneSize(w, top_height) for w in widths)
    return DashboardLayout(width, height, panes, PaneSize(width, height - top_height))
