"""Frame rendering: pane state plus an output snapshot to a rich layout."""

from __future__ import annotations

import io

from rich.console import Console
from rich.layout import Layout

from netdash_core.controller import DashboardState
from netdash_core.output_buffer import OutputBuffer
from netdash_core.panels.list_pane import render as render_list_pane
from netdash_core.panels.output import render as render_output


def render_frame(state: DashboardState, output_text: str, status: str = "") -> Layout:
    """Pure: the same state, text and status always produce the same layout.

    List panes sit side by side in the top half; the output pane spans the
    full width underneath.
    """
    dims = state.layout
    output = render_output(output_text, state.output, dims.output.inner_height, status)

    root = Layout(name="root")
    if not state.panes:
        root.update(output)
        return root

    root.split_column(
        Layout(name="top", size=dims.top_height),
        Layout(output, name="output", size=dims.output.height),
    )
    root["top"].split_row(
        *[
            Layout(render_list_pane(pane), name=f"pane-{index}", size=size.width)
            for index, (pane, size) in enumerate(zip(state.panes, dims.panes))
        ]
    )
    return root


def render_dashboard(state: DashboardState, buffer: OutputBuffer, status: str = "") -> Layout:
    # snapshot() holds the buffer lock only for the copy.
    return render_frame(state, buffer.snapshot(), status)


def frame_to_text(renderable, width: int, height: int) -> str:
    console = Console(
        file=io.StringIO(),
        width=width,
        height=height,
        color_system=None,
        force_terminal=False,
        legacy_windows=False,
    )
    console.print(renderable)
    return console.file.getvalue()
