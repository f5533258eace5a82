"""Output pane renderer."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

from netdash_core.models import OutputViewport
from netdash_core.panels import STATUS_STYLE, bordered


def visible_lines(text: str, viewport: OutputViewport, height: int) -> list[str]:
    lines = text.splitlines()
    start, end = viewport.window(len(lines), height)
    return lines[start:end]


def render(text: str, viewport: OutputViewport, height: int, status: str = "") -> Panel:
    # Raw peer output; built as plain Text so brackets are never read as markup.
    body = Text("\n".join(visible_lines(text, viewport, height)), overflow="ellipsis", no_wrap=True)
    title = "Output"
    if status:
        title += f" [{STATUS_STYLE.get(status, 'dim')}]({status})[/]"
    return bordered(title, body, viewport.focused)
