"""Panel rendering helpers."""

from __future__ import annotations

from rich.panel import Panel
from rich.text import Text

FOCUSED_BORDER = "magenta"
BLURRED_BORDER = "cyan"

STATUS_STYLE = {
    "connected": "green",
    "connecting": "yellow",
    "write-only": "yellow",
    "disconnected": "red",
}


def border_for(focused: bool) -> str:
    return FOCUSED_BORDER if focused else BLURRED_BORDER


def empty_text(message: str = "No items") -> Text:
    return Text(message, style="dim")


def bordered(title: str, body, focused: bool) -> Panel:
    return Panel(
        body,
        title=f"[bold]{title}[/bold]",
        title_align="left",
        border_style=border_for(focused),
        padding=(0, 0),
    )
