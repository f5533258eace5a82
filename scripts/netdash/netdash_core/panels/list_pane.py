"""List pane renderer."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from netdash_core.models import ListPane, PaneKind
from netdash_core.panels import bordered, empty_text

CURSOR_MARK = ">"


def row_text(pane: ListPane, index: int) -> str:
    item = pane.items[index]
    cursor = CURSOR_MARK if pane.focused and index == pane.cursor else " "
    if pane.kind is PaneKind.MENU:
        checkbox = "[x]" if item.selected else "[ ]"
        return f"{cursor} {checkbox} {item.label}"
    return f"{cursor} {item.label}"


def rows(pane: ListPane) -> list[str]:
    return [row_text(pane, index) for index in pane.visible_range()]


def render(pane: ListPane) -> Panel:
    if not pane.items:
        body = empty_text()
    else:
        body = Text(no_wrap=True, overflow="ellipsis")
        for n, index in enumerate(pane.visible_range()):
            if n:
                body.append("\n")
            style = "bold" if pane.focused and index == pane.cursor else ""
            body.append(row_text(pane, index), style=style)
    return bordered(escape(pane.title), body, pane.focused)
