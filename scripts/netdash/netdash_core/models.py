"""Shared state contracts for panes, the output viewport and input events."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

NAV_PAGE_FALLBACK = 5


class PaneKind(str, Enum):
    MENU = "menu"
    COMMAND = "command"


@dataclass
class ListItem:
    label: str
    selectable: bool = True
    selected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "selectable": self.selectable,
            "selected": self.selected,
        }


@dataclass
class ListPane:
    """A bordered, focusable list of labelled items.

    Menu panes carry a checkbox per item; command panes are one-shot actions.
    The pane never decides whether it is focused, the FocusController does.
    """

    title: str
    items: list[ListItem] = field(default_factory=list)
    kind: PaneKind = PaneKind.MENU
    cursor: int = 0
    focused: bool = False
    scroll: int = 0
    view_height: int = 0

    @classmethod
    def from_labels(cls, title: str, labels: list[str], kind: PaneKind = PaneKind.MENU) -> "ListPane":
        selectable = kind is PaneKind.MENU
        return cls(title=title, items=[ListItem(label, selectable=selectable) for label in labels], kind=kind)

    @property
    def is_menu(self) -> bool:
        return self.kind is PaneKind.MENU

    def move_cursor(self, direction: int) -> None:
        if not self.items:
            self.cursor = 0
            return
        self.cursor = max(0, min(len(self.items) - 1, self.cursor + direction))
        self._keep_cursor_visible()

    def move_to(self, index: int) -> None:
        self.move_cursor(index - self.cursor)

    def toggle_selection(self) -> bool:
        if not (self.is_menu and self.focused and self.items):
            return False
        item = self.items[self.cursor]
        if not item.selectable:
            return False
        item.selected = not item.selected
        return True

    def current_label(self) -> str:
        if not self.items:
            return ""
        return self.items[self.cursor].label

    def selected_labels(self) -> list[str]:
        return [item.label for item in self.items if item.selected]

    def set_view_height(self, height: int) -> None:
        self.view_height = max(0, height)
        self._keep_cursor_visible()

    def handle_key(self, key: str) -> None:
        page = self.view_height or NAV_PAGE_FALLBACK
        if key in ("up", "k"):
            self.move_cursor(-1)
        elif key in ("down", "j"):
            self.move_cursor(1)
        elif key in ("home", "g"):
            self.move_to(0)
        elif key in ("end", "G"):
            self.move_to(len(self.items) - 1)
        elif key == "pgup":
            self.move_cursor(-page)
        elif key == "pgdown":
            self.move_cursor(page)
        # Anything else is absorbed without a state change.

    def visible_range(self) -> range:
        if not self.view_height:
            return range(len(self.items))
        start = self.scroll
        return range(start, min(len(self.items), start + self.view_height))

    def _keep_cursor_visible(self) -> None:
        if not self.view_height or not self.items:
            self.scroll = 0
            return
        if self.cursor < self.scroll:
            self.scroll = self.cursor
        elif self.cursor >= self.scroll + self.view_height:
            self.scroll = self.cursor - self.view_height + 1
        self.scroll = max(0, min(self.scroll, max(0, len(self.items) - self.view_height)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "kind": self.kind.value,
            "cursor": self.cursor,
            "focused": self.focused,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class OutputViewport:
    """Scroll position of the output pane.

    With ``follow`` set the window stays pinned to the newest lines.
    """

    offset: int = 0
    follow: bool = True
    focused: bool = False

    def window(self, total_lines: int, height: int) -> tuple[int, int]:
        if height <= 0:
            return 0, 0
        max_offset = max(0, total_lines - height)
        start = max_offset if self.follow else min(self.offset, max_offset)
        return start, min(total_lines, start + height)

    def scroll(self, delta: int, total_lines: int, height: int) -> None:
        max_offset = max(0, total_lines - height)
        current = max_offset if self.follow else min(self.offset, max_offset)
        self.offset = max(0, min(max_offset, current + delta))
        self.follow = self.offset >= max_offset

    def handle_key(self, key: str, total_lines: int, height: int) -> None:
        page = max(1, height)
        if key in ("up", "k"):
            self.scroll(-1, total_lines, height)
        elif key in ("down", "j"):
            self.scroll(1, total_lines, height)
        elif key == "pgup":
            self.scroll(-page, total_lines, height)
        elif key == "pgdown":
            self.scroll(page, total_lines, height)
        elif key in ("home", "g"):
            self.scroll(-total_lines, total_lines, height)
        elif key in ("end", "G"):
            self.scroll(total_lines, total_lines, height)


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int
