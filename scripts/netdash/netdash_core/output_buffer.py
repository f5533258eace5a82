"""Append-only output text shared between the reader thread and the renderer."""

from __future__ import annotations

import threading


class OutputBuffer:
    """Ordered text chunks guarded by a single lock.

    Writers only append, readers only copy out. The lock is never held while
    rendering: ``snapshot()`` joins the chunks and releases before returning.
    """

    def __init__(self, initial: str = "") -> None:
        self._lock = threading.Lock()
        self._chunks: list[str] = []
        if initial:
            self.append(initial)

    def append(self, text: str) -> None:
        if not text:
            return
        with self._lock:
            self._chunks.append(text)

    def snapshot(self) -> str:
        with self._lock:
            chunks = list(self._chunks)
        return "".join(chunks)
