"""Terminal input decoding: raw characters to key names."""

from __future__ import annotations

import codecs
import os
import select

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[5~": "pgup",
    "\x1b[6~": "pgdown",
    "\x1b[Z": "shift+tab",
}

SINGLE_KEYS = {
    "\t": "tab",
    "\r": "enter",
    "\n": "enter",
    " ": "space",
    "\x03": "ctrl+c",
    "\x7f": "backspace",
}

# Longest first so "\x1b[1~" wins over a bare "\x1b[".
_SEQUENCES = sorted(ESCAPE_SEQUENCES, key=len, reverse=True)


def decode_keys(data: str) -> list[str]:
    keys: list[str] = []
    i = 0
    while i < len(data):
        if data[i] == "\x1b":
            for seq in _SEQUENCES:
                if data.startswith(seq, i):
                    keys.append(ESCAPE_SEQUENCES[seq])
                    i += len(seq)
                    break
            else:
                keys.append("esc")
                i += 1
            continue
        ch = data[i]
        keys.append(SINGLE_KEYS.get(ch, ch))
        i += 1
    return keys


def split_pending(data: str) -> tuple[str, str]:
    """Split off a trailing escape sequence that may still be arriving."""
    start = data.rfind("\x1b")
    if start < 0:
        return data, ""
    tail = data[start:]
    if any(len(seq) > len(tail) and seq.startswith(tail) for seq in _SEQUENCES):
        return data[:start], tail
    return data, ""


class KeyReader:
    """Non-blocking key reads from fd using select (no tty.setraw).

    An escape sequence cut off by a read boundary is held for one more poll;
    if nothing follows it is decoded as typed (a lone ``esc``).
    """

    def __init__(self, fd: int, max_bytes: int = 64) -> None:
        self.fd = fd
        self.max_bytes = max_bytes
        self.pending = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="ignore")

    def _read(self) -> str:
        r, _, _ = select.select([self.fd], [], [], 0)
        if not r:
            return ""
        try:
            return self._decoder.decode(os.read(self.fd, self.max_bytes))
        except OSError:
            return ""

    def poll(self) -> list[str]:
        data = self._read()
        if not data:
            held, self.pending = self.pending, ""
            return decode_keys(held)
        ready, self.pending = split_pending(self.pending + data)
        return decode_keys(ready)
