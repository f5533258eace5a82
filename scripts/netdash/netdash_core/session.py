"""Command (write) and event (read) TCP channels feeding the output buffer."""

from __future__ import annotations

import logging
import socket
import threading
from typing import Callable

from netdash_core.output_buffer import OutputBuffer

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 5.0
CHANNEL_CLOSED_LINE = "[event channel closed]\n"

STATUS_CONNECTING = "connecting"
STATUS_CONNECTED = "connected"
STATUS_WRITE_ONLY = "write-only"
STATUS_DISCONNECTED = "disconnected"


class NetworkSession:
    """Owns one outbound command connection and one inbound event connection.

    Connections are attempted once, write channel first. Nothing here raises
    into the UI loop: send failures become output lines, reader failures end
    the reader thread.
    """

    def __init__(
        self,
        buffer: OutputBuffer,
        command_addr: tuple[str, int],
        event_addr: tuple[str, int],
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        on_output: Callable[[], None] | None = None,
    ) -> None:
        self.buffer = buffer
        self.command_addr = command_addr
        self.event_addr = event_addr
        self.connect_timeout = connect_timeout
        self.on_output = on_output
        self.write_conn: socket.socket | None = None
        self.read_conn: socket.socket | None = None
        self.reader_thread: threading.Thread | None = None
        self._attempted = False
        self._reader_done = threading.Event()

    @property
    def status(self) -> str:
        if not self._attempted:
            return STATUS_CONNECTING
        if self.write_conn is None:
            return STATUS_DISCONNECTED
        if self.read_conn is None or self._reader_done.is_set():
            return STATUS_WRITE_ONLY
        return STATUS_CONNECTED

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.connect, name="netdash-connect", daemon=True)
        thread.start()
        return thread

    def connect(self) -> None:
        if self._attempted:
            return
        try:
            self.write_conn = self._open(self.command_addr)
        except (OSError, ValueError) as exc:
            logger.error("command channel %s:%s unavailable: %s", *self.command_addr, exc)
            self._attempted = True
            self._notify()
            return

        try:
            self.read_conn = self._open(self.event_addr)
        except (OSError, ValueError) as exc:
            logger.error("event channel %s:%s unavailable: %s", *self.event_addr, exc)
            self._attempted = True
            self._notify()
            return

        self._attempted = True
        self.reader_thread = threading.Thread(
            target=self._read_loop, args=(self.read_conn,), name="netdash-reader", daemon=True
        )
        self.reader_thread.start()
        self._notify()

    def send(self, text: str) -> bool:
        conn = self.write_conn
        if conn is None:
            self._append("Error sending command: command channel not connected\n")
            return False
        try:
            conn.sendall((text + "\n").encode("utf-8"))
        except OSError as exc:
            logger.warning("send of %r failed: %s", text, exc)
            self._append(f"Error sending command: {exc}\n")
            return False
        logger.debug("sent %r", text)
        return True

    def close(self) -> None:
        for conn in (self.write_conn, self.read_conn):
            if conn is None:
                continue
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            conn.close()

    def _open(self, addr: tuple[str, int]) -> socket.socket:
        conn = socket.create_connection(addr, timeout=self.connect_timeout)
        conn.settimeout(None)
        logger.info("connected to %s:%s", *addr)
        return conn

    def _read_loop(self, conn: socket.socket) -> None:
        reader = conn.makefile("r", encoding="utf-8", errors="replace", newline="\n")
        try:
            while True:
                line = reader.readline()
                if not line.endswith("\n"):
                    # EOF; a trailing partial line is dropped.
                    logger.info("event channel closed by peer")
                    break
                self._append(line)
        except (OSError, ValueError) as exc:
            logger.warning("event channel read failed: %s", exc)
        finally:
            reader.close()
            self._append(CHANNEL_CLOSED_LINE)
            self._reader_done.set()

    def _append(self, text: str) -> None:
        self.buffer.append(text)
        self._notify()

    def _notify(self) -> None:
        if self.on_output is not None:
            self.on_output()
