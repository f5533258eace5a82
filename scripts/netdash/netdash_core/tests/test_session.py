from __future__ import annotations

import socket
import threading
import time
import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from netdash_core.output_buffer import OutputBuffer  # noqa: E402
from netdash_core.session import CHANNEL_CLOSED_LINE, NetworkSession  # noqa: E402


class LineServer:
    """Loopback listener that accepts a single connection."""

    def __init__(self) -> None:
        self.sock = socket.create_server(("127.0.0.1", 0))
        self.addr = self.sock.getsockname()[:2]
        self.conn: socket.socket | None = None
        self.accepted = threading.Event()
        threading.Thread(target=self._accept, daemon=True).start()

    def _accept(self) -> None:
        try:
            self.conn, _ = self.sock.accept()
        except OSError:
            return
        self.accepted.set()

    def wait(self) -> socket.socket:
        assert self.accepted.wait(5), "no connection accepted"
        assert self.conn is not None
        return self.conn

    def read_line(self) -> bytes:
        conn = self.wait()
        conn.settimeout(5)
        data = b""
        while not data.endswith(b"\n"):
            chunk = conn.recv(1024)
            if not chunk:
                break
            data += chunk
        return data

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()
        self.sock.close()


def closed_port_addr() -> tuple[str, int]:
    listener = socket.create_server(("127.0.0.1", 0))
    addr = listener.getsockname()[:2]
    listener.close()
    return addr


def wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class NetworkSessionTests(unittest.TestCase):
    def setUp(self):
        self.buffer = OutputBuffer("Welcome\n")
        self.servers: list[LineServer] = []
        self.sessions: list[NetworkSession] = []

    def tearDown(self):
        for session in self.sessions:
            session.close()
        for server in self.servers:
            server.close()

    def _server(self) -> LineServer:
        server = LineServer()
        self.servers.append(server)
        return server

    def _session(self, command_addr, event_addr, **kwargs) -> NetworkSession:
        session = NetworkSession(self.buffer, command_addr, event_addr, connect_timeout=2.0, **kwargs)
        self.sessions.append(session)
        return session

    def test_status_before_connect(self):
        session = self._session(closed_port_addr(), closed_port_addr())
        self.assertEqual(session.status, "connecting")

    def test_send_writes_label_and_newline(self):
        commands, events = self._server(), self._server()
        session = self._session(commands.addr, events.addr)
        session.connect()
        self.assertEqual(session.status, "connected")
        self.assertTrue(session.send("Cmd 2"))
        self.assertEqual(commands.read_line(), b"Cmd 2\n")

    def test_reader_appends_lines_verbatim(self):
        commands, events = self._server(), self._server()
        wakeups = []
        session = self._session(commands.addr, events.addr, on_output=lambda: wakeups.append(1))
        session.connect()
        events.wait().sendall(b"hello [world]\nsecond\n")
        self.assertTrue(wait_for(lambda: self.buffer.snapshot().endswith("second\n")))
        self.assertEqual(self.buffer.snapshot(), "Welcome\nhello [world]\nsecond\n")
        self.assertGreaterEqual(len(wakeups), 2)

    def test_peer_close_ends_reader_and_drops_partial_line(self):
        commands, events = self._server(), self._server()
        session = self._session(commands.addr, events.addr)
        session.connect()
        conn = events.wait()
        conn.sendall(b"full\npartial")
        conn.shutdown(socket.SHUT_RDWR)
        conn.close()
        session.reader_thread.join(5)
        self.assertFalse(session.reader_thread.is_alive())
        self.assertEqual(self.buffer.snapshot(), "Welcome\nfull\n" + CHANNEL_CLOSED_LINE)
        self.assertEqual(session.status, "write-only")

    def test_write_failure_skips_read_channel(self):
        events = self._server()
        session = self._session(closed_port_addr(), events.addr)
        session.connect()
        self.assertIsNone(session.write_conn)
        self.assertIsNone(session.read_conn)
        self.assertFalse(events.accepted.wait(0.2))
        self.assertEqual(session.status, "disconnected")

        self.assertFalse(session.send("Cmd 1"))
        self.assertTrue(self.buffer.snapshot().endswith("Error sending command: command channel not connected\n"))

    def test_read_failure_leaves_session_write_only(self):
        commands = self._server()
        session = self._session(commands.addr, closed_port_addr())
        session.connect()
        self.assertEqual(session.status, "write-only")
        self.assertIsNone(session.reader_thread)
        self.assertTrue(session.send("Cmd 3"))
        self.assertEqual(commands.read_line(), b"Cmd 3\n")

    def test_send_error_becomes_output_line(self):
        commands, events = self._server(), self._server()
        session = self._session(commands.addr, events.addr)
        session.connect()
        session.write_conn.close()
        self.assertFalse(session.send("Cmd 1"))
        self.assertIn("Error sending command:", self.buffer.snapshot().splitlines()[-1])

    def test_connect_is_attempted_once(self):
        commands, events = self._server(), self._server()
        session = self._session(commands.addr, events.addr)
        session.connect()
        first = session.write_conn
        session.connect()
        self.assertIs(session.write_conn, first)

    def test_invalid_timeout_degrades_instead_of_crashing(self):
        commands, events = self._server(), self._server()
        session = NetworkSession(self.buffer, commands.addr, events.addr, connect_timeout=-1)
        self.sessions.append(session)
        session.start().join(5)
        self.assertEqual(session.status, "disconnected")
        self.assertFalse(session.send("Cmd 1"))

    def test_start_connects_in_background(self):
        commands, events = self._server(), self._server()
        session = self._session(commands.addr, events.addr)
        session.start().join(5)
        self.assertEqual(session.status, "connected")


if __name__ == "__main__":
    unittest.main()
