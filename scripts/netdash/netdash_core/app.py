"""Dashboard application entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import os
import queue
import sys
from datetime import datetime, timezone
from typing import Callable

from rich.console import Console
from rich.live import Live

from netdash_core.config import build_panes, resolve_profile
from netdash_core.controller import DashboardController, DashboardState
from netdash_core.keys import KeyReader
from netdash_core.logging_config import setup_logging
from netdash_core.models import KeyEvent, ResizeEvent
from netdash_core.output_buffer import OutputBuffer
from netdash_core.render import render_dashboard
from netdash_core.session import NetworkSession

logger = logging.getLogger(__name__)

WAKE = object()


def _build(profile: dict, on_output=None) -> tuple[DashboardState, OutputBuffer, NetworkSession, DashboardController]:
    buffer = OutputBuffer(profile["welcome"])
    session = NetworkSession(
        buffer,
        (profile["host"], profile["command_port"]),
        (profile["host"], profile["event_port"]),
        connect_timeout=profile["connect_timeout"],
        on_output=on_output,
    )
    state = DashboardState(build_panes(profile), exit_label=profile["exit_label"])
    controller = DashboardController(state, session, buffer)
    return state, buffer, session, controller


def _json_output(profile: dict, state: DashboardState) -> str:
    payload = {
        "profile": profile["name"],
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "command_channel": f"{profile['host']}:{profile['command_port']}",
        "event_channel": f"{profile['host']}:{profile['event_port']}",
        "state": state.to_dict(),
    }
    return json.dumps(payload, indent=2)


def _enter_cbreak(fd: int):
    """Disable canonical mode and echo; returns the settings to restore, or None."""
    try:
        import termios
    except ImportError:
        return None

    try:
        old_settings = termios.tcgetattr(fd)
        new = termios.tcgetattr(fd)
        new[3] &= ~(termios.ICANON | termios.ECHO)
        new[6][termios.VMIN] = 0
        new[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSADRAIN, new)
        return old_settings
    except termios.error as exc:
        logger.warning("keyboard input unavailable: %s", exc)
        return None


def _restore(fd: int, old_settings) -> None:
    if old_settings is None:
        return
    import termios

    termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def live_loop(
    console: Console,
    state: DashboardState,
    buffer: OutputBuffer,
    session: NetworkSession,
    controller: DashboardController,
    wakeups: queue.Queue,
    read_keys: Callable[[], list[str]] | None,
    interval: float,
) -> None:
    """Redraw on resize, key input or a reader wake-up until the controller stops."""
    with Live(
        render_dashboard(state, buffer, session.status),
        console=console,
        auto_refresh=False,
        screen=True,
    ) as live:
        size = console.size
        last_size = (size.width, size.height)
        while state.running:
            dirty = False

            size = console.size
            if (size.width, size.height) != last_size:
                last_size = (size.width, size.height)
                controller.dispatch(ResizeEvent(*last_size))
                dirty = True

            if read_keys is not None:
                for key in read_keys():
                    dirty = True
                    if not controller.dispatch(KeyEvent(key)):
                        break
            if not state.running:
                break

            try:
                wakeups.get(timeout=interval)
                while True:
                    wakeups.get_nowait()
            except queue.Empty:
                pass
            else:
                dirty = True

            if dirty:
                live.update(render_dashboard(state, buffer, session.status), refresh=True)


def run_live(console: Console, profile: dict) -> int:
    """Interactive loop: keys and resizes go to the controller, reader output wakes a redraw.

    Keyboard handling follows the select/termios polling approach so rich's
    alternate screen keeps working over SSH. Without a tty the dashboard still
    renders, it just ignores the keyboard.
    """
    wakeups: queue.Queue = queue.Queue()
    state, buffer, session, controller = _build(profile, on_output=lambda: wakeups.put(WAKE))

    size = console.size
    controller.dispatch(ResizeEvent(size.width, size.height))
    session.start()

    fd = None
    old_settings = None
    read_keys = None
    if sys.stdin.isatty():
        fd = sys.stdin.fileno()
        old_settings = _enter_cbreak(fd)
        if old_settings is not None:
            read_keys = KeyReader(fd).poll

    try:
        live_loop(console, state, buffer, session, controller, wakeups, read_keys, 1.0 / profile["refresh_per_second"])
    except KeyboardInterrupt:
        pass
    finally:
        if fd is not None:
            _restore(fd, old_settings)
        session.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Network command dashboard")
    parser.add_argument("-l", "--live", action="store_true", help="Run the interactive dashboard")
    parser.add_argument("--json", action="store_true", help="Emit resolved profile and pane state as JSON")
    parser.add_argument("--profile", default=os.environ.get("NETDASH_PROFILE", "default"), help="Profile name: default|minimal")
    parser.add_argument("--config", help="Optional JSON config file for pane/connection overrides")
    parser.add_argument("--host", help="Host for both channels")
    parser.add_argument("--command-port", type=int, help="Command (write) channel port")
    parser.add_argument("--event-port", type=int, help="Event (read) channel port")
    parser.add_argument("--log-file", help="Log file path (default: netdash.log in the temp dir)")
    parser.add_argument("--log-level", default="INFO", help="DEBUG|INFO|WARNING|ERROR")
    args = parser.parse_args(argv)

    try:
        profile = resolve_profile(
            args.profile,
            args.config,
            overrides={
                "host": args.host,
                "command_port": args.command_port,
                "event_port": args.event_port,
            },
        )
    except ValueError as exc:
        print(f"netdash: {exc}", file=sys.stderr)
        return 2

    setup_logging(args.log_level, args.log_file)
    logger.info(
        "profile %s, command %s:%s, events %s:%s",
        profile["name"],
        profile["host"],
        profile["command_port"],
        profile["host"],
        profile["event_port"],
    )

    if args.json:
        state, _, _, _ = _build(profile)
        print(_json_output(profile, state))
        return 0

    console = Console()
    if args.live:
        return run_live(console, profile)

    state, buffer, _, controller = _build(profile)
    size = console.size
    controller.dispatch(ResizeEvent(size.width, size.height))
    console.print(render_dashboard(state, buffer))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
