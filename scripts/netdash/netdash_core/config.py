"""Profile resolution and user config merging for the dashboard."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path

from netdash_core.models import ListPane, PaneKind

DEFAULT_PANES = [
    {"title": "Pane 1", "items": ["Option A", "Option B", "Option C"], "kind": "menu"},
    {"title": "Pane 2", "items": ["Option X", "Option Y", "Option Z"], "kind": "menu"},
    {"title": "Commands", "items": ["Cmd 1", "Cmd 2", "Cmd 3", "Exit"], "kind": "command"},
    {"title": "Pane 4", "items": ["Opt 1", "Opt 2", "Opt 3"], "kind": "menu"},
]

BUILTIN_PROFILES: dict[str, dict] = {
    "default": {
        "panes": DEFAULT_PANES,
        "host": "localhost",
        "command_port": 9001,
        "event_port": 9002,
        "connect_timeout": 5.0,
        "refresh_per_second": 10,
        "exit_label": "Exit",
        "welcome": "Welcome to netdash!\n",
    },
    "minimal": {
        "panes": [
            {"title": "Commands", "items": ["Exit"], "kind": "command"},
        ],
        "host": "localhost",
        "command_port": 9001,
        "event_port": 9002,
        "connect_timeout": 5.0,
        "refresh_per_second": 4,
        "exit_label": "Exit",
        "welcome": "",
    },
}

ENV_OVERRIDES = {
    "NETDASH_HOST": ("host", str),
    "NETDASH_COMMAND_PORT": ("command_port", int),
    "NETDASH_EVENT_PORT": ("event_port", int),
}

SCALAR_KEYS = {
    "host": str,
    "command_port": int,
    "event_port": int,
    "connect_timeout": float,
    "refresh_per_second": int,
    "exit_label": str,
    "welcome": str,
}


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be a JSON object")
    return data


def _coerce(key: str, value, kind) -> object:
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid value for {key}: {value!r}") from exc


def _validate_panes(panes) -> list[dict]:
    if not isinstance(panes, list):
        raise ValueError("panes must be a list")
    validated = []
    for index, pane in enumerate(panes):
        if not isinstance(pane, dict):
            raise ValueError(f"pane {index} must be an object")
        title = pane.get("title")
        if not isinstance(title, str) or not title:
            raise ValueError(f"pane {index} needs a non-empty title")
        items = pane.get("items", [])
        if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
            raise ValueError(f"pane {title!r} items must be a list of strings")
        kind = pane.get("kind", "menu")
        if kind not in {k.value for k in PaneKind}:
            raise ValueError(f"pane {title!r} has unknown kind: {kind}")
        validated.append({"title": title, "items": list(items), "kind": kind})
    return validated


def _check_port(key: str, value: int) -> None:
    if not 0 < value < 65536:
        raise ValueError(f"{key} out of range: {value}")


def resolve_profile(
    profile: str,
    config_path: str | None = None,
    overrides: dict | None = None,
    environ: dict | None = None,
) -> dict:
    """Built-in profile, then user config file, then environment, then CLI overrides."""
    if profile not in BUILTIN_PROFILES:
        raise ValueError(f"unknown profile: {profile}")

    user_config = load_user_config(config_path)

    selected_profile = user_config.get("profile")
    if selected_profile:
        if selected_profile not in BUILTIN_PROFILES:
            raise ValueError(f"unknown profile in config: {selected_profile}")
        profile = selected_profile
    resolved = copy.deepcopy(BUILTIN_PROFILES[profile])

    if "panes" in user_config:
        resolved["panes"] = _validate_panes(user_config["panes"])

    for key, kind in SCALAR_KEYS.items():
        if key in user_config:
            resolved[key] = _coerce(key, user_config[key], kind)

    env = os.environ if environ is None else environ
    for var, (key, kind) in ENV_OVERRIDES.items():
        if env.get(var):
            resolved[key] = _coerce(var, env[var], kind)

    for key, value in (overrides or {}).items():
        if value is not None:
            resolved[key] = _coerce(key, value, SCALAR_KEYS.get(key, str))

    _check_port("command_port", resolved["command_port"])
    _check_port("event_port", resolved["event_port"])
    if resolved["connect_timeout"] <= 0:
        raise ValueError(f"connect_timeout must be positive: {resolved['connect_timeout']}")
    resolved["refresh_per_second"] = max(1, resolved["refresh_per_second"])
    resolved["panes"] = _validate_panes(resolved["panes"])
    resolved["name"] = profile
    return resolved


def build_panes(profile: dict) -> list[ListPane]:
    return [
        ListPane.from_labels(pane["title"], pane["items"], PaneKind(pane["kind"]))
        for pane in profile["panes"]
    ]
