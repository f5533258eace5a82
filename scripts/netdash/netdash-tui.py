#!/usr/bin/env python3
"""Thin entrypoint for the netdash dashboard."""

from __future__ import annotations

from netdash_core.app import main


if __name__ == "__main__":
    raise SystemExit(main())
