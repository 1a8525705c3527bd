"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

from vidio.infrastructure.bilibili.headers import BROWSER_USER_AGENT

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "vidio",
    "environment": "dev",
    "playback": {
        "mode": "multi",
    },
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": BROWSER_USER_AGENT,
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
