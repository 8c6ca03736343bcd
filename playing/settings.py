"""
Goal: Centralized configuration for playing (paths, ports, timings).
Everything comes from env vars so the CLI stays flag-light.
"""

import os
import re
from pathlib import Path


def _validate_port(port_str: str, default: int) -> int:
    """Validate port number is in valid range."""
    try:
        port = int(port_str)
        if 1024 <= port <= 65535:
            return port
    except ValueError:
        pass
    return default


def _validate_host(host_str: str, default: str) -> str:
    """Only loopback hosts may receive the OAuth redirect."""
    if not host_str:
        return default
    if host_str in {"127.0.0.1", "localhost", "::1"}:
        return host_str
    if re.match(r"^127\.\d{1,3}\.\d{1,3}\.\d{1,3}$", host_str):
        return host_str
    return default


def _positive_float(value: str, default: float) -> float:
    try:
        f = float(value)
        if f > 0:
            return f
    except ValueError:
        pass
    return default


# State lives under XDG_STATE_HOME, like most desktop CLIs on Linux
STATE_HOME = os.getenv("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
APP_DIR = Path(os.getenv("PLAYING_HOME") or Path(STATE_HOME) / "playing")
LOG_DIR = APP_DIR / "logs"

# Loopback receiver for the Spotify OAuth redirect (playing spotify login)
CALLBACK_HOST = _validate_host(os.getenv("PLAYING_CALLBACK_HOST", "127.0.0.1"), "127.0.0.1")
CALLBACK_PORT = _validate_port(os.getenv("PLAYING_CALLBACK_PORT", "8765"), 8765)
SPOTIFY_REDIRECT = f"http://{CALLBACK_HOST}:{CALLBACK_PORT}/callback"

# Spotify public client id (PKCE, no secret); keyring value is used when unset
SPOTIFY_CLIENT_ID = os.getenv("PLAYING_SPOTIFY_CLIENT_ID", "")

# favorite --poll waits this long between "is anything playing?" checks
POLL_INTERVAL = _positive_float(os.getenv("PLAYING_POLL_INTERVAL", "2.0"), 2.0)
POLL_MAX_BACKOFF = 30.0
HTTP_TIMEOUT = _positive_float(os.getenv("PLAYING_HTTP_TIMEOUT", "10.0"), 10.0)

MAX_STATUS_LEN = 70
