"""
Goal: Keep the Spotify access/refresh tokens out of plain sight.
Tokens go to the OS keyring; if no keyring backend works we fall back to
files under APP_DIR/secrets (mode 0600) so headless boxes still work.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import keyring
from keyring.errors import KeyringError
from loguru import logger

from playing.settings import APP_DIR

SERVICE = "playing"
ACCESS_KEY = "spotify_access_token"
REFRESH_KEY = "spotify_refresh_token"

SECRETS_DIR = APP_DIR / "secrets"


def _fallback_path(key: str) -> Path:
    return SECRETS_DIR / f"{SERVICE}.{key}.txt"


def set_secret(key: str, value: str) -> None:
    try:
        keyring.set_password(SERVICE, key, value)
        return
    except KeyringError:
        logger.warning("No usable keyring backend; storing {} in {}", key, SECRETS_DIR)
    SECRETS_DIR.mkdir(parents=True, exist_ok=True)
    path = _fallback_path(key)
    path.write_text(value, encoding="utf-8")
    os.chmod(path, 0o600)


def get_secret(key: str) -> Optional[str]:
    try:
        value = keyring.get_password(SERVICE, key)
        if value:
            return value
    except KeyringError:
        pass
    path = _fallback_path(key)
    if path.exists():
        return path.read_text(encoding="utf-8").strip() or None
    return None


def delete_secret(key: str) -> None:
    try:
        keyring.delete_password(SERVICE, key)
    except KeyringError:
        # PasswordDeleteError is a KeyringError: nothing stored there
        pass
    _fallback_path(key).unlink(missing_ok=True)


def save_tokens(access: str, refresh: Optional[str]) -> None:
    set_secret(ACCESS_KEY, access)
    if refresh:
        set_secret(REFRESH_KEY, refresh)


def load_tokens() -> tuple[Optional[str], Optional[str]]:
    return get_secret(ACCESS_KEY), get_secret(REFRESH_KEY)
