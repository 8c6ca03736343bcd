"""
Goal: Store and retrieve the Spotify Client ID per user.
So anyone can register their own app without hard-coding IDs in the repo.
"""

from typing import Optional

from playing.auth.secrets import delete_secret, get_secret, set_secret
from playing.settings import SPOTIFY_CLIENT_ID

_K_CLIENT_ID = "spotify_client_id"


def set_client_id(value: str) -> None:
    """
    Save the Spotify Client ID in the keyring.
    """
    if not value or not isinstance(value, str) or not value.strip():
        raise ValueError("Client ID must be a non-empty string.")
    set_secret(_K_CLIENT_ID, value.strip())


def get_client_id() -> Optional[str]:
    """
    Prefer the env var if provided (useful for CI/dev), else read the keyring.
    """
    return SPOTIFY_CLIENT_ID or get_secret(_K_CLIENT_ID)


def clear_client_id() -> None:
    delete_secret(_K_CLIENT_ID)
