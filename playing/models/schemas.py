"""
Goal: Pydantic models for the data that crosses our boundaries:
what a player reports over MPRIS, and the Spotify Web API payloads we read.
We keep them boring on purpose so they're stable contracts.
"""
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


class PlaybackStatus(str, Enum):
    PLAYING = "Playing"
    PAUSED = "Paused"
    STOPPED = "Stopped"


class Metadata(BaseModel):
    title: Optional[str] = None
    album: Optional[str] = None
    artists: List[str] = []
    url: Optional[str] = None
    # MPRIS object path of the current track, needed for absolute seeks
    track_id: Optional[str] = None


class SpotifyTrack(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    uri: Optional[str] = None


class CurrentlyPlaying(BaseModel):
    is_playing: bool = False
    currently_playing_type: Optional[str] = None
    item: Optional[SpotifyTrack] = None


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "TokenResponse":
        return cls.model_validate(data or {})
