"""
playing Spotify adapter (Web API, favorites only)

Goals
- get_client(): an authenticated client from the tokens `playing spotify login` stored.
- poll(client): wait (cooperatively) until Spotify reports a playing track.
- toggle(client): flip the current track's "Liked Songs" membership.
- Refresh the access token once when the API says 401.
- Never log tokens.

Every failure surfaces as FavoritesError (exit code 5).
"""

from __future__ import annotations

from typing import Dict, List, Optional

import anyio
import httpx
from loguru import logger
from pydantic import ValidationError

from playing.auth.secrets import load_tokens, save_tokens
from playing.auth.spotify_config import get_client_id
from playing.errors import FavoritesError
from playing.models.schemas import CurrentlyPlaying, TokenResponse
from playing.settings import HTTP_TIMEOUT, POLL_INTERVAL, POLL_MAX_BACKOFF

API_BASE = "https://api.spotify.com/v1"
TOKEN_URL = "https://accounts.spotify.com/api/token"

NOT_LINKED = "Spotify account not linked; run `playing spotify login`"


class SpotifyClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        access_token: str,
        refresh_token: Optional[str],
        client_id: Optional[str],
    ):
        self._http = http
        self._access = access_token
        self._refresh = refresh_token
        self._client_id = client_id

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._access}"}

    async def aclose(self) -> None:
        await self._http.aclose()

    async def refresh(self) -> None:
        if not self._refresh or not self._client_id:
            raise FavoritesError("Spotify session expired; run `playing spotify login`")
        data = {
            "grant_type": "refresh_token",
            "refresh_token": self._refresh,
            "client_id": self._client_id,
        }
        try:
            r = await self._http.post(TOKEN_URL, data=data)
        except httpx.HTTPError as e:
            raise FavoritesError(e) from e
        if r.status_code != 200:
            raise FavoritesError(f"Spotify refused to refresh the session (HTTP {r.status_code})")
        tok = TokenResponse.from_payload(r.json())
        self._access = tok.access_token
        # Spotify may rotate the refresh token
        self._refresh = tok.refresh_token or self._refresh
        save_tokens(self._access, self._refresh)
        logger.debug("Spotify session refreshed")

    async def request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{API_BASE}{path}"
        try:
            r = await self._http.request(method, url, headers=self._headers(), **kwargs)
            if r.status_code == 401:
                await self.refresh()
                r = await self._http.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise FavoritesError(e) from e
        if r.status_code >= 400:
            raise FavoritesError(f"{method} {path}: HTTP {r.status_code}")
        return r

    async def currently_playing(self) -> CurrentlyPlaying:
        r = await self.request("GET", "/me/player/currently-playing")
        if r.status_code == 204 or not r.content:
            return CurrentlyPlaying()
        try:
            return CurrentlyPlaying.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            raise FavoritesError(f"unexpected currently-playing payload: {e}") from e

    async def is_saved(self, track_id: str) -> bool:
        r = await self.request("GET", "/me/tracks/contains", params={"ids": track_id})
        flags: List[bool] = r.json() or [False]
        return bool(flags[0])

    async def save(self, track_id: str) -> None:
        await self.request("PUT", "/me/tracks", params={"ids": track_id})

    async def remove(self, track_id: str) -> None:
        await self.request("DELETE", "/me/tracks", params={"ids": track_id})


class SpotifyFavorites:
    """The favorites collaborator backed by the Spotify Web API."""

    def __init__(
        self,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        interval: float = POLL_INTERVAL,
        max_backoff: float = POLL_MAX_BACKOFF,
    ):
        self._transport = transport
        self._interval = interval
        self._max_backoff = max_backoff

    async def get_client(self) -> SpotifyClient:
        access, refresh = load_tokens()
        if not access:
            raise FavoritesError(NOT_LINKED)
        http = httpx.AsyncClient(timeout=HTTP_TIMEOUT, transport=self._transport)
        return SpotifyClient(http, access, refresh, get_client_id())

    async def poll(self, client: SpotifyClient) -> None:
        """
        Block until a track is playing. No deadline: wrap the process in
        `timeout(1)` if you need one. Network hiccups back off, up to a cap.
        """
        delay = self._interval
        while True:
            try:
                now = await client.currently_playing()
            except FavoritesError as e:
                if not isinstance(e.__cause__, httpx.TransportError):
                    raise
                logger.warning("Spotify unreachable ({}); retrying in {:.1f}s", e, delay)
                await anyio.sleep(delay)
                delay = min(delay * 2, self._max_backoff)
                continue
            if now.is_playing and now.item is not None and now.item.id:
                return
            delay = self._interval
            await anyio.sleep(delay)

    async def toggle(self, client: SpotifyClient) -> bool:
        """Returns True when the track was added, False when removed."""
        now = await client.currently_playing()
        track_id = now.item.id if now.item is not None else None
        if not track_id:
            raise FavoritesError("Spotify reports no current track")
        if await client.is_saved(track_id):
            await client.remove(track_id)
            return False
        await client.save(track_id)
        return True

    async def close(self, client: SpotifyClient) -> None:
        await client.aclose()
