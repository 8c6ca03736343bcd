"""
Goal: The "favorite this track" flow.

1. Eligible when Spotify is on the bus, or --always was given
   (then the bus is never opened).
2. Get an authenticated client; optionally wait until something plays.
3. Toggle and report which way it went.

Suspension points are exactly get_client, poll and toggle; one at a time.
"""

from __future__ import annotations

from contextlib import closing
from typing import Callable

from anyio import to_thread
from loguru import logger

from playing.models.actions import FavoriteAction
from playing.models.interfaces import Bus, Favorites
from playing.services.resolver import spotify_running

NOT_PLAYING = "Spotify is not playing"
ADDED = "Added current track to favorites"
REMOVED = "Removed current track from favorites"


def _spotify_on_bus(connect: Callable[[], Bus]) -> bool:
    with closing(connect()) as bus:
        return spotify_running(bus.enumerate_running())


async def run_favorite(
    action: FavoriteAction,
    connect: Callable[[], Bus],
    favorites: Favorites,
    echo: Callable[[str], None] = print,
) -> bool:
    eligible = action.always or await to_thread.run_sync(_spotify_on_bus, connect)
    if not eligible:
        echo(NOT_PLAYING)
        return False

    client = await favorites.get_client()
    try:
        if action.poll:
            logger.debug("Waiting for Spotify to report a playing track")
            await favorites.poll(client)
        added = await favorites.toggle(client)
    finally:
        await favorites.close(client)
    logger.info("Favorite toggled (added={})", added)
    echo(ADDED if added else REMOVED)
    return True
