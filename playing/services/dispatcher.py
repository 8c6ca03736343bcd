"""
Goal: Run one action against the players the resolver finds.

Policies, by action type:
- OperationAction, PlayerAction, UrlAction: broadcast to every match, no early exit.
- StatusAction: first *playing* match wins; "No media" when nothing plays.
- FavoriteAction: skips the resolver and hands off to the favorites service;
  the bus is only opened if that service needs it.

Each call returns the boolean outcome; the CLI turns True/False into exit 0/1.
A bus failure on any player aborts the rest; earlier effects are not undone.
"""

from __future__ import annotations

from contextlib import closing
from typing import Callable, Optional, Sequence

import anyio
from loguru import logger

from playing.models.actions import (
    Action,
    FavoriteAction,
    OperationAction,
    OpKind,
    PlayerAction,
    StatusAction,
    UrlAction,
)
from playing.models.interfaces import Bus, Favorites, RunningPlayer
from playing.models.players import PlayerIdentity
from playing.models.schemas import PlaybackStatus
from playing.services.favorites import run_favorite
from playing.services.resolver import resolve
from playing.services.status import format_status

Echo = Callable[[str], None]

NO_MEDIA = "No media"


def apply_operation(player: RunningPlayer, action: OperationAction) -> None:
    op = action.op
    logger.debug("{} -> {} ({})", op.value, player.identity, action.seconds)
    if op is OpKind.TOGGLE:
        if player.get_status() is PlaybackStatus.PLAYING:
            player.pause()
        else:
            player.play()
    elif op is OpKind.PLAY:
        player.play()
    elif op is OpKind.PAUSE:
        player.pause()
    elif op is OpKind.NEXT:
        player.next()
    elif op is OpKind.PREVIOUS:
        player.previous()
    elif op is OpKind.REWIND:
        player.seek_relative(-action.seconds)
    elif op is OpKind.FORWARD:
        player.seek_relative(action.seconds)
    elif op is OpKind.SEEK_RELATIVE:
        player.seek_relative(action.seconds)
    elif op is OpKind.SEEK:
        track_id = player.get_metadata().track_id
        if track_id is None:
            logger.debug("{} exposes no track id; skipping seek", player.identity)
            return
        player.seek_absolute(track_id, action.seconds)


def _status(
    action: StatusAction,
    players: Sequence[RunningPlayer],
    ranking: Sequence[PlayerIdentity],
    echo: Echo,
) -> bool:
    for _, player in resolve(ranking, players):
        if player.get_status() is not PlaybackStatus.PLAYING:
            continue
        if action.quiet:
            return False
        meta = player.get_metadata()
        echo(format_status(player.identity, meta, action.no_icon, action.spaces_after_icon))
        return True
    if action.quiet:
        return False
    echo(NO_MEDIA)
    return True


def dispatch(
    action: Action,
    ranking: Sequence[PlayerIdentity],
    connect: Callable[[], Bus],
    favorites: Optional[Favorites] = None,
    echo: Echo = print,
) -> bool:
    if isinstance(action, FavoriteAction):
        if favorites is None:
            raise ValueError("favorite needs a favorites service")
        return anyio.run(run_favorite, action, connect, favorites, echo)

    with closing(connect()) as bus:
        players = list(bus.enumerate_running())

        if isinstance(action, StatusAction):
            return _status(action, players, ranking, echo)

        for _, player in resolve(ranking, players):
            if isinstance(action, OperationAction):
                apply_operation(player, action)
            elif isinstance(action, PlayerAction):
                echo(player.identity)
            elif isinstance(action, UrlAction):
                if PlayerIdentity.parse(player.identity) is not None:
                    echo(player.get_metadata().url or "")
    return True

