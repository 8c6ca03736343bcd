"""
Goal: Match ranked identities against whatever is running on the bus.

Ranking order decides the output order; within one ranked identity, the bus
snapshot order is kept. Matching is exact and case-sensitive.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

from playing.models.interfaces import RunningPlayer
from playing.models.players import PlayerIdentity, PlayerKind

Match = Tuple[PlayerIdentity, RunningPlayer]


def resolve(ranking: Iterable[PlayerIdentity], players: Sequence[RunningPlayer]) -> Iterator[Match]:
    """Lazily yield (ranked identity, running player) pairs in ranking order."""
    for ranked in ranking:
        for player in players:
            if player.identity == ranked.name:
                yield ranked, player


def spotify_running(players: Iterable[RunningPlayer]) -> bool:
    for player in players:
        known = PlayerIdentity.parse(player.identity)
        if known is not None and known.kind is PlayerKind.SPOTIFY:
            return True
    return False
