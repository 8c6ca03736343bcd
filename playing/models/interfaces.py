"""
Goal: The seams between the engine and the outside world.
The MPRIS adapter implements these for real; tests implement them in memory.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from playing.models.schemas import Metadata, PlaybackStatus


class RunningPlayer(Protocol):
    @property
    def identity(self) -> str: ...

    def get_status(self) -> PlaybackStatus: ...

    def get_metadata(self) -> Metadata: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def next(self) -> None: ...

    def previous(self) -> None: ...

    def seek_relative(self, seconds: float) -> None: ...

    def seek_absolute(self, track_id: str, seconds: float) -> None: ...


class Bus(Protocol):
    def enumerate_running(self) -> Iterable[RunningPlayer]: ...

    def close(self) -> None: ...


class Favorites(Protocol):
    """The favorites service: one client, then optional poll, then toggle."""

    async def get_client(self) -> Any: ...

    async def poll(self, client: Any) -> None: ...

    async def toggle(self, client: Any) -> bool: ...

    async def close(self, client: Any) -> None: ...
