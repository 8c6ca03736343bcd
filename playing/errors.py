"""
Goal: One exception type for the whole CLI, carrying a kind and an exit code.

Kinds and codes are fixed:
  BusInit -> 8   cannot connect to the session bus
  Bus     -> 2   a specific bus call failed
  IO      -> 3   local process/file I/O failed
  Generic -> 4   anything we could not classify
  Favorites -> 5 the Spotify side of `favorite` failed
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    BUS_INIT = "BusInit"
    BUS = "Bus"
    IO = "IO"
    GENERIC = "Generic"
    FAVORITES = "Favorites"

    @property
    def code(self) -> int:
        return _EXIT_CODES[self]

    def __str__(self) -> str:
        return self.value


_EXIT_CODES = {
    ErrorKind.BUS_INIT: 8,
    ErrorKind.BUS: 2,
    ErrorKind.IO: 3,
    ErrorKind.GENERIC: 4,
    ErrorKind.FAVORITES: 5,
}


class PlayingError(Exception):
    """
    Base error. `cause` is the underlying exception or a plain message.

    Examples:
        >>> raise BusError("org.mpris.MediaPlayer2.vlc: no reply")
        >>> raise PlayingError(ErrorKind.GENERIC, ValueError("bad"))
    """

    kind: ErrorKind = ErrorKind.GENERIC

    def __init__(self, kind: ErrorKind | None = None, cause: BaseException | str = ""):
        if kind is not None:
            self.kind = kind
        self.cause = cause
        super().__init__(str(cause))

    @property
    def code(self) -> int:
        return self.kind.code

    def render(self) -> str:
        return f"error: {self.kind}: {self.cause}"


class BusInitError(PlayingError):
    def __init__(self, cause: BaseException | str):
        super().__init__(ErrorKind.BUS_INIT, cause)


class BusError(PlayingError):
    def __init__(self, cause: BaseException | str):
        super().__init__(ErrorKind.BUS, cause)


class LocalIOError(PlayingError):
    def __init__(self, cause: BaseException | str):
        super().__init__(ErrorKind.IO, cause)


class FavoritesError(PlayingError):
    def __init__(self, cause: BaseException | str):
        super().__init__(ErrorKind.FAVORITES, cause)


def wrap(exc: BaseException) -> PlayingError:
    """Classify anything that escaped into a PlayingError."""
    if isinstance(exc, PlayingError):
        return exc
    if isinstance(exc, OSError):
        return LocalIOError(exc)
    return PlayingError(ErrorKind.GENERIC, exc)
