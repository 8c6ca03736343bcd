"""
Goal: Render the one-line now-playing summary.

    <icon><spaces><title> // <album> @ <first artist>

Missing fields read "Unknown"; lines longer than the limit are cut to
limit-3 characters plus "...".
"""

from __future__ import annotations

from playing.models.players import icon_for
from playing.models.schemas import Metadata
from playing.settings import MAX_STATUS_LEN

UNKNOWN = "Unknown"
ELLIPSIS = "..."


def format_status(
    identity: str,
    meta: Metadata,
    no_icon: bool = False,
    spaces_after_icon: int = 1,
    max_len: int = MAX_STATUS_LEN,
) -> str:
    title = meta.title if meta.title is not None else UNKNOWN
    album = meta.album if meta.album is not None else UNKNOWN
    artist = meta.artists[0] if meta.artists else UNKNOWN

    prefix = "" if no_icon else icon_for(identity) + " " * spaces_after_icon
    line = f"{prefix}{title} // {album} @ {artist}"
    if len(line) > max_len:
        return line[: max_len - len(ELLIPSIS)] + ELLIPSIS
    return line
