"""
Goal: The players we know about, their MPRIS identity strings and icons.

`_CATALOG` is the only place canonical names and glyphs live; parsing a bus
identity and looking up an icon both read it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class PlayerKind(str, Enum):
    MPV = "mpv"
    VLC = "vlc"
    FIREFOX = "firefox"
    SPOTIFY = "spotify"
    CHROME = "chrome"
    CUSTOM = "custom"


# kind -> (identity reported on the bus, Nerd Font glyph)
_CATALOG: Dict[PlayerKind, Tuple[str, str]] = {
    PlayerKind.MPV: ("mpv", "\uf36e"),
    PlayerKind.VLC: ("vlc", "\ufa7b"),
    PlayerKind.FIREFOX: ("firefox", "\uf269"),
    PlayerKind.SPOTIFY: ("Spotify", "\uf1bc"),
    PlayerKind.CHROME: ("chrome", "\uf268"),
}

_BY_IDENTITY: Dict[str, PlayerKind] = {name: kind for kind, (name, _) in _CATALOG.items()}


@dataclass(frozen=True)
class PlayerIdentity:
    kind: PlayerKind
    custom: Optional[str] = None

    @classmethod
    def of(cls, kind: PlayerKind) -> "PlayerIdentity":
        if kind is PlayerKind.CUSTOM:
            raise ValueError("use PlayerIdentity.named() for custom identities")
        return cls(kind)

    @classmethod
    def named(cls, identity: str) -> "PlayerIdentity":
        """A custom identity: matched by exact string, never has an icon."""
        return cls(PlayerKind.CUSTOM, identity)

    @classmethod
    def parse(cls, identity: str) -> Optional["PlayerIdentity"]:
        """Map a bus identity onto a known player; None when unrecognized."""
        kind = _BY_IDENTITY.get(identity)
        return cls(kind) if kind is not None else None

    @property
    def name(self) -> str:
        if self.kind is PlayerKind.CUSTOM:
            return self.custom or ""
        return _CATALOG[self.kind][0]

    @property
    def icon(self) -> str:
        if self.kind is PlayerKind.CUSTOM:
            return ""
        return _CATALOG[self.kind][1]

    def __str__(self) -> str:
        return self.name


def icon_for(identity: str) -> str:
    """Glyph for a raw bus identity; empty for players we don't know."""
    known = PlayerIdentity.parse(identity)
    return known.icon if known else ""


# Priority order: first-match actions walk it, broadcast actions cover all of it
RANKING: Tuple[PlayerIdentity, ...] = (
    PlayerIdentity.named("mpv"),
    PlayerIdentity.of(PlayerKind.VLC),
    PlayerIdentity.of(PlayerKind.FIREFOX),
    PlayerIdentity.of(PlayerKind.SPOTIFY),
    PlayerIdentity.of(PlayerKind.CHROME),
)
