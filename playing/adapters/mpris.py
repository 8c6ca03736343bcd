"""
Goal: Minimal MPRIS client over the D-Bus session bus (jeepney, blocking).

- MprisBus.connect() opens the session bus; failure is a BusInit error.
- enumerate_running() lists every org.mpris.MediaPlayer2.* name with its Identity.
- MprisPlayer wraps one bus name: status, metadata, and the transport calls.
- Every error reply or timeout from the bus becomes a Bus error.

Positions and offsets on MPRIS are microseconds; callers pass seconds.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from jeepney import DBusAddress, DBusErrorResponse, Properties, new_method_call
from jeepney.bus_messages import message_bus
from jeepney.io.blocking import DBusConnection, open_dbus_connection
from jeepney.wrappers import unwrap_msg
from loguru import logger

from playing.errors import BusError, BusInitError
from playing.models.schemas import Metadata, PlaybackStatus

MPRIS_PREFIX = "org.mpris.MediaPlayer2."
MPRIS_PATH = "/org/mpris/MediaPlayer2"
ROOT_IFACE = "org.mpris.MediaPlayer2"
PLAYER_IFACE = "org.mpris.MediaPlayer2.Player"

CALL_TIMEOUT = 5.0
MICROSECONDS = 1_000_000


def _to_us(seconds: float) -> int:
    return int(round(seconds * MICROSECONDS))


def _variant(value: Any) -> Any:
    """jeepney hands variants back as (signature, value) pairs."""
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], str):
        return value[1]
    return value


def parse_metadata(raw: Dict[str, Tuple[str, Any]]) -> Metadata:
    """Turn an MPRIS a{sv} metadata map into our Metadata model."""
    fields = {k: _variant(v) for k, v in (raw or {}).items()}
    artists = fields.get("xesam:artist") or []
    if isinstance(artists, str):
        artists = [artists]
    return Metadata(
        title=fields.get("xesam:title") or None,
        album=fields.get("xesam:album") or None,
        artists=[str(a) for a in artists],
        url=fields.get("xesam:url") or None,
        track_id=fields.get("mpris:trackid") or None,
    )


class MprisBus:
    def __init__(self, conn: DBusConnection):
        self._conn = conn

    @classmethod
    def connect(cls) -> "MprisBus":
        try:
            conn = open_dbus_connection(bus="SESSION")
        except Exception as e:  # noqa: BLE001 - any failure here means no bus
            raise BusInitError(e) from e
        logger.debug("Connected to session bus as {}", conn.unique_name)
        return cls(conn)

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "MprisBus":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def call(self, msg: Any) -> tuple:
        try:
            reply = self._conn.send_and_get_reply(msg, timeout=CALL_TIMEOUT)
            return unwrap_msg(reply)
        except (DBusErrorResponse, TimeoutError, OSError) as e:
            raise BusError(e) from e

    def enumerate_running(self) -> List["MprisPlayer"]:
        names = self.call(message_bus.ListNames())[0]
        players = []
        for name in sorted(n for n in names if n.startswith(MPRIS_PREFIX)):
            root = DBusAddress(MPRIS_PATH, bus_name=name, interface=ROOT_IFACE)
            try:
                identity = _variant(self.call(Properties(root).get("Identity"))[0])
            except BusError as e:
                # A player that quits between ListNames and Get still aborts the run
                logger.debug("Identity lookup failed for {}", name)
                raise BusError(f"{name}: {e.cause}") from e
            logger.debug("Found {} ({})", identity, name)
            players.append(MprisPlayer(self, name, str(identity)))
        return players


class MprisPlayer:
    def __init__(self, bus: MprisBus, bus_name: str, identity: str):
        self._bus = bus
        self.bus_name = bus_name
        self._identity = identity
        self._addr = DBusAddress(MPRIS_PATH, bus_name=bus_name, interface=PLAYER_IFACE)

    def __repr__(self) -> str:
        return f"MprisPlayer({self.bus_name!r}, identity={self._identity!r})"

    @property
    def identity(self) -> str:
        return self._identity

    def _get(self, prop: str) -> Any:
        return _variant(self._bus.call(Properties(self._addr).get(prop))[0])

    def _invoke(self, method: str, signature: str | None = None, body: tuple = ()) -> None:
        self._bus.call(new_method_call(self._addr, method, signature, body))

    def get_status(self) -> PlaybackStatus:
        raw = self._get("PlaybackStatus")
        try:
            return PlaybackStatus(raw)
        except ValueError as e:
            raise BusError(f"{self.bus_name}: unexpected PlaybackStatus {raw!r}") from e

    def get_metadata(self) -> Metadata:
        return parse_metadata(self._get("Metadata"))

    def play(self) -> None:
        self._invoke("Play")

    def pause(self) -> None:
        self._invoke("Pause")

    def next(self) -> None:
        self._invoke("Next")

    def previous(self) -> None:
        self._invoke("Previous")

    def seek_relative(self, seconds: float) -> None:
        self._invoke("Seek", "x", (_to_us(seconds),))

    def seek_absolute(self, track_id: str, seconds: float) -> None:
        self._invoke("SetPosition", "ox", (track_id, _to_us(seconds)))
