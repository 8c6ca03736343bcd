"""
Goal: Shared fakes: an in-memory bus, scripted players, a scripted favorites service.
Logs and fallback secrets go to a throwaway directory.
"""
import os
import tempfile

os.environ.setdefault("PLAYING_HOME", tempfile.mkdtemp(prefix="playing-tests-"))

import pytest  # noqa: E402

from playing.errors import BusError  # noqa: E402
from playing.models.schemas import Metadata, PlaybackStatus  # noqa: E402


class FakePlayer:
    def __init__(self, identity, status=PlaybackStatus.STOPPED, metadata=None, fail_on=()):
        self.identity = identity
        self.status = status
        self.metadata = metadata or Metadata()
        self.fail_on = set(fail_on)
        self.calls = []

    def __repr__(self):
        return f"FakePlayer({self.identity!r})"

    def _record(self, name, *args):
        if name in self.fail_on:
            raise BusError(f"{self.identity}: {name} failed")
        self.calls.append((name, *args))

    def commands(self):
        return [c for c in self.calls if c[0] not in ("get_status", "get_metadata")]

    def get_status(self):
        self._record("get_status")
        return self.status

    def get_metadata(self):
        self._record("get_metadata")
        return self.metadata

    def play(self):
        self._record("play")

    def pause(self):
        self._record("pause")

    def next(self):
        self._record("next")

    def previous(self):
        self._record("previous")

    def seek_relative(self, seconds):
        self._record("seek_relative", seconds)

    def seek_absolute(self, track_id, seconds):
        self._record("seek_absolute", track_id, seconds)


class FakeBus:
    def __init__(self, players=()):
        self.players = list(players)
        self.enumerations = 0
        self.connections = 0
        self.closed = False

    def connect(self):
        self.connections += 1
        self.closed = False
        return self

    def enumerate_running(self):
        self.enumerations += 1
        return list(self.players)

    def close(self):
        self.closed = True


class FakeFavorites:
    def __init__(self, added=True, fail=None):
        self.added = added
        self.fail = fail
        self.calls = []

    async def get_client(self):
        self.calls.append("get_client")
        if self.fail == "get_client":
            from playing.errors import FavoritesError

            raise FavoritesError("not linked")
        return "client"

    async def poll(self, client):
        self.calls.append("poll")

    async def toggle(self, client):
        self.calls.append("toggle")
        return self.added

    async def close(self, client):
        self.calls.append("close")


@pytest.fixture
def player():
    return FakePlayer


@pytest.fixture
def bus():
    return FakeBus


@pytest.fixture
def favorites():
    return FakeFavorites


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def out():
    """Collects echoed lines."""
    return []
