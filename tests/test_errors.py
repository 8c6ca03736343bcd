"""
Goal: Each error kind carries its fixed exit code and renders the same way.
"""
import pytest

from playing.errors import (
    BusError,
    BusInitError,
    ErrorKind,
    FavoritesError,
    LocalIOError,
    PlayingError,
    wrap,
)


@pytest.mark.parametrize(
    "err,kind,code",
    [
        (BusInitError("no bus"), ErrorKind.BUS_INIT, 8),
        (BusError("no reply"), ErrorKind.BUS, 2),
        (LocalIOError("disk"), ErrorKind.IO, 3),
        (PlayingError(ErrorKind.GENERIC, "odd"), ErrorKind.GENERIC, 4),
        (FavoritesError("401"), ErrorKind.FAVORITES, 5),
    ],
)
def test_kind_and_code(err, kind, code):
    assert err.kind is kind
    assert err.code == code


def test_render():
    err = BusError(RuntimeError("org.mpris.MediaPlayer2.vlc did not reply"))
    assert err.render() == "error: Bus: org.mpris.MediaPlayer2.vlc did not reply"


def test_wrap_classifies():
    original = BusError("x")
    assert wrap(original) is original
    assert wrap(FileNotFoundError("gone")).kind is ErrorKind.IO
    assert wrap(KeyError("k")).kind is ErrorKind.GENERIC
    assert wrap(KeyError("k")).code == 4
