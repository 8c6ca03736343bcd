"""
Goal: The command surface: flags, exit codes, and error lines.
"""
from typer.testing import CliRunner

from playing.cli.cli import Runtime, app
from playing.errors import BusInitError
from playing.models.schemas import Metadata, PlaybackStatus

runner = CliRunner()


def _invoke(args, bus, favorites=None):
    rt = Runtime(bus_factory=lambda: bus, favorites_factory=lambda: favorites)
    return runner.invoke(app, args, obj=rt)


def test_cli_help():
    r = runner.invoke(app, ["--help"])
    assert r.exit_code == 0
    assert "Manage your running multimedia players" in r.stdout


def test_version():
    r = runner.invoke(app, ["--version"])
    assert r.exit_code == 0
    assert r.stdout.startswith("playing ")


def test_status_line(player, bus):
    b = bus([player("Spotify", PlaybackStatus.PLAYING, Metadata(title="Song", album="LP", artists=["Band"]))])
    r = _invoke(["status", "--no-icon"], b)
    assert r.exit_code == 0
    assert r.stdout == "Song // LP @ Band\n"
    assert b.closed


def test_status_spaces_after_icon(player, bus):
    b = bus([player("Spotify", PlaybackStatus.PLAYING, Metadata(title="Song", album="LP", artists=["Band"]))])
    r = _invoke(["status", "--spaces-after-icon", "2"], b)
    assert r.stdout == "\uf1bc  Song // LP @ Band\n"


def test_status_no_media(bus):
    r = _invoke(["status"], bus([]))
    assert r.exit_code == 0
    assert r.stdout == "No media\n"


def test_status_quiet_exits_1(player, bus):
    r = _invoke(["status", "-q"], bus([player("vlc", PlaybackStatus.PLAYING)]))
    assert r.exit_code == 1
    assert r.stdout == ""
    r = _invoke(["status", "--quiet"], bus([]))
    assert r.exit_code == 1
    assert r.stdout == ""


def test_mode_is_accepted(player, bus):
    r = _invoke(["--mode", "multiple", "player"], bus([player("mpv"), player("chrome")]))
    assert r.exit_code == 0
    assert r.stdout == "mpv\nchrome\n"


def test_operations(player, bus):
    vlc = player("vlc", PlaybackStatus.PLAYING)
    b = bus([vlc])
    assert _invoke(["operation", "toggle"], b).exit_code == 0
    assert _invoke(["operation", "rewind"], b).exit_code == 0
    assert _invoke(["operation", "forward", "5"], b).exit_code == 0
    assert _invoke(["operation", "seek-relative", "-2.5"], b).exit_code == 0
    assert vlc.commands() == [
        ("pause",),
        ("seek_relative", -1.0),
        ("seek_relative", 5.0),
        ("seek_relative", -2.5),
    ]


def test_seek_requires_seconds(bus):
    r = _invoke(["operation", "seek"], bus([]))
    assert r.exit_code == 2


def test_url(player, bus):
    r = _invoke(["url"], bus([player("firefox", metadata=Metadata(url="https://example.org"))]))
    assert r.stdout == "https://example.org\n"


def test_bus_init_failure_exit_8():
    def no_bus():
        raise BusInitError("DBUS_SESSION_BUS_ADDRESS not set")

    r = runner.invoke(app, ["player"], obj=Runtime(bus_factory=no_bus))
    assert r.exit_code == 8
    assert "error: BusInit: DBUS_SESSION_BUS_ADDRESS not set" in r.output


def test_bus_call_failure_exit_2(player, bus):
    r = _invoke(["operation", "play"], bus([player("mpv", fail_on={"play"})]))
    assert r.exit_code == 2
    assert "error: Bus: mpv: play failed" in r.output


def test_favorite_not_eligible(player, bus, favorites):
    fav = favorites()
    r = _invoke(["favorite"], bus([player("mpv")]), fav)
    assert r.exit_code == 1
    assert "Spotify is not playing" in r.stdout
    assert fav.calls == []


def test_favorite_added(player, bus, favorites):
    fav = favorites(added=True)
    r = _invoke(["favorite", "-p"], bus([player("Spotify")]), fav)
    assert r.exit_code == 0
    assert "Added current track to favorites" in r.stdout
    assert fav.calls == ["get_client", "poll", "toggle", "close"]


def test_favorite_always_works_without_a_bus(favorites):
    def no_bus():
        raise BusInitError("DBUS_SESSION_BUS_ADDRESS not set")

    fav = favorites(added=False)
    r = runner.invoke(app, ["favorite", "--always"], obj=Runtime(bus_factory=no_bus, favorites_factory=lambda: fav))
    assert r.exit_code == 0
    assert "Removed current track from favorites" in r.stdout
    assert fav.calls == ["get_client", "toggle", "close"]


def test_favorite_without_always_needs_the_bus(favorites):
    def no_bus():
        raise BusInitError("DBUS_SESSION_BUS_ADDRESS not set")

    fav = favorites()
    r = runner.invoke(app, ["favorite"], obj=Runtime(bus_factory=no_bus, favorites_factory=lambda: fav))
    assert r.exit_code == 8
    assert fav.calls == []


def test_favorite_failure_exit_5(bus, favorites):
    r = _invoke(["favorite", "--always"], bus([]), favorites(fail="get_client"))
    assert r.exit_code == 5
    assert "error: Favorites: not linked" in r.output


def test_client_id_commands(monkeypatch):
    import playing.cli.cli as cli

    store = {}
    monkeypatch.setattr(cli, "set_client_id", lambda v: store.update(cid=v))
    monkeypatch.setattr(cli, "get_client_id", lambda: store.get("cid"))
    monkeypatch.setattr(cli, "clear_client_id", lambda: store.clear())

    assert "not set" in runner.invoke(app, ["spotify", "client-id"]).stdout
    assert runner.invoke(app, ["spotify", "client-id", "--set", "abc"]).exit_code == 0
    assert "is set" in runner.invoke(app, ["spotify", "client-id"]).stdout
    runner.invoke(app, ["spotify", "client-id", "--clear"])
    assert store == {}
