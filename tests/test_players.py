"""
Goal: The catalog is the single source of names and icons.
"""
import pytest

from playing.models.players import RANKING, PlayerIdentity, PlayerKind, icon_for


@pytest.mark.parametrize(
    "identity,kind",
    [
        ("mpv", PlayerKind.MPV),
        ("vlc", PlayerKind.VLC),
        ("firefox", PlayerKind.FIREFOX),
        ("Spotify", PlayerKind.SPOTIFY),
        ("chrome", PlayerKind.CHROME),
    ],
)
def test_parse_known(identity, kind):
    parsed = PlayerIdentity.parse(identity)
    assert parsed is not None
    assert parsed.kind is kind
    assert parsed.name == identity


def test_parse_is_case_sensitive_and_total():
    assert PlayerIdentity.parse("spotify") is None
    assert PlayerIdentity.parse("VLC media player") is None
    assert PlayerIdentity.parse("") is None


def test_icons():
    assert icon_for("Spotify") == "\uf1bc"
    assert icon_for("mpv") == "\uf36e"
    assert icon_for("vlc") == "\ufa7b"
    assert icon_for("firefox") == "\uf269"
    assert icon_for("chrome") == "\uf268"
    assert icon_for("rhythmbox") == ""


def test_custom_identity_has_no_icon():
    custom = PlayerIdentity.named("mpv")
    assert custom.name == "mpv"
    assert custom.icon == ""
    assert custom != PlayerIdentity.parse("mpv")


def test_of_rejects_custom():
    with pytest.raises(ValueError):
        PlayerIdentity.of(PlayerKind.CUSTOM)


def test_ranking_order():
    assert [p.name for p in RANKING] == ["mpv", "vlc", "firefox", "Spotify", "chrome"]
    assert RANKING[0].kind is PlayerKind.CUSTOM
