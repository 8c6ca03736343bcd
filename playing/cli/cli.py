r"""
Goal: The `playing` command line.

- Export `app` (tests import this).
- Every command builds one action and hands it to the dispatcher.
- Boolean outcomes become exit 0 (true) / 1 (false); errors print
  "error: <kind>: <cause>" to stderr and exit with the kind's code.
- Bus and favorites factories live on ctx.obj so tests can swap them.

Heads-up: `status --quiet` exits 1 when something *is* playing and 0 when
nothing is; scripts relying on it keep working that way.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

import typer
from loguru import logger

from playing import __version__
from playing.adapters.mpris import MprisBus
from playing.adapters.spotify import SpotifyFavorites
from playing.auth import oauth
from playing.auth.spotify_config import clear_client_id, get_client_id, set_client_id
from playing.errors import wrap
from playing.models.actions import (
    Action,
    FavoriteAction,
    Mode,
    OperationAction,
    OpKind,
    PlayerAction,
    StatusAction,
    UrlAction,
)
from playing.models.players import RANKING
from playing.services.dispatcher import dispatch
from playing.services.logs import configure_logging


@dataclass
class Runtime:
    bus_factory: Callable[[], Any] = MprisBus.connect
    favorites_factory: Callable[[], Any] = SpotifyFavorites
    mode: Mode = Mode.SINGLE


app = typer.Typer(
    help="Manage your running multimedia players using MPRIS",
    add_completion=False,
    no_args_is_help=True,
)


def _runtime(ctx: typer.Context) -> Runtime:
    if not isinstance(ctx.obj, Runtime):
        ctx.obj = Runtime()
    return ctx.obj


def _fail(exc: BaseException) -> typer.Exit:
    err = wrap(exc)
    logger.opt(exception=exc).debug("Command failed")
    typer.echo(err.render(), err=True)
    return typer.Exit(err.code)


def _execute(ctx: typer.Context, action: Action) -> None:
    rt = _runtime(ctx)
    try:
        favorites = rt.favorites_factory() if isinstance(action, FavoriteAction) else None
        ok = dispatch(action, RANKING, rt.bus_factory, favorites, echo=typer.echo)
    except Exception as e:  # noqa: BLE001 - classified and reported below
        raise _fail(e)
    raise typer.Exit(0 if ok else 1)


def _version(value: bool) -> None:
    if value:
        typer.echo(f"playing {__version__}")
        raise typer.Exit()


@app.callback()
def _root_callback(
    ctx: typer.Context,
    mode: Mode = typer.Option(
        Mode.SINGLE, "--mode", "-m", case_sensitive=False, help="Reserved; accepted but not used yet"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version, is_eager=True, help="Show version and exit"
    ),
) -> None:
    configure_logging(verbose)
    _runtime(ctx).mode = mode


# -----------------------
# Transport operations
# -----------------------
operation = typer.Typer(
    help="Send a transport command to every ranked player that is running",
    no_args_is_help=True,
)
app.add_typer(operation, name="operation")

# seek offsets may be negative; let "-5" through as an argument
_NUMERIC_ARGS = {"ignore_unknown_options": True}


@operation.command("toggle")
def op_toggle(ctx: typer.Context) -> None:
    """Pause if playing, otherwise play."""
    _execute(ctx, OperationAction(op=OpKind.TOGGLE))


@operation.command("play")
def op_play(ctx: typer.Context) -> None:
    _execute(ctx, OperationAction(op=OpKind.PLAY))


@operation.command("pause")
def op_pause(ctx: typer.Context) -> None:
    _execute(ctx, OperationAction(op=OpKind.PAUSE))


@operation.command("next")
def op_next(ctx: typer.Context) -> None:
    _execute(ctx, OperationAction(op=OpKind.NEXT))


@operation.command("previous")
def op_previous(ctx: typer.Context) -> None:
    _execute(ctx, OperationAction(op=OpKind.PREVIOUS))


@operation.command("rewind")
def op_rewind(
    ctx: typer.Context,
    seconds: float = typer.Argument(1.0, min=0, help="Seconds to go back"),
) -> None:
    _execute(ctx, OperationAction(op=OpKind.REWIND, seconds=seconds))


@operation.command("forward")
def op_forward(
    ctx: typer.Context,
    seconds: float = typer.Argument(1.0, min=0, help="Seconds to skip ahead"),
) -> None:
    _execute(ctx, OperationAction(op=OpKind.FORWARD, seconds=seconds))


@operation.command("seek-relative", context_settings=_NUMERIC_ARGS)
def op_seek_relative(
    ctx: typer.Context,
    seconds: float = typer.Argument(..., help="Signed offset in seconds"),
) -> None:
    _execute(ctx, OperationAction(op=OpKind.SEEK_RELATIVE, seconds=seconds))


@operation.command("seek")
def op_seek(
    ctx: typer.Context,
    seconds: float = typer.Argument(..., min=0, help="Position from the start of the track"),
) -> None:
    _execute(ctx, OperationAction(op=OpKind.SEEK, seconds=seconds))


# -----------------------
# Queries
# -----------------------
@app.command("player")
def player(ctx: typer.Context) -> None:
    """List identities of all running ranked players."""
    _execute(ctx, PlayerAction())


@app.command("status")
def status(
    ctx: typer.Context,
    no_icon: bool = typer.Option(False, "--no-icon", help="Drop the player glyph"),
    spaces_after_icon: int = typer.Option(1, "--spaces-after-icon", min=0),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print nothing; report via exit code"),
) -> None:
    """Show what the first playing ranked player is playing."""
    _execute(ctx, StatusAction(no_icon=no_icon, spaces_after_icon=spaces_after_icon, quiet=quiet))


@app.command("url")
def url(ctx: typer.Context) -> None:
    """Print the track URL of every known running player."""
    _execute(ctx, UrlAction())


@app.command("favorite")
def favorite(
    ctx: typer.Context,
    poll: bool = typer.Option(False, "--poll", "-p", help="Wait until Spotify plays something"),
    always: bool = typer.Option(False, "--always", help="Skip the 'is Spotify running' check"),
) -> None:
    """Add or remove the current Spotify track from your liked songs."""
    _execute(ctx, FavoriteAction(poll=poll, always=always))


# -----------------------
# Spotify account
# -----------------------
spotify = typer.Typer(help="Link the Spotify account used by `favorite`", no_args_is_help=True)
app.add_typer(spotify, name="spotify")


@spotify.command("client-id")
def spotify_client_id(
    set_: Optional[str] = typer.Option(None, "--set", help="Store this client id"),
    clear: bool = typer.Option(False, "--clear", help="Forget the stored client id"),
) -> None:
    try:
        if clear:
            clear_client_id()
            typer.echo("Client id cleared")
        elif set_:
            set_client_id(set_)
            typer.echo("Client id stored")
        else:
            typer.echo("Client id is set" if get_client_id() else "Client id is not set")
    except Exception as e:  # noqa: BLE001
        raise _fail(e)


@spotify.command("login")
def spotify_login(
    no_browser: bool = typer.Option(False, "--no-browser", help="Only print the URL"),
) -> None:
    try:
        ok = oauth.login(open_browser=not no_browser, echo=typer.echo)
    except Exception as e:  # noqa: BLE001
        raise _fail(e)
    typer.echo("Spotify linked" if ok else "Spotify login failed")
    raise typer.Exit(0 if ok else 1)


def main() -> None:
    app(prog_name="playing")


if __name__ == "__main__":
    main()
