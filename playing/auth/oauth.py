"""
Goal: Link a Spotify account with OAuth (PKCE), from a terminal.

- PKCE only: no client secret ever leaves the user's machine.
- `login()` starts a one-shot uvicorn server on the loopback callback port,
  opens the authorize URL in the browser, and stops after the redirect.
- The callback exchanges the code and stores tokens via playing.auth.secrets.
"""

# stdlib imports
import base64  # URL-safe base64 for the PKCE verifier/challenge
import hashlib  # SHA-256 for the S256 challenge
import os  # random bytes for the verifier
import secrets  # random state for CSRF protection
import webbrowser  # open the authorize URL
from typing import Callable, Optional
from urllib.parse import urlencode

# third-party imports
import httpx  # async HTTP client for the token exchange
import uvicorn  # one-shot callback server
from fastapi import APIRouter, FastAPI, Query
from fastapi.responses import HTMLResponse
from loguru import logger
from pydantic import ValidationError

# local imports
from playing.auth.secrets import save_tokens
from playing.auth.spotify_config import get_client_id
from playing.errors import FavoritesError
from playing.models.schemas import TokenResponse
from playing.settings import CALLBACK_HOST, CALLBACK_PORT, HTTP_TIMEOUT, SPOTIFY_REDIRECT

AUTH_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

# Reading the current track and editing the library is all `favorite` needs
SCOPES = "user-read-playback-state user-read-currently-playing user-library-read user-library-modify"


def _code_verifier() -> str:
    """
    Make a URL-safe random verifier for PKCE.
    rstrip trims '=' padding per RFC 7636.
    """
    return base64.urlsafe_b64encode(os.urandom(60)).decode("utf-8").rstrip("=")


def _code_challenge(verifier: str) -> str:
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")


def authorize_url(client_id: str, challenge: str, state: str) -> str:
    params = {
        "client_id": client_id,
        "response_type": "code",
        "redirect_uri": SPOTIFY_REDIRECT,
        "scope": SCOPES,
        "state": state,
        "code_challenge_method": "S256",
        "code_challenge": challenge,
        "show_dialog": "false",
    }
    return f"{AUTH_URL}?{urlencode(params)}"


def callback_router(
    client_id: str,
    verifier: str,
    state: str,
    on_done: Callable[[bool], None],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> APIRouter:
    router = APIRouter()

    @router.get("/callback", response_class=HTMLResponse)
    async def callback(
        state_param: Optional[str] = Query(None, alias="state"),
        code: Optional[str] = None,
        error: Optional[str] = None,
    ):
        # Basic CSRF/PKCE validation
        if error or not code or state_param != state:
            on_done(False)
            return HTMLResponse(
                "<h3>Spotify login was not completed. Run it again.</h3>", status_code=400
            )

        data = {
            "client_id": client_id,
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": SPOTIFY_REDIRECT,
            "code_verifier": verifier,
        }
        try:
            async with httpx.AsyncClient(timeout=HTTP_TIMEOUT, transport=transport) as client:
                r = await client.post(TOKEN_URL, data=data)
            if r.status_code != 200:
                logger.warning("Spotify code exchange failed with HTTP {}", r.status_code)
                on_done(False)
                return HTMLResponse("<h3>Spotify rejected the login.</h3>", status_code=502)
            tok = TokenResponse.from_payload(r.json())
        except (httpx.HTTPError, ValidationError, ValueError) as e:
            # the login server only stops through on_done
            logger.warning("Spotify code exchange failed: {}", e)
            on_done(False)
            return HTMLResponse("<h3>Could not reach Spotify. Run the login again.</h3>", status_code=502)

        try:
            save_tokens(tok.access_token, tok.refresh_token)
        except OSError as e:
            logger.warning("Cannot store Spotify credentials: {}", e)
            on_done(False)
            return HTMLResponse("<h3>Could not store the Spotify login.</h3>", status_code=500)
        on_done(True)
        return HTMLResponse("<h3>Spotify linked. You can close this tab.</h3>")

    return router


def login(open_browser: bool = True, echo: Callable[[str], None] = print) -> bool:
    """
    Run the whole PKCE dance; blocks until Spotify redirects back.
    Returns True when tokens were stored.
    """
    client_id = get_client_id()
    if not client_id:
        raise FavoritesError(
            "Spotify client id missing; set it with `playing spotify client-id --set ID`"
        )

    verifier = _code_verifier()
    state = secrets.token_urlsafe(16)
    outcome = {"ok": False}

    app = FastAPI(title="playing spotify login")
    config = uvicorn.Config(
        app,
        host=CALLBACK_HOST,
        port=CALLBACK_PORT,
        log_config=None,  # loguru handles logs
        access_log=False,
        lifespan="off",
    )
    server = uvicorn.Server(config)

    def on_done(ok: bool) -> None:
        outcome["ok"] = ok
        server.should_exit = True

    app.include_router(callback_router(client_id, verifier, state, on_done))

    url = authorize_url(client_id, _code_challenge(verifier), state)
    echo(f"Open this URL to link Spotify:\n{url}")
    if open_browser:
        webbrowser.open(url, new=2)

    logger.info("Waiting for Spotify callback on {}", SPOTIFY_REDIRECT)
    try:
        server.run()
    except (OSError, SystemExit) as e:
        # uvicorn exits instead of raising when the port is taken
        raise FavoritesError(f"cannot listen on {CALLBACK_HOST}:{CALLBACK_PORT}: {e}") from e
    return outcome["ok"]
