"""
playing entrypoint

Goals
- One console script target (`playing = playing.cli.entry:run`).
- Last-chance net: anything that escaped the commands still gets the
  "error: <kind>: <cause>" line and the right exit code.
"""

from __future__ import annotations

import sys

from loguru import logger

from playing.cli.cli import main
from playing.errors import wrap


def run() -> None:
    try:
        main()
    except Exception as e:  # noqa: BLE001
        err = wrap(e)
        logger.exception("Unhandled error")
        print(err.render(), file=sys.stderr)
        sys.exit(err.code)


if __name__ == "__main__":
    run()
