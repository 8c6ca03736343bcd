"""
Goal: Pydantic shapes for what the user asked us to do.
One model per action family; the dispatcher picks its policy by type.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class Mode(str, Enum):
    # Accepted on the command line, not consulted by dispatch
    SINGLE = "single"
    MULTIPLE = "multiple"


class OpKind(str, Enum):
    TOGGLE = "toggle"
    PLAY = "play"
    PAUSE = "pause"
    NEXT = "next"
    PREVIOUS = "previous"
    REWIND = "rewind"
    FORWARD = "forward"
    SEEK_RELATIVE = "seek-relative"
    SEEK = "seek"


class OperationAction(BaseModel):
    op: OpKind
    # rewind/forward default to one second; seek ops always set it
    seconds: float = 1.0


class PlayerAction(BaseModel):
    pass


class StatusAction(BaseModel):
    no_icon: bool = False
    spaces_after_icon: int = Field(1, ge=0)
    quiet: bool = False


class FavoriteAction(BaseModel):
    poll: bool = False
    always: bool = False


class UrlAction(BaseModel):
    pass


Action = Union[OperationAction, PlayerAction, StatusAction, FavoriteAction, UrlAction]
