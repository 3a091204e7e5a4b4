"""
Maxi Yatzy - Game Event Definitions

Event types and payloads emitted by a Game on every state change, so a
collaborator (a server broadcasting to clients, a replay log) can follow the
game without polling it.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable


class GameEvent(Enum):
    """Events that can occur during a game."""

    PLAYER_JOINED = auto()
    GAME_STARTED = auto()
    DICE_ROLLED = auto()
    DICE_HELD = auto()
    CATEGORY_SCORED = auto()
    TURN_ADVANCED = auto()
    GAME_FINISHED = auto()


@dataclass
class EventPayload:
    """Wrapper for event data."""

    event: GameEvent
    game_id: str | None = None
    player_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)


EventListener = Callable[[EventPayload], None]
