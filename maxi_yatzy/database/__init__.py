"""
Maxi Yatzy Database Layer.

Record models a storage collaborator uses to persist games between calls.
"""

from maxi_yatzy.database.models import (
    GameRecord,
    PlayerRecord,
    TurnRecord,
    restore_game,
    snapshot_game,
)

__all__ = [
    "GameRecord",
    "PlayerRecord",
    "TurnRecord",
    "restore_game",
    "snapshot_game",
]
