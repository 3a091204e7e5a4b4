"""
Maxi Yatzy Game Engine.

Pure Python game logic with zero UI/database dependencies.
Handles dice rolling, scoring, turn limits and game rotation.
"""

from maxi_yatzy.engine.base import (
    LOWER_SECTION,
    UPPER_SECTION,
    DiceRoll,
    GameStatus,
    ScoreCategory,
    TurnState,
)
from maxi_yatzy.engine.dice import DiceRoller, RandomSource, reroll_dice, roll_dice
from maxi_yatzy.engine.errors import InvalidOperationError, ScoreAlreadySetError
from maxi_yatzy.engine.events import EventPayload, GameEvent
from maxi_yatzy.engine.game import Game, PlayerStanding, Standings
from maxi_yatzy.engine.policy import SelectionResult, TurnPolicy, best_available_category
from maxi_yatzy.engine.scorecard import Player, ScoreCard
from maxi_yatzy.engine.scoring import MaxiYatzyScoring, calculate_potential_scores
from maxi_yatzy.engine.turn import TurnEngine

__all__ = [
    # Data Classes
    "DiceRoll",
    "TurnState",
    "ScoreCard",
    "Player",
    "PlayerStanding",
    "Standings",
    "EventPayload",
    "SelectionResult",
    # Enums
    "GameStatus",
    "ScoreCategory",
    "GameEvent",
    "UPPER_SECTION",
    "LOWER_SECTION",
    # Errors
    "InvalidOperationError",
    "ScoreAlreadySetError",
    # Engines
    "DiceRoller",
    "RandomSource",
    "MaxiYatzyScoring",
    "TurnEngine",
    "Game",
    "TurnPolicy",
    # Functions
    "roll_dice",
    "reroll_dice",
    "calculate_potential_scores",
    "best_available_category",
]
