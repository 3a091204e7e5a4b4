"""
Maxi Yatzy - Turn Policy

Table-side conveniences layered over a Game's legal actions:

    - Auto-roll: the first roll of every new turn happens by itself
    - Zero-score confirmation: scoring 0 in a category must be confirmed
    - Auto-select: a forced pick for an external turn timer

The policy only calls Game.roll() and Game.select_category(); the game's own
rules are never bypassed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from maxi_yatzy.config.settings import Settings
from maxi_yatzy.engine.base import GameStatus, ScoreCategory
from maxi_yatzy.engine.errors import InvalidOperationError
from maxi_yatzy.engine.game import Game
from maxi_yatzy.engine.scorecard import ScoreCard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionResult:
    """
    Outcome of a category selection through the policy.

    Attributes:
        category: The category asked for
        score: Score the category gives for the current dice
        committed: Whether the score was written to the card
        needs_confirmation: True when a zero score is waiting for confirmation
    """
    category: ScoreCategory
    score: int
    committed: bool
    needs_confirmation: bool = False


def best_available_category(
    potential: Mapping[ScoreCategory, int],
    scorecard: ScoreCard,
) -> ScoreCategory | None:
    """
    Pick the unfilled category with the highest potential score.

    Ties go to the category that comes first on the card. Returns None when
    the card is full.
    """
    best: ScoreCategory | None = None
    best_score = -1
    for category in scorecard.available_categories:
        score = potential.get(category, 0)
        if score > best_score:
            best, best_score = category, score
    return best


class TurnPolicy:
    """Applies auto-roll and zero-score confirmation to a Game."""

    def __init__(
        self,
        game: Game,
        auto_roll: bool = False,
        confirm_zero_score: bool = True,
    ) -> None:
        self.game = game
        self.auto_roll = auto_roll
        self.confirm_zero_score = confirm_zero_score

    @classmethod
    def from_settings(cls, game: Game, settings: Settings) -> "TurnPolicy":
        return cls(
            game,
            auto_roll=settings.auto_roll,
            confirm_zero_score=settings.confirm_zero_score,
        )

    def begin_turn(self) -> tuple[int, ...] | None:
        """
        Take the automatic first roll if it applies.

        Returns:
            The rolled dice, or None when nothing was rolled
        """
        if not self.auto_roll or self.game.status is not GameStatus.PLAYING:
            return None
        if self.game.turn.roll_count > 0:
            return None
        dice = self.game.roll()
        logger.debug("Auto-rolled %s for %s", dice, self.game.active_player.name)
        return dice

    def select(self, category: ScoreCategory, confirmed: bool = False) -> SelectionResult:
        """
        Select a category, asking for confirmation before a zero score.

        Raises:
            InvalidOperationError: Whatever Game.select_category rejects
        """
        player = self.game.active_player
        if player is None:
            raise InvalidOperationError(
                f"Cannot select a category while the game is {self.game.status.value}."
            )
        potential = self.game.potential_scores()
        if potential and not player.scorecard.is_filled(category):
            preview = potential[category]
            if preview == 0 and self.confirm_zero_score and not confirmed:
                logger.debug("Zero score in %s needs confirmation", category.label)
                return SelectionResult(
                    category=category, score=0, committed=False, needs_confirmation=True
                )

        score = self.game.select_category(category)
        self.begin_turn()
        return SelectionResult(category=category, score=score, committed=True)

    def auto_select(self) -> SelectionResult:
        """
        Force the active player's turn to end.

        Rolls once if the turn has not rolled yet, then scores the best
        available category without asking for confirmation.
        """
        player = self.game.active_player
        if player is None:
            raise InvalidOperationError(
                f"Cannot auto-select while the game is {self.game.status.value}."
            )
        if self.game.turn.roll_count == 0:
            self.game.roll()

        category = best_available_category(self.game.potential_scores(), player.scorecard)
        if category is None:
            raise InvalidOperationError(f"{player.name} has no open categories.")
        logger.info("Auto-selecting %s for %s", category.label, player.name)
        return self.select(category, confirmed=True)
