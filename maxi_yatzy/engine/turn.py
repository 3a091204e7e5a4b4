"""
Maxi Yatzy - Turn Engine

One player's roll / hold / reroll / select cycle. All methods are class
methods: a TurnState goes in, a new TurnState (or a score) comes out.

Turn Rules:
    - At most three rolls per turn
    - The first roll throws all six dice and drops any stale holds
    - Later rolls keep the held dice and throw the rest
    - Selecting a category needs a completed roll and an unset category
"""

import logging

from maxi_yatzy.engine.base import MAX_ROLLS, NUM_DICE, ScoreCategory, TurnState
from maxi_yatzy.engine.dice import DiceRoller
from maxi_yatzy.engine.errors import InvalidOperationError
from maxi_yatzy.engine.scorecard import ScoreCard
from maxi_yatzy.engine.scoring import MaxiYatzyScoring

logger = logging.getLogger(__name__)


class TurnEngine:
    """
    Stateless engine for a single turn.

    State is passed in and returned, never stored.
    """

    MAX_ROLLS = MAX_ROLLS
    NUM_DICE = NUM_DICE

    @classmethod
    def start(cls) -> TurnState:
        """Fresh turn: no dice, nothing held, no rolls taken."""
        return TurnState()

    @classmethod
    def can_roll(cls, state: TurnState) -> bool:
        return state.roll_count < cls.MAX_ROLLS

    @classmethod
    def roll(cls, state: TurnState, roller: DiceRoller) -> TurnState:
        """
        Roll the dice for this turn.

        Args:
            state: Current turn state
            roller: Dice roller supplying the faces

        Returns:
            New TurnState with the rolled dice and one more roll counted

        Raises:
            InvalidOperationError: If all three rolls are used
        """
        if not cls.can_roll(state):
            raise InvalidOperationError(
                f"No rolls remaining: all {cls.MAX_ROLLS} rolls used this turn."
            )

        if state.roll_count == 0 or len(state.active_dice) != cls.NUM_DICE:
            dice = roller.roll_new(cls.NUM_DICE)
            held: frozenset[int] = frozenset()
        else:
            dice = roller.reroll(state.active_dice, state.held_indices)
            held = state.held_indices

        logger.debug("Roll %d: %s", state.roll_count + 1, dice.values)
        return TurnState(
            active_dice=dice.values,
            held_indices=held,
            roll_count=state.roll_count + 1,
        )

    @classmethod
    def toggle_hold(cls, state: TurnState, index: int) -> TurnState:
        """
        Flip whether the die at ``index`` is held.

        Indices that do not point at one of the six dice leave the state
        unchanged.
        """
        if not isinstance(index, int) or not (0 <= index < cls.NUM_DICE):
            logger.debug("Ignoring hold toggle for index %r", index)
            return state
        return TurnState(
            active_dice=state.active_dice,
            held_indices=state.held_indices ^ {index},
            roll_count=state.roll_count,
        )

    @classmethod
    def can_select(cls, state: TurnState, category: ScoreCategory, scorecard: ScoreCard) -> bool:
        return state.has_rolled and not scorecard.is_filled(category)

    @classmethod
    def score(
        cls,
        state: TurnState,
        category: ScoreCategory,
        scorecard: ScoreCard
    ) -> int:
        """
        Score ``category`` against the turn's dice.

        Raises:
            InvalidOperationError: If no roll has happened yet or the
                category is already filled
        """
        if not state.has_rolled:
            raise InvalidOperationError("Roll the dice before selecting a category.")
        if scorecard.is_filled(category):
            raise InvalidOperationError(
                f"{category.label} is already scored ({scorecard.get(category)})."
            )
        return MaxiYatzyScoring.score_category(category, state.active_dice)

    @classmethod
    def potential_scores(cls, state: TurnState) -> dict[ScoreCategory, int]:
        """Potential score of every category, or an empty dict before a roll."""
        if not state.has_rolled:
            return {}
        return MaxiYatzyScoring.calculate_potential_scores(state.active_dice)
