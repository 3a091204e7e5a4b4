"""
Maxi Yatzy - Scoring Engine

This module maps a six-die roll to the score each of the twenty categories
would give for it. All methods are stateless class methods. They accept any
sequence of integers and never raise: faces outside 1-6 are ignored, and a
roll that is not six dice long still gets a best-effort table.

Scoring Rules:
    - Ones..Sixes: sum of the dice showing that face
    - Upper bonus: 100 points once the upper section reaches 84
    - One Pair / Three / Four / Five of a Kind: highest face with N copies, × N
    - Two Pairs: the two highest distinct pairs
    - Three Pairs: three distinct pairs, sum of all dice
    - Small Straight (1-5): 15, Large Straight (2-6): 20, Full Straight: 21
    - Full House: a triple plus a pair, sum of all dice
    - Villa: two triples, sum of all dice
    - Tower: four of a kind plus a pair, sum of all dice
    - Chance: sum of all dice
    - Maxi Yatzy: six of a kind, 100 points
"""

import logging
from collections import Counter
from typing import Sequence

from maxi_yatzy.engine.base import (
    DIE_FACES,
    NUM_DICE,
    DiceRoll,
    ScoreCategory,
)

logger = logging.getLogger(__name__)


class MaxiYatzyScoring:
    """
    Stateless scoring rules for Maxi Yatzy.

    All methods are class methods operating on immutable inputs.
    """

    # Upper-section bonus
    UPPER_BONUS_THRESHOLD = 84
    UPPER_BONUS_POINTS = 100

    # Fixed-value categories
    SMALL_STRAIGHT_POINTS = 15
    LARGE_STRAIGHT_POINTS = 20
    FULL_STRAIGHT_POINTS = 21
    MAXI_YATZY_POINTS = 100

    SMALL_STRAIGHT_FACES = frozenset({1, 2, 3, 4, 5})
    LARGE_STRAIGHT_FACES = frozenset({2, 3, 4, 5, 6})
    FULL_STRAIGHT_FACES = frozenset({1, 2, 3, 4, 5, 6})

    OF_A_KIND = {
        ScoreCategory.ONE_PAIR: 2,
        ScoreCategory.THREE_OF_A_KIND: 3,
        ScoreCategory.FOUR_OF_A_KIND: 4,
        ScoreCategory.FIVE_OF_A_KIND: 5,
    }

    @staticmethod
    def _values(dice: Sequence[int] | DiceRoll) -> tuple[int, ...]:
        """Faces of the roll that are real die faces."""
        values = dice.values if isinstance(dice, DiceRoll) else tuple(dice)
        return tuple(
            v for v in values
            if isinstance(v, int) and 1 <= v <= DIE_FACES
        )

    @classmethod
    def count_faces(cls, dice: Sequence[int] | DiceRoll) -> Counter[int]:
        """Count occurrences of each valid face value."""
        return Counter(cls._values(dice))

    @classmethod
    def score_upper(cls, dice: Sequence[int] | DiceRoll, face: int) -> int:
        """Sum of the dice showing ``face``."""
        if not (1 <= face <= DIE_FACES):
            return 0
        return cls.count_faces(dice)[face] * face

    @classmethod
    def upper_section_bonus(cls, upper_total: int) -> int:
        """Bonus earned by an upper-section subtotal."""
        if upper_total >= cls.UPPER_BONUS_THRESHOLD:
            return cls.UPPER_BONUS_POINTS
        return 0

    @classmethod
    def score_n_of_a_kind(cls, dice: Sequence[int] | DiceRoll, required: int) -> int:
        """
        Score the highest face appearing at least ``required`` times.

        Ties between faces go to the higher face, not the larger count.
        """
        if required < 2:
            return 0
        counts = cls.count_faces(dice)
        for face in range(DIE_FACES, 0, -1):
            if counts[face] >= required:
                return face * required
        return 0

    @classmethod
    def score_two_pairs(cls, dice: Sequence[int] | DiceRoll) -> int:
        """
        Two pairs of different faces, highest first.

        Four or more of one face is still a single pair value here.
        """
        counts = cls.count_faces(dice)
        pairs = [face for face in range(DIE_FACES, 0, -1) if counts[face] >= 2]
        if len(pairs) >= 2:
            return pairs[0] * 2 + pairs[1] * 2
        return 0

    @classmethod
    def score_three_pairs(cls, dice: Sequence[int] | DiceRoll) -> int:
        """Three distinct faces, each exactly twice."""
        values = cls._values(dice)
        counts = Counter(values)
        pair_faces = [face for face, count in counts.items() if count == 2]
        if len(pair_faces) == 3 and len(values) == NUM_DICE:
            return sum(values)
        return 0

    @classmethod
    def _score_straight(
        cls,
        dice: Sequence[int] | DiceRoll,
        required: frozenset[int],
        points: int,
    ) -> int:
        if required.issubset(cls._values(dice)):
            return points
        return 0

    @classmethod
    def score_small_straight(cls, dice: Sequence[int] | DiceRoll) -> int:
        return cls._score_straight(dice, cls.SMALL_STRAIGHT_FACES, cls.SMALL_STRAIGHT_POINTS)

    @classmethod
    def score_large_straight(cls, dice: Sequence[int] | DiceRoll) -> int:
        return cls._score_straight(dice, cls.LARGE_STRAIGHT_FACES, cls.LARGE_STRAIGHT_POINTS)

    @classmethod
    def score_full_straight(cls, dice: Sequence[int] | DiceRoll) -> int:
        return cls._score_straight(dice, cls.FULL_STRAIGHT_FACES, cls.FULL_STRAIGHT_POINTS)

    @classmethod
    def full_house_faces(cls, dice: Sequence[int] | DiceRoll) -> tuple[int, int] | None:
        """
        Find the (triple, pair) faces of the best full house, if any.

        Triples are tried from the highest face down. The pair may reuse the
        triple's face only when five or more dice show it.
        """
        counts = cls.count_faces(dice)
        for triple in range(DIE_FACES, 0, -1):
            if counts[triple] < 3:
                continue
            for pair in range(DIE_FACES, 0, -1):
                if pair != triple and counts[pair] >= 2:
                    return triple, pair
                if pair == triple and counts[triple] >= 5:
                    return triple, pair
        return None

    @classmethod
    def score_full_house(cls, dice: Sequence[int] | DiceRoll) -> int:
        """A triple plus a pair scores the sum of all dice."""
        if cls.full_house_faces(dice) is None:
            return 0
        return sum(cls._values(dice))

    @classmethod
    def score_villa(cls, dice: Sequence[int] | DiceRoll) -> int:
        """Two different faces, three of each."""
        values = cls._values(dice)
        triples = [face for face, count in Counter(values).items() if count >= 3]
        if len(triples) == 2:
            return sum(values)
        return 0

    @classmethod
    def score_tower(cls, dice: Sequence[int] | DiceRoll) -> int:
        """Four of one face plus a pair of another."""
        values = cls._values(dice)
        counts = Counter(values)
        for quad, quad_count in counts.items():
            if quad_count < 4:
                continue
            if any(face != quad and count >= 2 for face, count in counts.items()):
                return sum(values)
        return 0

    @classmethod
    def score_chance(cls, dice: Sequence[int] | DiceRoll) -> int:
        return sum(cls._values(dice))

    @classmethod
    def score_maxi_yatzy(cls, dice: Sequence[int] | DiceRoll) -> int:
        """100 points when all six dice show the same face."""
        counts = cls.count_faces(dice)
        if any(count >= NUM_DICE for count in counts.values()):
            return cls.MAXI_YATZY_POINTS
        return 0

    @classmethod
    def score_category(
        cls,
        category: ScoreCategory,
        dice: Sequence[int] | DiceRoll
    ) -> int:
        """
        Calculate the score one category would give for a roll.

        Args:
            category: Category to evaluate
            dice: Dice values (sequence or DiceRoll)

        Returns:
            Non-negative score, 0 if the roll does not qualify
        """
        if category.is_upper:
            return cls.score_upper(dice, category.face_value)
        if category in cls.OF_A_KIND:
            return cls.score_n_of_a_kind(dice, cls.OF_A_KIND[category])

        scorer = {
            ScoreCategory.TWO_PAIRS: cls.score_two_pairs,
            ScoreCategory.THREE_PAIRS: cls.score_three_pairs,
            ScoreCategory.SMALL_STRAIGHT: cls.score_small_straight,
            ScoreCategory.LARGE_STRAIGHT: cls.score_large_straight,
            ScoreCategory.FULL_STRAIGHT: cls.score_full_straight,
            ScoreCategory.FULL_HOUSE: cls.score_full_house,
            ScoreCategory.VILLA: cls.score_villa,
            ScoreCategory.TOWER: cls.score_tower,
            ScoreCategory.CHANCE: cls.score_chance,
            ScoreCategory.MAXI_YATZY: cls.score_maxi_yatzy,
        }[category]
        return scorer(dice)

    @classmethod
    def calculate_potential_scores(
        cls,
        dice: Sequence[int] | DiceRoll
    ) -> dict[ScoreCategory, int]:
        """
        Calculate the score of every category for the same roll.

        Does not consider whether a category has already been used.

        Args:
            dice: The current dice (should be six)

        Returns:
            Mapping with exactly one entry per category
        """
        count = len(dice)
        if count != NUM_DICE:
            logger.warning(
                "Calculating scores with %d dice, expected %d", count, NUM_DICE
            )
        return {category: cls.score_category(category, dice) for category in ScoreCategory}

    @classmethod
    def max_score(cls, category: ScoreCategory) -> int:
        """Highest score a category can ever give."""
        if category.is_upper:
            return category.face_value * NUM_DICE
        ceilings = {
            ScoreCategory.TWO_PAIRS: 6 * 2 + 5 * 2,
            ScoreCategory.THREE_PAIRS: (6 + 5 + 4) * 2,
            ScoreCategory.SMALL_STRAIGHT: cls.SMALL_STRAIGHT_POINTS,
            ScoreCategory.LARGE_STRAIGHT: cls.LARGE_STRAIGHT_POINTS,
            ScoreCategory.FULL_STRAIGHT: cls.FULL_STRAIGHT_POINTS,
            ScoreCategory.FULL_HOUSE: DIE_FACES * NUM_DICE,
            ScoreCategory.VILLA: (6 + 5) * 3,
            ScoreCategory.TOWER: 6 * 4 + 5 * 2,
            ScoreCategory.CHANCE: DIE_FACES * NUM_DICE,
            ScoreCategory.MAXI_YATZY: cls.MAXI_YATZY_POINTS,
        }
        if category in cls.OF_A_KIND:
            return DIE_FACES * cls.OF_A_KIND[category]
        return ceilings[category]


def calculate_potential_scores(dice: Sequence[int] | DiceRoll) -> dict[ScoreCategory, int]:
    """Potential score of every category for ``dice``."""
    return MaxiYatzyScoring.calculate_potential_scores(dice)
