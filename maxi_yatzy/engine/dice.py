"""
Maxi Yatzy - Dice Roller

Rolls fresh dice and rerolls unheld dice. Randomness comes from an injected
source so games can be replayed from a seed, and so tests can script exact
faces. Errors raised by the source propagate to the caller untouched.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Protocol, Sequence

from maxi_yatzy.config.settings import Settings
from maxi_yatzy.engine.base import DIE_FACES, NUM_DICE, DiceRoll

logger = logging.getLogger(__name__)


class RandomSourceProtocol(Protocol):
    """Anything that can draw a uniform integer in [a, b]."""

    def randint(self, a: int, b: int) -> int:
        ...


class RandomSource:
    """Seedable randomness source.

    Usage:
        rng = RandomSource(seed=123)  # deterministic
        v = rng.randint(1, 6)
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._rng = random.Random(seed) if seed is not None else random.Random()

    @property
    def seed(self) -> int | None:
        return self._seed

    def reseed(self, seed: int | None) -> None:
        """Reseed RNG (None -> fresh non-deterministic)."""
        self._seed = seed
        self._rng = random.Random(seed) if seed is not None else random.Random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


class DiceRoller:
    """
    Rolls six-sided dice from a random source.

    The roller holds no game state: every call returns a new DiceRoll.
    """

    NUM_DICE = NUM_DICE
    DIE_FACES = DIE_FACES

    def __init__(self, rng: RandomSourceProtocol | None = None) -> None:
        self.rng = rng if rng is not None else RandomSource()

    @classmethod
    def from_settings(cls, settings: Settings) -> "DiceRoller":
        """Roller seeded from ``settings.random_seed`` (unseeded when None)."""
        return cls(RandomSource(seed=settings.random_seed))

    def _roll_one(self) -> int:
        return self.rng.randint(1, self.DIE_FACES)

    def roll_new(self, count: int = NUM_DICE) -> DiceRoll:
        """
        Roll the specified number of dice.

        Args:
            count: Number of dice to roll (default: 6). Zero gives an empty roll.

        Returns:
            DiceRoll with random values

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"Cannot roll a negative number of dice, got {count}.")
        roll = DiceRoll(values=tuple(self._roll_one() for _ in range(count)))
        logger.debug("Rolled %s", roll.values)
        return roll

    def reroll(
        self,
        current: Sequence[int] | DiceRoll,
        held: Iterable[int],
    ) -> DiceRoll:
        """
        Reroll every die whose index is not held.

        Held indices that do not point at a die are ignored.

        Args:
            current: Dice values before the reroll
            held: Indices of dice to keep

        Returns:
            DiceRoll of the same length with unheld dice replaced
        """
        values = current.values if isinstance(current, DiceRoll) else tuple(current)
        held_set = frozenset(held)
        roll = DiceRoll(values=tuple(
            value if index in held_set else self._roll_one()
            for index, value in enumerate(values)
        ))
        logger.debug("Rerolled %s holding %s -> %s", values, sorted(held_set), roll.values)
        return roll


def roll_dice(count: int = NUM_DICE, rng: RandomSourceProtocol | None = None) -> DiceRoll:
    """Roll ``count`` fresh dice."""
    return DiceRoller(rng).roll_new(count)


def reroll_dice(
    current: Sequence[int] | DiceRoll,
    held: Iterable[int],
    rng: RandomSourceProtocol | None = None,
) -> DiceRoll:
    """Reroll the dice of ``current`` whose indices are not in ``held``."""
    return DiceRoller(rng).reroll(current, held)
