"""
Maxi Yatzy - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import pytest

from maxi_yatzy.engine.dice import DiceRoller
from maxi_yatzy.engine.game import Game


class ScriptedRandom:
    """Random source that hands out pre-arranged faces in order."""

    def __init__(self, *faces: int) -> None:
        self.faces: list[int] = list(faces)
        self.calls = 0

    def push(self, *faces: int) -> "ScriptedRandom":
        self.faces.extend(faces)
        return self

    def randint(self, a: int, b: int) -> int:
        if not self.faces:
            raise RuntimeError("Scripted random source exhausted")
        self.calls += 1
        return self.faces.pop(0)


class BrokenRandom:
    """Random source whose entropy is never available."""

    def randint(self, a: int, b: int) -> int:
        raise OSError("entropy unavailable")


@pytest.fixture
def script() -> ScriptedRandom:
    """An empty scripted random source; push faces before rolling."""
    return ScriptedRandom()


@pytest.fixture
def roller(script: ScriptedRandom) -> DiceRoller:
    return DiceRoller(script)


@pytest.fixture
def broken_roller() -> DiceRoller:
    return DiceRoller(BrokenRandom())


@pytest.fixture
def game(roller: DiceRoller) -> Game:
    """A started two-player game driven by the scripted source."""
    g = Game(roller=roller, game_id="game-1")
    g.start([("p1", "Alice"), ("p2", "Bob")])
    return g


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def scenario_a_roll() -> tuple[int, ...]:
    return (4, 4, 4, 5, 5, 6)


@pytest.fixture
def six_of_a_kind_roll() -> tuple[int, ...]:
    return (1, 1, 1, 1, 1, 1)
