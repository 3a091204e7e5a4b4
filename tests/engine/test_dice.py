"""
Maxi Yatzy - Dice Roller Tests
"""

import pytest

from maxi_yatzy.config.settings import Settings
from maxi_yatzy.engine.base import DiceRoll
from maxi_yatzy.engine.dice import DiceRoller, RandomSource, reroll_dice, roll_dice


# === Roll New ===


class TestRollNew:
    """Tests for DiceRoller.roll_new()."""

    def test_returns_dice_roll(self):
        assert isinstance(DiceRoller().roll_new(), DiceRoll)

    def test_default_is_six_dice(self):
        assert len(DiceRoller().roll_new()) == 6

    @pytest.mark.parametrize("count", [0, 1, 5, 6, 10])
    def test_rolls_exactly_n_dice(self, count: int):
        roll = roll_dice(count)
        assert len(roll) == count
        assert all(1 <= v <= 6 for v in roll)

    def test_zero_dice_is_empty_not_error(self):
        assert roll_dice(0).values == ()

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="negative"):
            roll_dice(-1)

    def test_uses_injected_source(self, script, roller):
        script.push(6, 5, 4, 3, 2, 1)
        assert roller.roll_new().values == (6, 5, 4, 3, 2, 1)
        assert script.calls == 6

    def test_value_range(self):
        """Roll many times; every value should be 1-6 and all faces show up."""
        seen = set()
        roller = DiceRoller(RandomSource(seed=7))
        for _ in range(200):
            roll = roller.roll_new()
            assert all(1 <= v <= 6 for v in roll)
            seen.update(roll)
        assert seen == {1, 2, 3, 4, 5, 6}


# === Reroll ===


class TestReroll:
    """Tests for DiceRoller.reroll()."""

    def test_held_dice_are_kept(self, script, roller):
        # Scenario C: hold positions 0, 2, 4 of a straight
        script.push(6, 6, 6)
        result = roller.reroll((1, 2, 3, 4, 5, 6), [0, 2, 4])
        assert len(result) == 6
        assert (result[0], result[2], result[4]) == (1, 3, 5)
        assert (result[1], result[3], result[5]) == (6, 6, 6)
        assert script.calls == 3

    def test_hold_everything_rolls_nothing(self, script, roller):
        result = roller.reroll((2, 2, 3, 3, 4, 4), range(6))
        assert result.values == (2, 2, 3, 3, 4, 4)
        assert script.calls == 0

    def test_hold_nothing_rolls_everything(self, script, roller):
        script.push(1, 1, 1, 1, 1, 1)
        assert roller.reroll((6, 6, 6, 6, 6, 6), set()).values == (1, 1, 1, 1, 1, 1)

    def test_out_of_range_indices_are_ignored(self, script, roller):
        script.push(3, 3, 3, 3, 3)
        result = roller.reroll((1, 2, 3, 4, 5, 6), [5, 6, -1, 42])
        assert result.values == (3, 3, 3, 3, 3, 6)

    def test_accepts_dice_roll(self, script, roller):
        script.push(2)
        current = DiceRoll(values=(1, 1, 1, 1, 1, 1))
        assert roller.reroll(current, [0, 1, 2, 3, 4]).values == (1, 1, 1, 1, 1, 2)

    def test_held_never_change_and_unheld_cover_all_faces(self):
        rng = RandomSource(seed=2024)
        current = (1, 2, 3, 4, 5, 6)
        seen = {i: set() for i in (1, 3, 5)}
        for _ in range(500):
            result = reroll_dice(current, {0, 2, 4}, rng)
            assert (result[0], result[2], result[4]) == (1, 3, 5)
            for i in seen:
                seen[i].add(result[i])
        for faces in seen.values():
            assert faces == {1, 2, 3, 4, 5, 6}


# === Random Source ===


class TestRandomSource:
    def test_same_seed_same_rolls(self):
        a = DiceRoller(RandomSource(seed=99)).roll_new(30)
        b = DiceRoller(RandomSource(seed=99)).roll_new(30)
        assert a == b

    def test_reseed(self):
        rng = RandomSource(seed=1)
        first = [rng.randint(1, 6) for _ in range(10)]
        rng.reseed(1)
        assert [rng.randint(1, 6) for _ in range(10)] == first
        assert rng.seed == 1

    def test_seed_from_settings(self):
        settings = Settings(random_seed=5)
        a = DiceRoller.from_settings(settings).roll_new(12)
        b = DiceRoller.from_settings(settings).roll_new(12)
        assert a == b
        assert DiceRoller.from_settings(settings).rng.seed == 5

    def test_failure_propagates(self, broken_roller):
        with pytest.raises(OSError, match="entropy unavailable"):
            broken_roller.roll_new()

    def test_failure_propagates_on_reroll(self, broken_roller):
        with pytest.raises(OSError):
            broken_roller.reroll((1, 2, 3, 4, 5, 6), [0])
