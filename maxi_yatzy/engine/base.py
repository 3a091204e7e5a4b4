"""
Maxi Yatzy - Game Engine Base Classes

This module defines the foundational data structures and enums used throughout
the game engine. Value objects are frozen dataclasses so a turn or a roll can
be handed around without anyone mutating it behind the game's back.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

DIE_FACES = 6
NUM_DICE = 6
MAX_ROLLS = 3


class GameStatus(Enum):
    """Lifecycle of a game."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class ScoreCategory(Enum):
    """
    The twenty scoring categories of a Maxi Yatzy score card.

    Member order is score card order. Values double as storage keys.
    """
    ONES = "ones"
    TWOS = "twos"
    THREES = "threes"
    FOURS = "fours"
    FIVES = "fives"
    SIXES = "sixes"
    ONE_PAIR = "one_pair"
    TWO_PAIRS = "two_pairs"
    THREE_PAIRS = "three_pairs"
    THREE_OF_A_KIND = "three_of_a_kind"
    FOUR_OF_A_KIND = "four_of_a_kind"
    FIVE_OF_A_KIND = "five_of_a_kind"
    SMALL_STRAIGHT = "small_straight"   # 1-2-3-4-5
    LARGE_STRAIGHT = "large_straight"   # 2-3-4-5-6
    FULL_STRAIGHT = "full_straight"     # 1-2-3-4-5-6
    FULL_HOUSE = "full_house"
    VILLA = "villa"                     # two triples
    TOWER = "tower"                     # four + two
    CHANCE = "chance"
    MAXI_YATZY = "maxi_yatzy"
    YATZY = "maxi_yatzy"                # alias

    @property
    def index(self) -> int:
        """Position of the category on the score card (0-19)."""
        return _CATEGORY_INDEX[self]

    @property
    def is_upper(self) -> bool:
        return self in UPPER_SECTION

    @property
    def face_value(self) -> int | None:
        """Die face counted by an upper-section category, None otherwise."""
        if self.is_upper:
            return self.index + 1
        return None

    @property
    def label(self) -> str:
        """Human-readable name, e.g. "Two Pairs"."""
        return self.value.replace("_", " ").title()

    @classmethod
    def from_key(cls, key: str) -> "ScoreCategory":
        """Look up a category by storage key or member name."""
        try:
            return cls(key)
        except ValueError:
            pass
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError(f"Unknown score category {key!r}.") from None


_CATEGORY_INDEX: dict[ScoreCategory, int] = {
    category: position for position, category in enumerate(ScoreCategory)
}

UPPER_SECTION: tuple[ScoreCategory, ...] = (
    ScoreCategory.ONES,
    ScoreCategory.TWOS,
    ScoreCategory.THREES,
    ScoreCategory.FOURS,
    ScoreCategory.FIVES,
    ScoreCategory.SIXES,
)

LOWER_SECTION: tuple[ScoreCategory, ...] = tuple(
    category for category in ScoreCategory if category not in UPPER_SECTION
)


@dataclass(frozen=True)
class DiceRoll:
    """
    Immutable representation of a dice roll.

    Attributes:
        values: Tuple of dice face values (1-6)
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        """Validate dice values are within valid range."""
        for value in self.values:
            if not isinstance(value, int) or not (1 <= value <= DIE_FACES):
                raise ValueError(
                    f"Invalid die value {value}. "
                    f"Must be between 1 and {DIE_FACES}."
                )

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    @property
    def is_complete(self) -> bool:
        """True when the roll holds a full set of six dice."""
        return len(self.values) == NUM_DICE

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> "DiceRoll":
        """Create a DiceRoll from any sequence type."""
        return cls(values=tuple(values))


@dataclass(frozen=True)
class TurnState:
    """
    Complete state of a player's turn.

    Attributes:
        active_dice: Current dice values (empty before the first roll)
        held_indices: Indices of dice kept through the next reroll
        roll_count: Number of rolls taken this turn (0-3)
    """
    active_dice: tuple[int, ...] = field(default_factory=tuple)
    held_indices: frozenset[int] = field(default_factory=frozenset)
    roll_count: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.roll_count <= MAX_ROLLS):
            raise ValueError(
                f"Roll count must be between 0 and {MAX_ROLLS}, got {self.roll_count}."
            )

    @property
    def has_rolled(self) -> bool:
        return self.roll_count > 0 and len(self.active_dice) == NUM_DICE

    @property
    def rolls_remaining(self) -> int:
        return MAX_ROLLS - self.roll_count

    @property
    def held_dice_values(self) -> tuple[int, ...]:
        """Values of the held dice."""
        return tuple(
            self.active_dice[i] for i in sorted(self.held_indices)
            if i < len(self.active_dice)
        )

    @property
    def unheld_dice_values(self) -> tuple[int, ...]:
        """Values of dice that the next reroll would replace."""
        return tuple(
            v for i, v in enumerate(self.active_dice)
            if i not in self.held_indices
        )
