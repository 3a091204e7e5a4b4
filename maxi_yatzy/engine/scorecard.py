"""
Maxi Yatzy - Score Card

A score card has one slot per category, addressed by the category's card
position. A slot goes from unset (None) to set exactly once.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping

from maxi_yatzy.engine.base import (
    LOWER_SECTION,
    UPPER_SECTION,
    ScoreCategory,
)
from maxi_yatzy.engine.errors import ScoreAlreadySetError
from maxi_yatzy.engine.scoring import MaxiYatzyScoring

NUM_CATEGORIES = len(ScoreCategory)


@dataclass(frozen=True)
class ScoreCard:
    """
    Immutable score card.

    Attributes:
        entries: One slot per category in card order, None while unset
    """
    entries: tuple[int | None, ...] = field(
        default_factory=lambda: (None,) * NUM_CATEGORIES
    )

    def __post_init__(self) -> None:
        """Validate the slot layout."""
        if len(self.entries) != NUM_CATEGORIES:
            raise ValueError(
                f"Score card must have exactly {NUM_CATEGORIES} entries, got {len(self.entries)}."
            )
        for category, score in zip(ScoreCategory, self.entries):
            if score is not None and (not isinstance(score, int) or score < 0):
                raise ValueError(f"Invalid score {score!r} for {category.label}.")

    @classmethod
    def empty(cls) -> "ScoreCard":
        """Create a score card with every category unset."""
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, int | None]) -> "ScoreCard":
        """
        Create a ScoreCard from storage-key format; missing keys are unset.

        Raises:
            ValueError: If a key is unknown or two keys name the same category
        """
        entries: list[int | None] = [None] * NUM_CATEGORIES
        seen: set[ScoreCategory] = set()
        for key, score in data.items():
            category = ScoreCategory.from_key(key)
            if category in seen:
                raise ValueError(f"Duplicate score card key {key!r} for {category.label}.")
            seen.add(category)
            entries[category.index] = score
        return cls(entries=tuple(entries))

    def to_dict(self) -> dict[str, int | None]:
        """Convert to storage-key format."""
        return {category.value: self.get(category) for category in ScoreCategory}

    def get(self, category: ScoreCategory) -> int | None:
        return self.entries[category.index]

    def __getitem__(self, category: ScoreCategory) -> int | None:
        return self.get(category)

    def is_filled(self, category: ScoreCategory) -> bool:
        """Check if a category has been filled."""
        return self.get(category) is not None

    def with_score(self, category: ScoreCategory, score: int) -> "ScoreCard":
        """
        Return a new ScoreCard with ``category`` set.

        Raises:
            ScoreAlreadySetError: If the category is already filled
        """
        if self.is_filled(category):
            raise ScoreAlreadySetError(
                f"{category.label} is already scored ({self.get(category)})."
            )
        entries = list(self.entries)
        entries[category.index] = score
        return replace(self, entries=tuple(entries))

    @property
    def available_categories(self) -> tuple[ScoreCategory, ...]:
        """Unset categories in card order."""
        return tuple(c for c in ScoreCategory if not self.is_filled(c))

    @property
    def filled_count(self) -> int:
        return sum(1 for score in self.entries if score is not None)

    @property
    def is_complete(self) -> bool:
        """Check if all categories are filled."""
        return self.filled_count == NUM_CATEGORIES

    @property
    def upper_total(self) -> int:
        """Total for upper section (Ones through Sixes)."""
        return sum(self.get(c) or 0 for c in UPPER_SECTION)

    @property
    def upper_bonus(self) -> int:
        return MaxiYatzyScoring.upper_section_bonus(self.upper_total)

    @property
    def lower_total(self) -> int:
        return sum(self.get(c) or 0 for c in LOWER_SECTION)

    @property
    def total(self) -> int:
        """Grand total: upper section, bonus and lower section."""
        return self.upper_total + self.upper_bonus + self.lower_total


@dataclass(frozen=True)
class Player:
    """
    A seat in the game.

    Attributes:
        player_id: Identity token supplied by the caller
        name: Display name
        turn_order: Position in the rotation (0-based)
        scorecard: The player's score card
    """
    player_id: str
    name: str
    turn_order: int
    scorecard: ScoreCard = field(default_factory=ScoreCard.empty)

    @property
    def total_score(self) -> int:
        return self.scorecard.total
