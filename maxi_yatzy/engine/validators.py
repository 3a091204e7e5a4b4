"""
Maxi Yatzy - Input Validation Utilities

Provides validation functions for game engine inputs. Validators either return
normalized data or raise a descriptive exception. Held indices are the one
lenient input: out-of-range positions are dropped instead of rejected.
"""

from typing import Iterable, Sequence

from maxi_yatzy.engine.base import DIE_FACES, NUM_DICE
from maxi_yatzy.engine.errors import InvalidOperationError

MIN_PLAYERS = 2
MAX_PLAYERS = 4
MAX_NAME_LENGTH = 30


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 0,
    max_count: int | None = None
) -> tuple[int, ...]:
    """
    Validate and normalize dice values.

    Args:
        values: Sequence of dice values to validate
        min_count: Minimum number of dice required
        max_count: Maximum number of dice allowed (None = no limit)

    Returns:
        Validated values as a tuple

    Raises:
        ValueError: If validation fails
    """
    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= DIE_FACES):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {DIE_FACES}."
            )

    return values_tuple


def normalize_held_indices(
    indices: Iterable[int],
    dice_count: int = NUM_DICE
) -> frozenset[int]:
    """
    Keep only the held indices that point at a die.

    Args:
        indices: Collection of dice indices that are held
        dice_count: Total number of dice in the roll

    Returns:
        The in-range indices as a frozenset
    """
    if not indices:
        return frozenset()
    return frozenset(
        idx for idx in indices
        if isinstance(idx, int) and 0 <= idx < dice_count
    )


def validate_score(score: int) -> int:
    """
    Validate a score value.

    Raises:
        ValueError: If score is not a non-negative integer
    """
    if not isinstance(score, int):
        raise ValueError(f"Score must be an integer, got {type(score).__name__}.")

    if score < 0:
        raise ValueError(f"Score cannot be negative, got {score}.")

    return score


def validate_player_count(count: int) -> int:
    """
    Validate number of players.

    Raises:
        InvalidOperationError: If count is not 2-4
    """
    if not (MIN_PLAYERS <= count <= MAX_PLAYERS):
        raise InvalidOperationError(
            f"Player count must be {MIN_PLAYERS}-{MAX_PLAYERS}, got {count}."
        )

    return count


def validate_player_name(name: str) -> str:
    """
    Validate and strip a display name.

    Raises:
        InvalidOperationError: If the name is empty or too long
    """
    if not isinstance(name, str):
        raise InvalidOperationError(f"Player name must be a string, got {type(name).__name__}.")

    stripped = name.strip()
    if not stripped:
        raise InvalidOperationError("Player name cannot be empty.")
    if len(stripped) > MAX_NAME_LENGTH:
        raise InvalidOperationError(
            f"Player name must be at most {MAX_NAME_LENGTH} characters, got {len(stripped)}."
        )

    return stripped
