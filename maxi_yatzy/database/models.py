"""
Maxi Yatzy - Database Models

Pydantic models describing how a storage layer persists a game: one game row,
one row per seated player and the active turn. The engine never stores
anything itself; snapshot_game() and restore_game() convert between a live
Game and these records between calls.
"""

from datetime import datetime, timezone
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator

from maxi_yatzy.engine.base import GameStatus, ScoreCategory, TurnState
from maxi_yatzy.engine.dice import DiceRoller
from maxi_yatzy.engine.events import EventListener
from maxi_yatzy.engine.game import Game
from maxi_yatzy.engine.scorecard import Player, ScoreCard
from maxi_yatzy.engine.validators import MAX_NAME_LENGTH, MAX_PLAYERS

DieFace = Annotated[int, Field(ge=1, le=6)]
DieIndex = Annotated[int, Field(ge=0, le=5)]
Score = Annotated[int, Field(ge=0)]


class PlayerRecord(BaseModel):
    """Mirrors the `players` table."""

    id: str
    game_id: str | None = None
    username: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    turn_order: int = Field(ge=0, lt=MAX_PLAYERS)
    score_card: dict[str, Score | None] = Field(default_factory=dict)
    total_score: int = 0

    model_config = {"from_attributes": True}

    @field_validator("score_card")
    @classmethod
    def _known_categories(cls, value: dict[str, int | None]) -> dict[str, int | None]:
        normalized: dict[str, int | None] = {}
        for key, score in value.items():
            category = ScoreCategory.from_key(key)
            if category.value in normalized:
                raise ValueError(f"Duplicate score card key {key!r} for {category.label}.")
            normalized[category.value] = score
        return normalized


class TurnRecord(BaseModel):
    """Mirrors the `turns` table (the active player's turn)."""

    game_id: str | None = None
    active_dice: list[DieFace] = Field(default_factory=list, max_length=6)
    held_indices: list[DieIndex] = Field(default_factory=list)
    roll_count: int = Field(default=0, ge=0, le=3)

    model_config = {"from_attributes": True}


class GameRecord(BaseModel):
    """Mirrors the `games` table, with its players and turn attached."""

    id: str | None = None
    status: Literal["waiting", "playing", "finished"] = "waiting"
    current_turn_index: int = Field(default=0, ge=0)
    round_number: int = Field(default=0, ge=0)
    winner_ids: list[str] = Field(default_factory=list)
    players: list[PlayerRecord] = Field(default_factory=list, max_length=MAX_PLAYERS)
    turn: TurnRecord = Field(default_factory=TurnRecord)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"from_attributes": True}


def snapshot_game(game: Game) -> GameRecord:
    """Capture a game as storage records."""
    standings = game.standings()
    turn = game.turn
    return GameRecord(
        id=game.game_id,
        status=game.status.value,
        current_turn_index=game.active_index,
        round_number=game.round_number,
        winner_ids=[w.player_id for w in standings.winners],
        players=[
            PlayerRecord(
                id=p.player_id,
                game_id=game.game_id,
                username=p.name,
                turn_order=p.turn_order,
                score_card=p.scorecard.to_dict(),
                total_score=p.total_score,
            )
            for p in game.players
        ],
        turn=TurnRecord(
            game_id=game.game_id,
            active_dice=list(turn.active_dice),
            held_indices=sorted(turn.held_indices),
            roll_count=turn.roll_count,
        ),
    )


def restore_game(
    record: GameRecord,
    roller: DiceRoller | None = None,
    on_event: EventListener | None = None,
) -> Game:
    """
    Rebuild a live Game from storage records.

    Raises:
        ValueError: If the records do not describe a reachable game
    """
    players = [
        Player(
            player_id=p.id,
            name=p.username,
            turn_order=p.turn_order,
            scorecard=ScoreCard.from_dict(p.score_card),
        )
        for p in sorted(record.players, key=lambda p: p.turn_order)
    ]
    turn = TurnState(
        active_dice=tuple(record.turn.active_dice),
        held_indices=frozenset(record.turn.held_indices),
        roll_count=record.turn.roll_count,
    )
    return Game.from_state(
        players,
        GameStatus(record.status),
        active_index=record.current_turn_index,
        round_number=record.round_number,
        turn=turn,
        roller=roller,
        game_id=record.id,
        on_event=on_event,
    )
