"""
Maxi Yatzy - Game State Machine

Owns the players, the turn rotation and the active player's turn. A game
moves WAITING -> PLAYING -> FINISHED; it finishes once every player has all
twenty categories filled.

A Game is a plain in-memory object. It does not authorize callers or
serialize concurrent access: whoever embeds it decides who may act and makes
sure actions arrive one at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from maxi_yatzy.engine.base import NUM_DICE, GameStatus, ScoreCategory, TurnState
from maxi_yatzy.engine.dice import DiceRoller
from maxi_yatzy.engine.errors import InvalidOperationError
from maxi_yatzy.engine.events import EventListener, EventPayload, GameEvent
from maxi_yatzy.engine.scorecard import Player, ScoreCard
from maxi_yatzy.engine.turn import TurnEngine
from maxi_yatzy.engine.validators import (
    MAX_PLAYERS,
    normalize_held_indices,
    validate_dice_values,
    validate_player_count,
    validate_player_name,
    validate_score,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerStanding:
    """A player's totals at the time standings were taken."""
    player_id: str
    name: str
    upper_total: int
    upper_bonus: int
    lower_total: int
    total: int
    rank: int


@dataclass(frozen=True)
class Standings:
    """
    Ranking of all players.

    Attributes:
        rankings: Players ordered by total, highest first (turn order breaks
            display ties; tied players share a rank)
        winners: Every player on the top total once the game is finished,
            empty while it is still going
        is_final: Whether the game was finished when these were taken
    """
    rankings: tuple[PlayerStanding, ...]
    winners: tuple[PlayerStanding, ...]
    is_final: bool

    @property
    def is_tie(self) -> bool:
        return len(self.winners) > 1

    def __str__(self) -> str:
        lines = []
        for standing in self.rankings:
            marker = " *" if standing in self.winners else ""
            lines.append(f"{standing.rank}. {standing.name}: {standing.total}{marker}")
        return "\n".join(lines)


PlayerSpec = str | tuple[str, str]


class Game:
    """
    A single Maxi Yatzy game for 2-4 players.

    Usage:
        game = Game()
        game.start(["Alice", "Bob"])
        game.roll()
        game.toggle_hold(0)
        game.roll()
        game.select_category(ScoreCategory.CHANCE)
    """

    def __init__(
        self,
        roller: DiceRoller | None = None,
        game_id: str | None = None,
        on_event: EventListener | None = None,
    ) -> None:
        self.roller = roller if roller is not None else DiceRoller()
        self.game_id = game_id
        self.on_event = on_event
        self._players: list[Player] = []
        self._status = GameStatus.WAITING
        self._active_index = 0
        self._round_number = 0
        self._turn = TurnEngine.start()

    @classmethod
    def from_state(
        cls,
        players: Sequence[Player],
        status: GameStatus,
        active_index: int = 0,
        round_number: int = 0,
        turn: TurnState | None = None,
        *,
        roller: DiceRoller | None = None,
        game_id: str | None = None,
        on_event: EventListener | None = None,
    ) -> "Game":
        """
        Rebuild a game from previously captured state.

        Raises:
            ValueError: If the pieces do not describe a reachable game
        """
        if len(players) > MAX_PLAYERS:
            raise ValueError(f"At most {MAX_PLAYERS} players, got {len(players)}.")
        if status is not GameStatus.WAITING:
            validate_player_count(len(players))
            if not (0 <= active_index < len(players)):
                raise ValueError(f"Active index {active_index} is out of range.")
        complete = bool(players) and all(p.scorecard.is_complete for p in players)
        if (status is GameStatus.FINISHED) != complete:
            raise ValueError(
                f"Status {status.value} does not match score cards "
                f"({'complete' if complete else 'incomplete'})."
            )
        player_ids = [p.player_id for p in players]
        if len(set(player_ids)) != len(player_ids):
            raise ValueError(f"Player ids must be unique, got {player_ids}.")
        names = [p.name.casefold() for p in players]
        if len(set(names)) != len(names):
            raise ValueError("Player names must be unique.")

        if turn is not None:
            dice = validate_dice_values(turn.active_dice, max_count=NUM_DICE)
            if turn.roll_count > 0 and len(dice) != NUM_DICE:
                raise ValueError(
                    f"A turn with {turn.roll_count} roll(s) needs {NUM_DICE} dice, got {len(dice)}."
                )
            if turn.roll_count == 0 and dice:
                raise ValueError("A turn with no rolls cannot have dice.")
            if status is not GameStatus.PLAYING and turn.roll_count > 0:
                raise ValueError(f"No turn can be in progress while the game is {status.value}.")

        game = cls(roller=roller, game_id=game_id, on_event=on_event)
        game._players = [replace(p, turn_order=i) for i, p in enumerate(players)]
        game._status = status
        game._active_index = active_index
        game._round_number = round_number
        if turn is not None:
            game._turn = replace(
                turn,
                active_dice=dice,
                held_indices=normalize_held_indices(turn.held_indices, len(dice)),
            )
        return game

    # ── Read-only state ────────────────────────────────────────────────

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_player(self) -> Player | None:
        """The player whose turn it is, None unless the game is playing."""
        if self._status is not GameStatus.PLAYING:
            return None
        return self._players[self._active_index]

    @property
    def turn(self) -> TurnState:
        return self._turn

    @property
    def round_number(self) -> int:
        """Current round (1-20), 0 before the game starts."""
        return self._round_number

    def potential_scores(self) -> dict[ScoreCategory, int]:
        """Potential scores for the active dice, empty before the first roll."""
        return TurnEngine.potential_scores(self._turn)

    def available_categories(self) -> tuple[ScoreCategory, ...]:
        """Categories the active player can still fill."""
        player = self.active_player
        if player is None:
            return ()
        return player.scorecard.available_categories

    # ── Lobby ──────────────────────────────────────────────────────────

    def add_player(self, name: str, player_id: str | None = None) -> Player:
        """
        Seat a player while the game is waiting to start.

        Raises:
            InvalidOperationError: If the game has started, is full, or the
                name or id is already taken
        """
        self._require_status(GameStatus.WAITING, "join")
        if len(self._players) >= MAX_PLAYERS:
            raise InvalidOperationError(f"Game is full ({MAX_PLAYERS} players).")

        player = self._seat(name, player_id, len(self._players), self._players)
        self._players.append(player)
        logger.info("Player %s (%s) joined game %s", player.name, player.player_id, self.game_id)
        self._emit(GameEvent.PLAYER_JOINED, player.player_id, {"name": player.name})
        return player

    @staticmethod
    def _seat(
        name: str,
        player_id: str | None,
        turn_order: int,
        seated: Sequence[Player],
    ) -> Player:
        name = validate_player_name(name)
        if player_id is None:
            player_id = str(turn_order + 1)
        if any(p.player_id == player_id for p in seated):
            raise InvalidOperationError(f"Player id {player_id!r} is already in this game.")
        if any(p.name.casefold() == name.casefold() for p in seated):
            raise InvalidOperationError(f"Name {name!r} is already taken in this game.")
        return Player(player_id=player_id, name=name, turn_order=turn_order)

    # ── Lifecycle ──────────────────────────────────────────────────────

    def start(self, players: Sequence[PlayerSpec] | None = None) -> None:
        """
        Start the game.

        Args:
            players: Optional names (or ``(player_id, name)`` pairs) in turn
                order. When omitted the players already seated play.

        Raises:
            InvalidOperationError: If the game is not waiting or the player
                count is not 2-4
        """
        self._require_status(GameStatus.WAITING, "start")

        if players is not None:
            validate_player_count(len(players))
            seated: list[Player] = []
            for turn_order, spec in enumerate(players):
                if isinstance(spec, tuple):
                    player_id, name = spec
                else:
                    player_id, name = None, spec
                seated.append(self._seat(name, player_id, turn_order, seated))
            self._players = seated
        else:
            validate_player_count(len(self._players))

        self._players = [
            replace(p, turn_order=i, scorecard=ScoreCard.empty())
            for i, p in enumerate(self._players)
        ]
        self._active_index = 0
        self._round_number = 1
        self._turn = TurnEngine.start()
        self._status = GameStatus.PLAYING

        logger.info(
            "Game %s started with %d players: %s",
            self.game_id, len(self._players), ", ".join(p.name for p in self._players),
        )
        self._emit(GameEvent.GAME_STARTED, None, {
            "players": [p.player_id for p in self._players],
        })

    # ── Turn actions ───────────────────────────────────────────────────

    def roll(self) -> tuple[int, ...]:
        """
        Roll for the active player.

        Returns:
            The dice after the roll

        Raises:
            InvalidOperationError: If the game is not playing or no rolls remain
        """
        self._require_status(GameStatus.PLAYING, "roll")
        self._turn = TurnEngine.roll(self._turn, self.roller)
        self._emit(GameEvent.DICE_ROLLED, self._active_player_id(), {
            "dice": list(self._turn.active_dice),
            "roll_count": self._turn.roll_count,
        })
        return self._turn.active_dice

    def toggle_hold(self, index: int) -> frozenset[int]:
        """
        Flip the hold on one die for the active player.

        Returns:
            The held indices after the toggle
        """
        self._require_status(GameStatus.PLAYING, "hold dice")
        before = self._turn
        self._turn = TurnEngine.toggle_hold(self._turn, index)
        if self._turn is not before:
            self._emit(GameEvent.DICE_HELD, self._active_player_id(), {
                "held_indices": sorted(self._turn.held_indices),
            })
        return self._turn.held_indices

    def select_category(self, category: ScoreCategory) -> int:
        """
        Score the active dice in ``category`` and end the turn.

        Returns:
            The committed score

        Raises:
            InvalidOperationError: If the game is not playing, no roll has
                happened this turn, or the category is already filled
        """
        self._require_status(GameStatus.PLAYING, "select a category")
        player = self._players[self._active_index]
        score = TurnEngine.score(self._turn, category, player.scorecard)
        self.commit_score(category, score)
        return score

    def commit_score(self, category: ScoreCategory, score: int) -> None:
        """
        Write ``score`` into the active player's card and pass the turn.

        Raises:
            ScoreAlreadySetError: If the category is already filled
        """
        self._require_status(GameStatus.PLAYING, "commit a score")
        validate_score(score)

        player = self._players[self._active_index]
        updated = replace(player, scorecard=player.scorecard.with_score(category, score))
        self._players[self._active_index] = updated

        logger.info(
            "Game %s: %s scored %d in %s", self.game_id, updated.name, score, category.label
        )
        self._emit(GameEvent.CATEGORY_SCORED, updated.player_id, {
            "category": category.value,
            "score": score,
            "dice": list(self._turn.active_dice),
        })

        self._advance_turn()

    def _advance_turn(self) -> None:
        self._active_index = (self._active_index + 1) % len(self._players)
        self._turn = TurnEngine.start()

        if self.is_complete():
            self._status = GameStatus.FINISHED
            standings = self.standings()
            logger.info(
                "Game %s finished; winners: %s",
                self.game_id, ", ".join(w.name for w in standings.winners),
            )
            self._emit(GameEvent.GAME_FINISHED, None, {
                "winners": [w.player_id for w in standings.winners],
                "totals": {s.player_id: s.total for s in standings.rankings},
            })
            return

        if self._active_index == 0:
            self._round_number += 1
        self._emit(GameEvent.TURN_ADVANCED, self._active_player_id(), {
            "round": self._round_number,
        })

    # ── Results ────────────────────────────────────────────────────────

    def is_complete(self) -> bool:
        """True when every player has all categories filled."""
        return bool(self._players) and all(p.scorecard.is_complete for p in self._players)

    def standings(self) -> Standings:
        """
        Rank the players by grand total.

        Winners are every player on the highest total; they are only named
        once the game is finished.
        """
        ordered = sorted(self._players, key=lambda p: (-p.total_score, p.turn_order))
        rankings: list[PlayerStanding] = []
        for position, player in enumerate(ordered):
            card = player.scorecard
            if rankings and rankings[-1].total == card.total:
                rank = rankings[-1].rank
            else:
                rank = position + 1
            rankings.append(PlayerStanding(
                player_id=player.player_id,
                name=player.name,
                upper_total=card.upper_total,
                upper_bonus=card.upper_bonus,
                lower_total=card.lower_total,
                total=card.total,
                rank=rank,
            ))

        is_final = self._status is GameStatus.FINISHED
        winners: tuple[PlayerStanding, ...] = ()
        if is_final and rankings:
            best = rankings[0].total
            winners = tuple(s for s in rankings if s.total == best)
        return Standings(rankings=tuple(rankings), winners=winners, is_final=is_final)

    # ── Internals ──────────────────────────────────────────────────────

    def _require_status(self, status: GameStatus, action: str) -> None:
        if self._status is not status:
            raise InvalidOperationError(
                f"Cannot {action} while the game is {self._status.value}."
            )

    def _active_player_id(self) -> str | None:
        player = self.active_player
        return player.player_id if player is not None else None

    def _emit(self, event: GameEvent, player_id: str | None, data: dict) -> None:
        if self.on_event is None:
            return
        payload = EventPayload(event=event, game_id=self.game_id, player_id=player_id, data=data)
        try:
            self.on_event(payload)
        except Exception:
            logger.exception("Event listener failed for %s in game %s", event.name, self.game_id)
