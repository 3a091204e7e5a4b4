"""
Maxi Yatzy - Turn Policy Tests

Auto-roll, zero-score confirmation and forced selection.
"""

import pytest
from maxi_yatzy.config.settings import Settings
from maxi_yatzy.engine.base import GameStatus, ScoreCategory
from maxi_yatzy.engine.errors import InvalidOperationError
from maxi_yatzy.engine.game import Game
from maxi_yatzy.engine.policy import TurnPolicy, best_available_category
from maxi_yatzy.engine.scorecard import Player, ScoreCard
from maxi_yatzy.engine.scoring import calculate_potential_scores


class TestBestAvailableCategory:
    def test_picks_highest_score(self, scenario_a_roll):
        potential = calculate_potential_scores(scenario_a_roll)
        # Full House and Chance both give 28; Full House comes first
        assert best_available_category(potential, ScoreCard.empty()) == ScoreCategory.FULL_HOUSE

    def test_skips_filled_categories(self, six_of_a_kind_roll):
        potential = calculate_potential_scores(six_of_a_kind_roll)
        card = ScoreCard.empty().with_score(ScoreCategory.MAXI_YATZY, 0)
        assert best_available_category(potential, card) == ScoreCategory.ONES

    def test_all_zero_takes_first_open(self):
        card = ScoreCard.empty().with_score(ScoreCategory.ONES, 0)
        assert best_available_category({}, card) == ScoreCategory.TWOS

    def test_full_card_gives_none(self):
        assert best_available_category({}, ScoreCard(entries=(0,) * 20)) is None


class TestZeroScoreConfirmation:
    def test_zero_score_needs_confirmation(self, game, script):
        policy = TurnPolicy(game)
        script.push(1, 2, 3, 4, 5, 6)
        game.roll()
        result = policy.select(ScoreCategory.MAXI_YATZY)
        assert result.needs_confirmation
        assert not result.committed
        assert game.active_player.name == "Alice"
        assert not game.players[0].scorecard.is_filled(ScoreCategory.MAXI_YATZY)

    def test_confirmed_zero_score_commits(self, game, script):
        policy = TurnPolicy(game)
        script.push(1, 2, 3, 4, 5, 6)
        game.roll()
        result = policy.select(ScoreCategory.MAXI_YATZY, confirmed=True)
        assert result.committed
        assert result.score == 0
        assert game.players[0].scorecard[ScoreCategory.MAXI_YATZY] == 0
        assert game.active_player.name == "Bob"

    def test_confirmation_disabled(self, game, script):
        policy = TurnPolicy(game, confirm_zero_score=False)
        script.push(1, 2, 3, 4, 5, 6)
        game.roll()
        assert policy.select(ScoreCategory.MAXI_YATZY).committed

    def test_nonzero_score_commits_immediately(self, game, script):
        policy = TurnPolicy(game)
        script.push(1, 2, 3, 4, 5, 6)
        game.roll()
        result = policy.select(ScoreCategory.FULL_STRAIGHT)
        assert result.committed
        assert result.score == 21

    def test_select_before_roll_still_rejected(self, game):
        with pytest.raises(InvalidOperationError, match="Roll the dice"):
            TurnPolicy(game).select(ScoreCategory.CHANCE)

    def test_select_when_not_playing(self):
        with pytest.raises(InvalidOperationError, match="waiting"):
            TurnPolicy(Game()).select(ScoreCategory.CHANCE)


class TestAutoRoll:
    def test_begin_turn_rolls_once(self, game, script):
        policy = TurnPolicy(game, auto_roll=True)
        script.push(2, 2, 2, 2, 2, 2)
        assert policy.begin_turn() == (2, 2, 2, 2, 2, 2)
        assert policy.begin_turn() is None
        assert game.turn.roll_count == 1

    def test_off_by_default(self, game, script):
        assert TurnPolicy(game).begin_turn() is None
        assert script.calls == 0

    def test_next_turn_is_rolled_after_select(self, game, script):
        policy = TurnPolicy(game, auto_roll=True)
        script.push(2, 2, 2, 2, 2, 2)
        policy.begin_turn()
        script.push(5, 5, 5, 5, 5, 5)
        policy.select(ScoreCategory.TWOS)
        assert game.active_player.name == "Bob"
        assert game.turn.roll_count == 1
        assert game.turn.active_dice == (5, 5, 5, 5, 5, 5)

    def test_not_playing_does_nothing(self):
        assert TurnPolicy(Game(), auto_roll=True).begin_turn() is None


class TestAutoSelect:
    def test_rolls_and_picks_best(self, game, script):
        script.push(4, 4, 4, 5, 5, 6)
        result = TurnPolicy(game).auto_select()
        assert result.category == ScoreCategory.FULL_HOUSE
        assert result.score == 28
        assert game.active_player.name == "Bob"

    def test_forced_zero_needs_no_confirmation(self, roller, script):
        # Alice has only Maxi Yatzy open
        players = [
            Player("p1", "Alice", 0, ScoreCard(entries=(0,) * 19 + (None,))),
            Player("p2", "Bob", 1),
        ]
        game = Game.from_state(players, GameStatus.PLAYING, round_number=20, roller=roller)
        script.push(1, 2, 3, 4, 5, 6)
        result = TurnPolicy(game).auto_select()
        assert result.committed
        assert (result.category, result.score) == (ScoreCategory.MAXI_YATZY, 0)

    def test_auto_select_when_not_playing(self):
        with pytest.raises(InvalidOperationError, match="auto-select"):
            TurnPolicy(Game()).auto_select()


class TestFromSettings:
    def test_reads_policy_flags(self, game):
        settings = Settings(auto_roll=True, confirm_zero_score=False)
        policy = TurnPolicy.from_settings(game, settings)
        assert policy.auto_roll
        assert not policy.confirm_zero_score
