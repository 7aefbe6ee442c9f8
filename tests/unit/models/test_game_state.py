# ABOUTME: Unit tests for the immutable GameState snapshot, win predicate, and derived phase.
# ABOUTME: Checks chain invariants, append/restart behavior, and rejection of inconsistent snapshots.

import pytest
from pydantic import ValidationError

from conftest import make_film, make_performer
from movie_chain.models.entities import ChainStep
from movie_chain.models.game_state import GamePhase, GameState, game_phase, is_won


class TestGamePhase:
    """Test suite for GamePhase enum"""

    def test_phase_values(self):
        """Test phase enum values used by the front end"""
        assert GamePhase.NO_GAME.value == "no_game"
        assert GamePhase.IN_PROGRESS.value == "in_progress"
        assert GamePhase.WON.value == "won"

    def test_no_state_is_no_game(self):
        """Test absent state maps to NO_GAME"""
        assert game_phase(None) is GamePhase.NO_GAME

    def test_fresh_game_is_in_progress(self, kevin_bacon, tom_hanks):
        """Test a new game is IN_PROGRESS"""
        state = GameState.initial(kevin_bacon, tom_hanks)
        assert game_phase(state) is GamePhase.IN_PROGRESS

    def test_reaching_target_is_won(self, kevin_bacon, tom_hanks, apollo_13):
        """Test the phase flips to WON once the target is reached"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(tom_hanks, apollo_13)
        assert game_phase(state) is GamePhase.WON


class TestInitialState:
    """Test suite for GameState.initial"""

    def test_initial_state_shape(self, kevin_bacon, tom_hanks):
        """Test a fresh state starts on the start performer with empty chain"""
        state = GameState.initial(kevin_bacon, tom_hanks)

        assert state.current_performer == kevin_bacon
        assert state.chain == ()
        assert state.visited_performer_ids == frozenset({1})
        assert state.visited_film_ids == frozenset()
        assert state.step_count == 0

    def test_not_won_after_start(self, kevin_bacon, tom_hanks):
        """Test the win predicate is false right after starting"""
        assert is_won(GameState.initial(kevin_bacon, tom_hanks)) is False

    def test_won_immediately_when_start_equals_target(self, kevin_bacon):
        """Test start == target is already won"""
        assert is_won(GameState.initial(kevin_bacon, kevin_bacon)) is True

    def test_is_won_none(self):
        """Test the win predicate is false without a game"""
        assert is_won(None) is False


class TestWithStep:
    """Test suite for appending steps to a snapshot"""

    def test_with_step_appends_edge(self, kevin_bacon, tom_hanks, apollo_13):
        """Test a step records both endpoints and advances the current performer"""
        state = GameState.initial(kevin_bacon, tom_hanks)
        new_state = state.with_step(tom_hanks, apollo_13)

        assert new_state.chain == (
            ChainStep(from_performer=kevin_bacon, connecting_film=apollo_13, to_performer=tom_hanks),
        )
        assert new_state.current_performer == tom_hanks
        assert new_state.visited_performer_ids == frozenset({1, 2})
        assert new_state.visited_film_ids == frozenset({10})

    def test_with_step_leaves_original_untouched(self, kevin_bacon, tom_hanks, apollo_13):
        """Test the old snapshot is not mutated"""
        state = GameState.initial(kevin_bacon, tom_hanks)
        state.with_step(tom_hanks, apollo_13)

        assert state.chain == ()
        assert state.current_performer == kevin_bacon
        assert state.visited_performer_ids == frozenset({1})

    def test_counts_stay_consistent_over_many_steps(self, kevin_bacon):
        """Test chain length matches visited sets for any sequence of steps"""
        target = make_performer(99)
        state = GameState.initial(kevin_bacon, target)

        for i in range(1, 8):
            state = state.with_step(make_performer(100 + i), make_film(200 + i))
            assert len(state.chain) == len(state.visited_film_ids)
            assert len(state.visited_performer_ids) == len(state.chain) + 1

    def test_chain_links_are_contiguous(self, kevin_bacon):
        """Test each step starts where the previous one ended"""
        state = GameState.initial(kevin_bacon, make_performer(99))
        for i in range(1, 4):
            state = state.with_step(make_performer(100 + i), make_film(200 + i))

        for previous, following in zip(state.chain, state.chain[1:]):
            assert previous.to_performer == following.from_performer
        assert state.chain[-1].to_performer == state.current_performer

    def test_restarted_keeps_endpoints(self, kevin_bacon, tom_hanks, meg_ryan, in_the_cut):
        """Test restarted() clears the chain but keeps start and target"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(meg_ryan, in_the_cut)
        restarted = state.restarted()

        assert restarted == GameState.initial(kevin_bacon, tom_hanks)


class TestSnapshotValidation:
    """Test suite for invariants enforced on construction"""

    def test_rejects_film_set_mismatch(self, kevin_bacon, tom_hanks):
        """Test visited films must match the chain"""
        with pytest.raises(ValidationError, match="visited_film_ids"):
            GameState(
                start_performer=kevin_bacon,
                target_performer=tom_hanks,
                current_performer=kevin_bacon,
                chain=(),
                visited_performer_ids=frozenset({1}),
                visited_film_ids=frozenset({10}),
            )

    def test_rejects_wrong_current_performer(self, kevin_bacon, tom_hanks):
        """Test current performer must be the start for an empty chain"""
        with pytest.raises(ValidationError, match="current_performer"):
            GameState(
                start_performer=kevin_bacon,
                target_performer=tom_hanks,
                current_performer=tom_hanks,
                chain=(),
                visited_performer_ids=frozenset({1, 2}),
            )

    def test_rejects_missing_start_in_visited(self, kevin_bacon, tom_hanks):
        """Test the start performer must be visited"""
        with pytest.raises(ValidationError, match="start performer"):
            GameState(
                start_performer=kevin_bacon,
                target_performer=tom_hanks,
                current_performer=kevin_bacon,
                visited_performer_ids=frozenset(),
            )

    def test_rejects_repeated_film(self, kevin_bacon, tom_hanks, meg_ryan, apollo_13):
        """Test the same film cannot appear twice in a chain"""
        state = GameState.initial(kevin_bacon, tom_hanks).with_step(meg_ryan, apollo_13)
        with pytest.raises(ValidationError, match="only be used once"):
            state.with_step(make_performer(50), apollo_13)

    def test_is_frozen(self, kevin_bacon, tom_hanks):
        """Test GameState fields cannot be reassigned"""
        state = GameState.initial(kevin_bacon, tom_hanks)
        with pytest.raises(ValidationError):
            state.current_performer = tom_hanks
